from datetime import datetime, timezone

from data_designer_github_roast.analyzers import analyze_facet, language_facts, repository_facts
from data_designer_github_roast.core import build_snapshot
from data_designer_github_roast.rules import DEFAULT_HYPERPARAMETERS, DEFAULT_REGISTRY, Hyperparameters

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

PROFILE = {
    "login": "octavia",
    "bio": "Building distributed databases and the tools around them.",
    "publicRepos": 12,
    "followers": 300,
    "following": 20,
    "createdAt": "2022-01-01T00:00:00Z",
}


def repo(name, **fields):
    payload = {"name": name, "description": "Something useful", "stars": 3, "forks": 1, "sizeKB": 500,
               "updatedAt": "2025-06-01T00:00:00Z", "pushedAt": "2025-06-01T00:00:00Z"}
    payload.update(fields)
    return payload


def commit(message, date="2025-06-03T14:00:00Z"):
    return {"message": message, "date": date, "repo": "r", "id": message[:7]}


def run(facet, profile=PROFILE, repos=(), commits=(), hp=DEFAULT_HYPERPARAMETERS):
    snapshot = build_snapshot(profile, repos, commits, NOW)
    return analyze_facet(DEFAULT_REGISTRY.group(facet), snapshot, hp)


def rules(facet, **kwargs):
    return [f.rule for f in run(facet, **kwargs).fragments]


class TestProfile:
    def test_quiet_profile_has_no_fragments(self):
        assert rules("profile") == []

    def test_short_bio_is_quoted(self):
        result = run("profile", profile=dict(PROFILE, bio="Coder."))
        assert [f.rule for f in result.fragments] == ["short_bio"]
        assert result.fragments[0].text.startswith('"Coder."')
        assert result.badges == []

    def test_blank_bio_counts_as_missing(self):
        assert rules("profile", profile=dict(PROFILE, bio="   ")) == ["no_bio"]

    def test_full_stack_bio(self):
        result = run("profile", profile=dict(PROFILE, bio="Full Stack developer shipping side projects"))
        assert result.badges == ["🥞 Stack Overflow Warrior"]

    def test_generic_and_numeric_username(self):
        result = run("profile", profile=dict(PROFILE, login="codewizard99"))
        assert [f.rule for f in result.fragments] == ["generic_username", "numeric_username"]
        assert 'contains "code"' in result.fragments[0].text
        assert result.delta == 13

    def test_procrastinator(self):
        result = run("profile", profile=dict(PROFILE, publicRepos=3, createdAt="2015-01-01T00:00:00Z"))
        assert "procrastinator" in [f.rule for f in result.fragments]
        assert "10 years on GitHub and only 3 public repos?" in result.text
        assert "⏰ Chronic Procrastinator" in result.badges

    def test_old_account_with_enough_repos(self):
        assert "procrastinator" not in rules("profile", profile=dict(PROFILE, createdAt="2015-01-01T00:00:00Z"))

    def test_follower_ratio(self):
        result = run("profile", profile=dict(PROFILE, followers=2, following=50))
        assert [f.rule for f in result.fragments] == ["follower_ratio"]
        assert "Following 50 people but only 2 follow you back?" in result.text

    def test_custom_hyperparameters(self):
        strict = Hyperparameters(short_bio_chars=100)
        assert rules("profile", hp=strict) == ["short_bio"]


class TestRepositories:
    def test_single_language_needs_two_entries(self):
        assert "one_language" not in rules("repository", repos=[repo("solo", language="Python")])
        result = run("repository", repos=[repo("one", language="Python"), repo("two", language="Python")])
        assert "Only Python?" in result.text
        assert "🚼 One-Trick Pony" in result.badges

    def test_language_less_entries_do_not_count(self):
        repos = [repo("one", language="Python"), repo("two"), repo("three")]
        assert "one_language" not in rules("repository", repos=repos)

    def test_generic_names(self):
        repos = [repo("test-app"), repo("demo-site"), repo("ledger")]
        assert "generic_names" in rules("repository", repos=repos)

    def test_generic_names_at_half_do_not_fire(self):
        repos = [repo("test-app"), repo("ledger")]
        assert "generic_names" not in rules("repository", repos=repos)

    def test_undescribed(self):
        repos = [repo("a1", description=None), repo("b2", description=" "), repo("c3", description=None),
                 repo("d4")]
        assert "undescribed" in rules("repository", repos=repos)

    def test_tiny_repositories(self):
        repos = [repo("alpha", sizeKB=3), repo("beta", sizeKB=0)]
        assert "tiny_repositories" in rules("repository", repos=repos)

    def test_stale_repositories(self):
        repos = [repo("alpha", updatedAt="2022-01-01T00:00:00Z"), repo("beta", updatedAt="2023-01-01T00:00:00Z")]
        assert "stale_repositories" in rules("repository", repos=repos)

    def test_unparsable_update_dates_skip_staleness(self):
        facts = repository_facts(build_snapshot(PROFILE, [repo("alpha", updatedAt="??")], [], NOW),
                                 DEFAULT_HYPERPARAMETERS)
        assert facts["stale_fraction"] is None

    def test_fractions_follow_call_time_count(self):
        facts = repository_facts(build_snapshot(PROFILE, [repo("test1"), repo("real")], [], NOW),
                                 DEFAULT_HYPERPARAMETERS)
        assert facts["generic_fraction"] == 0.5


class TestCommits:
    def test_low_information_reports_percentage(self):
        commits = [commit("update readme"), commit("wip"), commit("Add login page"), commit("Implement OAuth flow")]
        result = run("commit", commits=commits)
        assert [f.rule for f in result.fragments] == ["low_information"]
        assert result.fragments[0].text.startswith("50% of your commit messages")

    def test_emoji_overload(self):
        result = run("commit", commits=[commit("Ship it 🔥🔥🔥")])
        assert "emoji_overload" in [f.rule for f in result.fragments]
        assert "3 emojis in 1 commits?" in result.text

    def test_all_caps(self):
        assert "all_caps" in rules("commit", commits=[commit("MERGE THE BRANCH"), commit("Add parser")])

    def test_short_caps_and_digits_are_not_shouting(self):
        assert "all_caps" not in rules("commit", commits=[commit("WIP"), commit("2024")])

    def test_long_messages(self):
        result = run("commit", commits=[commit("Describe " + "everything " * 30)])
        assert "long_messages" in [f.rule for f in result.fragments]
        assert result.badges == []


class TestActivity:
    def test_speed_runner(self):
        result = run("activity", profile=dict(PROFILE, publicRepos=600, createdAt="2015-01-01T00:00:00Z"),
                     repos=[repo("alpha")])
        assert [f.rule for f in result.fragments] == ["speed_runner"]
        assert result.text.startswith("60 repos per year?")

    def test_dormant_and_abandoned(self):
        repos = [
            repo("alpha", updatedAt="2024-01-01T00:00:00Z", pushedAt=None),
            repo("beta", updatedAt="2024-02-01T00:00:00Z", pushedAt=None),
            repo("gamma", updatedAt="2024-03-01T00:00:00Z"),
        ]
        result = run("activity", repos=repos)
        assert [f.rule for f in result.fragments] == ["dormant", "abandoned"]
        assert result.badges == ["🌱 Grass Toucher", "🚪 Project Abandoner"]

    def test_no_repositories_is_not_dormant(self):
        assert rules("activity") == []


class TestPersonality:
    def test_first_match_wins(self):
        # Both The Perfectionist and The Ghost apply; only the first is reported.
        result = run("personality", commits=[commit("fix parser"), commit("fix lexer")])
        assert len(result.fragments) == 1
        assert result.badges == ["🎭 The Perfectionist"]
        assert result.delta == 8
        assert result.text.startswith("🎭 **Personality Type: The Perfectionist** - ")

    def test_ghost(self):
        result = run("personality", commits=[commit("Add parser")])
        assert result.badges == ["🎭 The Ghost"]

    def test_optimist(self):
        repos = [repo("awesome-list"), repo("amazing-ui"), repo("super-cli"), repo("awesome-go")]
        commits = [commit(f"Add feature {i}") for i in range(6)]
        assert run("personality", repos=repos, commits=commits).badges == ["🎭 The Optimist"]

    def test_no_match(self):
        commits = [commit(f"Add feature {i}") for i in range(6)]
        assert run("personality", repos=[repo("ledger")], commits=commits).fragments == ()


class TestLanguage:
    def test_most_frequent_language(self):
        repos = [repo("a", language="Go"), repo("b", language="Rust"), repo("c", language="Rust")]
        result = run("language", repos=repos)
        assert result.badges == ["💻 Rust Enthusiast"]
        assert result.delta == 10

    def test_tie_goes_to_first_seen(self):
        repos = [repo("a", language="Go"), repo("b", language="Python"), repo("c", language="Python"),
                 repo("d", language="Go")]
        snapshot = build_snapshot(PROFILE, repos, [], NOW)
        assert language_facts(snapshot, DEFAULT_HYPERPARAMETERS)["language"] == "Go"

    def test_unknown_language_falls_back(self):
        result = run("language", repos=[repo("a", language="Elixir")])
        assert result.badges == ["💻 Elixir Pioneer"]
        assert result.delta == 5
        assert "Elixir? Interesting choice" in result.text

    def test_no_language(self):
        assert run("language", repos=[repo("a")]).fragments == ()


class TestTimePatterns:
    def test_night_owl(self):
        commits = [
            commit("Add a", "2025-03-03T01:00:00Z"),
            commit("Add b", "2025-03-03T02:00:00Z"),
            commit("Add c", "2025-03-03T23:30:00Z"),
        ]
        result = run("time", commits=commits)
        assert [f.rule for f in result.fragments] == ["night_owl"]
        assert result.text.startswith("🌙 100% of your commits")

    def test_weekend_warrior(self):
        commits = [commit("Add a", "2025-03-01T10:00:00Z"), commit("Add b", "2025-03-02T15:00:00Z")]
        assert rules("time", commits=commits) == ["weekend_warrior"]

    def test_human_cron_job(self):
        commits = [commit(f"Add {d}", f"2025-03-0{d}T10:00:00Z") for d in (3, 4, 5)]
        assert rules("time", commits=commits) == ["human_cron_job"]

    def test_single_commit_is_not_a_cron_job(self):
        assert rules("time", commits=[commit("Add a", "2025-03-03T10:00:00Z")]) == []

    def test_holiday(self):
        commits = [commit("Add a", "2024-12-25T14:00:00Z"), commit("Add b", "2025-03-04T09:00:00Z")]
        result = run("time", commits=commits)
        assert [f.rule for f in result.fragments] == ["holiday_goblin"]
        assert result.text.startswith("🎄 1 commits during holiday seasons?")

    def test_several_conditions_fire_together(self):
        commits = [commit("Add a", "2024-12-28T23:30:00Z"), commit("Add b", "2024-12-29T23:45:00Z")]
        assert rules("time", commits=commits) == ["night_owl", "weekend_warrior", "human_cron_job", "holiday_goblin"]

    def test_local_offset_is_respected(self):
        commits = [commit("Add a", "2025-03-03T23:30:00+05:30"), commit("Add b", "2025-03-04T09:00:00+05:30")]
        assert "night_owl" in rules("time", commits=commits)

    def test_unparsable_dates_are_skipped(self):
        assert rules("time", commits=[commit("Add a", "yesterday"), commit("Add b", "")]) == []


class TestNaming:
    def test_sequential_names(self):
        repos = [repo(f"project{i}") for i in range(1, 5)]
        assert rules("naming", repos=repos) == ["sequential_names"]

    def test_my_prefix_and_clones(self):
        repos = [repo("my-blog"), repo("my-notes"), repo("my-dotfiles"), repo("netflix-clone"), repo("todo-copy")]
        result = run("naming", repos=repos)
        assert [f.rule for f in result.fragments] == ["my_prefix", "clone_names"]
        assert result.delta == 22

    def test_long_single_char_and_lazy(self):
        repos = [repo("x"), repo("untitled"), repo("a-repository-name-that-goes-on-and-on-forever")]
        assert rules("naming", repos=repos) == ["long_names", "single_char_names", "lazy_names"]

    def test_no_repositories(self):
        assert rules("naming") == []
