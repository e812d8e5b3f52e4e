from datetime import datetime, timezone

from data_designer_github_roast.classic import CLASSIC_MOTIVATION, ClassicHyperparameters, generate_classic_roast
from data_designer_github_roast.core import SEVERITY_BANNERS

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

EMPTY_PROFILE = {"login": "ghost", "bio": None, "publicRepos": 0, "followers": 0, "following": 0,
                 "createdAt": "2024-01-01T00:00:00Z"}

HEALTHY_PROFILE = {"login": "octavia", "bio": "Building distributed databases and the tools around them.",
                   "publicRepos": 12, "followers": 300, "following": 20, "createdAt": "2022-01-01T00:00:00Z"}

HEALTHY_REPOS = [
    {"name": "raftkit", "description": "Raft consensus toolkit", "language": "Go", "stars": 120, "forks": 14,
     "sizeKB": 2048, "updatedAt": "2025-06-01T00:00:00Z"},
    {"name": "lsm-bench", "description": "Benchmarks for LSM trees", "language": "Rust", "stars": 30, "forks": 2,
     "sizeKB": 512, "updatedAt": "2025-05-01T00:00:00Z"},
]

HEALTHY_COMMITS = [
    {"message": "Prune stale peers on reconnect", "date": "2025-06-06T08:50:00Z"},
    {"message": "Document compaction knobs", "date": "2025-06-04T13:05:00Z"},
    {"message": "Add snapshot install path to follower", "date": "2025-06-02T10:15:00Z"},
]


def first_choice(choices):
    return choices[0]


def roast(profile, repos=(), commits=(), **kwargs):
    return generate_classic_roast(profile, repos, commits, selector=first_choice, now=NOW, **kwargs)


class TestClassicRoast:
    def test_empty_account(self):
        result = roast(EMPTY_PROFILE)
        # profile 50 - 10 - 20 - 15 = 5, repositories 0, commits 20
        assert result.score == 8
        assert result.badges == (
            "💩 Code Disaster",
            "👻 Ghost Profile",
            "🗑️ Repository Wasteland",
            "📝 Commit Chaos",
            "🏆 Ultimate Roast Victim",
        )
        assert result.severity == "fatality"
        assert "🔥 No bio? Let me guess" in result.text
        assert "Overall roast score: 8/100." in result.text
        assert "🏅 **Badges Earned:** 💩 Code Disaster" in result.text
        assert result.text.endswith(f"{CLASSIC_MOTIVATION}\n\n🎯 {SEVERITY_BANNERS['fatality']}")

    def test_healthy_account_is_neutral(self):
        result = roast(HEALTHY_PROFILE, HEALTHY_REPOS, HEALTHY_COMMITS)
        assert result.score == 50
        assert result.badges == ()
        assert result.severity == "lightly_toasted"
        assert result.text == f"{CLASSIC_MOTIVATION}\n\n🎯 {SEVERITY_BANNERS['lightly_toasted']}"

    def test_starless_repositories(self):
        repos = [dict(r, stars=0) for r in HEALTHY_REPOS]
        result = roast(HEALTHY_PROFILE, repos, HEALTHY_COMMITS)
        assert "Zero stars across ALL repos?" in result.text
        assert "total stars across" not in result.text

    def test_few_stars(self):
        repos = [dict(HEALTHY_REPOS[0], stars=1), dict(HEALTHY_REPOS[1], stars=0), dict(HEALTHY_REPOS[1], stars=0)]
        result = roast(HEALTHY_PROFILE, repos, HEALTHY_COMMITS)
        assert "1 total stars across 3 repos?" in result.text

    def test_boring_name_is_quoted(self):
        repos = HEALTHY_REPOS + [{"name": "Hello-World", "description": "first", "stars": 1, "sizeKB": 500,
                                  "updatedAt": "2025-06-01T00:00:00Z"}]
        result = roast(HEALTHY_PROFILE, repos, HEALTHY_COMMITS)
        assert 'Repo names like "hello-world"?' in result.text

    def test_hibernating_commits(self):
        commits = [
            {"message": "Release the second edition", "date": "2025-05-01T00:00:00Z"},
            {"message": "Release the first edition", "date": "2025-01-01T00:00:00Z"},
        ]
        result = roast(HEALTHY_PROFILE, HEALTHY_REPOS, commits)
        assert "Committing once a month?" in result.text

    def test_bad_commit_message_is_quoted(self):
        commits = HEALTHY_COMMITS + [{"message": "stuff", "date": "2025-06-01T00:00:00Z"}]
        result = roast(HEALTHY_PROFILE, HEALTHY_REPOS, commits)
        assert 'Commit messages like "stuff"?' in result.text
        assert result.score == 45

    def test_emoji_prefix_uses_selector(self):
        result = generate_classic_roast(EMPTY_PROFILE, [], [], selector=lambda choices: choices[-1], now=NOW)
        assert "🥱 No bio?" in result.text

    def test_custom_hyperparameters(self):
        strict = ClassicHyperparameters(short_bio_chars=100)
        result = roast(HEALTHY_PROFILE, HEALTHY_REPOS, HEALTHY_COMMITS, hyperparameters=strict)
        assert "Shakespeare is rolling" in result.text
        assert result.score == 48

    def test_score_range_and_unique_badges(self):
        for result in (roast(EMPTY_PROFILE), roast(HEALTHY_PROFILE, HEALTHY_REPOS, HEALTHY_COMMITS)):
            assert 0 <= result.score <= 100
            assert len(result.badges) == len(set(result.badges))
