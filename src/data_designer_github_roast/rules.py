# Static rule tables for the roast engine.
#
# Every rule is a (trigger, template, delta, badges) tuple evaluated against the
# facts one facet derives from the input snapshot. Tables are built once at
# import time and never mutated.

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Callable, Literal, Union

from data_designer_github_roast.models import RoastFragment

if TYPE_CHECKING:
    from data_designer_github_roast.classic import ClassicHyperparameters

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable thresholds used by the facet analyzers and the composer."""

    short_bio_chars: int = 20
    full_stack_markers: tuple[str, ...] = ("Full Stack", "Fullstack")
    generic_username_tokens: tuple[str, ...] = ("dev", "code")
    username_digit_run: int = 2
    procrastinator_min_age_years: int = 5
    procrastinator_max_repos: int = 10
    follower_ratio_min: float = 0.1

    generic_name_fraction: float = 0.5
    undescribed_fraction: float = 0.7
    tiny_repo_kb: int = 10
    tiny_fraction: float = 0.6
    stale_days: int = 365
    stale_fraction: float = 0.7
    one_language_min_entries: int = 2

    questionable_fraction: float = 0.4
    emoji_per_commit: float = 2.0
    caps_min_length: int = 3
    long_message_chars: int = 200

    slow_repos_per_year: float = 1.0
    fast_repos_per_year: float = 50.0
    recent_days: int = 180
    pushed_fraction: float = 0.5

    perfectionist_fraction: float = 0.6
    collector_min_repos: int = 50
    collector_starless_fraction: float = 0.8
    ghost_max_commits: int = 5
    optimist_min_repos: int = 2

    late_night_start_hour: int = 23
    late_night_end_hour: int = 5
    late_night_fraction: float = 0.4
    weekend_fraction: float = 0.6
    cron_variance_max: float = 4.0
    cron_min_commits: int = 2

    sequential_min: int = 3
    my_prefix_min: int = 2
    clone_min: int = 1
    long_name_chars: int = 40

    score_min: int = 0
    score_max: int = 100
    band_fatality_min: int = 80
    band_well_roasted_min: int = 60
    band_lightly_toasted_min: int = 40


DEFAULT_HYPERPARAMETERS = Hyperparameters()

Facts = Mapping[str, object]
Thresholds = Union[Hyperparameters, "ClassicHyperparameters"]
Trigger = Callable[[Facts, Thresholds], bool]
Strategy = Literal["every", "first"]

# ---------------------------------------------------------------------------
# Rules and evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    name: str
    trigger: Trigger
    template: str
    delta: int
    badges: tuple[str, ...] = ()
    terminal: bool = False

    def fire(self, facet: str, facts: Facts) -> RoastFragment:
        return RoastFragment(
            facet=facet,
            rule=self.name,
            text=self.template.format_map(facts),
            delta=self.delta,
            badges=tuple(badge.format_map(facts) for badge in self.badges),
        )


def every_match(rules: tuple[Rule, ...], facts: Facts, hp: Thresholds) -> Iterator[Rule]:
    """Yield every firing rule, stopping after a terminal one."""
    for rule in rules:
        if rule.trigger(facts, hp):
            yield rule
            if rule.terminal:
                return


def first_match(rules: tuple[Rule, ...], facts: Facts, hp: Thresholds) -> Iterator[Rule]:
    """Yield only the first firing rule."""
    for rule in rules:
        if rule.trigger(facts, hp):
            yield rule
            return


_STRATEGIES = {"every": every_match, "first": first_match}


@dataclass(frozen=True)
class RuleGroup:
    facet: str
    rules: tuple[Rule, ...]
    strategy: Strategy = "every"

    def evaluate(self, facts: Facts, hp: Thresholds) -> tuple[RoastFragment, ...]:
        selected = _STRATEGIES[self.strategy](self.rules, facts, hp)
        return tuple(rule.fire(self.facet, facts) for rule in selected)


@dataclass(frozen=True)
class RuleRegistry:
    """Ordered, immutable collection of rule groups; group order is output order."""

    groups: tuple[RuleGroup, ...] = field(default_factory=tuple)

    @property
    def facets(self) -> tuple[str, ...]:
        return tuple(group.facet for group in self.groups)

    def group(self, facet: str) -> RuleGroup:
        for group in self.groups:
            if group.facet == facet:
                return group
        raise KeyError(facet)

    def select(self, *facets: str) -> RuleRegistry:
        """Return a registry restricted to ``facets``, keeping registry order."""
        return RuleRegistry(groups=tuple(g for g in self.groups if g.facet in facets))

    def with_rules(self, facet: str, rules: tuple[Rule, ...]) -> RuleRegistry:
        """Return a registry with ``facet``'s rules swapped for ``rules``."""
        self.group(facet)
        return RuleRegistry(
            groups=tuple(replace(g, rules=rules) if g.facet == facet else g for g in self.groups)
        )


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

PROFILE_RULES = (
    Rule(
        "no_bio",
        lambda f, hp: f["bio_length"] == 0,
        "No bio? Let me guess - you're \"too cool\" for descriptions or just can't think of "
        "anything interesting to say about yourself? 🤐",
        10,
        ("🤐 Strong Silent Type",),
    ),
    Rule(
        "short_bio",
        lambda f, hp: 0 < f["bio_length"] < hp.short_bio_chars,
        "\"{bio}\" - Wow, such depth! Shakespeare is quaking in his grave at this literary masterpiece. 📚",
        8,
    ),
    Rule(
        "full_stack_bio",
        lambda f, hp: f["bio_length"] >= hp.short_bio_chars and f["full_stack"],
        "\"Full Stack Developer\" - Let me translate: \"I can copy-paste from Stack Overflow in both "
        "frontend AND backend!\" 🥞",
        5,
        ("🥞 Stack Overflow Warrior",),
    ),
    Rule(
        "generic_username",
        lambda f, hp: f["generic_token"] is not None,
        "Username contains \"{generic_token}\" - How original! Did you also consider \"programmer123\"? 🏷️",
        7,
        ("🏷️ Generic Username Club",),
    ),
    Rule(
        "numeric_username",
        lambda f, hp: f["has_digit_run"],
        "Those numbers in your username - is that your birth year or just how many times your first "
        "choice was taken? 🔢",
        6,
    ),
    Rule(
        "procrastinator",
        lambda f, hp: (
            f["account_age"] is not None
            and f["account_age"] > hp.procrastinator_min_age_years
            and f["public_repos"] < hp.procrastinator_max_repos
        ),
        "{account_age} years on GitHub and only {public_repos} public repos? What have you been doing, "
        "planning the perfect \"Hello World\"? ⏰",
        15,
        ("⏰ Chronic Procrastinator",),
    ),
    Rule(
        "follower_ratio",
        lambda f, hp: f["follower_ratio"] < hp.follower_ratio_min,
        "Following {following} people but only {followers} follow you back? Even your code has "
        "commitment issues! 💔",
        12,
        ("💔 Forever Alone Coder",),
    ),
)

# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

REPOSITORY_RULES = (
    Rule(
        "no_repositories",
        lambda f, hp: f["count"] == 0,
        "No public repositories? What are you, a government spy or just embarrassed by your code? 🕵️",
        20,
        ("🕵️ Ghost Coder",),
        terminal=True,
    ),
    Rule(
        "forkless",
        lambda f, hp: f["total_forks"] == 0,
        "Zero forks across all repositories? Even copy-paste tutorials get more love than your code! 🍴",
        15,
        ("🍴 Fork-less Wonder",),
    ),
    Rule(
        "starless",
        lambda f, hp: f["total_stars"] == 0,
        "Zero stars on any project? Not even a pity star from your mom? ⭐",
        10,
        ("⭐ Starless Night",),
    ),
    Rule(
        "one_language",
        lambda f, hp: len(f["languages"]) == 1 and f["language_entries"] >= hp.one_language_min_entries,
        "Only {only_language}? Branching out is scary, I get it. Maybe try HTML next - baby steps! 🚼",
        8,
        ("🚼 One-Trick Pony",),
    ),
    Rule(
        "generic_names",
        lambda f, hp: f["generic_fraction"] > hp.generic_name_fraction,
        "Half your repos have names like \"test\" and \"demo\"? Creative bankruptcy called - it wants "
        "its dignity back! 💡",
        12,
        ("💡 Creativity Deficit Disorder",),
    ),
    Rule(
        "undescribed",
        lambda f, hp: f["undescribed_fraction"] > hp.undescribed_fraction,
        "Most repos have no description? Let me guess - the code \"speaks for itself\"? Well, it's mumbling! 🤫",
        10,
    ),
    Rule(
        "tiny_repositories",
        lambda f, hp: f["tiny_fraction"] > hp.tiny_fraction,
        "Most of your repos are smaller than this roast! Quality over quantity, right? RIGHT?? 🤏",
        8,
        ("🤏 Minimalist Extraordinaire",),
    ),
    Rule(
        "stale_repositories",
        lambda f, hp: f["stale_fraction"] is not None and f["stale_fraction"] > hp.stale_fraction,
        "Most of your repos haven't been touched in over a year. Did you discover life outside of "
        "coding? 🕸️",
        10,
        ("🕸️ Cobweb Curator",),
    ),
)

# ---------------------------------------------------------------------------
# Commits
# ---------------------------------------------------------------------------

COMMIT_RULES = (
    Rule(
        "no_commits",
        lambda f, hp: f["count"] == 0,
        "No recent commits? Are you on a coding sabbatical or did your keyboard break? ⌨️",
        15,
        ("⌨️ Digital Hermit",),
        terminal=True,
    ),
    Rule(
        "low_information",
        lambda f, hp: f["questionable"] > f["count"] * hp.questionable_fraction,
        "{questionable_pct}% of your commit messages are variations of \"fix stuff\"? Your future self "
        "is crying! 😭",
        12,
        ("😭 Commit Message Poet",),
    ),
    Rule(
        "emoji_overload",
        lambda f, hp: f["emoji_count"] > f["count"] * hp.emoji_per_commit,
        "{emoji_count} emojis in {count} commits? Are you coding or running an Instagram account? 🤳",
        8,
        ("🤳 Emoji Influencer",),
    ),
    Rule(
        "one_char",
        lambda f, hp: f["one_char"] > 0,
        "{one_char} single-character commit messages? Even cavemen left more detailed records! 🪨",
        15,
        ("🪨 Cave Painter",),
    ),
    Rule(
        "all_caps",
        lambda f, hp: f["all_caps"] > 0,
        "{all_caps} ALL CAPS commits? WE GET IT, YOU WERE ANGRY AT THE CODE! 📢",
        10,
        ("📢 Digital Screamer",),
    ),
    Rule(
        "long_messages",
        lambda f, hp: f["long_messages"] > 0,
        "Some commit messages longer than this roast? Save the novels for your autobiography: "
        "\"How I Learned to Stop Worrying and Love Console.log\" 📚",
        7,
    ),
)

# ---------------------------------------------------------------------------
# Activity
# ---------------------------------------------------------------------------

ACTIVITY_RULES = (
    Rule(
        "slow_output",
        lambda f, hp: f["repos_per_year"] is not None and f["repos_per_year"] < hp.slow_repos_per_year,
        "Less than 1 repo per year? At this rate, you'll have a decent portfolio by retirement! 👴",
        12,
        ("👴 Retirement Plan Coder",),
    ),
    Rule(
        "speed_runner",
        lambda f, hp: f["repos_per_year"] is not None and f["repos_per_year"] > hp.fast_repos_per_year,
        "{repos_per_year_rounded} repos per year? Quality over quantity exists, you know! 🏃",
        10,
        ("🏃 Repo Speed Runner",),
    ),
    Rule(
        "dormant",
        lambda f, hp: f["dated_repositories"] > 0 and f["recent_repositories"] == 0,
        "No activity in the last 6 months? Did you discover life outside of coding, or did coding "
        "discover it could do without you? 🌱",
        15,
        ("🌱 Grass Toucher",),
    ),
    Rule(
        "abandoned",
        lambda f, hp: f["count"] > 0 and f["pushed_repositories"] < f["count"] * hp.pushed_fraction,
        "Half your repos haven't been pushed to since creation? Even your git commits have abandonment "
        "issues! 🚪",
        10,
        ("🚪 Project Abandoner",),
    ),
)

# ---------------------------------------------------------------------------
# Personality (first match wins)
# ---------------------------------------------------------------------------


def _personality(name: str, trigger: Trigger, roast: str) -> Rule:
    return Rule(
        name.lower().replace("the ", "").replace(" ", "_"),
        trigger,
        f"🎭 **Personality Type: {name}** - {roast}",
        8,
        (f"🎭 {name}",),
    )


PERSONALITY_RULES = (
    _personality(
        "The Perfectionist",
        lambda f, hp: f["fix_commits"] > f["commit_count"] * hp.perfectionist_fraction,
        "You're the type who refactors 'Hello World' 15 times before committing it! 🔍",
    ),
    _personality(
        "The Collector",
        lambda f, hp: (
            f["public_repos"] > hp.collector_min_repos
            and f["starless_repositories"] > f["repository_count"] * hp.collector_starless_fraction
        ),
        "You collect repositories like Pokemon cards, but nobody wants to trade with you! 📦",
    ),
    _personality(
        "The Ghost",
        lambda f, hp: f["commit_count"] < hp.ghost_max_commits and f["public_repos"] > 0,
        "You're so invisible on GitHub, even your own repos don't recognize you! 👻",
    ),
    _personality(
        "The Emoji Enthusiast",
        lambda f, hp: f["emoji_count"] > f["commit_count"],
        "Your commit messages have more emojis than a teenager's Instagram story! 📱✨",
    ),
    _personality(
        "The Optimist",
        lambda f, hp: f["optimistic_repositories"] > hp.optimist_min_repos,
        "Everything is 'awesome' and 'amazing' in your repos. Reality called - it wants its "
        "expectations back! 🌈",
    ),
)

# ---------------------------------------------------------------------------
# Language stereotypes (first match wins, generic fallback last)
# ---------------------------------------------------------------------------

LANGUAGE_STEREOTYPES = {
    "JavaScript": "JavaScript developer? Let me guess, you've reinvented the wheel 47 times and called it "
    "'modern architecture' 🎡",
    "TypeScript": "TypeScript user? You're the person who puts warning labels on coffee cups saying "
    "'this is hot' ☕",
    "Python": "Python developer? You write 3 lines of code and call it 'elegant simplicity' while Java devs "
    "cry in 50-line constructors 🐍",
    "Java": "Java developer? You're still explaining why your Hello World program needs 5 design patterns "
    "and an XML config 📋",
    "C++": "C++ developer? You manually manage memory while the rest of us moved on to having actual lives 🧠",
    "Rust": "Rust developer? You probably mention memory safety at dinner parties and wonder why nobody "
    "invites you back 🦀",
    "Go": "Go developer? You chose a language designed by Google for people who find C too exciting 🐹",
    "PHP": "PHP developer these days? That's like being a VHS repair specialist - technically impressive "
    "but questionably relevant 💿",
    "C#": "C# developer? Microsoft's Java with extra corporate flavor and meetings about meetings 🏢",
    "Ruby": "Ruby developer? You're coding like it's 2010 and wondering why your startup ideas feel so... "
    "vintage 💎",
}


def _stereotype(language: str, phrase: str) -> Rule:
    return Rule(
        f"stereotype_{language.lower()}",
        lambda f, hp: f["language"] == language,
        f"💻 **Language Analysis**: {phrase}",
        10,
        ("💻 {language} Enthusiast",),
    )


LANGUAGE_RULES = tuple(_stereotype(lang, phrase) for lang, phrase in LANGUAGE_STEREOTYPES.items()) + (
    Rule(
        "stereotype_unknown",
        lambda f, hp: f["language"] is not None,
        "💻 **Language Analysis**: {language}? Interesting choice... said nobody ever! 🤔",
        5,
        ("💻 {language} Pioneer",),
    ),
)

# ---------------------------------------------------------------------------
# Time patterns
# ---------------------------------------------------------------------------

TIME_RULES = (
    Rule(
        "night_owl",
        lambda f, hp: f["dated"] > 0 and f["late_night"] > f["dated"] * hp.late_night_fraction,
        "🌙 {late_night_pct}% of your commits happen after 11 PM. Your code has insomnia, and probably "
        "bugs too!",
        12,
        ("🌙 Night Owl Coder",),
    ),
    Rule(
        "weekend_warrior",
        lambda f, hp: f["dated"] > 0 and f["weekend"] > f["dated"] * hp.weekend_fraction,
        "🏖️ You code more on weekends than weekdays. Either you're super dedicated or your work-life "
        "balance needs therapy!",
        10,
        ("🏖️ Weekend Warrior",),
    ),
    Rule(
        "human_cron_job",
        lambda f, hp: f["dated"] >= hp.cron_min_commits and f["hour_variance"] < hp.cron_variance_max,
        "⏰ You commit at almost the same time every day. Are you a robot, or just really, really boring?",
        8,
        ("⏰ Human Cron Job",),
    ),
    Rule(
        "holiday_goblin",
        lambda f, hp: f["holiday"] > 0,
        "🎄 {holiday} commits during holiday seasons? Your family must love watching you debug instead "
        "of opening presents!",
        15,
        ("🎄 Holiday Code Goblin",),
    ),
)

# ---------------------------------------------------------------------------
# Naming creativity
# ---------------------------------------------------------------------------

NAMING_RULES = (
    Rule(
        "sequential_names",
        lambda f, hp: f["sequential"] > hp.sequential_min,
        "🔢 You name repos like \"project1\", \"project2\"... Creative bankruptcy called - it wants its "
        "job back!",
        15,
        ("🔢 Sequential Namer",),
    ),
    Rule(
        "my_prefix",
        lambda f, hp: f["my_prefix"] > hp.my_prefix_min,
        "📝 \"my-something\" repos everywhere! We get it, they're yours. The GitHub URL already tells us that!",
        10,
        ("📝 Captain Obvious",),
    ),
    Rule(
        "clone_names",
        lambda f, hp: f["clones"] > hp.clone_min,
        "📱 Multiple \"clone\" or \"copy\" repos? Originality left the chat and never came back!",
        12,
        ("📱 Clone Trooper",),
    ),
    Rule(
        "long_names",
        lambda f, hp: f["long_names"] > 0,
        "📏 Repository names longer than this sentence? Save the essays for your README!",
        8,
        ("📏 Title Novelist",),
    ),
    Rule(
        "single_char_names",
        lambda f, hp: f["single_char"] > 0,
        "🔤 Single letter repo names? Did you run out of alphabet or creativity first?",
        10,
        ("🔤 Minimalist Extremist",),
    ),
    Rule(
        "lazy_names",
        lambda f, hp: f["lazy"] > 0,
        "💤 Repos named \"untitled\" or \"new\"? Your creativity is so lazy, it filed for unemployment!",
        14,
        ("💤 Name Procrastinator",),
    ),
)

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

BASE_FACETS = ("profile", "repository", "commit", "activity")
EXTENDED_FACETS = ("personality", "language", "time", "naming")

DEFAULT_REGISTRY = RuleRegistry(
    groups=(
        RuleGroup("profile", PROFILE_RULES),
        RuleGroup("repository", REPOSITORY_RULES),
        RuleGroup("commit", COMMIT_RULES),
        RuleGroup("activity", ACTIVITY_RULES),
        RuleGroup("personality", PERSONALITY_RULES, strategy="first"),
        RuleGroup("language", LANGUAGE_RULES, strategy="first"),
        RuleGroup("time", TIME_RULES),
        RuleGroup("naming", NAMING_RULES),
    )
)
