# Classic roast mode.
#
# Every facet starts from a neutral base and loses points for each rule that
# fires; the overall score is the rounded mean of the three facet scores, so a
# higher classic score means a healthier account. Badges are derived from the
# facet scores instead of from individual rules.

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from data_designer_github_roast.analyzers import Snapshot, analyze_facet, fraction
from data_designer_github_roast.core import (
    SEVERITY_BANNERS,
    Selector,
    build_snapshot,
    compose,
    random_selector,
    severity_for_score,
)
from data_designer_github_roast.models import (
    AccountProfile,
    CommitRecord,
    RepositoryRecord,
    RoastResult,
    parse_timestamp,
)
from data_designer_github_roast.rules import DEFAULT_HYPERPARAMETERS, Facts, Rule, RuleGroup, RuleRegistry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassicHyperparameters:
    short_bio_chars: int = 20
    max_repos: int = 200
    desperation_ratio: int = 5
    procrastinator_min_age_years: int = 5
    procrastinator_max_repos: int = 10
    undescribed_fraction: float = 0.5
    stale_days: int = 365
    stale_fraction: float = 0.7
    one_language_min_repos: int = 3
    tiny_repo_kb: int = 100
    tiny_fraction: float = 0.8
    commit_gap_days: float = 30.0
    emoji_heavy_min: int = 3
    emoji_heavy_fraction: float = 0.3
    low_score_line_max: int = 40


DEFAULT_CLASSIC_HYPERPARAMETERS = ClassicHyperparameters()

FACET_BASE = 50
EMPTY_COMMIT_SCORE = 20

ROAST_EMOJIS = ("🔥", "💀", "😈", "🎪", "🤡", "💩", "🗑️", "👻", "🤓", "🥱")

CLASSIC_MOTIVATION = (
    "But hey, at least you're consistent... consistently providing entertainment! 🎪 Keep coding though - "
    "someone has to write the bugs for the rest of us to fix! 🐛💻🔥"
)

_BROAD_EMOJI_RE = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF\U0001F1E0-\U0001F1FF\u2600-\u26FF\u2700-\u27BF]"
)
_BORING_NAME_WORDS = ("test", "hello", "practice", "tutorial", "copy", "demo", "sample")
_BORING_PROJECT_RE = re.compile(r"project\d+")
_BAD_MESSAGE_EXACT = frozenset({"fix", "update", "changes", "wip", "temp"})
_BAD_MESSAGE_WORDS = ("stuff", "things", "asdf", "test", "fuck", "shit", "damn")

# ---------------------------------------------------------------------------
# Facts
# ---------------------------------------------------------------------------


def _is_boring_name(name: str) -> bool:
    lowered = name.lower()
    return (
        lowered == "untitled"
        or any(w in lowered for w in _BORING_NAME_WORDS)
        or _BORING_PROJECT_RE.search(lowered) is not None
    )


def _is_bad_message(message: str) -> bool:
    msg = message.lower().strip()
    return msg in _BAD_MESSAGE_EXACT or len(msg) < 10 or any(w in msg for w in _BAD_MESSAGE_WORDS)


def classic_profile_facts(snapshot: Snapshot, hp: ClassicHyperparameters) -> Facts:
    profile = snapshot.profile
    bio = (profile.bio or "").strip()
    created = parse_timestamp(profile.created_at)
    return {
        "bio": bio,
        "bio_length": len(bio),
        "login": profile.login,
        "public_repos": profile.public_repos,
        "followers": profile.followers,
        "following": profile.following,
        "calendar_age": None if created is None else snapshot.now.year - created.year,
        "odd_username": (
            "123" in profile.login or "xxx" in profile.login or re.search(r"\d{4,}", profile.login) is not None
        ),
    }


def classic_repository_facts(snapshot: Snapshot, hp: ClassicHyperparameters) -> Facts:
    repos = snapshot.repositories
    count = len(repos)
    boring = [r.name.lower() for r in repos if _is_boring_name(r.name)]
    languages = list(dict.fromkeys(r.language for r in repos if r.language))
    now = snapshot.now
    try:
        year_ago = now.replace(year=now.year - 1)
    except ValueError:
        year_ago = now - timedelta(days=hp.stale_days)
    updated = [parse_timestamp(r.updated_at) for r in repos]
    old = sum(1 for u in updated if u is not None and u < year_ago)
    return {
        "count": count,
        "boring_example": boring[0] if boring else None,
        "undescribed_fraction": fraction(sum(1 for r in repos if not (r.description or "").strip()), count),
        "old_fraction": fraction(old, count),
        "total_stars": sum(r.stars for r in repos),
        "starless": sum(1 for r in repos if r.stars == 0),
        "languages": languages,
        "only_language": languages[0] if len(languages) == 1 else None,
        "tiny_fraction": fraction(sum(1 for r in repos if r.size_kb < hp.tiny_repo_kb), count),
    }


def classic_commit_facts(snapshot: Snapshot, hp: ClassicHyperparameters) -> Facts:
    commits = snapshot.commits
    bad = [c.message for c in commits if _is_bad_message(c.message)]
    moments = [m for m in (parse_timestamp(c.date) for c in commits) if m is not None]
    gaps = [(earlier - later).total_seconds() for earlier, later in zip(moments, moments[1:])]
    emoji_heavy = sum(1 for c in commits if len(_BROAD_EMOJI_RE.findall(c.message)) > hp.emoji_heavy_min)
    return {
        "count": len(commits),
        "bad_example": bad[0] if bad else None,
        "average_gap_days": (sum(gaps) / len(gaps) / 86400) if gaps else None,
        "emoji_heavy_fraction": fraction(emoji_heavy, len(commits)),
    }


CLASSIC_FACT_BUILDERS = {
    "profile": classic_profile_facts,
    "repository": classic_repository_facts,
    "commit": classic_commit_facts,
}

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

CLASSIC_PROFILE_RULES = (
    Rule("no_bio", lambda f, hp: f["bio_length"] == 0,
         "No bio? Let me guess - your personality is as empty as your bio section.", -10),
    Rule("short_bio", lambda f, hp: 0 < f["bio_length"] < hp.short_bio_chars,
         "\"{bio}\" - Shakespeare is rolling in his grave at this literary masterpiece.", -5),
    Rule("no_public_repos", lambda f, hp: f["public_repos"] == 0,
         "Zero public repos? Are you collecting stars for your private collection or just scared of code reviews?",
         -20),
    Rule("repo_hoarder", lambda f, hp: f["public_repos"] > hp.max_repos,
         "{public_repos} repos? Quality over quantity much? It's not a competition to see who can create the "
         "most 'hello-world' projects.", -10),
    Rule("no_followers", lambda f, hp: f["followers"] == 0,
         "Zero followers? Even your code doesn't want to follow you home.", -15),
    Rule("desperate_following",
         lambda f, hp: f["followers"] > 0 and f["following"] > f["followers"] * hp.desperation_ratio,
         "Following {following} people while only {followers} follow you back? That's some serious developer "
         "desperation right there.", -10),
    Rule("dusty_account",
         lambda f, hp: (
             f["calendar_age"] is not None
             and f["calendar_age"] > hp.procrastinator_min_age_years
             and f["public_repos"] < hp.procrastinator_max_repos
         ),
         "{calendar_age} years on GitHub and only {public_repos} repos? What have you been doing, collecting "
         "digital dust?", -15),
    Rule("odd_username", lambda f, hp: f["odd_username"],
         "Username \"{login}\"? Did you let your cat walk on the keyboard during registration?", -5),
)

CLASSIC_REPOSITORY_RULES = (
    Rule("no_repositories", lambda f, hp: f["count"] == 0, "", -FACET_BASE,
         terminal=True),
    Rule("boring_names", lambda f, hp: f["boring_example"] is not None,
         "Repo names like \"{boring_example}\"? Did you run out of creativity or is this your first day coding?",
         -10),
    Rule("undescribed", lambda f, hp: f["undescribed_fraction"] > hp.undescribed_fraction,
         "Half your repos have no description. Are they top secret or just too embarrassing to explain?", -10),
    Rule("stale", lambda f, hp: f["old_fraction"] > hp.stale_fraction,
         "Most of your repos haven't been touched in ages. What happened? Did you discover life outside of "
         "coding?", -15),
    Rule("all_starless", lambda f, hp: f["starless"] == f["count"],
         "Zero stars across ALL repos? Even your mom didn't star your projects!", -20),
    Rule("few_stars", lambda f, hp: f["starless"] != f["count"] and f["total_stars"] < f["count"],
         "{total_stars} total stars across {count} repos? Your code is about as popular as pineapple on pizza "
         "in Italy.", -10),
    Rule("one_language",
         lambda f, hp: len(f["languages"]) == 1 and f["count"] > hp.one_language_min_repos,
         "Only coding in {only_language}? Branching out isn't just for Git, you know.", -10),
    Rule("tiny_repositories", lambda f, hp: f["tiny_fraction"] > hp.tiny_fraction,
         "Most of your repos are smaller than a selfie. Are you coding haikus?", -10),
)

CLASSIC_COMMIT_RULES = (
    Rule("no_commits", lambda f, hp: f["count"] == 0,
         "No commits to analyze? Either you're very private or very inactive.",
         EMPTY_COMMIT_SCORE - FACET_BASE,
         terminal=True),
    Rule("bad_messages", lambda f, hp: f["bad_example"] is not None,
         "Commit messages like \"{bad_example}\"? Your future self is crying right now.", -15),
    Rule("hibernating",
         lambda f, hp: f["average_gap_days"] is not None and f["average_gap_days"] > hp.commit_gap_days,
         "Committing once a month? Are you coding or hibernating?", -10),
    Rule("emoji_overuse", lambda f, hp: f["emoji_heavy_fraction"] > hp.emoji_heavy_fraction,
         "Too many emojis in commits! This is Git, not Instagram Stories! 🤳📱✨", -10),
)

CLASSIC_REGISTRY = RuleRegistry(
    groups=(
        RuleGroup("profile", CLASSIC_PROFILE_RULES),
        RuleGroup("repository", CLASSIC_REPOSITORY_RULES),
        RuleGroup("commit", CLASSIC_COMMIT_RULES),
    )
)

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def _badges(overall: int, scores: Mapping[str, int]) -> list[str]:
    badges = []
    if overall < 30:
        badges.append("💩 Code Disaster")
    if overall > 70:
        badges.append("⭐ Actually Decent")
    if scores["profile"] < 30:
        badges.append("👻 Ghost Profile")
    if scores["repository"] < 30:
        badges.append("🗑️ Repository Wasteland")
    if scores["commit"] < 30:
        badges.append("📝 Commit Chaos")
    if overall < 20:
        badges.append("🏆 Ultimate Roast Victim")
    return badges


def generate_classic_roast(
    profile: AccountProfile | Mapping,
    repositories: Sequence[RepositoryRecord | Mapping] | None = (),
    commits: Sequence[CommitRecord | Mapping] | None = (),
    *,
    selector: Selector | None = None,
    now: datetime | None = None,
    hyperparameters: ClassicHyperparameters | None = None,
    registry: RuleRegistry | None = None,
) -> RoastResult:
    """Roast an account with the classic averaged-facet formula.

    The returned score is a quality score (higher is better); the severity
    banner is chosen from its complement.
    """
    hp = hyperparameters or DEFAULT_CLASSIC_HYPERPARAMETERS
    registry = registry or CLASSIC_REGISTRY
    pick = selector or random_selector
    snapshot = build_snapshot(profile, repositories, commits, now)

    facets = tuple(analyze_facet(group, snapshot, hp, CLASSIC_FACT_BUILDERS) for group in registry.groups)
    scores = {facet.facet: FACET_BASE + facet.delta for facet in facets}
    for facet in ("profile", "repository", "commit"):
        scores.setdefault(facet, FACET_BASE)
    overall = max(0, min(100, round(sum(scores.values()) / len(scores))))
    badges = _badges(overall, scores)

    lines = [f"{pick(ROAST_EMOJIS)} {fragment.text}" for facet in facets for fragment in facet.fragments if fragment.text]
    if overall < hp.low_score_line_max:
        lines.append(
            f"{pick(ROAST_EMOJIS)} Overall roast score: {overall}/100. Ouch! That's lower than my expectations "
            "for JavaScript frameworks lasting more than 6 months."
        )
    if badges:
        lines.append(f"🏅 **Badges Earned:** {' '.join(badges)}")

    severity = severity_for_score(100 - overall, DEFAULT_HYPERPARAMETERS)
    text = compose("\n\n".join(lines), CLASSIC_MOTIVATION, SEVERITY_BANNERS[severity])
    logger.debug(f"Classic roast for {snapshot.profile.login!r}: score={overall} facet_scores={scores}")

    return RoastResult(text=text, score=overall, badges=tuple(badges), severity=severity, facets=facets)

