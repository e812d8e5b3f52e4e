# Facet analyzers: each derives a flat mapping of facts from the input snapshot.
# The rule tables in ``rules.py`` are evaluated against these facts.

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from data_designer_github_roast.models import (
    AccountProfile,
    CommitRecord,
    FacetResult,
    RepositoryRecord,
    parse_timestamp,
)
from data_designer_github_roast.rules import Facts, Hyperparameters, RuleGroup, Thresholds

# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Snapshot:
    profile: AccountProfile
    repositories: tuple[RepositoryRecord, ...]
    commits: tuple[CommitRecord, ...]
    now: datetime


# ---------------------------------------------------------------------------
# Vocabularies and patterns
# ---------------------------------------------------------------------------

_EMOJIS = "😂🤣😭💀🔥💯✨❤💕💖😍🥰😘💩🤮🤢🎉🎊🥳👑💎"
_EMOJI_RE = re.compile("[" + _EMOJIS + "]")

_QUESTIONABLE_WORDS = [
    "fix", "work", "stuff", "things", "update", "change", "minor", "quick", "oops",
    "wtf", "shit", "damn", "fuck", "asdf", "test", "temp", "tmp", "final", "done",
    "whatever", "wip",
]
_QUESTIONABLE_RES = [re.compile(re.escape(w), re.IGNORECASE) for w in _QUESTIONABLE_WORDS] + [
    re.compile(r"^\.$"),
    re.compile(r"^[a-zA-Z]$"),
    re.compile(r"^\d+$"),
]

_GENERIC_REPO_WORDS = ("test", "hello", "demo", "practice", "learning", "tutorial", "temp", "new", "old", "backup")
_OPTIMISTIC_WORDS = ("awesome", "amazing", "super")
_CLONE_WORDS = ("clone", "copy", "replica", "version", "fork")
_LAZY_NAMES = frozenset({"untitled", "new", "repo", "project", "code", "stuff"})
_SEQUENTIAL_RE = re.compile(r"\d+$")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def fraction(part: int, total: int) -> float:
    return part / total if total else 0.0


def _percent(part: int, total: int) -> int:
    return round(fraction(part, total) * 100)


def _variance(values: list[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def _account_age(profile: AccountProfile, now: datetime) -> int | None:
    created = parse_timestamp(profile.created_at)
    if created is None:
        return None
    return (now - created).days // 365


def _emoji_count(commits: tuple[CommitRecord, ...]) -> int:
    return sum(len(_EMOJI_RE.findall(c.message)) for c in commits)


def _is_questionable(message: str) -> bool:
    stripped = message.strip()
    return any(pat.search(stripped) for pat in _QUESTIONABLE_RES)


def _primary_language(repositories: tuple[RepositoryRecord, ...]) -> str | None:
    counts = Counter(r.language for r in repositories if r.language)
    if not counts:
        return None
    # Counter keeps insertion order, so max() resolves ties to the first-seen language.
    return max(counts, key=counts.__getitem__)


# ---------------------------------------------------------------------------
# Base facets
# ---------------------------------------------------------------------------


def profile_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    profile = snapshot.profile
    bio = (profile.bio or "").strip()
    login = profile.login.lower()
    generic_token = next((t for t in hp.generic_username_tokens if t in login), None)
    return {
        "login": profile.login,
        "bio": bio,
        "bio_length": len(bio),
        "full_stack": any(marker in bio for marker in hp.full_stack_markers),
        "generic_token": generic_token,
        "has_digit_run": re.search(r"\d{%d,}" % hp.username_digit_run, profile.login) is not None,
        "account_age": _account_age(profile, snapshot.now),
        "public_repos": profile.public_repos,
        "followers": profile.followers,
        "following": profile.following,
        "follower_ratio": profile.followers / max(profile.following, 1),
    }


def repository_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    repos = snapshot.repositories
    count = len(repos)
    languages = list(dict.fromkeys(r.language for r in repos if r.language))
    generic = sum(1 for r in repos if any(w in r.name.lower() for w in _GENERIC_REPO_WORDS))
    undescribed = sum(1 for r in repos if not (r.description or "").strip())
    tiny = sum(1 for r in repos if r.size_kb < hp.tiny_repo_kb)

    cutoff = snapshot.now - timedelta(days=hp.stale_days)
    updated = [parse_timestamp(r.updated_at) for r in repos]
    dated = [u for u in updated if u is not None]
    stale = sum(1 for u in dated if u < cutoff)

    return {
        "count": count,
        "total_forks": sum(r.forks for r in repos),
        "total_stars": sum(r.stars for r in repos),
        "languages": languages,
        "language_entries": sum(1 for r in repos if r.language),
        "only_language": languages[0] if len(languages) == 1 else None,
        "generic_fraction": fraction(generic, count),
        "undescribed_fraction": fraction(undescribed, count),
        "tiny_fraction": fraction(tiny, count),
        "stale_fraction": fraction(stale, len(dated)) if dated else None,
    }


def commit_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    commits = snapshot.commits
    count = len(commits)
    questionable = sum(1 for c in commits if _is_questionable(c.message))
    return {
        "count": count,
        "questionable": questionable,
        "questionable_pct": _percent(questionable, count),
        "emoji_count": _emoji_count(commits),
        "one_char": sum(1 for c in commits if len(c.message.strip()) == 1),
        "all_caps": sum(1 for c in commits if c.message.isupper() and len(c.message) > hp.caps_min_length),
        "long_messages": sum(1 for c in commits if len(c.message) > hp.long_message_chars),
    }


def activity_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    repos = snapshot.repositories
    age = _account_age(snapshot.profile, snapshot.now)
    repos_per_year = None if age is None else snapshot.profile.public_repos / max(1, age)

    cutoff = snapshot.now - timedelta(days=hp.recent_days)
    dated = [u for u in (parse_timestamp(r.updated_at) for r in repos) if u is not None]
    return {
        "count": len(repos),
        "repos_per_year": repos_per_year,
        "repos_per_year_rounded": round(repos_per_year) if repos_per_year is not None else 0,
        "dated_repositories": len(dated),
        "recent_repositories": sum(1 for u in dated if u >= cutoff),
        "pushed_repositories": sum(1 for r in repos if r.pushed_at),
    }


# ---------------------------------------------------------------------------
# Extended facets
# ---------------------------------------------------------------------------


def personality_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    repos = snapshot.repositories
    commits = snapshot.commits
    return {
        "public_repos": snapshot.profile.public_repos,
        "repository_count": len(repos),
        "commit_count": len(commits),
        "fix_commits": sum(1 for c in commits if "fix" in c.message),
        "starless_repositories": sum(1 for r in repos if r.stars == 0),
        "emoji_count": _emoji_count(commits),
        "optimistic_repositories": sum(
            1 for r in repos if any(w in r.name.lower() for w in _OPTIMISTIC_WORDS)
        ),
    }


def language_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    return {"language": _primary_language(snapshot.repositories)}


def _is_late_night(hour: int, hp: Hyperparameters) -> bool:
    return hour >= hp.late_night_start_hour or hour <= hp.late_night_end_hour


def _is_holiday(moment: datetime) -> bool:
    return (
        (moment.month == 12 and moment.day > 20)
        or (moment.month == 1 and moment.day < 5)
        or (moment.month == 7 and moment.day == 4)
    )


def time_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    moments = [m for m in (parse_timestamp(c.date) for c in snapshot.commits) if m is not None]
    late_night = sum(1 for m in moments if _is_late_night(m.hour, hp))
    return {
        "dated": len(moments),
        "late_night": late_night,
        "late_night_pct": _percent(late_night, len(moments)),
        "weekend": sum(1 for m in moments if m.weekday() >= 5),
        "hour_variance": _variance([m.hour for m in moments]),
        "holiday": sum(1 for m in moments if _is_holiday(m)),
    }


def naming_facts(snapshot: Snapshot, hp: Hyperparameters) -> Facts:
    names = [r.name.lower() for r in snapshot.repositories]
    return {
        "sequential": sum(1 for n in names if _SEQUENTIAL_RE.search(n)),
        "my_prefix": sum(1 for n in names if n.startswith("my-")),
        "clones": sum(1 for n in names if any(w in n for w in _CLONE_WORDS)),
        "long_names": sum(1 for n in names if len(n) > hp.long_name_chars),
        "single_char": sum(1 for n in names if len(n) == 1),
        "lazy": sum(1 for n in names if n in _LAZY_NAMES),
    }


FACT_BUILDERS: dict[str, Callable[[Snapshot, Hyperparameters], Facts]] = {
    "profile": profile_facts,
    "repository": repository_facts,
    "commit": commit_facts,
    "activity": activity_facts,
    "personality": personality_facts,
    "language": language_facts,
    "time": time_facts,
    "naming": naming_facts,
}


def analyze_facet(
    group: RuleGroup,
    snapshot: Snapshot,
    hp: Thresholds,
    builders: Mapping[str, Callable[[Snapshot, Thresholds], Facts]] = FACT_BUILDERS,
) -> FacetResult:
    """Derive ``group``'s facts from the snapshot and evaluate its rules."""
    facts = builders[group.facet](snapshot, hp)
    return FacetResult(facet=group.facet, fragments=group.evaluate(facts, hp))
