# Roast engine: runs every facet of a rule registry over an input snapshot,
# aggregates the fragments and composes the final text with a severity banner.

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Callable

from data_designer_github_roast.analyzers import Snapshot, analyze_facet
from data_designer_github_roast.models import (
    AccountProfile,
    CommitRecord,
    FacetResult,
    RepositoryRecord,
    RoastResult,
    coerce_commits,
    coerce_profile,
    coerce_repositories,
)
from data_designer_github_roast.rules import (
    DEFAULT_HYPERPARAMETERS,
    DEFAULT_REGISTRY,
    Hyperparameters,
    RuleRegistry,
)

logger = logging.getLogger(__name__)

Selector = Callable[[Sequence[str]], str]

# ---------------------------------------------------------------------------
# Closing remarks and banners
# ---------------------------------------------------------------------------

CLOSING_REMARKS = (
    "But hey, at least you're consistent... consistently disappointing! 🎯",
    "Remember, even Shakespeare had critics. Unfortunately, you're no Shakespeare! 📜",
    "Don't worry, everyone starts somewhere. You just started underground! ⛏️",
    "Your code might not compile, but this roast certainly does! 🔥",
    "The good news? You can only go up from here... right? 📈",
    "At least your GitHub profile makes everyone else feel better about theirs! 🤗",
    "Your repos are like your commits - full of potential that never gets realized! ✨",
)

SEVERITY_BANNERS = {
    "fatality": "💀 FATALITY! This developer needs immediate medical attention!",
    "well_roasted": "🔥 WELL ROASTED! Medium-rare with a side of reality check!",
    "lightly_toasted": "🌡️ LIGHTLY TOASTED! Could use more heat, just like your code!",
    "barely_warmed": "😎 BARELY WARMED UP! This developer is surprisingly resilient!",
}


def random_selector(choices: Sequence[str]) -> str:
    return random.choice(choices)


def seeded_selector(seed: int) -> Selector:
    """Selector drawing from a private ``random.Random`` seeded with ``seed``."""
    rng = random.Random(seed)
    return lambda choices: rng.choice(choices)


def severity_for_score(score: int, hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> str:
    if score >= hp.band_fatality_min:
        return "fatality"
    if score >= hp.band_well_roasted_min:
        return "well_roasted"
    if score >= hp.band_lightly_toasted_min:
        return "lightly_toasted"
    return "barely_warmed"


def _clamp(value: int, hp: Hyperparameters) -> int:
    return max(hp.score_min, min(hp.score_max, value))


def _deduplicate(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def _resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def build_snapshot(
    profile: AccountProfile | Mapping,
    repositories: Sequence[RepositoryRecord | Mapping] | None,
    commits: Sequence[CommitRecord | Mapping] | None,
    now: datetime | None = None,
) -> Snapshot:
    return Snapshot(
        profile=coerce_profile(profile),
        repositories=coerce_repositories(repositories),
        commits=coerce_commits(commits),
        now=_resolve_now(now),
    )


# ---------------------------------------------------------------------------
# Aggregation and composition
# ---------------------------------------------------------------------------


def aggregate(facets: Sequence[FacetResult], hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> tuple[str, int, list[str]]:
    """Merge facet results into (body text, clamped score, unique badges)."""
    body = "\n\n".join(facet.text for facet in facets if facet.text)
    score = _clamp(sum(facet.delta for facet in facets), hp)
    badges = _deduplicate([badge for facet in facets for badge in facet.badges])
    return body, score, badges


def compose(body: str, closing: str, banner: str) -> str:
    tail = f"{closing}\n\n🎯 {banner}"
    return f"{body}\n\n{tail}" if body else tail


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_roast(
    profile: AccountProfile | Mapping,
    repositories: Sequence[RepositoryRecord | Mapping] | None = (),
    commits: Sequence[CommitRecord | Mapping] | None = (),
    *,
    selector: Selector | None = None,
    now: datetime | None = None,
    hyperparameters: Hyperparameters | None = None,
    registry: RuleRegistry | None = None,
) -> RoastResult:
    """Roast a GitHub account snapshot.

    Args:
        profile: An ``AccountProfile`` or its payload mapping.
        repositories: Repository records or payloads, in the order supplied by the API.
        commits: Commit records or payloads.
        selector: Picks the closing remark from a sequence of choices. Defaults to
            ``random.choice``; pass a deterministic function to pin the output.
        now: Reference time for age-derived rules. Defaults to the current UTC time.
        hyperparameters: Optional threshold overrides.
        registry: Optional rule registry. Uses every facet by default.

    Returns:
        RoastResult with the composed text, a score in [0, 100] and unique badges.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    registry = registry or DEFAULT_REGISTRY
    pick = selector or random_selector
    snapshot = build_snapshot(profile, repositories, commits, now)

    facets = tuple(analyze_facet(group, snapshot, hp) for group in registry.groups)
    body, score, badges = aggregate(facets, hp)
    severity = severity_for_score(score, hp)
    text = compose(body, pick(CLOSING_REMARKS), SEVERITY_BANNERS[severity])

    fired = [f"{facet.facet}:{len(facet.fragments)}" for facet in facets if facet.fragments]
    logger.debug(f"Roasted {snapshot.profile.login!r}: score={score} severity={severity} facets={fired}")

    return RoastResult(text=text, score=score, badges=tuple(badges), severity=severity, facets=facets)
