from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def _pick(payload: Mapping, *keys: str, default: object = None) -> object:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return default


def _as_int(value: object) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _require_mapping(payload: object, kind: str) -> Mapping:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{kind} payload must be a mapping, got {type(payload).__name__}")
    return payload


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` when it cannot be read.

    A trailing ``Z`` is accepted and naive values are taken as UTC.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountProfile:
    login: str
    name: str | None = None
    bio: str | None = None
    avatar_url: str = ""
    company: str | None = None
    location: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping) -> AccountProfile:
        """Build a profile from either the camelCase contract or GitHub's REST fields."""
        payload = _require_mapping(payload, "profile")
        return cls(
            login=str(_pick(payload, "login", default="")),
            name=_as_text(_pick(payload, "name")),
            bio=_as_text(_pick(payload, "bio")),
            avatar_url=str(_pick(payload, "avatarUrl", "avatar_url", default="")),
            company=_as_text(_pick(payload, "company")),
            location=_as_text(_pick(payload, "location")),
            public_repos=_as_int(_pick(payload, "publicRepos", "public_repos", default=0)),
            followers=_as_int(_pick(payload, "followers", default=0)),
            following=_as_int(_pick(payload, "following", default=0)),
            created_at=str(_pick(payload, "createdAt", "created_at", default="")),
            updated_at=str(_pick(payload, "updatedAt", "updated_at", default="")),
        )


@dataclass(frozen=True)
class RepositoryRecord:
    name: str
    description: str | None = None
    is_private: bool = False
    language: str | None = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    size_kb: int = 0
    created_at: str = ""
    updated_at: str = ""
    pushed_at: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping) -> RepositoryRecord:
        payload = _require_mapping(payload, "repository")
        return cls(
            name=str(_pick(payload, "name", default="")),
            description=_as_text(_pick(payload, "description")),
            is_private=bool(_pick(payload, "isPrivate", "private", default=False)),
            language=_as_text(_pick(payload, "language")),
            stars=_as_int(_pick(payload, "stars", "stargazers_count", default=0)),
            forks=_as_int(_pick(payload, "forks", "forks_count", default=0)),
            watchers=_as_int(_pick(payload, "watchers", "watchers_count", default=0)),
            size_kb=_as_int(_pick(payload, "sizeKB", "size", default=0)),
            created_at=str(_pick(payload, "createdAt", "created_at", default="")),
            updated_at=str(_pick(payload, "updatedAt", "updated_at", default="")),
            pushed_at=_as_text(_pick(payload, "pushedAt", "pushed_at")),
        )


@dataclass(frozen=True)
class CommitRecord:
    message: str
    date: str = ""
    repo: str = ""
    id: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping) -> CommitRecord:
        payload = _require_mapping(payload, "commit")
        return cls(
            message=str(_pick(payload, "message", default="")),
            date=str(_pick(payload, "date", default="")),
            repo=str(_pick(payload, "repo", default="")),
            id=str(_pick(payload, "id", "sha", default="")),
        )


def coerce_profile(value: AccountProfile | Mapping) -> AccountProfile:
    if isinstance(value, AccountProfile):
        return value
    return AccountProfile.from_payload(value)


def coerce_repositories(values) -> tuple[RepositoryRecord, ...]:
    return tuple(v if isinstance(v, RepositoryRecord) else RepositoryRecord.from_payload(v) for v in values or ())


def coerce_commits(values) -> tuple[CommitRecord, ...]:
    return tuple(v if isinstance(v, CommitRecord) else CommitRecord.from_payload(v) for v in values or ())


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RoastFragment:
    facet: str
    rule: str
    text: str
    delta: int
    badges: tuple[str, ...] = ()


@dataclass(frozen=True)
class FacetResult:
    facet: str
    fragments: tuple[RoastFragment, ...] = ()

    @property
    def text(self) -> str:
        return " ".join(f.text for f in self.fragments if f.text)

    @property
    def delta(self) -> int:
        return sum(f.delta for f in self.fragments)

    @property
    def badges(self) -> list[str]:
        return [badge for f in self.fragments for badge in f.badges]

    def to_payload(self) -> dict[str, object]:
        return {
            "facet": self.facet,
            "rules": [f.rule for f in self.fragments],
            "delta": self.delta,
            "badges": self.badges,
        }


@dataclass(frozen=True)
class RoastResult:
    """Final roast: composed text, clamped score and ordered unique badges."""

    text: str
    score: int
    badges: tuple[str, ...]
    severity: str
    facets: tuple[FacetResult, ...] = field(default=(), compare=False)

    def to_payload(self) -> dict[str, object]:
        return {
            "roast": self.text,
            "score": self.score,
            "badges": list(self.badges),
            "severity": self.severity,
            "breakdown": [facet.to_payload() for facet in self.facets],
        }
