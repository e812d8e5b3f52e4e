# SPDX-License-Identifier: Apache-2.0
"""GitHub roast plugin for NeMo Data Designer.

Adds a ``github-roast`` column type that turns a GitHub account snapshot (profile,
repositories, recent commits) into a scored, badge-laden roast using a static
registry of heuristic rules. No LLM calls, no API dependencies.

Usage::

    from data_designer_github_roast import GitHubRoastColumnConfig

    builder.add_column(GitHubRoastColumnConfig(
        name="roast",
        profile_column="profile",
        repositories_column="repos",
        commits_column="commits",
    ))

The engine can also be called directly::

    from data_designer_github_roast import generate_roast

    result = generate_roast(profile, repositories, commits)
    print(result.score, result.badges)
"""

from data_designer_github_roast.classic import ClassicHyperparameters, generate_classic_roast
from data_designer_github_roast.config import GitHubRoastColumnConfig
from data_designer_github_roast.core import generate_roast
from data_designer_github_roast.models import AccountProfile, CommitRecord, RepositoryRecord, RoastResult
from data_designer_github_roast.rules import DEFAULT_REGISTRY, Hyperparameters, RuleRegistry

__all__ = [
    "AccountProfile",
    "ClassicHyperparameters",
    "CommitRecord",
    "DEFAULT_REGISTRY",
    "GitHubRoastColumnConfig",
    "Hyperparameters",
    "RepositoryRecord",
    "RoastResult",
    "RuleRegistry",
    "generate_classic_roast",
    "generate_roast",
]
