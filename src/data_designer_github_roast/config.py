from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class GitHubRoastColumnConfig(SingleColumnConfig):
    """Roast GitHub account snapshots stored in a dataset.

    Each row supplies a profile payload, a list of repository payloads and a list of
    commit payloads. The generated column holds the composed roast text, a score
    (0-100), the severity band and the earned badges.

    Attributes:
        profile_column: Column holding the account profile mapping.
        repositories_column: Column holding the list of repository mappings.
        commits_column: Column holding the list of commit mappings. Optional; rows are
            roasted as if they had no recent commits when omitted.
        mode: ``"canonical"`` runs every facet with additive heat scoring; ``"classic"``
            runs the averaged three-facet formula.
        seed: Seed for closing-remark selection. ``None`` draws uniformly at random.
        include_breakdown: Include per-facet rules, deltas and badges in the output.
    """

    profile_column: str
    repositories_column: str
    commits_column: str | None = None
    mode: Literal["canonical", "classic"] = "canonical"
    seed: int | None = Field(default=None, description="Seed for deterministic closing remarks")
    include_breakdown: bool = Field(default=False, description="Include per-facet breakdown in output")
    column_type: Literal["github-roast"] = "github-roast"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f525"

    @property
    def required_columns(self) -> list[str]:
        columns = [self.profile_column, self.repositories_column]
        if self.commits_column:
            columns.append(self.commits_column)
        return columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
