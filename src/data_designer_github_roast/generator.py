from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_github_roast.classic import generate_classic_roast
from data_designer_github_roast.config import GitHubRoastColumnConfig
from data_designer_github_roast.core import generate_roast, random_selector, seeded_selector

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def _cell_payload(value):
    """Normalise a dataframe cell into a mapping/list payload (JSON strings are decoded)."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (str, bytes)):
        return json.loads(value) if value.strip() else None
    return value


class GitHubRoastColumnGenerator(ColumnGeneratorFullColumn[GitHubRoastColumnConfig]):
    """Column generator that roasts GitHub account snapshots with the rule registry."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f525 Roasting column {self.config.name!r} from GitHub snapshots")
        logger.info(f"   profile column: {self.config.profile_column}")
        logger.info(f"   repositories column: {self.config.repositories_column}")
        logger.info(f"   commits column: {self.config.commits_column}")
        logger.info(f"   mode: {self.config.mode}")

        roaster = generate_classic_roast if self.config.mode == "classic" else generate_roast
        selector = seeded_selector(self.config.seed) if self.config.seed is not None else random_selector

        results = []
        for _, row in data.iterrows():
            profile = _cell_payload(row[self.config.profile_column]) or {}
            repositories = _cell_payload(row[self.config.repositories_column]) or []
            commits = []
            if self.config.commits_column:
                commits = _cell_payload(row[self.config.commits_column]) or []
            payload = roaster(profile, repositories, commits, selector=selector).to_payload()
            if not self.config.include_breakdown:
                payload.pop("breakdown")
            results.append(payload)

        data = data.copy()
        data[self.config.name] = results
        return data
