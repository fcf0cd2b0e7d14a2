"""Lightweight preference model fed by swipe decisions."""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Sequence

from ..models import Decision, Item

logger = logging.getLogger(__name__)


class PreferenceModel:
    """Per-tag, per-brand and per-price-tier weights learned from likes and dislikes."""

    def __init__(self, learning_rate: float = 1.0):
        self.learning_rate = learning_rate
        self._tags: Dict[str, float] = defaultdict(float)
        self._brands: Dict[str, float] = defaultdict(float)
        self._tiers: Dict[str, float] = defaultdict(float)
        self.updates = 0

    def update(self, action: Decision, item: Item) -> None:
        if action is Decision.LIKE:
            delta = self.learning_rate
        elif action is Decision.DISLIKE:
            delta = -self.learning_rate
        else:
            return

        for tag in set(item.tags):
            self._tags[tag.lower()] += delta
        if item.brand:
            self._brands[item.brand.lower()] += delta
        if item.price_tier:
            self._tiers[item.price_tier] += delta
        self.updates += 1

    def score(self, item: Item) -> float:
        tag_score = sum(self._tags.get(tag.lower(), 0.0) for tag in set(item.tags))
        brand_score = self._brands.get(item.brand.lower(), 0.0) if item.brand else 0.0
        tier_score = self._tiers.get(item.price_tier, 0.0)
        return tag_score + brand_score + tier_score

    def rank(self, items: Sequence[Item]) -> List[Item]:
        """Highest score first; ties keep the feed's original order."""
        return sorted(items, key=self.score, reverse=True)

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        return {
            "tags": dict(self._tags),
            "brands": dict(self._brands),
            "price_tiers": dict(self._tiers),
        }

    def save(self, path: Path) -> None:
        path = Path(path)
        payload = {"learning_rate": self.learning_rate, "updates": self.updates}
        payload.update(self.snapshot())
        with open(path, "w") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    @classmethod
    def load(cls, path: Path, learning_rate: float = 1.0) -> "PreferenceModel":
        """Load saved weights; a missing file gives an empty model."""
        path = Path(path)
        model = cls(learning_rate)
        if not path.exists():
            return model
        with open(path, "r") as f:
            data = json.load(f)
        model._tags.update(data.get("tags", {}))
        model._brands.update(data.get("brands", {}))
        model._tiers.update(data.get("price_tiers", {}))
        model.updates = int(data.get("updates", 0))
        logger.info("Loaded preference weights from %s (%d updates)", path, model.updates)
        return model
