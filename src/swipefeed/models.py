"""
Core data types shared by the feed engine.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config import PriceTierConfig


class Decision(Enum):
    """Outcome of a completed drag gesture."""
    LIKE = "like"
    DISLIKE = "dislike"
    OPEN_DETAILS = "open-details"
    CANCEL = "cancel"

    @property
    def is_swipe(self) -> bool:
        """True for the outcomes that advance the feed."""
        return self in (Decision.LIKE, Decision.DISLIKE)

    @property
    def exit_sign(self) -> int:
        """Horizontal direction the card leaves in (+1 right, -1 left)."""
        return 1 if self is Decision.LIKE else -1


@dataclass(frozen=True)
class Offset:
    """2-D drag offset in logical pixels."""
    x: float = 0.0
    y: float = 0.0

    @property
    def is_origin(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Offset()


@dataclass(frozen=True)
class Item:
    """
    A recommendable product, as supplied by the product feed.

    Attributes:
        id: Stable identity of the item
        title: Display name
        brand: Brand name
        price: Base price
        price_tier: Coarse price bucket ("low", "mid", "high")
        tags: Style/category tags used for ranking
        image: Image URL
    """
    id: str
    title: str = ""
    brand: str = ""
    price: float = 0.0
    price_tier: str = "mid"
    tags: Tuple[str, ...] = field(default_factory=tuple)
    image: Optional[str] = None


@dataclass(frozen=True)
class InteractionRecord:
    """One committed like/dislike. Never mutated once created."""
    item_id: str
    action: Decision
    timestamp: int  # epoch milliseconds
    tags: Tuple[str, ...] = field(default_factory=tuple)
    price_tier: str = "mid"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "action": self.action.value,
            "timestamp": self.timestamp,
            "tags": list(self.tags),
            "priceTier": self.price_tier,
        }


def price_tier(price: float, bounds: Optional[PriceTierConfig] = None) -> str:
    """Bucket a price into low/mid/high."""
    bounds = bounds or PriceTierConfig()
    if price < bounds.low_max:
        return "low"
    if price < bounds.mid_max:
        return "mid"
    return "high"


def _first_image(product: Dict[str, Any]) -> Optional[str]:
    images = product.get("images") or []
    if images:
        return images[0]
    if product.get("image"):
        return product["image"]
    for variant in product.get("variants") or []:
        if variant.get("images"):
            return variant["images"][0]
    return None


def _product_price(product: Dict[str, Any]) -> float:
    for key in ("basePrice", "price"):
        if product.get(key) is not None:
            return float(product[key])
    for variant in product.get("variants") or []:
        if variant.get("price") is not None:
            return float(variant["price"])
    return 0.0


def item_from_product(product: Dict[str, Any], bounds: Optional[PriceTierConfig] = None) -> Item:
    """
    Map a backend product payload onto an Item.

    Accepts both the vendor schema (``_id``, ``name``, ``basePrice``,
    ``variants``) and already-flattened items (``id``, ``title``, ``price``).

    Raises:
        ValueError: If the payload has no id.
    """
    item_id = product.get("_id") or product.get("id")
    if not item_id:
        raise ValueError("product payload has no id")

    price = _product_price(product)
    tags = list(product.get("tags") or [])
    category = product.get("category")
    if category and category not in tags:
        tags.append(category)

    return Item(
        id=str(item_id),
        title=product.get("name") or product.get("title") or "",
        brand=product.get("brand") or "",
        price=price,
        price_tier=product.get("priceTier") or price_tier(price, bounds),
        tags=tuple(tags),
        image=_first_image(product),
    )
