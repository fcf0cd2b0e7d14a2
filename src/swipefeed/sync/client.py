"""
HTTP client for the shop backend.

Interaction sync is best-effort: calls run off the UI thread and every
failure is logged and dropped.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import requests

from ..config import BackendConfig, PriceTierConfig
from ..models import Decision, Item, item_from_product

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    """Who the calls are made for: a signed-in user or an anonymous guest."""
    token: Optional[str] = None
    guest_id: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return not self.token and bool(self.guest_id)


def run_in_thread(fn: Callable, *args) -> None:
    """Default dispatcher: run fn on a daemon thread and return immediately."""
    thread = threading.Thread(target=fn, args=args, daemon=True)
    thread.start()


class ApiClient:
    """
    Thin wrapper over the REST endpoints the feed uses.

    Args:
        base_url: Backend root, e.g. http://localhost:5000
        identity: Auth identity; bearer token wins over guest id
        timeout: Per-request timeout in seconds
        dispatch: Callable(fn, *args) used for fire-and-forget calls
        price_tiers: Bounds for deriving price tiers of fetched products
    """

    def __init__(
        self,
        base_url: str,
        identity: Optional[Identity] = None,
        timeout: float = 5.0,
        dispatch: Callable = run_in_thread,
        price_tiers: Optional[PriceTierConfig] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.identity = identity or Identity()
        self.timeout = timeout
        self._dispatch = dispatch
        self._price_tiers = price_tiers

    @classmethod
    def from_config(cls, config: BackendConfig, price_tiers: Optional[PriceTierConfig] = None,
                    dispatch: Callable = run_in_thread) -> "ApiClient":
        return cls(
            config.base_url,
            Identity(token=config.token, guest_id=config.guest_id),
            timeout=config.timeout,
            dispatch=dispatch,
            price_tiers=price_tiers,
        )

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.identity.token:
            headers["Authorization"] = f"Bearer {self.identity.token}"
        elif self.identity.guest_id:
            headers["x-guest-id"] = self.identity.guest_id
        return headers

    def send_interaction(self, action: Decision, item_id: str) -> None:
        """Queue a like/unlike for item_id and return without waiting."""
        self._dispatch(self.post_interaction, action, item_id)

    def post_interaction(self, action: Decision, item_id: str) -> bool:
        """
        Persist one decision: like -> POST, dislike -> DELETE on /api/likes/<id>.

        Returns:
            True if the backend accepted the call.
        """
        if action not in (Decision.LIKE, Decision.DISLIKE):
            raise ValueError(f"cannot sync {action.value}")

        url = f"{self.base_url}/api/likes/{item_id}"
        payload = {"productId": item_id}
        if self.identity.is_guest:
            payload["guestId"] = self.identity.guest_id

        try:
            if action is Decision.LIKE:
                response = requests.post(url, headers=self.headers, json=payload, timeout=self.timeout)
            else:
                response = requests.delete(url, headers=self.headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Interaction sync failed for %s (%s): %s", item_id, action.value, e)
            return False

        if not response.ok:
            logger.warning(
                "Interaction sync rejected for %s (%s): HTTP %s %s",
                item_id, action.value, response.status_code, response.text[:200],
            )
            return False

        logger.debug("Synced %s for %s", action.value, item_id)
        return True

    def fetch_items(
        self,
        brands: Sequence[str] = (),
        categories: Sequence[str] = (),
        colors: Sequence[str] = (),
    ) -> List[Item]:
        """
        Load the product feed for the given filters.

        A failed request or a malformed body gives an empty list, which the
        feed renders as its empty state.
        """
        params = {}
        if brands:
            params["brand"] = ",".join(brands)
        if categories:
            params["category"] = ",".join(categories)
        if colors:
            params["color"] = ",".join(colors)

        try:
            response = requests.get(
                f"{self.base_url}/api/products",
                headers=self.headers,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            products = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Failed to load products: %s", e)
            return []

        if not isinstance(products, list):
            logger.warning("Unexpected products payload: %s", type(products).__name__)
            return []

        items = []
        for product in products:
            try:
                items.append(item_from_product(product, self._price_tiers))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning("Skipping malformed product: %s", e)
        return items

    def check_health(self) -> bool:
        try:
            response = requests.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Backend health check failed: %s", e)
            return False
        return response.ok
