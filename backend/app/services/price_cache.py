import logging
import time
from decimal import Decimal
from typing import Callable, Iterable

from app.models.product import Product

logger = logging.getLogger(__name__)


def price_key(product_type: str, code: str) -> str:
    return f"{product_type}:{code}"


class PriceCache:
    """Process-local map of ``"<type>:<code>"`` to price, rebuilt wholesale once per TTL.

    No lock guards a rebuild. Two callers crossing the expiry boundary may both
    reload the catalog; each rebuild is a full replacement computed from the
    same rows, so the map converges either way.
    """

    def __init__(self, ttl_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._prices: dict[str, Decimal] = {}
        self._expires_at: float | None = None

    def is_expired(self) -> bool:
        return self._expires_at is None or self._clock() > self._expires_at

    def refresh(self, products: Iterable[Product]) -> None:
        prices = {price_key(p.type, p.code): p.unit_price for p in products}
        self._prices = prices
        self._expires_at = self._clock() + self.ttl_seconds
        logger.debug("Price cache rebuilt with %d entries", len(prices))

    def get(self, key: str) -> Decimal | None:
        return self._prices.get(key)

    def set(self, key: str, price: Decimal) -> None:
        self._prices[key] = price

    def invalidate(self) -> None:
        self._prices = {}
        self._expires_at = None

    def __len__(self) -> int:
        return len(self._prices)
