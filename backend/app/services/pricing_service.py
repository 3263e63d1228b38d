import logging
from dataclasses import dataclass, field
from decimal import Decimal

from app.config import settings
from app.models.product import ADDON, PLAN
from app.repositories.products import ProductRepository
from app.services.addon_codes import normalize_addon_code
from app.services.price_cache import PriceCache, price_key

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass
class PriceQuote:
    plan: str
    plan_price: Decimal
    addon_prices: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        return self.plan_price + sum(self.addon_prices.values(), ZERO)


class PricingService:
    def __init__(self, products: ProductRepository, cache: PriceCache):
        self.products = products
        self.cache = cache

    def _ensure_fresh(self):
        if self.cache.is_expired():
            self.cache.refresh(self.products.list_active())

    def _lookup(self, product_type: str, code: str) -> Decimal:
        self._ensure_fresh()
        key = price_key(product_type, code)
        price = self.cache.get(key)
        if price is not None:
            return price

        product = self.products.find_active(code, product_type)
        if product is None:
            # Unknown or inactive codes are free rather than rejected
            logger.warning("No active %s with code %r; pricing it at 0", product_type, code)
            return ZERO
        price = product.unit_price
        self.cache.set(key, price)
        return price

    def get_price_for_plan(self, plan_code: str) -> Decimal:
        return self._lookup(PLAN, plan_code)

    def get_price_for_addon(self, addon_code: str) -> Decimal:
        return self._lookup(ADDON, normalize_addon_code(addon_code))

    def calculate_job_posting_price(self, plan_code: str, addon_codes: list[str] | None = None) -> Decimal:
        total = self.get_price_for_plan(plan_code)
        for code in addon_codes or []:
            total += self.get_price_for_addon(code)
        return total

    def quote(self, plan_code: str, addon_codes: list[str] | None = None) -> PriceQuote:
        quote = PriceQuote(plan=plan_code, plan_price=self.get_price_for_plan(plan_code))
        for code in addon_codes or []:
            # Repeated codes are charged once per occurrence, matching the total
            quote.addon_prices[code] = quote.addon_prices.get(code, ZERO) + self.get_price_for_addon(code)
        return quote

    def catalog(self) -> dict:
        plans = {}
        for plan in self.products.list_active(PLAN):
            plans[plan.code] = {
                "name": plan.name,
                "price": float(plan.unit_price),
                "features": plan.features or [],
                "active": plan.active,
                "duration": plan.description,
            }
        addons = {}
        for addon in self.products.list_active(ADDON):
            addons[addon.code] = {
                "name": addon.name,
                "price": float(addon.unit_price),
                "description": addon.description or "",
                "active": addon.active,
            }
        return {"plans": plans, "addons": addons}


price_cache = PriceCache(ttl_seconds=settings.price_cache_ttl_seconds)
