"""
Listing expiry for job postings.

A posting lives for its plan's nominal duration counted from the moment the
plan was (re)assigned. The ``extend-post`` add-on buys extra days on top.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.config import settings
from app.models.product import PLAN, Product
from app.repositories.products import ProductRepository
from app.services.addon_codes import EXTEND_POST_ADDON

logger = logging.getLogger(__name__)

PLAN_DURATIONS = {
    "basic": 15,
    "standard": 30,
    "featured": 30,
    "unlimited": 90,
}

_DURATION_PATTERN = re.compile(r"(\d+)[- ]day", re.IGNORECASE)


@dataclass
class ExpiryResult:
    expires_at: datetime
    duration_days: int
    extended: bool


def plan_duration_days(product: Product | None, default_days: int | None = None) -> int:
    fallback = default_days if default_days is not None else settings.default_listing_days
    if product is None:
        return fallback
    if product.code in PLAN_DURATIONS:
        return PLAN_DURATIONS[product.code]
    if product.description:
        match = _DURATION_PATTERN.search(product.description)
        if match:
            return int(match.group(1))
    return fallback


class ExpiryCalculator:
    def __init__(
        self,
        products: ProductRepository,
        default_days: int | None = None,
        extend_days: int | None = None,
    ):
        self.products = products
        self.default_days = default_days if default_days is not None else settings.default_listing_days
        self.extend_days = extend_days if extend_days is not None else settings.extend_post_days

    def compute(self, plan_code: str, addons: list[str] | None, now: datetime) -> ExpiryResult:
        product = self.products.find_active(plan_code, PLAN)
        duration = plan_duration_days(product, self.default_days)
        expires_at = now + timedelta(days=duration)

        extended = EXTEND_POST_ADDON in (addons or [])
        if extended:
            expires_at += timedelta(days=self.extend_days)
            logger.info("Adding %d days to expiry for %r add-on", self.extend_days, EXTEND_POST_ADDON)

        logger.info(
            "Plan %r listing expires at %s (%d days)",
            plan_code,
            expires_at.isoformat(),
            duration + (self.extend_days if extended else 0),
        )
        return ExpiryResult(expires_at=expires_at, duration_days=duration, extended=extended)
