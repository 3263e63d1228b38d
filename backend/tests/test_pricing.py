from decimal import Decimal

import pytest

from app.models.product import Product
from app.repositories.products import ProductRepository
from app.seed import seed_products
from app.services.price_cache import PriceCache
from app.services.pricing_service import PricingService

from conftest import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pricing(seeded_db, clock):
    return PricingService(ProductRepository(seeded_db), PriceCache(ttl_seconds=60, clock=clock))


def _set_price(db, code, price):
    product = db.query(Product).filter(Product.code == code).one()
    product.price = price
    db.commit()


class TestPlanAndAddonPrices:
    @pytest.mark.parametrize("code, price", [
        ("basic", "0.00"),
        ("standard", "20.00"),
        ("featured", "50.00"),
        ("unlimited", "150.00"),
    ])
    def test_plan_prices(self, pricing, code, price):
        assert pricing.get_price_for_plan(code) == Decimal(price)

    def test_addon_price(self, pricing):
        assert pricing.get_price_for_addon("urgent") == Decimal("15.00")

    def test_aliases_price_like_canonical_codes(self, pricing):
        assert pricing.get_price_for_addon("boost") == pricing.get_price_for_addon("highlighted")
        assert pricing.get_price_for_addon("social-boost") == pricing.get_price_for_addon("social-media-promotion")
        assert pricing.get_price_for_addon("extended") == Decimal("25.00")

    def test_plan_code_is_not_an_addon(self, pricing):
        assert pricing.get_price_for_addon("standard") == 0


class TestUnknownCodes:
    def test_unknown_plan_is_free(self, pricing):
        assert pricing.get_price_for_plan("nonexistent-plan") == 0

    def test_unknown_plan_and_addon_total_zero(self, pricing):
        assert pricing.calculate_job_posting_price("nonexistent-plan", ["nonexistent-addon"]) == 0

    def test_unknown_code_logs_warning(self, pricing, caplog):
        with caplog.at_level("WARNING", logger="app.services.pricing_service"):
            pricing.get_price_for_addon("typo-addon")
        assert "typo-addon" in caplog.text

    def test_inactive_product_is_free(self, seeded_db, clock):
        product = seeded_db.query(Product).filter(Product.code == "urgent").one()
        product.active = False
        seeded_db.commit()
        pricing = PricingService(ProductRepository(seeded_db), PriceCache(clock=clock))
        assert pricing.get_price_for_addon("urgent") == 0


class TestTotals:
    def test_additive_total(self, pricing):
        total = pricing.calculate_job_posting_price("standard", ["highlighted", "urgent"])
        assert total == Decimal("45.00")
        assert str(total) == "45.00"

    def test_no_addons(self, pricing):
        assert pricing.calculate_job_posting_price("featured") == Decimal("50.00")

    def test_repeated_addon_charged_each_time(self, pricing):
        assert pricing.calculate_job_posting_price("basic", ["boost", "highlighted"]) == Decimal("20.00")

    def test_quote_breakdown_matches_total(self, pricing):
        quote = pricing.quote("standard", ["social-boost", "urgent", "typo"])
        assert quote.plan_price == Decimal("20.00")
        assert quote.addon_prices == {
            "social-boost": Decimal("20.00"),
            "urgent": Decimal("15.00"),
            "typo": Decimal("0.00"),
        }
        assert quote.total == pricing.calculate_job_posting_price("standard", ["social-boost", "urgent", "typo"])


class TestCacheWindow:
    def test_prices_stable_within_ttl(self, pricing, seeded_db, clock):
        assert pricing.get_price_for_plan("standard") == Decimal("20.00")
        _set_price(seeded_db, "standard", "99.00")
        clock.advance(59)
        assert pricing.get_price_for_plan("standard") == Decimal("20.00")

    def test_prices_refresh_after_ttl(self, pricing, seeded_db, clock):
        assert pricing.get_price_for_plan("standard") == Decimal("20.00")
        _set_price(seeded_db, "standard", "99.00")
        clock.advance(61)
        assert pricing.get_price_for_plan("standard") == Decimal("99.00")

    def test_cache_miss_falls_back_to_catalog(self, pricing, seeded_db):
        pricing.get_price_for_plan("standard")
        seeded_db.add(Product(
            id="p-new", code="weekly", name="Weekly", description="Listing for 7 days",
            type="plan", price="5.00", active=True, sort_order=5, features=[],
            created_at="2026-01-01T00:00:00Z", updated_at="2026-01-01T00:00:00Z",
        ))
        seeded_db.commit()
        assert pricing.get_price_for_plan("weekly") == Decimal("5.00")
        assert pricing.cache.get("plan:weekly") == Decimal("5.00")


class TestCatalog:
    def test_catalog_shape_and_order(self, pricing):
        catalog = pricing.catalog()
        assert list(catalog["plans"]) == ["basic", "standard", "featured", "unlimited"]
        assert catalog["plans"]["standard"] == {
            "name": "Standard",
            "price": 20.0,
            "features": ["30-day listing", "Enhanced visibility", "Higher search placement", "Email notifications"],
            "active": True,
            "duration": "Standard job listing for 30 days",
        }
        assert list(catalog["addons"])[0] == "highlighted"
        assert catalog["addons"]["urgent"]["price"] == 15.0
        assert set(catalog["addons"]["urgent"]) == {"name", "price", "description", "active"}

    def test_seed_is_idempotent(self, seeded_db):
        assert seed_products(seeded_db) == 0
        assert ProductRepository(seeded_db).count() == 9
