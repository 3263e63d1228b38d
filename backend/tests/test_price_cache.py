from decimal import Decimal

from app.models.product import Product
from app.services.price_cache import PriceCache, price_key

from conftest import FakeClock


def _product(code, product_type, price):
    return Product(code=code, type=product_type, price=price, active=True)


class TestPriceCache:
    def test_expired_before_first_refresh(self):
        cache = PriceCache(ttl_seconds=60, clock=FakeClock(start=0))
        assert cache.is_expired()

    def test_refresh_populates_both_types(self):
        cache = PriceCache(ttl_seconds=60, clock=FakeClock())
        cache.refresh([_product("standard", "plan", "20.00"), _product("urgent", "addon", "15.00")])
        assert cache.get(price_key("plan", "standard")) == Decimal("20.00")
        assert cache.get(price_key("addon", "urgent")) == Decimal("15.00")
        assert cache.get(price_key("plan", "urgent")) is None
        assert len(cache) == 2

    def test_ttl_window(self):
        clock = FakeClock()
        cache = PriceCache(ttl_seconds=60, clock=clock)
        cache.refresh([])
        clock.advance(60)
        assert not cache.is_expired()
        clock.advance(0.5)
        assert cache.is_expired()

    def test_refresh_replaces_previous_entries(self):
        cache = PriceCache(ttl_seconds=60, clock=FakeClock())
        cache.refresh([_product("standard", "plan", "20.00")])
        cache.set(price_key("addon", "urgent"), Decimal("15.00"))
        cache.refresh([_product("featured", "plan", "50.00")])
        assert cache.get(price_key("plan", "standard")) is None
        assert cache.get(price_key("addon", "urgent")) is None
        assert cache.get(price_key("plan", "featured")) == Decimal("50.00")

    def test_invalidate(self):
        cache = PriceCache(ttl_seconds=60, clock=FakeClock())
        cache.refresh([_product("standard", "plan", "20.00")])
        cache.invalidate()
        assert cache.is_expired()
        assert len(cache) == 0
