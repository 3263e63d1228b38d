from datetime import datetime, timedelta, timezone

import pytest

from app.models.product import Product
from app.repositories.products import ProductRepository
from app.services.expiry_service import ExpiryCalculator, plan_duration_days

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _plan(code, description=None):
    return Product(code=code, type="plan", description=description, price="0.00", active=True)


class TestPlanDurationDays:
    @pytest.mark.parametrize("code, days", [
        ("basic", 15),
        ("standard", 30),
        ("featured", 30),
        ("unlimited", 90),
    ])
    def test_known_plan_codes(self, code, days):
        assert plan_duration_days(_plan(code, "Listing for 3 days")) == days

    @pytest.mark.parametrize("description, days", [
        ("Quick listing for 7 days", 7),
        ("A 45-day premium listing", 45),
        ("Runs 60 DAY cycles", 60),
    ])
    def test_duration_parsed_from_description(self, description, days):
        assert plan_duration_days(_plan("custom", description)) == days

    def test_description_without_duration_falls_back(self):
        assert plan_duration_days(_plan("custom", "Our best plan")) == 15

    def test_missing_product_falls_back(self):
        assert plan_duration_days(None) == 15


class TestExpiryCalculator:
    @pytest.fixture
    def calculator(self, seeded_db):
        return ExpiryCalculator(ProductRepository(seeded_db))

    @pytest.mark.parametrize("plan, days", [
        ("basic", 15),
        ("standard", 30),
        ("featured", 30),
        ("unlimited", 90),
    ])
    def test_plan_durations(self, calculator, plan, days):
        result = calculator.compute(plan, [], NOW)
        assert result.expires_at == NOW + timedelta(days=days)
        assert result.duration_days == days
        assert not result.extended

    def test_extend_post_adds_seven_days(self, calculator):
        result = calculator.compute("standard", ["highlighted", "extend-post"], NOW)
        assert result.expires_at == NOW + timedelta(days=37)
        assert result.extended

    def test_unknown_plan_gets_default_duration(self, calculator):
        assert calculator.compute("nonexistent-plan", None, NOW).expires_at == NOW + timedelta(days=15)

    def test_inactive_plan_gets_default_duration(self, calculator, seeded_db):
        unlimited = seeded_db.query(Product).filter(Product.code == "unlimited").one()
        unlimited.active = False
        seeded_db.commit()
        assert calculator.compute("unlimited", [], NOW).duration_days == 15
