class TestPricingEndpoint:
    def test_catalog(self, client):
        r = client.get("/api/pricing")
        assert r.status_code == 200
        data = r.json()
        assert set(data) == {"plans", "addons"}
        assert data["plans"]["featured"]["price"] == 50.0
        assert data["plans"]["basic"]["duration"] == "Basic job listing for 15 days"
        assert "15-day listing" in data["plans"]["basic"]["features"]
        assert data["addons"]["top-of-search"] == {
            "name": "Top of Search Results",
            "price": 25.0,
            "description": "Priority placement in search results for 14 days",
            "active": True,
        }

    def test_quote(self, client):
        r = client.post("/api/pricing/quote", json={"plan": "standard", "addons": ["highlighted", "urgent"]})
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 45.0
        assert data["plan_price"] == 20.0
        assert data["addon_prices"] == {"highlighted": 10.0, "urgent": 15.0}
        assert data["currency"] == "USD"

    def test_quote_unknown_codes_are_free(self, client):
        r = client.post("/api/pricing/quote", json={"plan": "nonexistent-plan", "addons": ["nonexistent-addon"]})
        assert r.json()["total"] == 0

    def test_quote_requires_plan(self, client):
        r = client.post("/api/pricing/quote", json={"addons": []})
        assert r.status_code == 400
