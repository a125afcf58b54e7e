"""Integration tests for the product listing endpoints."""


def _ids(response):
    return [p["id"] for p in response.json()["products"]]


class TestListProducts:
    def test_lists_in_stock_products(self, client, products):
        response = client.get("/products")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 3
        assert "shrikhand" not in _ids(response)
        assert body["timestamp"]

    def test_ordered_by_category_then_name(self, client, products):
        assert _ids(client.get("/products")) == ["buffalo-ghee", "cow-milk", "dahi"]

    def test_filter_by_category(self, client, products):
        assert _ids(client.get("/products", params={"category": "milk"})) == ["cow-milk"]

    def test_category_all_is_unfiltered(self, client, products):
        assert len(_ids(client.get("/products", params={"category": "all"}))) == 3

    def test_search_matches_hindi_name(self, client, products):
        assert _ids(client.get("/products", params={"q": "घी"})) == ["buffalo-ghee"]

    def test_sort_by_price(self, client, products):
        assert _ids(client.get("/products", params={"sort": "price-asc"})) == ["dahi", "cow-milk", "buffalo-ghee"]

    def test_featured_only(self, client, products):
        response = client.get("/products", params={"featured": "true"})
        assert _ids(response) == ["buffalo-ghee"]
        assert response.json()["products"][0]["price"] == 800

    def test_empty_catalogue(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        assert response.json()["products"] == []


class TestCategories:
    def test_counts_in_stock_products(self, client, products):
        response = client.get("/products/categories")

        assert response.status_code == 200
        assert response.json()["categories"] == [
            {"id": "ghee", "count": 1},
            {"id": "milk", "count": 1},
            {"id": "regular", "count": 1},
        ]


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "domain": "ordering"}
