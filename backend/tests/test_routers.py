"""
Tests for the HTTP API.
"""

import pytest
from sqlalchemy.exc import OperationalError


USER_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def flour_id(client, user_headers):
    response = client.post(
        "/api/ingredients",
        json={
            "name": "Flour",
            "supplier": "Molino Sur",
            "prices": [
                {"price": "1.50", "effective_at": "2024-01-01T00:00:00Z"},
                {"price": "1.80", "effective_at": "2024-06-01T00:00:00Z"},
            ],
        },
        headers=user_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()["id"]


@pytest.fixture
def cake(client, user_headers, flour_id):
    response = client.post(
        "/api/recipes",
        json={"name": "Cake", "lines": [{"ingredient_id": flour_id, "quantity": "0.2"}]},
        headers=user_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


class TestHealthEndpoints:

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "costing-api"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_oversized_request_id_is_replaced(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "x" * 500})

        echoed = response.headers["X-Request-ID"]
        assert echoed != "x" * 500
        assert len(echoed) == 36

    def test_detailed_health_reports_database(self, client):
        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"] == {"status": "healthy"}
        assert "redis" not in data["dependencies"]

    def test_detailed_health_degraded_when_database_fails(self, client, monkeypatch):
        def broken_session():
            raise OperationalError("SELECT 1", {}, Exception("unable to open database"))

        monkeypatch.setattr("costing_api.main.SessionLocal", broken_session)

        response = client.get("/api/health/detailed")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["database"]["status"] == "unhealthy"


class TestIngredientEndpoints:

    def test_create(self, client, flour_id):
        response = client.get(f"/api/ingredients/{flour_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Flour"
        assert data["latest_price"] == "1.80"
        assert data["version"] == 1
        assert data["created_by"] == USER_ID
        assert len(data["price_entries"]) == 2

    def test_system_user_when_no_header(self, client):
        response = client.post("/api/ingredients", json={"name": "Salt", "supplier": "Salinas"})

        assert response.status_code == 201
        assert response.json()["created_by"] == "00000000-0000-0000-0000-000000000000"

    def test_blank_name_is_400(self, client):
        response = client.post("/api/ingredients", json={"name": " ", "supplier": "Salinas"})

        assert response.status_code == 400
        assert "name" in response.json()["detail"]

    def test_duplicate_name_is_409(self, client, flour_id):
        response = client.post("/api/ingredients", json={"name": "Flour", "supplier": "Otro"})

        assert response.status_code == 409

    def test_unknown_ingredient_is_404(self, client):
        assert client.get("/api/ingredients/missing").status_code == 404

    def test_add_price(self, client, user_headers, flour_id):
        response = client.post(
            f"/api/ingredients/{flour_id}/prices",
            json={"price": "2.00", "effective_at": "2024-07-01T00:00:00Z"},
            headers=user_headers,
        )

        assert response.status_code == 201
        assert response.json()["price"] == "2.00"
        latest = client.get(f"/api/ingredients/{flour_id}/latest-price").json()
        assert latest == {"ingredient_id": flour_id, "price": "2.00"}

    def test_negative_price_is_400(self, client, flour_id):
        response = client.post(f"/api/ingredients/{flour_id}/prices", json={"price": "-1"})

        assert response.status_code == 400
        assert len(client.get(f"/api/ingredients/{flour_id}").json()["price_entries"]) == 2

    def test_latest_price_null_without_history(self, client):
        created = client.post("/api/ingredients", json={"name": "Salt", "supplier": "Salinas"})
        ingredient_id = created.json()["id"]

        response = client.get(f"/api/ingredients/{ingredient_id}/latest-price")

        assert response.status_code == 200
        assert response.json()["price"] is None

    def test_list_paginates(self, client, flour_id):
        client.post("/api/ingredients", json={"name": "Salt", "supplier": "Salinas"})

        response = client.get("/api/ingredients", params={"limit": 1})

        data = response.json()
        assert response.status_code == 200
        assert len(data["items"]) == 1
        assert data["pagination"]["total"] == 2
        assert data["pagination"]["has_next"] is True

    def test_delete_and_restore(self, client, flour_id):
        assert client.delete(f"/api/ingredients/{flour_id}").status_code == 204
        assert client.get(f"/api/ingredients/{flour_id}").status_code == 404
        assert client.delete(f"/api/ingredients/{flour_id}").status_code == 404

        response = client.post(f"/api/ingredients/{flour_id}/restore")
        assert response.status_code == 200
        assert response.json()["name"] == "Flour"


class TestRecipeEndpoints:

    def test_get_with_cost(self, client, cake):
        response = client.get(f"/api/recipes/{cake['id']}", params={"bypass_cache": True})

        assert response.status_code == 200
        cost = response.json()["cost"]
        assert cost["lines"][0]["ingredient_name"] == "Flour"
        assert cost["lines"][0]["line_cost"] == "0.36"
        assert cost["total"] == "0.36"

    def test_recipe_without_lines_is_400(self, client):
        response = client.post("/api/recipes", json={"name": "Empty", "lines": []})

        assert response.status_code == 400

    def test_unpriced_ingredient_is_404(self, client):
        salt = client.post("/api/ingredients", json={"name": "Salt", "supplier": "Salinas"})
        recipe = client.post(
            "/api/recipes",
            json={"name": "Brine", "lines": [{"ingredient_id": salt.json()["id"], "quantity": 1}]},
        ).json()

        response = client.get(f"/api/recipes/{recipe['id']}")

        assert response.status_code == 404

    def test_patch_with_stale_version_is_409(self, client, cake):
        first = client.patch(
            f"/api/recipes/{cake['id']}", json={"name": "Sponge", "expected_version": 1}
        )
        second = client.patch(
            f"/api/recipes/{cake['id']}", json={"name": "Lemon", "expected_version": 1}
        )

        assert first.status_code == 200
        assert first.json()["version"] == 2
        assert second.status_code == 409

    def test_patch_without_fields_is_400(self, client, cake):
        assert client.patch(f"/api/recipes/{cake['id']}", json={}).status_code == 400

    def test_patch_null_description_clears_it(self, client, cake):
        client.patch(f"/api/recipes/{cake['id']}", json={"description": "Light"})

        response = client.patch(f"/api/recipes/{cake['id']}", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] is None

    def test_add_and_remove_line(self, client, cake, flour_id):
        added = client.post(
            f"/api/recipes/{cake['id']}/lines",
            json={"ingredient_id": flour_id, "quantity": "0.1"},
        )
        assert added.status_code == 201
        lines = added.json()["lines"]
        assert len(lines) == 2

        cost = client.get(f"/api/recipes/{cake['id']}", params={"bypass_cache": True}).json()["cost"]
        assert cost["total"] == "0.54"

        removed = client.delete(f"/api/recipes/{cake['id']}/lines/{lines[1]['id']}")
        assert removed.status_code == 200
        assert len(removed.json()["lines"]) == 1

    def test_delete_and_restore(self, client, cake):
        assert client.delete(f"/api/recipes/{cake['id']}").status_code == 204
        assert client.get(f"/api/recipes/{cake['id']}").status_code == 404
        assert client.get("/api/recipes").json()["pagination"]["total"] == 0

        response = client.post(f"/api/recipes/{cake['id']}/restore")
        assert response.status_code == 200
        assert response.json()["version"] == 1
