import pytest


@pytest.mark.integration
class TestDashboard:

    def test_stats(self, client, onboarded_headers):
        chores = client.post("/api/v1/chores", json={"title": "Dishes"}, headers=onboarded_headers).json()
        client.post("/api/v1/chores", json={"title": "Laundry"}, headers=onboarded_headers)
        dishes = [c for c in chores["items"] if c["title"] == "Dishes"][0]
        client.post(f"/api/v1/chores/{dishes['id']}/toggle", headers=onboarded_headers)
        milk = client.post("/api/v1/shopping", json={"name": "Milk"}, headers=onboarded_headers).json()["items"][0]
        client.post("/api/v1/shopping", json={"name": "Eggs"}, headers=onboarded_headers)
        client.post(f"/api/v1/shopping/{milk['id']}/toggle", headers=onboarded_headers)
        client.put("/api/v1/meals/slots/1/dinner", json={"meal_name": "Tacos"}, headers=onboarded_headers)

        response = client.get("/api/v1/dashboard", headers=onboarded_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["family_name"] == "The Smiths"
        assert body["user"] == {"email": "pat@example.com", "name": "Pat Parent"}
        assert body["stats"] == {
            "total_chores": 2,
            "open_chores": 1,
            "completed_today": 1,
            "shopping_items": 1,
            "meals_planned": 1,
        }

    def test_first_load_provisions_family(self, client, auth_headers, supabase):
        first = client.get("/api/v1/dashboard", headers=auth_headers)
        second = client.get("/api/v1/dashboard", headers=auth_headers)

        assert first.status_code == 200
        assert first.json()["family_name"] == "My Family"
        assert first.json()["stats"]["total_chores"] == 0
        assert second.json()["family_id"] == first.json()["family_id"]
        assert len(supabase.rows("families")) == 1
        assert len(supabase.rows("users")) == 1


@pytest.mark.integration
class TestNavigation:

    def test_anonymous(self, client):
        response = client.get("/api/v1/navigation/resolve", params={"path": "/dashboard"})

        assert response.status_code == 200
        assert response.json() == {"path": "/dashboard", "allowed": False, "redirect": "/login"}

    def test_invalid_token_treated_as_anonymous(self, client):
        response = client.get(
            "/api/v1/navigation/resolve",
            params={"path": "/chores"},
            headers={"Authorization": "Bearer garbage"},
        )

        assert response.json()["redirect"] == "/login"

    def test_mid_onboarding(self, client, family_headers):
        dashboard = client.get("/api/v1/navigation/resolve", params={"path": "/dashboard"}, headers=family_headers)
        members = client.get(
            "/api/v1/navigation/resolve", params={"path": "/onboarding/members"}, headers=family_headers
        )

        assert dashboard.json()["redirect"] == "/onboarding/family"
        assert members.json()["allowed"] is True

    def test_onboarded(self, client, onboarded_headers):
        login = client.get("/api/v1/navigation/resolve", params={"path": "/login"}, headers=onboarded_headers)
        family = client.get(
            "/api/v1/navigation/resolve", params={"path": "/onboarding/family"}, headers=onboarded_headers
        )
        meals = client.get("/api/v1/navigation/resolve", params={"path": "/meals"}, headers=onboarded_headers)

        assert login.json()["redirect"] == "/dashboard"
        assert family.json()["redirect"] == "/dashboard"
        assert meals.json() == {"path": "/meals", "allowed": True, "redirect": None}

    def test_unknown_page(self, client):
        response = client.get("/api/v1/navigation/resolve", params={"path": "/admin"})

        assert response.status_code == 404


@pytest.mark.integration
class TestHealth:

    def test_health_and_ready(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/ready").json() == {"status": "ready"}

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
