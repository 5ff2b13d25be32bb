import pytest


@pytest.mark.integration
class TestProvisionEndpoint:

    def test_provision_is_idempotent(self, client, auth_headers, supabase):
        first = client.post("/api/v1/families/provision", headers=auth_headers)
        second = client.post("/api/v1/families/provision", headers=auth_headers)

        assert first.status_code == 200
        assert first.json()["created"] is True
        assert second.json() == {"family_id": first.json()["family_id"], "created": False}
        assert len(supabase.rows("families")) == 1
        assert len(supabase.rows("users", email="pat@example.com")) == 1

    def test_settings_screen_provisions_on_first_load(self, client, auth_headers, supabase):
        response = client.get("/api/v1/families/me", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "My Family"
        assert [(m["name"], m["role"]) for m in body["members"]] == [("Pat Parent", "parent")]
        assert len(supabase.rows("families")) == 1


@pytest.mark.integration
class TestFamilySettings:

    def test_get_family_with_members(self, client, onboarded_headers):
        response = client.get("/api/v1/families/me", headers=onboarded_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "The Smiths"
        assert [(m["name"], m["role"]) for m in body["members"]] == [("Pat Parent", "parent"), ("Sam", "child")]

    def test_rename(self, client, onboarded_headers):
        response = client.put("/api/v1/families/me", json={"name": "Smith Clan"}, headers=onboarded_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Smith Clan"

    def test_add_member_with_email(self, client, onboarded_headers):
        response = client.post(
            "/api/v1/families/me/members",
            json={"name": "Alex", "role": "parent", "email": "alex@example.com"},
            headers=onboarded_headers,
        )

        assert response.status_code == 201
        alex = [m for m in response.json() if m["name"] == "Alex"][0]
        assert alex["email"] == "alex@example.com"
        assert alex["onboarding_completed"] is True

    def test_add_member_invalid_role(self, client, onboarded_headers):
        response = client.post(
            "/api/v1/families/me/members", json={"name": "Rex", "role": "pet"}, headers=onboarded_headers
        )

        assert response.status_code == 422

    def test_update_member_role(self, client, onboarded_headers, supabase):
        sam = supabase.rows("users", name="Sam")[0]

        response = client.put(
            f"/api/v1/families/me/members/{sam['id']}", json={"role": "parent"}, headers=onboarded_headers
        )

        assert response.status_code == 200
        assert response.json()["role"] == "parent"
        assert response.json()["name"] == "Sam"

    def test_remove_member_unassigns_chores(self, client, onboarded_headers, supabase):
        sam = supabase.rows("users", name="Sam")[0]
        client.post("/api/v1/chores", json={"title": "Dishes", "assigned_to": sam["id"]}, headers=onboarded_headers)

        response = client.delete(f"/api/v1/families/me/members/{sam['id']}", headers=onboarded_headers)

        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["Pat Parent"]
        assert supabase.rows("chores")[0]["assigned_to"] is None

    def test_cannot_remove_self(self, client, onboarded_headers, supabase):
        me = supabase.rows("users", email="pat@example.com")[0]

        response = client.delete(f"/api/v1/families/me/members/{me['id']}", headers=onboarded_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "You cannot remove yourself from the family"

    def test_cannot_touch_other_family(self, client, onboarded_headers, make_user, supabase):
        lee_headers = make_user("lee@example.com", "Lee")
        client.post("/api/v1/onboarding/family", json={"name": "The Lees"}, headers=lee_headers)
        lee = supabase.rows("users", email="lee@example.com")[0]

        response = client.delete(f"/api/v1/families/me/members/{lee['id']}", headers=onboarded_headers)

        assert response.status_code == 404
        assert supabase.rows("users", email="lee@example.com")
