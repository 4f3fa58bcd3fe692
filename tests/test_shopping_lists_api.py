"""Tests for the shopping-list API routes."""

import pytest


def auth(user_id: str) -> dict[str, str]:
    """Headers identifying the calling user."""
    return {"X-User-Id": user_id}


class TestAuthentication:
    """Requests without a known user are rejected."""

    @pytest.mark.asyncio
    async def test_missing_header(self, api_client):
        response = await api_client.get("/api/v1/shopping-lists/")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_user(self, api_client):
        response = await api_client.get("/api/v1/shopping-lists/", headers=auth("mallory"))
        assert response.status_code == 401


class TestAddRecipeEndpoint:
    """Tests for POST /api/v1/shopping-lists/add-recipe."""

    @pytest.mark.asyncio
    async def test_add_recipe(self, api_client):
        response = await api_client.post(
            "/api/v1/shopping-lists/add-recipe",
            json={"recipeId": "pasta", "servings": 4},
            headers=auth("alice"),
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": 'Processed 5 ingredients from "Pasta al Pomodoro"',
            "addedCount": 5,
            "combinedCount": 0,
            "recipeName": "Pasta al Pomodoro",
        }

        lists = (await api_client.get("/api/v1/shopping-lists/", headers=auth("alice"))).json()
        assert len(lists) == 1
        items = {item["name"]: item for item in lists[0]["items"]}
        assert items["Spaghetti"]["amount"] == "400"
        assert items["Spaghetti"]["addedBy"] == "alice"
        assert lists[0]["recipeLog"][0]["recipeId"] == "pasta"

    @pytest.mark.asyncio
    async def test_add_twice_combines(self, api_client):
        body = {"recipeId": "pasta"}
        await api_client.post("/api/v1/shopping-lists/add-recipe", json=body, headers=auth("alice"))
        response = await api_client.post(
            "/api/v1/shopping-lists/add-recipe", json=body, headers=auth("alice")
        )

        data = response.json()
        assert data["addedCount"] == 0
        assert data["combinedCount"] == 5

    @pytest.mark.asyncio
    async def test_recipe_not_found(self, api_client):
        response = await api_client.post(
            "/api/v1/shopping-lists/add-recipe",
            json={"recipeId": "omelette"},
            headers=auth("alice"),
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_recipe_id_required(self, api_client):
        response = await api_client.post(
            "/api/v1/shopping-lists/add-recipe", json={}, headers=auth("alice")
        )
        assert response.status_code == 422


class TestListEndpoints:
    """Tests for list CRUD, reorder and invitations."""

    async def _create(self, api_client, user_id: str, name: str) -> dict:
        response = await api_client.post(
            "/api/v1/shopping-lists/", json={"name": name}, headers=auth(user_id)
        )
        assert response.status_code == 201
        return response.json()

    @pytest.mark.asyncio
    async def test_create_and_get(self, api_client):
        created = await self._create(api_client, "alice", "  Weekly shop ")
        assert created["name"] == "Weekly shop"
        assert created["createdBy"] == "alice"
        assert created["items"] == []

        response = await api_client.get(
            f"/api/v1/shopping-lists/{created['id']}", headers=auth("alice")
        )
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_create_blank_name(self, api_client):
        response = await api_client.post(
            "/api/v1/shopping-lists/", json={"name": " "}, headers=auth("alice")
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_items(self, api_client):
        created = await self._create(api_client, "alice", "Weekly shop")
        response = await api_client.put(
            f"/api/v1/shopping-lists/{created['id']}",
            json={"items": [{"name": "Milk", "amount": "1", "unit": "l", "completed": True}]},
            headers=auth("alice"),
        )

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["completed"] is True
        assert item["unit"] == "l"

    @pytest.mark.asyncio
    async def test_get_other_users_list(self, api_client):
        created = await self._create(api_client, "alice", "Private")
        response = await api_client.get(
            f"/api/v1/shopping-lists/{created['id']}", headers=auth("bob")
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, api_client):
        created = await self._create(api_client, "alice", "Temp")
        url = f"/api/v1/shopping-lists/{created['id']}"

        response = await api_client.delete(url, headers=auth("alice"))
        assert response.status_code == 200
        assert response.json() == {"message": "Shopping list deleted successfully"}
        assert (await api_client.get(url, headers=auth("alice"))).status_code == 404

    @pytest.mark.asyncio
    async def test_add_recipe_to_list_requires_membership(self, api_client):
        created = await self._create(api_client, "alice", "Private")
        url = f"/api/v1/shopping-lists/{created['id']}/add-recipe"

        response = await api_client.post(url, json={"recipeId": "omelette"}, headers=auth("bob"))
        assert response.status_code == 403

        invite = await api_client.post(
            f"/api/v1/shopping-lists/{created['id']}/invite",
            json={"email": "bob@example.com"},
            headers=auth("alice"),
        )
        assert invite.status_code == 200

        response = await api_client.post(url, json={"recipeId": "omelette"}, headers=auth("bob"))
        assert response.status_code == 200
        assert response.json()["addedCount"] == 3

    @pytest.mark.asyncio
    async def test_reorder(self, api_client):
        created = await self._create(api_client, "alice", "Weekly shop")
        response = await api_client.put(
            f"/api/v1/shopping-lists/{created['id']}/reorder",
            json={"items": [{"name": "Bread"}, {"name": "Milk", "addedBy": "alice"}]},
            headers=auth("alice"),
        )

        assert response.status_code == 200
        items = response.json()["items"]
        assert [(i["name"], i["order"]) for i in items] == [("Bread", 0), ("Milk", 1)]
        assert items[1]["addedBy"] == "alice"

    @pytest.mark.asyncio
    async def test_invite_errors(self, api_client):
        created = await self._create(api_client, "alice", "Shared")
        url = f"/api/v1/shopping-lists/{created['id']}/invite"

        owner = await api_client.post(url, json={"email": "alice@example.com"}, headers=auth("alice"))
        assert owner.status_code == 400

        unknown = await api_client.post(url, json={"email": "x@example.com"}, headers=auth("alice"))
        assert unknown.status_code == 404

        not_owner = await api_client.post(url, json={"email": "bob@example.com"}, headers=auth("bob"))
        assert not_owner.status_code == 403

    @pytest.mark.asyncio
    async def test_remove_invite(self, api_client):
        created = await self._create(api_client, "alice", "Shared")
        url = f"/api/v1/shopping-lists/{created['id']}/invite"
        await api_client.post(url, json={"email": "bob@example.com"}, headers=auth("alice"))

        response = await api_client.request(
            "DELETE", url, json={"userId": "bob"}, headers=auth("alice")
        )
        assert response.status_code == 200

        lists = (await api_client.get("/api/v1/shopping-lists/", headers=auth("alice"))).json()
        assert lists[0]["invitedUsers"] == []
