import uuid

import pytest

from fridge.models import Recipe, RecipeStatus


pytestmark = pytest.mark.asyncio


async def test_create_recipe_starts_pending_and_hidden(client, create_user, auth_header_factory, recipe_payload):
    owner, password = await create_user()
    other, other_password = await create_user()
    headers = await auth_header_factory(owner.email, password)

    resp = await client.post("/api/v1/recipes", headers=headers, json={**recipe_payload, "status": "approved"})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "pending"
    assert data["source"] == "human"
    assert data["difficulty"] == "Medium"
    assert [s["step"] for s in data["instructions"]] == [1, 2]
    assert data["tags"] == ["quick", "eggs"]
    assert data["averageRating"] == 0 and data["totalReviews"] == 0
    recipe_id = data["id"]

    # Not in the public feed
    feed = await client.get("/api/v1/recipes")
    assert feed.json()["data"]["total"] == 0

    # Hidden from anonymous and from other users, visible to the owner
    anon = await client.get(f"/api/v1/recipes/{recipe_id}")
    assert anon.status_code == 404
    assert anon.json()["error"]["code"] == "RECIPE_NOT_FOUND"

    other_headers = await auth_header_factory(other.email, other_password)
    assert (await client.get(f"/api/v1/recipes/{recipe_id}", headers=other_headers)).status_code == 404

    mine = await client.get(f"/api/v1/recipes/{recipe_id}", headers=headers)
    assert mine.status_code == 200
    assert mine.json()["data"]["author"]["pseudo"] == owner.pseudo


async def test_create_requires_authentication(client, recipe_payload):
    resp = await client.post("/api/v1/recipes", json=recipe_payload)
    assert resp.status_code == 401


async def test_invalid_recipe_payload(client, create_user, auth_header_factory, recipe_payload):
    owner, password = await create_user()
    headers = await auth_header_factory(owner.email, password)
    resp = await client.post(
        "/api/v1/recipes", headers=headers, json={**recipe_payload, "title": "ab", "ingredients": []}
    )
    assert resp.status_code == 400
    assert len(resp.json()["errors"]) >= 2


async def test_public_listing_only_approved(client, create_user, create_recipe):
    owner, _ = await create_user()
    await create_recipe(owner, status=RecipeStatus.APPROVED, title="Approved Soup")
    await create_recipe(owner, status=RecipeStatus.PENDING, title="Pending Soup")
    await create_recipe(owner, status=RecipeStatus.REJECTED, title="Rejected Soup")

    feed = await client.get("/api/v1/recipes")
    assert feed.status_code == 200
    page = feed.json()["data"]
    assert page["total"] == 1
    assert [r["title"] for r in page["items"]] == ["Approved Soup"]
    assert page["items"][0]["author"]["pseudo"] == owner.pseudo


async def test_category_and_search(client, create_user, create_recipe):
    owner, _ = await create_user()
    await create_recipe(owner, status=RecipeStatus.APPROVED, title="Berry Smoothie", category="Beverage")
    await create_recipe(owner, status=RecipeStatus.APPROVED, title="Lentil Curry", category="Dinner")
    await create_recipe(owner, status=RecipeStatus.PENDING, title="Secret Curry", category="Dinner")

    by_cat = await client.get("/api/v1/recipes/category/Dinner")
    assert [r["title"] for r in by_cat.json()["data"]["items"]] == ["Lentil Curry"]

    bad_cat = await client.get("/api/v1/recipes/category/Brunch")
    assert bad_cat.status_code == 400

    found = await client.get("/api/v1/recipes/search", params={"q": "curry"})
    assert [r["title"] for r in found.json()["data"]["items"]] == ["Lentil Curry"]

    by_description = await client.get("/api/v1/recipes/search", params={"q": "WARM"})
    assert by_description.json()["data"]["total"] == 2


async def test_mine_lists_every_status(client, create_user, create_recipe, auth_header_factory):
    owner, password = await create_user()
    other, _ = await create_user()
    for status in RecipeStatus:
        await create_recipe(owner, status=status)
    await create_recipe(other, status=RecipeStatus.APPROVED)

    headers = await auth_header_factory(owner.email, password)
    resp = await client.get("/api/v1/recipes/mine", headers=headers)
    assert resp.status_code == 200
    assert sorted(r["status"] for r in resp.json()["data"]) == ["approved", "pending", "rejected"]


async def test_edit_approved_recipe_goes_back_to_moderation(client, create_user, create_recipe, auth_header_factory):
    owner, password = await create_user()
    recipe = await create_recipe(owner, status=RecipeStatus.APPROVED)
    headers = await auth_header_factory(owner.email, password)

    resp = await client.put(
        f"/api/v1/recipes/{recipe.id}", headers=headers, json={"title": "Tomato Soup v2", "servings": 4}
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "pending"
    assert data["title"] == "Tomato Soup v2"
    assert data["servings"] == 4

    assert (await client.get(f"/api/v1/recipes/{recipe.id}")).status_code == 404


async def test_only_owner_edits(client, create_user, create_admin, create_recipe, auth_header_factory):
    owner, _ = await create_user()
    other, other_password = await create_user()
    admin, admin_password = await create_admin()
    recipe = await create_recipe(owner, status=RecipeStatus.APPROVED)

    other_headers = await auth_header_factory(other.email, other_password)
    resp = await client.put(f"/api/v1/recipes/{recipe.id}", headers=other_headers, json={"title": "Mine now"})
    assert resp.status_code == 403

    admin_headers = await auth_header_factory(admin.email, admin_password)
    resp = await client.put(f"/api/v1/recipes/{recipe.id}", headers=admin_headers, json={"title": "Mine now"})
    assert resp.status_code == 403

    empty = await client.put(f"/api/v1/recipes/{recipe.id}", headers=other_headers, json={})
    assert empty.status_code == 400


async def test_delete_owner_or_admin(client, create_user, create_admin, create_recipe, auth_header_factory):
    owner, password = await create_user()
    other, other_password = await create_user()
    admin, admin_password = await create_admin()
    r1 = await create_recipe(owner)
    r2 = await create_recipe(owner)

    other_headers = await auth_header_factory(other.email, other_password)
    assert (await client.delete(f"/api/v1/recipes/{r1.id}", headers=other_headers)).status_code == 403

    owner_headers = await auth_header_factory(owner.email, password)
    assert (await client.delete(f"/api/v1/recipes/{r1.id}", headers=owner_headers)).status_code == 200

    admin_headers = await auth_header_factory(admin.email, admin_password)
    assert (await client.delete(f"/api/v1/recipes/{r2.id}", headers=admin_headers)).status_code == 200

    assert await Recipe.all().count() == 0
    missing = await client.delete(f"/api/v1/recipes/{uuid.uuid4()}", headers=admin_headers)
    assert missing.status_code == 404


async def test_save_generated_draft_as_ai_recipe(client, create_user, auth_header_factory, recipe_payload):
    owner, password = await create_user()
    headers = await auth_header_factory(owner.email, password)
    resp = await client.post("/api/v1/recipes", headers=headers, json={**recipe_payload, "source": "ai"})
    assert resp.status_code == 201
    assert resp.json()["data"]["source"] == "ai"
    assert resp.json()["data"]["status"] == "pending"


async def test_generate_without_key_is_bad_gateway(client, monkeypatch):
    from fridge.services.recipe_generator import recipe_generator

    monkeypatch.setattr(recipe_generator, "api_key", None)
    resp = await client.post("/api/v1/recipes/generate", json={"ingredients": ["egg", "cheese"]})
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "AI_UNAVAILABLE"

    empty = await client.post("/api/v1/recipes/generate", json={"ingredients": []})
    assert empty.status_code == 400
