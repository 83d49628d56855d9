import pytest

from fridge.models import Favorite, Recipe, RecipeStatus, Review, User


pytestmark = pytest.mark.asyncio


async def _admin_headers(create_admin, auth_header_factory):
    admin, password = await create_admin()
    return admin, await auth_header_factory(admin.email, password)


async def test_non_admin_is_refused(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.email, password)

    for path in ("/api/v1/admin/users", "/api/v1/admin/stats", "/api/v1/admin/recipes/pending"):
        resp = await client.get(path, headers=headers)
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "FORBIDDEN_ADMIN_ONLY"

    assert (await client.get("/api/v1/admin/stats")).status_code == 401


async def test_moderation_endpoints(client, create_admin, create_user, create_recipe, auth_header_factory):
    _, headers = await _admin_headers(create_admin, auth_header_factory)
    owner, _ = await create_user()
    recipe = await create_recipe(owner)

    pending = await client.get("/api/v1/admin/recipes/pending", headers=headers)
    assert [r["id"] for r in pending.json()["data"]] == [str(recipe.id)]

    no_reason = await client.put(f"/api/v1/admin/recipes/{recipe.id}/reject", headers=headers, json={"reason": "  "})
    assert no_reason.status_code == 400
    assert no_reason.json()["error"]["code"] == "REJECTION_REASON_REQUIRED"

    rejected = await client.put(
        f"/api/v1/admin/recipes/{recipe.id}/reject", headers=headers, json={"reason": "Needs more detail"}
    )
    assert rejected.status_code == 200
    assert rejected.json()["data"]["status"] == "rejected"
    assert rejected.json()["data"]["rejectionReason"] == "Needs more detail"

    approved = await client.put(f"/api/v1/admin/recipes/{recipe.id}/approve", headers=headers)
    assert approved.status_code == 200
    assert approved.json()["data"]["status"] == "approved"
    assert approved.json()["data"]["rejectionReason"] is None

    twice = await client.put(f"/api/v1/admin/recipes/{recipe.id}/approve", headers=headers)
    assert twice.status_code == 409
    assert twice.json()["error"]["code"] == "ALREADY_APPROVED"

    missing = await client.put("/api/v1/admin/recipes/not-an-id/approve", headers=headers)
    assert missing.status_code == 404


async def test_recipe_listing_filters(client, create_admin, create_user, create_recipe, auth_header_factory):
    _, headers = await _admin_headers(create_admin, auth_header_factory)
    owner, _ = await create_user()
    await create_recipe(owner, status=RecipeStatus.APPROVED, source="ai")
    await create_recipe(owner, status=RecipeStatus.APPROVED)
    await create_recipe(owner, status=RecipeStatus.REJECTED)

    everything = await client.get("/api/v1/admin/recipes", headers=headers)
    assert everything.json()["data"]["total"] == 3

    approved = await client.get("/api/v1/admin/recipes", headers=headers, params={"status": "approved"})
    assert approved.json()["data"]["total"] == 2

    ai = await client.get(
        "/api/v1/admin/recipes", headers=headers, params={"status": "approved", "source": "ai"}
    )
    assert ai.json()["data"]["total"] == 1

    bad = await client.get("/api/v1/admin/recipes", headers=headers, params={"status": "draft"})
    assert bad.status_code == 400


async def test_stats(client, create_admin, create_user, create_recipe, auth_header_factory):
    _, headers = await _admin_headers(create_admin, auth_header_factory)
    owner, _ = await create_user()
    fan, _ = await create_user()
    r1 = await create_recipe(owner, status=RecipeStatus.APPROVED, source="ai")
    await create_recipe(owner, status=RecipeStatus.PENDING)
    await create_recipe(owner, status=RecipeStatus.REJECTED)
    await Review.create(user=fan, recipe=r1, rating=5, comment="Fantastic breakfast")
    await Favorite.create(user=fan, recipe=r1)

    resp = await client.get("/api/v1/admin/stats", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "totalUsers": 3,
        "totalRecipes": 3,
        "approvedRecipes": 1,
        "pendingRecipes": 1,
        "rejectedRecipes": 1,
        "totalFavorites": 1,
        "totalReviews": 1,
        "aiRecipes": 1,
        "humanRecipes": 2,
    }


async def test_list_and_deactivate_users(client, create_admin, create_user, auth_header_factory):
    admin, headers = await _admin_headers(create_admin, auth_header_factory)
    user, password = await create_user()

    listing = await client.get("/api/v1/admin/users", headers=headers, params={"q": user.pseudo})
    items = listing.json()["data"]["items"]
    assert [u["id"] for u in items] == [str(user.id)]

    off = await client.patch(f"/api/v1/admin/users/{user.id}", headers=headers, json={"isActive": False})
    assert off.status_code == 200
    assert off.json()["data"]["isActive"] is False

    login = await client.post("/api/v1/auth/login", json={"email": user.email, "password": password})
    assert login.status_code == 403

    protected = await client.patch(f"/api/v1/admin/users/{admin.id}", headers=headers, json={"isActive": False})
    assert protected.status_code == 403
    assert protected.json()["error"]["code"] == "ADMIN_PROTECTED"


async def test_delete_user_cascades_and_recomputes(client, create_admin, create_user, create_recipe, auth_header_factory):
    _, headers = await _admin_headers(create_admin, auth_header_factory)
    doomed, _ = await create_user()
    other, _ = await create_user()
    third, _ = await create_user()

    own = await create_recipe(doomed, status=RecipeStatus.APPROVED)
    theirs = await create_recipe(other, status=RecipeStatus.APPROVED)
    await Review.create(user=other, recipe=own, rating=4, comment="Nice one indeed")
    await Favorite.create(user=other, recipe=own)
    await Review.create(user=doomed, recipe=theirs, rating=1, comment="Did not like it")
    await Review.create(user=third, recipe=theirs, rating=5, comment="Best dish ever")
    await Favorite.create(user=doomed, recipe=theirs)
    await Recipe.filter(id=theirs.id).update(average_rating=3.0, total_reviews=2)

    resp = await client.delete(f"/api/v1/admin/users/{doomed.id}", headers=headers)
    assert resp.status_code == 200

    assert await User.filter(id=doomed.id).count() == 0
    assert await Recipe.filter(id=own.id).count() == 0
    assert await Review.filter(recipe_id=own.id).count() == 0
    assert await Favorite.filter(recipe_id=own.id).count() == 0
    assert await Review.filter(user_id=doomed.id).count() == 0
    assert await Favorite.filter(user_id=doomed.id).count() == 0

    survivor = await Recipe.get(id=theirs.id)
    assert (survivor.average_rating, survivor.total_reviews) == (5.0, 1)


async def test_admin_cannot_be_deleted(client, create_admin, auth_header_factory):
    admin, headers = await _admin_headers(create_admin, auth_header_factory)
    other_admin, _ = await create_admin()

    for target in (admin, other_admin):
        resp = await client.delete(f"/api/v1/admin/users/{target.id}", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "ADMIN_PROTECTED"
    assert await User.filter(role="admin").count() == 2


async def test_admin_deletes_any_recipe(client, create_admin, create_user, create_recipe, auth_header_factory):
    _, headers = await _admin_headers(create_admin, auth_header_factory)
    owner, _ = await create_user()
    recipe = await create_recipe(owner, status=RecipeStatus.APPROVED)

    resp = await client.delete(f"/api/v1/admin/recipes/{recipe.id}", headers=headers)
    assert resp.status_code == 200
    assert await Recipe.filter(id=recipe.id).count() == 0
