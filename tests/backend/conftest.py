import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from fridge.core import db as db_module
from fridge.core.access import Claim
from fridge.core.security import hash_password
from fridge.main import app
from fridge.models import Recipe, RecipeStatus, User


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh database for tests that call services directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        tag = uuid.uuid4().hex[:6]
        user = await User.create(
            name="Ada",
            lastname="Admin",
            pseudo=f"a{tag}",
            email=f"admin{tag}@example.com",
            password_hash=hash_password(password),
            role="admin",
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = "UserPass!23", is_active: bool = True) -> tuple[User, str]:
        tag = uuid.uuid4().hex[:6]
        user = await User.create(
            name="Uma",
            lastname="User",
            pseudo=f"u{tag}",
            email=f"{tag}@example.com",
            password_hash=hash_password(password),
            role="user",
            is_active=is_active,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def create_recipe(db):
    """
    Factory fixture to insert a recipe for an owner in a given moderation state.
    """

    async def _create_recipe(
        owner: User,
        status: RecipeStatus = RecipeStatus.PENDING,
        title: str = "Tomato Soup",
        category: str = "Lunch",
        **extra,
    ) -> Recipe:
        return await Recipe.create(
            title=title,
            description=extra.pop("description", "A warm and simple soup"),
            ingredients=[{"name": "tomato", "quantity": 4, "unit": "pcs"}],
            instructions=[{"step": 1, "description": "Simmer the tomatoes"}],
            cooking_time=20,
            preparation_time=10,
            servings=2,
            category=category,
            requested_by=owner,
            status=status,
            **extra,
        )

    return _create_recipe


def claim_of(user: User) -> Claim:
    return Claim(id=str(user.id), role=user.role)


@pytest.fixture
def claim():
    """Build the acting Claim of a stored user."""
    return claim_of


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        # Keep anonymous requests anonymous: identity travels in the header only
        client.cookies.clear()
        token = resp.json()["data"]["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers


RECIPE_PAYLOAD = {
    "title": "Veggie Omelette",
    "description": "Fluffy eggs with peppers",
    "ingredients": [{"name": "egg", "quantity": 3, "unit": "pcs"}],
    "instructions": [
        {"step": 2, "description": "Cook in a hot pan"},
        {"step": 1, "description": "Whisk the eggs"},
    ],
    "cookingTime": 10,
    "preparationTime": 5,
    "servings": 1,
    "category": "Breakfast",
    "tags": ["quick", " quick ", "eggs"],
}


@pytest.fixture
def recipe_payload():
    return {**RECIPE_PAYLOAD}
