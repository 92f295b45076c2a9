"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fridgepro.database import Base, get_db
from fridgepro.main import app
from fridgepro.models import Category, Ingredient, Recipe, RecipeIngredient, User


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/fridge_pro", "/fridge_pro_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str) -> AuthHeaders:
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": email,
            "password": "testpass123",
            "first_name": "Test",
            "last_name": "User",
        },
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second user, for ownership checks."""
    return register(client, "other@example.com")


@pytest.fixture
def ingredients(db):
    """A small ingredient catalog keyed by name."""
    vegetables = Category(name="Vegetables", color="#22c55e", icon="🥬")
    db.add(vegetables)
    db.flush()

    names = ["Tomato", "Onion", "Chicken", "Rice", "Pasta", "Cheese", "Salmon"]
    catalog = {}
    for name in names:
        ingredient = Ingredient(
            name=name,
            category_id=vegetables.id if name in ("Tomato", "Onion") else None,
        )
        db.add(ingredient)
        catalog[name] = ingredient
    db.commit()
    return catalog


@pytest.fixture
def make_recipe(db):
    """Factory creating a recipe from ingredient objects, in call order."""

    def _make(title, *recipe_ingredients, source="seed", created_by_id=None, **fields):
        recipe = Recipe(
            title=title,
            instructions=fields.pop("instructions", ["Cook it"]),
            source=source,
            created_by_id=created_by_id,
            **fields,
        )
        for ingredient in recipe_ingredients:
            recipe.ingredients.append(
                RecipeIngredient(ingredient_id=ingredient.id, quantity=1, unit="piece")
            )
        db.add(recipe)
        db.commit()
        return recipe

    return _make


@pytest.fixture
def stock_fridge(client):
    """Put ingredients in a user's fridge through the API."""

    def _stock(headers, *stocked):
        for ingredient in stocked:
            response = client.post(
                "/api/v1/fridge",
                headers=headers,
                json={"ingredient_id": ingredient.id, "quantity": 1, "unit": "piece"},
            )
            assert response.status_code in (200, 201)

    return _stock


@pytest.fixture
def user(db, auth_headers):
    """The User row behind auth_headers."""
    return db.query(User).filter(User.id == auth_headers.user_id).first()
