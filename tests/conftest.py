"""
Test configuration and fixtures
"""
import asyncio
import os
from datetime import datetime, timedelta, timezone

# Set test environment variables BEFORE importing app modules
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32chars"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # Lower rounds for faster tests
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_NAME"] = "storefront_test"

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storefront.config.database import get_database
from storefront.main import app
from storefront.models import (
    ADMIN_ROLE,
    USER_ROLE,
    CategoryDocument,
    OrderDocument,
    ProductDocument,
    ProductPhoto,
    UserDocument,
)
from storefront.utils.security import create_access_token, hash_password
from storefront.utils.validators import slugify

TEST_PASSWORD = "testPassword"


def run(coro):
    """Drive a database coroutine from synchronous test code"""
    return asyncio.run(coro)


@pytest.fixture
def db():
    """Fresh in-memory database for each test"""
    mongo_client = AsyncMongoMockClient()
    return mongo_client["storefront_test"]


@pytest.fixture
def client(db):
    """Create a test client with database dependency override"""

    async def override_get_database():
        return db

    app.dependency_overrides[get_database] = override_get_database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user and return the stored document"""

    def _make_user(email="testuser@mail.com", role=USER_ROLE, **overrides):
        fields = {
            "name": "test user",
            "email": email,
            "password": hash_password(TEST_PASSWORD),
            "phone": "81234567",
            "address": "123 Fake Street",
            "answer": "Basketball",
            "role": role,
        }
        fields.update(overrides)
        result = run(db.users.insert_one(UserDocument(**fields).model_dump()))
        return run(db.users.find_one({"_id": result.inserted_id}))

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="testadmin@mail.com", role=ADMIN_ROLE, name="test admin")


@pytest.fixture
def user_headers(user):
    return {"Authorization": create_access_token(str(user["_id"]))}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": create_access_token(str(admin["_id"]))}


@pytest.fixture
def make_category(db):
    """Insert a category and return the stored document"""

    def _make_category(name="test category"):
        doc = CategoryDocument(name=name, slug=slugify(name)).model_dump()
        result = run(db.categories.insert_one(doc))
        return run(db.categories.find_one({"_id": result.inserted_id}))

    return _make_category


@pytest.fixture
def category(make_category):
    return make_category()


@pytest.fixture
def make_product(db):
    """Insert a product; later calls get later creation times"""
    counter = {"n": 0}

    def _make_product(category, name="Test Product 101", price=1.0, quantity=10, photo=None, **overrides):
        counter["n"] += 1
        created = datetime(2025, 2, 2, tzinfo=timezone.utc) + timedelta(minutes=counter["n"])
        fields = {
            "name": name,
            "slug": slugify(name),
            "description": f"{name} Description",
            "price": price,
            "category": category["_id"],
            "quantity": quantity,
            "shipping": True,
            "photo": photo,
            "created_at": created,
            "updated_at": created,
        }
        fields.update(overrides)
        doc = ProductDocument(**fields).model_dump(exclude_none=True)
        result = run(db.products.insert_one(doc))
        return run(db.products.find_one({"_id": result.inserted_id}))

    return _make_product


@pytest.fixture
def make_order(db):
    """Insert an order for a buyer"""

    def _make_order(buyer, products, status="Not Processed", created_at=None):
        fields = {
            "buyer": buyer["_id"],
            "products": [p["_id"] for p in products],
            "payment": {"success": True},
            "status": status,
        }
        if created_at is not None:
            fields["created_at"] = created_at
        result = run(db.orders.insert_one(OrderDocument(**fields).model_dump()))
        return run(db.orders.find_one({"_id": result.inserted_id}))

    return _make_order


@pytest.fixture
def sample_photo():
    return ProductPhoto(data=b"\x89PNG\r\n\x1a\nfake-image", content_type="image/png")


@pytest.fixture
def missing_id():
    return str(ObjectId())
