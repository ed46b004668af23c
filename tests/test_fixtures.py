"""
Shared test fixtures and utilities for the MealMinder test suite.

Every test gets a fresh schema in the in-memory SQLite database; the API
client shares the test's session through a dependency override so rows a test
creates are visible to the routes and vice versa.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.dependencies import get_db
from domain.models import Base, SessionLocal, engine
from domain.models import Supplier, Product, Recipe
from main import app


# Realistic catalogue used across tests
REALISTIC_SUPPLIERS = {
    "green_grocer": {"name": "Green Grocer", "website": "https://greengrocer.example"},
    "farm_direct": {"name": "Farm Direct", "website": "https://farmdirect.example"},
    "city_market": {"name": "City Market", "website": "https://citymarket.example"},
}


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a database session on a freshly created schema.

    Tables are dropped after the test so no rows leak between tests.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """TestClient whose routes use the test's database session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.pop(get_db, None)


def make_supplier(db: Session, key: str = "green_grocer", **overrides) -> Supplier:
    """
    Persist a supplier with realistic defaults.

    Example:
        >>> grocer = make_supplier(db)  # Green Grocer, active
        >>> market = make_supplier(db, "city_market", active=False)
    """
    values = {"description": "", "active": True, **REALISTIC_SUPPLIERS[key], **overrides}
    supplier = Supplier(**values)
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier


def make_product(
    db: Session,
    supplier: Supplier,
    name: str = "Free-range eggs (12)",
    price: int = 450,
    stock_level: int = 24,
    category: str = "dairy",
) -> Product:
    """Persist a product; price is in cents"""
    product = Product(
        supplier_id=supplier.id,
        name=name,
        price=price,
        stock_level=stock_level,
        category=category,
        unit="box",
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def make_recipe(db: Session, name: str = "Shakshuka") -> Recipe:
    recipe = Recipe(
        name=name,
        description="Eggs poached in a spiced tomato sauce",
        ingredients=[{"name": "eggs", "amount": 4, "unit": "piece"}],
        instructions=[{"stepNumber": 1, "content": "Simmer the sauce", "richText": ""}],
        nutrition_info={
            "calories": 320,
            "protein": 18,
            "carbs": 14,
            "fat": 21,
            "vitamins": {},
            "minerals": {},
        },
        prep_time=10,
        cook_time=20,
        total_time=30,
    )
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe
