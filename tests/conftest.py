"""
Shared fixtures: a temporary SQLite transactions table and an API client
wired to it. The module-level engine in db.session is pointed at an
in-memory database so importing the app never needs a PostgreSQL server.
"""

import os
from datetime import datetime

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "0"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from db.base import Base  # noqa: E402
from db.session import build_engine, build_session_factory  # noqa: E402
from models.transactions import Transaction  # noqa: E402

SAMPLE_ROWS = [
    {
        "id": 1,
        "title": "Fjallraven Foldsack No. 1 Backpack",
        "price": 109.95,
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "category": "men's clothing",
        "sold": True,
        "date_of_sale": datetime(2021, 3, 27, 20, 29, 54),
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": 22.3,
        "description": "Slim-fitting style, contrast raglan long sleeve.",
        "category": "men's clothing",
        "sold": False,
        "date_of_sale": datetime(2021, 3, 15, 9, 0, 0),
    },
    {
        "id": 3,
        "title": "Mens Cotton Jacket",
        "price": 55.99,
        "description": "Great outerwear jackets for Spring and Autumn.",
        "category": "men's clothing",
        "sold": True,
        "date_of_sale": datetime(2022, 3, 1, 12, 0, 0),
    },
    {
        "id": 4,
        "title": "Solid Gold Petite Micropave",
        "price": 168.0,
        "description": "Satisfaction guaranteed.",
        "category": "jewelery",
        "sold": False,
        "date_of_sale": datetime(2021, 4, 5, 8, 30, 0),
    },
    {
        "id": 5,
        "title": "White Gold Plated Princess",
        "price": 9.99,
        "description": "Classic created wedding engagement ring.",
        "category": "jewelery",
        "sold": True,
        "date_of_sale": datetime(2021, 11, 27, 18, 0, 0),
    },
    {
        "id": 6,
        "title": "WD 4TB Gaming Drive",
        "price": 114.0,
        "description": "Expand your PS4 gaming experience.",
        "category": "electronics",
        "sold": True,
        "date_of_sale": datetime(2021, 3, 10, 10, 0, 0),
    },
    {
        "id": 7,
        "title": "Samsung 49-Inch Curved Monitor",
        "price": 999.99,
        "description": "49 inch super ultrawide 32:9 curved gaming monitor.",
        "category": "electronics",
        "sold": False,
        "date_of_sale": datetime(2021, 3, 10, 10, 0, 0),
    },
    {
        "id": 8,
        "title": "Rain Jacket Women Windbreaker",
        "price": 39.99,
        "description": "Lightweight, waterproof and 100% polyester.",
        "category": "women's clothing",
        "sold": True,
        "date_of_sale": datetime(2021, 7, 12, 14, 0, 0),
    },
    {
        "id": 9,
        "title": "Opna Women's Short Sleeve Moisture",
        "price": 7.95,
        "description": None,
        "category": "women's clothing",
        "sold": False,
        "date_of_sale": datetime(2021, 12, 3, 8, 0, 0),
    },
]


def make_session_factory(db_path, rows=None):
    engine = build_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)
    factory = build_session_factory(engine)

    if rows:
        db = factory()
        try:
            db.add_all([Transaction(**row) for row in rows])
            db.commit()
        finally:
            db.close()
    return factory


@pytest.fixture()
def session_factory(tmp_path):
    return make_session_factory(tmp_path / "transactions.sqlite", SAMPLE_ROWS)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    from main import create_app

    app = create_app(session_factory=session_factory, seed_on_startup=False)
    with TestClient(app) as c:
        yield c
