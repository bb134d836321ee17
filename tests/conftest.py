from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pizza_assist.db as db
from pizza_assist.config import SizeRange
from pizza_assist.llm_client import get_plan_gateway
from pizza_assist.main import app
from pizza_assist.menu_snapshot import MenuSnapshot, SpecialEntry, ToppingEntry
from pizza_assist.models import Base, Special, Topping
from pizza_assist.routes import limiter


SIZES = SizeRange(min=9, default=12, max=17)

# (id, name, description, base_price)
TEST_SPECIALS = [
    (1, "Margherita", "Traditional Italian pizza with tomatoes and basil", 9.99),
    (2, "Classic pepperoni", "It's the pizza you grew up with, but Blazing hot!", 10.50),
    (3, "Veggie Delight", "It's like salad, but on a pizza", 11.50),
    (4, "Mushroom Lovers", "It has mushrooms. Isn't that obvious?", 11.00),
]

# (id, name, price)
TEST_TOPPINGS = [
    (7, "Extra cheese", 2.50),
    (8, "Mushrooms", 1.00),
    (9, "Basil", 1.50),
    (10, "Pepperoni", 1.00),
]


class FakeGateway:
    """Stand-in for PlanGateway that returns canned content or raises."""

    def __init__(self, content: Optional[str] = '{"actions": []}', error: Optional[BaseException] = None):
        self.content = content
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def sizes():
    return SIZES


@pytest.fixture
def snapshot():
    """Menu snapshot matching the rows seeded into the test database."""
    return MenuSnapshot(
        sizes=SIZES,
        specials=tuple(SpecialEntry(*row) for row in TEST_SPECIALS),
        toppings=tuple(ToppingEntry(*row) for row in TEST_TOPPINGS),
    )


@pytest.fixture
def session_factory():
    """In-memory SQLite catalog seeded with TEST_SPECIALS and TEST_TOPPINGS.

    Uses StaticPool so all connections share the same in-memory database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    for special_id, name, description, base_price in TEST_SPECIALS:
        session.add(Special(id=special_id, name=name, description=description, base_price=base_price))
    for topping_id, name, price in TEST_TOPPINGS:
        session.add(Topping(id=topping_id, name=name, price=price))
    session.commit()
    session.close()

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, fake_gateway):
    """Shared FastAPI TestClient using the in-memory catalog and a fake gateway."""
    original_engine = db.engine
    original_session_local = db.SessionLocal

    # Patch the db module used by the app (init_db runs at startup)
    db.engine = session_factory.kw["bind"]
    db.SessionLocal = session_factory

    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db
    app.dependency_overrides[get_plan_gateway] = lambda: fake_gateway

    limiter.enabled = False
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    db.engine = original_engine
    db.SessionLocal = original_session_local
