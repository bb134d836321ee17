"""
Tests for seeding the classic menu.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pizza_assist.db as db
from pizza_assist.models import Base, Special, Topping
from pizza_assist.search_index import search_menu
from pizza_assist.seed_menu import SPECIALS, TOPPINGS, seed_menu


def _empty_session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)()


def test_seed_empty_catalog():
    session = _empty_session()
    added = seed_menu(session)

    assert added == len(SPECIALS) + len(TOPPINGS)
    assert session.query(Special).count() == len(SPECIALS)
    assert session.query(Topping).count() == len(TOPPINGS)
    session.close()


def test_seed_is_not_repeated(db_session):
    # The test catalog already has specials
    assert seed_menu(db_session) == 0
    assert db_session.query(Special).count() == 4


def test_seeded_catalog_is_searchable():
    session = _empty_session()
    seed_menu(session)

    names = [r.name for r in search_menu(session, "bacon")]
    assert names[0] == "The Baconatorizor"
    assert "Canadian bacon" in names
    session.close()


def test_seed_without_session_uses_module_session(monkeypatch):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", sessionmaker(bind=engine))

    assert seed_menu() == len(SPECIALS) + len(TOPPINGS)

    session = db.SessionLocal()
    assert session.query(Special).filter_by(name="Margherita").one().base_price == 9.99
    session.close()
