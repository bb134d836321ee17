from typing import Optional

from sqlalchemy.orm import Session

from . import db as db_module
from .models import Special, Topping


SPECIALS = [
    ("Basic Cheese Pizza", "It's cheesy and delicious. Why wouldn't you want one?", 9.99, "img/pizzas/cheese.jpg"),
    ("The Baconatorizor", "It has EVERY kind of bacon", 11.99, "img/pizzas/bacon.jpg"),
    ("Classic pepperoni", "It's the pizza you grew up with, but Blazing hot!", 10.50, "img/pizzas/pepperoni.jpg"),
    ("Buffalo chicken", "Spicy chicken, hot sauce and bleu cheese, guaranteed to warm you up", 12.75, "img/pizzas/meaty.jpg"),
    ("Mushroom Lovers", "It has mushrooms. Isn't that obvious?", 11.00, "img/pizzas/mushroom.jpg"),
    ("The Brit", "When in London...", 10.25, "img/pizzas/brit.jpg"),
    ("Veggie Delight", "It's like salad, but on a pizza", 11.50, "img/pizzas/salad.jpg"),
    ("Margherita", "Traditional Italian pizza with tomatoes and basil", 9.99, "img/pizzas/margherita.jpg"),
]

TOPPINGS = [
    ("Extra cheese", 2.50),
    ("American bacon", 2.99),
    ("British bacon", 2.99),
    ("Canadian bacon", 2.99),
    ("Tea and crumpets", 5.00),
    ("Fresh-baked scones", 4.50),
    ("Bell peppers", 1.00),
    ("Onions", 1.00),
    ("Mushrooms", 1.00),
    ("Pepperoni", 1.00),
    ("Duck sausage", 3.20),
    ("Venison meatballs", 2.50),
    ("Served on a silver platter", 250.99),
    ("Lobster on top", 64.50),
    ("Sturgeon caviar", 101.75),
    ("Artichoke hearts", 3.40),
    ("Fresh tomatoes", 1.50),
    ("Basil", 1.50),
    ("Steak (medium-rare)", 8.50),
    ("Blazing hot peppers", 4.20),
    ("Buffalo chicken", 5.00),
    ("Blue cheese", 2.50),
]


def seed_menu(db: Optional[Session] = None) -> int:
    """
    Seed the classic specials and toppings into an empty catalog.

    Returns the number of rows added (0 when the catalog already has specials).
    """
    owns_session = db is None
    if owns_session:
        db_module.init_db()
        db = db_module.SessionLocal()

    try:
        existing = db.query(Special).count()
        if existing > 0:
            print(f"Catalog already has {existing} specials. Not seeding again.")
            return 0

        db.add_all(
            Special(name=name, description=description, base_price=price, image_url=image_url)
            for name, description, price, image_url in SPECIALS
        )
        db.add_all(Topping(name=name, price=price) for name, price in TOPPINGS)
        db.commit()

        added = len(SPECIALS) + len(TOPPINGS)
        print(f"Seeded {len(SPECIALS)} specials and {len(TOPPINGS)} toppings.")
        return added
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_menu()
