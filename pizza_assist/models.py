from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Special(Base):
    """A named pizza on the menu. base_price is the price at the default size."""
    __tablename__ = "specials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    base_price = Column(Float, nullable=False)
    image_url = Column(String, nullable=True)


class Topping(Base):
    """An add-on topping. Toppings are not scaled by pizza size."""
    __tablename__ = "toppings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    price = Column(Float, nullable=False)
