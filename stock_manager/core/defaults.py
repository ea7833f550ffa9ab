"""Built-in categories and first-run sample products."""

from datetime import date

from stock_manager.schemas.product import Product

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Dairy",
    "Bakery",
    "Produce",
    "Beverages",
    "Snacks",
    "Canned Goods",
    "Household",
    "Personal Care",
)

# Shown only when nothing is cached locally and no remote store is connected
SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="1",
        name="Almond Milk",
        category="Dairy",
        quantity=45,
        price=240,
        expiry_date=date(2024, 6, 15),
    ),
    Product(
        id="2",
        name="Cheddar Cheese",
        category="Dairy",
        quantity=8,
        price=480,
        expiry_date=date(2023, 11, 20),
    ),
    Product(
        id="3",
        name="Whole Wheat Bread",
        category="Bakery",
        quantity=15,
        price=55,
        expiry_date=date(2024, 5, 25),
    ),
)
