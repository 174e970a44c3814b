"""Create the order database schema and optionally load sample data."""

from decimal import Decimal
from typing import Optional

from database import Database, Order, OrderRepository, Product, ProductRepository
from utils.logger import setup_logger

logger = setup_logger(__name__)

SAMPLE_ORDERS = [
    {
        "customer_name": "Alice Johnson",
        "total": "2524.98",
        "products": [
            {"name": "Laptop Pro 14", "price": "2499.99"},
            {"name": "Wireless Mouse", "price": "24.99"},
        ],
    },
    {
        "customer_name": "Bob Smith",
        "total": "129.98",
        "products": [
            {"name": "Mechanical Keyboard", "price": "89.99"},
            {"name": "USB-C Hub", "price": "39.99"},
        ],
    },
]

SAMPLE_PRODUCTS = [
    {"name": "Noise-cancelling Headphones", "price": "199.99"},
    {"name": "Portable SSD 1TB", "price": "99.99"},
]


def seed_database(database: Database) -> int:
    """Insert sample orders and standalone products into an empty database.

    Args:
        database: Database with the schema already created

    Returns:
        Number of orders added (0 if orders already exist)
    """
    orders = OrderRepository(database)
    if orders.count() > 0:
        logger.info("Orders already present, skipping seed")
        return 0

    orders.save_all(
        Order(
            customer_name=item["customer_name"],
            total=Decimal(item["total"]),
            products=[
                Product(name=p["name"], price=Decimal(p["price"]))
                for p in item["products"]
            ],
        )
        for item in SAMPLE_ORDERS
    )
    ProductRepository(database).save_all(
        Product(name=p["name"], price=Decimal(p["price"])) for p in SAMPLE_PRODUCTS
    )

    logger.info(
        f"Added {len(SAMPLE_ORDERS)} orders and {len(SAMPLE_PRODUCTS)} standalone products"
    )
    return len(SAMPLE_ORDERS)


def initialize_database(
    database_url: Optional[str] = None, seed: bool = False
) -> Database:
    """Create tables (if missing) and optionally seed sample data.

    Args:
        database_url: SQLAlchemy URL, defaults to ``DATABASE_URL``
        seed: Insert sample data when the orders table is empty

    Returns:
        Database with the schema in place
    """
    database = Database(database_url)
    database.create_schema()
    logger.info(f"Initialized database at {database.engine.url!r}")

    if seed:
        seed_database(database)

    return database


if __name__ == "__main__":
    logger.info("Initializing database...")
    initialize_database(seed=True)
    logger.info("Database ready!")
