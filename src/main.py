"""
Order database command line.
Create the schema, inspect orders and products, or open an interactive console.
"""

import argparse
import logging
from typing import List, Optional

from database import Database, OrderRepository, ProductRepository
from initialize_database import initialize_database
from schema import OrderInfo, PageInfo, ProductInfo
from utils.logger import setup_logger

CONSOLE_BANNER = """
╔════════════════════════════════════════════════════════════╗
║              Order Database Interactive Console            ║
╚════════════════════════════════════════════════════════════╝

Available objects:
  orders     - OrderRepository instance
  products   - ProductRepository instance
  Order, Product, Decimal

Examples:
  >>> orders.count()
  >>> list(orders.find_all())
  >>> orders.find_by_id(1)
  >>> products.find_page(0, 10)
  >>> orders.save(Order(customer_name="Test User", total=Decimal("9.99"),
  ...     products=[Product(name="Widget", price=Decimal("9.99"))]))

Type 'exit()' or Ctrl+D to quit.
"""

ENTITIES = {
    "order": (OrderRepository, OrderInfo),
    "product": (ProductRepository, ProductInfo),
}


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for all components.

    Args:
        verbose: Enable verbose logging if True

    Returns:
        Logger instance for CLI
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    for component in [
        "database.connection",
        "database.repository",
        "initialize_database",
    ]:
        setup_logger(component, level=log_level)

    return setup_logger("cli", level=log_level)


def _repositories(database: Database):
    return OrderRepository(database), ProductRepository(database)


def run_list(database: Database, kind: str, page: Optional[int], size: Optional[int]):
    """Print orders or products as JSON, all of them or one page."""
    repository_cls, info_cls = ENTITIES[kind.rstrip("s")]
    repository = repository_cls(database)

    if size is None:
        for entity in repository.find_all(page=page):
            print(info_cls.model_validate(entity).model_dump_json())
        return

    result = repository.find_page(page or 0, size)
    page_info = PageInfo(
        content=[info_cls.model_validate(e).model_dump(mode="json") for e in result],
        page=result.page,
        size=result.size,
        total_elements=result.total_elements,
        total_pages=result.total_pages,
    )
    print(page_info.model_dump_json(indent=2))


def run_show(database: Database, kind: str, entity_id: int) -> bool:
    """Print a single order or product. Returns False if not found."""
    repository_cls, info_cls = ENTITIES[kind]
    entity = repository_cls(database).find_by_id(entity_id)
    if entity is None:
        print(f"{kind.title()} {entity_id} not found")
        return False
    print(info_cls.model_validate(entity).model_dump_json(indent=2))
    return True


def run_delete(database: Database, kind: str, entity_id: int) -> bool:
    """Delete a single order or product. Returns False if not found."""
    repository_cls, _ = ENTITIES[kind]
    if not repository_cls(database).delete_by_id(entity_id):
        print(f"{kind.title()} {entity_id} not found")
        return False
    print(f"Deleted {kind} {entity_id}")
    return True


def run_count(database: Database):
    orders, products = _repositories(database)
    print(f"orders: {orders.count()}")
    print(f"products: {products.count()}")


def run_console(database: Database):
    """Open an interactive shell with the repositories bound."""
    from decimal import Decimal

    from database import Order, Product

    orders, products = _repositories(database)
    namespace = {
        "orders": orders,
        "products": products,
        "Order": Order,
        "Product": Product,
        "Decimal": Decimal,
    }

    print(CONSOLE_BANNER)

    try:
        from IPython import embed

        embed(colors="neutral", user_ns=namespace)
    except ImportError:
        import code

        code.interact(local=namespace, banner="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Order database command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
          # Create tables and load sample data
            python src/main.py init --seed

          # List the second page of orders, five per page
            python src/main.py list orders --page 1 --size 5

          # Show one product
            python src/main.py show product 3

          # Open the interactive console
            python src/main.py console
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output for debugging",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL (default: DATABASE_URL or sqlite:///data/orders.db)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create the database schema")
    init_parser.add_argument(
        "--seed", action="store_true", help="Load sample data into an empty database"
    )

    list_parser = subparsers.add_parser("list", help="List orders or products")
    list_parser.add_argument("kind", choices=["orders", "products"])
    list_parser.add_argument("--page", type=int, default=None, help="Zero-based page")
    list_parser.add_argument("--size", type=int, default=None, help="Page size")

    show_parser = subparsers.add_parser("show", help="Show one order or product")
    show_parser.add_argument("kind", choices=list(ENTITIES))
    show_parser.add_argument("id", type=int)

    delete_parser = subparsers.add_parser("delete", help="Delete one order or product")
    delete_parser.add_argument("kind", choices=list(ENTITIES))
    delete_parser.add_argument("id", type=int)

    subparsers.add_parser("count", help="Count orders and products")
    subparsers.add_parser("console", help="Open an interactive console")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.verbose)

    try:
        database = initialize_database(args.database_url, seed=getattr(args, "seed", False))
        try:
            if args.command == "init":
                print(f"Database ready at {database.engine.url!r}")
            elif args.command == "list":
                run_list(database, args.kind, args.page, args.size)
            elif args.command == "show":
                return 0 if run_show(database, args.kind, args.id) else 1
            elif args.command == "delete":
                return 0 if run_delete(database, args.kind, args.id) else 1
            elif args.command == "count":
                run_count(database)
            elif args.command == "console":
                run_console(database)
        finally:
            database.dispose()
    except Exception as e:
        logger.error(f"Error: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        print(f"\n❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
