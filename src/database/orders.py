"""Order store backed by SQLAlchemy."""

from .models import Order
from .repository import SQLAlchemyRepository


class OrderRepository(SQLAlchemyRepository[Order]):
    """Repository for Order aggregates.

    Saving an order cascades to every product in ``order.products`` and
    deleting one removes its products too.

    Example:
        >>> orders = OrderRepository(Database("sqlite:///data/orders.db"))
        >>> order = Order(customer_name="Alice", total=Decimal("0"))
        >>> orders.save(order).id
        1
        >>> orders.find_by_id(1)
        <Order(id=1, customer='Alice', total=0.00)>
    """

    entity = Order

    def _load(self, order: Order) -> Order:
        # Eagerly load products (and their back-references) before closing session
        for product in order.products:
            _ = product.order
        return order
