"""Product store backed by SQLAlchemy."""

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from .models import Product
from .repository import SQLAlchemyRepository


class ProductRepository(SQLAlchemyRepository[Product]):
    """Repository for products.

    A product saved with ``order`` (or ``order_id``) set is linked to that
    order through the foreign key; one saved without it stays unassociated.
    The order itself is never written: pending changes to it are ignored,
    an unsaved order is not inserted, and ``Order(id=...)`` is enough to
    reference a stored one.
    """

    entity = Product

    def _attach(self, session: Session, product: Product) -> Product:
        state = inspect(product)
        if "order" in state.dict:
            order = state.dict["order"]
            if state.attrs.order.history.has_changes():
                product.order_id = order.id if order is not None else None
            # Keep the reference but drop its history so the flush only
            # writes order_id
            set_committed_value(product, "order", order)
        return super()._attach(session, product)

    def _load(self, product: Product) -> Product:
        if product.order is not None:
            for sibling in product.order.products:
                _ = sibling.order
        return product
