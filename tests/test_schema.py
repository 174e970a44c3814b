"""
Unit tests for the pydantic views of stored entities.
"""

from decimal import Decimal

from database import Order, Product
from schema import OrderInfo, ProductInfo


def test_order_info_from_stored_order(orders):
    saved = orders.save(
        Order(
            customer_name="Alice",
            total=Decimal("9.99"),
            products=[Product(name="Widget", price=Decimal("9.99"))],
        )
    )

    info = OrderInfo.model_validate(orders.find_by_id(saved.id))

    assert info.id == saved.id
    assert info.customer_name == "Alice"
    assert info.total == Decimal("9.99")
    assert len(info.products) == 1
    assert info.products[0].name == "Widget"
    assert info.products[0].order_id == saved.id


def test_product_info_json(products):
    saved = products.save(Product(name="Widget", price=Decimal("9.99")))

    data = ProductInfo.model_validate(saved).model_dump(mode="json")

    assert data == {"id": saved.id, "name": "Widget", "price": "9.99", "order_id": None}
