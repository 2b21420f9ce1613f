import logging
from sqlalchemy import update

from shop_admin.errors import InsufficientStock, NotFound
from shop_admin.models.database import db, is_storable_id, Order, Product

logger = logging.getLogger(__name__)


class OrderService:
    """Handles order business logic.

    Order creation and deletion each run inside a single database
    transaction: stock is only ever changed together with the order row
    that accounts for it, and any failure rolls the session back.
    """

    @staticmethod
    def create_order(product_id: int, quantity: int, customer_name: str,
                     customer_email: str) -> Order:
        """Place an order for ``quantity`` units and take them out of stock."""
        try:
            product = db.session.get(Product, product_id) if is_storable_id(product_id) else None
            if not product:
                raise NotFound("Product not found")
            if product.stock < quantity:
                raise InsufficientStock(payload={"available": product.stock})

            order = Order(
                product_id=product.id,
                quantity=quantity,
                total_price=product.price * quantity,
                customer_name=customer_name,
                customer_email=customer_email,
            )
            db.session.add(order)

            # Conditional decrement so a concurrent order cannot drive stock negative.
            result = db.session.execute(
                update(Product)
                .where(Product.id == product.id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise InsufficientStock()

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info("Created order %s: product=%s quantity=%s", order.id, product_id, quantity)
        return order

    @staticmethod
    def delete_order(order_id: int) -> int:
        """Delete an order and return its quantity to stock.

        Returns the restored quantity.
        """
        try:
            order = db.session.get(Order, order_id) if is_storable_id(order_id) else None
            if not order:
                raise NotFound("Order not found")

            product_id, quantity = order.product_id, order.quantity
            db.session.delete(order)
            db.session.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(stock=Product.stock + quantity)
                .execution_options(synchronize_session=False)
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info("Deleted order %s: restored %s to product %s", order_id, quantity, product_id)
        return quantity

    @staticmethod
    def list_orders() -> list:
        """Get all orders with their product, newest first."""
        return (
            Order.query
            .join(Product)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
