import logging

from shop_admin.errors import NotFound
from shop_admin.models.database import db, is_storable_id, Product

logger = logging.getLogger(__name__)


class ProductService:
    """Product catalogue CRUD."""

    @staticmethod
    def list_products() -> list:
        return Product.query.order_by(Product.id).all()

    @staticmethod
    def get_product(product_id: int) -> Product:
        product = db.session.get(Product, product_id) if is_storable_id(product_id) else None
        if not product:
            raise NotFound("Product not found")
        return product

    @staticmethod
    def create_product(name: str, price, stock: int, category: str) -> Product:
        product = Product(name=name, price=price, stock=stock, category=category)
        db.session.add(product)
        db.session.commit()
        logger.info("Created product %s (%s)", product.id, name)
        return product

    @staticmethod
    def update_product(product_id: int, **fields) -> Product:
        product = ProductService.get_product(product_id)
        for key, value in fields.items():
            setattr(product, key, value)
        db.session.commit()
        logger.info("Updated product %s", product_id)
        return product

    @staticmethod
    def delete_product(product_id: int) -> None:
        """Delete a product together with the orders placed for it."""
        product = ProductService.get_product(product_id)
        db.session.delete(product)
        db.session.commit()
        logger.info("Deleted product %s", product_id)
