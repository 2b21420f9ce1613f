from sqlalchemy import func

from shop_admin.models.database import db, Order, Product, User


class ReportService:
    """Aggregates backing the dashboard and sales charts."""

    @staticmethod
    def dashboard_summary() -> dict:
        total_sales = db.session.scalar(db.select(func.sum(Order.total_price)))
        return {
            "product_count": db.session.scalar(db.select(func.count(Product.id))),
            "order_count": db.session.scalar(db.select(func.count(Order.id))),
            "total_sales": float(total_sales or 0),
            "user_count": db.session.scalar(db.select(func.count(User.id))),
        }

    @staticmethod
    def sales_by_product() -> list:
        """Units sold per product, best sellers first."""
        total_sold = func.sum(Order.quantity).label("total_sold")
        rows = db.session.execute(
            db.select(Product.name, total_sold)
            .join(Order, Order.product_id == Product.id)
            .group_by(Product.id, Product.name)
            .order_by(total_sold.desc(), Product.name)
        ).all()
        return [{"product_name": name, "total_sold": int(sold)} for name, sold in rows]
