from shop_admin.api.auth import auth_bp
from shop_admin.api.orders import orders_bp
from shop_admin.api.products import products_bp
from shop_admin.api.reports import reports_bp
from shop_admin.api.users import users_bp

__all__ = ["auth_bp", "orders_bp", "products_bp", "reports_bp", "users_bp"]
