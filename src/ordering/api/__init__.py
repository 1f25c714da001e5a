from ordering.api.errors import register_error_handlers
from ordering.api.routes import inventory_router, order_router, purchase_router

__all__ = ["inventory_router", "order_router", "purchase_router", "register_error_handlers"]
