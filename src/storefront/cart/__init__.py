from storefront.cart.state import (
    AddItem,
    CartItem,
    CartState,
    ClearCart,
    Product,
    RemoveItem,
    SetQuantity,
    reduce,
)
from storefront.cart.storage import CartStorage, FileStorage, MemoryStorage
from storefront.cart.store import CartStore, CartTotals

__all__ = [
    "AddItem",
    "CartItem",
    "CartState",
    "CartStorage",
    "CartStore",
    "CartTotals",
    "ClearCart",
    "FileStorage",
    "MemoryStorage",
    "Product",
    "RemoveItem",
    "SetQuantity",
    "reduce",
]
