"""Storefront client — the shopper's cart and its checkout hand-off.

Runs on the client side of AquaLink: the cart lives in local storage and is
only sent to the ordering service when the shopper checks out.
"""
