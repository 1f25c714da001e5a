"""Ordering domain composition root.

Covers the factory side of AquaLink: branch and direct orders, the factory
inventory that order acceptance draws down, and customer purchases recorded
from the storefront checkout.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
