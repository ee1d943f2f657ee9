"""
Business logic services.

Each service handles one domain area.
"""

from services.product_input_service import (
    ProductInputService,
    get_product_input_service,
    transform_product_input,
)

__all__ = [
    "ProductInputService",
    "get_product_input_service",
    "transform_product_input",
]
