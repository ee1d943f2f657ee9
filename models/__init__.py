"""
Pydantic models for validation and serialization.

Input side: the transform aggregate and the field-mapping document.
Output side: the Merchant API ProductInput payload.
"""

from models.base import (
    BaseSchema,
    PayloadSchema,
)
from models.field_mapping import (
    BrandSource,
    PriceSource,
    ProductTypeSource,
    LinkSource,
    ProductDetailsMapping,
    LinksMapping,
    ProductImagesMapping,
    PriceConditionAvailabilityMapping,
    LabelsMapping,
    ApparelProductDetailsMapping,
    CertificationMapping,
    AdditionalDetailsMapping,
    ShippingAndReturnsMapping,
    FieldMapping,
)
from models.merchant_input import (
    ProductIdentifierType,
    InventoryType,
    Shop,
    Feed,
    FeedProductSettings,
    Product,
    ProductVariant,
    FeedProductVariant,
    TransformInput,
)
from models.product_input import (
    Price,
    SalePriceEffectiveDate,
    Dimension,
    Certification,
    CustomAttribute,
    ProductAttributes,
    ProductInput,
    TransformFailure,
    BatchTransformResult,
)

__all__ = [
    # Base
    "BaseSchema",
    "PayloadSchema",

    # Field mapping
    "BrandSource",
    "PriceSource",
    "ProductTypeSource",
    "LinkSource",
    "ProductDetailsMapping",
    "LinksMapping",
    "ProductImagesMapping",
    "PriceConditionAvailabilityMapping",
    "LabelsMapping",
    "ApparelProductDetailsMapping",
    "CertificationMapping",
    "AdditionalDetailsMapping",
    "ShippingAndReturnsMapping",
    "FieldMapping",

    # Input
    "ProductIdentifierType",
    "InventoryType",
    "Shop",
    "Feed",
    "FeedProductSettings",
    "Product",
    "ProductVariant",
    "FeedProductVariant",
    "TransformInput",

    # Output
    "Price",
    "SalePriceEffectiveDate",
    "Dimension",
    "Certification",
    "CustomAttribute",
    "ProductAttributes",
    "ProductInput",
    "TransformFailure",
    "BatchTransformResult",
]
