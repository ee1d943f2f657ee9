"""
Transformer input aggregate.

Shop, feed, product, variant and the feed/product/variant join row as
assembled by the caller from the catalog and feed stores. Only the
fields the transformer reads are modelled; everything else is ignored.
"""

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import ConfigDict, Field, ValidationInfo, field_validator

from models.base import BaseSchema
from models.field_mapping import FieldMapping
from utils.price_utils import parse_decimal


class ProductIdentifierType(str, Enum):
    """Which product identifier a feed submits."""
    NO = "no"
    GTIN = "gtin"
    MPN = "mpn"


class InventoryType(str, Enum):
    """How a feed derives availability."""
    SHOPIFY_INVENTORY = "shopify_inventory"
    OUT_OF_STOCK = "out_of_stock"
    CUSTOM = "custom"


# ===================
# SHOP
# ===================

class Shop(BaseSchema):
    """Store identity."""

    shop_name: Optional[str] = None
    domain: Optional[str] = None


# ===================
# FEED
# ===================

class FeedProductSettings(BaseSchema):
    """Feed-wide templates and selectors."""

    product_id: Optional[str] = Field(None, description="Offer id template")
    product_title: Optional[str] = Field(None, description="Title template")
    product_description: Optional[str] = Field(None, description="Description template")
    brand_submission: Optional[str] = Field(None, description="BrandSource value")
    product_identifier: Optional[str] = Field(None, description="ProductIdentifierType value")
    enable_sale_price: bool = False

    @field_validator("enable_sale_price", mode="before")
    @classmethod
    def none_means_disabled(cls, v: Any) -> Any:
        return False if v is None else v


class FeedMerchantAccount(BaseSchema):
    account_id: Optional[str] = None


class FeedMerchantCenterMetadata(BaseSchema):
    account: Optional[FeedMerchantAccount] = None
    product_category_id: Optional[Union[int, str]] = None


class FeedMetadata(BaseSchema):
    google_merchant_center: Optional[FeedMerchantCenterMetadata] = None


class FeedTracking(BaseSchema):
    """UTM values appended to every product link."""

    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None


class FeedInventory(BaseSchema):
    """Availability source: an InventoryType, plus custom_setting for custom."""

    type: Optional[str] = None
    custom_setting: Optional[str] = None


class Feed(BaseSchema):
    """
    Per-market, per-language export configuration.

    language, market and currency are free-form and required by the
    transformer; they are optional here so that their absence is
    reported by name when a transform is attempted.
    """

    id: str
    shop_id: str
    language: Optional[str] = None
    market: Optional[str] = None
    currency: Optional[str] = None
    product_settings: Optional[FeedProductSettings] = None
    metadata: Optional[FeedMetadata] = None
    tracking: Optional[FeedTracking] = None
    inventory: Optional[FeedInventory] = None


# ===================
# PRODUCT
# ===================

def _text_or_none(value: Any) -> Any:
    """Scalars pass through for str coercion; objects, lists and flags become None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float, Decimal)):
        return value
    return None


def _object_or_none(value: Any) -> Any:
    """A nested object that is not a mapping counts as missing."""
    if isinstance(value, (Mapping, BaseSchema)):
        return value
    return None


class ProductTextFields(BaseSchema):
    """Base for catalog objects whose text fields are all optional."""

    TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def malformed_text_as_missing(cls, v: Any, info: ValidationInfo) -> Any:
        if info.field_name in cls.TEXT_FIELDS:
            return _text_or_none(v)
        return v


class ProductCategory(ProductTextFields):
    TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "full_name"})

    name: Optional[str] = None
    full_name: Optional[str] = None


class ProductCollection(ProductTextFields):
    TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset({"title"})

    title: Optional[str] = None


class ProductSeo(ProductTextFields):
    TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset({"title", "description"})

    title: Optional[str] = None
    description: Optional[str] = None


class Product(ProductTextFields):
    """
    Catalog product.

    Every field is optional and degrades to its default when malformed:
    a non-object seo/category is dropped, non-object collection entries
    and non-text tags are skipped.
    """

    TEXT_FIELDS: ClassVar[frozenset[str]] = frozenset({
        "id", "title", "description", "vendor", "handle", "product_type",
    })

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    handle: Optional[str] = None
    product_type: Optional[str] = None
    category: Optional[ProductCategory] = None
    collections: list[ProductCollection] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    seo: Optional[ProductSeo] = None

    @field_validator("category", "seo", mode="before")
    @classmethod
    def non_object_as_missing(cls, v: Any) -> Any:
        return _object_or_none(v)

    @field_validator("collections", mode="before")
    @classmethod
    def unwrap_collections(cls, v: Any) -> Any:
        """
        Accept {"collections": [...]} as stored upstream, or a plain list.

        Entries that are not objects are skipped.
        """
        if isinstance(v, Mapping):
            v = v.get("collections")
        if not isinstance(v, (list, tuple)):
            return []
        return [entry for entry in v if _object_or_none(entry) is not None]

    @field_validator("tags", mode="before")
    @classmethod
    def unwrap_tags(cls, v: Any) -> Any:
        """
        Accept {"tags": [...]}, a plain list, or a comma-separated string.

        "summer, sale" → ["summer", "sale"]
        None and non-text entries are skipped.
        """
        if isinstance(v, Mapping):
            v = v.get("tags")
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(",") if tag.strip()]
        if not isinstance(v, (list, tuple)):
            return []
        return [tag for tag in (_text_or_none(entry) for entry in v) if tag is not None]


class ProductVariant(BaseSchema):
    """Sellable unit of a product."""

    id: str
    title: Optional[str] = None
    display_name: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    price: Optional[Decimal] = None
    compare_at_price: Optional[Decimal] = None

    @field_validator("price", "compare_at_price", mode="before")
    @classmethod
    def lenient_price(cls, v: Any) -> Optional[Decimal]:
        """Unparsable prices count as missing."""
        return parse_decimal(v)


# ===================
# FEED PRODUCT VARIANT
# ===================

class FeedProductVariantMerchantCenter(BaseSchema):
    offer_id: Optional[str] = Field(None, description="Hard override of the computed offerId")


class FeedProductVariantMetadata(BaseSchema):
    google_merchant_center: Optional[FeedProductVariantMerchantCenter] = None


class FeedProductVariant(BaseSchema):
    """Join row carrying the per-variant override document."""

    product_id: str
    variant_id: str
    field_mapping: FieldMapping = Field(default_factory=FieldMapping)
    metadata: Optional[FeedProductVariantMetadata] = None

    @field_validator("field_mapping", mode="before")
    @classmethod
    def none_means_empty(cls, v: Any) -> Any:
        return {} if v is None else v


# ===================
# COMPOSITE
# ===================

class TransformInput(BaseSchema):
    """
    Everything one transform call needs.

    Accepts both snake_case and the camelCase keys used by callers
    (mainImage, feedProductVariant).
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        extra="ignore",
        populate_by_name=True,
    )

    shop: Shop = Field(default_factory=Shop)
    feed: Feed
    product: Product = Field(default_factory=Product)
    variant: ProductVariant
    main_image: Optional[str] = Field(None, alias="mainImage")
    feed_product_variant: FeedProductVariant = Field(..., alias="feedProductVariant")
