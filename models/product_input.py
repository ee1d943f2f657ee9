"""
Merchant API ProductInput payload.

Field names follow the Merchant API (camelCase on the wire). Optional
attributes are None when absent and are dropped by to_payload(), so an
absent attribute is never serialized as null or "".
"""

from typing import Optional

from pydantic import Field

from models.base import PayloadSchema


class Price(PayloadSchema):
    """Amount in micros (integer string) plus ISO 4217 currency."""

    amount_micros: str = Field(..., pattern=r"^-?\d+$")
    currency_code: str


class SalePriceEffectiveDate(PayloadSchema):
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class Dimension(PayloadSchema):
    """Shipping weight/length/width/height."""

    value: float
    unit: Optional[str] = None


class Certification(PayloadSchema):
    certification_authority: str = ""
    certification_name: str = ""
    certification_code: str = ""
    certification_value: str = ""


class CustomAttribute(PayloadSchema):
    """Free-form attribute; value is always text."""

    name: str
    value: str


class ProductAttributes(PayloadSchema):
    """
    Attributes of one offer.

    Required: item_group_id, title, description, identifier_exists, price.
    """

    # Product details
    item_group_id: str
    title: str
    description: str
    identifier_exists: bool
    price: Price
    brand: Optional[str] = None
    gtins: Optional[list[str]] = None
    mpn: Optional[str] = None

    # Links
    link: Optional[str] = None
    canonical_link: Optional[str] = None

    # Images
    image_link: Optional[str] = None
    additional_image_links: Optional[list[str]] = None

    # Price, condition, availability
    sale_price: Optional[Price] = None
    sale_price_effective_date: Optional[SalePriceEffectiveDate] = None
    auto_pricing_min_price: Optional[Price] = None
    maximum_retail_price: Optional[Price] = None
    condition: Optional[str] = None
    availability: Optional[str] = None
    product_types: Optional[list[str]] = None
    google_product_category: Optional[str] = None

    # Labels
    custom_label0: Optional[str] = None
    custom_label1: Optional[str] = None
    custom_label2: Optional[str] = None
    custom_label3: Optional[str] = None
    custom_label4: Optional[str] = None

    # Apparel
    gender: Optional[str] = None
    age_group: Optional[str] = None
    size: Optional[str] = None
    size_types: Optional[list[str]] = None
    size_system: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    pattern: Optional[str] = None

    # Additional details
    adult: Optional[bool] = None
    is_bundle: Optional[bool] = None
    multipack: Optional[int] = None
    energy_efficiency_class: Optional[str] = None
    min_energy_efficiency_class: Optional[str] = None
    max_energy_efficiency_class: Optional[str] = None
    product_highlights: Optional[list[str]] = None
    certifications: Optional[list[Certification]] = None

    # Shipping
    shipping_label: Optional[str] = None
    shipping_weight: Optional[Dimension] = None
    shipping_length: Optional[Dimension] = None
    shipping_width: Optional[Dimension] = None
    shipping_height: Optional[Dimension] = None
    transit_time_label: Optional[str] = None
    min_handling_time: Optional[int] = None
    max_handling_time: Optional[int] = None


class ProductInput(PayloadSchema):
    """
    One offer, keyed by channel~contentLanguage~feedLabel~offerId.

    name is only set when the Merchant Center account id is known.
    """

    name: Optional[str] = None
    channel: str
    offer_id: str
    content_language: str
    feed_label: str
    attributes: ProductAttributes
    custom_attributes: list[CustomAttribute] = Field(default_factory=list)


class TransformFailure(PayloadSchema):
    """One input of a batch that could not be transformed."""

    index: int
    variant_id: Optional[str] = None
    error: dict


class BatchTransformResult(PayloadSchema):
    """Outcome of transforming a feed export batch."""

    products: list[ProductInput] = Field(default_factory=list)
    failures: list[TransformFailure] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.products)

    @property
    def failed(self) -> int:
        return len(self.failures)
