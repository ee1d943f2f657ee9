"""
Per-variant field-mapping document.

The document is written by merchants in the feed editor and stored
as JSON on the feed/product/variant join row. It has one optional
object per field group; every key inside a group is optional.

Parsing is lenient: a value of the wrong type is dropped (the rest of
the group survives), a group that is not an object is dropped, and
unknown groups or keys are ignored.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Optional, Union

import structlog
from pydantic import ConfigDict, Field, ValidationError as PydanticValidationError, field_validator, model_validator

from models.base import BaseSchema

logger = structlog.get_logger(__name__)


# ===================
# SELECTORS
# ===================

class BrandSource(str, Enum):
    """Where the brand attribute is read from."""
    VENDOR = "vendor"
    STORE_NAME = "store_name"
    PRIMARY_DOMAIN = "primary_domain"


class PriceSource(str, Enum):
    """Which variant price feeds price / salePrice."""
    PRICE = "price"
    COMPARE_AT_PRICE = "compare_at_price"


class ProductTypeSource(str, Enum):
    """Where productTypes entries are read from."""
    PRODUCT_TYPE = "product_type"
    CATEGORY_NAME = "category_name"
    CATEGORY_FULLNAME = "category_fullname"
    COLLECTIONS = "collections"
    TAGS = "tags"


class LinkSource(str, Enum):
    """Shape of the outbound product link."""
    PRODUCT_URL = "product_url"
    PRODUCT_CHECKOUT_URL = "product_checkout_url"
    CANONICAL_URL = "canonical_url"


def _as_string_list(value: Any) -> Any:
    """Accept a single string where a list of strings is expected."""
    if isinstance(value, str):
        return [value]
    return value


# ===================
# GROUPS
# ===================

class MappingGroup(BaseSchema):
    """
    Base for one field group.

    Values are kept verbatim (no whitespace stripping); templates are
    substituted literally and emptiness is decided when resolving.

    LEGACY_KEYS renames keys written by older editor versions before
    validation, e.g. {"minimun_handling_time": "min_handling_time"}.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    LEGACY_KEYS: ClassVar[dict[str, str]] = {}


class ProductDetailsMapping(MappingGroup):
    """Overrides for identity, title, description, brand and identifiers."""

    item_group_id: Optional[str] = None
    product_id: Optional[str] = None
    product_title: Optional[str] = None
    description: Optional[str] = None
    brand: Optional[str] = Field(None, description="BrandSource value")
    product_identifier: Optional[bool] = Field(None, description="identifierExists override")
    gtin: Optional[str] = None
    mpn: Optional[str] = None


class LinksMapping(MappingGroup):
    """Link shape selector and per-parameter UTM overrides."""

    product_url: Optional[str] = Field(None, description="LinkSource value")
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None


class ProductImagesMapping(MappingGroup):
    """Image overrides (literal URLs)."""

    main_image: Optional[str] = None
    additional_images: Optional[list[str]] = None

    @field_validator("additional_images", mode="before")
    @classmethod
    def single_image_as_list(cls, v: Any) -> Any:
        return _as_string_list(v)


class PriceConditionAvailabilityMapping(MappingGroup):
    """Price sources, sale window, condition, availability and categorisation."""

    price: Optional[str] = Field(None, description="PriceSource value")
    enable_sale_price: Optional[bool] = None
    sale_price: Optional[str] = Field(None, description="PriceSource value")
    sale_start_date: Optional[str] = None
    sale_end_date: Optional[str] = None
    auto_pricing_min_price: Optional[str] = Field(None, description="Decimal amount, not micros")
    maximum_retail_price: Optional[str] = Field(None, description="Decimal amount, not micros")
    condition: Optional[str] = None
    availability: Optional[str] = None
    product_type: Optional[str] = Field(None, description="ProductTypeSource value")
    google_product_category: Optional[str] = None


class LabelsMapping(MappingGroup):
    """Custom labels 0-4."""

    custom_label_0: Optional[str] = None
    custom_label_1: Optional[str] = None
    custom_label_2: Optional[str] = None
    custom_label_3: Optional[str] = None
    custom_label_4: Optional[str] = None


class ApparelProductDetailsMapping(MappingGroup):
    """Apparel attributes, override-only."""

    gender: Optional[str] = None
    age_group: Optional[str] = None
    size: Optional[str] = None
    size_type: Optional[list[str]] = None
    size_system: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    pattern: Optional[str] = None

    @field_validator("size_type", mode="before")
    @classmethod
    def single_size_type_as_list(cls, v: Any) -> Any:
        return _as_string_list(v)


class CertificationMapping(BaseSchema):
    """One certification as entered in the editor."""

    model_config = ConfigDict(str_strip_whitespace=False)

    authority: Optional[str] = None
    name: Optional[str] = None
    code: Optional[str] = None
    value: Optional[str] = None


class AdditionalDetailsMapping(MappingGroup):
    """Adult/bundle/multipack flags, energy labels, highlights, certifications."""

    adult: Optional[bool] = None
    is_bundle: Optional[bool] = None
    multipack: Optional[int] = None
    energy_efficiency_class: Optional[str] = None
    min_energy_efficiency_class: Optional[str] = None
    max_energy_efficiency_class: Optional[str] = None
    product_highlights: Optional[list[str]] = None
    certifications: Optional[list[CertificationMapping]] = None

    @field_validator("product_highlights", mode="before")
    @classmethod
    def single_highlight_as_list(cls, v: Any) -> Any:
        return _as_string_list(v)


class ShippingAndReturnsMapping(MappingGroup):
    """Shipping label, package dimensions, handling times, return policy labels."""

    LEGACY_KEYS: ClassVar[dict[str, str]] = {
        "minimun_handling_time": "min_handling_time",
    }

    shipping_label: Optional[str] = None
    shipping_weight_value: Optional[float] = None
    shipping_weight_unit: Optional[str] = None
    shipping_length_value: Optional[float] = None
    shipping_length_unit: Optional[str] = None
    shipping_width_value: Optional[float] = None
    shipping_width_unit: Optional[str] = None
    shipping_height_value: Optional[float] = None
    shipping_height_unit: Optional[str] = None
    transit_time_label: Optional[str] = None
    min_handling_time: Optional[int] = None
    maximum_handling_time: Optional[int] = None
    return_policy_labels: Optional[list[str]] = None

    @field_validator("return_policy_labels", mode="before")
    @classmethod
    def single_label_as_list(cls, v: Any) -> Any:
        return _as_string_list(v)


AdditionalAttributeValue = Union[str, list[str]]


# ===================
# DOCUMENT
# ===================

GROUP_MODELS: dict[str, type[MappingGroup]] = {
    "product_details": ProductDetailsMapping,
    "links": LinksMapping,
    "product_images": ProductImagesMapping,
    "price_condition_availability": PriceConditionAvailabilityMapping,
    "labels": LabelsMapping,
    "apparel_product_details": ApparelProductDetailsMapping,
    "additional_details": AdditionalDetailsMapping,
    "shipping_and_returns": ShippingAndReturnsMapping,
}


def _attribute_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_group(group: str, model: type[MappingGroup], raw: Any) -> Optional[MappingGroup]:
    """
    Validate one field group, dropping keys whose values do not fit.

    Returns:
        The parsed group, or None when the group is not an object
    """
    if not isinstance(raw, Mapping):
        logger.warning(
            "field_mapping_group_dropped",
            group=group,
            reason="not an object",
        )
        return None

    values = {str(key): value for key, value in raw.items()}
    for legacy, current in model.LEGACY_KEYS.items():
        if legacy in values and current not in values:
            values[current] = values.pop(legacy)

    while True:
        try:
            return model.model_validate(values)
        except PydanticValidationError as e:
            bad_keys = {
                err["loc"][0] for err in e.errors()
                if err["loc"] and err["loc"][0] in values
            }
            if not bad_keys:
                logger.warning(
                    "field_mapping_group_dropped",
                    group=group,
                    reason=str(e),
                )
                return None
            for key in sorted(bad_keys):
                logger.warning(
                    "field_mapping_value_dropped",
                    group=group,
                    key=key,
                )
                values.pop(key)


def parse_additional_attributes(raw: Any) -> Optional[dict[str, AdditionalAttributeValue]]:
    """
    Normalise additional_product_attributes to name → str | list[str].

    Insertion order is kept; it decides customAttributes order.
    """
    if not isinstance(raw, Mapping):
        logger.warning(
            "field_mapping_group_dropped",
            group="additional_product_attributes",
            reason="not an object",
        )
        return None

    attributes: dict[str, AdditionalAttributeValue] = {}
    for name, value in raw.items():
        if isinstance(value, (list, tuple)):
            attributes[str(name)] = [_attribute_text(item) for item in value]
        else:
            attributes[str(name)] = _attribute_text(value)
    return attributes


class FieldMapping(BaseSchema):
    """
    The whole override document.

    An absent group means "use defaults" for every field of that group.
    """

    product_details: Optional[ProductDetailsMapping] = None
    links: Optional[LinksMapping] = None
    product_images: Optional[ProductImagesMapping] = None
    price_condition_availability: Optional[PriceConditionAvailabilityMapping] = None
    labels: Optional[LabelsMapping] = None
    apparel_product_details: Optional[ApparelProductDetailsMapping] = None
    additional_details: Optional[AdditionalDetailsMapping] = None
    shipping_and_returns: Optional[ShippingAndReturnsMapping] = None
    additional_product_attributes: Optional[dict[str, AdditionalAttributeValue]] = None

    @model_validator(mode="before")
    @classmethod
    def parse_lenient(cls, data: Any) -> Any:
        """Validate group by group so one bad value never sinks the document."""
        if data is None:
            return {}
        if isinstance(data, FieldMapping):
            return data
        if not isinstance(data, Mapping):
            logger.warning(
                "field_mapping_dropped",
                reason="not an object",
            )
            return {}

        parsed: dict[str, Any] = {}
        for group, model in GROUP_MODELS.items():
            raw = data.get(group)
            if raw is None:
                continue
            if isinstance(raw, model):
                parsed[group] = raw
                continue
            parsed[group] = parse_group(group, model, raw)

        raw_attributes = data.get("additional_product_attributes")
        if raw_attributes is not None:
            parsed["additional_product_attributes"] = parse_additional_attributes(raw_attributes)

        return parsed
