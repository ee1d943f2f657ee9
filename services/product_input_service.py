"""
Product input service for building Merchant API payloads.

Builds the Merchant API ProductInput for one product variant of one
feed. Every attribute follows the same policy:

    1. DEFAULT from feed / product / variant
    2. OVERRIDE from the variant's field mapping, when present
    3. TEMPLATE placeholders substituted ({{sku}}, {{product_title}}, ...)
    4. FORMAT (micros, case-normalized codes) and attach only if non-empty

The service holds no state and does no I/O. The only ambient input is
the clock used for the click-id token on product links; pass `now` to
freeze it.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, TypeVar, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from config import get_settings
from exceptions import InvalidTransformInputError, MissingRequiredFieldError
from models.field_mapping import (
    BrandSource,
    LinkSource,
    PriceSource,
    ProductTypeSource,
)
from models.merchant_input import (
    Feed,
    InventoryType,
    Product,
    ProductIdentifierType,
    ProductVariant,
    TransformInput,
)
from models.product_input import (
    BatchTransformResult,
    Certification,
    CustomAttribute,
    Dimension,
    Price,
    ProductAttributes,
    ProductInput,
    SalePriceEffectiveDate,
    TransformFailure,
)
from utils.price_utils import format_amount, parse_decimal, to_micros
from utils.template_utils import render_template
from utils.text_utils import (
    clean_text,
    normalize_currency_code,
    normalize_language_code,
    normalize_market_code,
    strip_url_scheme,
)
from utils.tracking_utils import append_query_params, encode_tracking_token

logger = structlog.get_logger(__name__)

SelectorT = TypeVar("SelectorT", bound=Enum)

RETURN_POLICY_ATTRIBUTE = "return_policy_label"
MULTI_VALUE_SEPARATOR = ","
CUSTOM_LABEL_COUNT = 5

# Default identifier templates when identifiers are enabled but the
# field mapping does not provide one.
DEFAULT_GTIN_TEMPLATE = "{{barcode}}"
DEFAULT_MPN_TEMPLATE = "{{sku}}"

CHANNEL = "ONLINE"
LINK_SCHEME = "https"


# ===================
# TEMPLATE PLACEHOLDERS
# ===================

def _seo_title(data: TransformInput) -> Optional[str]:
    return data.product.seo.title if data.product.seo else None


def _seo_description(data: TransformInput) -> Optional[str]:
    return data.product.seo.description if data.product.seo else None


# Applied in this order; each placeholder's first occurrence is replaced.
TEMPLATE_RESOLVERS: tuple[tuple[str, Callable[[TransformInput], Optional[str]]], ...] = (
    ("product_id", lambda d: d.feed_product_variant.product_id),
    ("variant_id", lambda d: d.feed_product_variant.variant_id),
    ("product_title", lambda d: d.product.title),
    ("variant_title", lambda d: d.variant.title),
    ("display_name", lambda d: d.variant.display_name or d.product.title),
    ("seo_title", _seo_title),
    ("seo_description", _seo_description),
    ("description", lambda d: d.product.description),
    ("sku", lambda d: d.variant.sku),
    ("barcode", lambda d: d.variant.barcode),
    ("shop_id", lambda d: d.feed.shop_id),
    ("price", lambda d: format_amount(d.variant.price)),
    ("compare_at_price", lambda d: format_amount(d.variant.compare_at_price)),
    ("vendor", lambda d: d.product.vendor),
    ("store_name", lambda d: d.shop.shop_name),
    ("primary_domain", lambda d: d.shop.domain),
)


# ===================
# SELECTOR DISPATCH
# ===================

BRAND_SOURCES: dict[BrandSource, Callable[[TransformInput], Optional[str]]] = {
    BrandSource.VENDOR: lambda d: d.product.vendor,
    BrandSource.STORE_NAME: lambda d: d.shop.shop_name,
    BrandSource.PRIMARY_DOMAIN: lambda d: d.shop.domain,
}

PRICE_SOURCES: dict[PriceSource, Callable[[ProductVariant], Optional[Decimal]]] = {
    PriceSource.PRICE: lambda v: v.price,
    PriceSource.COMPARE_AT_PRICE: lambda v: v.compare_at_price,
}


def _collection_titles(product: Product) -> list[str]:
    return [c.title for c in product.collections]


PRODUCT_TYPE_SOURCES: dict[ProductTypeSource, Callable[[Product], list[Optional[str]]]] = {
    ProductTypeSource.PRODUCT_TYPE: lambda p: [p.product_type],
    ProductTypeSource.CATEGORY_NAME: lambda p: [p.category.name if p.category else None],
    ProductTypeSource.CATEGORY_FULLNAME: lambda p: [p.category.full_name if p.category else None],
    ProductTypeSource.COLLECTIONS: _collection_titles,
    ProductTypeSource.TAGS: lambda p: list(p.tags),
}


def _product_page(domain: str, data: TransformInput) -> Optional[str]:
    handle = clean_text(data.product.handle)
    if handle is None:
        return None
    return f"{domain}/products/{handle}"


def _variant_page(domain: str, data: TransformInput) -> Optional[str]:
    page = _product_page(domain, data)
    if page is None:
        return None
    return f"{page}?variant={data.variant.id}"


def _checkout_page(domain: str, data: TransformInput) -> Optional[str]:
    return f"{domain}/cart/{data.variant.id}:1?storefront=true"


LINK_BUILDERS: dict[LinkSource, Callable[[str, TransformInput], Optional[str]]] = {
    LinkSource.PRODUCT_URL: _variant_page,
    LinkSource.PRODUCT_CHECKOUT_URL: _checkout_page,
    LinkSource.CANONICAL_URL: _product_page,
}


def select(selector: type[SelectorT], *candidates: Optional[str]) -> Optional[SelectorT]:
    """
    Pick the first candidate that names a member of `selector`.

    Candidates are tried in priority order (override first, then feed
    setting). Unrecognised values are skipped as if absent.
    """
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return selector(candidate.strip().lower())
        except ValueError:
            logger.debug(
                "selector_value_unrecognized",
                selector=selector.__name__,
                value=candidate,
            )
    return None


def first_template(*candidates: Optional[str]) -> Optional[str]:
    """First candidate with visible text, returned verbatim (spaces kept)."""
    for candidate in candidates:
        if clean_text(candidate) is not None:
            return candidate
    return None


def _clean_list(values: Optional[Iterable[Any]]) -> list[str]:
    """Drop None/blank entries, keep order."""
    if not values:
        return []
    cleaned = []
    for value in values:
        text = clean_text(value)
        if text is not None:
            cleaned.append(text)
    return cleaned


class ProductInputService:
    """
    Field resolver for Merchant API product inputs.

    Stateless: one instance can serve any number of concurrent calls.
    Each get_* method resolves one attribute (or one group) from a
    validated TransformInput.
    """

    # ===================
    # ENTRY POINTS
    # ===================

    def transform(
        self,
        data: Union[TransformInput, Mapping[str, Any]],
        now: Optional[datetime] = None,
    ) -> ProductInput:
        """
        Build the ProductInput for one variant.

        Args:
            data: TransformInput, or a mapping with the same shape
            now: Clock value for the click-id token (default: current UTC time)

        Returns:
            ProductInput ready for insert/patch

        Raises:
            InvalidTransformInputError: If the input does not have the expected shape
            MissingRequiredFieldError: If feed.language, feed.market or feed.currency is absent
        """
        data = self._coerce_input(data)
        self._check_preconditions(data.feed)

        if now is None:
            now = datetime.now(timezone.utc)

        channel = CHANNEL
        currency = normalize_currency_code(data.feed.currency)
        content_language = normalize_language_code(data.feed.language)
        feed_label = normalize_market_code(data.feed.market)
        offer_id = self.get_offer_id(data)
        identifier_exists = self.get_identifier_exists(data)

        attributes: dict[str, Any] = {
            "item_group_id": self.get_item_group_id(data),
            "title": self.get_title(data),
            "description": self.get_description(data),
            "identifier_exists": identifier_exists,
            "price": self.get_price(data, currency),
            "brand": self.get_brand(data),
            "link": self.get_link(data, now),
            "canonical_link": self.get_canonical_link(data),
            "image_link": self.get_image_link(data),
            "additional_image_links": self.get_additional_image_links(data),
            "auto_pricing_min_price": self.get_auto_pricing_min_price(data, currency),
            "maximum_retail_price": self.get_maximum_retail_price(data, currency),
            "condition": self.get_condition(data),
            "availability": self.get_availability(data),
            "product_types": self.get_product_types(data),
            "google_product_category": self.get_google_product_category(data),
        }

        gtins, mpn = self.get_gtins_mpn(data, identifier_exists)
        attributes["gtins"] = gtins
        attributes["mpn"] = mpn

        sale_price, sale_price_effective_date = self.get_sale_price(data, currency)
        attributes["sale_price"] = sale_price
        attributes["sale_price_effective_date"] = sale_price_effective_date

        for index, label in enumerate(self.get_custom_labels(data)):
            attributes[f"custom_label{index}"] = label

        attributes.update(self.get_apparel_attributes(data))
        attributes.update(self.get_additional_details(data))
        attributes.update(self.get_shipping_attributes(data))

        product_input = ProductInput(
            name=self.build_name(
                self.get_account_id(data.feed),
                channel,
                content_language,
                feed_label,
                offer_id,
            ),
            channel=channel,
            offer_id=offer_id,
            content_language=content_language,
            feed_label=feed_label,
            attributes=ProductAttributes(**attributes),
            custom_attributes=self.get_custom_attributes(data),
        )

        logger.debug(
            "product_input_transformed",
            feed_id=data.feed.id,
            product_id=data.feed_product_variant.product_id,
            variant_id=data.feed_product_variant.variant_id,
            offer_id=offer_id,
        )

        return product_input

    def transform_many(
        self,
        items: Iterable[Union[TransformInput, Mapping[str, Any]]],
        now: Optional[datetime] = None,
    ) -> BatchTransformResult:
        """
        Transform a batch of variants for one export run.

        Inputs that violate preconditions are reported as failures;
        the rest of the batch continues. All links in the batch share
        one click-id timestamp.

        Returns:
            BatchTransformResult with products in input order and failures by index
        """
        if now is None:
            now = datetime.now(timezone.utc)

        result = BatchTransformResult()

        for index, item in enumerate(items):
            try:
                result.products.append(self.transform(item, now=now))
            except InvalidTransformInputError as e:
                variant_id = self._variant_hint(item)
                logger.warning(
                    "transform_precondition_failed",
                    index=index,
                    variant_id=variant_id,
                    code=e.code,
                    error=e.message,
                )
                result.failures.append(
                    TransformFailure(index=index, variant_id=variant_id, error=e.to_dict())
                )

        logger.info(
            "batch_transform_completed",
            succeeded=result.succeeded,
            failed=result.failed,
        )

        return result

    # ===================
    # INPUT CHECKS
    # ===================

    def _coerce_input(self, data: Union[TransformInput, Mapping[str, Any]]) -> TransformInput:
        if isinstance(data, TransformInput):
            return data

        try:
            return TransformInput.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidTransformInputError(
                message="Transform input failed validation",
                details={
                    "errors": e.errors(include_url=False, include_context=False, include_input=False),
                },
            ) from e

    def _check_preconditions(self, feed: Feed) -> None:
        """Fields with no default: fail fast instead of emitting an invalid offer."""
        for field_name in ("language", "market", "currency"):
            if clean_text(getattr(feed, field_name)) is None:
                raise MissingRequiredFieldError(f"feed.{field_name}")

    @staticmethod
    def _variant_hint(item: Any) -> Optional[str]:
        """Best-effort variant id for failure reports."""
        if isinstance(item, TransformInput):
            return item.variant.id
        if isinstance(item, Mapping):
            variant = item.get("variant")
            if isinstance(variant, Mapping) and variant.get("id") is not None:
                return str(variant["id"])
        return None

    # ===================
    # TEMPLATES
    # ===================

    def render(self, template: Optional[str], data: TransformInput) -> str:
        """Substitute every known placeholder from the input."""
        if not template:
            return ""
        replacements = [(name, resolve(data)) for name, resolve in TEMPLATE_RESOLVERS]
        return render_template(template, replacements)

    # ===================
    # IDENTITY
    # ===================

    def get_account_id(self, feed: Feed) -> str:
        """Merchant Center account id from feed metadata, or ""."""
        merchant_center = feed.metadata.google_merchant_center if feed.metadata else None
        account = merchant_center.account if merchant_center else None
        return clean_text(account.account_id if account else None) or ""

    def build_name(
        self,
        account_id: str,
        channel: str,
        content_language: str,
        feed_label: str,
        offer_id: str,
    ) -> Optional[str]:
        """
        accounts/{accountId}/productInputs/{channel}~{contentLanguage}~{feedLabel}~{offerId}

        None when the account id is unknown, so the field is omitted.
        """
        if not account_id:
            return None
        return (
            f"accounts/{account_id}/productInputs/"
            f"{channel}~{content_language}~{feed_label}~{offer_id}"
        )

    def get_offer_id(self, data: TransformInput) -> str:
        """
        Offer id.

        1) feed_product_variant.metadata.google_merchant_center.offer_id, verbatim
        2) field_mapping.product_details.product_id template
        3) feed.product_settings.product_id template
        Empty string when none is set.
        """
        metadata = data.feed_product_variant.metadata
        merchant_center = metadata.google_merchant_center if metadata else None
        offer_id = clean_text(merchant_center.offer_id if merchant_center else None)
        if offer_id:
            return offer_id

        details = data.feed_product_variant.field_mapping.product_details
        feed_settings = data.feed.product_settings
        template = first_template(
            details.product_id if details else None,
            feed_settings.product_id if feed_settings else None,
        )
        return self.render(template, data)

    def get_item_group_id(self, data: TransformInput) -> str:
        """Default: product id. Override: product_details.item_group_id template."""
        default = data.feed_product_variant.product_id
        details = data.feed_product_variant.field_mapping.product_details
        template = first_template(details.item_group_id if details else None)
        if template is None:
            return default
        return self.render(template, data) or default

    # ===================
    # PRODUCT DETAILS
    # ===================

    def get_title(self, data: TransformInput) -> str:
        """Feed title template, replaced wholesale by product_details.product_title."""
        details = data.feed_product_variant.field_mapping.product_details
        feed_settings = data.feed.product_settings
        template = first_template(
            details.product_title if details else None,
            feed_settings.product_title if feed_settings else None,
        )
        return self.render(template, data)

    def get_description(self, data: TransformInput) -> str:
        """Feed description template, replaced wholesale by product_details.description."""
        details = data.feed_product_variant.field_mapping.product_details
        feed_settings = data.feed.product_settings
        template = first_template(
            details.description if details else None,
            feed_settings.product_description if feed_settings else None,
        )
        return self.render(template, data)

    def get_brand(self, data: TransformInput) -> Optional[str]:
        """Brand read from the source the override (or feed setting) selects."""
        details = data.feed_product_variant.field_mapping.product_details
        feed_settings = data.feed.product_settings
        source = select(
            BrandSource,
            details.brand if details else None,
            feed_settings.brand_submission if feed_settings else None,
        )
        if source is None:
            return None
        return clean_text(BRAND_SOURCES[source](data))

    def get_identifier_exists(self, data: TransformInput) -> bool:
        details = data.feed_product_variant.field_mapping.product_details
        if details and details.product_identifier is not None:
            return details.product_identifier
        return False

    def get_gtins_mpn(
        self,
        data: TransformInput,
        identifier_exists: bool,
    ) -> tuple[Optional[list[str]], Optional[str]]:
        """
        GTINs or MPN, never both.

        Only when identifierExists is true and the feed submits gtin or mpn.
        Templates default to {{barcode}} (GTIN) and {{sku}} (MPN); a value
        that renders blank is omitted.

        Returns:
            (gtins, mpn)
        """
        if not identifier_exists:
            return None, None

        feed_settings = data.feed.product_settings
        identifier_type = select(
            ProductIdentifierType,
            feed_settings.product_identifier if feed_settings else None,
        )
        details = data.feed_product_variant.field_mapping.product_details

        if identifier_type == ProductIdentifierType.GTIN:
            template = first_template(details.gtin if details else None, DEFAULT_GTIN_TEMPLATE)
            gtin = self.render(template, data).strip()
            return ([gtin] if gtin else None), None

        if identifier_type == ProductIdentifierType.MPN:
            template = first_template(details.mpn if details else None, DEFAULT_MPN_TEMPLATE)
            mpn = self.render(template, data).strip()
            return None, (mpn or None)

        return None, None

    # ===================
    # LINKS
    # ===================

    def get_link(self, data: TransformInput, now: datetime) -> Optional[str]:
        """
        Outbound product link with UTM parameters and click-id token.

        links.product_url selects the shape:
            product_url          {domain}/products/{handle}?variant={variant_id}  (default)
            product_checkout_url {domain}/cart/{variant_id}:1?storefront=true
            canonical_url        {domain}/products/{handle}
        """
        domain = strip_url_scheme(data.shop.domain)
        if domain is None:
            return None

        links = data.feed_product_variant.field_mapping.links
        source = select(LinkSource, links.product_url if links else None) or LinkSource.PRODUCT_URL

        path = LINK_BUILDERS[source](domain, data)
        if path is None:
            return None

        return append_query_params(f"{LINK_SCHEME}://{path}", self.get_tracking_params(data, now))

    def get_tracking_params(self, data: TransformInput, now: datetime) -> list[tuple[str, Optional[str]]]:
        """
        UTM parameters (override wins per parameter over feed tracking),
        then the click-id token.
        """
        tracking = data.feed.tracking
        links = data.feed_product_variant.field_mapping.links

        params: list[tuple[str, Optional[str]]] = []
        for name in ("utm_source", "utm_medium", "utm_campaign"):
            value = (
                clean_text(getattr(links, name) if links else None)
                or clean_text(getattr(tracking, name) if tracking else None)
            )
            params.append((name, value))

        token = encode_tracking_token(data.feed.id, data.feed.shop_id, now)
        params.append((get_settings().tracking_param_name, token))
        return params

    def get_canonical_link(self, data: TransformInput) -> Optional[str]:
        """{scheme}://{domain}/products/{handle}, no variant parameter."""
        domain = strip_url_scheme(data.shop.domain)
        if domain is None:
            return None
        page = _product_page(domain, data)
        if page is None:
            return None
        return f"{LINK_SCHEME}://{page}"

    # ===================
    # IMAGES
    # ===================

    def get_image_link(self, data: TransformInput) -> Optional[str]:
        images = data.feed_product_variant.field_mapping.product_images
        override = clean_text(images.main_image if images else None)
        return override or clean_text(data.main_image)

    def get_additional_image_links(self, data: TransformInput) -> Optional[list[str]]:
        images = data.feed_product_variant.field_mapping.product_images
        links = _clean_list(images.additional_images if images else None)
        return links or None

    # ===================
    # PRICE, CONDITION, AVAILABILITY
    # ===================

    def get_price(self, data: TransformInput, currency: str) -> Price:
        """
        Variant price in micros.

        price_condition_availability.price selects price or compare_at_price.
        """
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        source = select(PriceSource, pca.price if pca else None) or PriceSource.PRICE
        return Price(
            amount_micros=to_micros(PRICE_SOURCES[source](data.variant)),
            currency_code=currency,
        )

    def get_sale_price(
        self,
        data: TransformInput,
        currency: str,
    ) -> tuple[Optional[Price], Optional[SalePriceEffectiveDate]]:
        """
        Sale price and effective window.

        Both the feed and the variant's field mapping must enable sale
        prices. The amount comes from the variant price that sale_price
        selects (default: price). Dates are taken verbatim; the window is
        omitted when neither date is set.

        Returns:
            (salePrice, salePriceEffectiveDate)
        """
        feed_settings = data.feed.product_settings
        if not (feed_settings and feed_settings.enable_sale_price):
            return None, None

        pca = data.feed_product_variant.field_mapping.price_condition_availability
        if not (pca and pca.enable_sale_price):
            return None, None

        source = select(PriceSource, pca.sale_price) or PriceSource.PRICE
        sale_price = Price(
            amount_micros=to_micros(PRICE_SOURCES[source](data.variant)),
            currency_code=currency,
        )

        start_time = clean_text(pca.sale_start_date)
        end_time = clean_text(pca.sale_end_date)
        effective_date = None
        if start_time or end_time:
            effective_date = SalePriceEffectiveDate(start_time=start_time, end_time=end_time)

        return sale_price, effective_date

    def _override_price(self, value: Optional[str], field_name: str, currency: str) -> Optional[Price]:
        """Decimal override → Price; unparsable values are dropped."""
        if clean_text(value) is None:
            return None

        amount = parse_decimal(value)
        if amount is None:
            logger.debug(
                "price_override_unparsable",
                field=field_name,
                value=value,
            )
            return None

        return Price(amount_micros=to_micros(amount), currency_code=currency)

    def get_auto_pricing_min_price(self, data: TransformInput, currency: str) -> Optional[Price]:
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        return self._override_price(
            pca.auto_pricing_min_price if pca else None,
            "auto_pricing_min_price",
            currency,
        )

    def get_maximum_retail_price(self, data: TransformInput, currency: str) -> Optional[Price]:
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        return self._override_price(
            pca.maximum_retail_price if pca else None,
            "maximum_retail_price",
            currency,
        )

    def get_condition(self, data: TransformInput) -> Optional[str]:
        """Override only."""
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        return clean_text(pca.condition if pca else None)

    def get_availability(self, data: TransformInput) -> Optional[str]:
        """
        Default from feed inventory: custom_setting for the custom type,
        the type itself otherwise. Override replaces.
        """
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        override = clean_text(pca.availability if pca else None)
        if override:
            return override

        inventory = data.feed.inventory
        inventory_type = clean_text(inventory.type if inventory else None)
        if inventory_type is None:
            return None
        if inventory_type == InventoryType.CUSTOM.value:
            return clean_text(inventory.custom_setting)
        return inventory_type

    def get_product_types(self, data: TransformInput) -> Optional[list[str]]:
        """
        productTypes from the source price_condition_availability.product_type
        selects (default: product_type). Collections and tags can give
        several entries.
        """
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        source = (
            select(ProductTypeSource, pca.product_type if pca else None)
            or ProductTypeSource.PRODUCT_TYPE
        )
        product_types = _clean_list(PRODUCT_TYPE_SOURCES[source](data.product))
        return product_types or None

    def get_google_product_category(self, data: TransformInput) -> Optional[str]:
        """Default: feed metadata product_category_id. Override replaces."""
        pca = data.feed_product_variant.field_mapping.price_condition_availability
        override = clean_text(pca.google_product_category if pca else None)
        if override:
            return override

        metadata = data.feed.metadata
        merchant_center = metadata.google_merchant_center if metadata else None
        return clean_text(merchant_center.product_category_id if merchant_center else None)

    # ===================
    # LABELS
    # ===================

    def get_custom_labels(self, data: TransformInput) -> list[Optional[str]]:
        """customLabel0..4, positional; missing labels are None."""
        labels = data.feed_product_variant.field_mapping.labels
        if labels is None:
            return [None] * CUSTOM_LABEL_COUNT
        return [
            clean_text(getattr(labels, f"custom_label_{index}"))
            for index in range(CUSTOM_LABEL_COUNT)
        ]

    # ===================
    # APPAREL
    # ===================

    def get_apparel_attributes(self, data: TransformInput) -> dict[str, Any]:
        """Apparel attributes present in the override group."""
        apparel = data.feed_product_variant.field_mapping.apparel_product_details
        if apparel is None:
            return {}

        attributes = {
            "gender": clean_text(apparel.gender),
            "age_group": clean_text(apparel.age_group),
            "size": clean_text(apparel.size),
            "size_types": _clean_list(apparel.size_type) or None,
            "size_system": clean_text(apparel.size_system),
            "color": clean_text(apparel.color),
            "material": clean_text(apparel.material),
            "pattern": clean_text(apparel.pattern),
        }
        return {key: value for key, value in attributes.items() if value is not None}

    # ===================
    # ADDITIONAL DETAILS
    # ===================

    def get_certifications(self, data: TransformInput) -> Optional[list[Certification]]:
        """Editor certifications renamed to the API's certification* fields."""
        details = data.feed_product_variant.field_mapping.additional_details
        if details is None or not details.certifications:
            return None

        return [
            Certification(
                certification_authority=certification.authority or "",
                certification_name=certification.name or "",
                certification_code=certification.code or "",
                certification_value=certification.value or "",
            )
            for certification in details.certifications
        ]

    def get_additional_details(self, data: TransformInput) -> dict[str, Any]:
        """
        Adult/bundle flags (only when true), multipack, energy labels,
        highlights and certifications from the override group.
        """
        details = data.feed_product_variant.field_mapping.additional_details
        if details is None:
            return {}

        attributes = {
            "adult": True if details.adult else None,
            "is_bundle": True if details.is_bundle else None,
            "multipack": details.multipack or None,
            "energy_efficiency_class": clean_text(details.energy_efficiency_class),
            "min_energy_efficiency_class": clean_text(details.min_energy_efficiency_class),
            "max_energy_efficiency_class": clean_text(details.max_energy_efficiency_class),
            "product_highlights": _clean_list(details.product_highlights) or None,
            "certifications": self.get_certifications(data),
        }
        return {key: value for key, value in attributes.items() if value is not None}

    # ===================
    # SHIPPING AND RETURNS
    # ===================

    def get_shipping_attributes(self, data: TransformInput) -> dict[str, Any]:
        """Shipping label, package dimensions, transit label, handling times."""
        shipping = data.feed_product_variant.field_mapping.shipping_and_returns
        if shipping is None:
            return {}

        attributes: dict[str, Any] = {
            "shipping_label": clean_text(shipping.shipping_label),
            "transit_time_label": clean_text(shipping.transit_time_label),
            "min_handling_time": shipping.min_handling_time,
            "max_handling_time": shipping.maximum_handling_time,
        }

        for dimension in ("weight", "length", "width", "height"):
            value = getattr(shipping, f"shipping_{dimension}_value")
            if value is None:
                continue
            attributes[f"shipping_{dimension}"] = Dimension(
                value=value,
                unit=clean_text(getattr(shipping, f"shipping_{dimension}_unit")),
            )

        return {key: value for key, value in attributes.items() if value is not None}

    def get_return_policy_labels(self, data: TransformInput) -> list[str]:
        shipping = data.feed_product_variant.field_mapping.shipping_and_returns
        return _clean_list(shipping.return_policy_labels if shipping else None)

    # ===================
    # CUSTOM ATTRIBUTES
    # ===================

    def get_custom_attributes(self, data: TransformInput) -> list[CustomAttribute]:
        """
        return_policy_label first (labels joined with ","), then every
        additional_product_attributes entry in mapping order. Values are
        text; list values are joined with ",". No de-duplication.
        """
        custom_attributes: list[CustomAttribute] = []

        return_policy_labels = self.get_return_policy_labels(data)
        if return_policy_labels:
            custom_attributes.append(
                CustomAttribute(
                    name=RETURN_POLICY_ATTRIBUTE,
                    value=MULTI_VALUE_SEPARATOR.join(return_policy_labels),
                )
            )

        additional = data.feed_product_variant.field_mapping.additional_product_attributes or {}
        for name, value in additional.items():
            if isinstance(value, list):
                value = MULTI_VALUE_SEPARATOR.join(value)
            custom_attributes.append(CustomAttribute(name=name, value=value))

        return custom_attributes


# Singleton instance
_product_input_service: Optional[ProductInputService] = None


def get_product_input_service() -> ProductInputService:
    """Get or create ProductInputService instance."""
    global _product_input_service
    if _product_input_service is None:
        _product_input_service = ProductInputService()
    return _product_input_service


def transform_product_input(
    data: Union[TransformInput, Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> ProductInput:
    """Convenience wrapper around ProductInputService.transform."""
    return get_product_input_service().transform(data, now=now)
