"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for input schemas.

    Features:
        - Auto-trim whitespace from strings
        - Numbers accepted where text is expected (ids, barcodes)
        - Allow ORM objects (from_attributes)
        - Unknown keys ignored
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class PayloadSchema(BaseModel):
    """
    Base for Merchant API payload schemas.

    Python attributes are snake_case; the wire names are camelCase.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Dump with camelCase keys, absent optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
