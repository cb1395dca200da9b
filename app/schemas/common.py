"""
Shared schema configuration: camelCase JSON over snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialising attribute names as camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Acknowledgement for operations that return no record."""

    message: str = Field(..., description="Human-readable result", examples=["Property deleted successfully"])


class ListMeta(CamelModel):
    """Fields shared by every list envelope."""

    count: int = Field(..., description="Total number of matching records, ignoring pagination", ge=0)
    limit: int = Field(..., description="Page size that was applied", ge=1)
    offset: int = Field(..., description="Number of records skipped", ge=0)
    message: str = Field(..., description="Human-readable result")
