"""
Typed query-parameter parsing shared by every List endpoint.

Query strings arrive as text; these helpers turn them into typed values and
reject malformed input with a 400 INVALID_<PARAM> error instead of silently
ignoring it.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from fastapi import Query

from app.config import settings
from app.utils.exceptions import ValidationError
from app.utils.validators import MAX_INTEGER, to_error_code

T = TypeVar("T")

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class QueryParser:
    """Parsers for individual query-string parameters. Empty values count as absent."""

    @staticmethod
    def string(value: Optional[str]) -> Optional[str]:
        return _clean(value)

    @staticmethod
    def require(value: Optional[T], name: str) -> T:
        """Reject an absent parameter with MISSING_<PARAM>."""
        if value is None:
            raise ValidationError(f"MISSING_{to_error_code(name)}", f"{name} is required")
        return value

    @staticmethod
    def record_id(value: Optional[str], name: str = "id") -> int:
        """Required positive integer id."""
        return QueryParser.require(QueryParser.integer(value, name, minimum=1), name)

    @staticmethod
    def integer(
        value: Optional[str],
        name: str,
        minimum: Optional[int] = None,
        maximum: Optional[int] = MAX_INTEGER
    ) -> Optional[int]:
        """Parse a base-10 integer, optionally bounded below and never above what its column can hold."""
        value = _clean(value)
        if value is None:
            return None
        try:
            number = int(value)
        except ValueError:
            raise ValidationError(f"INVALID_{to_error_code(name)}", f"{name} must be a valid integer")
        if minimum is not None and number < minimum:
            raise ValidationError(f"INVALID_{to_error_code(name)}", f"{name} must be at least {minimum}")
        if maximum is not None and number > maximum:
            raise ValidationError(f"INVALID_{to_error_code(name)}", f"{name} must be at most {maximum}")
        return number

    @staticmethod
    def boolean(value: Optional[str], name: str) -> Optional[bool]:
        """Parse true/false, 1/0 or yes/no."""
        value = _clean(value)
        if value is None:
            return None
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValidationError(f"INVALID_{to_error_code(name)}", f"{name} must be 'true' or 'false'")

    @staticmethod
    def choice(
        value: Optional[str],
        name: str,
        choices: Type[enum.Enum],
        allow_all: bool = False
    ) -> Optional[enum.Enum]:
        """Parse an enum value. With allow_all, the literal 'all' means no filter."""
        value = _clean(value)
        if value is None or (allow_all and value == "all"):
            return None
        try:
            return choices(value)
        except ValueError:
            allowed = ", ".join(member.value for member in choices)
            raise ValidationError(f"INVALID_{to_error_code(name)}", f"Invalid {name}. Must be one of: {allowed}")


@dataclass(frozen=True)
class Pagination:
    """Validated page window."""

    limit: int
    offset: int


def parse_pagination(limit: Optional[str] = None, offset: Optional[str] = None) -> Pagination:
    """
    Resolve limit/offset query values.

    limit defaults to the configured page size and is capped at the configured
    maximum; offset defaults to 0.
    """
    parsed_limit = QueryParser.integer(limit, "limit", minimum=1, maximum=None)
    parsed_offset = QueryParser.integer(offset, "offset", minimum=0)

    if parsed_limit is None:
        parsed_limit = settings.default_page_size

    return Pagination(
        limit=min(parsed_limit, settings.max_page_size),
        offset=parsed_offset or 0,
    )


async def get_pagination(
    limit: Optional[str] = Query(None, description="Page size (default 10, capped at 100)"),
    offset: Optional[str] = Query(None, description="Number of records to skip"),
) -> Pagination:
    """FastAPI dependency wrapping parse_pagination."""
    return parse_pagination(limit, offset)
