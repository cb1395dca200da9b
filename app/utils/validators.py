"""
Validation utilities for the Property Marketplace API.
Provides per-field-kind validators and the payload validator shared by create and update paths.
"""

import enum
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from email_validator import validate_email, EmailNotValidError

from app.utils.exceptions import ValidationError, BadRequestError, NoUpdatesError


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Largest values the Integer and BigInteger columns can hold on every backend
MAX_INTEGER = 2 ** 31 - 1
MAX_BIG_INTEGER = 2 ** 63 - 1


def to_error_code(name: str) -> str:
    """Turn a camelCase field or parameter name into an error code suffix, e.g. yearBuilt -> YEAR_BUILT."""
    return _CAMEL_BOUNDARY.sub("_", name).upper()


def is_blank(value: Any) -> bool:
    """A value counts as missing when it is absent, null or a whitespace-only string."""
    return value is None or (isinstance(value, str) and not value.strip())


def _invalid(code: str, message: str) -> ValidationError:
    return ValidationError(f"INVALID_{code}", message)


class ValidationUtils:
    """
    Field-kind validators.

    Every validator takes the raw JSON value, a human label and the error code
    suffix of the field. It returns the normalised value or raises
    ValidationError with code INVALID_<SUFFIX>.
    """

    @staticmethod
    def validate_string(value: Any, label: str, code: str) -> str:
        """Non-empty string; surrounding whitespace is stripped."""
        if not isinstance(value, str) or not value.strip():
            raise _invalid(code, f"{label} must be a non-empty string")
        return value.strip()

    @staticmethod
    def validate_optional_string(value: Any, label: str, code: str) -> Optional[str]:
        """String or null; blank strings are stored as null."""
        if value is None:
            return None
        if not isinstance(value, str):
            raise _invalid(code, f"{label} must be a string")
        return value.strip() or None

    @staticmethod
    def validate_positive_int(value: Any, label: str, code: str, maximum: int = MAX_INTEGER) -> int:
        """Integer strictly greater than zero and at most maximum. Integral floats such as 2.0 are accepted."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid(code, f"{label} must be a positive integer")
        if isinstance(value, float):
            if not value.is_integer():
                raise _invalid(code, f"{label} must be a positive integer")
            value = int(value)
        if value <= 0:
            raise _invalid(code, f"{label} must be a positive integer")
        if value > maximum:
            raise _invalid(code, f"{label} must be at most {maximum}")
        return value

    @staticmethod
    def validate_positive_big_int(value: Any, label: str, code: str) -> int:
        """Positive integer for BigInteger columns such as price and area."""
        return ValidationUtils.validate_positive_int(value, label, code, maximum=MAX_BIG_INTEGER)

    @staticmethod
    def validate_positive_number(value: Any, label: str, code: str) -> float:
        """Finite number strictly greater than zero."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid(code, f"{label} must be a positive number")
        if not math.isfinite(value) or value <= 0:
            raise _invalid(code, f"{label} must be a positive number")
        return value

    @staticmethod
    def validate_choice(value: Any, label: str, code: str, choices: Type[enum.Enum]) -> enum.Enum:
        """Membership in a fixed set of literal values."""
        allowed = [member.value for member in choices]
        if not isinstance(value, str) or value not in allowed:
            raise _invalid(code, f"{label} must be one of: {', '.join(allowed)}")
        return choices(value)

    @staticmethod
    def validate_email_address(value: Any, label: str, code: str) -> str:
        """
        Email address of the form local@domain where the domain contains a dot.
        The address is stored trimmed and lower-cased.
        """
        if not isinstance(value, str) or not value.strip():
            raise _invalid(code, f"{label} must be a non-empty string")

        email = value.strip()
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise _invalid(code, f"{label} must be a valid email address: {e}")
        return email.lower()

    @staticmethod
    def validate_string_list(value: Any, label: str, code: str) -> List[str]:
        """Ordered list of non-empty strings. An empty list is allowed."""
        if not isinstance(value, list):
            raise _invalid(code, f"{label} must be an array of strings")
        items = []
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise _invalid(code, f"{label} must contain only non-empty strings")
            items.append(item.strip())
        return items

    @staticmethod
    def validate_boolean(value: Any, label: str, code: str) -> bool:
        """JSON boolean."""
        if not isinstance(value, bool):
            raise _invalid(code, f"{label} must be a boolean")
        return value

    @staticmethod
    def validate_id(value: Any, label: str, code: str) -> int:
        """Positive integer id, given as a number or a numeric string."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0 or value > MAX_INTEGER:
            raise _invalid(code, f"{label} must be a valid integer")
        return value


def choice_of(choices: Type[enum.Enum]) -> Callable[[Any, str, str], enum.Enum]:
    """Bind an enum to the choice validator."""
    def validator(value: Any, label: str, code: str) -> enum.Enum:
        return ValidationUtils.validate_choice(value, label, code, choices)
    return validator


@dataclass(frozen=True)
class FieldRule:
    """
    How one JSON field of a request body is validated and where it is stored.

    key: JSON key in the request body (camelCase)
    attr: model attribute name
    label: human-readable field name used in messages
    validator: one of the ValidationUtils validators
    required: whether create requests must supply the field
    default: factory for the value used on create when an optional field is absent
    nullable: whether an explicit null is stored as-is on update
    """

    key: str
    attr: str
    label: str
    validator: Callable[[Any, str, str], Any]
    required: bool = True
    default: Optional[Callable[[], Any]] = None
    nullable: bool = False
    code: str = field(default="")

    def __post_init__(self):
        if not self.code:
            object.__setattr__(self, "code", to_error_code(self.key))


def validate_payload(
    body: Any,
    rules: Sequence[FieldRule],
    partial: bool = False
) -> Dict[str, Any]:
    """
    Validate a JSON request body against an ordered rule table.

    Create (partial=False): every required field must be present and
    non-blank, otherwise MISSING_<FIELD>; optional fields get their default.
    Update (partial=True): only fields present in the body are validated;
    unknown keys are ignored and an update with nothing to apply raises
    NO_UPDATES.

    The first failing field raises ValidationError, so callers never see a
    partially validated payload.

    Returns:
        Dictionary keyed by model attribute name
    """
    if not isinstance(body, Mapping):
        raise BadRequestError("Request body must be a JSON object", error_code="INVALID_BODY")

    data: Dict[str, Any] = {}

    for rule in rules:
        present = rule.key in body
        value = body.get(rule.key)

        if partial:
            if not present:
                continue
            if value is None and rule.nullable:
                data[rule.attr] = None
                continue
        elif is_blank(value):
            if rule.required:
                raise ValidationError(f"MISSING_{rule.code}", f"{rule.label} is required", field=rule.key)
            data[rule.attr] = rule.default() if rule.default else None
            continue

        data[rule.attr] = rule.validator(value, rule.label, rule.code)

    if partial and not data:
        raise NoUpdatesError()

    return data
