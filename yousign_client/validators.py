"""
Field validation rules shared by the resource APIs.

Every check raises ArgumentError on the first violation and returns the
accepted value otherwise, so API methods can validate in signature order
with one call per field.
"""

import base64
import binascii
import re
from typing import Any, Collection, Dict, List, Optional

from .exceptions import ArgumentError

UUID_PATTERN = r"[0-9a-f]{8}-(?:[0-9a-f]{4}-){3}[0-9a-f]{12}"
UUID_REGEX = re.compile(UUID_PATTERN)
UUID_REGEX_BODY = re.compile(UUID_PATTERN)
EMAIL_REGEX = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+"
)
PHONE_REGEX = re.compile(r"\+?[1-9]\d{1,14}")

FILE_TYPES = ("signable", "attachment")


def is_uuid(value: Any) -> bool:
    """Check whether a value is a lowercase UUID string and nothing else."""
    return isinstance(value, str) and UUID_REGEX.fullmatch(value) is not None


def extract_uuid(value: Any) -> Optional[str]:
    """
    Return the first UUID embedded in a string.

    Server ids come back as paths such as "/users/<uuid>"; this pulls the
    bare identifier out of them.

    Args:
        value: String that may contain a UUID

    Returns:
        The UUID, or None when the value holds none
    """
    if not isinstance(value, str):
        return None
    match = UUID_REGEX_BODY.search(value)
    return match.group(0) if match else None


def require_string(field: str, value: Any, allow_empty: bool = False) -> str:
    """Require a string, non-empty unless allow_empty is set."""
    if not isinstance(value, str):
        raise ArgumentError(field, "is not in the form of a string")
    if not allow_empty and not value.strip():
        raise ArgumentError(field, "is empty")
    return value


def require_uuid(field: str, value: Any) -> str:
    """Require a string that is exactly one UUID."""
    require_string(field, value)
    if not is_uuid(value):
        raise ArgumentError(field, "is not a valid UUID")
    return value


def require_uuid_reference(field: str, value: Any) -> str:
    """Require a string that contains a UUID somewhere, e.g. "/procedures/<uuid>"."""
    require_string(field, value)
    if extract_uuid(value) is None:
        raise ArgumentError(field, "does not contain a valid UUID")
    return value


def require_email(field: str, value: Any) -> str:
    require_string(field, value)
    if len(value) > 254 or not EMAIL_REGEX.fullmatch(value):
        raise ArgumentError(field, "is not a valid email address")
    return value


def require_phone(field: str, value: Any) -> str:
    """Require an E.164-like phone number ("+33612345678")."""
    require_string(field, value)
    if not PHONE_REGEX.fullmatch(value):
        raise ArgumentError(field, "is not a valid phone number")
    return value


def require_pdf_name(field: str, value: Any) -> str:
    require_string(field, value)
    if not value.endswith(".pdf") or len(value) <= len(".pdf"):
        raise ArgumentError(field, "does not end with '.pdf'")
    return value


def require_base64(field: str, value: Any) -> str:
    """
    Require canonical base64 content.

    Decoding then re-encoding must give back the same string, which rejects
    data URI prefixes ("data:application/pdf;base64,...") and bad padding.
    """
    require_string(field, value)
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ArgumentError(field, "is not base64 encoded")
    if base64.b64encode(decoded).decode("ascii") != value:
        raise ArgumentError(field, "is not base64 encoded")
    return value


def require_choice(field: str, value: Any, choices: Collection[str]) -> str:
    if value not in choices:
        allowed = ", ".join(f"'{c}'" for c in choices)
        raise ArgumentError(field, f"must be one of {allowed}")
    return value


def require_bool(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ArgumentError(field, "is not in the form of a boolean")
    return value


def require_int(field: str, value: Any, minimum: Optional[int] = None) -> int:
    # bool is an int subclass, but True is not a page number
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(field, "is not in the form of an integer")
    if minimum is not None and value < minimum:
        raise ArgumentError(field, f"must be greater than or equal to {minimum}")
    return value


def require_mapping(field: str, value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ArgumentError(field, "is not in the form of a mapping")
    return value


def require_list(field: str, value: Any, allow_empty: bool = True) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise ArgumentError(field, "is not in the form of a list")
    if not allow_empty and not value:
        raise ArgumentError(field, "is empty")
    return list(value)
