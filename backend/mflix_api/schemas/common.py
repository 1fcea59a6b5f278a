"""
Mflix API — Shared Field Types and Document Helpers
====================================================

What:  ObjectId parsing, the extended-JSON aware date type, and the
       conversion of MongoDB documents into JSON-safe values.
Who:   Used by every service (id parsing, output documents) and by the
       movie/comment schemas (date fields).

ObjectId rules:
    Only 24-character hexadecimal strings are accepted. Raw 12-byte values,
    which `bson.ObjectId` also takes, are never what an API caller means.

Date rules (MongoDate):
    Accepted input                          Stored as
    ─────────────────────────────────────   ─────────────────────────
    "2015-08-13T00:46:30Z"                  datetime (UTC)
    1431369413000  (epoch milliseconds)     datetime (UTC)
    {"$date": 1431369413000}                datetime (UTC)
    {"$date": "2015-08-13T00:46:30Z"}       datetime (UTC)
    {"$date": {"$numberLong": "-18950…"}}   datetime (UTC)
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from bson import Decimal128, ObjectId
from pydantic import AfterValidator, BeforeValidator

from mflix_api.exceptions import InvalidIdError

_HEX_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Identifiers
# ══════════════════════════════════════════════════════════════════════════


def is_valid_object_id(value: Any) -> bool:
    """True only for a 24-character hexadecimal string."""
    return isinstance(value, str) and bool(_HEX_OBJECT_ID.match(value))


def parse_object_id(value: Any, message: str = "Invalid ID") -> ObjectId:
    """
    Convert a path parameter into an ObjectId.

    Args:
        value:   Raw identifier from the URL
        message: Envelope message used if the value is rejected
                 (e.g. "Invalid movie ID")

    Raises:
        InvalidIdError: value is not a 24-character hex string (→ 400)
    """
    if not is_valid_object_id(value):
        raise InvalidIdError(message=message, value=str(value))
    return ObjectId(value)


# ══════════════════════════════════════════════════════════════════════════
# Dates
# ══════════════════════════════════════════════════════════════════════════


_INVALID_DATE = (
    "Invalid date: expected an ISO 8601 string, epoch milliseconds, or {\"$date\": ...}"
)


def _from_epoch_millis(millis: Any) -> datetime:
    # timedelta arithmetic handles pre-1970 values on every platform
    try:
        return _EPOCH + timedelta(milliseconds=millis)
    except (OverflowError, ValueError):
        raise ValueError("Invalid date: out of range")


def _coerce_plain_date(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Invalid date: booleans are not dates")
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return _from_epoch_millis(value)
    if isinstance(value, str):
        return value  # ISO 8601 parsing is left to pydantic
    if isinstance(value, dict) and set(value) == {"$numberLong"}:
        try:
            millis = int(value["$numberLong"])
        except (TypeError, ValueError):
            raise ValueError("Invalid date: $numberLong must hold an integer string")
        return _from_epoch_millis(millis)
    raise ValueError(_INVALID_DATE)


def _coerce_date(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {"$date"}:
        inner = value["$date"]
        # One level only: a number, a string or {"$numberLong": ...}
        if isinstance(inner, (datetime, list)) or (
            isinstance(inner, dict) and set(inner) != {"$numberLong"}
        ):
            raise ValueError(_INVALID_DATE)
        return _coerce_plain_date(inner)
    return _coerce_plain_date(value)


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError("Invalid date: out of range")


MongoDate = Annotated[datetime, BeforeValidator(_coerce_date), AfterValidator(_ensure_utc)]


# ══════════════════════════════════════════════════════════════════════════
# Output documents
# ══════════════════════════════════════════════════════════════════════════


def serialize_document(value: Any) -> Any:
    """
    Recursively convert BSON values into JSON-safe Python values.

    ObjectId → 24-hex string, datetime → ISO 8601, Decimal128 → string.
    Dicts, lists and tuples are walked; every other value passes through.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal128):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value
