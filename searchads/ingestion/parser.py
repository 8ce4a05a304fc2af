"""SEARCHADS — Ad Record Parser.

Turns one raw source record into a validated Advertisement, or a
ParseFailure explaining why it cannot.

Source fields are wrapped in single-element arrays:
  {"ad_id": [123], "campaign_id": [9], "title": ["Red Shoes"], "price": [25.5]}
A missing key, a null, an empty array or a null first element all mean the
field is absent.
"""

import json
import math
from typing import Any, Dict, Optional, Union

from searchads.core.tokenizer import keyword_set
from searchads.models.ad_models import (
    Advertisement,
    DEFAULT_BID_PRICE,
    DEFAULT_PRICE,
)
from searchads.models.report_models import ParseFailure
from searchads.core.logging import get_logger

logger = get_logger("ingestion.parser")

REQUIRED_INT_FIELDS = ("ad_id", "campaign_id")
OPTIONAL_STR_FIELDS = ("brand", "thumbnail", "detail_url", "category")

# Ids are stored as signed 64-bit integers
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def unwrap_field(record: Dict[str, Any], name: str) -> Any:
    """Return the field's value, or None if the field is absent."""
    value = record.get(name)
    if isinstance(value, list):
        return value[0] if value else None
    # Bare scalars are accepted as-is
    return value


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != number:
        return None
    if not MIN_ID <= number <= MAX_ID:
        return None
    return number


def _to_price(value: Any, default: float, name: str, record_index: int) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        price = None
    if price is None or not math.isfinite(price):
        logger.debug(
            f"{name} '{value}' is not a finite number at record {record_index}, using default",
            extra={"record_index": record_index},
        )
        return default
    return price


def _fail(record_index: int, field: Optional[str], reason: str) -> ParseFailure:
    what = f"{field} {reason}" if field else reason
    logger.debug(f"{what} at record {record_index}", extra={"record_index": record_index})
    return ParseFailure(record_index=record_index, field=field, reason=reason)


def parse_ad(
    raw: Union[str, Dict[str, Any]], record_index: int
) -> Union[Advertisement, ParseFailure]:
    """Parse one raw record (a JSON line or decoded object).

    Required fields are checked in order ad_id, campaign_id, title; the first
    absent one is reported. Ids outside the 64-bit range are invalid.
    Prices default to 100.0 when absent, non-numeric or not finite.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            return _fail(record_index, None, f"malformed JSON: {e.msg}")
    if not isinstance(raw, dict):
        return _fail(record_index, None, "record is not a JSON object")

    ids: Dict[str, int] = {}
    for name in REQUIRED_INT_FIELDS:
        value = unwrap_field(raw, name)
        if value is None:
            return _fail(record_index, name, "missing")
        number = _to_int(value)
        if number is None:
            return _fail(record_index, name, "invalid")
        ids[name] = number

    title = unwrap_field(raw, "title")
    if title is None:
        return _fail(record_index, "title", "missing")
    title = str(title)

    optional = {}
    for name in OPTIONAL_STR_FIELDS:
        value = unwrap_field(raw, name)
        optional[name] = "" if value is None else str(value)

    return Advertisement(
        ad_id=ids["ad_id"],
        campaign_id=ids["campaign_id"],
        title=title,
        price=_to_price(unwrap_field(raw, "price"), DEFAULT_PRICE, "price", record_index),
        bid_price=_to_price(
            unwrap_field(raw, "bid_price"), DEFAULT_BID_PRICE, "bid_price", record_index
        ),
        keywords=tuple(keyword_set(title)),
        **optional,
    )
