"""Turn raw transaction records (dicts from JSON) into ``Transaction`` objects.

Records that can't be placed on a calendar day, or carry an unknown type or a
bad amount, are rejected here. That keeps them out of every grouping (day,
month, category and the heatmap) rather than only some of them.
"""

import json
import math
from typing import Any, Iterable, Mapping

from chartdata.dates import parse_timestamp
from chartdata.domain import TRANSACTION_TYPES, Transaction
from chartdata.functional import Either, Left, Right
from chartdata.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORY = "Other"


def _reject(code: str, message: str, raw: Mapping) -> Left:
    return Left({"error": code, "message": message, "record": dict(raw)})


def _check_type(raw: Mapping[str, Any]) -> Either[dict, dict]:
    kind = raw.get("type")
    if kind not in TRANSACTION_TYPES:
        return _reject("invalid_type", f"Unknown transaction type {kind!r}", raw)
    return Right({"type": kind})


def _check_amount(raw: Mapping[str, Any]):
    def check(fields: dict) -> Either[dict, dict]:
        amount = raw.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
            return _reject("invalid_amount", f"Amount {amount!r} is not a number", raw)
        try:
            value = float(amount)
        except (ValueError, OverflowError):
            return _reject("invalid_amount", f"Amount {amount!r} is not a finite number", raw)
        if not math.isfinite(value):
            return _reject("invalid_amount", f"Amount {amount!r} is not a finite number", raw)
        if value < 0:
            return _reject("invalid_amount", f"Amount {amount!r} must be a non-negative magnitude", raw)
        return Right({**fields, "amount": value})

    return check


def _check_date(raw: Mapping[str, Any]):
    def check(fields: dict) -> Either[dict, dict]:
        parsed = parse_timestamp(raw.get("date"))
        if parsed.is_none():
            return _reject("invalid_date", f"Date {raw.get('date')!r} cannot be parsed", raw)
        return Right({**fields, "date": parsed.get_or_else(None)})

    return check


def validate_record(raw: Mapping[str, Any], index: int = 0) -> Either[dict, Transaction]:
    """Run the field checks in order; the first failure is the reported error."""
    return (
        _check_type(raw)
        .bind(_check_amount(raw))
        .bind(_check_date(raw))
        .map(lambda fields: Transaction(
            id=str(raw.get("id") or f"t{index}"),
            category=str(raw.get("category") or DEFAULT_CATEGORY),
            note=str(raw.get("note") or ""),
            **fields,
        ))
    )


def ingest(records: Iterable[Mapping[str, Any]]) -> tuple[tuple[Transaction, ...], tuple[dict, ...]]:
    accepted: list[Transaction] = []
    rejected: list[dict] = []
    for i, raw in enumerate(records):
        result = validate_record(raw, i)
        if result.is_right():
            accepted.append(result.get_or_else(None))
        else:
            error = result.get_error()
            logger.warning("skipping record %d: %s", i, error["message"])
            rejected.append(error)
    if rejected:
        logger.info("ingested %d transactions, rejected %d", len(accepted), len(rejected))
    return tuple(accepted), tuple(rejected)


def load_transactions(path: str) -> tuple[tuple[Transaction, ...], tuple[dict, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = data["transactions"] if isinstance(data, dict) else data
    logger.debug("loaded %d records from %s", len(records), path)
    return ingest(records)
