import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Iterable, List

from .enum import UnknownValuePolicy

logger = logging.getLogger(__name__)

_DROP = object()


def project_value(value: Any, policy: UnknownValuePolicy = UnknownValuePolicy.DROP) -> Any:
    """
    Convert a database value into a JSON-safe scalar.

    Text and byte payloads become str, integers int, floats float and
    temporal values their ISO-8601 string. Other kinds (None included) are
    dropped from the row or stringified depending on policy.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)

    if policy == UnknownValuePolicy.STRINGIFY:
        return "" if value is None else str(value)
    logger.debug("Dropping value of unsupported type %s", type(value).__name__)
    return _DROP


def project_row(row: Iterable[Any], policy: UnknownValuePolicy = UnknownValuePolicy.DROP) -> List[Any]:
    projected = []
    for value in row:
        value = project_value(value, policy)
        if value is not _DROP:
            projected.append(value)
    return projected


def project_rows(rows: Iterable[Iterable[Any]], policy: UnknownValuePolicy = UnknownValuePolicy.DROP) -> List[List[Any]]:
    """Project every row, skipping the ones that cannot be decoded."""
    result = []
    for index, row in enumerate(rows):
        try:
            result.append(project_row(row, policy))
        except (UnicodeDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Skipping row {index}: {e}")
    return result
