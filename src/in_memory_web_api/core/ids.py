"""
Record id handling.

Ids arrive as URL path segments (always strings) but are usually stored
as integers, so "7" from /app/heroes/7 has to become 7 before it can match
{"id": 7}. New records without an id get max(numeric ids) + 1.

Ids are compared strictly: "7" never matches 7, and True never matches 1.
"""

from numbers import Real
from typing import TYPE_CHECKING, Any, Optional, Union
import re

if TYPE_CHECKING:
    from .store import Collection


RecordId = Union[int, str]

# ASCII digits only; int() alone would also take "1_0", " 2 " and "٣"
_INTEGER_ID = re.compile(r"[+-]?[0-9]+")


def parse_id(raw: Optional[str]) -> Optional[RecordId]:
    """
    Turn a path id into an int when it looks like one.

        parse_id("7")      → 7
        parse_id("abc-1")  → "abc-1"
        parse_id("1_0")    → "1_0"
        parse_id(None)     → None
    """
    if raw is None:
        return None
    if _INTEGER_ID.fullmatch(raw):
        return int(raw)
    return raw


def is_numeric_id(value: object) -> bool:
    # bool is an int subclass but never a meaningful id
    return isinstance(value, Real) and not isinstance(value, bool)


def same_id(left: Any, right: Any) -> bool:
    """Strict id equality: values must be equal and neither may be a bool posing as a number."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def generate_id(collection: "Collection") -> int:
    """
    Next free numeric id: the largest numeric id plus one.

    String ids are skipped. A collection with no numeric ids at all
    (empty, or only string ids) starts at 1.
    """
    max_id = 0
    for record in collection.records:
        record_id = record.get("id") if isinstance(record, dict) else None
        if is_numeric_id(record_id) and record_id > max_id:
            max_id = record_id
    return int(max_id) + 1
