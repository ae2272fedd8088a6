# lis_core/common/codes.py
from __future__ import annotations

import logging
from typing import Iterable

from django.conf import settings
from django.db import DatabaseError

from lis_core.common.errors import StorageError

logger = logging.getLogger(__name__)


def _code_width() -> int:
    return int(getattr(settings, "LIS_CODE_WIDTH", 4))


def parse_suffix(code: str, prefix: str) -> int | None:
    """
    Numeric suffix of "<prefix>-<digits>", or None when the code does not match.
    """
    head = f"{prefix}-"
    if not code or not code.startswith(head):
        return None
    tail = code[len(head):]
    # ASCII digits only; int() rejects digits such as "²"
    if not (tail.isascii() and tail.isdigit()):
        return None
    return int(tail)


def next_code(prefix: str, existing_codes: Iterable[str], width: int | None = None) -> str:
    """
    Pure allocator: max(parsed suffixes) + 1, zero padded.

    >>> next_code("PAC", ["PAC-0001", "PAC-0004", "PAC-0002"])
    'PAC-0005'
    """
    width = width or _code_width()
    highest = 0
    for code in existing_codes:
        n = parse_suffix(code, prefix)
        if n is not None and n > highest:
            highest = n
    return f"{prefix}-{highest + 1:0{width}d}"


class SequentialCodeAllocator:
    """
    Scan-then-increment allocator over one unique code column.

    There is no lock and no reservation: two concurrent callers can compute the
    same code. The column's unique constraint turns that into an IntegrityError
    on insert, which callers surface as StorageError.
    """

    def __init__(self, model, field: str = "code"):
        self.model = model
        self.field = field

    def existing(self, prefix: str) -> list[str]:
        lookup = {f"{self.field}__startswith": f"{prefix}-"}
        try:
            return list(self.model.objects.filter(**lookup).values_list(self.field, flat=True))
        except DatabaseError as e:
            logger.error("Code scan failed model=%s prefix=%s: %s", self.model.__name__, prefix, e)
            raise StorageError("Could not read existing codes.")

    def next(self, prefix: str) -> str:
        return next_code(prefix, self.existing(prefix))
