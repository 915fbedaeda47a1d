"""Row codec between CSV text and lists of cells."""

from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from cm_common.errors import MenuParseError

# Config rows embed base64 bitmaps larger than the csv default cell limit.
# Kept within a 32-bit C long.
MAX_CELL_SIZE = 2**31 - 1
csv.field_size_limit(MAX_CELL_SIZE)


def decode_rows(text: str | None) -> list[list[str]]:
    """Split CSV text into rows of cells.

    Quoted cells may contain commas, newlines and doubled quotes. A blank
    line decodes to a zero-cell row.
    """
    if not text:
        return []
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""))
    try:
        return [list(row) for row in reader]
    except csv.Error as exc:
        raise MenuParseError(
            "Menu document is not valid CSV",
            context={"line": reader.line_num},
            cause=exc,
        ) from exc


def encode_row(cells: Sequence[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="").writerow(cells)
    return buffer.getvalue()


def encode_rows(rows: Iterable[Sequence[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()
