"""Detection of the optional trailing help column."""

from __future__ import annotations

from typing import Optional, Sequence

from cm_menu.models import CONFIG_SENTINEL


def _is_blank(cell: str) -> bool:
    return not cell.strip()


def detect_help_column(menu_rows: Sequence[Sequence[str]]) -> Optional[int]:
    """Return the help column index, or None when the document has none.

    The first row whose last cell is filled while some cell between column 1
    and the last column is empty fixes the help column for the whole
    document. All-blank rows are skipped; the sentinel row stops the scan.
    """
    for row in menu_rows:
        if not row or all(_is_blank(cell) for cell in row):
            continue
        if row[0] == CONFIG_SENTINEL:
            break
        last = len(row) - 1
        if _is_blank(row[last]):
            continue
        if any(_is_blank(row[index]) for index in range(1, last)):
            return last
    return None
