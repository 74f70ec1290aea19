import re

# Simple titles can be used unquoted in A1 notation
_SIMPLE_TITLE_RE = re.compile(r"^[A-Za-z0-9_]+$")


def column_name(n: int) -> str:
    """Convert 1-based column index to column letters (A, B, ..., Z, AA, AB...)."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"Column index must be a positive integer, got {n!r}")
    result = ""
    while n:
        n, r = divmod(n - 1, 26)
        result = chr(65 + r) + result
    return result


def column_number(name: str) -> int:
    """Convert column letters back to their 1-based index ("A" -> 1, "AA" -> 27)."""
    letters = (name or "").strip().upper()
    if not letters or not all("A" <= ch <= "Z" for ch in letters):
        raise ValueError(f"Invalid column name: {name!r}")
    n = 0
    for ch in letters:
        n = n * 26 + (ord(ch) - 64)
    return n


def quote_sheet_title(title: str) -> str:
    """Return a tab title formatted for A1 notation."""
    if _SIMPLE_TITLE_RE.fullmatch(title):
        return title
    escaped = title.replace("'", "''")
    return f"'{escaped}'"


def a1_range(sheet: str, cell_range: str) -> str:
    """
    Build a range expression such as ``Log!A1:CV1``.
    An empty tab name leaves the range unprefixed so it targets the first tab.
    """
    if not sheet:
        return cell_range
    return f"{quote_sheet_title(sheet)}!{cell_range}"
