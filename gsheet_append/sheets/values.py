DATE_HEADER = "date"

# Placeholder key some serializers emit for an unnamed field; never a header
_IGNORED_HEADER = "undefined"


def value_array(record: dict, headers: list) -> list:
    """Return the record's values ordered by headers; unknown or None fields become empty cells."""
    row = []
    for header in headers:
        value = record.get(header)
        row.append("" if value is None else value)
    return row


def record_headers(record: dict, with_date: bool = False) -> list:
    """
    Header names a record needs, in record order.
    In date mode 'date' is moved to the front.
    """
    headers = [h for h in record if h != _IGNORED_HEADER]
    if with_date:
        headers = [DATE_HEADER] + [h for h in headers if h != DATE_HEADER]
    return headers


def cell_text(value) -> str:
    """Text the Sheets API returns for a scalar written with RAW input (1.0 -> "1", True -> "TRUE")."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
