from gsheet_append.config.logger import logger, log_and_alert
from gsheet_append.utils.timezone import parse_cell_date, retention_cutoff
from . import client
from .columns import a1_range, column_name
from .errors import HeaderMismatchError
from .values import DATE_HEADER, value_array, cell_text

# Header row is read up to this many columns
HEADER_COLUMN_LIMIT = 100
# Purge and key lookups only look at this many data rows (no pagination)
ROW_SCAN_LIMIT = 1000


# --- Tab and header setup ---

def ensure_sheet_tab(service, options: dict) -> int:
    """
    Return the numeric sheetId of options["sheet"], creating the tab if needed.
    No tab name means the first tab, which is addressed as id 0 without a lookup.
    """
    sheet = options.get("sheet")
    spreadsheet_id = options["spreadsheet_id"]
    if not sheet:
        return 0

    metadata = client.get_spreadsheet(service, spreadsheet_id)
    for s in metadata.get("sheets", []):
        props = s.get("properties", {})
        if props.get("title") == sheet:
            return props.get("sheetId", 0)

    logger.info(f"[Sheets] Creating tab '{sheet}'")
    result = client.batch_update(service, spreadsheet_id, [{
        "addSheet": {
            "properties": {"title": sheet}
        }
    }])
    replies = result.get("replies") or [{}]
    sheet_id = replies[0].get("addSheet", {}).get("properties", {}).get("sheetId", 0)
    logger.info(f"[Sheets] Tab '{sheet}' created with id {sheet_id}")
    return sheet_id


def ensure_headers(service, headers: list, options: dict, require_date: bool = False) -> list:
    """
    Make sure every name in headers exists in row 1 of the tab.
    Missing names are written to the right of the existing ones; existing
    columns are never moved. Returns the resulting header row.

    With require_date, a non-empty header row that does not start with
    'date' raises HeaderMismatchError before anything is written.
    """
    sheet = options.get("sheet")
    spreadsheet_id = options["spreadsheet_id"]

    last_col = column_name(HEADER_COLUMN_LIMIT)
    result = client.get_values(service, spreadsheet_id, a1_range(sheet, f"A1:{last_col}1"))
    sheet_headers = list(result.get("values", [[]])[0])

    missing = [h for h in headers if h not in sheet_headers]
    if not missing:
        return sheet_headers

    if require_date and sheet_headers and sheet_headers[0] != DATE_HEADER:
        raise HeaderMismatchError(
            f"The first column header must be '{DATE_HEADER}', "
            f"found '{sheet_headers[0]}' in tab '{sheet or '<first>'}'"
        )

    if len(sheet_headers) >= HEADER_COLUMN_LIMIT:
        log_and_alert(
            "Sheets",
            f"Header row of '{sheet or '<first>'}'",
            f"only the first {HEADER_COLUMN_LIMIT} columns are checked; new headers may duplicate later ones",
        )

    first_free = column_name(len(sheet_headers) + 1)
    client.update_values(service, spreadsheet_id, a1_range(sheet, f"{first_free}1"), [missing])
    logger.info(f"[Sheets] Added headers {missing} at column {first_free}")
    return sheet_headers + missing


# --- Row writes ---

def append_row(service, record: dict, headers: list, options: dict):
    """Append the record as a new row aligned with headers."""
    sheet = options.get("sheet")
    row = value_array(record, headers)
    client.append_values(service, options["spreadsheet_id"], a1_range(sheet, "A1"), [row])
    logger.info(f"[Sheets] Row appended to '{sheet or '<first>'}' ({len(row)} columns)")


def update_row_if_exists(service, record: dict, headers: list, options: dict) -> bool:
    """
    Overwrite the row whose key column matches record[key_name].
    Only the first ROW_SCAN_LIMIT data rows are searched.
    Returns False when no row matches.
    """
    sheet = options.get("sheet")
    key_name = options["key_name"]
    key = cell_text(record[key_name])

    key_col = column_name(headers.index(key_name) + 1)
    result = client.get_values(
        service,
        options["spreadsheet_id"],
        a1_range(sheet, f"{key_col}2:{key_col}{ROW_SCAN_LIMIT + 1}")
    )
    rows = result.get("values")
    if not rows:
        return False

    for idx, row in enumerate(rows, start=2):
        if row and str(row[0]) == key:
            client.update_values(
                service,
                options["spreadsheet_id"],
                a1_range(sheet, f"A{idx}"),
                [value_array(record, headers)]
            )
            logger.info(f"[Sheets] Updated row {idx} for {key_name}={key}")
            return True

    return False


# --- Retention ---

def stale_row_indexes(cells: list, cutoff) -> list:
    """
    0-based data row indexes whose date cell is empty, unparsable or before cutoff.
    cells is the raw 'values' list of a single-column read.
    """
    stale = []
    for i, row in enumerate(cells):
        parsed = parse_cell_date(row[0] if row else None)
        if parsed is None or parsed < cutoff:
            stale.append(i)
    return stale


def purge_rows(service, sheet_id: int, options: dict) -> int:
    """
    Delete rows whose date column is older than options["retention"] days.
    Returns the number of rows deleted.
    """
    sheet = options.get("sheet")
    spreadsheet_id = options["spreadsheet_id"]

    result = client.get_values(service, spreadsheet_id, a1_range(sheet, f"A2:A{ROW_SCAN_LIMIT + 1}"))
    cells = result.get("values")
    if not cells:
        return 0

    stale = stale_row_indexes(cells, retention_cutoff(options["retention"]))
    if not stale:
        return 0

    # Bottom-up so earlier deletions don't shift rows still queued
    requests = [{
        "deleteDimension": {
            "range": {
                "sheetId": sheet_id,
                "dimension": "ROWS",
                "startIndex": i + 1,
                "endIndex": i + 2,
            }
        }
    } for i in reversed(stale)]
    client.batch_update(service, spreadsheet_id, requests)
    logger.info(f"[Sheets] Purged {len(stale)} stale row(s) from '{sheet or '<first>'}'")
    return len(stale)
