from gsheet_append.config.logger import logger, log_and_raise
from gsheet_append.utils.timezone import format_timestamp
from . import client
from .appender import (
    ensure_sheet_tab,
    ensure_headers,
    append_row,
    update_row_if_exists,
    purge_rows,
)
from .validators import validate_options, validate_retention, require_key
from .values import DATE_HEADER, record_headers

DEFAULT_RETENTION_DAYS = 14
DEFAULT_KEY_NAME = "key"


# --- High-level workflows ---
#
# Neither workflow locks the sheet. Two concurrent calls on the same tab can
# both miss a key and append twice, or purge while another call appends.
# Callers that need ordering must serialize calls per sheet.

def append_data(record: dict, options: dict):
    """
    Append a date-stamped record to the sheet and purge expired rows.

    options:
        email           service-account email (required)
        key             service-account private key, PEM (required)
        spreadsheet_id  target spreadsheet (required)
        sheet           tab name, created if missing; defaults to the first tab
        retention       days to keep rows, defaults to 14

    A missing record["date"] is filled with the current time. Neither
    argument is modified.
    """
    validate_options(options)

    record = dict(record)
    record[DATE_HEADER] = record.get(DATE_HEADER) or format_timestamp()
    options = dict(options)
    options["sheet"] = options.get("sheet") or ""
    options["retention"] = options.get("retention") or DEFAULT_RETENTION_DAYS
    validate_retention(options["retention"])

    try:
        service = client.get_service(client.authorize(options))
        sheet_id = ensure_sheet_tab(service, options)
        headers = ensure_headers(service, record_headers(record, with_date=True), options, require_date=True)
        append_row(service, record, headers, options)
        purge_rows(service, sheet_id, options)
    except Exception as e:
        log_and_raise("Append", f"appending data to spreadsheet {options['spreadsheet_id']}", e)


def set_key_values(record: dict, options: dict):
    """
    Update the row whose key column matches the record, or append it.

    options:
        email, key, spreadsheet_id, sheet   as for append_data
        key_name                            field used as key, defaults to 'key'

    Only the first 1000 data rows are searched for the key.
    """
    validate_options(options)

    options = dict(options)
    options["sheet"] = options.get("sheet") or ""
    options["key_name"] = options.get("key_name") or DEFAULT_KEY_NAME
    require_key(record, options["key_name"])

    try:
        service = client.get_service(client.authorize(options))
        ensure_sheet_tab(service, options)
        headers = ensure_headers(service, record_headers(record), options)
        if update_row_if_exists(service, record, headers, options):
            return
        logger.info(f"[Upsert] No row for {options['key_name']}={record[options['key_name']]}, appending")
        append_row(service, record, headers, options)
    except Exception as e:
        log_and_raise("Upsert", f"setting key values in spreadsheet {options['spreadsheet_id']}", e)
