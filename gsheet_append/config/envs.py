import json
import os

from gsheet_append.config.logger import log_and_raise
from gsheet_append.sheets.errors import ConfigurationError


# ===== Env Helpers =====
def get_int_env(key: str, default: int = 0) -> int:
    """Parse an integer environment variable."""
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


# ===== Google Sheets =====
def _service_account_from_json(raw: str) -> dict:
    """Parse GOOGLE_CREDS_JSON (a service-account key file's contents)."""
    try:
        info = json.loads(raw)
    except ValueError as e:
        log_and_raise("Env", "parsing GOOGLE_CREDS_JSON", ConfigurationError(f"GOOGLE_CREDS_JSON is not valid JSON: {e}"))
    if not isinstance(info, dict):
        log_and_raise("Env", "parsing GOOGLE_CREDS_JSON", ConfigurationError("GOOGLE_CREDS_JSON must be a JSON object"))
    return info


def load_options_from_env() -> dict:
    """
    Build an options dict for append_data / set_key_values from the environment.

    GOOGLE_SA_EMAIL / GOOGLE_SA_KEY win over the matching fields of
    GOOGLE_CREDS_JSON. Unset optional values are left out so the
    workflow defaults apply. Required values are not checked here.
    """
    email = os.getenv("GOOGLE_SA_EMAIL")
    key = os.getenv("GOOGLE_SA_KEY")

    creds_json = os.getenv("GOOGLE_CREDS_JSON")
    if creds_json:
        info = _service_account_from_json(creds_json)
        email = email or info.get("client_email")
        key = key or info.get("private_key")

    if key:
        # Keys pasted into .env files usually carry escaped newlines
        key = key.replace("\\n", "\n")

    options = {
        "email": email,
        "key": key,
        "spreadsheet_id": os.getenv("GOOGLE_SHEET_ID"),
    }

    sheet = os.getenv("GOOGLE_SHEET_TAB")
    if sheet:
        options["sheet"] = sheet

    retention = get_int_env("SHEET_RETENTION_DAYS", 0)
    if retention:
        options["retention"] = retention

    key_name = os.getenv("SHEET_KEY_NAME")
    if key_name:
        options["key_name"] = key_name

    return options
