from google.auth.transport.requests import Request
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from gsheet_append.config.logger import logger

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
API_VERSION = "v4"

# Errors from these helpers propagate unchanged; the workflows in manager.py
# log and alert once per failed call.


def authorize(options: dict) -> Credentials:
    """
    Build service-account credentials from options["email"] / options["key"]
    and fetch a token right away so bad credentials fail here.
    """
    creds = Credentials.from_service_account_info(
        {
            "client_email": options["email"],
            "private_key": options["key"],
            "token_uri": TOKEN_URI,
        },
        scopes=SCOPES,
    )
    creds.refresh(Request())
    logger.debug(f"[Sheets Auth] Authorized as {options['email']}")
    return creds


def get_service(creds: Credentials):
    """Return a Google Sheets API service client for these credentials."""
    return build("sheets", API_VERSION, credentials=creds, cache_discovery=False)


# --- Thin wrappers over the spreadsheets() resource ---

def get_spreadsheet(service, spreadsheet_id: str) -> dict:
    """Spreadsheet metadata, including the 'sheets' list with tab properties."""
    return service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()


def get_values(service, spreadsheet_id: str, range_: str) -> dict:
    """Read a range; the response has no 'values' key when the range is empty."""
    logger.debug(f"[Sheets] Reading {range_}")
    return service.spreadsheets().values().get(
        spreadsheetId=spreadsheet_id,
        range=range_
    ).execute()


def append_values(service, spreadsheet_id: str, range_: str, rows: list) -> dict:
    """Append rows after the table found at range_."""
    return service.spreadsheets().values().append(
        spreadsheetId=spreadsheet_id,
        range=range_,
        valueInputOption="RAW",
        insertDataOption="INSERT_ROWS",
        body={"values": rows}
    ).execute()


def update_values(service, spreadsheet_id: str, range_: str, rows: list) -> dict:
    """Overwrite cells starting at range_."""
    return service.spreadsheets().values().update(
        spreadsheetId=spreadsheet_id,
        range=range_,
        valueInputOption="RAW",
        body={"majorDimension": "ROWS", "values": rows}
    ).execute()


def batch_update(service, spreadsheet_id: str, requests: list) -> dict:
    """Apply structural requests (addSheet, deleteDimension, ...) in order."""
    logger.debug(f"[Sheets] Applying {len(requests)} batch request(s)")
    return service.spreadsheets().batchUpdate(
        spreadsheetId=spreadsheet_id,
        body={"requests": requests}
    ).execute()
