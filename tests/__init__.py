"""
gsheet_append Test Suite

The Sheets API is never contacted: tests patch gsheet_append.sheets.client
or hand MagicMock service objects to the gateway helpers.

Run tests using: python -m pytest tests/
"""
