"""Append records to Google Sheets, creating tabs and header columns on demand."""

from .sheets import (
    append_data,
    set_key_values,
    SheetAppendError,
    ConfigurationError,
    HeaderMismatchError,
)

__version__ = "1.0.0"
