class SheetAppendError(Exception):
    """Base class for errors raised by gsheet_append itself."""


class ConfigurationError(SheetAppendError, ValueError):
    """A required option or record field is missing or invalid.

    Always raised before any request reaches the Sheets API.
    """


class HeaderMismatchError(SheetAppendError):
    """The tab's header row does not start with 'date' while date-stamped
    headers need to be added to it."""
