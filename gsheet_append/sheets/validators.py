from gsheet_append.sheets.errors import ConfigurationError

REQUIRED_OPTIONS = ("email", "key", "spreadsheet_id")


def validate_options(options: dict):
    """
    Check that every required connection option is present.
    Raises ConfigurationError naming the first missing one, in the order
    email, key, spreadsheet_id. The credential itself is not verified here.
    """
    for name in REQUIRED_OPTIONS:
        if not options.get(name):
            raise ConfigurationError(f'parameter "{name}" is missing')


def validate_retention(retention):
    """Retention must be a positive number of days."""
    if isinstance(retention, bool) or not isinstance(retention, (int, float)) or retention <= 0:
        raise ConfigurationError(f'parameter "retention" must be a positive number of days, got {retention!r}')


def require_key(record: dict, key_name: str):
    """Upsert mode needs a non-empty key value on the record."""
    value = record.get(key_name)
    if value is None or value == "":
        raise ConfigurationError(
            f'Key is not specified. Set a value for "{key_name}" or specify '
            f'options["key_name"] to use a different attribute as key.'
        )
