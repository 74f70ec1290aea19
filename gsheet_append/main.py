import argparse
import json
import sys

from gsheet_append.config.envs import load_options_from_env
from gsheet_append.config.logger import logger, configure_logging
from gsheet_append.sheets import append_data, set_key_values, ConfigurationError

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gsheet-append",
        description="Append a JSON record to a Google Sheet. Credentials come from the environment.",
    )
    p.add_argument("mode", choices=["append", "set"],
                   help="append: date-stamped append with retention purge; set: upsert by key")
    p.add_argument("record", help='JSON object, e.g. \'{"temp": 21.5}\'')
    p.add_argument("--sheet", help="tab name (default: GOOGLE_SHEET_TAB or the first tab)")
    p.add_argument("--retention", type=int, help="days to keep rows in append mode")
    p.add_argument("--key-name", help="key field in set mode (default: key)")
    return p


def parse_record(raw: str) -> dict:
    """Decode the record argument; it must be a JSON object."""
    try:
        record = json.loads(raw)
    except ValueError as e:
        raise ConfigurationError(f"record is not valid JSON: {e}")
    if not isinstance(record, dict):
        raise ConfigurationError("record must be a JSON object")
    return record


def main(argv=None) -> int:
    """Entrypoint for the gsheet-append console script."""
    args = build_parser().parse_args(argv)
    # Alerts must be sent before the process exits
    configure_logging(async_alerts=False)

    try:
        record = parse_record(args.record)
        options = load_options_from_env()
    except ConfigurationError as e:
        logger.error(f"[Main] {e}")
        return EXIT_USAGE

    if args.sheet:
        options["sheet"] = args.sheet
    if args.retention:
        options["retention"] = args.retention
    if args.key_name:
        options["key_name"] = args.key_name

    try:
        if args.mode == "append":
            append_data(record, options)
        else:
            set_key_values(record, options)
    except ConfigurationError as e:
        logger.error(f"[Main] {e}")
        return EXIT_USAGE
    except Exception as e:
        logger.error(f"[Main] {args.mode} failed: {e}")
        return EXIT_FAILED

    logger.info(f"[Main] {args.mode} completed")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
