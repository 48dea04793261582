"""
Command line entry point.

    csv-ddl example.csv
    csv-ddl --no-header --columns id,name,score -t scores < scores.csv
    python -m csv_ddl_tool --drop --export-schema schemas/ example.csv
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from shared.config import LOG_LEVELS, get_default_logging_config, setup_logging

from . import __version__
from .config import build_configs, load_settings
from .exceptions import ConfigurationError, CsvDdlError
from .pipeline_runner import run_pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # -h is --no-header, so help is long-form only
    parser = argparse.ArgumentParser(
        prog="csv-ddl",
        description="Generate a PostgreSQL table definition from a csv file.",
        add_help=False,
    )
    parser.add_argument("file", nargs="?", type=Path,
                        help="CSV file to read; standard input when omitted")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-h", "--no-header", action="store_true", default=None,
                        help="the first row is data, not column names")
    parser.add_argument("-d", "--delimiter", default=None,
                        help="field delimiter, one character (default: ,)")
    parser.add_argument("-n", "--null-as", default=None,
                        help="value read as null (default: empty string)")
    parser.add_argument("--columns", default=None,
                        help="override column names, separated by comma. "
                             "Use the csv header or letters by default.")
    parser.add_argument("-t", "--table-name", default=None,
                        help="file name is used as default")
    parser.add_argument("--drop", action="store_true", default=None,
                        help="prepend drop table if exists")
    parser.add_argument("--no-copy", action="store_true", default=None,
                        help="do not append the \\copy directive")
    parser.add_argument("--extended-types", action="store_true", default=None,
                        help="also detect boolean, date and timestamp columns")
    parser.add_argument("--export-schema", type=Path, default=None, metavar="DIR",
                        help="also write <table>_schema.yaml to DIR")
    parser.add_argument("--config", default=None, metavar="PATH",
                        help="YAML file with option defaults")
    parser.add_argument("--log-level", default=None,
                        choices=LOG_LEVELS,
                        type=str.upper, help="logging level for stderr diagnostics")
    return parser


def configure_logging(level: Optional[str]) -> None:
    """Set up stderr (and, in production, file) logging at ``level``."""
    try:
        setup_logging(get_default_logging_config(level))
    except ValidationError as e:
        raise ConfigurationError(f"invalid logging configuration: {e.errors()[0].get('msg')}")
    except OSError as e:
        raise ConfigurationError(f"cannot set up log file {e.filename}: {e.strerror or e}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "delimiter": args.delimiter,
        "null_as": args.null_as,
        "no_header": args.no_header,
        "columns": args.columns,
        "table_name": args.table_name,
        "drop": args.drop,
        "no_copy": args.no_copy,
        "extended_types": args.extended_types,
        "export_schema": args.export_schema,
        "log_level": args.log_level,
    }

    try:
        settings = load_settings(args.config, overrides)
        configure_logging(settings.log_level)
        inference, output = build_configs(settings, args.file)
        result = run_pipeline(args.file, inference, output)
    except CsvDdlError as e:
        logger.debug(f"{e.error_code}: {e.message}")
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    sys.stdout.write(result.sql)
    return 0


if __name__ == "__main__":
    sys.exit(main())
