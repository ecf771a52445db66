# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from noticeingest.adapters.sqlalchemy.unit_of_work import startup
from noticeingest.app import import_legacy_csv
from noticeingest.config import configure_logging, get_import_config
from noticeingest.domain.ingest_pipeline import SourceOpenError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from noticeingest.domain.ingest_pipeline import ImportSummary

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import legacy takedown notices")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import a legacy CSV export")
    import_parser.add_argument("path", type=Path, help="CSV export to import")
    import_parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    import_parser.add_argument(
        "--documents-dir",
        type=Path,
        help="Directory relative document paths are resolved against "
        "(defaults to the directory of the CSV file)",
    )
    import_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="INFO",
        help="Logging verbosity (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _print_summary(path: Path, summary: ImportSummary) -> None:
    print(f"Imported {path}:")
    for key, value in summary.as_dict().items():
        print(f"  {key}: {value}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=getattr(logging, parsed_args.log_level), force=True)

    try:
        if parsed_args.command != "import":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        config = get_import_config()
        if parsed_args.documents_dir is not None:
            config = config.with_documents_dir(parsed_args.documents_dir)
        if parsed_args.database_uri:
            startup(database_uri=parsed_args.database_uri, force=True)
        summary = import_legacy_csv(parsed_args.path, config=config)
    except SourceOpenError as exc:
        log.error("Cannot import %s: %s", parsed_args.path, exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    _print_summary(parsed_args.path, summary)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
