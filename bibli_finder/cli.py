import argparse
import logging
import os
import sys

from . import __version__
from .bibli_config import (
    DEFAULT_CONFIG_FILE,
    BackendConfig,
    BibliTomlConfig,
    load_config,
)
from .database import BibliBibDatabase, load_bibfile
from .file_finder import file_finder_from_config

logger = logging.getLogger(__name__)


def build_config(args) -> BibliTomlConfig:
    config_file = args.config
    if not config_file and os.path.exists(DEFAULT_CONFIG_FILE):
        config_file = DEFAULT_CONFIG_FILE

    config = load_config(config_file) if config_file else BibliTomlConfig()

    # Command line arguments take precedence over the config file
    if args.bibfiles:
        config.backends = {"cli": BackendConfig(bibfiles=args.bibfiles)}
    if args.directory:
        config.finder.directories = args.directory
    if args.extension:
        config.finder.extensions = args.extension
    if args.exact_key_only:
        config.finder.exact_key_only = True
    return config


def cli() -> None:
    """bibli_finder cli entrypoint."""
    parser = argparse.ArgumentParser(
        prog="bibli_finder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Find the files belonging to bibtex entries by citation key.",
        epilog="""\
Examples:

    Look for pdfs under ./papers : bibli_finder refs.bib -d papers
    Several extensions           : bibli_finder refs.bib -d papers -e pdf -e djvu
    Use .bibli.toml              : bibli_finder

Notes:

    A file `Smith2020.pdf` belongs to the entry `Smith2020`. Unless
    --exact-key-only is given, `Smith2020-slides.pdf` does as well,
    but `Smith2020a.pdf` does not.
""",
    )
    parser.add_argument(
        "bibfiles",
        help="bibfiles to read entries from",
        nargs="*",
    )
    parser.add_argument(
        "-d",
        "--directory",
        help="directory to search recursively, may be repeated",
        action="append",
    )
    parser.add_argument(
        "-e",
        "--extension",
        help="file extension without dot, may be repeated (default pdf)",
        action="append",
    )
    parser.add_argument(
        "-k",
        "--key",
        help="only list the files of this citation key, may be repeated",
        action="append",
    )
    parser.add_argument(
        "--exact-key-only",
        help="only match files named exactly after the citation key",
        action="store_true",
    )
    parser.add_argument(
        "--config",
        help=f"config file (default {DEFAULT_CONFIG_FILE} if present)",
        type=str,
    )
    parser.add_argument(
        "--default-config",
        help="print the default config and exit",
        action="store_true",
    )
    parser.add_argument(
        "--version",
        help="display version information and exit",
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        help="redirect logs to file specified",
        type=str,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="increase verbosity of log output",
        action="count",
        default=0,
    )
    args = parser.parse_args()
    if args.version:
        print(__version__)
        sys.exit(0)

    if args.default_config:
        import tosholi

        print(tosholi.dumps(BibliTomlConfig()))  # type: ignore
        sys.exit(0)

    log_level = {0: logging.WARN, 1: logging.INFO, 2: logging.DEBUG}.get(
        args.verbose,
        logging.DEBUG,
    )

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            filemode="w",
            level=log_level,
        )
    else:
        logging.basicConfig(stream=sys.stderr, level=log_level)

    try:
        config = build_config(args)
    except FileNotFoundError as e:
        print(f"Error: config file not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, TypeError, KeyError) as e:
        print(f"Error: failed to parse config file: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.sanitize():
        print("Error: invalid config", file=sys.stderr)
        sys.exit(1)

    if not config.bibfiles():
        print("Error: no bibfile given", file=sys.stderr)
        sys.exit(1)

    database = BibliBibDatabase()
    for name, backend in config.backends.items():
        database.libraries[name] = [load_bibfile(b) for b in backend.bibfiles]

    finder = file_finder_from_config(config.finder)
    entries = database.entries()
    result = finder.find_associated_files(
        entries, config.finder.directories, config.finder.extensions
    )

    shown = entries
    if args.key:
        shown = []
        for key in args.key:
            entry, _ = database.find_in_libraries(key)
            if entry is None:
                logger.warning(f"Item \"{key}\" does not exist in library")
                continue
            shown.append(entry)

    for entry in shown:
        for path in result.get(entry):
            print(f"{entry.key}\t{path}")

    for error in result.errors:
        logger.warning(f"Results may be incomplete, could not scan `{error.path}`")


if __name__ == "__main__":
    cli()
