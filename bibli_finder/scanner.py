import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterable

logger = logging.getLogger(__name__)


def get_file_extension(name: str) -> str:
    """Return the text after the last `.` of a file name, or `""` if none"""
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def get_base_name(name: str) -> str:
    """Return the file name with its extension suffix removed"""
    base, dot, _ = name.rpartition(".")
    return base if dot else name


@dataclass(frozen=True)
class ScanError:
    path: Path
    cause: OSError


class ScanReporter:
    """Receives the failures encountered while walking directories."""

    def on_directory_error(self, path: Path, cause: OSError) -> None:
        pass


class LoggingScanReporter(ScanReporter):
    def on_directory_error(self, path: Path, cause: OSError) -> None:
        logger.error(f"Problem in finding files under `{path}`: {cause}")


def _raise(error: OSError):
    raise error


def _walk_files(directory: Path) -> Iterable[Path]:
    # Symlinked directories are listed but not descended into
    for dirpath, _, filenames in os.walk(directory, onerror=_raise):
        for filename in filenames:
            yield Path(dirpath, filename)


def find_files_by_extension(
    directories: Iterable[str | os.PathLike],
    extensions: Collection[str],
    reporter: ScanReporter | None = None,
) -> set[Path]:
    """
    Return all files below the given directories which have one of the given
    extensions.

    Missing directories are skipped, a file given in place of a directory is
    checked like any file found below a directory. When walking a directory fails, the
    error goes to `reporter` and the scan goes on with the next directory.
    """
    if reporter is None:
        reporter = LoggingScanReporter()

    result: set[Path] = set()
    for directory in directories:
        root = Path(os.path.abspath(directory))
        if not root.exists():
            logger.debug(f"Skipping missing directory `{root}`")
            continue

        if not root.is_dir():
            if get_file_extension(root.name) in extensions:
                result.add(root)
            continue

        try:
            for path in _walk_files(root):
                if path.is_dir():
                    continue
                if get_file_extension(path.name) in extensions:
                    result.add(path)
        except OSError as e:
            reporter.on_directory_error(root, e)

    logger.debug(f"Found {len(result)} files with extensions {sorted(extensions)}")
    return result
