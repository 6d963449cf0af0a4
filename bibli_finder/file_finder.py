import logging
import os
from abc import abstractmethod
from pathlib import Path
from typing import Any, Callable, Collection, Sequence

from .bibli_config import FinderConfig
from .citekey import CITATION_KEY_CHARS, get_citation_key
from .matcher import FileAssociations, associate
from .scanner import (
    LoggingScanReporter,
    ScanError,
    ScanReporter,
    find_files_by_extension,
)

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    pass


class FileFinder:
    @abstractmethod
    def find_associated_files(
        self,
        entries: Sequence,
        directories: Sequence[str | os.PathLike],
        extensions: Collection[str],
    ) -> FileAssociations:
        """Return the files below `directories` associated to each entry"""
        pass


class _RecordingReporter(ScanReporter):
    def __init__(self, errors: list[ScanError], reporter: ScanReporter):
        self._errors = errors
        self._reporter = reporter

    def on_directory_error(self, path: Path, cause: OSError) -> None:
        self._errors.append(ScanError(path, cause))
        self._reporter.on_directory_error(path, cause)


class CiteKeyBasedFileFinder(FileFinder):
    """
    Associates files to entries based on their citation keys.

    A file belongs to the first entry whose key equals the file name without
    extension. Unless `exact_key_only` is set, files whose name starts with a
    key followed by a character outside of `key_chars` (`Smith2020-notes.pdf`
    for `Smith2020`) are associated as well.
    """

    exact_key_only: bool
    key_chars: Collection[str]

    def __init__(
        self,
        exact_key_only: bool = False,
        key_chars: Collection[str] = CITATION_KEY_CHARS,
        reporter: ScanReporter | None = None,
        citation_key: Callable[[Any], str | None] = get_citation_key,
    ):
        self.exact_key_only = exact_key_only
        self.key_chars = key_chars
        self._reporter = reporter or LoggingScanReporter()
        self._citation_key = citation_key

    def find_associated_files(self, entries, directories, extensions):
        if entries is None:
            raise InvalidArgumentError("Entries must not be None")
        if directories is None:
            raise InvalidArgumentError("Directories must not be None")
        if extensions is None:
            raise InvalidArgumentError("Extensions must not be None")

        errors: list[ScanError] = []
        files = find_files_by_extension(
            directories, extensions, _RecordingReporter(errors, self._reporter)
        )

        result = associate(
            entries,
            files,
            self.exact_key_only,
            key_chars=self.key_chars,
            citation_key=self._citation_key,
        )
        result.errors = errors

        logger.info(
            f"Associated {len(result.files())} of {len(files)} files to {len(result)} entries"
        )
        return result


def file_finder_from_config(
    config: FinderConfig, reporter: ScanReporter | None = None
) -> FileFinder:
    match config.strategy:
        case "citekey":
            return CiteKeyBasedFileFinder(config.exact_key_only, reporter=reporter)
        case _:
            raise InvalidArgumentError(f"Unknown file finder strategy {config.strategy}")
