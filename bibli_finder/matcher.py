import logging
from pathlib import Path
from typing import Any, Callable, Collection, Iterable, Iterator, Sequence

from .citekey import CITATION_KEY_CHARS, get_citation_key, is_blank
from .scanner import ScanError, get_base_name

logger = logging.getLogger(__name__)


class FileAssociations:
    """
    Multimap from entries to the files associated with them.

    Entries are keyed by identity, so entries that compare equal (or are
    unhashable) are still kept apart. Each path is stored under at most one
    entry.
    """

    def __init__(self) -> None:
        self._entries: dict[int, Any] = {}
        self._files: dict[int, list[Path]] = {}
        self.errors: list[ScanError] = []
        """`ScanError`s recorded while scanning directories"""

    def add(self, entry, path: Path) -> None:
        files = self._files.setdefault(id(entry), [])
        self._entries[id(entry)] = entry
        if path not in files:
            files.append(path)

    def get(self, entry) -> list[Path]:
        """Files associated to `entry`, empty if there are none"""
        return list(self._files.get(id(entry), []))

    def items(self) -> Iterator[tuple[Any, list[Path]]]:
        for k, entry in self._entries.items():
            yield entry, list(self._files[k])

    def files(self) -> list[Path]:
        return [f for files in self._files.values() for f in files]

    def __contains__(self, entry) -> bool:
        return id(entry) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileAssociations):
            return NotImplemented
        return self._files == other._files and self._entries.keys() == other._entries.keys()

    def __repr__(self) -> str:
        return f"FileAssociations({dict(self._files)!r})"


def matches_prefix(
    filename: str, key: str, key_chars: Collection[str] = CITATION_KEY_CHARS
) -> bool:
    """
    Whether `filename` starts with `key` followed by a character that cannot
    be part of a citation key.

    "JabRef" does not match "JabRefa", which probably belongs to another entry
    published by the same author in the same year.
    """
    if not filename.startswith(key):
        return False

    if len(filename) == len(key):
        return True

    return filename[len(key)] not in key_chars


def _first_match(
    entries: Sequence, predicate: Callable[[str], bool], citation_key
) -> Any | None:
    for entry in entries:
        key = citation_key(entry)
        if not is_blank(key) and predicate(key):
            return entry
    return None


def associate(
    entries: Sequence,
    candidates: Iterable[Path],
    exact_key_only: bool,
    key_chars: Collection[str] = CITATION_KEY_CHARS,
    citation_key: Callable[[Any], str | None] = get_citation_key,
) -> FileAssociations:
    """
    Assign each candidate file to the first entry whose citation key equals
    its base name. Failing that, and unless `exact_key_only` is set, to the
    first entry whose key is a prefix of the base name.
    """
    result = FileAssociations()

    for file in sorted(candidates):
        base_name = get_base_name(file.name)

        entry = _first_match(entries, lambda key: key == base_name, citation_key)
        if entry is None and not exact_key_only:
            entry = _first_match(
                entries,
                lambda key: matches_prefix(base_name, key, key_chars),
                citation_key,
            )

        if entry is None:
            logger.debug(f"No entry for `{file}`")
            continue

        result.add(entry, file)

    return result
