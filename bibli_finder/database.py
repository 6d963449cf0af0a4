import logging
from pathlib import Path
from typing import List, Union

import bibtexparser
from bibtexparser.library import Library
from bibtexparser.model import Block, Entry

logger = logging.getLogger(__name__)


class BibliLibrary(Library):
    path: Path | None

    def __init__(self, blocks: Union[List[Block], None] = None, path=None):
        super().__init__(blocks)
        self.path = path


def load_bibfile(bibfile_path: str | Path) -> BibliLibrary:
    with open(bibfile_path, "r") as bibtex_file:
        library: Library = bibtexparser.parse_string(bibtex_file.read())

    for block in library.failed_blocks:
        logger.warning(f"Failed to parse block at line {block.start_line} of `{bibfile_path}`")

    logger.info(f"Loaded {len(library.entries)} entries from `{bibfile_path}`")
    return BibliLibrary(library.blocks, Path(bibfile_path))


class BibliBibDatabase:
    libraries: dict[str, list[BibliLibrary]]

    def __init__(self) -> None:
        self.libraries = {}

    def entries(self) -> list[Entry]:
        """All entries, in library then file order"""
        return [e for libs in self.libraries.values() for lib in libs for e in lib.entries]

    def find_in_libraries(
        self, key: str
    ) -> tuple[Entry, BibliLibrary] | tuple[None, None]:
        for libs in self.libraries.values():
            for lib in libs:
                if key in lib.entries_dict:
                    return lib.entries_dict[key], lib
        return None, None
