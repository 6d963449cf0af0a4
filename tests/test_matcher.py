"""Tests for matching files to citation keys."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from bibtexparser.model import Entry
from hamcrest import assert_that, empty, is_

from bibli_finder.matcher import associate, matches_prefix

PAPERS = Path("/papers")


def entry(key):
    return Entry("article", key, [])


@dataclass(eq=False)
class Item:
    """Entry without a bibtex model"""

    key: str | None


@pytest.mark.parametrize(
    "filename,key,expected",
    [
        ("JabRef", "JabRef", True),
        ("JabRef-notes", "JabRef", True),
        ("JabRef notes", "JabRef", True),
        ("JabRef.draft", "JabRef", True),
        ("JabRefExtra", "JabRef", False),
        ("JabRefa", "JabRef", False),
        ("JabRef2", "JabRef", False),
        ("JabRef_notes", "JabRef", False),
        ("JabRef:notes", "JabRef", False),
        ("Müller2020ä", "Müller2020", False),
        ("Müller2020-notes", "Müller2020", True),
        ("Jab", "JabRef", False),
        ("Other-JabRef", "JabRef", False),
    ],
)
def test_matches_prefix(filename, key, expected):
    assert_that(matches_prefix(filename, key), is_(expected))


def test_matches_prefix_with_custom_key_chars():
    assert_that(matches_prefix("JabRef-notes", "JabRef", {"-"}), is_(False))
    assert_that(matches_prefix("JabRefExtra", "JabRef", set()), is_(True))


def test_exact_match():
    jabref = entry("JabRef")
    file = PAPERS / "JabRef.pdf"

    result = associate([jabref], {file}, exact_key_only=True)

    assert_that(result.get(jabref), is_([file]))


def test_exact_match_wins_over_earlier_prefix_match():
    """Test that exact matches of any entry beat prefix matches of any entry"""
    short = entry("A")
    long = entry("AB")

    result = associate([short, long], {PAPERS / "AB.pdf", PAPERS / "A.pdf"}, False)

    assert_that(result.get(short), is_([PAPERS / "A.pdf"]))
    assert_that(result.get(long), is_([PAPERS / "AB.pdf"]))


def test_exact_match_prefers_shorter_key_regardless_of_order():
    short = entry("A")
    long = entry("AB")

    result = associate([long, short], {PAPERS / "A.pdf"}, False)

    assert_that(result.get(short), is_([PAPERS / "A.pdf"]))
    assert long not in result


def test_boundary_character():
    jabref = entry("JabRef")
    files = {
        PAPERS / "JabRef.pdf",
        PAPERS / "JabRefExtra.pdf",
        PAPERS / "JabRef-notes.pdf",
    }

    result = associate([jabref], files, exact_key_only=False)

    assert_that(
        result.get(jabref), is_([PAPERS / "JabRef-notes.pdf", PAPERS / "JabRef.pdf"])
    )


def test_exact_key_only_disables_prefix_matches():
    jabref = entry("JabRef")

    result = associate([jabref], {PAPERS / "JabRef-notes.pdf"}, exact_key_only=True)

    assert_that(len(result), is_(0))
    assert_that(result.get(jabref), is_(empty()))


def test_first_entry_wins():
    first = entry("Smith2020")
    second = entry("Smith2020")

    result = associate([first, second], {PAPERS / "Smith2020.pdf"}, False)

    assert_that(result.get(first), is_([PAPERS / "Smith2020.pdf"]))
    assert second not in result


def test_first_prefix_entry_wins():
    first = entry("Smith")
    second = entry("Smith-2020")

    result = associate([first, second], {PAPERS / "Smith-2020-slides.pdf"}, False)

    assert_that(result.get(first), is_([PAPERS / "Smith-2020-slides.pdf"]))
    assert second not in result


@pytest.mark.parametrize("key", [None, "", "   "])
def test_blank_keys_never_match(key):
    blank = Item(key)
    files = {PAPERS / ".pdf", PAPERS / "   .pdf", PAPERS / "paper.pdf"}

    result = associate([blank], files, False)

    assert blank not in result
    assert_that(result.files(), is_(empty()))


def test_custom_citation_key_accessor():
    record = {"citekey": "snow1984"}

    result = associate(
        [record],
        {PAPERS / "snow1984.pdf"},
        False,
        citation_key=lambda r: r.get("citekey"),
    )

    assert_that(result.get(record), is_([PAPERS / "snow1984.pdf"]))


def test_unmatched_files_are_dropped():
    jabref = entry("JabRef")

    result = associate([jabref], {PAPERS / "unrelated.pdf"}, False)

    assert_that(result.files(), is_(empty()))


def test_entries_are_not_modified():
    jabref = entry("JabRef")

    associate([jabref], {PAPERS / "JabRef.pdf"}, False)

    assert_that(jabref.key, is_("JabRef"))
    assert_that(jabref.fields, is_(empty()))


def test_idempotent():
    entries = [entry("A"), entry("AB"), entry("JabRef")]
    files = {PAPERS / n for n in ["A.pdf", "AB-x.pdf", "JabRef.pdf", "zzz.pdf"]}

    assert_that(associate(entries, files, False), is_(associate(entries, files, False)))


def test_items_in_insertion_order():
    a = entry("A")
    b = entry("B")

    result = associate([b, a], {PAPERS / "A.pdf", PAPERS / "B-1.pdf", PAPERS / "B.pdf"}, False)

    assert_that(
        list(result.items()),
        is_([(a, [PAPERS / "A.pdf"]), (b, [PAPERS / "B-1.pdf", PAPERS / "B.pdf"])]),
    )
