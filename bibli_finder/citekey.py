class _CitationKeyChars(frozenset):
    """Letters and digits of any script, plus the special characters"""

    def __contains__(self, char) -> bool:
        return char.isalnum() or super().__contains__(char)


"""Characters allowed inside a generated citation key"""
CITATION_KEY_CHARS = _CitationKeyChars("_:")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def get_citation_key(entry) -> str | None:
    """Default accessor, works with `bibtexparser.model.Entry`"""
    return getattr(entry, "key", None)
