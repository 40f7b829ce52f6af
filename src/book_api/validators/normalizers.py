"""
String normalizers shared by the settings layer and the consistency checks.

`normalize_name` produces the comparison key used for every "unique name" rule in the
catalogue (country names, category names, ISBNs): leading/trailing whitespace removed
and case folded. The same function feeds both the application-level duplicate check
and the `*_key` columns that carry the storage-level UNIQUE constraint, so the two can
never disagree about what "the same name" means.
"""


def to_uppercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.lower()


def normalize_name(value: str | None) -> str | None:
    """
    Return the normalized comparison key for a name, or None if the input is None.

    >>> normalize_name("  Fiction ")
    'fiction'
    >>> normalize_name("STRASSE") == normalize_name("straße")
    True
    """
    if value is None:
        return None
    return value.strip().casefold()
