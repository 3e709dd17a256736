"""
Beta-code transliteration filters.

Old Church Slavonic (OCS) and Old Russian (ORu) texts use slightly
different ASCII beta codes for the same Cyrillic letters:

    letter            OCS    ORu
    и (i)             h      i
    И (I)             H      I
    і (byel.-ukr. i)  i      i/
    ѧ (little yus)    e(     e|
    ѫ (big yus)       o(     o|

The soft sign i' is the same in both and is left alone.
"""

import re
from typing import Callable

_MARK_I_RE = re.compile(r"([iI])(?!['/])")
_NASAL_RE = re.compile(r"([eEoO])\(")


class UnknownFilterError(ValueError):
    """Raised when a transliteration filter name is not registered."""

    pass


def ocs_to_oru(text: str) -> str:
    """Convert OCS beta code to ORu beta code.

    The rewrites run in a fixed order: i must be marked before h is
    turned into i, otherwise every h would end up as i/.

    Example:
        >>> ocs_to_oru("svjatyh")
        'svjatyi'
        >>> ocs_to_oru("ime(")
        'i/me|'
    """
    text = _MARK_I_RE.sub(r"\1/", text)
    text = text.replace("h", "i")
    text = text.replace("H", "I")
    text = _NASAL_RE.sub(r"\1|", text)
    return text


FILTERS: dict[str, Callable[[str], str]] = {
    "ocs2oru": ocs_to_oru,
}


def get_filter(name: str) -> Callable[[str], str]:
    """Look up a transliteration filter by name.

    Raises:
        UnknownFilterError: If no filter is registered under ``name``
    """
    try:
        return FILTERS[name]
    except KeyError:
        known = ", ".join(sorted(FILTERS))
        raise UnknownFilterError(
            f"Unknown transliteration filter '{name}' (known: {known})"
        ) from None


__all__ = [
    "FILTERS",
    "UnknownFilterError",
    "get_filter",
    "ocs_to_oru",
]
