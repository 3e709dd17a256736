"""
Glossary tools for glossed-text lesson series.

Parses glossed source texts into a headword index, keeps glosses
consistent across lessons, and reads/writes the index as flat or
structured text.
"""

from .glossary import Glossary, GlossaryError, GlossaryFormatError, IngestReport
from .models import Entry, Gloss, Occurrence
from .parser import ParsedGloss, parse_gloss_line, scan_source
from .transliteration import UnknownFilterError, get_filter, ocs_to_oru

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("eieol-glossary")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "Entry",
    "Gloss",
    "Glossary",
    "GlossaryError",
    "GlossaryFormatError",
    "IngestReport",
    "Occurrence",
    "ParsedGloss",
    "UnknownFilterError",
    "get_filter",
    "ocs_to_oru",
    "parse_gloss_line",
    "scan_source",
]
