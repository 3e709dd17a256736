"""
Line parser for glossed source texts.

A glossed line carries one or more linked senses for a surface form:

    word1-word2 @pos1; an1 <head1> meaning1 + pos2; an2 <head2> meaning2@ [gloss] # notes

parse_gloss_line() splits such a line into one ParsedGloss per sense.
scan_source() walks a whole source document and yields the lines that
sit inside gloss blocks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .models import Gloss, Occurrence

logger = logging.getLogger("eieol-glossary")

# "@ @" on its own marks a paragraph break, not a gloss
_PARAGRAPH_BREAK_RE = re.compile(r"^\s*@\s*@\s*$")
_SENSE_SEPARATOR_RE = re.compile(r"\s+\+\s+")
# A standalone "of" goes together with the whitespace around it: "gen. of sg" -> "gen.sg"
_OF_RE = re.compile(r"(?:^|\s)of(?:\s+|$)")

# Source document block markers
_GLOSS_BLOCK_START_RE = re.compile(r"-[ ]-[ ]-")
_GLOSS_BLOCK_END_RE = re.compile(r"-{4,5}")
_VERSE_RE = re.compile(r".+\s+#\s*(\d+)")
_GLOSS_CANDIDATE_RE = re.compile(r"^.+\s@")


@dataclass(frozen=True)
class ParsedGloss:
    """One sense extracted from a glossed line."""

    headword: str
    meaning: str
    surface_form: str
    gloss: Gloss

    def to_occurrence(self) -> Occurrence:
        return Occurrence(surface_form=self.surface_form, gloss=self.gloss)


@dataclass(frozen=True)
class _Sense:
    part_of_speech: str
    analysis: str
    headword: str
    meaning: str


@dataclass(frozen=True)
class SourceLine:
    """A candidate gloss line found inside a gloss block.

    Attributes:
        text: The raw line
        line_number: 1-based line number in the source document
        verse: Last verse number seen before the gloss block, if any
    """

    text: str
    line_number: int
    verse: int | None = None


def _strip_notes(line: str) -> str:
    """Drop everything from the first '#' onward."""
    return line.split("#", 1)[0]


def is_gloss_line(line: str) -> bool:
    """Return True if ``line`` has the ``something @ something @ something`` shape."""
    body = _strip_notes(line)
    if _PARAGRAPH_BREAK_RE.match(body):
        return False
    return body.count("@") >= 2


def _extract_contextual_gloss(segment: str) -> str | None:
    """Return the text inside the last [...] of ``segment``, or None."""
    start = segment.rfind("[")
    if start == -1:
        return None
    end = segment.find("]", start + 1)
    if end == -1:
        return None
    return segment[start + 1:end].strip()


def _split_senses(segment: str) -> list[str]:
    return [part.strip() for part in _SENSE_SEPARATOR_RE.split(segment.strip())]


def _parse_sense(text: str) -> _Sense | None:
    """Parse ``pos; analysis <headword> meaning``.

    Semicolons after the first one belong to the analysis and are kept
    as commas.
    """
    part_of_speech, _, rest = text.partition(";")
    rest = ",".join(rest.split(";"))

    start = rest.find("<")
    if start == -1:
        return None
    end = rest.find(">", start + 1)
    if end == -1:
        return None

    headword = rest[start + 1:end].strip()
    if not headword:
        return None

    analysis = _OF_RE.sub("", rest[:start]).strip()
    return _Sense(
        part_of_speech=part_of_speech.strip(),
        analysis=analysis,
        headword=headword,
        meaning=rest[end + 1:].strip(),
    )


def _surface_forms(surface: str, count: int) -> list[str] | None:
    """Pair the surface field with ``count`` senses.

    A hyphenated field names one form per sense; otherwise the same form
    is reused for every sense.
    """
    if count > 1 and "-" in surface:
        forms = [form.strip() for form in surface.split("-")]
        if len(forms) != count:
            return None
        return forms
    return [surface] * count


def parse_gloss_line(line: str) -> list[ParsedGloss]:
    """Parse one glossed line into its senses.

    Lines that are not glossed lines produce an empty list. A glossed
    line without a bracketed contextual gloss is reported with a warning
    and also produces an empty list. This function does not raise on
    malformed input.

    Args:
        line: Raw line from a source text or flat glossary file

    Returns:
        One ParsedGloss per linked sense, in order of appearance

    Example:
        >>> [p.headword for p in parse_gloss_line("a-b @n; x <h1> m1 + v; y <h2> m2@ [g]")]
        ['h1', 'h2']
    """
    if not is_gloss_line(line):
        return []

    segments = _strip_notes(line).split("@")
    surface = segments[0].strip()

    contextual = _extract_contextual_gloss(segments[-1])
    if contextual is None:
        logger.warning(f"Missing contextual gloss, skipping line: {line.strip()}")
        return []

    senses = []
    for text in _split_senses(segments[1]):
        sense = _parse_sense(text)
        if sense is None:
            logger.debug(f"No headword in sense '{text}', skipping line: {line.strip()}")
            return []
        senses.append(sense)

    forms = _surface_forms(surface, len(senses))
    if forms is None:
        logger.debug(
            f"Surface forms of '{surface}' do not match {len(senses)} senses, "
            f"skipping line: {line.strip()}"
        )
        return []

    return [
        ParsedGloss(
            headword=sense.headword,
            meaning=sense.meaning,
            surface_form=form,
            gloss=Gloss(
                part_of_speech=sense.part_of_speech,
                analysis=sense.analysis,
                contextual_meaning=contextual,
            ),
        )
        for form, sense in zip(forms, senses)
    ]


def scan_source(lines: Iterable[str]) -> Iterator[SourceLine]:
    """Yield the candidate gloss lines of a glossed source document.

    A source document alternates between passages and gloss blocks. A
    "- - -" line opens a gloss block and a line with a run of four or
    five dashes closes it. Outside gloss blocks, a trailing "# <n>"
    records the current verse number.
    """
    in_gloss_block = False
    verse: int | None = None

    for line_number, line in enumerate(lines, start=1):
        if not in_gloss_block:
            if _GLOSS_BLOCK_START_RE.search(line):
                in_gloss_block = True
                continue
            match = _VERSE_RE.match(line)
            if match:
                verse = int(match.group(1))
                logger.debug(f"Verse {verse} at line {line_number}")
        elif _GLOSS_BLOCK_END_RE.search(line):
            in_gloss_block = False
        elif _GLOSS_CANDIDATE_RE.match(line):
            yield SourceLine(text=line, line_number=line_number, verse=verse)


__all__ = [
    "ParsedGloss",
    "SourceLine",
    "is_gloss_line",
    "parse_gloss_line",
    "scan_source",
]
