"""
Glossary container for glossed-text series.

Collects glosses from source texts into a single headword index so that
later lessons can be glossed consistently with earlier ones. Supports
ingesting source files and directories, searching headwords, and
reading/writing the glossary in a flat or a tab-indented structured
layout.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .models import Entry, Gloss, Occurrence
from .parser import parse_gloss_line, scan_source
from .transliteration import get_filter

logger = logging.getLogger("eieol-glossary")

DEFAULT_GLOSSARY_PATH = Path("glossary.txt")

# Intro pages, Word documents, scripts and macOS metadata are not glossed texts
DEFAULT_EXCLUDE = r"intro|\.doc|\.rb|\.py|\.pl|\.sh|\.DS"

NOT_FOUND = "String not found."

_HEADWORD_RE = re.compile(r"^\S")
# Meanings and surface forms may be empty, so only the tab count matters
_MEANING_RE = re.compile(r"^\t(?!\t)")
_OCCURRENCE_RE = re.compile(r"^\t\t(?!\t)")


class GlossaryError(Exception):
    """Base error for glossary operations."""

    pass


class GlossaryFormatError(GlossaryError):
    """A structured glossary file cannot be read."""

    pass


@dataclass
class IngestReport:
    """Outcome of adding a directory of source texts.

    Attributes:
        processed: Number of files passed to add_file
        total: Number of regular files found in the directory
        skipped: Names of the files excluded by pattern
        unreadable: Names of the files that are not UTF-8 text
    """

    processed: int = 0
    total: int = 0
    skipped: list[str] = field(default_factory=list)
    unreadable: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Successfully added {self.processed} out of {self.total} files."


class Glossary:
    """Headword index of all glossed occurrences.

    Maps each headword (dictionary form) to an Entry holding its meaning
    and every recorded occurrence. A headword keeps the first meaning it
    was recorded with; later occurrences with a different meaning are
    not added.

    Args:
        existing_glossary: Optional glossary file to load on creation
        structured: Whether ``existing_glossary`` uses the structured layout

    Example:
        >>> glossary = Glossary()
        >>> glossary.add_entry("сынъ @n; nom.sg <сынъ> son@ [the son]")
        1
        >>> glossary.paste("сын")
        '<сынъ> son'
    """

    def __init__(
        self,
        existing_glossary: Path | None = None,
        structured: bool = False,
    ) -> None:
        self.headwords: dict[str, Entry] = {}
        if existing_glossary is not None:
            self.import_file(existing_glossary, structured=structured)

    def __len__(self) -> int:
        return len(self.headwords)

    def __contains__(self, headword: object) -> bool:
        return headword in self.headwords

    def __iter__(self) -> Iterator[str]:
        return iter(self.headwords)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def _record(self, headword: str, meaning: str, occurrence: Occurrence) -> bool:
        entry = self.headwords.get(headword)
        if entry is None:
            self.headwords[headword] = Entry(meaning=meaning, occurrences=[occurrence])
            return True
        return entry.add_occurrence(meaning, occurrence)

    def add_entry(self, line: str) -> int:
        """Add every sense of a glossed line to the glossary.

        A new headword creates a new Entry; a known headword gets the
        occurrence appended if the meaning matches.

        Args:
            line: A glossed line, possibly carrying several linked senses

        Returns:
            Number of occurrences recorded
        """
        added = 0
        for parsed in parse_gloss_line(line):
            if self._record(parsed.headword, parsed.meaning, parsed.to_occurrence()):
                added += 1
        return added

    def add_file(self, path: Path | str) -> int:
        """Add the glosses of a glossed source document.

        Only lines inside gloss blocks are considered (see scan_source).

        Args:
            path: Source document

        Returns:
            Number of occurrences recorded

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        added = 0
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        for source_line in scan_source(text.splitlines()):
            added += self.add_entry(source_line.text)
        logger.info(f"Added {added} occurrences from {path}")
        return added

    def add_directory(
        self,
        path: Path | str,
        exclude: str = DEFAULT_EXCLUDE,
    ) -> IngestReport:
        """Add every glossed source document directly under a directory.

        Subdirectories are not entered. Files whose name matches
        ``exclude`` are counted but not read. A file that is not UTF-8
        text is reported and skipped; the rest of the directory is still
        added.

        Args:
            path: Directory of source documents
            exclude: Regular expression matched against file names

        Returns:
            IngestReport with processed and total file counts

        Raises:
            FileNotFoundError: If the directory doesn't exist
            NotADirectoryError: If ``path`` is not a directory
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Directory not found: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")

        exclude_re = re.compile(exclude)
        report = IngestReport()
        for file_path in sorted(path.iterdir()):
            if not file_path.is_file():
                continue
            report.total += 1
            if exclude_re.search(file_path.name):
                report.skipped.append(file_path.name)
                continue
            logger.info(f"Adding glosses from file {file_path} ...")
            try:
                self.add_file(file_path)
            except UnicodeDecodeError as e:
                logger.warning(f"Skipping {file_path}: not UTF-8 text ({e.reason})")
                report.unreadable.append(file_path.name)
                continue
            report.processed += 1

        logger.info(str(report))
        return report

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def matching_headwords(self, query: str, exact: bool = False) -> list[str]:
        """Return the headwords equal to (exact) or containing ``query``."""
        if exact:
            return [query] if query in self.headwords else []
        return [headword for headword in self.headwords if query in headword]

    def find(self, query: str, exact: bool = False) -> str:
        """Describe every matching headword with its full entry."""
        matches = self.matching_headwords(query, exact)
        if not matches:
            return NOT_FOUND
        return "".join(
            f"{headword}\n{self.headwords[headword].render(1)}" for headword in matches
        ).rstrip("\n")

    def paste(self, query: str, exact: bool = False) -> str:
        """List matching headwords as ``<headword> meaning`` lines.

        The output can be pasted directly into a source document.
        """
        matches = self.matching_headwords(query, exact)
        if not matches:
            return NOT_FOUND
        return "\n".join(
            f"<{headword}> {self.headwords[headword].meaning or ''}" for headword in matches
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dumps(self, structured: bool = False) -> str:
        """Serialize the glossary, sorted by headword."""
        chunks: list[str] = []
        for headword in sorted(self.headwords):
            entry = self.headwords[headword]
            if structured:
                chunks.append(f"{headword}\n{entry.render(1)}")
            else:
                chunks.extend(f"{line}\n" for line in entry.flat_lines(headword))
        return "".join(chunks)

    def loads(self, text: str, structured: bool = False) -> None:
        """Add glossary data from a flat or structured serialization."""
        lines = text.splitlines()
        if structured:
            self._read_structured(lines)
        else:
            for line in lines:
                self.add_entry(line)

    def _read_structured(self, lines: Iterable[str]) -> None:
        """Read the tab-indented layout produced by dumps(structured=True).

        The three lines after an occurrence line are taken as part of
        speech, analysis and contextual gloss without further checks.
        A headword that is already present keeps its data; its block in
        the file is ignored.
        """
        entry: Entry | None = None
        numbered = enumerate(lines, start=1)

        for line_number, line in numbered:
            if _HEADWORD_RE.match(line):
                headword = line.strip()
                if headword in self.headwords:
                    logger.debug(f"Duplicate headword '{headword}' at line {line_number}, ignoring block")
                    entry = None
                else:
                    entry = Entry()
                    self.headwords[headword] = entry
            elif _MEANING_RE.match(line):
                if entry is not None and entry.meaning is None:
                    entry.meaning = line.strip()
            elif _OCCURRENCE_RE.match(line):
                fields = []
                for _ in range(3):
                    try:
                        fields.append(next(numbered)[1].strip())
                    except StopIteration:
                        raise GlossaryFormatError(
                            f"Occurrence at line {line_number} is missing its gloss lines"
                        ) from None
                if entry is None:
                    continue
                part_of_speech, analysis, contextual = fields
                entry.occurrences.append(
                    Occurrence(
                        surface_form=line.strip(),
                        gloss=Gloss(
                            part_of_speech=part_of_speech,
                            analysis=analysis,
                            contextual_meaning=contextual,
                        ),
                    )
                )

    def import_file(
        self,
        path: Path | str = DEFAULT_GLOSSARY_PATH,
        structured: bool = False,
    ) -> None:
        """Load a glossary file into memory, merging with what is there.

        Raises:
            FileNotFoundError: If the file doesn't exist
            GlossaryFormatError: If a structured file ends inside an occurrence
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            self.loads(f.read(), structured=structured)
        logger.info(f"Imported {path} ({len(self.headwords)} headwords)")

    def export(
        self,
        path: Path | str = DEFAULT_GLOSSARY_PATH,
        structured: bool = False,
    ) -> None:
        """Write the glossary to a file in the flat or structured layout."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.dumps(structured=structured))
        logger.info(f"Exported {len(self.headwords)} headwords to {path}")

    # ------------------------------------------------------------------
    # Transliteration
    # ------------------------------------------------------------------

    def apply_filter(self, name: str) -> None:
        """Rewrite headwords and surface forms through a named filter.

        Two headwords that become equal collide; the one that comes later
        in the glossary replaces the earlier one.

        Raises:
            UnknownFilterError: If ``name`` is not a registered filter
        """
        func = get_filter(name)
        rewritten: dict[str, Entry] = {}
        for headword, entry in list(self.headwords.items()):
            entry.apply_filter(func)
            new_headword = func(headword)
            if new_headword in rewritten:
                logger.debug(f"Headword '{headword}' collides with '{new_headword}', replacing it")
            rewritten[new_headword] = entry
        self.headwords = rewritten


__all__ = [
    "DEFAULT_EXCLUDE",
    "DEFAULT_GLOSSARY_PATH",
    "Glossary",
    "GlossaryError",
    "GlossaryFormatError",
    "IngestReport",
    "NOT_FOUND",
]
