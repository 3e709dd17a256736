"""
Data models for glossary entries.

A glossary maps a headword (dictionary form) to an Entry. Each Entry
holds the headword's meaning and every recorded Occurrence of it, and
each Occurrence pairs a surface form with its Gloss.
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field


def _indent(level: int) -> str:
    return "\t" * level


class Gloss(BaseModel):
    """Grammatical gloss attached to one occurrence of a word.

    Attributes:
        part_of_speech: Part of speech label (e.g. "n", "v", "prep")
        analysis: Grammatical analysis; empty for indeclinable forms
        contextual_meaning: Translation of the form in its context
    """

    model_config = ConfigDict(frozen=True)

    part_of_speech: str = Field(..., description="Part of speech")
    analysis: str = Field(default="", description="Grammatical analysis")
    contextual_meaning: str = Field(..., description="Contextual gloss")

    def render(self, indent: int = 0) -> str:
        """Render the three gloss fields on separate indented lines."""
        prefix = _indent(indent)
        return (
            f"{prefix}{self.part_of_speech}\n"
            f"{prefix}{self.analysis}\n"
            f"{prefix}{self.contextual_meaning}\n"
        )


class Occurrence(BaseModel):
    """A surface form as it appears in a text, with its gloss."""

    surface_form: str = Field(..., description="Inflected form found in the text")
    gloss: Gloss

    def render(self, indent: int = 0) -> str:
        return f"{_indent(indent)}{self.surface_form}\n" + self.gloss.render(indent + 1)

    def transliterated(self, func: Callable[[str], str]) -> Occurrence:
        """Return a copy with the surface form passed through ``func``."""
        return self.model_copy(update={"surface_form": func(self.surface_form)})


class Entry(BaseModel):
    """All recorded data for one headword.

    An Entry carries a single meaning. Occurrences are kept in the order
    they were added so that the earliest usage comes first; identical
    occurrences are kept, not deduplicated.

    Attributes:
        meaning: Canonical meaning of the headword
        occurrences: Recorded occurrences, in insertion order
    """

    meaning: str | None = Field(default=None, description="Canonical meaning")
    occurrences: list[Occurrence] = Field(default_factory=list)

    def add_occurrence(self, meaning: str, occurrence: Occurrence) -> bool:
        """Append ``occurrence`` if ``meaning`` matches this entry's meaning.

        A different meaning is treated as a separate sense, which an Entry
        cannot hold; the occurrence is dropped without complaint.

        Returns:
            True if the occurrence was recorded, False if it was dropped
        """
        if meaning != self.meaning:
            return False
        self.occurrences.append(occurrence)
        return True

    def render(self, indent: int = 0) -> str:
        """Render the entry in the tab-indented structured layout.

        Example:
            >>> print(entry.render(1), end="")
                son
                    сынъ
                        n
                        nom.sg
                        the son
        """
        text = f"{_indent(indent)}{self.meaning or ''}\n"
        for occurrence in self.occurrences:
            text += occurrence.render(indent + 1)
        return text

    def flat_lines(self, headword: str) -> list[str]:
        """Render one single-sense source line per occurrence."""
        return [
            f"{occ.surface_form} @{occ.gloss.part_of_speech}; "
            f"{occ.gloss.analysis} <{headword}> {self.meaning or ''}@ "
            f"[{occ.gloss.contextual_meaning}]"
            for occ in self.occurrences
        ]

    def apply_filter(self, func: Callable[[str], str]) -> None:
        """Rewrite the surface form of every occurrence through ``func``."""
        self.occurrences = [occ.transliterated(func) for occ in self.occurrences]


__all__ = [
    "Entry",
    "Gloss",
    "Occurrence",
]
