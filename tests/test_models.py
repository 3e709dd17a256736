"""
Unit tests for glossary data models.
"""

import pytest
from pydantic import ValidationError

from eieol_glossary.models import Entry, Gloss, Occurrence


def make_occurrence(surface: str = "сынъ", gloss: str = "the son") -> Occurrence:
    return Occurrence(
        surface_form=surface,
        gloss=Gloss(part_of_speech="n", analysis="nom.sg", contextual_meaning=gloss),
    )


class TestGloss:
    """Test Gloss model."""

    def test_defaults(self) -> None:
        """Analysis defaults to empty for indeclinable forms."""
        gloss = Gloss(part_of_speech="conj", contextual_meaning="and")
        assert gloss.analysis == ""

    def test_is_frozen(self) -> None:
        gloss = Gloss(part_of_speech="n", analysis="nom.sg", contextual_meaning="the son")
        with pytest.raises(ValidationError):
            gloss.part_of_speech = "v"

    def test_render_indents_every_line(self) -> None:
        gloss = Gloss(part_of_speech="n", analysis="", contextual_meaning="the son")
        assert gloss.render(2) == "\t\tn\n\t\t\n\t\tthe son\n"


class TestOccurrence:
    """Test Occurrence model."""

    def test_render(self) -> None:
        assert make_occurrence().render(1) == "\tсынъ\n\t\tn\n\t\tnom.sg\n\t\tthe son\n"

    def test_transliterated_returns_copy(self) -> None:
        occurrence = make_occurrence("abc")
        rewritten = occurrence.transliterated(str.upper)
        assert rewritten.surface_form == "ABC"
        assert occurrence.surface_form == "abc"
        assert rewritten.gloss == occurrence.gloss


class TestEntry:
    """Test Entry model and its merge rule."""

    def test_add_occurrence_with_same_meaning(self) -> None:
        entry = Entry(meaning="son", occurrences=[make_occurrence()])
        assert entry.add_occurrence("son", make_occurrence("сꙑна", "sons")) is True
        assert [o.surface_form for o in entry.occurrences] == ["сынъ", "сꙑна"]

    def test_add_occurrence_with_other_meaning_is_dropped(self) -> None:
        entry = Entry(meaning="son", occurrences=[make_occurrence()])
        assert entry.add_occurrence("boy", make_occurrence("сꙑна", "boys")) is False
        assert len(entry.occurrences) == 1
        assert entry.meaning == "son"

    def test_duplicates_are_kept(self) -> None:
        entry = Entry(meaning="son", occurrences=[make_occurrence()])
        entry.add_occurrence("son", make_occurrence())
        assert len(entry.occurrences) == 2

    def test_render_structured(self) -> None:
        entry = Entry(meaning="son", occurrences=[make_occurrence()])
        assert entry.render(1) == (
            "\tson\n"
            "\t\tсынъ\n"
            "\t\t\tn\n"
            "\t\t\tnom.sg\n"
            "\t\t\tthe son\n"
        )

    def test_flat_lines(self) -> None:
        entry = Entry(
            meaning="son",
            occurrences=[make_occurrence(), make_occurrence("сꙑна", "sons")],
        )
        assert entry.flat_lines("сынъ") == [
            "сынъ @n; nom.sg <сынъ> son@ [the son]",
            "сꙑна @n; nom.sg <сынъ> son@ [sons]",
        ]

    def test_apply_filter(self) -> None:
        entry = Entry(meaning="son", occurrences=[make_occurrence("ab"), make_occurrence("cd")])
        entry.apply_filter(lambda s: s[::-1])
        assert [o.surface_form for o in entry.occurrences] == ["ba", "dc"]
