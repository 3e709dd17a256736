"""
Pytest configuration and fixtures for eieol-glossary tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing eieol_glossary
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from eieol_glossary import Glossary  # noqa: E402


SAMPLE_SOURCE = """\
Lesson 3: The Parable of the Prodigal Son

Человѣкъ етеръ имѣаше два сꙑна. # 11
- - -
Человѣкъ @n; nom.sg <человѣкъ> man, person@ [a man] # 11
етеръ @adj; nom.sg.masc <етеръ> certain, some@ [certain]
имѣаше @v; 3.sg.impf <имѣти> have@ [had]
- - -
-----
и рече мьнии отъ нею отьцю. # 12
- - -
и @conj; <и> and@ [and]
рече @v; 3.sg.aor <рещи> say@ [said]
мьнии @adj; nom.sg.masc comp. of <малъ> small@ [the younger]
отъ-нею @prep; <отъ> from + pron; gen.du <онъ> he@ [of them]
отьцю @n; dat.sg <отьць> father@ [to the father]
----
Free text after the block @ is not glossed @ [ever]
"""


@pytest.fixture
def sample_source() -> str:
    """Text of a glossed source document with two gloss blocks."""
    return SAMPLE_SOURCE


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A glossed source document with two gloss blocks."""
    path = tmp_path / "lesson_03.txt"
    path.write_text(SAMPLE_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def glossary() -> Glossary:
    """A small glossary built from single-sense lines."""
    g = Glossary()
    g.add_entry("сынъ @n; nom.sg <сынъ> son@ [the son]")
    g.add_entry("сꙑна @n; acc.du <сынъ> son@ [sons]")
    g.add_entry("отьцю @n; dat.sg <отьць> father@ [to the father]")
    g.add_entry("и @conj; <и> and@ [and]")
    return g
