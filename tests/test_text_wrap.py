"""Unit tests for text measurement and wrapping."""

import pytest

from facturier.pipeline.text_wrap import font_name, measure_text, wrap_text


def test_measure_text():
    assert measure_text("", 10) == 0.0
    assert measure_text("Désignation", 10) > 0
    assert measure_text("Désignation longue", 10) > measure_text("Désignation", 10)
    assert measure_text("Total", 20) == pytest.approx(2 * measure_text("Total", 10))


def test_bold_is_wider_than_regular():
    assert measure_text("FACTURE", 10, "bold") > measure_text("FACTURE", 10)


def test_unknown_style_falls_back_to_regular():
    assert font_name("condensed") == font_name("regular")


def test_empty_text_occupies_one_line():
    assert wrap_text("", 50, 10) == [""]


def test_short_text_is_one_line():
    assert wrap_text("Prestation de conseil", 150, 10) == ["Prestation de conseil"]


def test_explicit_line_breaks_are_kept():
    assert wrap_text("Rue de Marseille\nTunis", 150, 10) == ["Rue de Marseille", "Tunis"]
    assert wrap_text("a\n\nb", 150, 10) == ["a", "", "b"]


def test_long_text_wraps_within_width():
    text = "Installation et configuration du serveur de messagerie pour le siège social et les agences régionales"
    lines = wrap_text(text, 40, 10)
    assert len(lines) > 1
    for line in lines:
        assert measure_text(line, 10) <= 40
    assert " ".join(lines).split() == text.split()


def test_overlong_word_is_split():
    word = "X" * 80
    lines = wrap_text(word, 20, 10)
    assert len(lines) > 1
    assert "".join(lines) == word
    for line in lines:
        assert measure_text(line, 10) <= 20


@pytest.mark.parametrize("width", [0, -5])
def test_non_positive_width_raises(width):
    with pytest.raises(ValueError):
        wrap_text("texte", width, 10)
