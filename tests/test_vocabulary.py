"""Tests for word normalization."""

from dungeon.engine.vocabulary import (
    NOISE_WORDS,
    direction,
    normalize,
    normalize_word,
    preposition,
)


def test_normalize_uppercases_and_truncates():
    assert normalize("take the Lantern") == ["TAKE", "THE", "LANTE"]


def test_normalize_drops_empty_tokens():
    assert normalize("  open   mailbox \t") == ["OPEN", "MAILB"]
    assert normalize("   ") == []


def test_normalize_is_idempotent():
    words = normalize("Examine the GLAMDRING carefully")
    assert normalize(" ".join(words)) == words


def test_words_sharing_five_letters_collide():
    """Truncation collisions are part of the vocabulary."""
    assert normalize_word("lantern") == normalize_word("LANTERNS") == "LANTE"
    assert normalize_word("inventory") == normalize_word("invent")


def test_preposition_classes():
    assert preposition(normalize_word("using")) == "WITH"
    assert preposition(normalize_word("through")) == "WITH"
    assert preposition(normalize_word("into")) == "IN"
    assert preposition(normalize_word("inside")) == "IN"
    assert preposition(normalize_word("toward")) == "TO"
    assert preposition(normalize_word("onto")) == "ON"
    assert preposition("LAMP") is None


def test_direction_abbreviations():
    assert direction("N") == "NORTH"
    assert direction("D") == "DOWN"
    assert direction("NE") == "NE"
    assert direction("IN") == "ENTER"
    assert direction("OUT") == "EXIT"
    assert direction("LEAVE") == "EXIT"
    assert direction("TAKE") is None


def test_noise_words():
    assert {"THE", "A", "AN", "OF"} <= NOISE_WORDS
