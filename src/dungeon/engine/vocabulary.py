"""Word normalization, prepositions, and directions.

Every word the parser compares is first normalized: uppercased and cut
to its first five characters. Collisions such as LANTERN/LANTE are part
of the vocabulary, not a bug.
"""

# Only the first 5 characters of a word are significant.
WORD_LENGTH = 5


def normalize_word(word: str) -> str:
    """Uppercase and truncate a single word."""
    return word.strip().upper()[:WORD_LENGTH]


def normalize(text: str) -> list[str]:
    """Split raw input into normalized words, dropping empties."""
    return [normalize_word(w) for w in text.split() if w.strip()]


def _classes(groups: dict[str, tuple[str, ...]]) -> dict[str, str]:
    table: dict[str, str] = {}
    for canonical, words in groups.items():
        for word in (canonical, *words):
            table[normalize_word(word)] = canonical
    return table


PREPOSITIONS = _classes({
    "WITH": ("using", "through", "thru"),
    "IN": ("inside", "into"),
    "TO": ("toward", "towards"),
    "AT": (),
    "ON": ("onto",),
    "OFF": (),
})

DIRECTIONS = _classes({
    "NORTH": ("n",),
    "SOUTH": ("s",),
    "EAST": ("e",),
    "WEST": ("w",),
    "UP": ("u",),
    "DOWN": ("d",),
    "NE": (),
    "NW": (),
    "SE": (),
    "SW": (),
    "ENTER": ("in",),
    "EXIT": ("out", "leave"),
    "CROSS": (),
    "CLIMB": (),
})

# Skipped inside object phrases ("take the lamp").
NOISE_WORDS = frozenset({"THE", "A", "AN", "OF"})

# Pronouns that refer back to the last direct object.
PRONOUNS = frozenset({"IT", "THEM"})


def preposition(word: str) -> str | None:
    """Return the canonical preposition class for a normalized word."""
    return PREPOSITIONS.get(word)


def direction(word: str) -> str | None:
    """Return the canonical direction for a normalized word."""
    return DIRECTIONS.get(word)
