"""Resolve an object phrase to the objects it could mean right now."""

from dataclasses import dataclass

from .context import Context
from .vocabulary import NOISE_WORDS, PRONOUNS, normalize_word

FOUND = "found"
NOT_FOUND = "not_found"
TOO_DARK = "too_dark"
AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one object phrase."""

    status: str
    word: str  # as the player typed it
    candidates: tuple[str, ...] = ()

    @property
    def obj(self) -> str | None:
        return self.candidates[0] if self.status == FOUND else None

    def message(self) -> str:
        if self.status == TOO_DARK:
            return "It is too dark in here to see."
        if self.status == NOT_FOUND:
            return f"I can't see a {self.word} here."
        return ""


def object_words(ctx: Context, obj_id: str) -> set[str]:
    """Normalized words an object answers to: id, synonyms, short name."""
    obj = ctx.world.objects[obj_id]
    words = {normalize_word(obj.id)}
    words.update(normalize_word(s) for s in obj.synonyms)
    words.update(
        w for w in (normalize_word(p) for p in obj.name.split())
        if w not in NOISE_WORDS
    )
    return words


def _reachable(ctx: Context, holders: list[str]) -> list[str]:
    """Visible objects in ``holders`` plus contents of open ones, recursively."""
    found: list[str] = []
    queue = list(holders)
    while queue:
        obj_id = queue.pop(0)
        if obj_id in found or not ctx.is_visible(obj_id):
            continue
        found.append(obj_id)
        if ctx.is_open(obj_id):
            queue.extend(ctx.contents(obj_id))
    return found


def in_scope(ctx: Context, lit: bool | None = None) -> tuple[list[str], list[str]]:
    """Held candidates and (if lit) room candidates for the current room."""
    if lit is None:
        lit = ctx.is_lit()
    held = _reachable(ctx, ctx.held())
    room = _reachable(ctx, ctx.room_objects()) if lit else []
    return held, room


def resolve(ctx: Context, words: list[str]) -> Resolution:
    """Resolve an object phrase given as raw words."""
    phrase = [w for w in words if normalize_word(w) not in NOISE_WORDS]
    if not phrase:
        return Resolution(NOT_FOUND, " ".join(words) or "thing")
    raw = phrase[0]
    word = normalize_word(raw)

    forced = ctx.here.forced.get(word)
    if (
        forced is not None
        and ctx.location(forced) == ctx.state.current_room
        and ctx.is_visible(forced)
    ):
        return Resolution(FOUND, raw, (forced,))

    lit = ctx.is_lit()
    held, room = in_scope(ctx, lit)

    if word in PRONOUNS:
        last = ctx.state.last_direct
        if last is not None and (last in held or last in room):
            return Resolution(FOUND, raw, (last,))
        return Resolution(NOT_FOUND, raw)

    held_matches = [o for o in held if word in object_words(ctx, o)]
    matches = held_matches + [
        o for o in room if o not in held_matches and word in object_words(ctx, o)
    ]

    if len(matches) == 1:
        return Resolution(FOUND, raw, (matches[0],))
    if len(matches) > 1:
        return Resolution(AMBIGUOUS, raw, tuple(matches))
    if not lit and not held_matches:
        return Resolution(TOO_DARK, raw)
    return Resolution(NOT_FOUND, raw)


def which_prompt(ctx: Context, word: str, candidates: list[str] | tuple[str, ...]) -> str:
    """Build the "Which X (the A, the B, or the C)?" question."""
    names = [f"the {ctx.name(c)}" for c in candidates]
    if len(names) < 2:
        return f"Which {word}?"
    if len(names) == 2:
        return f"Which {word} ({names[0]} or {names[1]})?"
    return f"Which {word} ({', '.join(names[:-1])}, or {names[-1]})?"
