"""Command interpretation: verb lookup, object resolution, syntax matching.

parse_command(ctx, raw) handles one accepted input. It never raises for
bad player input; every failure is a message written to the output.
"""

from .actions import ACTIONS, ORPHAN_ACTIONS, go, take_object
from .context import Context
from .resolver import AMBIGUOUS, FOUND, resolve, which_prompt
from .state import PendingQuestion
from .verbs import INVENTORY, NONE, ROOM, VERBS, SlotSpec, Syntax, VerbSpec
from .vocabulary import direction, normalize_word, preposition
from .world import TAKE

NO_SENSE = "I can't make sense out of that."


def _split(words: list[str], preps: frozenset[str]) -> tuple[list[str], str | None, list[str]]:
    """Split the words after the verb at the first slot-2 preposition."""
    for i, word in enumerate(words):
        prep = preposition(normalize_word(word))
        if prep is not None and prep in preps:
            return words[:i], prep, words[i + 1:]
    return words, None, []


def _leading_prep(words: list[str]) -> tuple[str | None, list[str]]:
    """Peel a preposition off either end of the first phrase (LOOK AT X, TURN X ON)."""
    if not words:
        return None, words
    prep = preposition(normalize_word(words[0]))
    if prep is not None:
        return prep, words[1:]
    prep = preposition(normalize_word(words[-1]))
    if prep is not None and len(words) > 1:
        return prep, words[:-1]
    return None, words


def _fits(slot: SlotSpec, obj: str | None, prep: str | None) -> bool:
    if slot.is_empty:
        return obj is None and prep is None
    return obj is not None and prep == slot.prep


def match_syntax(
    spec: VerbSpec,
    direct: str | None,
    prep1: str | None,
    indirect: str | None,
    prep2: str | None,
) -> Syntax | None:
    """Pick the syntax alternative for the resolved slots.

    An exact match wins wherever it appears. Otherwise the first driver
    is used, but only when a slot is still unresolved.
    """
    for syntax in spec.syntaxes:
        if _fits(syntax.slot1, direct, prep1) and _fits(syntax.slot2, indirect, prep2):
            return syntax
    if direct is None or indirect is None:
        for syntax in spec.syntaxes:
            if syntax.is_driver:
                return syntax
    return None


def _orphan_action(spec: VerbSpec, prep1: str | None) -> str:
    """The action a one-object answer should complete."""
    for syntax in spec.syntaxes:
        if syntax.slot1.scope != NONE and syntax.slot1.prep == prep1:
            return syntax.action
    return spec.action


def _answer(ctx: Context, pending: PendingQuestion, words: list[str]) -> None:
    """Interpret input as the answer to a pending "Which X?" question."""
    result = resolve(ctx, words)
    if result.status == AMBIGUOUS:
        ctx.state.pending = PendingQuestion(
            verb=pending.verb,
            words=pending.words,
            candidates=list(result.candidates),
            word=result.word,
        )
        ctx.say(which_prompt(ctx, result.word, result.candidates))
        return
    if result.status != FOUND:
        ctx.say(result.message())
        return

    handler = ORPHAN_ACTIONS.get(pending.verb)
    if handler is None:
        ctx.say("I don't know how to do that.")
        return
    state = ctx.state
    state.last_verb = pending.verb
    state.last_direct = result.obj
    state.last_indirect = None
    handler(ctx, result.obj, None)


def _implicit_take(ctx: Context, slot: SlotSpec, obj_id: str | None) -> bool:
    """Pick up a room object the verb needs in hand. False aborts the command."""
    if obj_id is None or slot.scope != ROOM or slot.no_take:
        return True
    obj = ctx.world.objects[obj_id]
    if not obj.has(TAKE) or ctx.location(obj_id) != ctx.state.current_room:
        return True
    return take_object(ctx, obj_id)


def _dispatch(
    ctx: Context,
    verb_word: str,
    syntax: Syntax,
    direct: str | None,
    indirect: str | None,
) -> None:
    if syntax.slot1.is_empty:
        direct = None
    if syntax.slot2.is_empty:
        indirect = None

    if syntax.is_flip:
        direct, indirect = indirect, direct

    if not _implicit_take(ctx, syntax.slot1, direct):
        return
    for slot, obj_id in ((syntax.slot1, direct), (syntax.slot2, indirect)):
        if obj_id is not None and slot.scope == INVENTORY and not ctx.is_held(obj_id):
            ctx.say(f"You don't have the {ctx.name(obj_id)}.")
            return

    state = ctx.state
    state.last_verb = syntax.action
    state.last_direct = direct
    state.last_indirect = indirect

    if not syntax.slot1.is_empty and direct is None:
        ctx.say(f"What do you want to {verb_word}?")
        return
    if not syntax.slot2.is_empty and indirect is None:
        prep = syntax.slot2.prep.lower()
        ctx.say(f"What do you want to {verb_word} the {ctx.name(direct)} {prep}?")
        return

    handler = ACTIONS.get(syntax.action)
    if handler is None:
        ctx.say("I don't know how to do that.")
        return
    handler(ctx, direct, indirect)


def parse_command(ctx: Context, raw: str) -> None:
    """Interpret one non-empty line of player input."""
    words = raw.split()
    state = ctx.state

    pending, state.pending = state.pending, None
    if pending is not None:
        _answer(ctx, pending, words)
        return

    first = normalize_word(words[0])
    if len(words) == 1 and direction(first) is not None:
        go(ctx, direction(first))
        return

    spec = VERBS.lookup(first)
    if spec is None:
        ctx.say(f'I don\'t know the word "{words[0]}".')
        return
    if spec.action == "WALK" and len(words) == 2 and direction(normalize_word(words[1])):
        go(ctx, direction(normalize_word(words[1])))
        return

    phrase1, prep2, phrase2 = _split(words[1:], spec.slot2_preps)
    prep1, phrase1 = _leading_prep(phrase1)

    resolved: list[str | None] = []
    for phrase in (phrase1, phrase2):
        if not phrase:
            resolved.append(None)
            continue
        result = resolve(ctx, phrase)
        if result.status == AMBIGUOUS:
            state.pending = PendingQuestion(
                verb=_orphan_action(spec, prep1),
                words=list(words),
                candidates=list(result.candidates),
                word=result.word,
            )
            ctx.say(which_prompt(ctx, result.word, result.candidates))
            return
        if result.status != FOUND:
            ctx.say(result.message())
            return
        resolved.append(result.obj)
    direct, indirect = resolved

    syntax = match_syntax(spec, direct, prep1, indirect, prep2)
    if syntax is None:
        ctx.say(NO_SENSE)
        return
    _dispatch(ctx, words[0].lower(), syntax, direct, indirect)
