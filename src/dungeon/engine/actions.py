"""Builtin action handlers, movement, and room description.

Every handler is called as ``handler(ctx, direct, indirect)`` once the
parser has resolved and checked the objects, and writes its result with
``ctx.say``. Handlers first offer the verb to the objects' behaviors
(see behaviors.py) and only fall back to the default effect when no
behavior claimed it.
"""

from collections.abc import Callable

from . import snapshot
from .behaviors import EXIT_CHECKS, OBJECT_BEHAVIORS, ROOM_ENTRIES, ROOM_LOOKS
from .context import Context
from .state import CARRIED, MAX_LOAD, MAX_STRENGTH, TROPHY_CASE
from .world import (
    BURNABLE,
    CONTAINER,
    DRINKABLE,
    FOOD,
    NO_DESCRIBE,
    READABLE,
    TAKE,
    VILLAIN,
    WEAPON,
)

DARK = "It is pitch black. You are likely to be eaten by a grue."

Handler = Callable[[Context, str | None, str | None], None]


def _article(name: str) -> str:
    return ("an " if name[:1].lower() in "aeiou" else "a ") + name


def _offer(ctx: Context, verb: str, direct: str | None, indirect: str | None) -> bool:
    """Give the direct, then the indirect object's behavior a chance to act."""
    for obj_id, other in ((direct, indirect), (indirect, direct)):
        obj = ctx.obj(obj_id)
        if obj is None or obj.behavior is None:
            continue
        behavior = OBJECT_BEHAVIORS.get(obj.behavior)
        if behavior is not None and behavior(ctx, verb, obj_id, other):
            return True
    return False


def _touch(ctx: Context, obj_id: str) -> None:
    """Award an object's find score the first time it is handled."""
    if obj_id in ctx.state.touched_objects:
        return
    ctx.state.touched_objects.add(obj_id)
    ctx.award(ctx.world.objects[obj_id].find_score)


def take_object(ctx: Context, obj_id: str) -> bool:
    """Move an object into the inventory, reporting why not if it can't be."""
    obj = ctx.world.objects[obj_id]
    if ctx.is_held(obj_id):
        ctx.say("You already have it.")
        return False
    if not obj.has(TAKE):
        ctx.say(f"You can't take the {obj.name}.")
        return False
    holder = ctx.location(obj_id)
    if holder in ctx.world.objects and holder not in ctx.state.open_objects:
        ctx.say(f"You can't reach the {obj.name}.")
        return False
    if ctx.load() + obj.size > MAX_LOAD:
        ctx.say("Your load is too heavy.")
        return False

    if holder == TROPHY_CASE:
        ctx.award(-obj.trophy_score)
    ctx.move(obj_id, CARRIED)
    _touch(ctx, obj_id)
    ctx.say("Taken.")
    return True


# --- Room description and movement --------------------------------------


def describe_objects(ctx: Context) -> None:
    for obj_id in ctx.room_objects():
        obj = ctx.world.objects[obj_id]
        if not ctx.is_visible(obj_id) or obj.has(NO_DESCRIBE):
            continue
        if obj.initial and obj_id not in ctx.state.touched_objects:
            ctx.say(obj.initial)
        else:
            ctx.say(obj.description or f"There is {_article(obj.name)} here.")
        _describe_contents(ctx, obj_id)


def _describe_contents(ctx: Context, holder_id: str) -> None:
    if not ctx.is_open(holder_id):
        return
    contents = [o for o in ctx.contents(holder_id) if ctx.is_visible(o)]
    if not contents:
        return
    ctx.say(f"The {ctx.name(holder_id)} contains:")
    for obj_id in contents:
        ctx.say(f"  {_article(ctx.name(obj_id)).capitalize()}")


def describe_room(
    ctx: Context, look: bool = False, first: bool = False, objects: bool = True
) -> None:
    """Describe the current room, and what lies in it unless ``objects`` is False.

    LOOK always gets the long description. Otherwise superbrief mode
    shows only the room name, and brief mode shows it for rooms already
    visited.
    """
    if not ctx.is_lit():
        ctx.say(DARK)
        return
    room = ctx.here
    state = ctx.state
    long = look or (not state.superbrief and (first or not state.brief))
    if not long:
        ctx.say(room.name)
    elif room.look is not None:
        ROOM_LOOKS[room.look](ctx)
    else:
        ctx.say(room.description or room.name)
    if objects:
        describe_objects(ctx)


def enter_room(ctx: Context, room_id: str) -> None:
    state = ctx.state
    state.current_room = room_id
    room = ctx.here
    first = room_id not in state.visited_rooms
    if first:
        state.visited_rooms.add(room_id)
        ctx.award(room.visit_score)
    if room.on_enter is not None:
        ROOM_ENTRIES[room.on_enter](ctx)
    describe_room(ctx, first=first)


def go(ctx: Context, direction: str) -> None:
    """Try to leave the current room in ``direction``."""
    exit = ctx.here.exits.get(direction)
    if exit is None:
        ctx.say("You can't go that way.")
        return
    if exit.before is not None and EXIT_CHECKS[exit.before](ctx, exit):
        return
    if exit.to is None or (exit.flag is not None and not ctx.flag(exit.flag)):
        if exit.on_blocked is not None:
            EXIT_CHECKS[exit.on_blocked](ctx, exit)
        else:
            ctx.say(exit.message or "You can't go that way.")
        return
    debris = ctx.state.munged_rooms.get(exit.to)
    if debris is not None:
        ctx.say(debris)
        return
    enter_room(ctx, exit.to)


# --- Handlers ------------------------------------------------------------


def look(ctx: Context, direct: str | None, indirect: str | None) -> None:
    describe_room(ctx, look=True)


def examine(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "EXAMINE", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if obj.has(READABLE) and obj.text:
        ctx.say(obj.text)
    elif obj.has(CONTAINER) and ctx.is_open(direct):
        look_in(ctx, direct, None)
    else:
        ctx.say(f"I see nothing special about the {obj.name}.")


def look_in(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "LOOK-IN", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(CONTAINER):
        ctx.say(f"I don't know how to look inside {_article(obj.name)}.")
    elif not ctx.is_open(direct):
        ctx.say(f"The {obj.name} is closed.")
    elif not ctx.contents(direct):
        ctx.say(f"The {obj.name} is empty.")
    else:
        _describe_contents(ctx, direct)


def take(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "TAKE", direct, indirect):
        return
    take_object(ctx, direct)


def drop(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "DROP", direct, indirect):
        return
    if not ctx.is_held(direct):
        ctx.say(f"You're not carrying the {ctx.name(direct)}.")
        return
    ctx.move(direct, ctx.state.current_room)
    ctx.say("Dropped.")


def inventory(ctx: Context, direct: str | None, indirect: str | None) -> None:
    held = ctx.held()
    if not held:
        ctx.say("You are empty-handed.")
        return
    ctx.say("You are carrying:")
    for obj_id in held:
        ctx.say(f"  {_article(ctx.name(obj_id)).capitalize()}")
        if ctx.is_open(obj_id):
            for inner in ctx.contents(obj_id):
                ctx.say(f"    {_article(ctx.name(inner)).capitalize()}")


def open_(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "OPEN", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(CONTAINER):
        ctx.say(f"You must tell me how to do that to {_article(obj.name)}.")
        return
    if direct in ctx.state.open_objects:
        ctx.say("It is already open.")
        return
    ctx.state.open_objects.add(direct)
    contents = [o for o in ctx.contents(direct) if ctx.is_visible(o)]
    if contents:
        names = ", ".join(_article(ctx.name(o)) for o in contents)
        ctx.say(f"Opening the {obj.name} reveals {names}.")
    else:
        ctx.say("Opened.")


def close(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "CLOSE", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(CONTAINER):
        ctx.say(f"You must tell me how to do that to {_article(obj.name)}.")
        return
    if direct not in ctx.state.open_objects:
        ctx.say("It is already closed.")
        return
    ctx.state.open_objects.discard(direct)
    ctx.say("Closed.")


def read(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "READ", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(READABLE):
        ctx.say(f"How does one read {_article(obj.name)}?")
        return
    if not ctx.is_lit():
        ctx.say("It is impossible to read in the dark.")
        return
    ctx.say(obj.text)


def eat(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "EAT", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(FOOD):
        ctx.say(f"I don't think that the {obj.name} would agree with you.")
        return
    ctx.remove(direct)
    ctx.say("Thank you very much.  It really hit the spot.")


def drink(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "DRINK", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if not obj.has(DRINKABLE):
        ctx.say(f"I don't think that the {obj.name} would agree with you.")
        return
    ctx.remove(direct)
    ctx.say("Thank you very much.  I was rather thirsty (from all this talking, probably).")


def throw(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "THROW", direct, indirect):
        return
    ctx.move(direct, ctx.state.current_room)
    if indirect is None:
        ctx.say("Thrown.")
    elif ctx.world.objects[indirect].has(VILLAIN):
        ctx.say(
            f"The {ctx.name(indirect)} ducks as the {ctx.name(direct)} flies by "
            "and crashes to the ground."
        )
    else:
        ctx.say(f"The {ctx.name(direct)} bounces off the {ctx.name(indirect)}.")


def wave(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "WAVE", direct, indirect):
        return
    ctx.say(f"Waving the {ctx.name(direct)} has no effect.")


def attack(ctx: Context, direct: str | None, indirect: str | None) -> None:
    """Start a fight. The melee demon settles it at the end of the turn."""
    if _offer(ctx, "ATTACK", direct, indirect):
        return
    villain = ctx.world.objects[direct]
    if not villain.has(VILLAIN):
        ctx.say(f"I've known strange people, but fighting {_article(villain.name)}?")
        return
    if indirect is None:
        ctx.say(f"Trying to attack the {villain.name} with your bare hands is suicidal.")
        return
    weapon = ctx.world.objects[indirect]
    if not weapon.has(WEAPON):
        ctx.say(f"Trying to attack the {villain.name} with {_article(weapon.name)} is suicidal.")
        return
    ctx.state.fighting.add(direct)
    ctx.say(f"You swing the {weapon.name} at the {villain.name}.")


def move(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "MOVE", direct, indirect):
        return
    obj = ctx.world.objects[direct]
    if obj.has(TAKE):
        ctx.say(f"Moving the {obj.name} reveals nothing.")
    else:
        ctx.say(f"You can't move the {obj.name}.")


def lift(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "LIFT", direct, indirect):
        return
    ctx.say(f"Playing in this way with the {ctx.name(direct)} has no effect.")


def put(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "PUT", direct, indirect):
        return
    if indirect is None:
        ctx.say(f"Where do you want to put the {ctx.name(direct)}?")
        return
    container = ctx.world.objects[indirect]
    if direct == indirect:
        ctx.say("How can you do that?")
        return
    if not container.has(CONTAINER):
        ctx.say(f"You can't put anything in the {container.name}.")
        return
    if indirect not in ctx.state.open_objects:
        ctx.say(f"The {container.name} isn't open.")
        return
    used = sum(ctx.world.objects[o].size for o in ctx.contents(indirect))
    if used + ctx.world.objects[direct].size > container.capacity:
        ctx.say("There's no room.")
        return
    ctx.move(direct, indirect)
    _touch(ctx, direct)
    if indirect == TROPHY_CASE:
        ctx.award(ctx.world.objects[direct].trophy_score)
    ctx.say("Done.")


def fill(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "FILL", direct, indirect):
        return
    ctx.say(f"There is nothing here to fill the {ctx.name(direct)} with.")


def give(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "GIVE", direct, indirect):
        return
    if indirect is None:
        ctx.say(f"Who do you want to give the {ctx.name(direct)} to?")
        return
    if not ctx.world.objects[indirect].has(VILLAIN):
        ctx.say(f"You can't give {_article(ctx.name(direct))} to {_article(ctx.name(indirect))}!")
        return
    ctx.move(direct, indirect)
    ctx.say(f"The {ctx.name(indirect)} accepts the {ctx.name(direct)} without a word.")


def burn(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if indirect is not None and not ctx.is_burning(indirect):
        ctx.say(f"With {_article(ctx.name(indirect))}??!?")
        return
    if _offer(ctx, "BURN", direct, indirect):
        return
    if indirect is None:
        ctx.say(f"What do you want to burn the {ctx.name(direct)} with?")
        return
    obj = ctx.world.objects[direct]
    if not obj.has(BURNABLE):
        ctx.say(f"You can't burn {_article(obj.name)}.")
        return
    ctx.remove(direct)
    ctx.say(f"The {obj.name} catches fire and is consumed.")


def turn_on(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "TURN-ON", direct, indirect):
        return
    ctx.say(f"You can't turn on {_article(ctx.name(direct))}.")


def turn_off(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "TURN-OFF", direct, indirect):
        return
    ctx.say(f"You can't turn off {_article(ctx.name(direct))}.")


def turn(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "TURN", direct, indirect):
        return
    ctx.say(f"Do you want to turn the {ctx.name(direct)} on or off?")


def tie(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "TIE", direct, indirect):
        return
    if indirect is None:
        ctx.say(f"What do you want to tie the {ctx.name(direct)} to?")
    else:
        ctx.say(f"You can't tie the {ctx.name(direct)} to that.")


def break_(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if _offer(ctx, "BREAK", direct, indirect):
        return
    if indirect is None:
        ctx.say(
            f"Trying to destroy the {ctx.name(direct)} with your bare hands is futile."
        )
    else:
        ctx.say(f"Nice try, but the {ctx.name(indirect)} doesn't even scratch it.")


def brief(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.state.brief = True
    ctx.state.superbrief = False
    ctx.say("Brief descriptions.")


def unbrief(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.state.brief = False
    ctx.state.superbrief = False
    ctx.say("Maximum verbosity.")


def superbrief(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.state.superbrief = True
    ctx.say("Superbrief descriptions.")


def unsuperbrief(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.state.superbrief = False
    ctx.say("Brief descriptions." if ctx.state.brief else "Maximum verbosity.")


def score(ctx: Context, direct: str | None, indirect: str | None) -> None:
    state = ctx.state
    moves = "move" if state.turns == 1 else "moves"
    ctx.say(
        f"Your score is {state.score} (total possible {ctx.world.max_score}), "
        f"in {state.turns} {moves}."
    )


def quit_(ctx: Context, direct: str | None, indirect: str | None) -> None:
    score(ctx, None, None)
    ctx.end_game()


def info(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.say(
        "Welcome to Dungeon!  You are near a large dungeon, which is reputed to "
        "contain vast quantities of treasure.  Bring the treasures back to the "
        "trophy case in the white house.  I understand commands like TAKE LAMP, "
        "OPEN THE WINDOW, PUT THE COINS IN THE CASE, and directions such as "
        "NORTH or UP."
    )


def diagnose(ctx: Context, direct: str | None, indirect: str | None) -> None:
    strength = ctx.state.strength
    if strength >= MAX_STRENGTH:
        ctx.say(f"You are in fine health.  Your strength is {strength}.")
    else:
        ctx.say(f"You have been wounded.  Your strength is {strength}.")


def save(ctx: Context, direct: str | None, indirect: str | None) -> None:
    if ctx.bookmarks is None:
        ctx.say("Saving is not possible here.")
        return
    ctx.bookmarks.save_bookmark(snapshot.snapshot(ctx))
    ctx.say("Saved.")


def restore(ctx: Context, direct: str | None, indirect: str | None) -> None:
    data = ctx.bookmarks.load_bookmark() if ctx.bookmarks is not None else None
    if not data:
        ctx.say("There is no saved game to restore.")
        return
    snapshot.restore(ctx, data)
    ctx.say("Restored.")
    describe_room(ctx, look=True)


def wait(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.say("Time passes...")


def walk(ctx: Context, direct: str | None, indirect: str | None) -> None:
    ctx.say("Where do you want to go?")


ACTIONS: dict[str, Handler] = {
    "LOOK": look,
    "EXAMINE": examine,
    "LOOK-IN": look_in,
    "TAKE": take,
    "DROP": drop,
    "INVENTORY": inventory,
    "OPEN": open_,
    "CLOSE": close,
    "READ": read,
    "EAT": eat,
    "DRINK": drink,
    "THROW": throw,
    "WAVE": wave,
    "ATTACK": attack,
    "MOVE": move,
    "LIFT": lift,
    "PUT": put,
    "FILL": fill,
    "GIVE": give,
    "BURN": burn,
    "TURN-ON": turn_on,
    "TURN-OFF": turn_off,
    "TURN": turn,
    "TIE": tie,
    "BREAK": break_,
    "BRIEF": brief,
    "UNBRIEF": unbrief,
    "SUPERBRIEF": superbrief,
    "UNSUPERBRIEF": unsuperbrief,
    "SCORE": score,
    "QUIT": quit_,
    "INFO": info,
    "DIAGNOSE": diagnose,
    "SAVE": save,
    "RESTORE": restore,
    "WAIT": wait,
    "WALK": walk,
}

# One-object verbs an answer to "Which X?" can complete
ORPHAN_ACTIONS: dict[str, Handler] = {
    action: ACTIONS[action]
    for action in (
        "TAKE", "DROP", "OPEN", "CLOSE", "READ", "EAT", "DRINK",
        "EXAMINE", "MOVE", "WAVE", "ATTACK",
    )
}
