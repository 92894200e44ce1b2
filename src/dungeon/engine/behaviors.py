"""Per-object, per-room, and scheduled-event behavior.

Object behaviors are offered a verb before the default action runs:
``behavior(ctx, verb, obj_id, other) -> bool`` returns True when it fully
handled the verb. Room look callbacks replace the long description,
on-enter callbacks run as the player arrives, and exit checks can veto
or explain a blocked move. Scheduled events are looked up by name, so
GameState only ever stores the name and its arguments.

The registries at the bottom of the module are what dungeon.toml refers
to by name.
"""

from collections.abc import Callable

from .context import Context
from .state import (
    BRICK,
    FUSE,
    GNOME,
    SAFE_ROOM,
    TRAP_DOOR,
    TROLL,
    WIDE_LEDGE,
)
from .world import Exit

BOOM = "   BOOOOOOOOOOOM      "
DEBRIS = "The way is blocked by debris from an explosion."
MUNGE_MESSAGES = {WIDE_LEDGE: "The ledge has collapsed and cannot be landed on."}


# --- Object behaviors ----------------------------------------------------


def window(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """The kitchen window, seen from either side."""
    if verb == "OPEN":
        if ctx.flag("kitchen_window"):
            ctx.say("It is already open.")
        else:
            ctx.say("With great effort, you open the window far enough to allow entry.")
            ctx.set_flag("kitchen_window")
        return True
    if verb == "CLOSE":
        if ctx.flag("kitchen_window"):
            ctx.say("The window closes (more easily than it opened).")
            ctx.set_flag("kitchen_window", False)
        else:
            ctx.say("It is already closed.")
        return True
    return False


def rug(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    if verb == "TAKE":
        ctx.say("The rug is too heavy to carry.")
        return True
    if verb == "LIFT":
        ctx.say(
            "The rug is too heavy to lift, but in trying to take it you have "
            "noticed an irregularity beneath it."
        )
        return True
    if verb == "MOVE":
        if ctx.flag("rug_moved"):
            ctx.say("Having moved the carpet previously, you find it impossible to move it again.")
        else:
            ctx.say(
                "With a great effort, the rug is moved to one side of the room. "
                "With the rug moved, the dusty cover of a closed trap-door appears."
            )
            ctx.set_flag("rug_moved")
            ctx.state.hidden_objects.discard(TRAP_DOOR)
        return True
    return False


def trap_door(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """The trap door between the living room and the cellar."""
    if verb not in ("OPEN", "CLOSE"):
        return False
    from_below = obj_id != TRAP_DOOR
    is_open = ctx.flag("trap_door")
    if verb == "OPEN":
        if from_below and not is_open:
            ctx.say("The door is locked from above.")
        elif is_open:
            ctx.say("It is already open.")
        else:
            ctx.say(
                "The door reluctantly opens to reveal a rickety staircase "
                "descending into darkness."
            )
            ctx.set_flag("trap_door")
        return True
    if is_open:
        ctx.say("The door swings shut and closes.")
        ctx.set_flag("trap_door", False)
    else:
        ctx.say("It is already closed.")
    return True


def trophy_case(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    if verb == "TAKE" and other is None:
        ctx.say(
            "The trophy case is securely fastened to the wall (perhaps to foil "
            "any attempt by robbers to remove it)."
        )
        return True
    return False


def lamp(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """The battery-powered lantern. Its fuel is counted down by the clock."""
    if verb == "TURN-ON":
        if ctx.is_burning(obj_id):
            ctx.say("It is already on.")
        elif ctx.state.lamp_budget <= 0:
            ctx.say("A burned-out lamp won't light.")
        else:
            ctx.state.light_levels[obj_id] = 1
            ctx.say("The lamp is now on.")
        return True
    if verb == "TURN-OFF":
        if ctx.is_burning(obj_id):
            ctx.state.light_levels[obj_id] = 0
            ctx.say("The lamp is now off.")
        else:
            ctx.say("It is already off.")
        return True
    return False


def match(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """A match burns for five turns once struck."""
    if verb in ("TURN-ON", "BURN") and other is None:
        if ctx.is_burning(obj_id):
            ctx.say("The match is already lit.")
            return True
        ctx.state.light_levels[obj_id] = 1
        ctx.schedule(5, "match_out", obj_id)
        ctx.say("The match is now lit.")
        return True
    if verb == "TURN-OFF" and ctx.is_burning(obj_id):
        ctx.state.light_levels[obj_id] = 0
        ctx.say("The match is out.")
        return True
    return False


def candles(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    if verb == "TURN-ON" or (verb == "BURN" and other is not None):
        if ctx.is_burning(obj_id):
            ctx.say("The candles are already lit.")
        else:
            ctx.state.light_levels[obj_id] = 1
            ctx.say("The candles are now lit.")
        return True
    if verb == "TURN-OFF":
        if ctx.is_burning(obj_id):
            ctx.state.light_levels[obj_id] = 0
            ctx.say("The flame is extinguished.")
        else:
            ctx.say("The candles are not lighted.")
        return True
    return False


def fuse(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """Lighting the fuse starts a two-turn countdown to the explosion."""
    if verb != "BURN" or other is None:
        return False
    if ctx.is_burning(obj_id):
        ctx.say("The fuse is already lit.")
        return True
    ctx.state.light_levels[obj_id] = 1
    ctx.schedule(2, "fuse_burnout")
    ctx.say("The fuse is lit.")
    return True


def brick(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    if verb != "BURN" or other is None:
        return False
    _blow_up(ctx)
    return True


def gnome(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    """The volcano gnome wants a fee for showing the way out."""
    if verb in ("GIVE", "THROW") and other is not None:
        gift = ctx.obj(other)
        if gift is not None and gift.trophy_score > 0:
            ctx.say(
                f"Thank you very much for the {gift.name}.  I don't believe I've "
                "ever seen one as beautiful. 'Follow me', he says, and a door "
                "appears on the north end of the ledge.  Through the door, you can "
                "see a narrow chimney sloping steeply downward."
            )
            ctx.set_flag("gnome_door")
        else:
            ctx.say(
                f"'That wasn't quite what I had in mind', he says, crunching the "
                f"{ctx.name(other)} in his rock-hard hands."
            )
        ctx.remove(other)
        return True
    ctx.say("The gnome appears increasingly nervous.")
    return True


def thief(ctx: Context, verb: str, obj_id: str, other: str | None) -> bool:
    if verb == "ATTACK":
        ctx.say("The thief deftly parries your blow.")
        return True
    if verb == "GIVE" and other is not None:
        ctx.say(f"The thief places the {ctx.name(other)} in his bag and thanks you politely.")
        ctx.move(other, ctx.world.objects[obj_id].location)
        return True
    return False


# --- Room callbacks ------------------------------------------------------


def _window_state(ctx: Context) -> str:
    return "open." if ctx.flag("kitchen_window") else "slightly ajar."


def east_house(ctx: Context) -> None:
    ctx.say(
        "You are behind the white house.  In one corner of the house there is "
        "a small window which is " + _window_state(ctx)
    )


def kitchen(ctx: Context) -> None:
    ctx.say(
        "You are in the kitchen of the white house.  A table seems to have been "
        "used recently for the preparation of food.  A passage leads to the west "
        "and a dark staircase can be seen leading upward.  To the east is a small "
        "window which is " + _window_state(ctx)
    )


def living_room(ctx: Context) -> None:
    rug_moved = ctx.flag("rug_moved")
    trap = ctx.flag("trap_door")
    if rug_moved and trap:
        tail = "and a rug lying beside an open trap-door."
    elif rug_moved:
        tail = "and a closed trap-door at your feet."
    elif trap:
        tail = "and an open trap-door at your feet."
    else:
        tail = "and a large oriental rug in the center of the room."
    ctx.say(
        "You are in the living room.  There is a door to the east, a wooden door "
        "with strange gothic lettering to the west, which appears to be nailed "
        "shut, " + tail
    )


def safe_room(ctx: Context) -> None:
    ctx.say(
        "You are in a dusty old room which is virtually featureless, except for "
        "an exit on the north side."
    )
    if ctx.flag("safe_flag"):
        ctx.say("On the far wall is a rusty box, whose door has been blown off.")
    else:
        ctx.say(
            "Imbedded in the far wall, there is a rusty old box.  It appears that "
            "the box is somewhat damaged, since an oblong hole has been chipped "
            "out of the front of it."
        )


def cellar(ctx: Context) -> None:
    """The trap door slams the first time the player comes down."""
    if not ctx.flag("trap_door") or ctx.flag("door_barred"):
        return
    ctx.set_flag("trap_door", False)
    ctx.set_flag("door_barred")
    ctx.say("The trap door crashes shut, and you hear someone barring it.")


# --- Exit checks ---------------------------------------------------------


def troll_blocks(ctx: Context, exit: Exit) -> bool:
    """A living troll in the room keeps the player from leaving past him."""
    troll = ctx.obj(TROLL)
    if troll is None or ctx.location(troll.id) != ctx.state.current_room:
        return False
    ctx.say("The troll fends you off with a menacing gesture.")
    return True


def gnome_blocks(ctx: Context, exit: Exit) -> bool:
    if ctx.location(GNOME) == ctx.state.current_room:
        ctx.say("The gnome blocks your way.")
    else:
        ctx.say(exit.message or "You can't go that way.")
    return True


# --- Scheduled events ----------------------------------------------------


def match_out(ctx: Context, obj_id: str) -> None:
    if not ctx.is_burning(obj_id):
        return
    ctx.state.light_levels[obj_id] = 0
    if ctx.is_here(obj_id):
        ctx.say("The match has burned out.")


def _blow_up(ctx: Context) -> None:
    ctx.say(
        "Now you've done it.  It seems that the brick has other properties than "
        "weight, namely the ability to blow you to smithereens."
    )
    ctx.say(BOOM)
    ctx.end_game()


def fuse_burnout(ctx: Context) -> None:
    """The fuse reaches its end: a fizzle, or the brick goes off."""
    if ctx.location(FUSE) is None:
        return
    ctx.state.light_levels[FUSE] = 0
    if ctx.location(FUSE) != BRICK or ctx.location(BRICK) is None:
        if ctx.is_here(FUSE):
            ctx.say("The wire rapidly burns into nothingness.")
        ctx.remove(FUSE)
        return

    brick_room = ctx.room_of(BRICK)
    ctx.remove(FUSE)
    ctx.remove(BRICK)
    if brick_room == ctx.state.current_room:
        _blow_up(ctx)
        return
    ctx.say("There is an explosion nearby.")
    if brick_room is not None:
        ctx.schedule(5, "safe_mung", brick_room)


def safe_mung(ctx: Context, room_id: str) -> None:
    """Some turns after an explosion, the room it happened in caves in."""
    if room_id not in ctx.world.rooms:
        return
    if ctx.state.current_room == room_id:
        if room_id == SAFE_ROOM:
            ctx.say(
                "The house shakes, and the ceiling of the room you're in "
                "collapses, turning you into a pancake."
            )
        else:
            ctx.say(
                "The room trembles and 50,000 pounds of rock fall on you, "
                "turning you into a pancake."
            )
        ctx.end_game()
        return
    ctx.say(
        "You may recall your recent explosion.  Well, probably as a result of "
        "that, you hear an ominous rumbling, as if one of the rooms in the "
        "dungeon had collapsed."
    )
    if room_id == SAFE_ROOM:
        ctx.set_flag("safe_flag")
        ctx.schedule(8, "ledge_mung")
    _munge(ctx, room_id)


def ledge_mung(ctx: Context) -> None:
    if ctx.state.current_room == WIDE_LEDGE:
        ctx.say("The force of the explosion has caused the ledge to collapse belatedly.")
    else:
        ctx.say("The ledge collapses, giving you a narrow escape.")
    _munge(ctx, WIDE_LEDGE)


def _munge(ctx: Context, room_id: str) -> None:
    ctx.set_flag(f"munged_{room_id}")
    ctx.state.munged_rooms[room_id] = MUNGE_MESSAGES.get(room_id, DEBRIS)


def sync_flags(ctx: Context) -> None:
    """Bring flag-backed world state back in line with the flag store.

    Used after the flags are replaced wholesale, as RESTORE does: the trap
    door is hidden until the rug is moved, and a room stays caved in only
    while its munged flag is set.
    """
    state = ctx.state
    if ctx.flag("rug_moved"):
        state.hidden_objects.discard(TRAP_DOOR)
    else:
        state.hidden_objects.add(TRAP_DOOR)
    state.munged_rooms = {
        room_id: MUNGE_MESSAGES.get(room_id, DEBRIS)
        for room_id in ctx.world.rooms
        if ctx.flag(f"munged_{room_id}")
    }


def volgnome(ctx: Context) -> None:
    """The gnome walks out of the volcano wall if the player is still on a ledge."""
    if not ctx.state.current_room.startswith("LEDG") or GNOME not in ctx.world.objects:
        return
    ctx.say(
        "A volcano gnome seems to walk straight out of the wall and says 'I have "
        "a very busy appointment schedule and little time to waste on "
        "trespassers, but for a small fee, I'll show you the way out.'  You "
        "notice the gnome nervously glancing at his watch."
    )
    ctx.move(GNOME, ctx.state.current_room)
    ctx.schedule(5, "gnome_leave")


def gnome_leave(ctx: Context) -> None:
    if ctx.location(GNOME) is None:
        return
    if ctx.location(GNOME) == ctx.state.current_room:
        ctx.say(
            "The gnome glances at his watch.  'Oops.  I'm late for an "
            "appointment!' He disappears, leaving you alone on the ledge."
        )
    ctx.remove(GNOME)


ObjectBehavior = Callable[[Context, str, str, str | None], bool]

OBJECT_BEHAVIORS: dict[str, ObjectBehavior] = {
    "window": window,
    "rug": rug,
    "trap_door": trap_door,
    "trophy_case": trophy_case,
    "lamp": lamp,
    "match": match,
    "candles": candles,
    "fuse": fuse,
    "brick": brick,
    "gnome": gnome,
    "thief": thief,
}

ROOM_LOOKS: dict[str, Callable[[Context], None]] = {
    "east_house": east_house,
    "kitchen": kitchen,
    "living_room": living_room,
    "safe_room": safe_room,
}

ROOM_ENTRIES: dict[str, Callable[[Context], None]] = {
    "cellar": cellar,
}

EXIT_CHECKS: dict[str, Callable[[Context, Exit], bool]] = {
    "troll_blocks": troll_blocks,
    "gnome_blocks": gnome_blocks,
}

EVENTS: dict[str, Callable[..., None]] = {
    "match_out": match_out,
    "fuse_burnout": fuse_burnout,
    "safe_mung": safe_mung,
    "ledge_mung": ledge_mung,
    "volgnome": volgnome,
    "gnome_leave": gnome_leave,
}
