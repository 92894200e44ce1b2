"""Per-turn autonomous behavior: the glowing sword, melee, and the thief.

Each demon runs once at the end of every turn, always in the order
sword_demon, melee_demon, robber_demon. Random choices come from the
context's rng so a seeded game replays identically.
"""

from .context import Context
from .state import THIEF
from .world import GLOWS, SACRED, TAKE, VILLAIN, WEAPON

VILLAIN_DAMAGE = 20
STAGGER_CHANCE = 0.3
ROB_CHANCE = 0.3
APPEAR_CHANCE = 0.3

GLOW_MESSAGES = {
    0: "Your sword is no longer glowing.",
    1: "Your sword is glowing with a faint blue glow.",
    2: "Your sword has begun to glow very brightly.",
}


def _villains(ctx: Context) -> list[str]:
    return [
        obj_id
        for obj_id, obj in ctx.world.objects.items()
        if obj.has(VILLAIN) and ctx.location(obj_id) is not None
    ]


def sword_demon(ctx: Context) -> None:
    """Recompute the sword's glow while it is held; report only changes."""
    if not any(ctx.world.objects[o].has(GLOWS) for o in ctx.held()):
        return
    here = ctx.state.current_room
    nearby = ctx.world.neighbors(here)
    level = 0
    for villain in _villains(ctx):
        room = ctx.room_of(villain)
        if room == here and ctx.is_visible(villain):
            level = 2
            break
        if room in nearby:
            level = 1
    if level != ctx.state.sword_glow:
        ctx.state.sword_glow = level
        ctx.say(GLOW_MESSAGES[level])


def _kill(ctx: Context, villain_id: str) -> None:
    villain = ctx.world.objects[villain_id]
    for obj_id in ctx.contents(villain_id):
        ctx.move(obj_id, ctx.state.current_room)
    ctx.remove(villain_id)
    if villain.kill_flag:
        ctx.set_flag(villain.kill_flag)
    ctx.say(villain.death or f"The {villain.name} is dead.")


def melee_demon(ctx: Context) -> None:
    """Settle one round with every villain the player is fighting here."""
    state = ctx.state
    for villain_id in sorted(state.fighting):
        if ctx.location(villain_id) != state.current_room:
            state.fighting.discard(villain_id)
            continue

        if state.staggered:
            state.staggered = False
            continue
        if any(ctx.world.objects[o].has(WEAPON) for o in ctx.held()):
            state.villain_strength[villain_id] = state.villain_strength.get(villain_id, 1) - 1
            if state.villain_strength[villain_id] <= 0:
                _kill(ctx, villain_id)
                continue

        name = ctx.name(villain_id)
        state.strength -= VILLAIN_DAMAGE
        if ctx.rng.random() < STAGGER_CHANCE:
            state.staggered = True
            ctx.say(f"The {name}'s blow staggers you.")
        else:
            ctx.say(f"The {name} hits you with a glancing blow.")
        if state.strength <= 0:
            ctx.say("You have been killed.")
            ctx.end_game()
            return


def _valuable(ctx: Context, obj_id: str) -> bool:
    obj = ctx.world.objects[obj_id]
    return obj.has(TAKE) and obj.find_score > 0 and not obj.has(SACRED)


def robber_demon(ctx: Context) -> None:
    """The thief robs the player when he shares a room.

    Once he has left with his loot he may turn up again anywhere but his
    treasure room.
    """
    thief = ctx.obj(THIEF)
    if thief is None:
        return
    state = ctx.state
    home = thief.location

    if ctx.location(THIEF) == state.current_room:
        if ctx.rng.random() >= ROB_CHANCE:
            return
        stolen = [
            o for o in ctx.room_objects()
            if o != THIEF and ctx.is_visible(o) and _valuable(ctx, o)
        ]
        carried = [o for o in ctx.held() if _valuable(ctx, o)]
        if carried:
            stolen.append(ctx.rng.choice(carried))
        if not stolen:
            return
        for obj_id in stolen:
            ctx.move(obj_id, home)
        ctx.remove(THIEF)
        ctx.say(
            "The other occupant just left, still carrying his large bag.  You may not "
            "have noticed that he robbed you blind first."
        )
        return

    if ctx.location(THIEF) is not None or state.current_room == home:
        return
    if ctx.rng.random() >= APPEAR_CHANCE:
        return
    ctx.move(THIEF, state.current_room)
    if not ctx.flag("thief_appeared"):
        ctx.set_flag("thief_appeared")
        ctx.say(
            "Someone carrying a large bag is casually leaning against one of the "
            "walls here.  He does not speak, but it is clear from his aspect that "
            "the bag will be taken only over his dead body."
        )


DEMONS = (sword_demon, melee_demon, robber_demon)
