"""The clock that runs after every accepted command.

Phases run in a fixed order: lamp countdown, scheduled events, location
hazards, then the demons. Once a phase ends the game the rest are
skipped.
"""

from ..logging import get_logger
from .behaviors import EVENTS
from .context import Context
from .demons import DEMONS
from .state import CANDLES, MAINT_ROOM, WINDY_CAVE
from .world import FUEL

logger = get_logger(__name__)

MAINT_LEAK_DELAY = 3
VOLGNOME_DELAY = 10
CANDLE_GUST_CHANCE = 0.5


def tick_lamp(ctx: Context) -> None:
    """Burn one turn of fuel from a held, lit lamp."""
    state = ctx.state
    for obj_id in ctx.held():
        if not ctx.world.objects[obj_id].has(FUEL) or not ctx.is_burning(obj_id):
            continue
        state.lamp_budget -= 1
        if state.lamp_budget <= 0:
            state.lamp_budget = 0
            state.light_levels[obj_id] = 0
            ctx.say("The lamp has run out of power.")


def fire_events(ctx: Context) -> None:
    """Run every event that has come due, oldest trigger first."""
    state = ctx.state
    due = [e for e in state.events if e.trigger <= state.turns]
    if not due:
        return
    state.events = [e for e in state.events if e.trigger > state.turns]
    for event in sorted(due, key=lambda e: (e.trigger, e.seq)):
        callback = EVENTS.get(event.action)
        if callback is None:
            logger.warning("unknown_event", action=event.action, turn=state.turns)
            continue
        logger.debug("event_fired", action=event.action, args=event.args, turn=state.turns)
        callback(ctx, *event.args)
        if not state.running:
            return


def check_hazards(ctx: Context) -> None:
    state = ctx.state
    room = state.current_room
    if room == MAINT_ROOM:
        if not state.maint_leak_at:
            state.maint_leak_at = state.turns + MAINT_LEAK_DELAY
        elif state.turns >= state.maint_leak_at and not ctx.flag("maint_leak"):
            ctx.set_flag("maint_leak")
            ctx.say("Water is leaking into the maintenance room.")
    elif room == WINDY_CAVE:
        if ctx.is_held(CANDLES) and ctx.is_burning(CANDLES) and ctx.rng.random() < CANDLE_GUST_CHANCE:
            state.light_levels[CANDLES] = 0
            ctx.say("The candles have been blown out by a gust of wind.")
    elif room.startswith("LEDG") and not ctx.flag("gnome_scheduled"):
        ctx.set_flag("gnome_scheduled")
        ctx.schedule(VOLGNOME_DELAY, "volgnome")


PHASES = (tick_lamp, fire_events, check_hazards, *DEMONS)


def run_clock(ctx: Context) -> None:
    for phase in PHASES:
        if not ctx.state.running:
            return
        phase(ctx)
