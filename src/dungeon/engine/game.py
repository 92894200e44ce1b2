"""The Game facade: one player's game behind execute(raw).

    game = Game(world, sys.stdout)
    game.execute("open mailbox")
    if not game.running: ...

All player-visible text goes to the injected output sink.
"""

import io
import random

from ..logging import get_logger
from . import snapshot
from .actions import describe_objects, describe_room
from .context import Bookmarks, Context, Output
from .parser import parse_command
from .scheduler import run_clock
from .state import LAMP_BUDGET, GameState, new_game_state
from .world import World

logger = get_logger(__name__)


class Game:
    def __init__(
        self,
        world: World,
        output: Output,
        state: GameState | None = None,
        rng: random.Random | None = None,
        lamp_budget: int = LAMP_BUDGET,
        bookmarks: Bookmarks | None = None,
    ):
        if state is None:
            state = new_game_state(world, lamp_budget=lamp_budget)
        self.world = world
        self.ctx = Context(
            world=world,
            state=state,
            output=output,
            rng=rng or random.Random(),
            bookmarks=bookmarks,
        )

    @property
    def state(self) -> GameState:
        return self.ctx.state

    @property
    def running(self) -> bool:
        return self.ctx.state.running

    @property
    def score(self) -> int:
        return self.ctx.state.score

    def execute(self, raw: str) -> None:
        """Run one command and the turn that follows it."""
        if not self.running:
            return
        text = raw.strip()
        if not text:
            self.ctx.state.pending = None
            self.ctx.say("Huh?")
            return

        self.ctx.state.turns += 1
        parse_command(self.ctx, text)
        if self.running:
            run_clock(self.ctx)
        if not self.running:
            logger.info("session_ended", turns=self.state.turns, score=self.state.score)

    def snapshot(self) -> dict:
        return snapshot.snapshot(self.ctx)

    def restore(self, data: dict) -> None:
        snapshot.restore(self.ctx, data)
        describe_room(self.ctx, look=True)

    # -- Read-only views for front ends -----------------------------------

    def _capture(self, fn, *args, **kwargs) -> str:
        saved, buffer = self.ctx.output, io.StringIO()
        self.ctx.output = buffer
        try:
            fn(self.ctx, *args, **kwargs)
        finally:
            self.ctx.output = saved
        return buffer.getvalue().rstrip("\n")

    def describe_room(self) -> str:
        """The current room's long description, without spending a turn."""
        return self._capture(describe_room, look=True, objects=False)

    def visible_objects(self) -> list[str]:
        if not self.ctx.is_lit():
            return []
        text = self._capture(describe_objects)
        return text.splitlines() if text else []

    def exits(self) -> list[str]:
        """Directions out of the current room that are open right now."""
        ctx = self.ctx
        return [
            exit.direction.lower()
            for exit in ctx.here.exits.values()
            if exit.to is not None
            and (exit.flag is None or ctx.flag(exit.flag))
            and exit.to not in ctx.state.munged_rooms
        ]

    def inventory(self) -> list[str]:
        return [self.ctx.name(obj_id) for obj_id in self.ctx.held()]
