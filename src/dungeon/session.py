"""Session layer bridging the game engine and database."""

import datetime as dt
import io
import pickle
import random
import zlib

from sqlmodel import Session, select

from .config import Config
from .engine.game import Game
from .engine.state import GameState, new_game_state
from .engine.world import World
from .logging import get_logger
from .models import Player, SavedGame

logger = get_logger(__name__)


def get_or_create_player(session: Session, fingerprint: str) -> Player:
    """Get existing player or create new one from certificate fingerprint."""
    player = session.exec(select(Player).where(Player.fingerprint == fingerprint)).first()
    if player:
        player.last_seen = dt.datetime.now(dt.UTC)
    else:
        player = Player(fingerprint=fingerprint)
        session.add(player)
        logger.info("player_created", fingerprint=fingerprint)
    session.commit()
    session.refresh(player)
    return player


class DungeonSession:
    """Wraps a Player + SavedGame + a Game over the player's GameState.

    Also serves as the game's bookmark store, so the in-game SAVE and
    RESTORE commands read and write SavedGame.bookmark.
    """

    def __init__(
        self,
        db_session: Session,
        player: Player,
        saved_game: SavedGame | None,
        game_state: GameState,
        world: World,
        config: Config | None = None,
    ):
        self.db_session = db_session
        self.player = player
        self.saved_game = saved_game
        self.world = world
        self.config = config or Config()
        self.bookmark = saved_game.bookmark if saved_game else None
        self.output = io.StringIO()
        self.game = self._new_game(game_state)

    def _new_game(self, state: GameState) -> Game:
        # A fixed seed still varies per turn, but replays identically.
        seed = self.config.seed
        rng = random.Random(seed + state.turns) if seed is not None else random.Random()
        return Game(self.world, self.output, state=state, rng=rng, bookmarks=self)

    @classmethod
    def load_or_create(
        cls,
        db_session: Session,
        player: Player,
        world: World,
        config: Config | None = None,
    ) -> "DungeonSession":
        """Load existing save or create a fresh game."""
        config = config or Config()
        statement = select(SavedGame).where(SavedGame.player_id == player.id)
        saved_game = db_session.exec(statement).first()

        if saved_game and not saved_game.is_finished:
            game_state = pickle.loads(zlib.decompress(saved_game.state_blob))
            logger.debug("game_loaded", fingerprint=player.fingerprint, turns=saved_game.turns)
        else:
            game_state = new_game_state(world, lamp_budget=config.lamp_budget)
            logger.info("new_game_started", fingerprint=player.fingerprint)
            if saved_game is not None:
                db_session.delete(saved_game)
                db_session.commit()
                saved_game = None

        return cls(db_session, player, saved_game, game_state, world, config)

    @property
    def state(self) -> GameState:
        return self.game.state

    def process_command(self, raw_input: str) -> str:
        """Run one command through the game and return what it printed."""
        self.output.seek(0)
        self.output.truncate()
        self.game.execute(raw_input)
        return self.output.getvalue().rstrip("\n")

    # Bookmarks protocol, used by the SAVE and RESTORE commands

    def save_bookmark(self, data: dict) -> None:
        self.bookmark = data

    def load_bookmark(self) -> dict | None:
        return self.bookmark

    def save(self) -> None:
        """Serialize state back to the database."""
        now = dt.datetime.now(dt.UTC)
        state = self.state
        blob = zlib.compress(pickle.dumps(state))

        if self.saved_game is None:
            self.saved_game = SavedGame(
                player_id=self.player.id,
                state_blob=blob,
                started_at=now,
            )
            self.db_session.add(self.saved_game)
        self.saved_game.state_blob = blob
        self.saved_game.bookmark = self.bookmark
        self.saved_game.room = state.current_room
        self.saved_game.turns = state.turns
        self.saved_game.score = state.score
        self.saved_game.is_finished = state.is_finished
        self.saved_game.last_played = now

        self.db_session.commit()
        logger.debug(
            "game_saved",
            fingerprint=self.player.fingerprint,
            turns=state.turns,
            score=state.score,
        )

    def get_room_description(self) -> str:
        return self.game.describe_room()

    def get_exits(self) -> list[str]:
        return self.game.exits()

    def get_visible_objects(self) -> list[str]:
        return self.game.visible_objects()

    def get_inventory(self) -> list[str]:
        return self.game.inventory()

    def reset(self) -> None:
        """Throw the current game away and start over."""
        self.game = self._new_game(new_game_state(self.world, lamp_budget=self.config.lamp_budget))
        if self.saved_game:
            self.db_session.delete(self.saved_game)
            self.db_session.commit()
            self.saved_game = None
        self.bookmark = None
        logger.info("game_reset", fingerprint=self.player.fingerprint)
