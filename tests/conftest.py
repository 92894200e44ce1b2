"""Shared test fixtures for Dungeon."""

import io
import random
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from dungeon.app import _get_data_path, create_app
from dungeon.config import Config
from dungeon.engine.context import Context
from dungeon.engine.game import Game
from dungeon.engine.loader import load_world
from dungeon.engine.world import World
from dungeon.models import Player


class FixedRandom(random.Random):
    """A Random whose random() always returns the same roll."""

    def __init__(self, roll: float):
        super().__init__(0)
        self.roll = roll

    def random(self) -> float:
        return self.roll


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def game(world: World, output: io.StringIO) -> Game:
    """A game whose dice never come up: no thief, no gusts, no staggers."""
    return Game(world, output, rng=FixedRandom(0.99))


@pytest.fixture
def ctx(game: Game) -> Context:
    return game.ctx


@pytest.fixture
def run(game: Game, output: io.StringIO):
    """Run commands and return everything they printed."""

    def _run(*commands: str) -> str:
        start = len(output.getvalue())
        for command in commands:
            game.execute(command)
        return output.getvalue()[start:]

    return _run


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def test_player(db_session: Session) -> Player:
    player = Player(fingerprint="test-fingerprint-abc123")
    db_session.add(player)
    db_session.commit()
    db_session.refresh(player)
    return player


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db", seed=42)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
