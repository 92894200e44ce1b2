"""Gameplay routes."""

from contextlib import contextmanager

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..app import get_session
from ..logging import bind_player
from ..session import DungeonSession, get_or_create_player


@contextmanager
def _game_session(request: Request):
    """Load the player's game session with auto-close."""
    identity = get_identity(request)
    app = request.app
    db_session = get_session(app)
    try:
        with bind_player(identity.fingerprint):
            player = get_or_create_player(db_session, identity.fingerprint)
            yield DungeonSession.load_or_create(
                db_session, player, app.state.world, app.state.config,
            )
    finally:
        db_session.close()


def _render_play(app: Xitzin, game: DungeonSession, message: str = ""):
    """Render the main play view."""
    return app.template(
        "play.gmi",
        description=game.get_room_description(),
        objects=game.get_visible_objects(),
        exits=game.get_exits(),
        message=message,
        turns=game.state.turns,
        score=game.state.score,
        is_finished=game.state.is_finished,
    )


def _run(app: Xitzin, game: DungeonSession, command: str):
    """Run a command, persist the result, and render the play view."""
    message = game.process_command(command)
    game.save()
    return _render_play(app, game, message=message)


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with _game_session(request) as game:
            game.save()
            return _render_play(app, game)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        with _game_session(request) as game:
            return _run(app, game, direction)

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        with _game_session(request) as game:
            return _run(app, game, query)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        with _game_session(request) as game:
            return _run(app, game, "look")


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory, score, and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried items without spending a turn."""
        with _game_session(request) as game:
            items = game.get_inventory()
            if not items:
                message = "You are empty-handed."
            else:
                message = "You are carrying:\n" + "\n".join(f"  {item}" for item in items)
            return _render_play(app, game, message=message)

    @app.gemini("/score", name="score")
    @require_certificate
    def score(request: Request):
        """Show score without spending a turn."""
        with _game_session(request) as game:
            state = game.state
            message = (
                f"Your score is {state.score} (total possible {game.world.max_score}), "
                f"in {state.turns} moves."
            )
            return _render_play(app, game, message=message)

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        with _game_session(request) as game:
            if query.strip().upper() == "YES":
                game.reset()
                game.save()
                return _render_play(app, game, message="A new adventure begins!")
            return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
