"""Home, help, and about routes."""

from sqlmodel import col, select
from xitzin import Request, Xitzin

from ..app import get_session
from ..models import SavedGame

LEADERBOARD_SIZE = 5


def _leaderboard(app: Xitzin) -> list[SavedGame]:
    """Highest-scoring games, finished or not."""
    with get_session(app) as db_session:
        statement = (
            select(SavedGame)
            .order_by(col(SavedGame.score).desc(), col(SavedGame.turns))
            .limit(LEADERBOARD_SIZE)
        )
        return list(db_session.exec(statement).all())


def register_routes(app: Xitzin) -> None:
    """Register home routes."""

    @app.gemini("/", name="home")
    def home(request: Request):
        return app.template("home.gmi", leaders=_leaderboard(app))

    @app.gemini("/help", name="help")
    def help_page(request: Request):
        return app.template("help.gmi")

    @app.gemini("/about", name="about")
    def about(request: Request):
        return app.template("about.gmi")
