"""Integration tests for routes."""

from structlog.testing import capture_logs
from xitzin.testing import test_app as gemini_client


def test_startup_logs_the_world(app):
    """Startup reports what world was loaded."""
    with capture_logs() as logs:
        with gemini_client(app) as client:
            client.get("/")
    loaded = next(e for e in logs if e["event"] == "world_loaded")
    assert loaded["start_room"] == "WHOUS"
    assert loaded["rooms"] > 0
    assert loaded["treasures"] > 0
    assert loaded["max_score"] == 350
    assert loaded["seeded"] is True


def test_home_page(client):
    """Home page is accessible without certificate."""
    response = client.get("/")
    assert response.is_success
    assert "Dungeon" in response.body


def test_play_requires_cert(client):
    """Play page requires a client certificate."""
    response = client.get("/play")
    assert response.is_certificate_required


def test_play_with_cert(auth_client):
    """Play page works with a certificate."""
    response = auth_client.get("/play")
    assert response.is_success
    assert "WHITE HOUSE" in response.body.upper()
    assert "=> /go/north" in response.body


def test_play_lists_objects_once(auth_client):
    """Room objects are shown once, under the description."""
    response = auth_client.get("/play")
    assert response.body.count("small mailbox") == 1


def test_go_direction(auth_client):
    """Going a direction via /go/ route works."""
    response = auth_client.get("/go/north")
    assert response.is_success
    assert "north side" in response.body


def test_go_blocked(auth_client):
    """A blocked direction explains itself."""
    response = auth_client.get("/go/east")
    assert response.is_success
    assert "boarded" in response.body


def test_cmd_input_prompt(auth_client):
    """The /cmd route prompts for input when no query."""
    response = auth_client.get("/cmd")
    assert response.is_input_required


def test_cmd_with_input(auth_client):
    """The /cmd route processes commands."""
    response = auth_client.get_input("/cmd", "open mailbox")
    assert response.is_success
    assert "reveals a leaflet" in response.body


def test_moves_persist_between_requests(auth_client):
    """Each request continues the same game."""
    auth_client.get_input("/cmd", "open mailbox")
    auth_client.get_input("/cmd", "take leaflet")
    response = auth_client.get("/inventory")
    assert "You are carrying:" in response.body
    assert "leaflet" in response.body


def test_inventory_route(auth_client):
    """The /inventory route shows inventory."""
    response = auth_client.get("/inventory")
    assert response.is_success
    assert "empty-handed" in response.body


def test_score_route(auth_client):
    """The /score route shows score."""
    response = auth_client.get("/score")
    assert response.is_success
    assert "Your score is 0 (total possible 350)" in response.body


def test_help_page(client):
    """Help page is accessible."""
    response = client.get("/help")
    assert response.is_success
    assert "command" in response.body.lower()


def test_about_page(client):
    """About page is accessible."""
    response = client.get("/about")
    assert response.is_success
    assert "Dungeon" in response.body


def test_new_game_prompt(auth_client):
    """The /new route prompts for confirmation."""
    response = auth_client.get("/new")
    assert response.is_input_required


def test_new_game_confirmed(auth_client):
    """Answering YES starts over."""
    auth_client.get("/go/north")
    response = auth_client.get_input("/new", "yes")
    assert response.is_success
    assert "A new adventure begins!" in response.body
    assert "west of a big white house" in response.body


def test_quit_ends_the_game(auth_client):
    """QUIT shows the final score, and the next visit starts over."""
    response = auth_client.get_input("/cmd", "quit")
    assert "The game is over." in response.body
    assert "=> /new Start a new game" in response.body
    assert "=> /cmd" not in response.body
    response = auth_client.get("/play")
    assert "=> /cmd" in response.body


def test_look_route(auth_client):
    """The /look route works."""
    response = auth_client.get("/look")
    assert response.is_success


def test_leaderboard(auth_client, client):
    """Saved games show up on the home page."""
    auth_client.get("/go/north")
    response = client.get("/")
    assert "Best adventurers" in response.body
