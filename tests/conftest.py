import pytest

from lowest_unique.config import Settings
from lowest_unique.effects import Disconnect
from lowest_unique.session import GameSession


ADMIN_PASSWORD = "s3cret"


def make_settings(**overrides):
    values = {"admin_password": ADMIN_PASSWORD, "async_mode": "threading"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def events(effects, name):
    return [effect for effect in effects if not isinstance(effect, Disconnect) and effect.event == name]


def disconnected(effects):
    return [effect.sid for effect in effects if isinstance(effect, Disconnect)]


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def session(settings):
    return GameSession(settings)


@pytest.fixture
def admin(session):
    session.connect("admin-sid")
    session.register_admin("admin-sid", ADMIN_PASSWORD)
    return "admin-sid"


def join_players(session, count):
    """Connect ``count`` players with tokens tok-1..tok-N on sids p1..pN and name them."""
    for index in range(1, count + 1):
        session.connect(f"p{index}", f"tok-{index}")
        session.set_name(f"p{index}", f"Name {index}")
