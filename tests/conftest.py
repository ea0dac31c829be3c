"""Pytest configuration and fixtures for Ringside tests."""

import httpx
import pytest

from ringside.config import BookingPolicy, Settings
from ringside.main import create_app
from ringside.models import Store
from ringside.services import Catalog, MatchRecorder, RosterManager, TitleHistoryTracker


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ringside.db'}",
        database_url_sync=f"sqlite:///{tmp_path / 'ringside.db'}",
    )


@pytest.fixture
def policy(settings):
    """The policy shipped in defaults.yaml."""
    return BookingPolicy.from_dict(settings.load_defaults_config())


@pytest.fixture
async def store(settings):
    store = Store(settings=settings)
    await store.create_schema()
    yield store
    await store.dispose()


@pytest.fixture
def catalog(store, policy):
    return Catalog(store, policy)


@pytest.fixture
def roster(store):
    return RosterManager(store)


@pytest.fixture
def tracker(store, policy):
    return TitleHistoryTracker(store, policy)


@pytest.fixture
def recorder(store, policy):
    return MatchRecorder(store, policy)


@pytest.fixture
async def client(store, policy):
    """HTTP client bound to an app that uses the test store."""
    app = create_app(store=store, policy=policy)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def promotion(catalog):
    """Two shows, four wrestlers and one vacant world title."""
    raw = await catalog.create_show("Raw", "Monday nights")
    smackdown = await catalog.create_show("SmackDown", "Friday nights")
    wrestlers = {
        name: await catalog.create_wrestler(name, gender)
        for name, gender in [
            ("Cody Rhodes", "Male"),
            ("Seth Rollins", "Male"),
            ("Rhea Ripley", "Female"),
            ("Bianca Belair", "Female"),
        ]
    }
    title = await catalog.create_title("World Heavyweight Championship")
    return {
        "raw": raw,
        "smackdown": smackdown,
        "wrestlers": wrestlers,
        "title": title,
    }
