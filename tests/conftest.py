"""Shared fixtures: sample story graphs, an in-memory story store and an API client."""

import sys
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from backend.api.deps import get_db_session
from backend.app import app
from backend.config.settings import settings
from engine import Choice, Scene, StoryGraph


def make_graph(*scenes: Scene) -> StoryGraph:
    return StoryGraph(scenes=list(scenes))


@pytest.fixture
def cycle_graph() -> StoryGraph:
    """start -> A -> start"""
    return make_graph(
        Scene(id="start", text="You stand at a crossroads.", choices=[
            Choice(text="go to A", target_scene_id="A"),
        ]),
        Scene(id="A", text="A quiet clearing.", choices=[
            Choice(text="go back", target_scene_id="start"),
        ]),
    )


@pytest.fixture
def branching_graph() -> StoryGraph:
    return make_graph(
        Scene(id="start", text="The cave mouth yawns before you.", choices=[
            Choice(text="Enter the cave", target_scene_id="cave"),
            Choice(text="Walk into the forest", target_scene_id="forest"),
        ]),
        Scene(id="cave", text="It is dark. Something moves.", choices=[
            Choice(text="Light a torch", target_scene_id="treasure"),
            Choice(text="Run", target_scene_id="start"),
        ]),
        Scene(id="forest", text="Birdsong and tall pines.", choices=[]),
        Scene(id="treasure", text="Gold glitters everywhere. You are rich.", choices=[]),
    )


class InMemoryStoryStore:
    """Stand-in for StoryDAO keeping rows in a dict."""

    def __init__(self):
        self.rows: Dict[str, SimpleNamespace] = {}
        self.writes = 0
        self._counter = 0

    def add_row(self, author_id: str, title: str, scenes: List[dict], **extra) -> SimpleNamespace:
        self._counter += 1
        now = datetime(2024, 1, 1) + timedelta(minutes=self._counter)
        row = SimpleNamespace(
            id=f"story_{self._counter:04d}",
            author_id=author_id,
            title=title,
            description=extra.get("description"),
            cover_image=extra.get("cover_image"),
            scenes=scenes,
            view_count=0,
            created_at=now,
            updated_at=now,
        )
        self.rows[row.id] = row
        return row

    async def create(self, session, author_id, title, scenes, description=None, cover_image=None):
        self.writes += 1
        return self.add_row(author_id, title, scenes, description=description, cover_image=cover_image)

    async def get_by_id(self, session, story_id):
        return self.rows.get(story_id)

    async def replace(self, session, story_id, title, scenes, description=None, cover_image=None):
        row = self.rows.get(story_id)
        if row is None:
            return None
        self.writes += 1
        row.title = title
        row.scenes = scenes
        row.description = description
        row.cover_image = cover_image
        return row

    async def delete(self, session, story_id):
        self.writes += 1
        return self.rows.pop(story_id, None) is not None

    async def list_by_author(self, session, author_id, limit=20, offset=0):
        rows = [row for row in self.rows.values() if row.author_id == author_id]
        rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows[offset:offset + limit]

    async def list_published(self, session, keyword: Optional[str] = None, sort="latest", limit=20, offset=0):
        rows = list(self.rows.values())
        if keyword:
            rows = [row for row in rows if keyword.lower() in row.title.lower()]
        if sort == "title":
            rows.sort(key=lambda row: row.title)
        else:
            rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows[offset:offset + limit], len(rows)


@pytest.fixture
def store(monkeypatch) -> InMemoryStoryStore:
    fake = InMemoryStoryStore()
    monkeypatch.setattr(sys.modules["backend.services.story_service"], "StoryDAO", fake)
    monkeypatch.setattr(sys.modules["backend.services.reader_service"], "StoryDAO", fake)
    return fake


def make_token(user_id: str, email: Optional[str] = None) -> str:
    claims = {"sub": user_id, "email": email}
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id: str = "user_alice") -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, f'{user_id}@example.com')}"}


@pytest.fixture
def client(store):
    async def _no_db():
        yield None

    app.dependency_overrides[get_db_session] = _no_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict:
    return auth_headers("user_alice")


@pytest.fixture
def bob_headers() -> dict:
    return auth_headers("user_bob")
