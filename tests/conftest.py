# Shared fixtures for showdir tests.
# Created: 2026-10-19

import pytest
from fastapi.testclient import TestClient

from showdir.config import Settings
from showdir.server import create_app


@pytest.fixture
def served(tmp_path):
    """A small served tree: files, a subdirectory and a dotfile."""
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "movie.mkv").write_bytes(b"x" * 2048)
    (tmp_path / ".hidden").write_text("secret")
    photos = tmp_path / "photos"
    photos.mkdir()
    (photos / "sub").mkdir()
    (photos / "cat.jpg").write_bytes(b"\xff\xd8")
    return tmp_path


@pytest.fixture
def make_client(served):
    def _make(**overrides):
        settings = Settings(root=served, **overrides)
        return TestClient(create_app(settings))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
