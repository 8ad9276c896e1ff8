"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from shortlink.core.setting import Settings
from shortlink.db.json_store import JSONFileLinkStore
from shortlink.main import create_app


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Location of the link document; its parent does not exist yet."""
    return tmp_path / "data" / "links.json"


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "index.html").write_text("<html><body>landing</body></html>", encoding="utf-8")
    (directory / "style.css").write_text("body { color: black; }", encoding="utf-8")
    return directory


@pytest.fixture
def settings(data_file: Path, static_dir: Path) -> Settings:
    return Settings(DATA_FILE=data_file, STATIC_DIR=static_dir, LOG_LEVEL="DEBUG")


@pytest.fixture
def store(data_file: Path) -> JSONFileLinkStore:
    return JSONFileLinkStore(data_file)


@pytest.fixture
def client(settings: Settings):
    """TestClient that does not follow redirects."""
    app = create_app(settings)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def stored_links(data_file: Path):
    """Callable returning the persisted link document, parsed."""
    def read() -> dict:
        return json.loads(data_file.read_text(encoding="utf-8"))
    return read
