"""
Static Asset Service

Reads the landing page and stylesheet from disk on every request.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from starlette.concurrency import run_in_threadpool


@dataclass(frozen=True)
class Asset:
    """A static file and the media type it is served with."""
    filename: str
    media_type: str


ASSETS: Dict[str, Asset] = {
    "index": Asset("index.html", "text/html"),
    "stylesheet": Asset("style.css", "text/css"),
}


class AssetService:
    """Loads named static assets from a directory."""

    def __init__(self, static_dir: Path):
        self.static_dir = Path(static_dir)

    async def read(self, name: str) -> bytes:
        """
        Read an asset's bytes.

        Raises:
            KeyError: If the asset name is unknown
            OSError: If the file cannot be read
        """
        asset = ASSETS[name]
        return await run_in_threadpool((self.static_dir / asset.filename).read_bytes)

    @staticmethod
    def media_type(name: str) -> str:
        return ASSETS[name].media_type
