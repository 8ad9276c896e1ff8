"""
Link Store Wiring

Builds the configured link store and exposes it to endpoints as a FastAPI
dependency. The store instance lives on app.state so every request of an
application shares one write lock.

Usage in FastAPI:
    @router.get("/endpoint")
    async def endpoint(store: LinkStore = Depends(get_link_store)):
        links = await store.load()
"""

from fastapi import Request

from shortlink.core.setting import Settings
from shortlink.db.interface import LinkStore
from shortlink.db.json_store import JSONFileLinkStore


def create_link_store(settings: Settings) -> LinkStore:
    """Create the link store described by settings."""
    return JSONFileLinkStore(settings.DATA_FILE)


def get_link_store(request: Request) -> LinkStore:
    """Dependency returning the application's link store."""
    return request.app.state.link_store
