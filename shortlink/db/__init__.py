"""
Storage module with abstraction layer.

This module provides:
- LinkStore interface: Abstract base class for link map storage
- JSONFileLinkStore: JSON document implementation (default)
- Wiring helpers: store creation and the FastAPI dependency
"""

from shortlink.db.interface import LinkMap, LinkStore
from shortlink.db.json_store import JSONFileLinkStore
from shortlink.db.session import create_link_store, get_link_store

__all__ = [
    "LinkMap",
    "LinkStore",
    "JSONFileLinkStore",
    "create_link_store",
    "get_link_store",
]
