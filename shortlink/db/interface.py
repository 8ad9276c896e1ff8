"""
Link Store Abstraction Interface

This module defines the storage abstraction for the link map: the complete
short code -> target URL mapping that is the service's entire durable state.

The interface is deliberately small. A store loads the whole map and saves
the whole map; there are no partial updates, indexes or versions. Callers
always load fresh at the start of a request, so implementations must not
cache between calls.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict

LinkMap = Dict[str, str]


class LinkStore(ABC):
    """
    Abstract base class for link stores.
    
    To add a new storage backend:
    1. Create a new class inheriting from LinkStore
    2. Implement load() and save()
    3. Return it from create_link_store() in session.py
    """

    def __init__(self):
        self._write_lock = asyncio.Lock()

    @property
    def write_lock(self) -> asyncio.Lock:
        """
        Lock serializing load-check-insert-save sequences within this process.

        Readers never take it.
        """
        return self._write_lock
    
    @abstractmethod
    async def load(self) -> LinkMap:
        """
        Read the complete link map.
        
        A missing document is created empty and persisted before returning.
        
        Returns:
            Mapping of short code to target URL
        
        Raises:
            StoreError: If the document is malformed or cannot be read
        """
        pass
    
    @abstractmethod
    async def save(self, links: LinkMap) -> None:
        """
        Replace the persisted document with the given link map.
        
        Args:
            links: Complete mapping to persist
        
        Raises:
            StoreError: If the document cannot be written
        """
        pass
