"""
URL Shortening Service

This service handles the core business logic for creating mappings:
- Choosing the effective short code (client supplied or generated)
- Rejecting codes that are already mapped
- Persisting the updated link map

Design Decisions:
- Fresh load per creation: the persisted document is the only source of truth
- Whole-map rewrite: the store has no partial update
- Target URLs are stored as given, no validation or normalization
- Load-check-insert-save runs under the store's write lock, so concurrent
  creations in one process cannot overwrite each other
"""

import logging
from typing import Optional, Tuple

from shortlink.core.exceptions import MissingURLError, ShortCodeExistsError
from shortlink.core.validators import choose_short_code
from shortlink.db.interface import LinkStore

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Core business logic for URL shortening.
    
    Separated from the API layer for testability.
    """
    
    def __init__(self, store: LinkStore, short_code_bytes: int = 4):
        """
        Initialize the URL shortening service.
        
        Args:
            store: Link store holding the mappings
            short_code_bytes: Random bytes used for generated codes
        """
        self.store = store
        self.short_code_bytes = short_code_bytes
    
    async def create_short_url(
        self,
        original_url: Optional[str],
        short_code: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Create a new mapping.
        
        Args:
            original_url: The long URL to shorten
            short_code: Optional client chosen code
        
        Returns:
            Tuple of (effective short code, original url)
        
        Raises:
            MissingURLError: If original_url is missing or empty
            ShortCodeExistsError: If the effective code is already mapped
            StoreError: If the store cannot be read or written
        """
        if not original_url:
            raise MissingURLError()
        
        effective_code = choose_short_code(short_code, self.short_code_bytes)
        
        async with self.store.write_lock:
            links = await self.store.load()
            if effective_code in links:
                raise ShortCodeExistsError(effective_code)
            
            links[effective_code] = original_url
            await self.store.save(links)
        
        logger.info(f"Created short code '{effective_code}' -> {original_url}")
        return effective_code, original_url
