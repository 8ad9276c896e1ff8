"""
Redirect Service

This service handles URL lookup for redirection.
Separated from URL service so lookups never touch the write path.
"""

from typing import Optional

from shortlink.db.interface import LinkStore


class RedirectService:
    """
    Service for resolving short codes to target URLs.
    """
    
    def __init__(self, store: LinkStore):
        """
        Initialize the redirect service with a link store.
        
        Args:
            store: Link store to read mappings from
        """
        self.store = store
    
    async def get_redirect_url(self, short_code: str) -> Optional[str]:
        """
        Get the target URL for a short code, or None when it is unknown.

        Exact string match against a freshly loaded link map.
        """
        links = await self.store.load()
        return links.get(short_code)
