"""
JSON File Link Store

Persists the link map as a single pretty-printed JSON object. File I/O is
blocking, so every operation runs in Starlette's threadpool.
"""

import json
import logging
import os
import secrets
import stat
from pathlib import Path
from typing import Optional

from starlette.concurrency import run_in_threadpool

from shortlink.core.exceptions import MalformedStoreError, StoreIOError
from shortlink.db.interface import LinkMap, LinkStore

logger = logging.getLogger(__name__)

# Filtered by the process umask, like any newly created file
NEW_FILE_MODE = 0o666


class JSONFileLinkStore(LinkStore):
    """
    Link store backed by one JSON document.
    
    Document format: {"<short code>": "<target url>", ...}, 2-space indent.
    """

    def __init__(self, path: Path, indent: int = 2):
        """
        Args:
            path: Location of the JSON document (parent dirs created on demand)
            indent: JSON indentation used when saving
        """
        super().__init__()
        self.path = Path(path)
        self.indent = indent

    async def load(self) -> LinkMap:
        return await run_in_threadpool(self._read)

    async def save(self, links: LinkMap) -> None:
        await run_in_threadpool(self._write, links)

    def _read(self) -> LinkMap:
        text = self._read_text()
        if text is None:
            # Absent document is the one failure healed instead of reported
            logger.info(f"Link store {self.path} not found, initializing empty store")
            if self._create_empty():
                return {}
            # Another request created it first; read what it wrote
            text = self._read_text() or ""

        if not text.strip():
            return {}

        try:
            links = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedStoreError(self.path, e) from e

        if not isinstance(links, dict):
            raise MalformedStoreError(self.path)

        return links

    def _read_text(self) -> Optional[str]:
        """Document contents, or None when the document does not exist."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreIOError(self.path, e) from e

    def _create_empty(self) -> bool:
        """
        Create the document as an empty map unless it already exists.

        Returns:
            False if some other writer created the document first
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, NEW_FILE_MODE)
        except FileExistsError:
            return False
        except OSError as e:
            raise StoreIOError(self.path, e) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps({}, indent=self.indent))
        except OSError as e:
            raise StoreIOError(self.path, e) from e
        return True

    def _write(self, links: LinkMap) -> None:
        payload = json.dumps(links, indent=self.indent)
        directory = self.path.parent
        tmp_path = directory / f".{self.path.name}.{secrets.token_hex(4)}.tmp"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            try:
                existing_mode = stat.S_IMODE(os.stat(self.path).st_mode)
            except FileNotFoundError:
                existing_mode = None

            # Write to a sibling then rename so readers never see a partial document
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, NEW_FILE_MODE)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                if existing_mode is not None:
                    os.chmod(tmp_path, existing_mode)
                os.replace(tmp_path, self.path)
            except BaseException:
                if tmp_path.exists():
                    tmp_path.unlink()
                raise
        except OSError as e:
            raise StoreIOError(self.path, e) from e
