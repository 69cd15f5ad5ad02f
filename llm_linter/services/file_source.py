"""Reading a diff from a local file."""

import asyncio
import re
from pathlib import Path
from typing import Union

from llm_linter.exceptions import FetchError
from llm_linter.services.base import PatchSource
from llm_linter.utils.logging import get_logger

logger = get_logger(__name__)

NEW_FILE_MARKER = re.compile(r"^\+\+\+ b/(.+)$", re.MULTILINE)


class FilePatchSource(PatchSource):
    """Reads a unified diff saved on disk, e.g. the output of ``git diff``."""
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
    
    async def fetch(self) -> str:
        try:
            content = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as e:
            raise FetchError(f"Could not read diff file {self.path}: {e}") from e
        
        match = NEW_FILE_MARKER.search(content)
        if match is None:
            raise FetchError(f"No '+++ b/<path>' file header found in {self.path}")
        
        logger.info(f"Read diff from {self.path} (first file: {match.group(1).strip()})")
        return content
