"""Tool cache management."""
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import appdirs

from nunu_upload_action.installer.constants import (
    APP_NAME,
    COMPLETE_MARKER_SUFFIX,
    TOOL_CACHE_ENV,
)
from nunu_upload_action.logging import get_logger
from nunu_upload_action.types import CacheKey

logger = get_logger(__name__)


def default_cache_root() -> Path:
    """Runner tool cache when available, user cache dir otherwise."""
    runner_cache = os.environ.get(TOOL_CACHE_ENV)
    if runner_cache:
        return Path(runner_cache)
    return Path(appdirs.user_cache_dir(APP_NAME)) / "tool-cache"


class ToolCache:
    """Versioned tool directories laid out as ``{root}/{tool}/{version}/{arch}``.

    A directory counts as populated once its sibling ``{arch}.complete``
    marker exists. Entries are committed by renaming a fully written
    staging directory into place, so concurrent runners populating the
    same key never observe a half-copied binary.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else default_cache_root()

    def tool_dir(self, key: CacheKey) -> Path:
        return self.root / key.tool / key.version / key.arch.value

    def marker_path(self, key: CacheKey) -> Path:
        path = self.tool_dir(key)
        return path.with_name(path.name + COMPLETE_MARKER_SUFFIX)

    def find(self, key: CacheKey) -> Optional[Path]:
        """Get cached tool directory if it exists."""
        if not key.version:
            return None

        path = self.tool_dir(key)
        logger.debug("checking_cache", path=str(path))

        if path.is_dir() and self.marker_path(key).exists():
            return path
        return None

    def commit(self, source: Path, filename: str, key: CacheKey) -> Path:
        """Copy ``source`` into the cache as ``filename`` and return its directory."""
        target = self.tool_dir(key)
        target.parent.mkdir(parents=True, exist_ok=True)

        staging = Path(tempfile.mkdtemp(prefix=f".{key.arch.value}-", dir=target.parent))
        try:
            staging.chmod(0o755)
            shutil.copy2(source, staging / filename)
            logger.debug("caching_tool", source=str(source), staging=str(staging))

            try:
                os.rename(staging, target)
            except OSError:
                # Another runner committed first
                if not target.is_dir():
                    raise
                logger.info("cache_entry_exists", path=str(target))

            self.marker_path(key).touch()
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        logger.info("tool_cached", key=key.as_tuple(), path=str(target))
        return target
