"""Cross-process write locks keyed by store path, using diskcache."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class Locks:
    """Hands out one ``diskcache.Lock`` per resolved store path.

    Processes that point at the same ``directory`` serialize their
    writes to the same store file. Readers are never blocked.

    Args:
        directory: Directory for the diskcache database holding lock
            entries. Created if missing.
        expire: Seconds after which a held lock is considered stale,
            or ``None`` to hold until released.
    """

    def __init__(self, directory: str | Path, expire: float | None = None) -> None:
        from diskcache import Cache as DiskCache

        self.directory = str(directory)
        self.expire = expire
        self.cache = DiskCache(self.directory)

    def lock_for(self, path: Path):
        """Return the lock guarding writes to ``path``."""
        from diskcache import Lock

        key = f"kvfile:{path.resolve()}"
        logger.debug("Lock %s in %s", key, self.directory)
        return Lock(self.cache, key, expire=self.expire)

    def close(self) -> None:
        self.cache.close()
