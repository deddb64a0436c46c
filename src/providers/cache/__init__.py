"""Cache providers.

MemoryCacheProvider keeps the riders/drivers/trips snapshots in process
memory.  It is not shared across worker processes; each worker keeps its own
copy and invalidates it on its own mutations.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
