"""Cart package: local line items, pointer storage, and remote synchronization."""
from .models import LineItem
from .local import LocalCart
from .storage import CartIdStore, MemoryCartIdStore, RedisCartIdStore, StorageResult
from .sync import CartSynchronizer

__all__ = [
    "LineItem",
    "LocalCart",
    "CartIdStore",
    "MemoryCartIdStore",
    "RedisCartIdStore",
    "StorageResult",
    "CartSynchronizer",
]
