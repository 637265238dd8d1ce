from .storage import Storage
from .sync_storage import SyncStorage

__all__ = ["Storage", "SyncStorage"]
