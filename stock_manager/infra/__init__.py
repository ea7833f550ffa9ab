"""Infrastructure - local storage, remote table store, logging."""

from stock_manager.infra.local_store import LocalStore, StorageKeys
from stock_manager.infra.logging import get_logger, setup_logging
from stock_manager.infra.remote_store import RemoteTableStore

__all__ = [
    "LocalStore",
    "StorageKeys",
    "RemoteTableStore",
    "setup_logging",
    "get_logger",
]
