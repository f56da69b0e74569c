"""
Async client for the asset audit API with a local synchronization cache.
"""
from .api import ApiClient, ApiResult
from .cache import SyncCache, build_cache
from .config import ClientSettings
from .errors import ErrorKind
from .state import AppState, LocalStore

__all__ = [
    "ApiClient",
    "ApiResult",
    "AppState",
    "ClientSettings",
    "ErrorKind",
    "LocalStore",
    "SyncCache",
    "build_cache",
]
