"""
Provider layer for the Google Places integration.

Holds the cache backends, configuration, error values and the Google
client itself.
"""

from .base import CacheStore, Endpoint
from .cache import CacheKey, FileCache, MemoryCache
from .errors import (
    ApiError,
    Err,
    InvalidConfiguration,
    MalformedResponse,
    Ok,
    PlacesError,
    Result,
    TransportError,
)
from .settings import PlacesSettings, get_settings, reset_settings

__all__ = [
    'CacheStore',
    'Endpoint',
    'CacheKey',
    'MemoryCache',
    'FileCache',
    'PlacesError',
    'TransportError',
    'MalformedResponse',
    'ApiError',
    'InvalidConfiguration',
    'Ok',
    'Err',
    'Result',
    'PlacesSettings',
    'get_settings',
    'reset_settings',
]
