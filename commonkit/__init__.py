"""Small, pure helper functions: geodesic distance, stable cache keys and friends."""

from commonkit.services.cache_keys import fingerprint, to_cache_key_fast, to_cache_key_stable
from commonkit.utils.geo import get_distance

__all__ = [
    "fingerprint",
    "get_distance",
    "to_cache_key_fast",
    "to_cache_key_stable",
]
