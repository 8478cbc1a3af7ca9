"""工具函数"""
from .cache import create_cache, cached_method, invalidate_cache, make_cache_key

__all__ = [
    "create_cache", "cached_method", "invalidate_cache", "make_cache_key",
]
