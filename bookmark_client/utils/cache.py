"""内存缓存"""
from cachetools import TTLCache
from functools import wraps
from typing import Callable, Optional
import hashlib
import json

from ..config import settings


def create_cache(maxsize: Optional[int] = None, ttl: Optional[int] = None) -> TTLCache:
    """创建缓存实例（默认参数取自配置）"""
    return TTLCache(
        maxsize=maxsize or settings.ME_CACHE_MAX_SIZE,
        ttl=ttl if ttl is not None else settings.ME_CACHE_TTL,
    )


def make_cache_key(*args, **kwargs) -> str:
    """生成缓存键"""
    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True, default=str)
    return hashlib.md5(key_data.encode()).hexdigest()


def cached_method(cache_attr: str = "_cache", scope: Optional[Callable] = None):
    """异步方法缓存装饰器，缓存实例取自对象属性

    scope(self) 的返回值参与缓存键，用于按会话等实例状态隔离缓存。

    Usage:
        class Client:
            def __init__(self):
                self._cache = create_cache()

            @cached_method()
            async def get_me(self):
                ...
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            cache = getattr(self, cache_attr)
            scope_value = scope(self) if scope is not None else None
            cache_key = f"{func.__name__}:{make_cache_key(scope_value, *args, **kwargs)}"

            if cache_key in cache:
                return cache[cache_key]

            result = await func(self, *args, **kwargs)

            if result is not None:
                cache[cache_key] = result

            return result
        return wrapper
    return decorator


def invalidate_cache(cache: TTLCache, pattern: Optional[str] = None) -> None:
    """清除缓存

    Args:
        cache: 缓存实例
        pattern: 匹配模式，None 则清除所有
    """
    if pattern is None:
        cache.clear()
    else:
        keys_to_delete = [k for k in cache.keys() if pattern in k]
        for key in keys_to_delete:
            del cache[key]
