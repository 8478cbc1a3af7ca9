"""书签客户端核心模块（不依赖网络与界面）"""
from . import tags
from . import validation

__all__ = [
    "tags",
    "validation",
]
