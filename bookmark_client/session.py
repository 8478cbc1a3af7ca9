"""
会话管理

令牌作为不透明的 Bearer 字符串保存在 Session 对象中，由调用方显式传给 API 客户端。
TokenStore 负责把令牌持久化到本地文件，便于命令行多次调用之间复用登录状态。
"""
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class TokenStore:
    """基于文件的令牌存储"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[str]:
        """读取令牌，文件不存在或为空返回 None"""
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        """写入令牌（仅当前用户可读写）"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # 已存在的文件不受 os.open 的 mode 影响
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(token)
        logger.debug(f"[Session] 令牌已保存: {self.path}")

    def clear(self) -> None:
        """删除令牌文件"""
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"[Session] 令牌已删除: {self.path}")


class Session:
    """当前登录会话"""

    def __init__(self, token: Optional[str] = None, store: Optional[TokenStore] = None):
        self._token = token
        self.store = store

    @classmethod
    def from_store(cls, store: TokenStore) -> "Session":
        """从本地存储恢复会话"""
        return cls(token=store.load(), store=store)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: str) -> None:
        self._token = token
        if self.store is not None:
            self.store.save(token)

    def clear(self) -> None:
        self._token = None
        if self.store is not None:
            self.store.clear()

    def auth_headers(self) -> Dict[str, str]:
        """生成认证请求头，未登录时返回空字典"""
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}
