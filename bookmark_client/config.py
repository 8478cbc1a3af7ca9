"""客户端配置"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from pathlib import Path

# 令牌与日志默认放在用户目录下
_home_dir = Path.home() / ".bookmark_client"


class Settings(BaseSettings):
    """客户端设置"""
    # 应用
    APP_NAME: str = "Bookmark Client"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 后端接口
    API_BASE_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float = 15.0  # 秒

    # 列表
    PAGE_SIZE: int = 12

    # 会话（令牌持久化文件）
    TOKEN_FILE: str = str(_home_dir / "token")

    # 当前用户信息缓存
    ME_CACHE_TTL: int = 300  # 5 分钟
    ME_CACHE_MAX_SIZE: int = 16

    # 日志
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # 未配置时输出到 stderr

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
