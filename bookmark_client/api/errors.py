"""客户端异常"""
from typing import Optional


class BookmarkClientError(Exception):
    """客户端基础异常"""
    pass


class ApiError(BookmarkClientError):
    """后端返回非 2xx 状态码"""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail)


class UnauthorizedError(ApiError):
    """令牌无效或已过期（会话令牌已被清除）"""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(401, detail)


class LoginFailedError(ApiError):
    """登录失败"""

    def __init__(self, status_code: int, detail: str = "Login failed"):
        super().__init__(status_code, detail)


class ResponseFormatError(BookmarkClientError):
    """响应内容与接口约定不符"""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        self.endpoint = endpoint
        message = f"响应格式错误: {endpoint}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PermissionDeniedError(BookmarkClientError):
    """当前用户没有编辑权限"""
    pass
