"""
书签服务 API 客户端

负责与后端接口之间的请求/响应转换：
- 登录使用表单提交，令牌写入显式传入的 Session
- 列表/详情/更新响应的外层字段（bookmarks / bookmark / updated_bookmark）在这里拆开
- 更新请求不包含 url，tags 为空时提交 null
"""
import logging
from typing import Any, Dict, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..config import settings
from ..schemas import (
    Bookmark,
    BookmarkCreate,
    BookmarkUpdate,
    BookmarkListEnvelope,
    BookmarkEnvelope,
    UpdatedBookmarkEnvelope,
    BookmarkPage,
    LoginResponse,
    User,
)
from ..session import Session
from ..utils.cache import create_cache, cached_method, invalidate_cache
from .errors import (
    ApiError,
    BookmarkClientError,
    LoginFailedError,
    ResponseFormatError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_detail(response: httpx.Response) -> str:
    """从错误响应中取出 detail"""
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    detail = body.get("detail") if isinstance(body, dict) else None
    if not detail:
        return f"Request failed with status {response.status_code}"
    return detail if isinstance(detail, str) else str(detail)


def _parse(model: Type[ModelT], data: Any, endpoint: str) -> ModelT:
    """按接口约定解析响应"""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(f"[API] 响应格式不符: {endpoint} - {e.error_count()} 个错误")
        raise ResponseFormatError(endpoint, f"{model.__name__}") from e


class BookmarkApiClient:
    """书签服务客户端"""

    def __init__(
        self,
        session: Session,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=base_url if base_url is not None else settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
        )
        self._cache = create_cache()

    async def __aenter__(self) -> "BookmarkApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭 HTTP 连接池"""
        if not self._client.is_closed:
            await self._client.aclose()

    # ==================== 基础请求 ====================

    async def _send(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[API] 请求失败: {method} {endpoint} - {e}")
            raise BookmarkClientError(f"请求失败: {method} {endpoint}: {e}") from e

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        发送带认证的 JSON 请求

        Returns:
            解析后的 JSON，响应体为空时返回 None

        Raises:
            UnauthorizedError: 401，会话令牌被清除
            ApiError: 其他非 2xx 状态码
            BookmarkClientError: 网络错误
        """
        headers = {"Content-Type": "application/json", **self.session.auth_headers()}
        logger.debug(f"[API] {method} {endpoint} params={params}")
        response = await self._send(method, endpoint, json=json, params=params, headers=headers)

        if response.status_code == 401:
            logger.warning(f"[API] 认证失效: {method} {endpoint}")
            self.logout()
            raise UnauthorizedError()

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(f"[API] {method} {endpoint} 返回 {response.status_code}: {detail}")
            raise ApiError(response.status_code, detail)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(endpoint, "响应不是 JSON") from e

    # ==================== 认证 ====================

    async def login(self, username: str, password: str) -> LoginResponse:
        """用户名密码登录，成功后令牌写入会话"""
        response = await self._send(
            "POST",
            "/token",
            data={"username": username, "password": password},
        )
        if not response.is_success:
            logger.warning(f"[API] 登录失败: user={username} status={response.status_code}")
            raise LoginFailedError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError("/token", "响应不是 JSON") from e
        login = _parse(LoginResponse, data, "/token")

        invalidate_cache(self._cache)
        self.session.set_token(login.access_token)
        logger.info(f"[API] 登录成功: user={username}")
        return login

    def logout(self) -> None:
        """清除会话令牌和缓存的用户信息"""
        invalidate_cache(self._cache)
        self.session.clear()

    # 令牌参与缓存键，直接调用 session.set_token 换号也不会命中旧用户
    @cached_method(scope=lambda self: self.session.token)
    async def get_me(self) -> User:
        """获取当前用户（带缓存）"""
        return _parse(User, await self.request("GET", "/me"), "/me")

    # ==================== 书签 ====================

    async def get_bookmarks(
        self,
        page: int = 1,
        size: Optional[int] = None,
        tag: Optional[str] = None,
    ) -> BookmarkPage:
        """获取书签列表（分页，可按标签过滤）"""
        size = size or settings.PAGE_SIZE
        params: Dict[str, Any] = {"page": page, "size": size}
        if tag:
            params["tag"] = tag

        data = await self.request("GET", "/bookmarks", params=params)
        envelope = _parse(BookmarkListEnvelope, data, "/bookmarks")
        return BookmarkPage(items=envelope.bookmarks, page=page, size=size)

    async def get_bookmark(self, hashed_id: str) -> Bookmark:
        """获取书签详情"""
        endpoint = f"/bookmarks/{hashed_id}"
        envelope = _parse(BookmarkEnvelope, await self.request("GET", endpoint), endpoint)
        return envelope.bookmark

    async def add_bookmark(self, url: str, memo: str, tags: Sequence[str]) -> Bookmark:
        """创建书签"""
        payload = BookmarkCreate(url=url, memo=memo, tags=list(tags))
        data = await self.request("POST", "/bookmarks", json=payload.model_dump())
        bookmark = _parse(Bookmark, data, "/bookmarks")
        logger.info(f"[API] 书签已创建: {bookmark.hashed_id}")
        return bookmark

    async def update_bookmark(self, hashed_id: str, memo: str, tags: Sequence[str]) -> Bookmark:
        """更新书签（url 不可修改）"""
        endpoint = f"/bookmarks/{hashed_id}"
        payload = BookmarkUpdate(memo=memo, tags=list(tags))
        data = await self.request("PATCH", endpoint, json=payload.model_dump())
        envelope = _parse(UpdatedBookmarkEnvelope, data, endpoint)
        logger.info(f"[API] 书签已更新: {hashed_id}")
        return envelope.updated_bookmark

    async def delete_bookmark(self, hashed_id: str) -> None:
        """删除书签"""
        await self.request("DELETE", f"/bookmarks/{hashed_id}")
        logger.info(f"[API] 书签已删除: {hashed_id}")
