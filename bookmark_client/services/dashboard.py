"""书签列表页状态：分页、标签过滤、按权限开放的编辑操作"""
import logging
from typing import List, Optional

from ..api.client import BookmarkApiClient
from ..api.errors import ApiError, PermissionDeniedError, UnauthorizedError
from ..config import settings
from ..schemas import Bookmark, BookmarkPage, User
from .bookmark_form import BookmarkFormData, BookmarkFormService, SubmitOutcome

logger = logging.getLogger(__name__)


class DashboardService:
    """书签列表页"""

    def __init__(self, client: BookmarkApiClient, page_size: Optional[int] = None):
        self.client = client
        self.forms = BookmarkFormService(client)
        self.page_size = page_size or settings.PAGE_SIZE
        self.page = 1
        self.tag_filter = ""
        self.bookmarks: List[Bookmark] = []
        self.current_user: Optional[User] = None

    # ==================== 用户与权限 ====================

    async def load_user(self) -> Optional[User]:
        """加载当前用户；获取失败时列表仍可浏览，只是不开放编辑"""
        try:
            self.current_user = await self.client.get_me()
        except UnauthorizedError:
            self.current_user = None
            raise
        except ApiError as e:
            logger.warning(f"[Dashboard] 获取用户信息失败: {e.detail}")
            self.current_user = None
        return self.current_user

    @property
    def can_edit(self) -> bool:
        return self.current_user is not None and self.current_user.can_edit

    def _require_edit(self) -> None:
        if not self.can_edit:
            raise PermissionDeniedError("没有编辑书签的权限")

    # ==================== 列表与分页 ====================

    async def refresh(self) -> BookmarkPage:
        """
        按当前页码和标签过滤加载列表

        非第一页返回空列表时（例如删除了最后一页的唯一一条），自动回退到上一页。
        """
        while True:
            result = await self.client.get_bookmarks(self.page, self.page_size, self.tag_filter or None)
            if result.items or self.page <= 1:
                break
            logger.info(f"[Dashboard] 第 {self.page} 页为空，回退到上一页")
            self.page -= 1
        self.bookmarks = result.items
        return result

    def set_tag_filter(self, tag: str) -> None:
        """修改标签过滤并回到第一页"""
        self.tag_filter = tag
        self.page = 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return len(self.bookmarks) >= self.page_size

    @property
    def show_pagination(self) -> bool:
        return self.has_prev or self.has_next

    def next_page(self) -> None:
        if self.has_next:
            self.page += 1

    def prev_page(self) -> None:
        self.page = max(1, self.page - 1)

    # ==================== 编辑操作 ====================

    def find(self, hashed_id: str) -> Optional[Bookmark]:
        """在当前页中查找书签"""
        return next((b for b in self.bookmarks if b.hashed_id == hashed_id), None)

    def new_form(self) -> BookmarkFormData:
        """新增表单"""
        self._require_edit()
        return BookmarkFormData()

    async def open_editor(self, hashed_id: str) -> BookmarkFormData:
        """获取书签完整信息并预填编辑表单"""
        self._require_edit()
        bookmark = await self.client.get_bookmark(hashed_id)
        return BookmarkFormData.from_bookmark(bookmark)

    async def save(self, form: BookmarkFormData) -> SubmitOutcome:
        """提交表单，写入成功后刷新列表"""
        self._require_edit()
        outcome = await self.forms.submit(form)
        if outcome.submitted:
            await self.refresh()
        return outcome

    async def delete(self, hashed_id: str) -> None:
        """删除书签并刷新列表"""
        self._require_edit()
        await self.client.delete_bookmark(hashed_id)
        await self.refresh()
