"""书签相关 Schema"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Any

from ..modules.validation import MEMO_MAX_LENGTH, TAGS_MAX_COUNT, URL_MAX_LENGTH


class Bookmark(BaseModel):
    """书签（后端返回的实体）"""
    hashed_id: str
    url: str
    memo: Optional[str] = None
    tags: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        """确认对话框中显示的名称：优先备注，其次 URL"""
        return self.memo or self.url


class BookmarkCreate(BaseModel):
    """创建书签请求体"""
    url: str = Field(..., min_length=1, max_length=URL_MAX_LENGTH)
    memo: str = Field(..., max_length=MEMO_MAX_LENGTH)
    tags: List[str] = Field(..., min_length=1, max_length=TAGS_MAX_COUNT)


class BookmarkUpdate(BaseModel):
    """更新书签请求体（不包含 url；tags 为空时以 null 提交）"""
    memo: Optional[str] = Field(None, max_length=MEMO_MAX_LENGTH)
    tags: Optional[List[str]] = Field(None, min_length=1, max_length=TAGS_MAX_COUNT)

    @field_validator('tags', mode='before')
    @classmethod
    def empty_tags_to_none(cls, v: Any) -> Any:
        """空列表转为 None"""
        if v is not None and len(v) == 0:
            return None
        return v


class BookmarkListEnvelope(BaseModel):
    """列表响应 {bookmarks: [...]}，后端不返回总数"""
    bookmarks: List[Bookmark] = []


class BookmarkEnvelope(BaseModel):
    """详情响应 {bookmark: {...}}"""
    bookmark: Bookmark


class UpdatedBookmarkEnvelope(BaseModel):
    """更新响应 {updated_bookmark: {...}}"""
    updated_bookmark: Bookmark


class BookmarkPage(BaseModel):
    """客户端使用的分页结果"""
    items: List[Bookmark] = []
    page: int = 1
    size: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        # 没有总数，只能根据本页是否装满判断
        return len(self.items) >= self.size

    @property
    def show_pagination(self) -> bool:
        return self.has_prev or self.has_next
