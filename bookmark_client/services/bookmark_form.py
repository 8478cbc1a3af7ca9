"""
书签表单提交流程

提交时先解析标签、按流程校验；校验失败时返回全部字段错误，不发起任何写请求；
校验通过后以解析后的标签提交。
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..api.client import BookmarkApiClient
from ..modules.tags import parse_tags, format_tags
from ..modules.validation import (
    ValidationResult,
    validate_bookmark_for_add,
    validate_bookmark_for_update,
)
from ..schemas import Bookmark

logger = logging.getLogger(__name__)


@dataclass
class BookmarkFormData:
    """表单中的原始输入"""
    url: str = ""
    memo: str = ""
    tags: str = ""
    hashed_id: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.hashed_id is not None

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkFormData":
        """用已有书签预填编辑表单"""
        return cls(
            url=bookmark.url,
            memo=bookmark.memo or "",
            tags=format_tags(bookmark.tags),
            hashed_id=bookmark.hashed_id,
        )


@dataclass
class SubmitOutcome:
    """提交结果：校验结果，以及写入成功后的书签"""
    result: ValidationResult
    tags: List[str] = field(default_factory=list)
    bookmark: Optional[Bookmark] = None

    @property
    def submitted(self) -> bool:
        return self.bookmark is not None


def check_form(form: BookmarkFormData) -> SubmitOutcome:
    """只做解析和校验，不访问网络（可用于输入时的即时校验）"""
    tags = parse_tags(form.tags)
    if form.is_edit:
        result = validate_bookmark_for_update(form.memo, tags)
    else:
        result = validate_bookmark_for_add(form.url, form.memo, tags)
    return SubmitOutcome(result=result, tags=tags)


class BookmarkFormService:
    """表单提交服务"""

    def __init__(self, client: BookmarkApiClient):
        self.client = client

    async def submit(self, form: BookmarkFormData) -> SubmitOutcome:
        """校验并提交表单，校验失败时不发送请求"""
        outcome = check_form(form)
        if not outcome.result.is_valid:
            logger.info(f"[Form] 校验未通过: {', '.join(outcome.result.fields)}")
            return outcome

        if form.is_edit:
            outcome.bookmark = await self.client.update_bookmark(form.hashed_id, form.memo, outcome.tags)
        else:
            outcome.bookmark = await self.client.add_bookmark(form.url, form.memo, outcome.tags)
        return outcome

    async def submit_add(self, url: str, memo: str, raw_tags: str) -> SubmitOutcome:
        """提交新增表单"""
        return await self.submit(BookmarkFormData(url=url, memo=memo, tags=raw_tags))

    async def submit_update(self, hashed_id: str, memo: str, raw_tags: str) -> SubmitOutcome:
        """提交编辑表单"""
        return await self.submit(BookmarkFormData(memo=memo, tags=raw_tags, hashed_id=hashed_id))
