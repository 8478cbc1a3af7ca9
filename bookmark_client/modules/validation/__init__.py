"""
书签表单校验模块

在表单输入与后端接口之间做字段级校验：
- URL：必填、长度上限、绝对 URL 格式（必须带协议和主机）
- 备注：按流程决定是否必填，长度上限按原始输入计算
- 标签：数量范围、单个标签长度

校验失败以数据形式返回（ValidationError / ValidationResult），从不抛异常。
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Literal, Optional, Sequence
from urllib.parse import urlsplit


# ==================== 限制常量 ====================

URL_MAX_LENGTH = 400
MEMO_MAX_LENGTH = 400
TAG_MIN_LENGTH = 1
TAG_MAX_LENGTH = 100
TAGS_MAX_COUNT = 10

FieldName = Literal["url", "memo", "tags"]

# 表单界面展示的提示文案
MESSAGES: Dict[str, str] = {
    "url_required": "URLは必須です",
    "url_too_long": f"URLは{URL_MAX_LENGTH}文字以内で入力してください",
    "url_invalid": "有効なURL形式で入力してください",
    "memo_required": "メモは必須です",
    "memo_too_long": f"メモは{MEMO_MAX_LENGTH}文字以内で入力してください",
    "tags_required": "タグは1つ以上必要です",
    "tags_too_many": f"タグは{TAGS_MAX_COUNT}個以内にしてください",
    "tag_empty": "空のタグは使用できません",
    "tag_too_long": f"各タグは{TAG_MAX_LENGTH}文字以内で入力してください",
}

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


# ==================== 结果类型 ====================

@dataclass(frozen=True)
class ValidationError:
    """单个字段的校验错误"""
    field: FieldName
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationResult:
    """
    一次表单校验的结果

    错误按字段保存（每个字段最多一条），保持 url → memo → tags 的评估顺序，
    界面可以直接按字段名取出对应的提示。
    """

    def __init__(self, errors: Iterable[ValidationError] = ()):
        self._errors: Dict[str, ValidationError] = {}
        for error in errors:
            self._errors.setdefault(error.field, error)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> List[ValidationError]:
        return list(self._errors.values())

    @property
    def fields(self) -> List[str]:
        return list(self._errors)

    def get(self, field: str) -> Optional[ValidationError]:
        """按字段名获取错误"""
        return self._errors.get(field)

    def message_for(self, field: str) -> Optional[str]:
        """按字段名获取错误提示，无错误返回 None"""
        error = self._errors.get(field)
        return error.message if error else None

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": [error.to_dict() for error in self._errors.values()],
        }

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.errors == other.errors

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors!r})"


# ==================== 流程策略 ====================

@dataclass(frozen=True)
class FlowPolicy:
    """
    校验流程的必填策略

    后端接口在更新时把 memo / tags 视为可选，客户端在两个流程中都要求填写，
    以免编辑时误清空数据。
    """
    name: str
    check_url: bool
    memo_required: bool
    tags_required: bool


ADD_POLICY = FlowPolicy(name="add", check_url=True, memo_required=True, tags_required=True)
UPDATE_POLICY = FlowPolicy(name="update", check_url=False, memo_required=True, tags_required=True)


# ==================== 字段校验 ====================

def is_absolute_url(url: str) -> bool:
    """检查是否为带协议和主机的绝对 URL"""
    if any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        # 非法端口会在访问 port 时抛出 ValueError
        parts.port
    except ValueError:
        return False
    if not _SCHEME_RE.match(parts.scheme):
        return False
    return bool(parts.hostname)


def validate_url(url: str) -> Optional[ValidationError]:
    """
    校验 URL 字段

    不做 trim：纯空白的输入不算"未填写"，而是格式错误；空白也计入长度。
    """
    if not url:
        return ValidationError("url", MESSAGES["url_required"])
    if len(url) > URL_MAX_LENGTH:
        return ValidationError("url", MESSAGES["url_too_long"])
    if not is_absolute_url(url):
        return ValidationError("url", MESSAGES["url_invalid"])
    return None


def validate_memo(memo: str, required: bool = False) -> Optional[ValidationError]:
    """
    校验备注字段

    必填判断使用 trim 后的值，长度上限使用原始输入。
    """
    memo = memo or ""
    if required and not memo.strip():
        return ValidationError("memo", MESSAGES["memo_required"])
    if len(memo) > MEMO_MAX_LENGTH:
        return ValidationError("memo", MESSAGES["memo_too_long"])
    return None


def validate_tags(tags: Sequence[str], required: bool = True) -> Optional[ValidationError]:
    """
    校验标签字段

    传入的标签应已经过 parse_tags 处理；空标签检查用于兜底直接传入列表的调用方。
    """
    tags = list(tags or [])
    if required and not tags:
        return ValidationError("tags", MESSAGES["tags_required"])
    if len(tags) > TAGS_MAX_COUNT:
        return ValidationError("tags", MESSAGES["tags_too_many"])
    for tag in tags:
        length = len(tag.strip())
        if length < TAG_MIN_LENGTH:
            return ValidationError("tags", MESSAGES["tag_empty"])
        if length > TAG_MAX_LENGTH:
            return ValidationError("tags", MESSAGES["tag_too_long"])
    return None


# ==================== 流程校验 ====================

def validate_bookmark(
    policy: FlowPolicy,
    url: Optional[str],
    memo: str,
    tags: Sequence[str],
) -> ValidationResult:
    """
    按流程策略校验全部字段，收集所有字段的错误（字段之间不短路）

    policy.check_url 为 False 时忽略 url（更新流程传 None）。
    """
    errors = []
    if policy.check_url:
        errors.append(validate_url(url or ""))
    errors.append(validate_memo(memo, required=policy.memo_required))
    errors.append(validate_tags(tags, required=policy.tags_required))
    return ValidationResult(error for error in errors if error is not None)


def validate_bookmark_for_add(url: str, memo: str, tags: Sequence[str]) -> ValidationResult:
    """新增书签校验"""
    return validate_bookmark(ADD_POLICY, url, memo, tags)


def validate_bookmark_for_update(memo: str, tags: Sequence[str]) -> ValidationResult:
    """更新书签校验（URL 创建后不可修改，不做校验）"""
    return validate_bookmark(UPDATE_POLICY, None, memo, tags)


__all__ = [
    "URL_MAX_LENGTH", "MEMO_MAX_LENGTH", "TAG_MIN_LENGTH", "TAG_MAX_LENGTH", "TAGS_MAX_COUNT",
    "MESSAGES", "ValidationError", "ValidationResult", "FlowPolicy", "ADD_POLICY", "UPDATE_POLICY",
    "is_absolute_url", "validate_url", "validate_memo", "validate_tags",
    "validate_bookmark", "validate_bookmark_for_add", "validate_bookmark_for_update",
]
