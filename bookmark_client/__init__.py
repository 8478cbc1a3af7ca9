"""书签服务客户端"""
from .modules.tags import parse_tags, format_tags
from .modules.validation import (
    ValidationError,
    ValidationResult,
    FlowPolicy,
    ADD_POLICY,
    UPDATE_POLICY,
    validate_url,
    validate_memo,
    validate_tags,
    validate_bookmark,
    validate_bookmark_for_add,
    validate_bookmark_for_update,
)

__version__ = "1.0.0"

__all__ = [
    "parse_tags", "format_tags",
    "ValidationError", "ValidationResult", "FlowPolicy", "ADD_POLICY", "UPDATE_POLICY",
    "validate_url", "validate_memo", "validate_tags",
    "validate_bookmark", "validate_bookmark_for_add", "validate_bookmark_for_update",
]
