"""Pydantic Schemas"""
from .user import User, LoginResponse
from .bookmark import (
    Bookmark,
    BookmarkCreate,
    BookmarkUpdate,
    BookmarkListEnvelope,
    BookmarkEnvelope,
    UpdatedBookmarkEnvelope,
    BookmarkPage,
)

__all__ = [
    "User", "LoginResponse",
    "Bookmark", "BookmarkCreate", "BookmarkUpdate",
    "BookmarkListEnvelope", "BookmarkEnvelope", "UpdatedBookmarkEnvelope", "BookmarkPage",
]
