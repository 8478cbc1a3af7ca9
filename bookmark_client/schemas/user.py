"""用户相关 Schema"""
from pydantic import BaseModel

from ..auth import can_edit, authority_label


class User(BaseModel):
    """当前用户"""
    name: str
    authority: int

    @property
    def can_edit(self) -> bool:
        return can_edit(self.authority)

    @property
    def authority_label(self) -> str:
        return authority_label(self.authority)


class LoginResponse(BaseModel):
    """登录响应"""
    access_token: str
    token_type: str = "bearer"
