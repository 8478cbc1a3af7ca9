"""用户权限等级"""
from enum import IntEnum


class Authority(IntEnum):
    """权限等级：0=无权限，1=只读，2=读写，9=管理员"""
    NONE = 0
    READ_ONLY = 1
    READ_WRITE = 2
    ADMIN = 9


AUTHORITY_LABELS = {
    Authority.NONE: "none",
    Authority.READ_ONLY: "read-only",
    Authority.READ_WRITE: "read-write",
    Authority.ADMIN: "admin",
}


def can_view(authority: int) -> bool:
    """是否可以浏览书签"""
    return authority >= Authority.READ_ONLY


def can_edit(authority: int) -> bool:
    """是否可以新增、编辑、删除书签"""
    return authority >= Authority.READ_WRITE


def authority_label(authority: int) -> str:
    """权限等级的显示名称，未知等级按数值显示"""
    try:
        return AUTHORITY_LABELS[Authority(authority)]
    except ValueError:
        return str(authority)
