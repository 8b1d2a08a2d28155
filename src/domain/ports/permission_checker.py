"""PermissionChecker Port - 外部注入的权限判断

状态机只声明某个流转需要哪个 PermissionFlag；
调用者是否持有该权限由此接口的实现决定（如按用户权限位掩码判断）。
"""

from typing import Protocol

from src.domain.value_objects.permission_flag import PermissionFlag


class PermissionChecker(Protocol):
    def has_permission(self, permission: PermissionFlag) -> bool:
        ...
