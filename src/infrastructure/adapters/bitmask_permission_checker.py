"""PermissionChecker adapter over a user's permission bitmask (Infrastructure).

The bitmask is loaded by the auth layer; this adapter only answers lookups.
"""

from __future__ import annotations

from src.domain.ports.permission_checker import PermissionChecker
from src.domain.value_objects.permission_flag import PermissionFlag, has_permission


class BitmaskPermissionChecker(PermissionChecker):
    def __init__(self, granted: int) -> None:
        self._granted = int(granted)

    def has_permission(self, permission: PermissionFlag) -> bool:
        return has_permission(self._granted, permission)
