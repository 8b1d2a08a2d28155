"""PermissionFlag - 权限位掩码

业务定义：
- 应用中的授权检查使用全局权限位掩码
- 一个用户的权限是若干 PermissionFlag 的按位或
- 状态机只声明某个流转“需要哪个权限”，从不判断调用者是否持有

设计原则：
- 使用 IntFlag，可以直接存储为整数并按位组合
- 是否持有权限由外部注入的 PermissionChecker 决定
"""

from enum import IntFlag


class PermissionFlag(IntFlag):
    """权限位

    示例：
    >>> granted = PermissionFlag.VIEW_PROCUREMENT | PermissionFlag.APPROVE_PO
    >>> PermissionFlag.APPROVE_PO in granted
    True
    """

    VIEW_PROCUREMENT = 1 << 0
    MANAGE_PROCUREMENT = 1 << 1
    APPROVE_PR = 1 << 2
    APPROVE_PO = 1 << 3
    MANAGE_ESTIMATES = 1 << 4
    APPROVE_ESTIMATES = 1 << 5
    MANAGE_ACCOUNTING = 1 << 6
    APPROVE_TRANSACTIONS = 1 << 7


def has_permission(granted: int, required: PermissionFlag) -> bool:
    """判断位掩码 granted 是否包含 required 的全部位"""
    return (int(granted) & int(required)) == int(required)
