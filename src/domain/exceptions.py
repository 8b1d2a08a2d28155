"""领域层异常定义

异常分层：
- DomainError: 所有业务规则违反的基类
- NotFoundError: 通过 Port 查询的实体不存在
- InvalidTransitionError: 状态机拒绝的状态流转（唯一由状态机层抛出的异常）
- PermissionDeniedError: 流转需要的权限未被授予
- FormulaError 及其子类: 公式求值失败（词法、语法、未知变量、除零、非有限结果）

传播策略：
- 状态机的查询方法从不抛异常（缺失即数据）
- 求值器对任何失败都抛 FormulaError
- 成本计算编排层是捕获边界：记录日志并以 0 成本兜底
"""

from enum import Enum
from typing import Any


def _status_label(status: Any) -> str:
    return str(status.value) if isinstance(status, Enum) else str(status)


class DomainError(Exception):
    """领域层异常基类

    用途：
    - 表示业务规则违反
    - 表示领域不变式违反（如：状态流转非法）

    示例：
        if not entity_id:
            raise DomainError("entity_id 不能为空")
    """

    pass


class NotFoundError(DomainError):
    """实体不存在异常

    参数：
        entity_type: 实体类型（如："Material"、"PurchaseOrder"）
        entity_id: 实体 ID
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


# EntityNotFoundError是NotFoundError的别名，用于Repository层
EntityNotFoundError = NotFoundError


class InvalidTransitionError(DomainError):
    """非法状态流转异常

    由 require_valid_transition() 抛出，携带结构化上下文，
    调用方通常将其转换为面向用户的校验提示，而不是崩溃。

    属性：
        from_status: 当前状态
        to_status: 目标状态
        entity_type: 实体类型标签（可选，作为消息前缀）
        reason: 状态机给出的原因
    """

    def __init__(
        self,
        from_status: Any,
        to_status: Any,
        entity_type: str | None = None,
        reason: str | None = None,
    ):
        self.from_status = from_status
        self.to_status = to_status
        self.entity_type = entity_type
        self.reason = reason or (
            f"Cannot transition from {_status_label(from_status)} to {_status_label(to_status)}"
        )
        prefix = f"{entity_type}: " if entity_type else ""
        super().__init__(f"{prefix}{self.reason}")


class PermissionDeniedError(DomainError):
    """流转所需权限未授予"""

    def __init__(self, permission: Any, from_status: Any, to_status: Any):
        self.permission = permission
        self.from_status = from_status
        self.to_status = to_status
        permission_name = getattr(permission, "name", None) or str(permission)
        super().__init__(
            f"Permission {permission_name} is required to transition "
            f"from {_status_label(from_status)} to {_status_label(to_status)}"
        )


class FormulaError(DomainError):
    """公式求值异常基类

    对单次求值总是致命的；批量计算中由编排层捕获。
    """

    pass


class FormulaTokenizeError(FormulaError):
    """词法错误：表达式包含不支持的字符"""

    pass


class FormulaParseError(FormulaError):
    """语法错误：缺失括号、意外的 token、非法数字等"""

    pass


class UnknownVariableError(FormulaParseError):
    """表达式引用了未提供的变量（不会默认为 0）"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variable: {name}")


class UnknownFunctionError(FormulaParseError):
    """表达式调用了不在白名单中的函数"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: {name}")


class FormulaDivisionByZeroError(FormulaError):
    """除数为 0"""

    def __init__(self) -> None:
        super().__init__("Division by zero")


class NonFiniteResultError(FormulaError):
    """结果为 NaN 或无穷大"""

    def __init__(self) -> None:
        super().__init__("Formula did not evaluate to a valid number")


class MissingVariablesError(FormulaError):
    """公式声明的变量在上下文中缺失"""

    def __init__(self, missing: list[str], message: str | None = None):
        self.missing = missing
        super().__init__(message or f"Missing required variables: {', '.join(missing)}")
