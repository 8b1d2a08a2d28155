"""通用工作流状态机 (State Machine)

业务定义：
- 采购订单、采购申请、报价、收货等单据都有各自的状态流转图
- 给定固定的流转图，判断一次状态流转是否合法，并列出可用的下一状态
- 可选地为某个 (from, to) 流转声明所需权限

设计原则：
- 纯 Python 实现，不读写存储：当前状态由调用方每次传入
- 查询方法从不抛异常，缺失的条目退化为“无可用流转”
- 只有 require_valid_transition() 抛出 InvalidTransitionError
- 没有隐式初始状态

终态判定：
- 显式声明在 terminal_states 中，或
- 没有登记任何出边（空列表或缺失条目）

使用示例：
    machine = create_state_machine(
        StateMachineConfig(
            transitions={"DRAFT": ["SUBMITTED"], "SUBMITTED": ["APPROVED"]},
            terminal_states=["APPROVED"],
        )
    )
    machine.can_transition_to("DRAFT", "SUBMITTED")  # True
    machine.validate_transition("APPROVED", "DRAFT").reason
    # "Cannot transition from terminal state APPROVED. No further transitions are allowed."
"""

from collections.abc import Collection, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from src.domain.exceptions import InvalidTransitionError
from src.domain.value_objects.permission_flag import PermissionFlag

S = TypeVar("S", bound=Hashable)


def _status_name(status: object) -> str:
    if isinstance(status, Enum):
        return str(status.value)
    return str(status)


def transition_key(from_status: object, to_status: object) -> str:
    """权限表的组合键：两个状态名拼接"""
    return f"{_status_name(from_status)}_{_status_name(to_status)}"


@dataclass(frozen=True)
class StateMachineConfig(Generic[S]):
    """状态机配置

    属性说明：
    - transitions: 状态 → 可直接到达的状态列表
    - terminal_states: 显式声明的终态
    - transition_permissions: transition_key(from, to) → 所需权限（可选）
    """

    transitions: Mapping[S, Sequence[S]]
    terminal_states: Collection[S] = field(default_factory=frozenset)
    transition_permissions: Mapping[str, PermissionFlag] | None = None


@dataclass(frozen=True)
class TransitionValidationResult(Generic[S]):
    """流转校验结果"""

    allowed: bool
    from_status: S
    to_status: S
    reason: str | None = None


@dataclass(frozen=True)
class AvailableActions(Generic[S]):
    """某状态下可执行的动作"""

    available_transitions: list[S]
    is_terminal: bool


class StateMachine(Generic[S]):
    """状态机

    配置在构造时复制为不可变结构，之后只读查询，可被并发调用。
    """

    def __init__(self, config: StateMachineConfig[S]):
        self._transitions: dict[S, tuple[S, ...]] = {
            status: tuple(targets) for status, targets in config.transitions.items()
        }
        self._terminal_states: frozenset[S] = frozenset(config.terminal_states)
        self._permissions: dict[str, PermissionFlag] | None = (
            dict(config.transition_permissions)
            if config.transition_permissions is not None
            else None
        )
        self._reachable: frozenset[S] = frozenset(
            target for targets in self._transitions.values() for target in targets
        )

    @property
    def reachable_statuses(self) -> frozenset[S]:
        """在任意状态的出边中出现过的全部目标状态"""
        return self._reachable

    @property
    def all_statuses(self) -> frozenset[S]:
        """流转图中提到的全部状态（键、目标、显式终态）"""
        return frozenset(self._transitions) | self._reachable | self._terminal_states

    def can_transition_to(self, current: S, target: S) -> bool:
        return target in self._transitions.get(current, ())

    def validate_transition(self, current: S, target: S) -> TransitionValidationResult[S]:
        """校验流转并给出原因

        原因判定顺序：
        1. current 是终态
        2. target 不是本工作流的任何目标状态
        3. 其他：通用的 "Cannot transition from X to Y"
        """
        if self.can_transition_to(current, target):
            return TransitionValidationResult(
                allowed=True, from_status=current, to_status=target
            )

        current_name = _status_name(current)
        target_name = _status_name(target)

        if self.is_terminal(current):
            reason = (
                f"Cannot transition from terminal state {current_name}. "
                "No further transitions are allowed."
            )
        elif target not in self._reachable:
            reason = f"{target_name} is not a valid status for this workflow"
        else:
            reason = f"Cannot transition from {current_name} to {target_name}"

        return TransitionValidationResult(
            allowed=False, from_status=current, to_status=target, reason=reason
        )

    def get_available_transitions(self, current: S) -> list[S]:
        return list(self._transitions.get(current, ()))

    def get_available_actions(self, current: S) -> AvailableActions[S]:
        return AvailableActions(
            available_transitions=self.get_available_transitions(current),
            is_terminal=self.is_terminal(current),
        )

    def is_terminal(self, status: S) -> bool:
        if status in self._terminal_states:
            return True
        return not self._transitions.get(status)

    def get_required_permission(self, from_status: S, to_status: S) -> PermissionFlag | None:
        if self._permissions is None:
            return None
        return self._permissions.get(transition_key(from_status, to_status))


def create_state_machine(config: StateMachineConfig[S]) -> StateMachine[S]:
    """根据配置创建状态机"""
    return StateMachine(config)


def require_valid_transition(
    machine: StateMachine[S],
    current: S,
    target: S,
    entity_type: str | None = None,
) -> None:
    """校验流转，不合法时抛出 InvalidTransitionError

    参数：
        machine: 状态机
        current: 当前状态
        target: 目标状态
        entity_type: 实体类型标签（如 "Purchase Order"），作为错误消息前缀

    抛出：
        InvalidTransitionError: 流转不合法
    """
    result = machine.validate_transition(current, target)
    if not result.allowed:
        raise InvalidTransitionError(
            from_status=current,
            to_status=target,
            entity_type=entity_type,
            reason=result.reason,
        )


def is_terminal_status(machine: StateMachine[S], status: S) -> bool:
    return machine.is_terminal(status)


# 目标状态 → 界面上的动作文案
TRANSITION_LABELS: dict[str, str] = {
    "PENDING_APPROVAL": "Submit for Approval",
    "APPROVED": "Approve",
    "REJECTED": "Reject",
    "CANCELLED": "Cancel",
    "DRAFT": "Return to Draft",
    "ISSUED": "Issue",
    "ACKNOWLEDGED": "Mark Acknowledged",
    "IN_PROGRESS": "Start",
    "AMENDED": "Amend",
    "COMPLETED": "Complete",
    "SUBMITTED": "Submit to Client",
    "UNDER_NEGOTIATION": "Under Negotiation",
    "ACCEPTED": "Mark Accepted",
    "EXPIRED": "Mark Expired",
    "ISSUES_FOUND": "Report Issues",
    "UPLOADED": "Upload",
    "UNDER_REVIEW": "Start Review",
    "EVALUATED": "Mark Evaluated",
    "SELECTED": "Select Offer",
    "PO_CREATED": "Create PO",
    "WITHDRAWN": "Withdraw",
    "FINALIZED": "Finalize",
    "SHIPPED": "Mark Shipped",
    "DELIVERED": "Mark Delivered",
    "CONVERTED_TO_RFQ": "Convert to RFQ",
}


def get_transition_labels(statuses: Iterable[object]) -> dict[str, str]:
    """返回每个目标状态的动作文案，未知状态原样返回"""
    labels: dict[str, str] = {}
    for status in statuses:
        name = _status_name(status)
        labels[name] = TRANSITION_LABELS.get(name, name)
    return labels


__all__ = [
    "AvailableActions",
    "StateMachine",
    "StateMachineConfig",
    "TRANSITION_LABELS",
    "TransitionValidationResult",
    "create_state_machine",
    "get_transition_labels",
    "is_terminal_status",
    "require_valid_transition",
    "transition_key",
]
