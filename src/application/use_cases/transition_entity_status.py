"""TransitionEntityStatusUseCase - 单据状态流转用例

业务场景：
用户在采购订单、采购申请、报价等单据上执行“提交 / 批准 / 驳回 / 取消”等动作，
系统校验流转合法性与审批权限后写入新状态

职责：
1. 通过 StatusRepository 读取当前状态
2. 调用 require_valid_transition() 校验流转
3. 若流转需要权限，通过注入的 PermissionChecker 判断
4. 通过 StatusRepository 写入目标状态

第一性原则：
- 流转规则在 Domain 层（状态机定义中）
- 用例只负责协调读取、校验、鉴权、写入
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.domain.exceptions import PermissionDeniedError
from src.domain.ports.permission_checker import PermissionChecker
from src.domain.ports.status_repository import StatusRepository
from src.domain.services.state_machine import StateMachine, require_valid_transition
from src.domain.value_objects.permission_flag import PermissionFlag

logger = logging.getLogger(__name__)


@dataclass
class TransitionStatusInput:
    """状态流转的输入参数

    属性说明：
    - entity_id: 单据 ID
    - target_status: 目标状态
    """

    entity_id: str
    target_status: Any


@dataclass
class TransitionStatusOutput:
    entity_id: str
    from_status: Any
    to_status: Any
    required_permission: PermissionFlag | None = None


class TransitionEntityStatusUseCase:
    """单据状态流转用例

    依赖：
    - state_machine: 该单据类型的状态机
    - status_repository: 状态仓储接口
    - permission_checker: 权限判断（可选；流转需要权限而未注入时拒绝）
    - entity_type: 实体类型标签，用于错误消息前缀
    """

    def __init__(
        self,
        state_machine: StateMachine,
        status_repository: StatusRepository,
        entity_type: str,
        permission_checker: PermissionChecker | None = None,
    ):
        self.state_machine = state_machine
        self.status_repository = status_repository
        self.entity_type = entity_type
        self.permission_checker = permission_checker

    def execute(self, input_data: TransitionStatusInput) -> TransitionStatusOutput:
        """执行状态流转

        抛出：
            NotFoundError: 单据不存在（从 Repository 传播）
            InvalidTransitionError: 流转不合法
            PermissionDeniedError: 缺少所需权限
        """
        # 1. 读取当前状态
        current = self.status_repository.get_status(input_data.entity_id)
        target = input_data.target_status

        # 2. 校验流转
        require_valid_transition(self.state_machine, current, target, self.entity_type)

        # 3. 审批权限
        permission = self.state_machine.get_required_permission(current, target)
        if permission is not None and (
            self.permission_checker is None
            or not self.permission_checker.has_permission(permission)
        ):
            raise PermissionDeniedError(permission, current, target)

        # 4. 持久化
        target_value = target.value if isinstance(target, Enum) else target
        self.status_repository.save_status(input_data.entity_id, target_value)

        logger.info(
            "%s %s transitioned from %s to %s",
            self.entity_type,
            input_data.entity_id,
            current,
            target_value,
        )
        return TransitionStatusOutput(
            entity_id=input_data.entity_id,
            from_status=current,
            to_status=target,
            required_permission=permission,
        )
