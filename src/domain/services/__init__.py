"""Domain Services 模块

领域服务：
- StateMachine: 通用工作流状态机
- workflow_state_machines: 采购/报价类单据的状态机定义
- formula_evaluator: 安全公式求值器（不执行宿主代码）
- shape_formula_engine: 形状公式求值（pi / density 绑定、期望范围）
- service_cost_calculator: BOM 服务成本计算
- shape_calculator: 形状尺寸、重量、下料与成本计算
"""

from src.domain.services.formula_evaluator import evaluate
from src.domain.services.state_machine import (
    StateMachine,
    StateMachineConfig,
    create_state_machine,
    require_valid_transition,
)

__all__ = [
    "StateMachine",
    "StateMachineConfig",
    "create_state_machine",
    "evaluate",
    "require_valid_transition",
]
