"""应用层 - 用例编排

Application 层职责：
1. 用例编排：协调 Domain 服务与 Port
2. 输入输出转换：接收输入参数，返回结果
3. 错误边界：批量计算中把单项失败转换为失败结果

已实现的用例：
- TransitionEntityStatusUseCase: 单据状态流转（校验 + 鉴权 + 持久化）
- RecalculateServiceCostsUseCase: 批量重算 BOM 服务成本
- CalculateShapesUseCase: 形状尺寸、重量与成本计算

设计原则：
- 单一职责：每个 Use Case 只做一件事
- 依赖倒置：依赖 Port 接口，不依赖具体实现
"""

from src.application.use_cases import (
    CalculateShapesUseCase,
    ItemCostOutcome,
    RecalculateServiceCostsUseCase,
    ShapeCalculationInput,
    TransitionEntityStatusUseCase,
    TransitionStatusInput,
    TransitionStatusOutput,
)

__all__ = [
    "CalculateShapesUseCase",
    "ItemCostOutcome",
    "RecalculateServiceCostsUseCase",
    "ShapeCalculationInput",
    "TransitionEntityStatusUseCase",
    "TransitionStatusInput",
    "TransitionStatusOutput",
]
