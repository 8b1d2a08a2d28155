"""Application 用例"""

from src.application.use_cases.calculate_shapes import (
    CalculateShapesUseCase,
    ShapeCalculationInput,
)
from src.application.use_cases.recalculate_service_costs import (
    ItemCostOutcome,
    RecalculateServiceCostsUseCase,
)
from src.application.use_cases.transition_entity_status import (
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
