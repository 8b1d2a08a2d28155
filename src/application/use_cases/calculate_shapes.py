"""CalculateShapesUseCase - 形状计算用例

职责：
1. 未随请求提供材料时，通过 MaterialRepository 获取
2. 调用 Domain 层 calculate_shape()
3. 批量计算时把单个形状的失败转换为错误结果，继续计算其余形状
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.domain.entities.shape import Material, ParameterValue, Shape
from src.domain.exceptions import DomainError
from src.domain.ports.material_repository import MaterialRepository
from src.domain.services.shape_calculator import ShapeCalculationResult, calculate_shape

logger = logging.getLogger(__name__)


@dataclass
class ShapeCalculationInput:
    shape: Shape
    material_id: str
    parameter_values: list[ParameterValue] = field(default_factory=list)
    material: Material | None = None
    quantity: float = 1


class CalculateShapesUseCase:
    """形状计算用例

    依赖：
    - material_repository: Material 仓储接口
    """

    def __init__(self, material_repository: MaterialRepository):
        self.material_repository = material_repository

    def calculate(self, input_data: ShapeCalculationInput) -> ShapeCalculationResult:
        """计算单个形状

        抛出：
            DomainError: "Shape calculation failed: ..."（材料不存在等）
        """
        try:
            material = input_data.material or self.material_repository.get_by_id(
                input_data.material_id
            )
            return calculate_shape(
                input_data.shape,
                input_data.parameter_values,
                material,
                quantity=input_data.quantity,
            )
        except DomainError as e:
            raise DomainError(f"Shape calculation failed: {e}") from e

    def execute(self, inputs: Sequence[ShapeCalculationInput]) -> list[ShapeCalculationResult]:
        results: list[ShapeCalculationResult] = []
        for input_data in inputs:
            try:
                results.append(self.calculate(input_data))
            except DomainError as e:
                logger.error("%s", e, extra={"shape_id": input_data.shape.id})
                results.append(
                    ShapeCalculationResult(
                        shape_id=input_data.shape.id,
                        shape_name=input_data.shape.name,
                        material_id=input_data.material_id,
                        material_name="Unknown",
                        quantity=input_data.quantity,
                        errors=[str(e)],
                    )
                )
        return results
