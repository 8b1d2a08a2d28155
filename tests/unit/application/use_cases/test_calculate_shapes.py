"""CalculateShapesUseCase 单元测试

测试目标：
1. 未随请求提供材料时从 MaterialRepository 获取
2. 材料不存在时抛出 "Shape calculation failed: ..."
3. 批量计算时单个形状失败转换为错误结果，继续计算其余形状
"""

from unittest.mock import Mock

import pytest

from src.application.use_cases.calculate_shapes import (
    CalculateShapesUseCase,
    ShapeCalculationInput,
)
from src.domain.entities.shape import Material, ParameterValue, Shape
from src.domain.exceptions import DomainError
from src.infrastructure.adapters.in_memory_material_repository import InMemoryMaterialRepository

VALUES = [ParameterValue("L", 1000), ParameterValue("W", 500), ParameterValue("t", 10)]


@pytest.fixture
def plate(plate_formulas) -> Shape:
    return Shape(id="shape-plate", name="Rectangular Plate", formulas=plate_formulas)


class TestCalculateShapesUseCase:
    """CalculateShapesUseCase 测试类"""

    def test_material_loaded_from_repository(self, plate, steel):
        use_case = CalculateShapesUseCase(InMemoryMaterialRepository([steel]))

        result = use_case.calculate(ShapeCalculationInput(plate, steel.id, VALUES, quantity=3))

        assert result.material_name == "Carbon Steel"
        assert result.weight == pytest.approx(39.25)
        assert result.total_weight == pytest.approx(117.75)

    def test_supplied_material_skips_repository(self, plate):
        repository = Mock()
        material = Material(id="mat-al", name="Aluminium", density=2700, price_per_kg=250)
        use_case = CalculateShapesUseCase(repository)

        result = use_case.calculate(
            ShapeCalculationInput(plate, material.id, VALUES, material=material)
        )

        repository.get_by_id.assert_not_called()
        assert result.weight == pytest.approx(13.5)

    def test_unknown_material(self, plate):
        use_case = CalculateShapesUseCase(InMemoryMaterialRepository())

        with pytest.raises(
            DomainError, match="Shape calculation failed: Material not found: mat-404"
        ):
            use_case.calculate(ShapeCalculationInput(plate, "mat-404", VALUES))

    def test_batch_isolates_failures(self, plate, steel):
        """测试批量计算：失败的形状变为错误结果，其余照常"""
        use_case = CalculateShapesUseCase(InMemoryMaterialRepository([steel]))
        inputs = [
            ShapeCalculationInput(plate, steel.id, VALUES),
            ShapeCalculationInput(plate, "mat-404", VALUES, quantity=2),
            ShapeCalculationInput(plate, steel.id, VALUES),
        ]

        results = use_case.execute(inputs)

        assert len(results) == 3
        assert results[0].errors == []
        assert results[2].weight == pytest.approx(39.25)

        failed = results[1]
        assert failed.shape_id == "shape-plate"
        assert failed.material_id == "mat-404"
        assert failed.material_name == "Unknown"
        assert failed.quantity == 2
        assert failed.weight is None
        assert failed.errors == ["Shape calculation failed: Material not found: mat-404"]
