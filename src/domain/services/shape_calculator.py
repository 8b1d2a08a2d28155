"""形状计算服务 (Shape Calculator)

业务定义：
- 根据形状参数和材料求出尺寸、重量、下料、废料、加工成本与总成本
- 公式求值失败只记录到结果的 errors，不中断其他公式
- 批量计算中单个形状的失败由 Application 层转换为错误结果

单位约定：
- 长度 mm，面积 mm²，体积 mm³，重量 kg，密度 kg/m³
- 加工费率按米 / 平方米计价，计算时做 mm → m、mm² → m² 换算
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from src.domain.entities.shape import (
    BlankDefinition,
    BlankType,
    FabricationCost,
    Material,
    ParameterValue,
    Shape,
)
from src.domain.exceptions import FormulaError
from src.domain.services.shape_formula_engine import (
    FormulaResult,
    evaluate_formula,
    evaluate_formulas_with_errors,
)

logger = logging.getLogger(__name__)

MM_PER_M = 1000
MM2_PER_M2 = 1_000_000


@dataclass
class BlankCalculationResult:
    blank_type: BlankType
    description: str | None = None
    blank_length: float | None = None
    blank_width: float | None = None
    blank_diameter: float | None = None
    blank_thickness: float | None = None
    blank_area: float | None = None
    scrap_percentage: float | None = None


@dataclass(frozen=True)
class FabricationCostBreakdown:
    edge_preparation_cost: float = 0.0
    cutting_cost: float = 0.0
    welding_cost: float = 0.0
    surface_treatment_cost: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.edge_preparation_cost
            + self.cutting_cost
            + self.welding_cost
            + self.surface_treatment_cost
        )


@dataclass
class ShapeCalculationResult:
    """一次形状计算的完整结果"""

    shape_id: str
    shape_name: str
    material_id: str
    material_name: str
    quantity: float

    volume: float | None = None
    volume_unit: str | None = None
    surface_area: float | None = None
    surface_area_unit: str | None = None
    inner_surface_area: float | None = None
    outer_surface_area: float | None = None
    wetted_area: float | None = None

    weight: float | None = None
    weight_unit: str | None = None
    total_weight: float | None = None

    blank_dimensions: BlankCalculationResult | None = None
    blank_area: float | None = None
    blank_area_unit: str = "mm²"
    finished_area: float | None = None
    scrap_percentage: float | None = None
    scrap_weight: float | None = None

    edge_length: float | None = None
    edge_length_unit: str | None = None
    weld_length: float | None = None
    weld_length_unit: str | None = None

    material_cost: float | None = None
    fabrication_cost: float | None = None
    surface_treatment_cost: float | None = None
    edge_preparation_cost: float | None = None
    cutting_cost: float | None = None
    welding_cost: float | None = None
    total_cost: float | None = None
    cost_per_unit: float | None = None

    custom_results: dict[str, FormulaResult] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParameterValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _to_number(value: float | str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def build_parameter_map(parameter_values: Sequence[ParameterValue]) -> dict[str, float]:
    """参数数组 → 参数名映射；未填写的跳过，无法解析的按 0 处理"""
    parameter_map: dict[str, float] = {}
    for parameter in parameter_values:
        if parameter.value is None:
            continue
        number = _to_number(parameter.value)
        parameter_map[parameter.name] = 0.0 if number is None or math.isnan(number) else number
    return parameter_map


def calculate_blank_dimensions(
    blank: BlankDefinition,
    parameter_map: Mapping[str, float],
    density: float | None = None,
) -> BlankCalculationResult:
    result = BlankCalculationResult(blank_type=blank.blank_type, description=blank.description)

    try:
        if blank.blank_type is BlankType.RECTANGULAR and blank.blank_length and blank.blank_width:
            length = evaluate_formula(blank.blank_length, parameter_map, density).result
            width = evaluate_formula(blank.blank_width, parameter_map, density).result
            result.blank_length = length
            result.blank_width = width
            result.blank_area = length * width
        elif blank.blank_type is BlankType.CIRCULAR and blank.blank_diameter:
            diameter = evaluate_formula(blank.blank_diameter, parameter_map, density).result
            result.blank_diameter = diameter
            result.blank_area = math.pi * (diameter / 2) ** 2

        if blank.blank_thickness and parameter_map.get(blank.blank_thickness):
            result.blank_thickness = parameter_map[blank.blank_thickness]

        if blank.scrap_formula:
            result.scrap_percentage = evaluate_formula(
                blank.scrap_formula, parameter_map, density
            ).result
    except FormulaError as e:
        logger.error("Blank calculation error: %s", e)

    return result


def calculate_fabrication_costs(
    fabrication_cost: FabricationCost | None,
    edge_length: float | None = None,
    weld_length: float | None = None,
    surface_area: float | None = None,
) -> FabricationCostBreakdown:
    if fabrication_cost is None:
        return FabricationCostBreakdown()

    edge_preparation = 0.0
    cutting = 0.0
    welding = 0.0
    surface_treatment = 0.0

    if fabrication_cost.edge_preparation_cost_per_meter and edge_length:
        edge_preparation = fabrication_cost.edge_preparation_cost_per_meter * edge_length / MM_PER_M
    if fabrication_cost.cutting_cost_per_meter and edge_length:
        cutting = fabrication_cost.cutting_cost_per_meter * edge_length / MM_PER_M
    if fabrication_cost.welding_cost_per_meter and weld_length:
        welding = fabrication_cost.welding_cost_per_meter * weld_length / MM_PER_M
    if fabrication_cost.surface_treatment_cost_per_sqm and surface_area:
        surface_treatment = (
            fabrication_cost.surface_treatment_cost_per_sqm * surface_area / MM2_PER_M2
        )

    return FabricationCostBreakdown(
        edge_preparation_cost=edge_preparation,
        cutting_cost=cutting,
        welding_cost=welding,
        surface_treatment_cost=surface_treatment,
    )


def calculate_shape(
    shape: Shape,
    parameter_values: Sequence[ParameterValue],
    material: Material,
    quantity: float = 1,
) -> ShapeCalculationResult:
    """计算一个形状的尺寸、重量与成本

    参数：
        shape: 形状定义
        parameter_values: 用户填写的参数
        material: 材料（提供密度与单价）
        quantity: 件数

    返回：
        ShapeCalculationResult；失败的公式写入 errors，超范围写入 warnings
    """
    parameter_map = build_parameter_map(parameter_values)
    density = material.density

    result = ShapeCalculationResult(
        shape_id=shape.id,
        shape_name=shape.name,
        material_id=material.id,
        material_name=material.name,
        quantity=quantity,
    )

    outcomes = evaluate_formulas_with_errors(shape.formulas, parameter_map, density)
    formula_results: dict[str, FormulaResult] = {}
    for name, outcome in outcomes.items():
        if outcome.result is None:
            result.errors.append(f"{name}: {outcome.error}")
            continue
        formula_results[name] = outcome.result
        if outcome.result.range_warning:
            result.warnings.append(outcome.result.range_warning)

    def value_of(name: str) -> float | None:
        formula_result = formula_results.get(name)
        return formula_result.result if formula_result else None

    def unit_of(name: str) -> str | None:
        formula_result = formula_results.get(name)
        return formula_result.unit if formula_result else None

    result.volume = value_of("volume")
    result.volume_unit = unit_of("volume")
    result.surface_area = value_of("surfaceArea")
    result.surface_area_unit = unit_of("surfaceArea")
    result.inner_surface_area = value_of("innerSurfaceArea")
    result.outer_surface_area = value_of("outerSurfaceArea")
    result.wetted_area = value_of("wettedArea")
    result.finished_area = value_of("finishedArea")
    result.weight = value_of("weight")
    result.weight_unit = unit_of("weight")
    result.edge_length = value_of("edgeLength")
    result.edge_length_unit = unit_of("edgeLength")
    result.weld_length = value_of("weldLength")
    result.weld_length_unit = unit_of("weldLength")

    if shape.blank_definition is not None:
        blank = calculate_blank_dimensions(shape.blank_definition, parameter_map, density)
        result.blank_dimensions = blank
        result.blank_area = blank.blank_area
        result.scrap_percentage = blank.scrap_percentage
        if result.weight and blank.scrap_percentage:
            result.scrap_weight = result.weight * blank.scrap_percentage / 100

    # 使用材料主数据中的最新单价，不考虑数量折扣或供应商价格
    result.material_cost = result.weight * material.price_per_kg if result.weight else 0.0

    fabrication = calculate_fabrication_costs(
        shape.fabrication_cost,
        edge_length=result.edge_length,
        weld_length=result.weld_length,
        surface_area=result.surface_area,
    )
    result.fabrication_cost = fabrication.total
    result.edge_preparation_cost = fabrication.edge_preparation_cost
    result.cutting_cost = fabrication.cutting_cost
    result.welding_cost = fabrication.welding_cost
    result.surface_treatment_cost = fabrication.surface_treatment_cost

    unit_cost = result.material_cost + fabrication.total
    result.cost_per_unit = unit_cost
    result.total_cost = unit_cost * quantity
    result.total_weight = result.weight * quantity if result.weight is not None else None

    for custom in shape.custom_formulas:
        try:
            result.custom_results[custom.name] = evaluate_formula(
                custom.formula, parameter_map, density
            )
        except FormulaError as e:
            result.errors.append(f"Custom formula '{custom.name}': {e}")

    return result


def validate_parameter_values(
    shape: Shape, parameter_values: Sequence[ParameterValue]
) -> ParameterValidation:
    """校验参数：必填、最小值、最大值；未知参数只告警"""
    errors: list[str] = []
    warnings: list[str] = []
    provided = {value.name: value for value in parameter_values}

    for parameter in shape.parameters:
        supplied = provided.get(parameter.name)
        if supplied is None or supplied.value is None:
            if parameter.required:
                errors.append(
                    f"Required parameter '{parameter.label}' ({parameter.name}) is missing"
                )
            continue

        number = _to_number(supplied.value)
        if number is None:
            continue
        if parameter.min_value is not None and number < parameter.min_value:
            errors.append(
                f"Parameter '{parameter.label}' value {number:g} is below minimum "
                f"{parameter.min_value:g}"
            )
        if parameter.max_value is not None and number > parameter.max_value:
            errors.append(
                f"Parameter '{parameter.label}' value {number:g} is above maximum "
                f"{parameter.max_value:g}"
            )

    known = {parameter.name for parameter in shape.parameters}
    for value in parameter_values:
        if value.name not in known:
            warnings.append(f"Unknown parameter '{value.name}' provided")

    return ParameterValidation(is_valid=not errors, errors=errors, warnings=warnings)


__all__ = [
    "BlankCalculationResult",
    "FabricationCostBreakdown",
    "ParameterValidation",
    "ShapeCalculationResult",
    "build_parameter_map",
    "calculate_blank_dimensions",
    "calculate_fabrication_costs",
    "calculate_shape",
    "validate_parameter_values",
]
