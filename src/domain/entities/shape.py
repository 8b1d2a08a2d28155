"""Shape / Material 实体 - 形状目录与材料主数据

业务定义：
- Shape 是可参数化的零件形状（矩形板、圆板、管段……）
- 参数（ShapeParameter）由用户填写，公式（FormulaDefinition）据此求出
  体积、表面积、重量、边长、焊缝长度、下料尺寸
- Material 提供密度（kg/m³）和最新单价（每 kg）

标准公式名：
- volume, surfaceArea, innerSurfaceArea, outerSurfaceArea, wettedArea,
  weight, edgeLength, weldLength, finishedArea
"""

from dataclasses import dataclass, field
from enum import Enum

from src.domain.value_objects.formula_definition import FormulaDefinition


@dataclass(frozen=True)
class Material:
    id: str
    name: str
    density: float | None = None  # kg/m³
    price_per_kg: float = 0.0


@dataclass(frozen=True)
class ShapeParameter:
    name: str
    label: str
    unit: str = "mm"
    required: bool = True
    min_value: float | None = None
    max_value: float | None = None
    default_value: float | None = None


@dataclass(frozen=True)
class ParameterValue:
    """用户为某个参数填写的值（下拉类参数可能是字符串）"""

    name: str
    value: float | str | None


class BlankType(str, Enum):
    RECTANGULAR = "RECTANGULAR"
    CIRCULAR = "CIRCULAR"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True)
class BlankDefinition:
    """下料定义

    - blank_length / blank_width: 矩形下料的长宽公式
    - blank_diameter: 圆形下料的直径公式
    - blank_thickness: 厚度参数名
    - scrap_formula: 废料百分比公式
    """

    blank_type: BlankType
    blank_length: FormulaDefinition | None = None
    blank_width: FormulaDefinition | None = None
    blank_diameter: FormulaDefinition | None = None
    blank_thickness: str | None = None
    scrap_formula: FormulaDefinition | None = None
    description: str | None = None


@dataclass(frozen=True)
class FabricationCost:
    """加工费率：每米（坡口、切割、焊接）和每平方米（表面处理）"""

    edge_preparation_cost_per_meter: float | None = None
    cutting_cost_per_meter: float | None = None
    welding_cost_per_meter: float | None = None
    surface_treatment_cost_per_sqm: float | None = None


@dataclass(frozen=True)
class NamedFormula:
    name: str
    formula: FormulaDefinition


@dataclass
class Shape:
    id: str
    name: str
    parameters: list[ShapeParameter] = field(default_factory=list)
    formulas: dict[str, FormulaDefinition] = field(default_factory=dict)
    blank_definition: BlankDefinition | None = None
    custom_formulas: list[NamedFormula] = field(default_factory=list)
    fabrication_cost: FabricationCost | None = None
