"""Domain 实体

导出所有领域实体，方便其他模块导入
"""

from src.domain.entities.bom_item import (
    BOMItem,
    BOMItemService,
    ItemClassification,
    ServiceApplicability,
)
from src.domain.entities.shape import (
    BlankDefinition,
    BlankType,
    FabricationCost,
    Material,
    NamedFormula,
    ParameterValue,
    Shape,
    ShapeParameter,
)

__all__ = [
    "BOMItem",
    "BOMItemService",
    "BlankDefinition",
    "BlankType",
    "FabricationCost",
    "ItemClassification",
    "Material",
    "NamedFormula",
    "ParameterValue",
    "ServiceApplicability",
    "Shape",
    "ShapeParameter",
]
