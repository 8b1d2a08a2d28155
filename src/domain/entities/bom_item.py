"""BOM 条目与其附加服务

业务定义：
- BOMItem 是物料清单中的一行：单件材料成本、单件加工成本、数量
- 一个 BOMItem 可以挂多个服务（检验、喷涂、运输……）
- 每个服务有自己的计算方式（见 CalculationMethod）

设计原则：
- 纯 Python dataclass，不依赖存储
- 成本重算时只读，不修改实体
"""

from dataclasses import dataclass, field

from src.domain.exceptions import DomainError
from src.domain.value_objects.calculation_method import CalculationMethod


@dataclass(frozen=True)
class ServiceApplicability:
    """服务适用范围；三个列表都为空时适用于所有条目"""

    applicable_to_categories: tuple[str, ...] = ()
    applicable_to_item_types: tuple[str, ...] = ()
    applicable_to_component_types: tuple[str, ...] = ()

    @property
    def has_rules(self) -> bool:
        return bool(
            self.applicable_to_categories
            or self.applicable_to_item_types
            or self.applicable_to_component_types
        )


@dataclass(frozen=True)
class ItemClassification:
    """条目的分类属性，未设置的属性不参与排除"""

    category: str | None = None
    item_type: str | None = None
    component_type: str | None = None


@dataclass(frozen=True)
class BOMItemService:
    """挂在 BOM 条目上的服务

    属性说明：
    - service_id / service_name / service_category: 服务标识
    - calculation_method: 计算方式（带各自需要的字段）
    - is_overridden: 费率是否在条目上被覆盖
    """

    service_id: str
    service_name: str
    calculation_method: CalculationMethod
    service_category: str | None = None
    is_overridden: bool = False


@dataclass
class BOMItem:
    """物料清单条目"""

    id: str
    name: str
    quantity: float
    material_cost: float
    fabrication_cost: float = 0.0
    currency: str | None = None
    services: list[BOMItemService] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise DomainError("BOM item id 不能为空")
        if self.quantity < 0:
            raise DomainError(f"BOM item {self.id} quantity 不能为负数")
