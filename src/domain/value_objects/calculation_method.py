"""CalculationMethod - 服务成本计算方式（标签联合类型）

业务定义：
- BOM 条目上的服务（检验、喷涂、运输等）按不同方式计费
- 每种方式只携带它需要的字段

变体：
- PercentageOfMaterial: 材料成本的百分比
- PercentageOfTotal: （材料 + 加工）成本的百分比
- FixedAmount: 每件固定金额
- PerUnit: 每单位费率
- CustomFormula: 自定义公式（安全求值器，变量 materialCost / fabricationCost / quantity / total）

计算器通过 match 穷举分派，新增变体时类型检查会提示遗漏分支。
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PercentageOfMaterial:
    percentage: float

    method_name = "PERCENTAGE_OF_MATERIAL"


@dataclass(frozen=True)
class PercentageOfTotal:
    percentage: float

    method_name = "PERCENTAGE_OF_TOTAL"


@dataclass(frozen=True)
class FixedAmount:
    amount: float
    currency: str | None = None  # 为空时使用计算时传入的币种

    method_name = "FIXED_AMOUNT"


@dataclass(frozen=True)
class PerUnit:
    rate: float
    currency: str | None = None

    method_name = "PER_UNIT"


@dataclass(frozen=True)
class CustomFormula:
    formula: str

    method_name = "CUSTOM_FORMULA"


CalculationMethod = Union[
    PercentageOfMaterial,
    PercentageOfTotal,
    FixedAmount,
    PerUnit,
    CustomFormula,
]


def rate_of(method: CalculationMethod) -> float:
    """返回该计算方式应用的费率（自定义公式没有费率，返回 0）"""
    match method:
        case PercentageOfMaterial(percentage=value) | PercentageOfTotal(percentage=value):
            return value
        case FixedAmount(amount=value):
            return value
        case PerUnit(rate=value):
            return value
        case CustomFormula():
            return 0.0
    raise TypeError(f"Unsupported calculation method: {method!r}")
