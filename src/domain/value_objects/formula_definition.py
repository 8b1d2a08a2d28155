"""FormulaDefinition 值对象 - 形状目录中的一条计算公式

业务定义：
- 形状（板材、管件、封头……）的体积、面积、重量、下料尺寸都由公式给出
- 公式声明自己用到的参数名、结果单位、是否需要材料密度
- 可以给出期望范围，超出时只告警不报错
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExpectedRange:
    min: float | None = None
    max: float | None = None
    warning: str | None = None

    def contains(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class FormulaDefinition:
    """一条公式

    属性说明：
    - expression: 表达式（安全求值器语法）
    - variables: 必须由上下文提供的参数名
    - unit: 结果单位（如 "mm³"、"kg"）
    - requires_density: 为 True 时绑定材料密度变量 density
    - expected_range: 期望范围（可选）

    示例：
        weight = FormulaDefinition(
            expression="L * W * t * density / 1000000000",
            variables=("L", "W", "t"),
            unit="kg",
            requires_density=True,
        )
    """

    expression: str
    variables: tuple[str, ...] = field(default_factory=tuple)
    unit: str = ""
    description: str = ""
    requires_density: bool = False
    expected_range: ExpectedRange | None = None
