"""形状公式引擎 (Shape Formula Engine)

业务定义：
- 在形状参数（如 L、W、t、OD）上求值 FormulaDefinition
- 常量 pi 总是可用；density 只在 requires_density 时绑定
- 批量求值采用“尽力而为”：一条公式失败不影响其他公式

变量绑定每次调用重建，不做缓存。
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from src.domain.exceptions import FormulaError, MissingVariablesError
from src.domain.services.formula_evaluator import evaluate
from src.domain.value_objects.formula_definition import FormulaDefinition

logger = logging.getLogger(__name__)

PI_VARIABLE = "pi"
DENSITY_VARIABLE = "density"


@dataclass(frozen=True)
class FormulaResult:
    """单条公式的求值结果

    属性说明：
    - result: 数值结果
    - unit: 单位
    - expression: 原始表达式
    - variables: 实际使用的变量绑定（不含常量 pi）
    - range_warning: 超出期望范围时的告警文案
    """

    result: float
    unit: str
    expression: str
    variables: dict[str, float] = field(default_factory=dict)
    range_warning: str | None = None


@dataclass(frozen=True)
class FormulaOutcome:
    """带错误信息的求值结果，result 与 error 二者有且只有一个"""

    result: FormulaResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


def _format_number(value: float | None) -> str:
    return "-∞" if value is None else f"{value:g}"


def _build_bindings(
    formula: FormulaDefinition,
    context: Mapping[str, float],
    density: float | None,
) -> dict[str, float]:
    missing = [name for name in formula.variables if name not in context]
    if missing:
        raise MissingVariablesError(missing)

    bindings = {name: float(value) for name, value in context.items()}
    if formula.requires_density:
        if density is None:
            raise MissingVariablesError(
                [DENSITY_VARIABLE], "Material density is required for this formula"
            )
        bindings[DENSITY_VARIABLE] = float(density)
    return bindings


def evaluate_formula(
    formula: FormulaDefinition,
    context: Mapping[str, float],
    density: float | None = None,
) -> FormulaResult:
    """求值一条形状公式

    参数：
        formula: 公式定义
        context: 参数名 → 数值
        density: 材料密度（kg/m³），requires_density 时必需

    返回：
        FormulaResult

    抛出：
        MissingVariablesError: 声明的变量或密度缺失
        FormulaError: 求值失败
    """
    bindings = _build_bindings(formula, context, density)
    result = evaluate(formula.expression, {**bindings, PI_VARIABLE: math.pi})

    range_warning = None
    expected = formula.expected_range
    if expected is not None and not expected.contains(result):
        upper = "∞" if expected.max is None else _format_number(expected.max)
        range_warning = (
            f"Result {result:g} {formula.unit} outside expected range "
            f"[{_format_number(expected.min)}, {upper}]"
        )
        if expected.warning:
            range_warning = f"{range_warning}: {expected.warning}"
        logger.warning(range_warning, extra={"expression": formula.expression})

    return FormulaResult(
        result=result,
        unit=formula.unit,
        expression=formula.expression,
        variables=bindings,
        range_warning=range_warning,
    )


def evaluate_formulas_with_errors(
    formulas: Mapping[str, FormulaDefinition],
    context: Mapping[str, float],
    density: float | None = None,
) -> dict[str, FormulaOutcome]:
    """批量求值，失败的公式保留错误信息"""
    outcomes: dict[str, FormulaOutcome] = {}
    for name, formula in formulas.items():
        try:
            outcomes[name] = FormulaOutcome(result=evaluate_formula(formula, context, density))
        except FormulaError as e:
            logger.error(
                "Error evaluating formula %s: %s",
                name,
                e,
                extra={"formula_name": name, "formula": formula.expression},
            )
            outcomes[name] = FormulaOutcome(error=str(e))
        except Exception as e:
            logger.exception(
                "Error evaluating formula %s",
                name,
                extra={"formula_name": name, "formula": formula.expression},
            )
            outcomes[name] = FormulaOutcome(error=str(e))
    return outcomes


def evaluate_multiple_formulas(
    formulas: Mapping[str, FormulaDefinition],
    context: Mapping[str, float],
    density: float | None = None,
) -> dict[str, FormulaResult]:
    """批量求值，只返回成功的结果（失败的已记录日志并省略）"""
    return {
        name: outcome.result
        for name, outcome in evaluate_formulas_with_errors(formulas, context, density).items()
        if outcome.result is not None
    }


__all__ = [
    "FormulaOutcome",
    "FormulaResult",
    "evaluate_formula",
    "evaluate_formulas_with_errors",
    "evaluate_multiple_formulas",
]
