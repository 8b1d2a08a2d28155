"""服务成本计算引擎 (Service Cost Calculator)

业务定义：
- 为 BOM 条目上的每个服务计算单件成本和总成本
- 支持：材料成本百分比、总成本百分比、固定金额、单位费率、自定义公式
- 每个服务产出一条可读的计算明细（breakdown）

错误边界：
- 自定义公式的任何求值失败都在这里捕获：记录日志，成本退化为 0，
  错误信息写入明细，不影响同一条目上的其他服务
- calculate_all_service_costs 中单个服务抛出的异常同样被记录并跳过
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from src.domain.entities.bom_item import BOMItemService, ItemClassification, ServiceApplicability
from src.domain.exceptions import DomainError, FormulaError
from src.domain.services.formula_evaluator import evaluate
from src.domain.value_objects.calculation_method import (
    CalculationMethod,
    CustomFormula,
    FixedAmount,
    PercentageOfMaterial,
    PercentageOfTotal,
    PerUnit,
    rate_of,
)
from src.domain.value_objects.money import Money, format_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceCostInput:
    service: BOMItemService
    material_cost: float
    fabrication_cost: float
    quantity: float
    currency: str


@dataclass(frozen=True)
class ServiceCostBreakdown:
    """单个服务的计算明细"""

    service_id: str
    service_name: str
    service_category: str | None
    calculation_method: str
    rate_applied: float
    base_cost: Money | None
    cost_per_unit: Money
    total_cost: Money
    calculation_details: str
    is_overridden: bool
    calculated_at: datetime


@dataclass(frozen=True)
class ServiceCostResult:
    service_id: str
    service_name: str
    cost_per_unit: Money
    total_cost: Money
    breakdown: ServiceCostBreakdown


@dataclass(frozen=True)
class AggregatedServiceCost:
    """一个 BOM 条目上全部服务的汇总"""

    service_cost_per_unit: Money
    total_service_cost: Money
    service_breakdown: list[ServiceCostBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class _MethodOutcome:
    cost_per_unit: float
    calculation_details: str
    base_cost: Money | None = None


def _percentage_of_material(
    percentage: float, material_cost: float, currency: str
) -> _MethodOutcome:
    cost = material_cost * percentage / 100
    return _MethodOutcome(
        cost_per_unit=cost,
        base_cost=Money(material_cost, currency),
        calculation_details=(
            f"{percentage:g}% of material cost ({format_money(material_cost, currency)}) "
            f"= {format_money(cost, currency)}"
        ),
    )


def _percentage_of_total(
    percentage: float, material_cost: float, fabrication_cost: float, currency: str
) -> _MethodOutcome:
    total = material_cost + fabrication_cost
    cost = total * percentage / 100
    return _MethodOutcome(
        cost_per_unit=cost,
        base_cost=Money(total, currency),
        calculation_details=(
            f"{percentage:g}% of total cost ({format_money(total, currency)}) "
            f"= {format_money(cost, currency)}"
        ),
    )


def _custom_formula(
    formula: str,
    material_cost: float,
    fabrication_cost: float,
    quantity: float,
    currency: str,
    service_id: str,
) -> _MethodOutcome:
    """求值自定义公式

    可用变量：materialCost、fabricationCost、quantity、total（= materialCost + fabricationCost）
    示例："materialCost * 0.05 + fabricationCost * 0.03"、"quantity * 100"
    """
    if not formula or not formula.strip():
        logger.warning("Empty custom formula provided", extra={"service_id": service_id})
        return _MethodOutcome(cost_per_unit=0.0, calculation_details="Error: Empty formula")

    variables = {
        "materialCost": material_cost,
        "fabricationCost": fabrication_cost,
        "quantity": quantity,
        "total": material_cost + fabrication_cost,
    }
    try:
        result = evaluate(formula, variables)
    except FormulaError as e:
        logger.error(
            "Error evaluating custom formula: %s",
            e,
            extra={"formula": formula, "service_id": service_id},
        )
        return _MethodOutcome(
            cost_per_unit=0.0, calculation_details=f"Error evaluating formula: {e}"
        )

    return _MethodOutcome(
        cost_per_unit=result,
        calculation_details=f"Custom formula: {formula} = {format_money(result, currency)}",
    )


def _calculate_method(
    method: CalculationMethod,
    material_cost: float,
    fabrication_cost: float,
    quantity: float,
    currency: str,
    service_id: str,
) -> _MethodOutcome:
    match method:
        case PercentageOfMaterial(percentage=percentage):
            return _percentage_of_material(percentage, material_cost, currency)
        case PercentageOfTotal(percentage=percentage):
            return _percentage_of_total(percentage, material_cost, fabrication_cost, currency)
        case FixedAmount(amount=amount, currency=rate_currency):
            display_currency = rate_currency or currency
            return _MethodOutcome(
                cost_per_unit=amount,
                calculation_details=(
                    f"Fixed amount: {format_money(amount, display_currency)} per item"
                ),
            )
        case PerUnit(rate=rate, currency=rate_currency):
            display_currency = rate_currency or currency
            return _MethodOutcome(
                cost_per_unit=rate,
                calculation_details=f"Rate: {format_money(rate, display_currency)} per unit",
            )
        case CustomFormula(formula=formula):
            return _custom_formula(
                formula, material_cost, fabrication_cost, quantity, currency, service_id
            )
    raise DomainError(f"Unknown calculation method: {method!r}")


def calculate_service_cost(input_data: ServiceCostInput) -> ServiceCostResult:
    """计算单个服务的成本

    参数：
        input_data: 服务 + 单件材料成本 + 单件加工成本 + 数量 + 币种

    返回：
        ServiceCostResult（单件成本、总成本、明细）

    抛出：
        DomainError: 计算方式不受支持
    """
    service = input_data.service
    currency = input_data.currency
    outcome = _calculate_method(
        service.calculation_method,
        input_data.material_cost,
        input_data.fabrication_cost,
        input_data.quantity,
        currency,
        service.service_id,
    )

    cost_per_unit = Money(outcome.cost_per_unit, currency)
    total_cost = cost_per_unit.times(input_data.quantity)
    breakdown = ServiceCostBreakdown(
        service_id=service.service_id,
        service_name=service.service_name,
        service_category=service.service_category,
        calculation_method=service.calculation_method.method_name,
        rate_applied=rate_of(service.calculation_method),
        base_cost=outcome.base_cost,
        cost_per_unit=cost_per_unit,
        total_cost=total_cost,
        calculation_details=outcome.calculation_details,
        is_overridden=service.is_overridden,
        calculated_at=datetime.now(),
    )
    return ServiceCostResult(
        service_id=service.service_id,
        service_name=service.service_name,
        cost_per_unit=cost_per_unit,
        total_cost=total_cost,
        breakdown=breakdown,
    )


def calculate_all_service_costs(
    services: Sequence[BOMItemService] | None,
    material_cost: float,
    fabrication_cost: float,
    quantity: float,
    currency: str,
) -> AggregatedServiceCost:
    """计算一个 BOM 条目上全部服务的成本

    单个服务计算失败时记录日志并继续计算其余服务。
    """
    if not services:
        return AggregatedServiceCost(
            service_cost_per_unit=Money(0.0, currency),
            total_service_cost=Money(0.0, currency),
        )

    breakdown: list[ServiceCostBreakdown] = []
    total_per_unit = 0.0

    for service in services:
        try:
            result = calculate_service_cost(
                ServiceCostInput(
                    service=service,
                    material_cost=material_cost,
                    fabrication_cost=fabrication_cost,
                    quantity=quantity,
                    currency=currency,
                )
            )
        except DomainError as e:
            logger.error(
                "Error calculating service cost: %s", e, extra={"service_id": service.service_id}
            )
            continue
        except Exception:
            logger.exception(
                "Error calculating service cost for %s",
                service.service_id,
                extra={"service_id": service.service_id},
            )
            continue
        breakdown.append(result.breakdown)
        total_per_unit += result.cost_per_unit.amount

    return AggregatedServiceCost(
        service_cost_per_unit=Money(total_per_unit, currency),
        total_service_cost=Money(total_per_unit * quantity, currency),
        service_breakdown=breakdown,
    )


def can_apply_service_to_item(rules: ServiceApplicability, item: ItemClassification) -> bool:
    """判断服务是否适用于条目

    - 没有任何规则：适用
    - 某维度有规则且条目设置了该属性：属性必须在列表中
    """
    if not rules.has_rules:
        return True

    checks = (
        (rules.applicable_to_categories, item.category),
        (rules.applicable_to_item_types, item.item_type),
        (rules.applicable_to_component_types, item.component_type),
    )
    for allowed, value in checks:
        if allowed and value and value not in allowed:
            return False
    return True


__all__ = [
    "AggregatedServiceCost",
    "ServiceCostBreakdown",
    "ServiceCostInput",
    "ServiceCostResult",
    "calculate_all_service_costs",
    "calculate_service_cost",
    "can_apply_service_to_item",
]
