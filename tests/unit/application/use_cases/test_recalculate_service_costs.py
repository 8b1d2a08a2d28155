"""RecalculateServiceCostsUseCase 单元测试

验证批量重算的“尽力而为”语义：
- 每个条目独立计算，结果顺序与输入一致
- 单个条目失败只产出失败结果，不影响其他条目
"""

import logging
from unittest.mock import patch

import pytest

from src.application.use_cases.recalculate_service_costs import RecalculateServiceCostsUseCase
from src.config import settings
from src.domain.entities.bom_item import BOMItem, BOMItemService
from src.domain.services.service_cost_calculator import AggregatedServiceCost
from src.domain.value_objects.calculation_method import (
    CustomFormula,
    FixedAmount,
    PercentageOfMaterial,
)
from src.domain.value_objects.money import Money

CALCULATOR = "src.application.use_cases.recalculate_service_costs.calculate_all_service_costs"


def _item(item_id, services, currency=None, quantity=2):
    return BOMItem(
        id=item_id,
        name=item_id,
        quantity=quantity,
        material_cost=200.0,
        fabrication_cost=100.0,
        currency=currency,
        services=services,
    )


class TestRecalculateServiceCostsUseCase:
    def setup_method(self):
        self.use_case = RecalculateServiceCostsUseCase(default_currency="INR")

    def test_results_in_input_order(self):
        items = [
            _item("a", [BOMItemService("s1", "Inspection", PercentageOfMaterial(percentage=10))]),
            _item("b", []),
            _item("c", [BOMItemService("s2", "Painting", FixedAmount(amount=50))], "USD"),
        ]

        outcomes = self.use_case.execute(items)

        assert [o.item_id for o in outcomes] == ["a", "b", "c"]
        assert all(o.success for o in outcomes)
        assert outcomes[0].result.total_service_cost == Money(40.0, "INR")
        assert outcomes[1].result.total_service_cost == Money(0.0, "INR")
        assert outcomes[2].result.total_service_cost == Money(100.0, "USD")

    def test_formula_error_is_not_an_item_failure(self):
        """测试自定义公式错误在计算器内兜底，条目仍然成功"""
        items = [_item("a", [BOMItemService("s1", "Bad", CustomFormula(formula="1/0"))])]

        outcome = self.use_case.execute(items)[0]

        assert outcome.success is True
        assert outcome.result.service_cost_per_unit == Money(0.0, "INR")

    def test_unexpected_failure_is_isolated(self, caplog):
        """测试单个条目抛出意外异常时记录失败结果，继续其他条目"""
        items = [_item("a", []), _item("b", []), _item("c", [])]
        empty = AggregatedServiceCost(Money(0.0, "INR"), Money(0.0, "INR"))
        side_effect = [empty, RuntimeError("price list unavailable"), empty]

        with patch(CALCULATOR, side_effect=side_effect), caplog.at_level(logging.ERROR):
            outcomes = self.use_case.execute(items)

        assert [o.success for o in outcomes] == [True, False, True]
        assert outcomes[1].error == "price list unavailable"
        assert outcomes[1].result is None
        assert "Service cost recalculation failed for item b" in caplog.text

    def test_empty_batch(self):
        assert self.use_case.execute([]) == []

    @pytest.mark.parametrize("currency,expected", [(None, "INR"), ("EUR", "EUR")])
    def test_currency_fallback(self, currency, expected):
        outcome = self.use_case.execute([_item("a", [], currency)])[0]

        assert outcome.result.total_service_cost.currency == expected

    def test_default_currency_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "default_currency", "AED")

        outcome = RecalculateServiceCostsUseCase().execute([_item("a", [])])[0]

        assert outcome.result.total_service_cost.currency == "AED"
