"""BOMItem 实体测试"""

import pytest

from src.domain.entities.bom_item import BOMItem, BOMItemService, ServiceApplicability
from src.domain.exceptions import DomainError
from src.domain.value_objects.calculation_method import FixedAmount


class TestBOMItem:
    def test_create(self):
        item = BOMItem(
            id="item-1",
            name="Shell Plate",
            quantity=2,
            material_cost=3140.0,
            services=[BOMItemService("svc-1", "Inspection", FixedAmount(amount=500))],
        )

        assert item.fabrication_cost == 0.0
        assert item.currency is None
        assert item.services[0].is_overridden is False

    @pytest.mark.parametrize("item_id", ["", "   "])
    def test_empty_id_rejected(self, item_id):
        with pytest.raises(DomainError, match="id 不能为空"):
            BOMItem(id=item_id, name="x", quantity=1, material_cost=0)

    def test_negative_quantity_rejected(self):
        with pytest.raises(DomainError, match="quantity 不能为负数"):
            BOMItem(id="item-1", name="x", quantity=-1, material_cost=0)


class TestServiceApplicability:
    def test_has_rules(self):
        assert ServiceApplicability().has_rules is False
        assert ServiceApplicability(applicable_to_item_types=("PIPE",)).has_rules is True
