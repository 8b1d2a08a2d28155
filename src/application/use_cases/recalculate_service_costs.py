"""RecalculateServiceCostsUseCase - 批量重算 BOM 服务成本

业务场景：
材料价格或服务费率变化后，对整张物料清单重新计算服务成本

执行方式（尽力而为的扇出）：
- 每个条目相互独立
- 单个条目失败只记录为失败结果，不取消其他条目
- 返回全部条目的结果（成功或失败），顺序与输入一致
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from src.config import settings
from src.domain.entities.bom_item import BOMItem
from src.domain.services.service_cost_calculator import (
    AggregatedServiceCost,
    calculate_all_service_costs,
)

logger = logging.getLogger(__name__)


@dataclass
class ItemCostOutcome:
    item_id: str
    success: bool
    result: AggregatedServiceCost | None = None
    error: str | None = None


class RecalculateServiceCostsUseCase:
    """批量重算服务成本

    参数：
        default_currency: 条目未指定币种时使用的币种（默认取 settings.default_currency）
    """

    def __init__(self, default_currency: str | None = None):
        self.default_currency = default_currency or settings.default_currency

    def execute(self, items: Sequence[BOMItem]) -> list[ItemCostOutcome]:
        outcomes: list[ItemCostOutcome] = []
        for item in items:
            try:
                result = calculate_all_service_costs(
                    item.services,
                    item.material_cost,
                    item.fabrication_cost,
                    item.quantity,
                    item.currency or self.default_currency,
                )
            except Exception as e:
                logger.exception("Service cost recalculation failed for item %s", item.id)
                outcomes.append(ItemCostOutcome(item_id=item.id, success=False, error=str(e)))
                continue
            outcomes.append(ItemCostOutcome(item_id=item.id, success=True, result=result))

        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info("Recalculated service costs for %d items (%d failed)", len(outcomes), failed)
        return outcomes
