"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from src.domain.value_objects.calculation_method import (
    CalculationMethod,
    CustomFormula,
    FixedAmount,
    PercentageOfMaterial,
    PercentageOfTotal,
    PerUnit,
)
from src.domain.value_objects.formula_definition import ExpectedRange, FormulaDefinition
from src.domain.value_objects.money import Money, format_money
from src.domain.value_objects.permission_flag import PermissionFlag, has_permission
from src.domain.value_objects.workflow_status import (
    GoodsReceiptStatus,
    OfferStatus,
    PackingListStatus,
    ProposalStatus,
    PurchaseOrderStatus,
    PurchaseRequestStatus,
)

__all__ = [
    "CalculationMethod",
    "CustomFormula",
    "ExpectedRange",
    "FixedAmount",
    "FormulaDefinition",
    "GoodsReceiptStatus",
    "Money",
    "OfferStatus",
    "PackingListStatus",
    "PerUnit",
    "PercentageOfMaterial",
    "PercentageOfTotal",
    "PermissionFlag",
    "ProposalStatus",
    "PurchaseOrderStatus",
    "PurchaseRequestStatus",
    "format_money",
    "has_permission",
]
