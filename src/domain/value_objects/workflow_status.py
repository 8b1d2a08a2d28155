"""工作流状态枚举 - 采购/报价等业务单据的状态域

每个枚举是一个封闭的状态集合，对应一台状态机（见
src/domain/services/workflow_state_machines.py）。

继承 str：可以直接和持久化层读出的字符串比较，也方便序列化。
"""

from enum import Enum


class PurchaseOrderStatus(str, Enum):
    """采购订单状态"""

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ISSUED = "ISSUED"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    IN_PROGRESS = "IN_PROGRESS"
    AMENDED = "AMENDED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ProposalStatus(str, Enum):
    """报价/方案状态"""

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    SUBMITTED = "SUBMITTED"
    UNDER_NEGOTIATION = "UNDER_NEGOTIATION"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class GoodsReceiptStatus(str, Enum):
    """收货单状态"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    ISSUES_FOUND = "ISSUES_FOUND"
    COMPLETED = "COMPLETED"


class OfferStatus(str, Enum):
    """供应商报价状态"""

    UPLOADED = "UPLOADED"
    UNDER_REVIEW = "UNDER_REVIEW"
    EVALUATED = "EVALUATED"
    SELECTED = "SELECTED"
    PO_CREATED = "PO_CREATED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class PackingListStatus(str, Enum):
    """装箱单状态"""

    DRAFT = "DRAFT"
    FINALIZED = "FINALIZED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


class PurchaseRequestStatus(str, Enum):
    """采购申请状态"""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CONVERTED_TO_RFQ = "CONVERTED_TO_RFQ"
