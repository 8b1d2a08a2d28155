"""业务单据状态机定义

每个采购/报价类单据一台状态机，流转图和审批权限在此集中定义。
服务层在持久化新状态前调用 validate_transition / require_valid_transition。
"""

from src.domain.services.state_machine import (
    StateMachine,
    StateMachineConfig,
    create_state_machine,
    transition_key,
)
from src.domain.value_objects.permission_flag import PermissionFlag
from src.domain.value_objects.workflow_status import (
    GoodsReceiptStatus,
    OfferStatus,
    PackingListStatus,
    ProposalStatus,
    PurchaseOrderStatus,
    PurchaseRequestStatus,
)

_PO = PurchaseOrderStatus

purchase_order_state_machine: StateMachine[PurchaseOrderStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _PO.DRAFT: [_PO.PENDING_APPROVAL, _PO.CANCELLED],
            _PO.PENDING_APPROVAL: [_PO.APPROVED, _PO.REJECTED, _PO.CANCELLED],
            _PO.REJECTED: [_PO.DRAFT],
            _PO.APPROVED: [_PO.ISSUED, _PO.CANCELLED],
            _PO.ISSUED: [_PO.ACKNOWLEDGED, _PO.AMENDED, _PO.CANCELLED],
            _PO.ACKNOWLEDGED: [_PO.IN_PROGRESS, _PO.AMENDED],
            _PO.IN_PROGRESS: [_PO.COMPLETED, _PO.AMENDED],
            _PO.AMENDED: [_PO.PENDING_APPROVAL],
            _PO.COMPLETED: [],
            _PO.CANCELLED: [],
        },
        terminal_states=frozenset({_PO.COMPLETED, _PO.CANCELLED}),
        transition_permissions={
            transition_key(_PO.PENDING_APPROVAL, _PO.APPROVED): PermissionFlag.APPROVE_PO,
            transition_key(_PO.PENDING_APPROVAL, _PO.REJECTED): PermissionFlag.APPROVE_PO,
        },
    )
)

_PROP = ProposalStatus

proposal_state_machine: StateMachine[ProposalStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _PROP.DRAFT: [_PROP.PENDING_APPROVAL],
            _PROP.PENDING_APPROVAL: [_PROP.APPROVED, _PROP.DRAFT, _PROP.REJECTED],
            _PROP.APPROVED: [_PROP.SUBMITTED],
            _PROP.SUBMITTED: [
                _PROP.ACCEPTED,
                _PROP.REJECTED,
                _PROP.EXPIRED,
                _PROP.UNDER_NEGOTIATION,
            ],
            _PROP.UNDER_NEGOTIATION: [_PROP.ACCEPTED, _PROP.REJECTED, _PROP.SUBMITTED],
            _PROP.ACCEPTED: [],
            _PROP.REJECTED: [],
            _PROP.EXPIRED: [],
        },
        terminal_states=frozenset({_PROP.ACCEPTED, _PROP.REJECTED, _PROP.EXPIRED}),
        transition_permissions={
            transition_key(_PROP.PENDING_APPROVAL, _PROP.APPROVED): (
                PermissionFlag.APPROVE_ESTIMATES
            ),
            transition_key(_PROP.PENDING_APPROVAL, _PROP.REJECTED): (
                PermissionFlag.APPROVE_ESTIMATES
            ),
        },
    )
)

_GR = GoodsReceiptStatus

goods_receipt_state_machine: StateMachine[GoodsReceiptStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _GR.PENDING: [_GR.IN_PROGRESS],
            _GR.IN_PROGRESS: [_GR.COMPLETED, _GR.ISSUES_FOUND],
            _GR.ISSUES_FOUND: [_GR.IN_PROGRESS, _GR.COMPLETED],
            _GR.COMPLETED: [],
        },
        terminal_states=frozenset({_GR.COMPLETED}),
    )
)

_OFFER = OfferStatus

offer_state_machine: StateMachine[OfferStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _OFFER.UPLOADED: [_OFFER.UNDER_REVIEW, _OFFER.WITHDRAWN],
            _OFFER.UNDER_REVIEW: [_OFFER.EVALUATED, _OFFER.WITHDRAWN],
            _OFFER.EVALUATED: [_OFFER.SELECTED, _OFFER.REJECTED, _OFFER.WITHDRAWN],
            _OFFER.SELECTED: [_OFFER.PO_CREATED],
            _OFFER.PO_CREATED: [],
            _OFFER.REJECTED: [],
            _OFFER.WITHDRAWN: [],
        },
        terminal_states=frozenset({_OFFER.PO_CREATED, _OFFER.REJECTED, _OFFER.WITHDRAWN}),
    )
)

_PL = PackingListStatus

packing_list_state_machine: StateMachine[PackingListStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _PL.DRAFT: [_PL.FINALIZED],
            _PL.FINALIZED: [_PL.SHIPPED],
            _PL.SHIPPED: [_PL.DELIVERED],
            _PL.DELIVERED: [],
        },
        terminal_states=frozenset({_PL.DELIVERED}),
    )
)

_PR = PurchaseRequestStatus

purchase_request_state_machine: StateMachine[PurchaseRequestStatus] = create_state_machine(
    StateMachineConfig(
        transitions={
            _PR.DRAFT: [_PR.SUBMITTED],
            _PR.SUBMITTED: [_PR.UNDER_REVIEW, _PR.APPROVED, _PR.REJECTED],
            _PR.UNDER_REVIEW: [_PR.APPROVED, _PR.REJECTED],
            _PR.APPROVED: [_PR.CONVERTED_TO_RFQ],
            _PR.REJECTED: [_PR.DRAFT],
            _PR.CONVERTED_TO_RFQ: [],
        },
        terminal_states=frozenset({_PR.CONVERTED_TO_RFQ}),
        transition_permissions={
            transition_key(_PR.SUBMITTED, _PR.APPROVED): PermissionFlag.APPROVE_PR,
            transition_key(_PR.SUBMITTED, _PR.REJECTED): PermissionFlag.APPROVE_PR,
            transition_key(_PR.UNDER_REVIEW, _PR.APPROVED): PermissionFlag.APPROVE_PR,
            transition_key(_PR.UNDER_REVIEW, _PR.REJECTED): PermissionFlag.APPROVE_PR,
        },
    )
)


__all__ = [
    "goods_receipt_state_machine",
    "offer_state_machine",
    "packing_list_state_machine",
    "proposal_state_machine",
    "purchase_order_state_machine",
    "purchase_request_state_machine",
]
