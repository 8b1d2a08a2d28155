"""业务单据状态机定义测试

验证每台状态机的流转图、终态与审批权限，
以及状态枚举与持久化字符串之间的互通。
"""

import pytest

from src.domain.exceptions import InvalidTransitionError
from src.domain.services.state_machine import require_valid_transition
from src.domain.services.workflow_state_machines import (
    goods_receipt_state_machine,
    offer_state_machine,
    packing_list_state_machine,
    proposal_state_machine,
    purchase_order_state_machine,
    purchase_request_state_machine,
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

PO = PurchaseOrderStatus
PROP = ProposalStatus
GR = GoodsReceiptStatus
OFFER = OfferStatus
PL = PackingListStatus
PR = PurchaseRequestStatus


class TestPurchaseOrderStateMachine:
    """采购订单状态机"""

    machine = purchase_order_state_machine

    def test_draft_transitions(self):
        assert self.machine.get_available_transitions(PO.DRAFT) == [
            PO.PENDING_APPROVAL,
            PO.CANCELLED,
        ]

    def test_happy_path(self):
        """测试 草稿 → 待审批 → 已批准 → 已下达 → 已确认 → 执行中 → 已完成"""
        path = [
            PO.DRAFT,
            PO.PENDING_APPROVAL,
            PO.APPROVED,
            PO.ISSUED,
            PO.ACKNOWLEDGED,
            PO.IN_PROGRESS,
            PO.COMPLETED,
        ]
        for current, target in zip(path, path[1:]):
            assert self.machine.can_transition_to(current, target), f"{current} → {target}"

    def test_amendment_loops_back_to_approval(self):
        """测试变更后的订单重新走审批"""
        assert self.machine.can_transition_to(PO.ISSUED, PO.AMENDED)
        assert self.machine.can_transition_to(PO.AMENDED, PO.PENDING_APPROVAL)

    def test_rejected_returns_to_draft(self):
        assert self.machine.get_available_transitions(PO.REJECTED) == [PO.DRAFT]

    @pytest.mark.parametrize("status", [PO.COMPLETED, PO.CANCELLED])
    def test_terminal_states(self, status):
        assert self.machine.is_terminal(status) is True
        assert self.machine.get_available_transitions(status) == []

    def test_cannot_skip_approval(self):
        """测试草稿不能直接批准"""
        result = self.machine.validate_transition(PO.DRAFT, PO.APPROVED)

        assert result.allowed is False
        assert result.reason == "Cannot transition from DRAFT to APPROVED"

    def test_completed_cannot_be_cancelled(self):
        result = self.machine.validate_transition(PO.COMPLETED, PO.CANCELLED)

        assert result.allowed is False
        assert "terminal state COMPLETED" in result.reason

    @pytest.mark.parametrize("target", [PO.APPROVED, PO.REJECTED])
    def test_approval_requires_approve_po(self, target):
        assert self.machine.get_required_permission(PO.PENDING_APPROVAL, target) == (
            PermissionFlag.APPROVE_PO
        )

    def test_cancel_requires_no_permission(self):
        assert self.machine.get_required_permission(PO.PENDING_APPROVAL, PO.CANCELLED) is None

    def test_persisted_string_status_is_accepted(self):
        """测试持久化层读出的字符串状态可以直接查询"""
        assert self.machine.can_transition_to("DRAFT", "PENDING_APPROVAL") is True
        assert self.machine.is_terminal("COMPLETED") is True


class TestProposalStateMachine:
    """报价方案状态机"""

    machine = proposal_state_machine

    def test_submitted_transitions(self):
        assert self.machine.get_available_transitions(PROP.SUBMITTED) == [
            PROP.ACCEPTED,
            PROP.REJECTED,
            PROP.EXPIRED,
            PROP.UNDER_NEGOTIATION,
        ]

    def test_negotiation_can_resubmit(self):
        assert self.machine.can_transition_to(PROP.UNDER_NEGOTIATION, PROP.SUBMITTED)

    def test_pending_approval_can_return_to_draft(self):
        assert self.machine.can_transition_to(PROP.PENDING_APPROVAL, PROP.DRAFT)

    @pytest.mark.parametrize("status", [PROP.ACCEPTED, PROP.REJECTED, PROP.EXPIRED])
    def test_terminal_states(self, status):
        assert self.machine.is_terminal(status) is True

    def test_approval_requires_approve_estimates(self):
        assert self.machine.get_required_permission(
            PROP.PENDING_APPROVAL, PROP.APPROVED
        ) == PermissionFlag.APPROVE_ESTIMATES

    def test_require_valid_transition_message(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            require_valid_transition(self.machine, PROP.DRAFT, PROP.SUBMITTED, "Proposal")

        assert str(exc_info.value) == "Proposal: Cannot transition from DRAFT to SUBMITTED"


class TestGoodsReceiptStateMachine:
    """收货单状态机"""

    machine = goods_receipt_state_machine

    def test_issues_can_be_resolved(self):
        assert self.machine.get_available_transitions(GR.ISSUES_FOUND) == [
            GR.IN_PROGRESS,
            GR.COMPLETED,
        ]

    def test_pending_cannot_complete_directly(self):
        assert self.machine.can_transition_to(GR.PENDING, GR.COMPLETED) is False

    def test_completed_is_terminal(self):
        assert self.machine.is_terminal(GR.COMPLETED) is True

    def test_no_permissions(self):
        assert self.machine.get_required_permission(GR.PENDING, GR.IN_PROGRESS) is None


class TestOfferStateMachine:
    """供应商报价状态机"""

    machine = offer_state_machine

    def test_evaluated_transitions(self):
        assert self.machine.get_available_transitions(OFFER.EVALUATED) == [
            OFFER.SELECTED,
            OFFER.REJECTED,
            OFFER.WITHDRAWN,
        ]

    def test_selected_leads_to_po(self):
        assert self.machine.get_available_transitions(OFFER.SELECTED) == [OFFER.PO_CREATED]

    @pytest.mark.parametrize(
        "status", [OFFER.PO_CREATED, OFFER.REJECTED, OFFER.WITHDRAWN]
    )
    def test_terminal_states(self, status):
        assert self.machine.is_terminal(status) is True

    def test_selected_is_not_terminal(self):
        assert self.machine.is_terminal(OFFER.SELECTED) is False


class TestPackingListStateMachine:
    """装箱单状态机：线性流转"""

    machine = packing_list_state_machine

    def test_linear_path(self):
        assert self.machine.can_transition_to(PL.DRAFT, PL.FINALIZED)
        assert self.machine.can_transition_to(PL.FINALIZED, PL.SHIPPED)
        assert self.machine.can_transition_to(PL.SHIPPED, PL.DELIVERED)

    def test_cannot_go_backwards(self):
        result = self.machine.validate_transition(PL.SHIPPED, PL.DRAFT)

        assert result.allowed is False
        assert result.reason == "DRAFT is not a valid status for this workflow"

    def test_delivered_is_terminal(self):
        assert self.machine.is_terminal(PL.DELIVERED) is True


class TestPurchaseRequestStateMachine:
    """采购申请状态机"""

    machine = purchase_request_state_machine

    def test_submitted_transitions(self):
        assert self.machine.get_available_transitions(PR.SUBMITTED) == [
            PR.UNDER_REVIEW,
            PR.APPROVED,
            PR.REJECTED,
        ]

    def test_approved_converts_to_rfq(self):
        assert self.machine.get_available_transitions(PR.APPROVED) == [PR.CONVERTED_TO_RFQ]

    def test_rejected_returns_to_draft(self):
        assert self.machine.can_transition_to(PR.REJECTED, PR.DRAFT)

    def test_converted_is_terminal(self):
        assert self.machine.is_terminal(PR.CONVERTED_TO_RFQ) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            (PR.SUBMITTED, PR.APPROVED),
            (PR.SUBMITTED, PR.REJECTED),
            (PR.UNDER_REVIEW, PR.APPROVED),
            (PR.UNDER_REVIEW, PR.REJECTED),
        ],
    )
    def test_decisions_require_approve_pr(self, current, target):
        assert self.machine.get_required_permission(current, target) == PermissionFlag.APPROVE_PR

    def test_submit_requires_no_permission(self):
        assert self.machine.get_required_permission(PR.DRAFT, PR.SUBMITTED) is None


class TestStatusEnumsMatchMachines:
    """每个枚举成员都出现在对应状态机中"""

    @pytest.mark.parametrize(
        "enum_cls,machine",
        [
            (PurchaseOrderStatus, purchase_order_state_machine),
            (ProposalStatus, proposal_state_machine),
            (GoodsReceiptStatus, goods_receipt_state_machine),
            (OfferStatus, offer_state_machine),
            (PackingListStatus, packing_list_state_machine),
            (PurchaseRequestStatus, purchase_request_state_machine),
        ],
    )
    def test_every_member_is_known(self, enum_cls, machine):
        assert set(enum_cls) == set(machine.all_statuses)

    @pytest.mark.parametrize(
        "machine",
        [
            purchase_order_state_machine,
            proposal_state_machine,
            goods_receipt_state_machine,
            offer_state_machine,
            packing_list_state_machine,
            purchase_request_state_machine,
        ],
    )
    def test_available_transitions_are_reachable(self, machine):
        """测试任一状态的可用流转都属于流转图中的目标状态"""
        for status in machine.all_statuses:
            assert set(machine.get_available_transitions(status)) <= machine.reachable_statuses
            for target in machine.get_available_transitions(status):
                assert machine.validate_transition(status, target).allowed
