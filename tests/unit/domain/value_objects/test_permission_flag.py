"""PermissionFlag 权限位测试"""

from src.domain.value_objects.permission_flag import PermissionFlag, has_permission


class TestPermissionFlag:
    def test_bits_are_distinct(self):
        values = [flag.value for flag in PermissionFlag]
        assert len(values) == len(set(values))
        assert all(value & (value - 1) == 0 for value in values)

    def test_combined_mask(self):
        granted = PermissionFlag.VIEW_PROCUREMENT | PermissionFlag.APPROVE_PO

        assert has_permission(granted, PermissionFlag.APPROVE_PO) is True
        assert has_permission(granted, PermissionFlag.APPROVE_PR) is False

    def test_plain_integer_mask(self):
        """测试从存储读出的整数掩码"""
        granted = int(PermissionFlag.APPROVE_ESTIMATES | PermissionFlag.MANAGE_ESTIMATES)

        assert has_permission(granted, PermissionFlag.APPROVE_ESTIMATES) is True
        assert has_permission(0, PermissionFlag.VIEW_PROCUREMENT) is False

    def test_compound_requirement_needs_all_bits(self):
        required = PermissionFlag.APPROVE_PO | PermissionFlag.APPROVE_PR

        assert has_permission(PermissionFlag.APPROVE_PO, required) is False
        assert has_permission(required, required) is True
