"""Pytest 配置文件 - 全局 fixtures"""

import logging

import pytest

from src.domain.entities.shape import Material
from src.domain.value_objects.formula_definition import FormulaDefinition


@pytest.fixture
def steel() -> Material:
    """示例材料：碳钢（密度 7850 kg/m³，单价 80/kg）"""
    return Material(id="mat-cs", name="Carbon Steel", density=7850.0, price_per_kg=80.0)


@pytest.fixture
def plate_formulas() -> dict[str, FormulaDefinition]:
    """矩形板的标准公式（L × W × t，单位 mm）"""
    return {
        "volume": FormulaDefinition(
            expression="L * W * t", variables=("L", "W", "t"), unit="mm³"
        ),
        "surfaceArea": FormulaDefinition(
            expression="2 * L * W", variables=("L", "W"), unit="mm²"
        ),
        "weight": FormulaDefinition(
            expression="L * W * t * density / 1000000000",
            variables=("L", "W", "t"),
            unit="kg",
            requires_density=True,
        ),
        "edgeLength": FormulaDefinition(
            expression="2 * (L + W)", variables=("L", "W"), unit="mm"
        ),
    }


@pytest.fixture(autouse=True)
def reset_root_logger():
    """每个测试后移除 configure_logging 安装的处理器，恢复根 logger 级别"""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_erp_costing_handler", False):
            root.removeHandler(handler)
    root.setLevel(level)
