"""Money 值对象 - 金额 + 币种

设计原则：
- 值对象：不可变，通过值比较相等性
- 金额使用 float，与公式求值器的浮点语义一致
"""

from dataclasses import dataclass

CURRENCY_SYMBOLS: dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AED": "AED ",
    "SGD": "S$",
}


@dataclass(frozen=True)
class Money:
    """金额

    示例：
    >>> Money(amount=20.0, currency="INR") == Money(amount=20.0, currency="INR")
    True
    """

    amount: float
    currency: str

    def times(self, factor: float) -> "Money":
        return Money(amount=self.amount * factor, currency=self.currency)

    def __str__(self) -> str:
        return format_money(self.amount, self.currency)


def format_money(amount: float, currency: str) -> str:
    """格式化金额用于展示

    已知币种使用符号前缀，未知币种使用 ISO 代码前缀；
    千分位分隔，保留两位小数。

    >>> format_money(1234.5, "INR")
    '₹1,234.50'
    >>> format_money(-5, "XYZ")
    '-XYZ 5.00'
    """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
