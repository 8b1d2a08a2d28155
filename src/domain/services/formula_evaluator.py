"""安全公式求值器 (Formula Evaluator)

业务定义：
- 服务成本的自定义公式、形状尺寸/重量公式都来自用户可编辑的配置
- 需要在调用方提供的数值变量上求值算术公式
- 绝不执行宿主语言代码（不使用 eval/exec），杜绝公式注入

语法（优先级从低到高）：
    expression   := addSub
    addSub       := mulDiv (('+'|'-') mulDiv)*
    mulDiv       := unary (('*'|'/') unary)*
    unary        := ('+'|'-')? primary
    primary      := number | identifier | functionCall | '(' expression ')'
    functionCall := ('min'|'max'|'abs'|'round'|'ceil'|'floor')
                    '(' expression (',' expression)* ')'

实现策略：
1. tokenize(): 单遍扫描，把字符串切成 token
2. parse(): 递归下降，一个 token 的前瞻，生成不可变语法树
3. evaluate_node(): 在变量映射上遍历语法树求值
4. evaluate(): 校验结果是有限数

失败（全部为 FormulaError 子类）：
- 非法字符 → FormulaTokenizeError
- 结构错误、未知函数、嵌套过深 → FormulaParseError
- 未知变量 → UnknownVariableError（解析完成后、求值时才检查）
- 除数为 0 → FormulaDivisionByZeroError
- NaN / 无穷大 → NonFiniteResultError

使用示例：
    evaluate("2 + 3 * 4", {})  # 14.0
    evaluate("materialCost * 0.1", {"materialCost": 200})  # 20.0
    evaluate("max(1, 2, 3)", {})  # 3.0
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Union

from src.config import settings
from src.domain.exceptions import (
    FormulaDivisionByZeroError,
    FormulaError,
    FormulaParseError,
    FormulaTokenizeError,
    NonFiniteResultError,
    UnknownFunctionError,
    UnknownVariableError,
)

OPERATOR_CHARS = "+-*/"
PUNCTUATION_CHARS = "(),"

MULTI_ARG_FUNCTIONS = frozenset({"min", "max"})
SINGLE_ARG_FUNCTIONS = frozenset({"abs", "round", "ceil", "floor"})
SUPPORTED_FUNCTIONS = MULTI_ARG_FUNCTIONS | SINGLE_ARG_FUNCTIONS

# 括号与函数调用的最大嵌套层数
MAX_NESTING_DEPTH = 100


class TokenType(str, Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


# ==================== 语法树 ====================


@dataclass(frozen=True)
class NumberNode:
    value: float


@dataclass(frozen=True)
class VariableNode:
    name: str


@dataclass(frozen=True)
class UnaryNode:
    operator: str
    operand: "FormulaNode"


@dataclass(frozen=True)
class BinaryNode:
    operator: str
    left: "FormulaNode"
    right: "FormulaNode"


@dataclass(frozen=True)
class FunctionCallNode:
    name: str
    arguments: tuple["FormulaNode", ...]


FormulaNode = Union[NumberNode, VariableNode, UnaryNode, BinaryNode, FunctionCallNode]


# ==================== 词法分析 ====================


def _is_identifier_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_identifier_part(char: str) -> bool:
    return _is_identifier_start(char) or ("0" <= char <= "9")


def _is_number_part(char: str) -> bool:
    return char == "." or ("0" <= char <= "9")


def tokenize(expression: str) -> list[Token]:
    """把表达式切分为 token 序列

    - 空白跳过
    - + - * / ( ) , 各自成为单字符 token
    - 数字与小数点的连续串为数字（无指数、无符号，符号由 unary 处理）
    - [a-zA-Z_][a-zA-Z0-9_]* 为标识符

    抛出：
        FormulaTokenizeError: 遇到其他任何字符
    """
    tokens: list[Token] = []
    i = 0
    length = len(expression)

    while i < length:
        char = expression[i]

        if char.isspace():
            i += 1
            continue

        if char in OPERATOR_CHARS:
            tokens.append(Token(TokenType.OPERATOR, char, i))
            i += 1
            continue

        if char in PUNCTUATION_CHARS:
            tokens.append(Token(TokenType.PUNCTUATION, char, i))
            i += 1
            continue

        if _is_number_part(char):
            start = i
            while i < length and _is_number_part(expression[i]):
                i += 1
            tokens.append(Token(TokenType.NUMBER, expression[start:i], start))
            continue

        if _is_identifier_start(char):
            start = i
            while i < length and _is_identifier_part(expression[i]):
                i += 1
            tokens.append(Token(TokenType.IDENTIFIER, expression[start:i], start))
            continue

        raise FormulaTokenizeError(f"Invalid character in expression: {char}")

    return tokens


# ==================== 语法分析 ====================


class _Parser:
    """递归下降解析器，每条语法规则一个方法"""

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _peek_text(self) -> str | None:
        token = self._peek()
        return token.text if token is not None else None

    def _consume(self) -> Token:
        token = self._peek()
        if token is None:
            raise FormulaParseError("Unexpected end of expression")
        self._pos += 1
        return token

    def _expect_closing(self, message: str) -> None:
        if self._peek_text() != ")":
            raise FormulaParseError(message)
        self._consume()

    def _descend(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise FormulaParseError("Expression is too deeply nested")

    def parse(self) -> FormulaNode:
        node = self._parse_expression()
        trailing = self._peek()
        if trailing is not None:
            raise FormulaParseError(f"Unexpected token: {trailing.text}")
        return node

    def _parse_expression(self) -> FormulaNode:
        return self._parse_add_sub()

    def _parse_add_sub(self) -> FormulaNode:
        left = self._parse_mul_div()
        while self._peek_text() in ("+", "-"):
            operator = self._consume().text
            right = self._parse_mul_div()
            left = BinaryNode(operator, left, right)
        return left

    def _parse_mul_div(self) -> FormulaNode:
        left = self._parse_unary()
        while self._peek_text() in ("*", "/"):
            operator = self._consume().text
            right = self._parse_unary()
            left = BinaryNode(operator, left, right)
        return left

    def _parse_unary(self) -> FormulaNode:
        if self._peek_text() in ("+", "-"):
            operator = self._consume().text
            return UnaryNode(operator, self._parse_primary())
        return self._parse_primary()

    def _parse_primary(self) -> FormulaNode:
        token = self._peek()
        if token is None:
            raise FormulaParseError("Unexpected end of expression")

        if token.text == "(":
            self._consume()
            self._descend()
            node = self._parse_expression()
            self._expect_closing("Missing closing parenthesis")
            self._depth -= 1
            return node

        if token.type is TokenType.NUMBER:
            self._consume()
            try:
                return NumberNode(float(token.text))
            except ValueError as e:
                raise FormulaParseError(f"Invalid number: {token.text}") from e

        if token.type is TokenType.IDENTIFIER:
            if token.text in SUPPORTED_FUNCTIONS:
                return self._parse_function_call()
            self._consume()
            next_token = self._peek()
            if next_token is not None and next_token.text == "(":
                raise UnknownFunctionError(token.text)
            return VariableNode(token.text)

        raise FormulaParseError(f"Unexpected token: {token.text}")

    def _parse_function_call(self) -> FunctionCallNode:
        name = self._consume().text
        if self._consume().text != "(":
            raise FormulaParseError(f"Expected '(' after function {name}")

        self._descend()
        arguments = [self._parse_expression()]
        while self._peek_text() == ",":
            self._consume()
            arguments.append(self._parse_expression())

        self._expect_closing(f"Missing closing parenthesis for function {name}")
        self._depth -= 1

        if name in SINGLE_ARG_FUNCTIONS and len(arguments) != 1:
            raise FormulaParseError(f"Function {name} takes exactly one argument")

        return FunctionCallNode(name, tuple(arguments))


def parse(expression: str, *, max_length: int | None = None) -> FormulaNode:
    """解析表达式为语法树

    参数：
        expression: 公式字符串
        max_length: 允许的最大长度（默认取 settings.max_formula_length）

    抛出：
        FormulaTokenizeError / FormulaParseError
    """
    limit = settings.max_formula_length if max_length is None else max_length
    if len(expression) > limit:
        raise FormulaParseError(f"Formula exceeds maximum length of {limit} characters")
    return _Parser(tokenize(expression)).parse()


# ==================== 求值 ====================


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def _ceil(value: float) -> float:
    return float(math.ceil(value)) if math.isfinite(value) else value


def _floor(value: float) -> float:
    return float(math.floor(value)) if math.isfinite(value) else value


_SINGLE_ARG_IMPLEMENTATIONS = {
    "abs": abs,
    "round": _round_half_up,
    "ceil": _ceil,
    "floor": _floor,
}


def _apply_binary(operator: str, left_value: float, right_value: float) -> float:
    if operator == "+":
        return left_value + right_value
    if operator == "-":
        return left_value - right_value
    if operator == "*":
        return left_value * right_value
    if right_value == 0:
        raise FormulaDivisionByZeroError()
    return left_value / right_value


def _evaluate_binary_chain(node: BinaryNode, variables: Mapping[str, float]) -> float:
    """沿左侧链迭代求值，链长不受递归深度限制"""
    pending: list[BinaryNode] = []
    current: FormulaNode = node
    while isinstance(current, BinaryNode):
        pending.append(current)
        current = current.left

    value = evaluate_node(current, variables)
    for binary in reversed(pending):
        value = _apply_binary(binary.operator, value, evaluate_node(binary.right, variables))
    return value


def evaluate_node(node: FormulaNode, variables: Mapping[str, float]) -> float:
    """在变量映射上对语法树求值"""
    match node:
        case NumberNode(value=value):
            return value
        case VariableNode(name=name):
            if name not in variables:
                raise UnknownVariableError(name)
            return float(variables[name])
        case UnaryNode(operator=operator, operand=operand):
            value = evaluate_node(operand, variables)
            return -value if operator == "-" else value
        case BinaryNode():
            return _evaluate_binary_chain(node, variables)
        case FunctionCallNode(name=name, arguments=arguments):
            values = [evaluate_node(argument, variables) for argument in arguments]
            if name == "min":
                return min(values)
            if name == "max":
                return max(values)
            return _SINGLE_ARG_IMPLEMENTATIONS[name](values[0])
    raise FormulaError(f"Unsupported formula node: {node!r}")


def evaluate(
    expression: str,
    variables: Mapping[str, float],
    *,
    max_length: int | None = None,
) -> float:
    """求值公式

    参数：
        expression: 公式字符串
        variables: 变量名 → 数值（每次调用由调用方构建）
        max_length: 允许的最大长度（可选）

    返回：
        有限的浮点结果

    抛出：
        FormulaError 的各个子类
    """
    result = evaluate_node(parse(expression, max_length=max_length), variables)
    if not math.isfinite(result):
        raise NonFiniteResultError()
    return result


def extract_variables(expression: str) -> list[str]:
    """提取表达式中作为变量使用的标识符（去重，按首次出现顺序，不含函数名）"""
    names: list[str] = []
    stack: list[FormulaNode] = [parse(expression)]

    while stack:
        match stack.pop():
            case VariableNode(name=name):
                if name not in names:
                    names.append(name)
            case UnaryNode(operand=operand):
                stack.append(operand)
            case BinaryNode(left=left, right=right):
                stack.extend((right, left))
            case FunctionCallNode(arguments=arguments):
                stack.extend(reversed(arguments))

    return names


def validate_formula_syntax(expression: str) -> bool:
    """校验公式语法，不求值

    抛出：
        FormulaParseError: "Invalid formula syntax: ..."
    """
    try:
        parse(expression)
    except FormulaError as e:
        raise FormulaParseError(f"Invalid formula syntax: {e}") from e
    return True


__all__ = [
    "BinaryNode",
    "FormulaNode",
    "FunctionCallNode",
    "MAX_NESTING_DEPTH",
    "NumberNode",
    "SUPPORTED_FUNCTIONS",
    "Token",
    "TokenType",
    "UnaryNode",
    "VariableNode",
    "evaluate",
    "evaluate_node",
    "extract_variables",
    "parse",
    "tokenize",
    "validate_formula_syntax",
]
