"""calc/token_system.py"""
from enum import Enum

from calc.errors import ExpressionSyntaxError
from calc.operators import get_operator


class TokenType(Enum):
    NUMBER = "number"          # 数字字面量
    OPERATOR = "operator"      # 二元运算符
    GROUP = "group"            # 未归约的括号子表达式
    EXPRESSION = "expression"  # 已归约的表达式节点


class Token:
    type = None

    def __init__(self, position):
        self.position = position


class NumberToken(Token):
    type = TokenType.NUMBER

    def __init__(self, value, position):
        super().__init__(position)
        self.value = float(value)

    @classmethod
    def from_string(cls, raw_string, position):
        try:
            value = float(raw_string)
        except ValueError:
            raise ExpressionSyntaxError(f"Invalid number literal: {raw_string!r}", position) from None
        return cls(value, position)

    def __eq__(self, other):
        return isinstance(other, NumberToken) and self.value == other.value and self.position == other.position

    def __hash__(self):
        return hash((self.type, self.value, self.position))

    def __repr__(self):
        return f"NumberToken({self.value!r}, {self.position})"

    def __str__(self):
        return repr(self.value)


class OperatorToken(Token):
    type = TokenType.OPERATOR

    def __init__(self, operator, position):
        super().__init__(position)
        self.operator = operator

    @classmethod
    def from_symbol(cls, symbol, position):
        return cls(get_operator(symbol, position), position)

    @property
    def symbol(self):
        return self.operator.symbol

    @property
    def split_priority(self):
        return self.operator.split_priority

    def __eq__(self, other):
        return isinstance(other, OperatorToken) and self.symbol == other.symbol and self.position == other.position

    def __hash__(self):
        return hash((self.type, self.symbol, self.position))

    def __repr__(self):
        return f"OperatorToken({self.symbol!r}, {self.position})"

    def __str__(self):
        return self.symbol


class GroupToken(Token):
    """括号子表达式，只能通过 make_group 构造"""
    type = TokenType.GROUP

    def __init__(self, tokens, position):
        super().__init__(position)
        self.tokens = tuple(tokens)
        # 括号折叠后真正保留下来的组嵌套层数
        self.depth = 1 + max((t.depth for t in self.tokens if t.type == TokenType.GROUP), default=0)

    @property
    def is_negation(self):
        """是否为一元负号生成的 [-1 * operand] 组"""
        if len(self.tokens) != 3:
            return False
        factor, operator = self.tokens[0], self.tokens[1]
        return (factor.type == TokenType.NUMBER and factor.value == -1.0
                and operator.type == TokenType.OPERATOR and operator.symbol == '*')

    def __eq__(self, other):
        return isinstance(other, GroupToken) and self.tokens == other.tokens

    def __hash__(self):
        return hash((self.type, self.tokens))

    def __len__(self):
        return len(self.tokens)

    def __repr__(self):
        return f"GroupToken({list(self.tokens)!r}, {self.position})"

    def __str__(self):
        return f"[ {' , '.join(str(t) for t in self.tokens)} ]"


def make_group(tokens, position):
    """
    构造括号组。恰好只有一个元素时直接返回该元素，
    保证 GroupToken 永远不会只包裹一个 token
    """
    tokens = tuple(tokens)
    if len(tokens) == 1:
        return tokens[0]
    return GroupToken(tokens, position)


class ExpressionNode:
    """二叉表达式树节点；叶子为 NumberToken，已归约的子组作为 ExpressionNode 参与上层运算"""
    type = TokenType.EXPRESSION

    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    @property
    def position(self):
        return self.operator.position

    def __repr__(self):
        return f"ExpressionNode({self.left!r}, {self.operator!r}, {self.right!r})"

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


def format_tokens(tokens):
    """把 token 序列格式化成一行字符串（日志和调试用）"""
    return ' '.join(str(t) for t in tokens)
