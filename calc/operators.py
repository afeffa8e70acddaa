"""calc/operators.py"""
import numpy as np

from calc.errors import ExpressionSyntaxError

# 切分优先级：数值越大结合越松散，越先被选为切分点（树根，最后求值）
MUL_DIV_PRIORITY = 1
ADD_SUB_PRIORITY = 10


class Operators:
    """四则运算的静态方法集合，统一在 float64 上按 IEEE-754 语义计算"""

    @staticmethod
    def add(x, y):
        with np.errstate(all='ignore'):
            return np.add(np.float64(x), np.float64(y))

    @staticmethod
    def sub(x, y):
        with np.errstate(all='ignore'):
            return np.subtract(np.float64(x), np.float64(y))

    @staticmethod
    def mul(x, y):
        with np.errstate(all='ignore'):
            return np.multiply(np.float64(x), np.float64(y))

    @staticmethod
    def div(x, y):
        """除法不特殊处理除零：x/0 得到 ±inf，0/0 得到 nan"""
        with np.errstate(all='ignore'):
            return np.divide(np.float64(x), np.float64(y))


class Operator:
    def __init__(self, symbol, name, split_priority, func):
        self.symbol = symbol
        self.name = name
        self.split_priority = split_priority
        self._func = func

    def apply(self, left, right):
        return self._func(left, right)

    def __repr__(self):
        return f"Operator({self.symbol!r}, split_priority={self.split_priority})"

    def __str__(self):
        return self.symbol


# 运算符表（只读）
OPERATOR_DEFINITIONS = {
    '*': Operator('*', 'mul', MUL_DIV_PRIORITY, Operators.mul),
    '/': Operator('/', 'div', MUL_DIV_PRIORITY, Operators.div),
    '+': Operator('+', 'add', ADD_SUB_PRIORITY, Operators.add),
    '-': Operator('-', 'sub', ADD_SUB_PRIORITY, Operators.sub),
}

OPERATOR_SYMBOLS = frozenset(OPERATOR_DEFINITIONS)


def get_operator(symbol, position=None):
    """按符号查表"""
    try:
        return OPERATOR_DEFINITIONS[symbol]
    except KeyError:
        raise ExpressionSyntaxError(f"Invalid operator: {symbol!r}", position) from None
