"""calc/errors.py"""


class CalcError(Exception):
    """表达式计算相关异常的基类"""


class ExpressionSyntaxError(CalcError, ValueError):
    """无法识别的字符、无法解析的数字字面量或括号不匹配"""

    def __init__(self, message, position=None):
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class MalformedExpressionError(CalcError, ValueError):
    """结构上缺少运算符或操作数（空操作数、悬空运算符等）"""

    def __init__(self, message, position=None):
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class InvalidOperandError(CalcError, RuntimeError):
    """求值器叶子位置出现了未归约的 token，说明 Reducer 有缺陷"""
