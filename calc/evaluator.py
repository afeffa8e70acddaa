"""calc/evaluator.py - 表达式字符串的求值入口"""
import logging

from calc.tokenizer import Tokenizer
from calc.reducer import Reducer
from calc.tree_evaluator import TreeEvaluator

logger = logging.getLogger(__name__)


def parse(expression):
    """分词并归约成表达式树"""
    tokens = Tokenizer.tokenize(expression)
    return Reducer.reduce(tokens)


def evaluate(expression) -> float:
    """
    计算表达式的值。每次调用都独立构造 token 和树，不共享状态
    Args:
        expression: 如 "12 * 123 / -(-5 + 2)"
    Returns:
        双精度浮点结果
    Raises:
        ExpressionSyntaxError: 非法字符、无法解析的数字或括号不匹配
        MalformedExpressionError: 缺少操作数或运算符
    """
    tree = parse(expression)
    result = TreeEvaluator.evaluate(tree)
    logger.debug(f"{expression!r} = {result!r}")
    return result
