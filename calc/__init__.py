"""计算核心 - Token系统、分词器、归约器和求值器"""
from .errors import (
    CalcError, ExpressionSyntaxError, MalformedExpressionError, InvalidOperandError
)
from .operators import Operator, Operators, OPERATOR_DEFINITIONS, get_operator
from .token_system import (
    TokenType, Token, NumberToken, OperatorToken, GroupToken, ExpressionNode,
    make_group, format_tokens
)
from .tokenizer import Tokenizer, tokenize
from .reducer import Reducer, reduce
from .tree_evaluator import TreeEvaluator
from .evaluator import parse, evaluate

__all__ = [
    'CalcError', 'ExpressionSyntaxError', 'MalformedExpressionError', 'InvalidOperandError',
    'Operator', 'Operators', 'OPERATOR_DEFINITIONS', 'get_operator',
    'TokenType', 'Token', 'NumberToken', 'OperatorToken', 'GroupToken', 'ExpressionNode',
    'make_group', 'format_tokens',
    'Tokenizer', 'tokenize', 'Reducer', 'reduce', 'TreeEvaluator',
    'parse', 'evaluate'
]
