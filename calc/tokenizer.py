"""calc/tokenizer.py - 从右向左扫描表达式，生成 token 序列"""
import logging
from collections import deque

from config.config import CALC_CONFIG
from calc.errors import ExpressionSyntaxError, MalformedExpressionError
from calc.operators import OPERATOR_SYMBOLS
from calc.token_system import (
    TokenType, NumberToken, OperatorToken, make_group, format_tokens
)

logger = logging.getLogger(__name__)

DIGITS = frozenset('0123456789')


class ParsingContext:
    """一层括号对应一个解析上下文"""

    def __init__(self, close_position=None):
        self.tokens = deque()
        self.buffer = deque()  # 正在拼接的数字字面量（从右向左，往前插入）
        self.buffer_start = None
        self.pending_minus = None  # 尚未确定是一元还是二元的 '-' 的位置
        self.close_position = close_position  # 打开本上下文的 ')' 的位置

    @property
    def first_token(self):
        return self.tokens[0] if self.tokens else None

    def add_token(self, token):
        # 从右向左解析，新 token 插在最前面
        self.tokens.appendleft(token)

    def replace_first_token(self, replacement):
        self.tokens.popleft()
        self.tokens.appendleft(replacement)

    def prepend_char(self, ch, position):
        self.buffer.appendleft(ch)
        self.buffer_start = position

    def complete_number(self):
        if self.buffer:
            self.add_token(NumberToken.from_string(''.join(self.buffer), self.buffer_start))
            self.buffer.clear()
            self.buffer_start = None


class Tokenizer:

    @staticmethod
    def _negate(token, position):
        # "-(1 * 3)" 等价于 "-1 * (1 * 3)"；对已取负的组再取负时两次抵消
        if token.type == TokenType.GROUP and token.is_negation:
            return token.tokens[2]
        return make_group([
            NumberToken(-1.0, position),
            OperatorToken.from_symbol('*', position),
            token,
        ], position)

    @staticmethod
    def _resolve_pending_minus(context, unary):
        """
        确定挂起的 '-' 的角色
        Args:
            context: 当前解析上下文
            unary: True 表示 '-' 左侧不是操作数（运算符、'(' 或输入开头）
        """
        position = context.pending_minus
        if position is None:
            return
        context.pending_minus = None

        if not unary:
            context.complete_number()
            context.add_token(OperatorToken.from_symbol('-', position))
            return

        if context.buffer:
            context.prepend_char('-', position)
            context.complete_number()
            return

        first = context.first_token
        if first is not None and first.type in (TokenType.NUMBER, TokenType.GROUP):
            context.replace_first_token(Tokenizer._negate(first, position))
            return

        # 右侧没有可取负的操作数，保留为运算符，由 Reducer 报告缺失的操作数
        context.add_token(OperatorToken.from_symbol('-', position))

    @staticmethod
    def tokenize(expression, max_nesting_depth=None):
        """
        把表达式字符串切分成 token 序列
        Args:
            expression: 表达式字符串
            max_nesting_depth: GroupToken 最大嵌套层数，默认取 CALC_CONFIG。
                多余的括号会被折叠，不计入层数
        Returns:
            扁平的 token 列表（括号子表达式为 GroupToken）
        """
        if not isinstance(expression, str):
            raise TypeError(f"Expression must be a str, got {type(expression).__name__}")
        if max_nesting_depth is None:
            max_nesting_depth = CALC_CONFIG['max_nesting_depth']

        context_stack = []
        context = ParsingContext()

        for index in range(len(expression) - 1, -1, -1):
            ch = expression[index]

            if ch.isspace():
                context.complete_number()
                continue

            # 组结束（从右向左看是组的开始）
            if ch == ')':
                Tokenizer._resolve_pending_minus(context, unary=False)
                context.complete_number()
                context_stack.append(context)
                context = ParsingContext(close_position=index)
                continue

            if ch == '(':
                Tokenizer._resolve_pending_minus(context, unary=True)
                context.complete_number()
                if not context_stack:
                    raise ExpressionSyntaxError("Unmatched '('", index)
                group_context = context
                if len(group_context.tokens) == 1 and group_context.first_token.type == TokenType.OPERATOR:
                    raise MalformedExpressionError("Parentheses enclose a bare operator", index)
                group = make_group(group_context.tokens, index)
                if group.type == TokenType.GROUP and group.depth > max_nesting_depth:
                    raise ExpressionSyntaxError(
                        f"Parentheses nested deeper than {max_nesting_depth} levels", index)
                context = context_stack.pop()
                context.add_token(group)
                continue

            if ch == '-':
                # 紧挨着的两个 '-'，右边那个必然是一元负号
                if context.pending_minus is not None:
                    Tokenizer._resolve_pending_minus(context, unary=True)
                context.pending_minus = index
                continue

            if ch in DIGITS or ch == '.':
                Tokenizer._resolve_pending_minus(context, unary=False)
                context.prepend_char(ch, index)
                continue

            if ch in OPERATOR_SYMBOLS:
                Tokenizer._resolve_pending_minus(context, unary=True)
                context.complete_number()
                context.add_token(OperatorToken.from_symbol(ch, index))
                continue

            raise ExpressionSyntaxError(f"Unrecognized character {ch!r}", index)

        Tokenizer._resolve_pending_minus(context, unary=True)
        context.complete_number()

        if context_stack:
            raise ExpressionSyntaxError("Unmatched ')'", context.close_position)

        tokens = list(context.tokens)
        # 整个表达式被一层括号包住时展开
        if len(tokens) == 1 and tokens[0].type == TokenType.GROUP:
            tokens = list(tokens[0].tokens)

        logger.debug(f"Tokenized {expression!r} into {len(tokens)} tokens: {format_tokens(tokens)}")
        return tokens


def tokenize(expression):
    return Tokenizer.tokenize(expression)
