"""calc/reducer.py - 把 token 序列归约成二叉表达式树"""
import logging

from calc.errors import MalformedExpressionError
from calc.token_system import TokenType, ExpressionNode

logger = logging.getLogger(__name__)


class Reducer:
    """在结合最松散的运算符处反复切分 token 序列"""

    @staticmethod
    def select_split_operator(tokens):
        """
        选出切分点：split_priority 最高的运算符，并列时取最右边的一个。
        对剩余左半部分重复这一规则即得到左结合
        Returns:
            运算符在序列中的下标，没有运算符时返回 None
        """
        best_index = None
        best_priority = None
        for i, token in enumerate(tokens):
            if token.type != TokenType.OPERATOR:
                continue
            if best_priority is None or token.split_priority >= best_priority:
                best_index = i
                best_priority = token.split_priority
        return best_index

    @staticmethod
    def reduce(tokens):
        """
        Args:
            tokens: Tokenizer 输出的扁平 token 序列（可含 GroupToken）
        Returns:
            表达式树的根 ExpressionNode；只有一个数字时直接返回该 NumberToken
        """
        tokens = list(tokens)
        if not tokens:
            raise MalformedExpressionError("Empty expression")
        tree = Reducer._reduce_sequence(tokens)
        logger.debug(f"Reduced {len(tokens)} tokens, root: {getattr(tree, 'operator', tree)!r}")
        return tree

    @staticmethod
    def _reduce_sequence(tokens):
        root_index = Reducer.select_split_operator(tokens)
        if root_index is None:
            if len(tokens) == 1:
                return Reducer._reduce_operand(tokens[0])
            if not tokens:
                raise MalformedExpressionError("Empty parentheses")
            raise MalformedExpressionError("Missing operator between operands", tokens[1].position)

        root_priority = tokens[root_index].split_priority

        # 同一优先级的链在左侧反复取最右切分，用循环代替递归
        splits = []
        end = len(tokens)
        split_index = root_index
        while split_index is not None:
            splits.append((tokens[split_index], tokens[split_index + 1:end]))
            end = split_index
            split_index = Reducer._previous_split(tokens, end, root_priority)

        node = Reducer._reduce_side(tokens[:end], splits[-1][0])
        for op_token, right_tokens in reversed(splits):
            node = ExpressionNode(node, op_token, Reducer._reduce_side(right_tokens, op_token))
        return node

    @staticmethod
    def _previous_split(tokens, end, priority):
        # root 的优先级已是最高，tokens[:end] 中同优先级的最右运算符就是下一个切分点
        for i in range(end - 1, -1, -1):
            token = tokens[i]
            if token.type == TokenType.OPERATOR and token.split_priority == priority:
                return i
        return None

    @staticmethod
    def _reduce_side(tokens, op_token):
        if not tokens:
            raise MalformedExpressionError(f"Missing operand for operator '{op_token.symbol}'", op_token.position)
        if len(tokens) == 1:
            return Reducer._reduce_operand(tokens[0])
        return Reducer._reduce_sequence(tokens)

    @staticmethod
    def _reduce_operand(token):
        if token.type == TokenType.NUMBER:
            return token
        if token.type == TokenType.GROUP:
            return Reducer._reduce_sequence(list(token.tokens))
        if token.type == TokenType.OPERATOR:
            raise MalformedExpressionError(f"Dangling operator '{token.symbol}'", token.position)
        raise MalformedExpressionError(f"Unexpected token: {token!r}")


def reduce(tokens):
    return Reducer.reduce(tokens)
