"""表达式树求值器 - 调用运算符表中的 numpy 运算"""
import logging

from calc.errors import InvalidOperandError
from calc.token_system import TokenType

logger = logging.getLogger(__name__)


class TreeEvaluator:
    """后序遍历表达式树求值"""

    @staticmethod
    def to_postfix(node):
        """
        把表达式树展开成后序序列（左、右、节点），不使用递归，
        长的同级运算链得到的左深树也不会耗尽调用栈
        """
        output = []
        stack = [node]
        while stack:
            item = stack.pop()
            output.append(item)
            if getattr(item, 'type', None) == TokenType.EXPRESSION:
                stack.append(item.left)
                stack.append(item.right)
        output.reverse()
        return output

    @staticmethod
    def evaluate(node):
        """
        Args:
            node: Reducer 产出的 ExpressionNode（或单个 NumberToken）
        Returns:
            float 结果
        """
        stack = []

        for item in TreeEvaluator.to_postfix(node):
            item_type = getattr(item, 'type', None)

            if item_type == TokenType.NUMBER:
                stack.append(item.value)

            elif item_type == TokenType.EXPRESSION:
                if len(stack) < 2:
                    raise InvalidOperandError(f"Insufficient operands for {item.operator}")
                right = stack.pop()
                left = stack.pop()
                stack.append(item.operator.operator.apply(left, right))

            elif item_type == TokenType.OPERATOR:
                raise InvalidOperandError(f"Invalid state: attempting to evaluate unreduced token: {item!r}")

            elif item_type == TokenType.GROUP:
                raise InvalidOperandError(f"Invalid state: attempting to evaluate unreduced group: {item!r}")

            else:
                raise InvalidOperandError(f"Unknown token type: {type(item).__name__}")

        if len(stack) != 1:
            logger.error(f"Stack has {len(stack)} elements after evaluation, expected 1")
            raise InvalidOperandError(f"Stack has {len(stack)} elements after evaluation, expected 1")

        return float(stack[0])
