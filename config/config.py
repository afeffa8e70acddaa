"""配置文件"""
import logging

logger = logging.getLogger(__name__)

# 表达式解析参数
CALC_CONFIG = {
    "max_nesting_depth": 100,  # 折叠多余括号后 GroupToken 的最大嵌套层数，限制 Reducer 的递归深度
}

# 批量计算参数
BATCH_CONFIG = {
    "expression_column": "expression",
    "expected_column": "expected",
    "result_column": "result",
    "error_column": "error",
    "match_column": "match",
    "rtol": 1e-9,  # 与期望值比较时的相对容差
    "atol": 1e-12,
    "comment_prefix": "#",  # 文本文件中的注释行
}

# 无输入时运行的演示表达式
DEMO_CONFIG = {
    "expression": "((80 - (19)))",
    "expected": 61.0,
}

# 日志
LOGGING_CONFIG = {
    "level": "INFO",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    from calc.operators import MUL_DIV_PRIORITY, ADD_SUB_PRIORITY
    assert MUL_DIV_PRIORITY < ADD_SUB_PRIORITY, "+/- 必须比 */ 先被选为切分点"
    assert CALC_CONFIG["max_nesting_depth"] > 0, "max_nesting_depth 必须为正数"
    assert BATCH_CONFIG["rtol"] >= 0 and BATCH_CONFIG["atol"] >= 0, "容差不能为负"
    logger.debug("Configuration validated successfully!")
