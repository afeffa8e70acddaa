"""数据加载模块 - 从文件读取待计算的表达式"""
import pandas as pd
import logging

from config.config import BATCH_CONFIG

logger = logging.getLogger(__name__)


def load_expressions(file_path, expression_column=None):
    """
    加载表达式数据集

    Parameters:
    - file_path: CSV 文件，或每行一个表达式的文本文件
    - expression_column: CSV 中表达式所在列，默认取 BATCH_CONFIG

    Returns:
    - DataFrame，至少包含表达式列（文本文件只有这一列）
    """
    expression_column = expression_column or BATCH_CONFIG['expression_column']
    file_path = str(file_path)
    logger.info(f"Loading expressions from {file_path}")

    if file_path.endswith('.csv'):
        # 表达式列按原样读成字符串，不让 pandas 把 "3" 之类的内容转成数字或 NaN
        dataset = pd.read_csv(file_path, dtype={expression_column: str}, keep_default_na=False)

        if expression_column not in dataset.columns:
            raise ValueError(f"Expression column '{expression_column}' not found in dataset.")
    else:
        dataset = pd.DataFrame({expression_column: read_expression_lines(file_path)})

    logger.info(f"Loaded {len(dataset)} expressions")
    return dataset


def read_expression_lines(file_path):
    """读取文本文件，跳过空行和注释行"""
    comment_prefix = BATCH_CONFIG['comment_prefix']
    expressions = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith(comment_prefix):
                continue
            expressions.append(line)
    return expressions
