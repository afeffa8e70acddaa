"""批量计算模块 - batch/runner.py"""
import pandas as pd
import numpy as np
import logging

from calc import evaluate, ExpressionSyntaxError, MalformedExpressionError
from config.config import BATCH_CONFIG
from utils.metrics import calculate_match_mask, calculate_match_rate, calculate_max_abs_error

logger = logging.getLogger(__name__)


def evaluate_expressions(expressions):
    """
    逐个计算表达式

    Parameters:
    - expressions: 表达式序列（list 或 Series）

    Returns:
    - DataFrame: expression / result / error 三列；失败的行 result 为 NaN，error 为错误信息
    """
    expression_column = BATCH_CONFIG['expression_column']
    result_column = BATCH_CONFIG['result_column']
    error_column = BATCH_CONFIG['error_column']

    index = expressions.index if isinstance(expressions, pd.Series) else None
    expressions = list(expressions)
    results = np.full(len(expressions), np.nan)
    errors = [''] * len(expressions)

    for i, expression in enumerate(expressions):
        try:
            results[i] = evaluate(expression)
        # InvalidOperandError 表示内部缺陷，不在这里吞掉
        except (ExpressionSyntaxError, MalformedExpressionError) as e:
            errors[i] = f"{type(e).__name__}: {e}"
            logger.warning(f"Failed to evaluate '{expression[:50]}': {e}")

    failed = sum(1 for e in errors if e)
    if failed:
        logger.info(f"Evaluated {len(expressions)} expressions, {failed} failed")

    return pd.DataFrame({
        expression_column: expressions,
        result_column: results,
        error_column: errors,
    }, index=index)


def check_results(frame, expected, rtol=None, atol=None):
    """
    把计算结果与期望值对比，原地加上 match 列

    Parameters:
    - frame: evaluate_expressions 的输出
    - expected: 期望值（Series/数组，与 frame 等长）
    - rtol, atol: 容差，默认取 BATCH_CONFIG

    Returns:
    - summary: total / failed / matched / match_rate / max_abs_error
    """
    rtol = BATCH_CONFIG['rtol'] if rtol is None else rtol
    atol = BATCH_CONFIG['atol'] if atol is None else atol
    result_column = BATCH_CONFIG['result_column']
    error_column = BATCH_CONFIG['error_column']
    match_column = BATCH_CONFIG['match_column']

    expected = pd.to_numeric(pd.Series(np.asarray(expected, dtype=object)), errors='coerce')
    results = frame[result_column].to_numpy(dtype=float)
    failed = frame[error_column].astype(bool).to_numpy()

    mask = calculate_match_mask(results, expected.to_numpy(dtype=float), rtol=rtol, atol=atol)
    # 计算失败的行即使期望值也是 NaN 也不算一致
    mask = mask & ~failed
    frame[match_column] = mask

    summary = {
        'total': len(frame),
        'failed': int(failed.sum()),
        'matched': int(mask.sum()),
        'match_rate': calculate_match_rate(mask),
        'max_abs_error': calculate_max_abs_error(results, expected.to_numpy(dtype=float)),
    }

    for expression, value, target in zip(frame.loc[~mask, BATCH_CONFIG['expression_column']],
                                         results[~mask], expected.to_numpy(dtype=float)[~mask]):
        logger.warning(f"Mismatch: {expression} = {value} (expected {target})")

    return summary


def run_batch(dataset, expression_column=None, expected_column=None):
    """
    计算数据集中的全部表达式；数据集含期望值列时顺带对比

    Returns:
    - (result_frame, summary)，没有期望值列时 summary 为 None
    """
    expression_column = expression_column or BATCH_CONFIG['expression_column']
    expected_column = expected_column or BATCH_CONFIG['expected_column']

    if expression_column not in dataset.columns:
        raise ValueError(f"Expression column '{expression_column}' not found in dataset.")

    frame = evaluate_expressions(dataset[expression_column].astype(str))
    summary = None
    if expected_column in dataset.columns:
        frame[expected_column] = dataset[expected_column].to_numpy()
        summary = check_results(frame, dataset[expected_column])
        logger.info(f"Matched {summary['matched']}/{summary['total']} expressions "
                    f"(match rate {summary['match_rate']:.2%})")

    return frame, summary
