"""utils/metrics.py"""
import numpy as np


def calculate_match_mask(results, expected, rtol=1e-9, atol=1e-12):
    """
    逐个比较计算结果与期望值
    NaN 与 NaN 视为一致（0/0 的结果），±inf 只与同号的 inf 一致
    """
    x = np.asarray(getattr(results, 'values', results), dtype=float).ravel()
    y = np.asarray(getattr(expected, 'values', expected), dtype=float).ravel()
    if x.shape != y.shape:
        raise ValueError(f"Length mismatch: {x.size} results vs {y.size} expected values")

    with np.errstate(all='ignore'):
        return np.isclose(x, y, rtol=rtol, atol=atol, equal_nan=True)


def calculate_match_rate(mask):
    mask = np.asarray(mask, dtype=bool)
    if mask.size == 0:
        return 0.0
    return float(mask.mean())


def calculate_max_abs_error(results, expected):
    """最大绝对误差，只统计两边都是有限值的位置"""
    x = np.asarray(getattr(results, 'values', results), dtype=float).ravel()
    y = np.asarray(getattr(expected, 'values', expected), dtype=float).ravel()

    valid = np.isfinite(x) & np.isfinite(y)
    if not valid.any():
        return 0.0
    return float(np.max(np.abs(x[valid] - y[valid])))
