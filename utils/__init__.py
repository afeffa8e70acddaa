"""工具模块"""
from .metrics import calculate_match_mask, calculate_match_rate, calculate_max_abs_error

__all__ = ['calculate_match_mask', 'calculate_match_rate', 'calculate_max_abs_error']
