"""批量计算模块"""
from .runner import evaluate_expressions, check_results, run_batch

__all__ = ['evaluate_expressions', 'check_results', 'run_batch']
