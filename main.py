"""主程序入口 - 计算命令行给出的表达式或批量文件"""
import argparse
import logging
import sys

from config.config import BATCH_CONFIG, DEMO_CONFIG, LOGGING_CONFIG, validate_config
from calc import evaluate, ExpressionSyntaxError, MalformedExpressionError
from data.data_loader import load_expressions
from batch.runner import run_batch

logger = logging.getLogger(__name__)


def run_expressions(expressions):
    """逐个计算并打印，返回失败的个数"""
    failed = 0
    for expression in expressions:
        try:
            result = evaluate(expression)
        except (ExpressionSyntaxError, MalformedExpressionError) as e:
            logger.error(f"Failed to evaluate '{expression}': {e}")
            failed += 1
            continue
        print(f"{expression} = {result}")
    return failed


def run_demo():
    expression = DEMO_CONFIG['expression']
    result = evaluate(expression)
    print(f"{expression} = {result} ({DEMO_CONFIG['expected']})")
    return 0


def main(args):
    validate_config()

    if args.data_path:
        dataset = load_expressions(args.data_path, args.expression_column)
        frame, summary = run_batch(dataset, args.expression_column, args.expected_column)

        failed = int(frame[BATCH_CONFIG['error_column']].astype(bool).sum())
        print(f"Evaluated {len(frame)} expressions, {failed} failed")
        if summary is not None:
            print(f"Matched {summary['matched']}/{summary['total']} "
                  f"(match rate {summary['match_rate']:.2%}, max abs error {summary['max_abs_error']:.3g})")

        if args.save_results:
            logger.info(f"Saving results to {args.results_path}")
            frame.to_csv(args.results_path, index=False)

        mismatched = summary is not None and summary['matched'] < summary['total']
        return 1 if failed or mismatched else 0

    if args.expressions:
        return 1 if run_expressions(args.expressions) else 0

    return run_demo()


def build_parser():
    parser = argparse.ArgumentParser(description="Arithmetic expression calculator")

    parser.add_argument(
        "expressions",
        nargs="*",
        help="Expressions to evaluate, e.g. \"12 * 123 / -(-5 + 2)\". "
             "Put '--' before expressions that start with '-', e.g. -- \"-(4) + 1\""
    )
    parser.add_argument(
        "--data_path",
        type=str,
        default=None,
        help="Path to a CSV file or a text file with one expression per line"
    )
    parser.add_argument(
        "--expression_column",
        type=str,
        default=BATCH_CONFIG['expression_column'],
        help="Name of the expression column in the CSV file"
    )
    parser.add_argument(
        "--expected_column",
        type=str,
        default=BATCH_CONFIG['expected_column'],
        help="Name of the column holding expected results (optional)"
    )
    parser.add_argument(
        "--save_results",
        action="store_true",
        help="Save the batch results to a CSV file"
    )
    parser.add_argument(
        "--results_path",
        type=str,
        default="calc_results.csv",
        help="Path to save the batch results"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG['level'],
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def cli(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOGGING_CONFIG['format']
    )
    return main(args)


if __name__ == "__main__":
    sys.exit(cli())
