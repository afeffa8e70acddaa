import math

import numpy as np
import pandas as pd
import pytest

from batch.runner import evaluate_expressions, check_results, run_batch
from data.data_loader import load_expressions, read_expression_lines
from utils.metrics import calculate_match_mask, calculate_match_rate, calculate_max_abs_error


@pytest.fixture
def expressions_csv(tmp_path):
    path = tmp_path / "expressions.csv"
    path.write_text(
        "expression,expected\n"
        "1+2,3\n"
        "2*(3+4),14\n"
        "8 - 3 - 2,3\n"
        "3+,\n"
        "0/0,nan\n",
        encoding="utf-8",
    )
    return path


def test_evaluate_expressions():
    frame = evaluate_expressions(["1+1", "3+", "2*3", "2 $ 3"])
    assert list(frame.columns) == ["expression", "result", "error"]
    assert frame["result"].iloc[0] == 2.0
    assert math.isnan(frame["result"].iloc[1])
    assert frame["result"].iloc[2] == 6.0
    assert frame["error"].iloc[0] == ""
    assert frame["error"].iloc[1].startswith("MalformedExpressionError")
    assert frame["error"].iloc[3].startswith("ExpressionSyntaxError")


def test_evaluate_expressions_keeps_series_index():
    frame = evaluate_expressions(pd.Series(["1+1", "2*2"], index=["a", "b"]))
    assert list(frame.index) == ["a", "b"]
    assert frame.loc["b", "result"] == 4.0


def test_check_results():
    frame = evaluate_expressions(["1+1", "3+", "2*3", "0/0", "1/0"])
    summary = check_results(frame, [2.0, np.nan, 7.0, np.nan, np.inf])
    assert list(frame["match"]) == [True, False, False, True, True]
    assert summary["total"] == 5
    assert summary["failed"] == 1
    assert summary["matched"] == 3
    assert summary["match_rate"] == pytest.approx(0.6)
    assert summary["max_abs_error"] == pytest.approx(1.0)


def test_load_csv_and_run_batch(expressions_csv):
    dataset = load_expressions(expressions_csv)
    assert list(dataset["expression"]) == ["1+2", "2*(3+4)", "8 - 3 - 2", "3+", "0/0"]

    frame, summary = run_batch(dataset)
    assert list(frame["result"].iloc[:3]) == [3.0, 14.0, 3.0]
    assert summary["failed"] == 1
    assert summary["matched"] == 4
    assert list(frame["match"]) == [True, True, True, False, True]


def test_run_batch_without_expected_column():
    frame, summary = run_batch(pd.DataFrame({"expression": ["1+2", "4/2"]}))
    assert summary is None
    assert list(frame["result"]) == [3.0, 2.0]


def test_missing_expression_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("formula\n1+2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_expressions(path)
    with pytest.raises(ValueError):
        run_batch(pd.DataFrame({"formula": ["1+2"]}))


def test_load_text_file(tmp_path):
    path = tmp_path / "expressions.txt"
    path.write_text("# demo\n1 + 2\n\n  ((80 - (19)))  \n", encoding="utf-8")
    assert read_expression_lines(path) == ["1 + 2", "((80 - (19)))"]
    dataset = load_expressions(path)
    assert list(dataset.columns) == ["expression"]
    assert len(dataset) == 2


class TestMetrics:

    def test_match_mask(self):
        mask = calculate_match_mask([1.0, np.nan, np.inf, -np.inf, 1.0],
                                    [1.0 + 1e-12, np.nan, np.inf, np.inf, 1.1])
        assert list(mask) == [True, True, True, False, False]

    def test_match_mask_length_mismatch(self):
        with pytest.raises(ValueError):
            calculate_match_mask([1.0, 2.0], [1.0])

    def test_match_rate(self):
        assert calculate_match_rate([True, False, True, True]) == 0.75
        assert calculate_match_rate([]) == 0.0

    def test_max_abs_error(self):
        assert calculate_max_abs_error([1.0, 2.0, np.inf], [1.5, 2.0, 3.0]) == 0.5
        assert calculate_max_abs_error([np.nan], [1.0]) == 0.0
