import pytest

from symdiff.cli import main, parse_assignments, AssignmentError


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.delenv("SYMDIFF_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SYMDIFF_LOG_FILE", raising=False)


def test_eval_prints_value(capsys):
    assert main(["--eval", "x^2 + y", "x=3", "y=0.5"]) == 0
    out, err = capsys.readouterr()
    assert out.strip() == "9.5"
    assert err == ""


def test_diff_prints_derivative(capsys):
    assert main(["--diff", "x^2", "--by", "x"]) == 0
    out, _ = capsys.readouterr()
    assert out.strip() == "((2 * (x ^ 1)) * 1)"


@pytest.mark.parametrize("argv, message", [
    (["--eval", "1/0"], "Division by zero"),
    (["--eval", "y"], "'y'"),
    (["--eval", "ln(x)", "x=-1"], "ln()"),
    (["--eval", "2+2)"], "Trailing"),
    (["--diff", "sin(x", "--by", "x"], "Expected"),
    (["--eval", "x", "x3"], "name=value"),
    (["--eval", "x", "x=abc"], "not a number"),
])
def test_failures_exit_with_one(capsys, argv, message):
    assert main(argv) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "error:" in err
    assert message in err


def test_usage_errors_exit_with_two(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--diff", "x"])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit) as excinfo:
        main(["--eval", "x", "--diff", "x"])
    assert excinfo.value.code == 2


def test_bad_log_level_in_environment(capsys, monkeypatch):
    monkeypatch.setenv("SYMDIFF_LOG_LEVEL", "loud")
    assert main(["--eval", "1"]) == 1
    _, err = capsys.readouterr()
    assert "Unknown log level" in err


def test_parse_assignments():
    assert parse_assignments(["x=1", " y = 2.5"]) == {"x": 1.0, "y": 2.5}
    with pytest.raises(AssignmentError):
        parse_assignments(["=3"])
