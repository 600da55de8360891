from regression_checks import run_regressions


def test_regression_checks_pass(capsys):
    run_regressions()
    assert "All regression checks passed." in capsys.readouterr().out
