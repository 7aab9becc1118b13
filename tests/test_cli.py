import numpy as np
import pytest

from gpfvm.cli import main


def test_main_runs_and_writes_results(tmp_path, capsys):
    out = tmp_path / "results"
    code = main(["--nx", "16", "--tn", "1e-5", "--output", str(out)])
    assert code == 0
    printed = capsys.readouterr().out
    assert "The time is:" in printed
    density = np.array((out / "Density.dat").read_text().split(), dtype=float)
    assert density.size == 16
    assert np.all(density > 0.0)


def test_main_first_order_without_slow_start(tmp_path, capsys):
    out = tmp_path / "fog"
    code = main(["--nx", "12", "--tn", "1e-3", "--method", "fog", "--no-slow-start", "--output", str(out)])
    assert code == 0
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("The time is:")]
    assert len(lines) >= 1
    pressure = np.array((out / "Pressure.dat").read_text().split(), dtype=float)
    assert np.all(pressure > 0.0)


def test_main_rejects_unknown_method(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["--method", "mood531", "--output", str(tmp_path)])
    assert info.value.code == 2


def test_main_rejects_invalid_grid(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["--nx", "0", "--output", str(tmp_path)])
    assert info.value.code == 2


def test_main_reports_superluminal_problem(tmp_path, capsys):
    code = main(["--problem", "shuosher", "--nx", "12", "--output", str(tmp_path)])
    assert code == 1
    assert "error" in capsys.readouterr().err