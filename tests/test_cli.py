from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from lensbench.cli.main import main, parse_lens
from lensbench.optics.lenses import LensType

SRC = Path(__file__).resolve().parents[1] / "src"


def run_cli(*args: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "lensbench.cli", *args],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_cli_help() -> None:
    result = run_cli("--help")
    assert result.returncode == 0
    out = result.stdout
    assert "trace" in out and "inspect" in out and "validate" in out


def test_cli_trace_help() -> None:
    result = run_cli("trace", "--help")
    assert result.returncode == 0
    assert "--lens" in result.stdout
    assert "--out" in result.stdout


def test_cli_missing_command() -> None:
    result = run_cli()
    assert result.returncode != 0


def test_cli_trace_stdout() -> None:
    result = run_cli("trace", "--lens", "6", "--lens", "4", "--distance", "1.0")
    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert [lens["power"] for lens in data["lenses"]] == [6.0, 4.0]
    assert data["distances"] == [1.0]
    assert data["fan"]["lens_x"] == [200.0, 400.0]
    assert len(data["fan"]["rays"]) == 8
    assert data["labels"] == [{"x": 300.0, "text": "1.00"}]
    assert len(data["outlines"]) == 2


def test_cli_trace_out_file(tmp_path: Path) -> None:
    out = tmp_path / "out" / "fan.json"
    assert main(["trace", "--lens=-3:1.6:biconcave", "-o", str(out)]) == 0
    data = json.loads(out.read_text())
    (lens,) = data["lenses"]
    assert lens["type"] == "biconcave"
    assert lens["index"] == 1.6
    assert lens["r"] == pytest.approx(2 * 0.6 / -3)


def test_cli_trace_with_config(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("pixels_per_meter: 100\n")
    assert main(["trace", "-c", str(cfg), "-l", "2", "-l", "2", "-d", "1.5"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["fan"]["lens_x"] == [200.0, 350.0]


def test_cli_bad_config(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("max_lenses: 0\n")
    assert main(["trace", "-c", str(cfg)]) == 1
    assert "Error" in capsys.readouterr().err


def test_cli_inspect_caps_lenses(capsys) -> None:
    assert main(["inspect", "-l", "1", "-l", "2", "-l", "3", "-l", "4"]) == 0
    out = capsys.readouterr().out
    assert "biconvex" in out
    assert out.count("biconvex") == 3
    assert "lens 2 -> lens 3: 1.00 m" in out


def test_cli_validate(capsys) -> None:
    assert main(["validate"]) == 0
    out = capsys.readouterr().out
    assert "All validation cases passed" in out
    assert "FAIL" not in out


def test_parse_lens() -> None:
    spec = parse_lens("4")
    assert spec.power == 4.0 and spec.index is None and spec.lens_type is LensType.BICONVEX
    spec = parse_lens("-2.5:1.7:biconcave")
    assert spec.power == -2.5 and spec.index == 1.7 and spec.lens_type is LensType.BICONCAVE


@pytest.mark.parametrize("text", ["abc", "1:x", "1:1.5:flat", "1:2:3:4"])
def test_parse_lens_invalid(text: str) -> None:
    import argparse

    with pytest.raises(argparse.ArgumentTypeError):
        parse_lens(text)


def test_cli_warns_on_rejected_and_extra_distances(caplog, capsys) -> None:
    with caplog.at_level(logging.WARNING, logger="lensbench"):
        assert main(["trace", "-l", "6", "-l", "4", "-d", "0.1", "-d", "2.0"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["distances"] == [1.0]
    messages = [r.getMessage() for r in caplog.records]
    assert "distance rejected" in messages
    assert "extra distances ignored" in messages


def test_cli_accepted_distances_do_not_warn(caplog, capsys) -> None:
    with caplog.at_level(logging.WARNING, logger="lensbench"):
        assert main(["trace", "-l", "6", "-l", "4", "-d", "1.5"]) == 0
    capsys.readouterr()
    assert not [r for r in caplog.records if "distance" in r.getMessage()]
