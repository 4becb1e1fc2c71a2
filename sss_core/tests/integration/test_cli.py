from __future__ import annotations

import itertools
import os
import subprocess
import sys
from pathlib import Path

import pytest

from sss_core.cli import run
from sss_core.cli.main import USAGE
from sss_core.shares import parse_share_lines


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _split(capsys, *args: str) -> tuple[int, str]:
    code = run(["split", *args])
    return code, capsys.readouterr().out


def test_split_output_format(capsys) -> None:
    code, out = _split(capsys, "--secret", "hi", "--n", "3", "--t", "2")
    assert code == 0
    lines = out.splitlines()
    assert lines[0] == "Secret to split: hi"
    assert len(lines) == 4
    for index, line in enumerate(lines[1:], start=1):
        assert line.startswith(f"Share {index}: ({index}, ")


def test_split_then_combine_hi(capsys) -> None:
    _, out = _split(capsys, "--secret", "hi", "--n", "3", "--t", "2")
    tokens = parse_share_lines(out)
    pairs = [tokens[i : i + 2] for i in range(0, len(tokens), 2)]
    for subset in list(itertools.combinations(pairs, 2)) + [tuple(pairs)]:
        flat = [token for pair in subset for token in pair]
        assert run(["combine", *flat]) == 0
        assert capsys.readouterr().out == "hi\n"


def test_combine_from_shares_file(capsys, tmp_path: Path) -> None:
    secret = "a secret longer than one fifteen character chunk"
    _, out = _split(capsys, "--secret", secret, "--n", "5", "--t", "3")
    saved = tmp_path / "shares.txt"
    saved.write_text("\n".join(out.splitlines()[:1] + out.splitlines()[2:5]), encoding="utf-8")
    assert run(["combine", "--shares-file", str(saved)]) == 0
    assert capsys.readouterr().out.strip() == secret


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["--secret", "", "--n", "5", "--t", "3"], "Empty secret."),
        (["--secret", "héllo", "--n", "5", "--t", "3"], "Secret must be ASCII."),
        (["--secret", "ok", "--n", "2", "--t", "5"], "Number of shares is less than the threshold."),
        (["--secret", "ok", "--n", "0", "--t", "2"], "Number of shares less than 1."),
        (["--n", "3", "--t", "2"], "Empty secret."),
    ],
)
def test_split_rejections(capsys, args, message: str) -> None:
    code, out = _split(capsys, *args)
    assert code == 1
    assert message in out
    assert "Share " not in out
    assert "Secret to split" not in out


@pytest.mark.parametrize(
    "tokens",
    [
        ["2", "12+34", "4"],
        ["2", "12", "4", "56+78"],
        ["2", "12", "x", "56"],
        ["2", "12", "2", "56"],
        [],
    ],
)
def test_combine_rejections(capsys, tokens) -> None:
    assert run(["combine", *tokens]) == 1
    assert capsys.readouterr().out.strip()


def test_missing_subcommand_prints_usage(capsys) -> None:
    assert run([]) == 1
    assert capsys.readouterr().out.strip() == USAGE


def test_unknown_subcommand_prints_usage(capsys) -> None:
    assert run(["frobnicate"]) == 1
    assert USAGE in capsys.readouterr().out


def test_bad_option_value_prints_usage(capsys) -> None:
    assert run(["split", "--secret", "hi", "--n", "abc", "--t", "2"]) == 1
    out = capsys.readouterr().out
    assert USAGE in out
    assert "Share " not in out


def test_aliased_share_numbers_rejected(capsys) -> None:
    _, out = _split(capsys, "--secret", "hi", "--n", "3", "--t", "2")
    tokens = parse_share_lines(out)
    modulus = 2**127 - 1
    assert run(["combine", "1", tokens[1], str(1 + modulus), tokens[3]]) == 1
    assert "smaller than the field modulus" in capsys.readouterr().out
    assert run(["combine", str(modulus), tokens[1], "2", tokens[3]]) == 1
    assert "smaller than the field modulus" in capsys.readouterr().out


def test_malformed_yaml_config(capsys, tmp_path: Path) -> None:
    config = tmp_path / "broken.yaml"
    config.write_text("field: [unclosed\n", encoding="utf-8")
    assert run(["--config", str(config), "version"]) == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_config_init_writes_defaults(capsys, tmp_path: Path) -> None:
    target = tmp_path / "conf" / "config.yaml"
    assert run(["config-init", "--destination", str(target)]) == 0
    assert target.is_file()
    capsys.readouterr()
    assert run(["config-init", "--destination", str(target)]) == 1
    assert "already exists" in capsys.readouterr().out
    assert run(["config-init", "--destination", str(target), "--force"]) == 0
    assert run(["--config", str(target), "version"]) == 0


def test_version(capsys) -> None:
    assert run(["version"]) == 0
    assert capsys.readouterr().out.startswith("sss-core")


def test_config_option(capsys, tmp_path: Path) -> None:
    config = tmp_path / "small.yaml"
    config.write_text("field:\n  modulus: 257\n", encoding="utf-8")
    code = run(["--config", str(config), "split", "--secret", "abc", "--n", "2", "--t", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines()[1].count("+") == 2
    assert run(["--config", str(config), "combine", *parse_share_lines(out)]) == 0
    assert capsys.readouterr().out == "abc\n"


def test_invalid_config_exits_with_error(capsys, tmp_path: Path) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("field:\n  modulus: 7\n", encoding="utf-8")
    assert run(["--config", str(config), "version"]) == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_entropy_failure_is_fatal(capsys, monkeypatch) -> None:
    def boom(_upper):
        raise OSError("no entropy")

    monkeypatch.setattr("sss_core.field.secrets.randbelow", boom)
    code, out = _split(capsys, "--secret", "hi", "--n", "3", "--t", "2")
    assert code == 2
    assert "Share " not in out


def _run_module(*args: str) -> subprocess.CompletedProcess[bytes]:
    command = [sys.executable, "-m", "sss_core.cli", *args]
    env = os.environ.copy()
    module_root = Path(__file__).resolve().parents[2] / "src"
    env["PYTHONPATH"] = (
        f"{module_root}{os.pathsep}{env['PYTHONPATH']}"
        if env.get("PYTHONPATH")
        else str(module_root)
    )
    return subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE, env=env)


def test_module_entry_point_exit_codes() -> None:
    ok = _run_module("split", "--secret", "hi", "--n", "3", "--t", "2")
    assert ok.returncode == 0
    tokens = parse_share_lines(ok.stdout.decode("utf-8"))
    combined = _run_module("combine", *tokens[:4])
    assert combined.returncode == 0
    assert combined.stdout.decode("utf-8").strip() == "hi"

    bad = _run_module("combine", "2", "12+34", "4")
    assert bad.returncode == 1
    assert _run_module().returncode == 1
