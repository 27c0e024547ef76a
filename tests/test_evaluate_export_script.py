"""
Tests for the headless evaluate_export.py script.
"""

import asyncio
import importlib.util
import json
from pathlib import Path
import pytest

from conftest import ms

SCRIPT = Path(__file__).parent.parent / "scripts" / "evaluate_export.py"


@pytest.fixture
def script(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TIMEVAL_MIN_GAP_MINUTES", raising=False)
    monkeypatch.setattr("app.infra.config._settings", None)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))

    spec = importlib.util.spec_from_file_location("evaluate_export", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def input_file(tmp_path, sample_json):
    path = tmp_path / "tim.json"
    path.write_text(sample_json, encoding="utf-8")
    return path


def test_summary_only(script, input_file, capsys):
    assert asyncio.run(script.main([str(input_file)])) == 0
    out = capsys.readouterr().out
    assert "Tasks: 3" in out
    assert "Gaps: 2 (02:00:00)" in out


def test_enable_gaps_and_export(script, input_file, tmp_path):
    out_file = tmp_path / "out.json"
    code = asyncio.run(script.main([
        str(input_file), "--enable-gaps", "--gap-task", "t-admin", "--json", str(out_file),
    ]))
    assert code == 0
    records = json.loads(out_file.read_text(encoding="utf-8"))["tasks"]["t-admin"]["records"]
    assert {"start": ms(2026, 3, 2, 12, 30), "end": ms(2026, 3, 2, 14, 0)} in records
    assert len(records) == 3


def test_csv_export(script, input_file, tmp_path):
    out_file = tmp_path / "sheet.csv"
    code = asyncio.run(script.main([str(input_file), "--csv-task", "t-dev", "--csv", str(out_file)]))
    assert code == 0
    assert len(out_file.read_text(encoding="utf-8").split("\n")) == 3


def test_min_gap_option(script, input_file, capsys):
    asyncio.run(script.main([str(input_file), "--min-gap", "60"]))
    assert "Gaps: 1 (01:30:00)" in capsys.readouterr().out


def test_negative_min_gap_is_refused(script, input_file, capsys):
    with pytest.raises(SystemExit) as exc:
        asyncio.run(script.main([str(input_file), "--min-gap", "-10"]))
    assert exc.value.code == 2
    assert "must not be negative" in capsys.readouterr().err


def test_json_requires_gap_task(script, input_file, tmp_path):
    assert asyncio.run(script.main([str(input_file), "--json", str(tmp_path / "x.json")])) == 1


def test_unknown_task(script, input_file, tmp_path, capsys):
    code = asyncio.run(script.main([str(input_file), "--csv-task", "nope", "--csv", str(tmp_path / "x.csv")]))
    assert code == 1
    assert "Unknown task" in capsys.readouterr().out


def test_invalid_file(script, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    assert asyncio.run(script.main([str(bad)])) == 1
    assert "Invalid Tim export" in capsys.readouterr().out


def test_missing_file(script, tmp_path):
    assert asyncio.run(script.main([str(tmp_path / "missing.json")])) == 1
