import json

from typer.testing import CliRunner

from weighin.cli import app

runner = CliRunner()


def _last_line(result):
    return result.stdout.strip().splitlines()[-1]


def test_parse_prints_weight():
    result = runner.invoke(app, ["parse", "Date: 2024-01-01, Weight: 974"])
    assert result.exit_code == 0
    assert _last_line(result) == "97.4"


def test_parse_without_weight_exits_with_error():
    result = runner.invoke(app, ["parse", "no numbers here"])
    assert result.exit_code == 1


def test_parse_explain_outputs_trace():
    result = runner.invoke(app, ["parse", "--explain", "85 85.5 kg"])
    payload = json.loads(_last_line(result))

    assert result.exit_code == 0
    assert payload["weight_kg"] == 85.5
    assert [token["digits"] for token in payload["tokens"]] == ["85", "85.5"]
    assert {candidate["origin"] for candidate in payload["candidates"]} == {"literal"}


def test_scan_uses_static_recognizer(tmp_path, monkeypatch):
    monkeypatch.delenv("GOOGLE_VISION_API_KEY", raising=False)
    monkeypatch.setenv("OCR_STATIC_TEXT", "Weight 72,4 kg")
    image = tmp_path / "scale.jpg"
    image.write_bytes(b"\xff\xd8\xff")

    result = runner.invoke(app, ["scan", str(image)])

    assert result.exit_code == 0
    assert json.loads(_last_line(result))["weight"] == 72.4


def test_scan_rejects_missing_file(tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing.jpg")])
    assert result.exit_code != 0
