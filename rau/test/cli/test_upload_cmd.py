from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import rau.cli.commands._helpers as helpers
from rau import __version__
from rau.cli.app import app
from rau.core.errors import ErrorCode
from rau.github.http import HttpResponse, MockHttpClient

UPLOAD_URL = "https://uploads.github.com/repos/acme/widget/releases/42/assets{?name,label}"
UPLOAD_ENDPOINT = "https://uploads.github.com/repos/acme/widget/releases/42/assets"
RELEASE_URL = "https://api.github.com/repos/acme/widget/releases/42"
ASSET_URL = "https://api.github.com/repos/acme/widget/releases/assets/7"
DOWNLOAD = "https://github.com/acme/widget/releases/download/v1/a.txt"

runner = CliRunner()


@pytest.fixture
def http(monkeypatch: pytest.MonkeyPatch) -> MockHttpClient:
    client = MockHttpClient()
    client.set_json("GET", RELEASE_URL, {"upload_url": UPLOAD_URL, "assets": []})
    client.set_json("POST", UPLOAD_ENDPOINT, {"browser_download_url": DOWNLOAD}, status=201)
    monkeypatch.setattr(helpers, "build_http_client", lambda: client)
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    return client


def _upload_args(asset_path: Path, *extra: str) -> list[str]:
    return [
        "upload",
        "--upload-url",
        UPLOAD_URL,
        "--asset-path",
        str(asset_path),
        "--token",
        "t0ken",
        *extra,
    ]


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_upload_prints_urls(http: MockHttpClient, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")

    result = runner.invoke(app, _upload_args(tmp_path / "a.txt"))

    assert result.exit_code == 0, result.output
    assert DOWNLOAD in result.output.splitlines()
    assert http.closed
    upload = http.calls[-1]
    assert upload.params == {"name": "a.txt"}
    assert upload.headers["Authorization"] == "token t0ken"
    assert upload.body == b"hello"


def test_upload_json_output(http: MockHttpClient, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")

    result = runner.invoke(app, _upload_args(tmp_path / "a.txt", "--json"))

    assert result.exit_code == 0, result.output
    json_line = next(line for line in result.output.splitlines() if line.startswith("["))
    assert json.loads(json_line) == [DOWNLOAD]


def test_collision_exits_with_validation_code(http: MockHttpClient, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")
    http.set_json(
        "GET",
        RELEASE_URL,
        {"upload_url": UPLOAD_URL, "assets": [{"url": ASSET_URL, "id": 7, "name": "a.txt"}]},
    )

    result = runner.invoke(app, _upload_args(tmp_path / "a.txt"))

    assert result.exit_code == int(ErrorCode.VALIDATION_ERROR)
    assert "already exists" in result.output
    assert [c.method for c in http.calls] == ["GET"]


def test_overwrite_deletes_then_uploads(http: MockHttpClient, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")
    http.set_json(
        "GET",
        RELEASE_URL,
        {"upload_url": UPLOAD_URL, "assets": [{"url": ASSET_URL, "id": 7, "name": "a.txt"}]},
    )
    http.set_response("DELETE", ASSET_URL, HttpResponse(204))

    result = runner.invoke(app, _upload_args(tmp_path / "a.txt", "--overwrite"))

    assert result.exit_code == 0, result.output
    assert [c.method for c in http.calls] == ["GET", "DELETE", "POST"]


def test_api_error_exits_with_network_code(http: MockHttpClient, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")
    http.set_response("GET", RELEASE_URL, HttpResponse(404, b'{"message": "Not Found"}'))

    result = runner.invoke(app, _upload_args(tmp_path / "a.txt"))

    assert result.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert "unexpected status code: 404" in result.output


def test_action_writes_github_output(
    http: MockHttpClient, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "t0ken")
    monkeypatch.setenv("INPUT_UPLOAD_URL", UPLOAD_URL)
    monkeypatch.setenv("INPUT_ASSET_PATH", str(tmp_path / "a.txt"))
    monkeypatch.setenv("INPUT_OVERWRITE", "false")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    result = runner.invoke(app, ["action"])

    assert result.exit_code == 0, result.output
    text = output_file.read_text(encoding="utf-8")
    assert text.startswith("browser_download_url<<ghadelimiter_")
    assert f"\n{DOWNLOAD}\n" in text


def test_action_missing_input(http: MockHttpClient, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("INPUT_GITHUB_TOKEN", "INPUT_UPLOAD_URL", "INPUT_ASSET_PATH"):
        monkeypatch.delenv(name, raising=False)

    result = runner.invoke(app, ["action"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "input required and not supplied: github_token" in result.output
    assert http.calls == []
