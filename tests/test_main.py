"""Tests for the action entry point."""
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from nunu_upload_action.errors import DownloadError, UploadError
from nunu_upload_action.main import run

CLI_PATH = Path("/opt/hostedtoolcache/nunu-cli/2.3.1/x86_64/nunu-cli")


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    """Inputs and output file as the runner would provide them"""
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.setenv("INPUT_API-TOKEN", "secret")
    monkeypatch.setenv("INPUT_PROJECT-ID", "42")
    monkeypatch.setenv("INPUT_FILE", "game.zip")
    monkeypatch.setenv("INPUT_CLI-VERSION", "v2.3.1")
    return output_file


@pytest.mark.asyncio
async def test_run_success(action_env, capsys):
    with patch("nunu_upload_action.main.get_cli_path", new_callable=AsyncMock, return_value=CLI_PATH) as get_cli_path, \
         patch("nunu_upload_action.main.upload", new_callable=AsyncMock, return_value="3f2a-bc91") as upload:
        assert await run() == 0

    assert get_cli_path.await_args.args[0] == "v2.3.1"
    assert upload.await_args.args[0] == CLI_PATH
    assert "build-id<<" in action_env.read_text()
    assert "3f2a-bc91" in action_env.read_text()

    out = capsys.readouterr().out
    assert "::add-mask::secret" in out
    assert "::error::" not in out


@pytest.mark.asyncio
async def test_run_without_build_id(action_env):
    with patch("nunu_upload_action.main.get_cli_path", new_callable=AsyncMock, return_value=CLI_PATH), \
         patch("nunu_upload_action.main.upload", new_callable=AsyncMock, return_value=None):
        assert await run() == 0

    assert action_env.read_text() == ""


@pytest.mark.asyncio
async def test_run_missing_input(action_env, monkeypatch, capsys):
    monkeypatch.delenv("INPUT_FILE")

    with patch("nunu_upload_action.main.get_cli_path", new_callable=AsyncMock) as get_cli_path:
        assert await run() == 1

    get_cli_path.assert_not_awaited()
    assert "::error::Input required and not supplied: file" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_invalid_input(action_env, monkeypatch, capsys):
    monkeypatch.setenv("INPUT_UPLOAD-TIMEOUT", "5000")

    assert await run() == 1
    assert "::error::Invalid upload-timeout: 5000" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_install_failure(action_env, capsys):
    error = DownloadError("https://example.test/nunu-cli", 404)
    with patch("nunu_upload_action.main.get_cli_path", new_callable=AsyncMock, side_effect=error), \
         patch("nunu_upload_action.main.upload", new_callable=AsyncMock) as upload:
        assert await run() == 1

    upload.assert_not_awaited()
    assert "::error::Failed to download https://example.test/nunu-cli: HTTP 404" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_upload_failure(action_env, capsys):
    with patch("nunu_upload_action.main.get_cli_path", new_callable=AsyncMock, return_value=CLI_PATH), \
         patch("nunu_upload_action.main.upload", new_callable=AsyncMock, side_effect=UploadError(1, "denied")):
        assert await run() == 1

    assert "::error::Upload failed with exit code 1%0Adenied" in capsys.readouterr().out
