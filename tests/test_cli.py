"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest

from gssheets import __version__
from gssheets.cli import main
from gssheets.google import CorruptTokenError, GoogleOAuth
from gssheets.operations import UploadResult


class TestCli:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_download_requires_sheet(self):
        with pytest.raises(SystemExit):
            main(["download"])

    def test_download_missing_client_credentials(self, tmp_path, capsys):
        code = main(
            [
                "download",
                "--credential",
                str(tmp_path / "missing.json"),
                "--sheet",
                "sheet-123",
                "--out",
                str(tmp_path / "out.csv"),
            ]
        )
        assert code == 1
        assert "Credentials file not found" in capsys.readouterr().err

    def test_upload_reports_bad_table(self, tmp_path, client_credentials, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("a,b\nc\n")
        with patch("gssheets.cli._build_client"):
            code = main(["upload", "--credential", str(client_credentials), "--in", str(path)])
        assert code == 1
        assert "invalid number of columns" in capsys.readouterr().err

    def test_upload_prints_url(self, tmp_path, client_credentials, capsys):
        path = tmp_path / "people.csv"
        path.write_text("a,b\n")
        result = UploadResult("sheet-123", "https://example.test/sheet-123", "Data!A:B", 1, 2)
        with (
            patch("gssheets.cli._build_client"),
            patch("gssheets.operations.upload", return_value=result) as upload,
        ):
            code = main(
                ["upload", "--credential", str(client_credentials), "--in", str(path), "--no-frozen"]
            )
        assert code == 0
        assert upload.call_args.kwargs["frozen"] is False
        assert "https://example.test/sheet-123" in capsys.readouterr().out

    def test_status_without_client_credentials(self, tmp_path, capsys):
        assert main(["status", "--credential", str(tmp_path / "missing.json")]) == 1
        assert "[ ]" in capsys.readouterr().out

    def test_revoke_with_malformed_client_credentials(self, tmp_path, capsys):
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"installed": {"client_id": "id"}}))
        assert main(["revoke", "--credential", str(path)]) == 1
        assert "Error: Client secret file is missing" in capsys.readouterr().out

    def test_revoke_with_corrupt_token(self, client_credentials, capsys):
        with patch.object(
            GoogleOAuth, "revoke_token", side_effect=CorruptTokenError("memory://token", "bad json")
        ):
            code = main(["revoke", "--credential", str(client_credentials)])
        assert code == 1
        assert "Error:" in capsys.readouterr().out
