"""Tests for the command line interface."""

import pytest

from clientgen import cli
from clientgen.cli import build_parser, main


@pytest.fixture(autouse=True)
def logging_levels(monkeypatch):
    """Record logging configuration instead of installing handlers."""
    levels = []
    monkeypatch.setattr(cli, "configure_logging", levels.append)
    return levels


class TestCli:
    """Test the generate command."""

    def test_generate_javascript(self, transfer_spec_path, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        code = main(["generate", "javascript", str(transfer_spec_path), "--api-name", "transfer", "--out", "out"])

        output = capsys.readouterr().out
        assert code == 0
        assert "Generating javascript client: transfer" in output
        assert "8 types, 5 actions" in output
        assert (tmp_path / "out" / "transfer" / "src" / "index.js").is_file()

    def test_generate_php_with_options(self, transfer_spec_path, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        code = main(
            [
                "generate",
                "php",
                str(transfer_spec_path),
                "--api-name",
                "transfer",
                "--vendor-prefix",
                "acme",
                "--package-name",
                "acme/transfer-sdk",
                "--out",
                str(tmp_path / "php"),
            ]
        )
        assert code == 0
        composer = (tmp_path / "php" / "transfer" / "composer.json").read_text(encoding="utf-8")
        assert '"name": "acme/transfer-sdk"' in composer

    def test_strict_failure_exit_code(self, transfer_spec_path, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        code = main(["generate", "javascript", str(transfer_spec_path), "--api-name", "t", "--strict"])

        assert code == 1
        assert "Mystery (CG003)" in capsys.readouterr().err
        assert not (tmp_path / "build").exists()

    def test_missing_spec(self, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["generate", "php", str(tmp_path / "missing.raml"), "--api-name", "t"]) == 1
        assert "CG001" in capsys.readouterr().err

    def test_config_file(self, transfer_spec_path, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "clientgen.toml").write_text(
            'language = "php"\napi_name = "configured"\noutput_dir = "gen"\n', encoding="utf-8"
        )
        assert main(["generate", "php", str(transfer_spec_path)]) == 0
        assert (tmp_path / "gen" / "configured" / "composer.json").is_file()

    def test_unsupported_language(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "cobol", "api.raml"])

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_log_level_option(self, transfer_spec_path, tmp_path, monkeypatch, logging_levels):
        monkeypatch.chdir(tmp_path)
        main(["generate", "javascript", str(transfer_spec_path), "--api-name", "t", "--log-level", "debug"])
        assert logging_levels == ["DEBUG"]
