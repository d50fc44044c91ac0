"""Tests for the apikeyauth command line entry point."""

from pathlib import Path

import pytest

from apikeyauth.__main__ import EXIT_MALFORMED, EXIT_NO_HEADER, EXIT_OK, main


@pytest.fixture
def no_config(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "nonexistent.yaml")]


class TestMain:
    def test_valid_value_prints_key(self, no_config, capsys) -> None:
        assert main([*no_config, "ApiKey validkey123"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == '"validkey123"'

    def test_empty_key_printed_quoted(self, no_config, capsys) -> None:
        assert main([*no_config, "ApiKey    spacedkey789"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == '""'

    def test_no_values(self, no_config, capsys) -> None:
        assert main(no_config) == EXIT_NO_HEADER
        assert "no authorization header" in capsys.readouterr().err

    def test_malformed(self, no_config, capsys) -> None:
        assert main([*no_config, "Bearer someapikey"]) == EXIT_MALFORMED
        assert "malformed authorization header" in capsys.readouterr().err

    def test_first_of_several_values(self, no_config, capsys) -> None:
        assert main([*no_config, "ApiKey first", "ApiKey second"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == '"first"'
