"""Tests for the vigenere command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vigenere import __version__
from vigenere.cli import cli


def _invoke(runner: CliRunner, *args: str, **kwargs):
    return runner.invoke(cli, list(args), obj={}, **kwargs)


class TestTextCommands:
    def test_encipher_to_stdout(self, cli_runner: CliRunner) -> None:
        result = _invoke(
            cli_runner, "-q", "-p", "letters",
            "encipher", "-k", "LEMON", "-t", "attack at dawn", "--no-marker",
        )
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"LXFOPVEFRNHR\n"

    def test_decipher_to_stdout(self, cli_runner: CliRunner) -> None:
        result = _invoke(
            cli_runner, "-q", "-p", "letters",
            "decipher", "-k", "LEMON", "-t", "LXFOPVEFRNHR", "--no-marker",
        )
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"ATTACKATDAWN\n"

    def test_key_prompt(self, cli_runner: CliRunner) -> None:
        result = _invoke(
            cli_runner, "-q", "-p", "letters",
            "encipher", "-t", "attack at dawn", "--no-marker",
            input="LEMON\n",
        )
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes.endswith(b"LXFOPVEFRNHR\n")
        assert b"LEMON" not in result.stdout_bytes

    def test_text_to_dest_round_trip(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        enc = tmp_path / "msg.enc"
        dec = tmp_path / "msg.txt"
        plain = "Привет, мир! Hello."

        result = _invoke(cli_runner, "encipher", "-k", "ключ", "-t", plain, "-d", str(enc))
        assert result.exit_code == 0, result.output
        assert "Enciphered" in result.output

        result = _invoke(cli_runner, "decipher", "-k", "ключ", "-i", str(enc), "-d", str(dec))
        assert result.exit_code == 0, result.output
        assert dec.read_text(encoding="utf-8") == plain


class TestFileCommands:
    def test_round_trip_with_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "tabula.toml"
        cfg.write_text(
            '[vigenere]\npolicy = "letters"\nchunk_size = 2\nbatch_size = 3\n',
            encoding="utf-8",
        )
        src = tmp_path / "msg.txt"
        src.write_text("Attack at dawn\n", encoding="utf-8")
        enc = tmp_path / "msg.enc"
        dec = tmp_path / "msg.dec"

        result = _invoke(
            cli_runner, "-c", str(cfg), "-q",
            "encipher", "-k", "LEMON", "-i", str(src), "-d", str(enc),
        )
        assert result.exit_code == 0, result.output

        result = _invoke(
            cli_runner, "-c", str(cfg), "-q",
            "decipher", "-k", "lemon", "-i", str(enc), "-d", str(dec),
        )
        assert result.exit_code == 0, result.output
        assert dec.read_text(encoding="utf-8") == "ATTACKATDAWN"

    def test_binary_round_trip(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "data.bin"
        src.write_bytes(bytes(range(0x20, 0x100)))
        enc = tmp_path / "data.enc"
        dec = tmp_path / "data.dec"

        for command, source, dest in (("encipher", src, enc), ("decipher", enc, dec)):
            result = _invoke(
                cli_runner, "-q", "-p", "extended", command,
                "-k", "s3cret", "-i", str(source), "-d", str(dest), "--binary",
            )
            assert result.exit_code == 0, result.output
        assert dec.read_bytes() == src.read_bytes()

    def test_marker_mismatch(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "msg.txt"
        src.write_text("nothing to see here", encoding="utf-8")
        dec = tmp_path / "msg.dec"

        result = _invoke(cli_runner, "decipher", "-k", "key", "-i", str(src), "-d", str(dec))
        assert result.exit_code == 1
        assert "marker mismatch" in result.output
        assert not dec.exists()


class TestErrors:
    def test_invalid_key(self, cli_runner: CliRunner) -> None:
        result = _invoke(
            cli_runner, "-p", "letters", "encipher", "-k", "abc123", "-t", "hello",
        )
        assert result.exit_code == 1
        assert "key must be composed" in result.output

    def test_binary_needs_byte_policy(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "data.bin"
        src.write_bytes(b"abc")
        result = _invoke(
            cli_runner, "encipher", "-k", "key",
            "-i", str(src), "-d", str(tmp_path / "out"), "--binary",
        )
        assert result.exit_code == 1
        assert "Binary mode" in result.output

    def test_undecodable_input(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "broken.txt"
        src.write_bytes(b"abc\xff")
        result = _invoke(
            cli_runner, "encipher", "-k", "key", "-i", str(src), "-d", str(tmp_path / "out"),
        )
        assert result.exit_code == 1
        assert "not valid utf-8" in result.output

    def test_needs_text_or_input(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "encipher", "-k", "key")
        assert result.exit_code == 2

    def test_text_and_input_exclusive(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "msg.txt"
        src.write_text("hi", encoding="utf-8")
        result = _invoke(cli_runner, "encipher", "-k", "key", "-t", "hi", "-i", str(src))
        assert result.exit_code == 2

    def test_input_needs_dest(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "msg.txt"
        src.write_text("hi", encoding="utf-8")
        result = _invoke(cli_runner, "encipher", "-k", "key", "-i", str(src))
        assert result.exit_code == 2

    def test_binary_needs_input(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "encipher", "-k", "key", "-t", "hi", "--binary")
        assert result.exit_code == 2

    def test_unknown_policy(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "-p", "runes", "policies")
        assert result.exit_code == 2

    def test_invalid_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "bad.toml"
        cfg.write_text("[vigenere]\nchunk_size = 0\n", encoding="utf-8")
        result = _invoke(cli_runner, "-c", str(cfg), "policies")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    @pytest.mark.parametrize(
        "body", ['[vigenere]\nchunk_size = "32"\n', "[vigenere]\nmarker = 5\n"]
    )
    def test_mistyped_config(
        self, cli_runner: CliRunner, tmp_path: Path, body: str
    ) -> None:
        cfg = tmp_path / "bad.toml"
        cfg.write_text(body, encoding="utf-8")
        result = _invoke(cli_runner, "-c", str(cfg), "encipher", "-k", "A", "-t", "x")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not isinstance(result.exception, TypeError)


class TestReports:
    def test_json_report_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        report = tmp_path / "report.json"
        result = _invoke(
            cli_runner, "-q", "-p", "letters", "-o", "json", "-f", str(report),
            "encipher", "-k", "LEMON", "-t", "attack at dawn", "--no-marker",
        )
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"LXFOPVEFRNHR\n"
        document = json.loads(report.read_text(encoding="utf-8"))
        assert document["session"]["direction"] == "encipher"
        assert document["session"]["symbols_dropped"] == 2

    def test_json_report_stdout(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        dest = tmp_path / "out.enc"
        result = _invoke(
            cli_runner, "-q", "-o", "json",
            "encipher", "-k", "key", "-t", "hello", "-d", str(dest),
        )
        assert result.exit_code == 0, result.output
        document = json.loads(result.stdout)
        assert document["session"]["destination"] == str(dest)
        assert document["session"]["marker_used"] is True

    def test_json_stdout_conflicts_with_ciphertext(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "-o", "json", "encipher", "-k", "key", "-t", "hello")
        assert result.exit_code == 2


class TestInformational:
    def test_policies(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "-q", "policies")
        assert result.exit_code == 0

        result = _invoke(cli_runner, "policies")
        assert result.exit_code == 0
        for name in ("letters", "printable", "extended", "unicode (default)"):
            assert name in result.output

    def test_policy_option_marks_default(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "-p", "letters", "policies")
        assert "letters (default)" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = _invoke(cli_runner, "--help")
        assert result.exit_code == 0
        for command in ("encipher", "decipher", "policies"):
            assert command in result.output
