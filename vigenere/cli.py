"""
Vigenère CLI
=============

Click-based command-line interface for the Vigenère cipher tool.

Usage::

    python -m vigenere encipher --key LEMON --text "attack at dawn"
    python -m vigenere -p letters decipher -k LEMON -t "LXFOPVEFRNHR" --no-marker
    python -m vigenere encipher -k "Тестовый пароль" -i notes.txt -d notes.enc
    python -m vigenere -p extended encipher -k secret -i image.bin -d image.enc --binary
    python -m vigenere -o json -f report.json decipher -k LEMON -i notes.enc -d notes.txt
    python -m vigenere policies

Cipher output goes to ``--dest`` or, for ``--text`` input, to stdout.
Banners, status and errors go to stderr.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from shared.config import TabulaConfig
from shared.console import TabulaConsole
from shared.logger import TabulaLogger, configure_logging

from vigenere import __version__
from vigenere.core.errors import InvalidKeyError, MarkerMismatchError
from vigenere.core.models import Direction, SessionReport
from vigenere.core.policy import PolicyName, available_policies
from vigenere.core.session import CipherSession
from vigenere.output.console import VigenereConsoleOutput
from vigenere.output.report import VigenereReportGenerator
from vigenere.streams.reader import codec_errors
from vigenere.streams.writer import write_symbols

_POLICY_CHOICES = [name.value for name in PolicyName]

logger = TabulaLogger("vigenere.cli")


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a Tabula configuration file (TOML).",
)
@click.option(
    "--policy", "-p",
    type=click.Choice(_POLICY_CHOICES, case_sensitive=False),
    default=None,
    help="Symbol policy (alphabet). Overrides the configuration.",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Report format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON report to this file.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(__version__, prog_name="vigenere")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    policy: Optional[str],
    output: Optional[str],
    output_file: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """Tabula Vigenère -- polyalphabetic cipher tool.

    Encipher and decipher text or files with a repeating key over a
    selectable alphabet.
    """
    ctx.ensure_object(dict)

    try:
        tabula_config = TabulaConfig.load(config) if config else TabulaConfig()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    settings = tabula_config.global_settings
    configure_logging(
        log_level="DEBUG" if verbose or settings.debug else settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
        console_output=not quiet,
    )

    ctx.obj["config"] = tabula_config
    ctx.obj["policy"] = policy or tabula_config.vigenere.policy
    ctx.obj["output_format"] = output or tabula_config.vigenere.output_format
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = TabulaConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["display"] = VigenereConsoleOutput(console)
    ctx.obj["reporter"] = VigenereReportGenerator()

    if not quiet:
        console.banner(version=__version__)


def _handle_output(ctx: click.Context, report: SessionReport) -> None:
    """Emit the session report in the selected format."""
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: VigenereReportGenerator = ctx.obj["reporter"]
    console: TabulaConsole = ctx.obj["console"]

    if output_format == "json":
        if output_file:
            path = reporter.generate_json(report, Path(output_file))
            console.success(f"JSON report saved to: {path}")
        else:
            click.echo(reporter.render_json(report))
    else:
        ctx.obj["display"].display_report(report)


def _echo_symbols(text: str, encoding: str) -> None:
    """Write cipher output to stdout as encoded bytes.

    Unicode ciphertext may contain lone surrogates, which a text-mode
    stdout refuses to encode.
    """
    stream = click.get_binary_stream("stdout")
    stream.write(text.encode(encoding, codec_errors(encoding)) + b"\n")
    stream.flush()


def _fail(ctx: click.Context, message: str) -> None:
    """Report a recoverable failure and exit with status 1."""
    logger.error(message)
    ctx.obj["console"].error(message)
    ctx.exit(1)


# ===================================================================== #
#  Cipher Commands
# ===================================================================== #

def _cipher_options(func):
    """Options shared by ``encipher`` and ``decipher``."""
    decorators = [
        click.option(
            "--key", "-k",
            prompt="Key",
            hide_input=True,
            help="Cipher key. Prompted for (hidden) when omitted.",
        ),
        click.option(
            "--text", "-t",
            default=None,
            help="Text to transform.",
        ),
        click.option(
            "--input", "-i", "input_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="File to transform.",
        ),
        click.option(
            "--dest", "-d",
            type=click.Path(dir_okay=False),
            default=None,
            help="Destination file (stdout for --text when omitted).",
        ),
        click.option(
            "--binary",
            is_flag=True,
            default=False,
            help="Treat the input file as raw bytes.",
        ),
        click.option(
            "--marker/--no-marker",
            default=None,
            help="Prepend / verify the identifying marker.",
        ),
        click.pass_context,
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _run_cipher(
    ctx: click.Context,
    direction: Direction,
    key: str,
    text: Optional[str],
    input_path: Optional[str],
    dest: Optional[str],
    binary: bool,
    marker: Optional[bool],
) -> None:
    if (text is None) == (input_path is None):
        raise click.UsageError("Provide exactly one of --text or --input.")
    if input_path is not None and dest is None:
        raise click.UsageError("--dest is required with --input.")
    if binary and input_path is None:
        raise click.UsageError("--binary applies to --input files only.")
    if (
        ctx.obj["output_format"] == "json"
        and ctx.obj["output_file"] is None
        and dest is None
    ):
        raise click.UsageError(
            "A JSON report on stdout needs --dest or --output-file."
        )

    config: TabulaConfig = ctx.obj["config"]
    console: TabulaConsole = ctx.obj["console"]

    try:
        session = CipherSession(config, policy=ctx.obj["policy"], use_marker=marker)
    except ValueError as exc:
        _fail(ctx, str(exc))
        return

    action = direction.value.capitalize()
    try:
        if input_path is not None:
            run = (
                session.encipher_file
                if direction is Direction.ENCIPHER
                else session.decipher_file
            )
            with console.status(f"{action}ing {input_path}..."):
                report = run(input_path, dest, key, binary=binary)  # type: ignore[arg-type]
        else:
            run_text = (
                session.encipher_text
                if direction is Direction.ENCIPHER
                else session.decipher_text
            )
            outcome = run_text(text, key)  # type: ignore[arg-type]
            report = outcome.report
            if dest is not None:
                write_symbols(
                    outcome.text,
                    dest,
                    batch_size=config.vigenere.batch_size,
                    encoding=config.vigenere.encoding,
                )
                report.destination = dest
            else:
                _echo_symbols(outcome.text, config.vigenere.encoding)
    except InvalidKeyError as exc:
        _fail(ctx, str(exc))
        return
    except MarkerMismatchError as exc:
        _fail(ctx, str(exc))
        return
    except UnicodeError as exc:
        _fail(ctx, f"Text is not valid {config.vigenere.encoding}: {exc}")
        return
    except OSError as exc:
        _fail(ctx, f"File error: {exc}")
        return
    except ValueError as exc:
        _fail(ctx, str(exc))
        return

    _handle_output(ctx, report)


@cli.command()
@_cipher_options
def encipher(
    ctx: click.Context,
    key: str,
    text: Optional[str],
    input_path: Optional[str],
    dest: Optional[str],
    binary: bool,
    marker: Optional[bool],
) -> None:
    """Encipher text or a file with KEY.

    Symbols outside the selected alphabet are dropped from the output.
    """
    _run_cipher(ctx, Direction.ENCIPHER, key, text, input_path, dest, binary, marker)


@cli.command()
@_cipher_options
def decipher(
    ctx: click.Context,
    key: str,
    text: Optional[str],
    input_path: Optional[str],
    dest: Optional[str],
    binary: bool,
    marker: Optional[bool],
) -> None:
    """Decipher text or a file with KEY.

    With the marker enabled the output is only written when the
    identifying marker deciphers correctly.
    """
    _run_cipher(ctx, Direction.DECIPHER, key, text, input_path, dest, binary, marker)


# ===================================================================== #
#  Informational Commands
# ===================================================================== #

@cli.command()
@click.pass_context
def policies(ctx: click.Context) -> None:
    """List the available symbol policies."""
    display: VigenereConsoleOutput = ctx.obj["display"]
    display.display_policies(available_policies(), default=ctx.obj["policy"])


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Vigenère CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
