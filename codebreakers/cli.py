"""
Codebreakers CLI
================

Click-based command-line interface. Every cipher exposes ``encipher``
and ``decipher`` subcommands that take a ``--key`` and read raw bytes
from a file argument or standard input, writing grouped output to
standard output.

Usage::

    echo "WE ARE DISCOVERED. FLEE AT ONCE" | codebreakers columnar encipher --key ZEBRAS
    codebreakers vigenere decipher --key TYPE message.txt
    codebreakers frequency --digrams message.txt
    codebreakers serve --port 8000
"""

import logging
import sys
from typing import BinaryIO

import click

from codebreakers.core.config import get_settings
from codebreakers.core.exceptions import CipherError, TextTooLongError
from codebreakers.core.logging import configure_logging
from codebreakers.models.schemas import CipherType
from codebreakers.services.analysis.frequency import FrequencyAnalyzer
from codebreakers.services.engines.registry import EngineRegistry
from codebreakers.services.output.formatter import format_output

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Minimum log severity written to stderr (defaults to settings).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Historical manual ciphers and simple cryptanalysis aids."""
    ctx.ensure_object(dict)

    settings = get_settings()
    configure_logging(log_level or settings.log_level)

    ctx.obj["settings"] = settings
    ctx.obj["registry"] = EngineRegistry()


def _read_source(ctx: click.Context, source: BinaryIO) -> bytes:
    """Read raw input bytes, enforcing the configured size limit."""
    text = source.read()
    max_length = ctx.obj["settings"].max_text_length
    if len(text) > max_length:
        raise TextTooLongError(len(text), max_length)
    return text


def _emit(ctx: click.Context, letters: str) -> None:
    settings = ctx.obj["settings"]
    click.echo(
        format_output(letters, settings.output_group_size, settings.output_line_length)
    )


def _fail(exc: CipherError) -> None:
    logger.debug("Command failed: %s", exc.details)
    click.echo(f"Error: {exc.message}", err=True)
    sys.exit(1)


def _cipher_group(cipher_type: CipherType, help_text: str) -> click.Group:
    """Build an ``encipher``/``decipher`` command group for one cipher."""

    @click.group(name=cipher_type.value, help=help_text)
    def group() -> None:
        pass

    @group.command()
    @click.option("--key", "-k", required=True, help="Keyword, keyphrase or primer.")
    @click.argument("source", type=click.File("rb"), default="-")
    @click.pass_context
    def encipher(ctx: click.Context, key: str, source: BinaryIO) -> None:
        """Encipher text from SOURCE (default: standard input)."""
        engine = ctx.obj["registry"].require_engine(cipher_type)
        try:
            ciphertext = engine.encrypt(_read_source(ctx, source), key)
        except CipherError as exc:
            _fail(exc)
        else:
            _emit(ctx, ciphertext)

    @group.command()
    @click.option("--key", "-k", required=True, help="Keyword, keyphrase or primer.")
    @click.argument("source", type=click.File("rb"), default="-")
    @click.pass_context
    def decipher(ctx: click.Context, key: str, source: BinaryIO) -> None:
        """Decipher text from SOURCE (default: standard input)."""
        engine = ctx.obj["registry"].require_engine(cipher_type)
        try:
            result = engine.decrypt_with_key(_read_source(ctx, source), key)
        except CipherError as exc:
            _fail(exc)
        else:
            _emit(ctx, result.plaintext)

    return group


cli.add_command(_cipher_group(
    CipherType.COLUMNAR,
    "Columnar transposition keyed by a keyphrase or a column order like 3,1,2.",
))
cli.add_command(_cipher_group(
    CipherType.VIGENERE,
    "Standard Vigenère cipher with a repeating keyword.",
))
cli.add_command(_cipher_group(
    CipherType.AUTOKEY,
    "Vigenère autokey cipher with a priming key.",
))


@cli.command()
@click.option("--digrams", is_flag=True, default=False, help="Also print the digram table.")
@click.argument("source", type=click.File("rb"), default="-")
@click.pass_context
def frequency(ctx: click.Context, digrams: bool, source: BinaryIO) -> None:
    """Print letter frequency histograms for text from SOURCE."""
    try:
        text = _read_source(ctx, source)
    except CipherError as exc:
        _fail(exc)
    else:
        analyzer = FrequencyAnalyzer()
        click.echo(analyzer.render_histogram(analyzer.single_letter(text)))

        if digrams:
            click.echo()
            click.echo(analyzer.render_digram_table(analyzer.digram(text)))


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", "-p", type=int, default=8000, show_default=True, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Serve the HTTP API with uvicorn."""
    from codebreakers.main import run

    run(host=host, port=port)


def main() -> None:
    """Console-script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
