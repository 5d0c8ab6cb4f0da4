"""Command-line interface for Hearken.

Provides ``hearken match``, ``similarity`` and ``replay`` commands for
trying command phrases against utterances without a microphone. The entry
point is registered via ``pyproject.toml`` as ``hearken = "hearken.cli:cli"``.
"""

import asyncio
import logging
import re
import sys

import click

from hearken.commands.dispatcher import compile_command, match_command
from hearken.commands.similarity import compare_two_strings
from hearken.commands.types import Command, FuzzyMatch, MatchContext
from hearken.config import get_fuzzy_threshold, get_log_level
from hearken.engine.scripted import ScriptedRecognitionEngine
from hearken.listener import Listener
from hearken.session.manager import SessionManager

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    """Configure the root logger to write to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_phrase(phrase: str, regex: bool) -> str | re.Pattern:
    if not regex:
        return phrase
    try:
        return re.compile(phrase)
    except re.error as exc:
        raise click.BadParameter(f"Invalid regex {phrase!r}: {exc}") from exc


def _validate_threshold(ctx, param, value: float | None) -> float:
    if value is None:
        return get_fuzzy_threshold()
    if not 0.0 <= value <= 1.0:
        raise click.BadParameter(f"Threshold must be between 0 and 1, got {value}.")
    return value


def _reporter(label: str):
    """Return a command callback that prints what it was called with."""

    def callback(*args) -> None:
        context: MatchContext = args[-1]
        values = args[:-1]
        click.echo(f"  matched {label!r} via {context.matched_phrase!r}: {list(values)}")

    return callback


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Hearken — voice command matching and transcript tools."""
    _setup_logging(verbose)


@cli.command()
@click.argument("phrase")
@click.argument("utterance")
@click.option("--regex", is_flag=True, help="Treat PHRASE as a regular expression.")
@click.option("--fuzzy", is_flag=True, help="Match by similarity instead of structure.")
@click.option("--threshold", type=float, default=None, callback=_validate_threshold,
              help="Minimum similarity for --fuzzy (default from HEARKEN_FUZZY_THRESHOLD).")
def match(phrase: str, utterance: str, regex: bool, fuzzy: bool, threshold: float) -> None:
    """Check whether UTTERANCE triggers the command PHRASE."""
    compiled = compile_command(
        Command(
            phrase=_parse_phrase(phrase, regex),
            callback=lambda *args: None,
            is_fuzzy_match=fuzzy,
            fuzzy_matching_threshold=threshold,
        )
    )
    results = match_command(compiled, utterance.strip())
    if not results:
        click.echo("No match.")
        sys.exit(1)

    for result in results:
        if isinstance(result, FuzzyMatch):
            click.echo(f"Fuzzy match {result.normalized_phrase!r} (similarity {result.similarity:.4f})")
        else:
            click.echo(f"Match, parameters: {result.parameters}")


@cli.command()
@click.argument("first")
@click.argument("second")
def similarity(first: str, second: str) -> None:
    """Print the bigram similarity of FIRST and SECOND."""
    click.echo(f"{compare_two_strings(first, second):.4f}")


@cli.command()
@click.argument("transcript_file", type=click.File("r"))
@click.option("--command", "-c", "phrases", multiple=True, help="Command phrase to watch for (repeatable).")
@click.option("--regex", is_flag=True, help="Treat command phrases as regular expressions.")
@click.option("--fuzzy", is_flag=True, help="Match commands by similarity.")
@click.option("--threshold", type=float, default=None, callback=_validate_threshold,
              help="Minimum similarity for --fuzzy.")
@click.option("--continuous", is_flag=True, help="Keep one continuous session open.")
@click.option("--language", default=None, help="Language tag for the session, e.g. en-US.")
def replay(
    transcript_file,
    phrases: tuple[str, ...],
    regex: bool,
    fuzzy: bool,
    threshold: float,
    continuous: bool,
    language: str | None,
) -> None:
    """Replay each line of TRANSCRIPT_FILE as an utterance through a session."""
    commands = [
        Command(
            phrase=_parse_phrase(phrase, regex),
            callback=_reporter(phrase),
            is_fuzzy_match=fuzzy,
            fuzzy_matching_threshold=threshold,
        )
        for phrase in phrases
    ]
    utterances = [line.strip() for line in transcript_file if line.strip()]
    transcript = asyncio.run(_replay(utterances, commands, continuous, language))
    click.echo(f"Transcript: {transcript}")


async def _replay(
    utterances: list[str],
    commands: list[Command],
    continuous: bool,
    language: str | None,
) -> str:
    engine = ScriptedRecognitionEngine()
    session = SessionManager(lambda: engine)
    with Listener(session, commands, clear_transcript_on_listen=False) as listener:
        for utterance in utterances:
            await session.start_listening(continuous=continuous, language=language)
            click.echo(f"> {utterance}")
            engine.say(utterance)
        await session.stop_listening()
        logger.debug("Replayed %d utterance(s)", len(utterances))
        return listener.transcript
