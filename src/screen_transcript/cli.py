"""CLI entry points: screen-transcript replay, screen-transcript chat, screen-transcript mirror."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import Config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log gate and delta decisions to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Turn recorded terminal screens of a chat TUI into a transcript."""
    ctx.ensure_object(dict)
    try:
        config = Config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.resolve_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["config"] = config


def _load(config: Config, recording: Path) -> list[str]:
    from .replay import read_snapshots

    snapshots = read_snapshots(recording, config.snapshot_separator)
    if not snapshots:
        raise click.ClickException(f"No screens found in {recording}")
    return snapshots


def _pick(snapshots: list[str], index: int) -> str:
    try:
        return snapshots[index]
    except IndexError:
        raise click.BadParameter(
            f"{index} is out of range for {len(snapshots)} screen(s)", param_hint="--index"
        ) from None


@cli.command()
@click.argument("recording", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--jsonl", is_flag=True, help="Print one JSON transcript envelope per block")
@click.option("--deltas", is_flag=True, help="Also print the chat-area delta for every screen")
@click.pass_context
def replay(ctx: click.Context, recording: Path, jsonl: bool, deltas: bool) -> None:
    """Replay a recording and print each message the first time it settles."""
    from .replay import replay_frames, transcript_envelope
    from .session import DeltaKind, ScreenSession

    config = ctx.obj["config"]
    snapshots = _load(config, recording)

    session = ScreenSession()
    emitted = 0
    for n, update in enumerate(replay_frames(snapshots, session)):
        if deltas and update.delta.kind is not DeltaKind.NO_CHANGE:
            click.echo(f"[{n}] {update.delta.kind.value} {update.delta.delta!r}", err=jsonl)
        for block in update.blocks:
            emitted += 1
            if jsonl:
                click.echo(transcript_envelope(block))
            else:
                click.echo("---")
                click.echo(block.text)

    if not jsonl:
        click.echo(
            f"{emitted} message(s) from {len(snapshots)} screen(s), "
            f"{session.deltas.rewrite_events} rewrite(s), "
            f"{session.deltas.total_emitted_chars:,} streamed chars"
        )


@cli.command()
@click.argument("recording", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--index", type=int, default=-1, help="Which screen to show (default: last)")
@click.pass_context
def chat(ctx: click.Context, recording: Path, index: int) -> None:
    """Print the chat area of one recorded screen."""
    from .screen.chat_area import extract_chat_area

    config = ctx.obj["config"]
    area = extract_chat_area(_pick(_load(config, recording), index))

    if area.prompt_row is None:
        click.echo("prompt: not visible")
    else:
        click.echo(f"prompt: row {area.prompt_row}")
    click.echo(area.text)


@cli.command()
@click.argument("recording", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--rows", type=int, default=None, help="Rows in the projection (default: SCREEN_TRANSCRIPT_ROWS or 40)")
@click.option("--index", type=int, default=-1, help="Which screen to show (default: last)")
@click.pass_context
def mirror(ctx: click.Context, recording: Path, rows: int | None, index: int) -> None:
    """Print a fixed-height copy of one screen with chrome and the prompt blanked."""
    from .screen.mirror import mirror_screen

    config = ctx.obj["config"]
    if rows is None:
        rows = config.mirror_rows
    if rows < 0:
        raise click.BadParameter("must not be negative", param_hint="--rows")

    for line in mirror_screen(_pick(_load(config, recording), index), rows):
        click.echo(line)
