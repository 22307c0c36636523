import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import typer
from typing_extensions import Annotated

from textsplitter import __version__
from textsplitter.chunking import InvalidArgument, TextChunker, split_text
from textsplitter.config import DEFAULT_CONFIG_FILE, Config
from textsplitter.logging_setup import level_from_name, setup_logging

cli = typer.Typer(
    help="TextSplitter CLI – split large text into parts for size-limited chat inputs",
    invoke_without_command=True,
    add_completion=False,  # hide completion install/show options
)

logger = logging.getLogger(__name__)

DIVIDER = "=" * 50


def get_config(ctx: typer.Context) -> Config:
    if isinstance(ctx.obj, Config):
        return ctx.obj
    return Config.load(DEFAULT_CONFIG_FILE)


def format_chunks(chunks: list) -> str:
    """Render parts with numbered headers, dividers and a closing summary."""
    lines = []
    for i, chunk in enumerate(chunks):
        lines.append(f"=== PART {i + 1}/{len(chunks)} ===")
        lines.append(f"Characters: {len(chunk)}")
        lines.append("---")
        lines.append(chunk)
        if i < len(chunks) - 1:
            lines.append("\n" + DIVIDER + "\n")
    lines.append(f"\n\nSummary: Split into {len(chunks)} parts")
    return "\n".join(lines)


def read_input(file: Optional[Path]) -> str:
    if file is None:
        return sys.stdin.read()
    try:
        with open(file, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        typer.secho(f"Error opening file: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def checked_split(text: str, size: int) -> list:
    try:
        return split_text(text, size)
    except InvalidArgument as e:
        raise typer.BadParameter(str(e), param_hint="'--size'")


def checked_size(size: int) -> int:
    try:
        return TextChunker(size).chunk_size
    except InvalidArgument as e:
        raise typer.BadParameter(str(e), param_hint="'--size'")


def open_terminal() -> Optional[TextIO]:
    """Controlling terminal for commands once stdin has been consumed by a pipe."""
    try:
        return open("/dev/tty", "r", encoding="utf-8")
    except OSError as e:
        logger.debug("No controlling terminal: %s", e)
        return None


def version_callback(value: bool):
    if value:
        typer.echo(f"TextSplitter {__version__}")
        raise typer.Exit()


@cli.command()
def split(
    ctx: typer.Context,
    size: Annotated[Optional[int], typer.Option("--size", "-s", help="Maximum characters per chunk")] = None,
    file: Annotated[Optional[Path], typer.Option("--file", "-f", help="Input file (reads from stdin if not provided)", dir_okay=False)] = None,
):
    """Split text from a file or stdin and print the numbered parts."""
    cfg = get_config(ctx)
    size = cfg.chunk_size if size is None else size
    content = read_input(file).strip()
    if not content:
        typer.echo("No content to split")
        return
    chunks = checked_split(content, size)
    logger.info("Split %d characters into %d parts", len(content), len(chunks))
    typer.echo(format_chunks(chunks))


@cli.command()
def tui(
    ctx: typer.Context,
    size: Annotated[Optional[int], typer.Option("--size", "-s", help="Initial maximum characters per chunk")] = None,
):
    """Start the interactive terminal UI."""
    from textsplitter.tui import SizeLimits, run_tui

    cfg = get_config(ctx)
    size = cfg.chunk_size if size is None else size
    checked_size(size)

    initial_text = ""
    stream = None
    if not sys.stdin.isatty():
        initial_text = sys.stdin.read().strip()
        stream = open_terminal()
        if stream is None:
            typer.secho("Interactive mode needs a terminal. Use `textsplitter split` for piped input.", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)

    limits = SizeLimits(minimum=cfg.min_chunk_size, maximum=cfg.max_chunk_size, step=cfg.size_step)
    try:
        run_tui(size, initial_text, limits=limits, stream=stream)
    finally:
        if stream is not None:
            stream.close()


@cli.command()
def serve(
    ctx: typer.Context,
    host: Annotated[Optional[str], typer.Option(help="Interface to bind")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port to run the web server on")] = None,
    open_browser: Annotated[Optional[bool], typer.Option("--open/--no-open", help="Automatically open browser")] = None,
):
    """Serve the web page on localhost."""
    from textsplitter.web import serve as run_server

    cfg = get_config(ctx)
    if host is not None:
        cfg.host = host
    if port is not None:
        cfg.port = port
    if open_browser is not None:
        cfg.open_browser = open_browser
    run_server(cfg, verbose=ctx.meta.get("verbose", False))


@cli.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Annotated[Path, typer.Option(help="YAML config file")] = Path(DEFAULT_CONFIG_FILE),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
    version: Annotated[Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version information")] = None,
):
    """Default behavior: show help when no subcommand is supplied."""
    cfg = Config.load(config)
    level = logging.DEBUG if verbose else level_from_name(cfg.log_level)
    setup_logging(cfg.log_dir, level=level, force=True)
    ctx.obj = cfg
    ctx.meta["verbose"] = verbose
    if ctx.invoked_subcommand is not None:
        return  # Another command will run
    typer.echo(ctx.get_help())


if __name__ == "__main__":
    cli()
