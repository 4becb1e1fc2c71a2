"""Typer-based command line interface for sss-core."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

import click
import structlog
import typer

from ..config import AppConfig, dump_default_config, load_config
from ..errors import FatalShamirError, ShareValidationError
from ..logging import configure_logging
from ..orchestrator import ShareOrchestrator
from ..paths import runtime_config_dir
from ..shares import parse_share_lines

app = typer.Typer(help="Shamir secret sharing command line interface", add_completion=False)

logger = structlog.get_logger(__name__)

USAGE = (
    "Expected 'split' or 'combine' subcommands.\n"
    "Usage:\n"
    "  sss split --secret <secret> --n <shares> --t <threshold>\n"
    "  sss combine <x1> <share1> <x2> <share2> ..."
)


def _fail(message: str) -> NoReturn:
    typer.echo(message)
    raise typer.Exit(code=1)


def _orchestrator(ctx: typer.Context) -> ShareOrchestrator:
    config: AppConfig = ctx.obj
    return ShareOrchestrator.from_config(config)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH", help="YAML configuration file"),
) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        _fail(str(exc))
    configure_logging(ctx.obj.logging.normalized_level())


@app.command()
def split(
    ctx: typer.Context,
    secret: str = typer.Option("", "--secret", help="Secret to split."),
    n: int = typer.Option(0, "--n", help="Number of shares to split secret into."),
    t: int = typer.Option(0, "--t", help="Threshold needed to piece together the secret."),
) -> None:
    """Split an ASCII secret into n shares, any t of which recover it."""
    try:
        bundles = _orchestrator(ctx).split(secret, n, t)
    except ShareValidationError as exc:
        _fail(str(exc))
    typer.echo(f"Secret to split: {secret}")
    for bundle in bundles:
        typer.echo(bundle.format_line())


@app.command()
def combine(
    ctx: typer.Context,
    tokens: Optional[List[str]] = typer.Argument(None, metavar="X SHARE [X SHARE]..."),
    shares_file: Optional[Path] = typer.Option(
        None,
        "--shares-file",
        exists=True,
        readable=True,
        dir_okay=False,
        help="Read shares from saved 'split' output instead of arguments.",
    ),
) -> None:
    """Recover a secret from alternating share numbers and shares."""
    flat = list(tokens or [])
    if shares_file is not None:
        flat.extend(parse_share_lines(shares_file.read_text(encoding="utf-8")))
    try:
        secret = _orchestrator(ctx).combine(flat)
    except ShareValidationError as exc:
        _fail(str(exc))
    typer.echo(secret)


@app.command("config-init")
def config_init(
    destination: Optional[Path] = typer.Option(
        None, "--destination", help="Target file (default: per-user config directory)"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default configuration as YAML."""
    target = destination or runtime_config_dir() / "config.yaml"
    if target.exists() and not force:
        _fail(f"Configuration already exists at {target}")
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(f"sss-core {__version__}")


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Invoke the CLI and return the process exit code.

    Validation problems and usage errors exit with 1; fatal internal errors
    (entropy failure, non-invertible element) exit with 2.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        typer.echo(USAGE)
        return 1
    try:
        result = app(args=args, prog_name="sss", standalone_mode=False)
    except click.UsageError as exc:
        typer.echo(exc.format_message())
        typer.echo(USAGE)
        return 1
    except click.ClickException as exc:
        typer.echo(exc.format_message())
        return 1
    except click.Abort:
        return 1
    except FatalShamirError as exc:
        logger.critical("fatal_error", error=type(exc).__name__, exc_info=True)
        typer.echo(f"Fatal: {exc}", err=True)
        return 2
    return result if isinstance(result, int) else 0


def main() -> NoReturn:
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
