"""cargo-export CLI エントリポイント。

cargo は `cargo export ...` を `cargo-export export ...` として起動する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click
import typer
from rich.console import Console
from typer.core import TyperCommand

from cargo_export.cargo import build_cargo_args, run_cargo
from cargo_export.config import load_config
from cargo_export.errors import CargoExportError, CargoOutputError
from cargo_export.export import copy_artifacts, ensure_target_dir, plan_copies
from cargo_export.logging_setup import setup_logging
from cargo_export.naming import target_file_name

APP_HELP = "Export cargo test/bench binaries into a directory."

USAGE = "usage: cargo export [OPTIONS] PATH -- CARGO_COMMAND [CARGO_OPTIONS...]"
CARGO_ARGS_KEY = "cargo_export.cargo_args"

EXAMPLES = (
    "Examples:\n\n"
    "$ cargo export target/tests -- test\n"
    "  Exporting all test binaries in target/tests directory\n\n"
    "$ cargo export target/benches -- bench\n"
    "  Exporting all benchmark binaries in target/benches directory"
)

app = typer.Typer(
    add_completion=False,
    help=APP_HELP,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

log = logging.getLogger(__name__)


def _err(message: str, *, style: str = "red") -> None:
    err_console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


def _usage_error(message: str) -> NoReturn:
    _err(f"[ERROR]: {message}")
    _err(USAGE, style="")
    raise typer.Exit(code=1)


class _ExportCommand(TyperCommand):
    """`--` より後ろは click に解釈させず、そのまま cargo 用に取っておく。"""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if "--" in args:
            pos = args.index("--")
            args, ctx.meta[CARGO_ARGS_KEY] = args[:pos], args[pos + 1 :]
        else:
            ctx.meta[CARGO_ARGS_KEY] = []
        return super().parse_args(ctx, args)


@app.command(
    cls=_ExportCommand,
    epilog=EXAMPLES,
    options_metavar="[OPTIONS]",
    context_settings={"allow_extra_args": True},
)
def export(
    ctx: typer.Context,
    path: Path | None = typer.Argument(
        None, help="コピー先ディレクトリ（無ければ作成）", show_default=False
    ),
    tag: str | None = typer.Option(
        None, "-t", "--tag", help="tag name to add to the resulting binaries file names"
    ),
    no_default_options: bool = typer.Option(
        False,
        "-n",
        "--no-default-options",
        help="do not add default cargo options (--no-run, --message-format)",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="prints files copied"),
    config: Path | None = typer.Option(None, "--config", help="設定ファイル (cargo-export.toml)"),
) -> None:
    """cargo を実行し、生成された実行ファイルを PATH にコピーする。"""
    cfg = load_config(config)
    setup_logging(level=cfg.log_level, log_file=cfg.log_file)

    tag = tag if tag is not None else cfg.tag
    verbose = verbose or cfg.verbose
    default_options = not (no_default_options or cfg.no_default_options)
    cargo_args: list[str] = ctx.meta.get(CARGO_ARGS_KEY, [])

    if not cargo_args:
        _usage_error("Required option 'CARGO_COMMAND' missing")
    if path is None:
        _usage_error("Required option 'PATH' missing")

    args = build_cargo_args(cargo_args, default_options=default_options)
    ensure_target_dir(path)

    try:
        artifacts = run_cargo(args, cargo=cfg.cargo)
        plans = plan_copies(artifacts, path, tag=tag)
        for plan in plans:
            if verbose:
                _err(
                    f"[cargo-export] copying '{plan.source}' to '{plan.destination}'",
                    style="dim",
                )
            copy_artifacts([plan])
    except CargoOutputError as e:
        if verbose:
            _err(f"cargo output: {e.line}", style="dim")
        _err(f"[cargo-export] {e}")
        raise typer.Exit(code=1) from e
    except CargoExportError as e:
        _err(f"[cargo-export] {e}")
        raise typer.Exit(code=1) from e

    log.info("exported %d binaries to %s", len(plans), path)


@app.command()
def name(
    names: list[str] = typer.Argument(..., help="バイナリのファイル名（ディレクトリ部分なし）"),
    tag: str | None = typer.Option(None, "-t", "--tag", help="差し込む tag"),
) -> None:
    """export 先のファイル名を表示する（コピーはしない）。"""
    for n in names:
        console.print(target_file_name(n, tag), markup=False, highlight=False, soft_wrap=True)


def main() -> None:
    app()
