"""cargo 呼び出しと JSON メッセージの読み取り。

`--message-format=json` を付けると cargo は stdout に1行1レコードの JSON を流す。
ここでは `reason == "compiler-artifact"` かつ `executable` を持つものだけ拾う。
（ライブラリの artifact は `executable: null`）
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from cargo_export.errors import CargoError, CargoFailed, CargoOutputError

COMPILER_ARTIFACT = "compiler-artifact"
DEFAULT_OPTIONS = ("--no-run", "--message-format=json")

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerArtifact:
    executable: str


def default_cargo_program() -> str:
    # cargo はサブコマンド起動時に CARGO を設定する
    return os.environ.get("CARGO") or "cargo"


def build_cargo_args(cargo_args: list[str], *, default_options: bool = True) -> list[str]:
    """cargo に渡す引数列を作る。

    default_options=True なら subcommand の直後に
    `--no-run --message-format=json` を差し込む。
    """
    if not cargo_args:
        raise ValueError("cargo command is required")

    args = list(cargo_args)
    if default_options:
        for opt in reversed(DEFAULT_OPTIONS):
            args.insert(1, opt)
    return args


def parse_message(line: str) -> CompilerArtifact | None:
    try:
        raw = json.loads(line)
    except json.JSONDecodeError as e:
        raise CargoOutputError(line) from e

    if not isinstance(raw, dict) or raw.get("reason") != COMPILER_ARTIFACT:
        return None
    executable = raw.get("executable")
    if not isinstance(executable, str):
        return None

    return CompilerArtifact(executable=executable)


def iter_artifacts(lines: Iterable[str]) -> Iterator[CompilerArtifact]:
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        artifact = parse_message(line)
        if artifact is not None:
            log.debug("artifact: %s", artifact.executable)
            yield artifact


def run_cargo(
    args: list[str],
    *,
    cargo: str | None = None,
    cwd: Path | None = None,
) -> list[CompilerArtifact]:
    """cargo を起動し、生成された実行ファイルの一覧を返す。

    stderr は端末にそのまま流す（ビルド進捗を見せるため）。
    """
    program = cargo or default_cargo_program()
    cmd = [program, *args]
    log.info("cargo cmd: %s", " ".join(cmd))

    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise CargoError(f"cargo not found: {program}") from e

    with proc:
        if proc.stdout is None:
            raise CargoError(f"cargo stdout is not available: {program}")
        try:
            artifacts = list(iter_artifacts(proc.stdout))
        except CargoOutputError as e:
            log.debug("cargo output: %s", e.line)
            proc.kill()
            raise
        returncode = proc.wait()

    if returncode != 0:
        raise CargoFailed(returncode)
    log.info("cargo produced %d executable(s)", len(artifacts))
    return artifacts
