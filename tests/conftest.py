from __future__ import annotations

import json
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def _artifact_message(executable: str | None, *, name: str = "app") -> str:
    return json.dumps(
        {
            "reason": "compiler-artifact",
            "package_id": f"{name} 0.1.0 (path+file:///work/{name})",
            "target": {"name": name, "kind": ["bin"]},
            "executable": executable,
            "fresh": False,
        }
    )


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("CARGO", raising=False)
    # cwd の cargo-export.toml を拾わない
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def artifact_message() -> Callable[..., str]:
    return _artifact_message


@pytest.fixture()
def fake_cargo(tmp_path: Path) -> Callable[..., Path]:
    """stdout に決め打ちの行を流して終わる偽 cargo を作る。

    受け取った引数は `<tmp>/cargo-args.txt` に1行1引数で残す。
    """
    if sys.platform == "win32":
        pytest.skip("fake cargo is a POSIX shell script")

    def make(lines: list[str], *, exit_code: int = 0) -> Path:
        out = tmp_path / "cargo-stdout.txt"
        out.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        args_file = tmp_path / "cargo-args.txt"
        script = tmp_path / "fake-cargo"
        script.write_text(
            "#!/bin/sh\n"
            f'printf "%s\\n" "$@" > "{args_file}"\n'
            f'cat "{out}"\n'
            f"exit {exit_code}\n",
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make


@pytest.fixture()
def built_binaries(tmp_path: Path) -> list[Path]:
    """cargo が作ったことにする実行ファイル。"""
    deps = tmp_path / "target" / "debug" / "deps"
    deps.mkdir(parents=True)
    paths = []
    for name in ("app-ebb8dd5b587f73a1", "integration-0123456789abcdef"):
        p = deps / name
        p.write_bytes(b"\x7fELF" + name.encode())
        p.chmod(0o755)
        paths.append(p)
    return paths
