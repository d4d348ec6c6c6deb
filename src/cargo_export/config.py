"""設定ファイル（`cargo-export.toml`）のロード。

CLI のフラグが指定されていればそちらを優先する。

```toml
[export]
tag = "nightly"
no_default_options = false
verbose = true
cargo = "cargo"

[logging]
level = "DEBUG"
file = "target/cargo-export.log"
```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

DEFAULT_CONFIG_PATH = Path("cargo-export.toml")


@dataclass
class ExportConfig:
    tag: str | None = None
    no_default_options: bool = False
    verbose: bool = False
    cargo: str | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None


def _opt_str(value: object) -> str | None:
    if value is None:
        return None
    s = str(value)
    return s if s else None


def load_config(path: Path | None = None) -> ExportConfig:
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return ExportConfig()

    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    export = raw.get("export", {}) or {}
    logging_ = raw.get("logging", {}) or {}

    log_file = _opt_str(logging_.get("file"))
    return ExportConfig(
        tag=_opt_str(export.get("tag")),
        no_default_options=bool(export.get("no_default_options", False)),
        verbose=bool(export.get("verbose", False)),
        cargo=_opt_str(export.get("cargo")),
        log_level=str(logging_.get("level", "WARNING")),
        log_file=Path(log_file) if log_file else None,
    )
