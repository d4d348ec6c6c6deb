"""logging の初期化。

- log_file 指定あり: RotatingFileHandler でファイルへ
- 指定なし: stderr へ（cargo の進捗表示と混ざるので既定は WARNING）
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(*, level: str = "WARNING", log_file: Path | None = None) -> None:
    # 既に設定済みなら二重設定しない
    if getattr(setup_logging, "_configured", False):
        return

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=2_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        fmt = logging.Formatter(fmt="[cargo-export] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    setup_logging._configured = True  # type: ignore[attr-defined]
