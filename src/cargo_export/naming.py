"""出力ファイル名の組み立て。

cargo は test/bench バイナリ名の末尾に `-<16桁hex>` を付ける。
export 先ではこの hash を落とし、必要なら tag を差し込む。

- `app-ebb8dd5b587f73a1`        -> `app`
- `app-ebb8dd5b587f73a1.exe` + v1 -> `app-v1.exe`

認識できない部分はそのまま残す（例外は投げない）。
"""

from __future__ import annotations

import string
from dataclasses import dataclass

EXE_EXTENSION = "exe"
HASH_LEN = 16
HASH_SEPARATOR = "-"

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class SplitName:
    stem: str
    hash: str | None = None
    extension: str | None = None


def _is_hash(candidate: str) -> bool:
    # all-hex なら 1文字 = 1byte なので byte 長で比較してよい
    return len(candidate.encode("utf-8")) == HASH_LEN and all(
        c in _HEX_DIGITS for c in candidate
    )


def split_name(raw: str) -> SplitName:
    """ファイル名を stem / hash / extension に分解する。"""
    suffix = "." + EXE_EXTENSION
    extension: str | None = None
    rest = raw
    if rest.endswith(suffix):
        extension = EXE_EXTENSION
        rest = rest[: -len(suffix)]

    pos = rest.rfind(HASH_SEPARATOR)
    # 先頭の `-` は区切りとみなさない
    if pos <= 0:
        return SplitName(stem=rest, extension=extension)

    candidate = rest[pos + 1 :]
    if not _is_hash(candidate):
        return SplitName(stem=rest, extension=extension)
    return SplitName(stem=rest[:pos], hash=candidate, extension=extension)


def compose_name(stem: str, extension: str | None, tag: str | None = None) -> str:
    name = stem
    if tag is not None:
        name += f"{HASH_SEPARATOR}{tag}"
    if extension is not None:
        name += f".{extension}"
    return name


def target_file_name(file_name: str, tag: str | None = None) -> str:
    """export 先のファイル名を返す（hash は常に捨てる）。"""
    parts = split_name(file_name)
    return compose_name(parts.stem, parts.extension, tag)
