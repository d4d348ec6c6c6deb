"""cargo-export の例外。

CLI 側でまとめて捕まえて `[cargo-export] ...` として表示する。
"""

from __future__ import annotations


class CargoExportError(RuntimeError):
    pass


class CargoError(CargoExportError):
    """cargo プロセスを起動できなかった。"""


class CargoOutputError(CargoExportError):
    """cargo の出力が JSON として読めなかった。"""

    def __init__(self, line: str) -> None:
        super().__init__("Unable to parse json from cargo")
        self.line = line


class CargoFailed(CargoExportError):
    def __init__(self, returncode: int) -> None:
        super().__init__(f"cargo exited with {returncode} status code")
        self.returncode = returncode


class ExportError(CargoExportError):
    """バイナリのコピーに失敗した。"""
