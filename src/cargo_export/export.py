"""artifact を export 先ディレクトリへコピーする。"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from cargo_export.cargo import CompilerArtifact
from cargo_export.errors import ExportError
from cargo_export.naming import target_file_name

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyPlan:
    source: Path
    destination: Path


def ensure_target_dir(target_dir: Path) -> Path:
    target_dir.mkdir(parents=True, exist_ok=True)
    return target_dir


def plan_copies(
    artifacts: Iterable[CompilerArtifact],
    target_dir: Path,
    *,
    tag: str | None = None,
) -> list[CopyPlan]:
    """コピー元/コピー先の組を作る（ファイル操作はしない）。"""
    plans: list[CopyPlan] = []
    for artifact in artifacts:
        source = Path(artifact.executable)
        plans.append(
            CopyPlan(
                source=source,
                destination=target_dir / target_file_name(source.name, tag),
            )
        )
    return plans


def copy_artifacts(plans: Iterable[CopyPlan]) -> list[Path]:
    copied: list[Path] = []
    for plan in plans:
        log.info("copying '%s' to '%s'", plan.source, plan.destination)
        try:
            shutil.copy2(plan.source, plan.destination)
        except OSError as e:
            raise ExportError(
                f"Unable to copy '{plan.source}' to '{plan.destination}': {e}"
            ) from e
        copied.append(plan.destination)
    return copied
