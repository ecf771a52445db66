"""Settings for legacy notice imports."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from noticeingest import __version__

from .env import optional_float_env

DEFAULT_DOCUMENT_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_FAILURES_SUFFIX: Final[str] = "-failures"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Knobs for a single import run.

    ``documents_dir`` overrides the directory relative document paths are resolved
    against; by default that is the directory holding the source file.
    """

    document_timeout_seconds: float = DEFAULT_DOCUMENT_TIMEOUT_SECONDS
    failures_suffix: str = DEFAULT_FAILURES_SUFFIX
    documents_dir: Path | None = None
    user_agent: str = f"noticeingest/{__version__}"

    def failures_dir_for(self, source_path: Path) -> Path:
        return source_path.parent / f"{source_path.stem}{self.failures_suffix}"

    def documents_dir_for(self, source_path: Path) -> Path:
        return self.documents_dir or source_path.parent

    def with_documents_dir(self, documents_dir: Path) -> ImportConfig:
        return replace(self, documents_dir=documents_dir.expanduser())


def get_import_config() -> ImportConfig:
    documents_dir = os.getenv("NOTICEINGEST_DOCUMENTS_DIR")
    return ImportConfig(
        document_timeout_seconds=optional_float_env(
            "NOTICEINGEST_DOCUMENT_TIMEOUT", DEFAULT_DOCUMENT_TIMEOUT_SECONDS
        ),
        documents_dir=Path(documents_dir).expanduser() if documents_dir else None,
    )
