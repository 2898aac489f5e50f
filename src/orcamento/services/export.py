from __future__ import annotations

import logging
from pathlib import Path

from orcamento import config as _config
from orcamento.services.csv_codec import build_csv_model

logger = logging.getLogger(__name__)


def unique_path(path: Path) -> Path:
    """Return a non-conflicting path by appending _1, _2, etc. if needed."""
    if not path.exists():
        return path
    stem, suffix, parent = path.stem, path.suffix, path.parent
    counter = 1
    candidate = parent / f"{stem}_{counter}{suffix}"
    while candidate.exists():
        counter += 1
        candidate = parent / f"{stem}_{counter}{suffix}"
    return candidate


def save_csv_model(destination: str | Path | None = None) -> Path:
    """Write the CSV template and return where it landed.

    ``destination`` may be a directory or a file path; by default the file
    goes to the user's Downloads directory. Existing files are never
    overwritten. OS errors propagate to the caller.
    """
    if destination is None:
        target = _config.get_downloads_dir() / _config.CSV_MODEL_NAME
    else:
        target = Path(destination).expanduser()
        if target.is_dir():
            target = target / _config.CSV_MODEL_NAME
    target.parent.mkdir(parents=True, exist_ok=True)
    final_path = unique_path(target)
    final_path.write_text(build_csv_model() + "\n", encoding="utf-8")
    logger.info("CSV template written to %s", final_path)
    return final_path
