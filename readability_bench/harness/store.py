"""
Persistence for result sets.

Each implementation's run is stored as one JSON snapshot at
`<results_dir>/<name>-results.json`. Loading never raises for missing or
malformed files; it returns None so callers can report "no data".
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .records import ResultSet
from .schemas import ResultSetSchema

logger = logging.getLogger(__name__)


def save_results(result_set: ResultSet, path: Path) -> Path:
    """Write a result set atomically: temp file in the same directory, then rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(result_set.to_dict(), f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path


def load_results(path: Path) -> Optional[ResultSet]:
    """Load a result set, or None when the file is missing or malformed."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Failed to load %s: %s", path, e)
        return None

    try:
        schema = ResultSetSchema.model_validate(data)
    except ValidationError as e:
        logger.warning("Malformed results in %s: %d validation error(s)", path, e.error_count())
        logger.debug("Validation details for %s:\n%s", path, e)
        return None

    return schema.to_result_set()


class ResultsStore:
    """Result sets kept under well-known names in one directory."""

    def __init__(self, results_dir: Path):
        self.results_dir = Path(results_dir)

    def path_for(self, name: str) -> Path:
        return self.results_dir / f"{name}-results.json"

    def save(self, name: str, result_set: ResultSet) -> Path:
        """Save a result set under an implementation name."""
        return save_results(result_set, self.path_for(name))

    def load(self, name: str) -> Optional[ResultSet]:
        """Load the result set saved under an implementation name."""
        return load_results(self.path_for(name))
