"""Runtime settings.

The CLI fills these from its options, each of which can also come from
the environment:

``WMS_DATA_DIR``   directory holding the JSON data files
``WMS_LOG_LEVEL``  stdlib level name (default WARNING)
``WMS_LOG_FORMAT`` ``console`` or ``json``
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    log_format: str = "console"
