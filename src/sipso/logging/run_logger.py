"""CSV trace of a swarm run: one row per sweep plus shared run metadata.

Columns are laid out as: timestamp, run metadata (in first-seen order), the
sweep metrics in SWEEP_FIELDS order, then any extra metric a caller logged.
Rows missing a column are written blank.
"""

from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

# Metrics SwarmRunner.run logs after every sweep.
SWEEP_FIELDS = (
    "iteration",
    "best_score",
    "mean_best_score",
    "n_fully_informed",
    "n_single_best",
    "runtime_ms",
)


def _utc_stamp(fmt: Optional[str] = None) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    if fmt is not None:
        return now.strftime(fmt)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


@dataclass
class RunLogger:
    """Buffer sweep rows in memory; `flush` writes them under `base_dir`.

    `field_order`, when given, replaces the computed column layout entirely.
    """

    base_dir: Path
    filename: Optional[str] = None
    metadata: Optional[Dict[str, object]] = None
    field_order: Optional[Sequence[str]] = None
    metric_fields: Sequence[str] = SWEEP_FIELDS

    _rows: List[Dict[str, object]] = field(default_factory=list, init=False)
    _metadata_keys: List[str] = field(default_factory=list, init=False)
    _extra_keys: List[str] = field(default_factory=list, init=False)
    _path: Optional[Path] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        initial = dict(self.metadata or {})
        self.metadata = {}
        self.update_metadata(**initial)

    def __len__(self) -> int:
        return len(self._rows)

    def _set_meta(self, key: str, value: object) -> None:
        if key not in self._metadata_keys:
            self._metadata_keys.append(key)
        self.metadata[key] = value

    def update_metadata(self, **extra: object) -> None:
        """Merge metadata shared by all rows logged from now on."""
        for key, value in extra.items():
            self._set_meta(key, value)

    def log_iteration(self, **metrics: object) -> None:
        for key in metrics:
            if key not in self.metric_fields and key not in self._extra_keys:
                self._extra_keys.append(key)
        row: Dict[str, object] = {'timestamp': _utc_stamp()}
        row.update(self.metadata)
        row.update(metrics)
        self._rows.append(row)

    @property
    def columns(self) -> List[str]:
        if self.field_order:
            return list(self.field_order)
        return ['timestamp', *self._metadata_keys, *self.metric_fields, *self._extra_keys]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows, columns=self.columns)

    def flush(self) -> Path:
        """Write buffered rows and return the CSV path."""
        if not self._rows:
            raise RuntimeError("No records to write; did the run log any sweeps?")

        if self._path is None:
            name = self.filename or f"run_{_utc_stamp('%Y%m%dT%H%M%S')}.csv"
            self._path = self.base_dir / name
        with self._path.open('w', newline='') as handle:
            writer = csv.DictWriter(handle, fieldnames=self.columns, extrasaction='ignore')
            writer.writeheader()
            writer.writerows(self._rows)
        return self._path
