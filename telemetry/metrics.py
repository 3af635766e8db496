"""Metrics logging utilities for experiment sweeps."""

from __future__ import annotations

import csv
import json
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping

import numpy as np


def _git_commit() -> str:
    """Return the current git commit hash or ``"unknown"``."""

    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):  # pragma: no cover - best effort only
        return "unknown"


_GIT = _git_commit()


@dataclass
class MetricsLogger:
    """Collect per-sample results and emit them to disk."""

    out_dir: Path
    records: List[Dict[str, object]] = field(default_factory=list)

    def log(
        self,
        sample: int,
        params: Mapping[str, Any],
        seed: int,
        metrics: Mapping[str, float | int],
        invariants: Mapping[str, float | bool],
    ) -> None:
        """Store the results of a single sample."""

        entry = {
            "sample": sample,
            "seed": seed,
            "git": _GIT,
            "ts": datetime.now(timezone.utc).isoformat(),
            **params,
            **metrics,
            **invariants,
        }
        self.records.append(entry)

    def flush(self, summary: Mapping[str, Any]) -> None:
        """Write ``metrics.csv``, ``summary.json`` and ``summary_invariants.json``.

        ``summary`` holds the experiment description; aggregated metrics are
        added under ``metrics_agg``.
        """

        self.out_dir.mkdir(parents=True, exist_ok=True)
        csv_path = self.out_dir / "metrics.csv"
        if self.records:
            fieldnames: List[str] = list(self.records[0].keys())
            for rec in self.records[1:]:
                for key in rec.keys():
                    if key not in fieldnames:
                        fieldnames.append(key)
            with csv_path.open("w", newline="") as fh:
                writer = csv.DictWriter(fh, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(self.records)

        def _aggregate(rows: List[Dict[str, object]]) -> Dict[str, float]:
            keys = {k for row in rows for k in row.keys() if k.startswith("metric_")}
            agg: Dict[str, float] = {}
            for k in sorted(keys):
                vals = [r[k] for r in rows if k in r]
                agg[f"mean_{k}"] = float(np.mean(vals))
                agg[f"std_{k}"] = float(np.std(vals))
            return agg

        data = {
            **summary,
            "metrics_agg": _aggregate(self.records) if self.records else {},
        }
        (self.out_dir / "summary.json").write_text(json.dumps(data, indent=2))

        inv_keys = {
            k for row in self.records for k in row.keys() if k.startswith("inv_")
        }
        if inv_keys:
            inv_summary: Dict[str, float] = {}
            for k in sorted(inv_keys):
                vals = [r[k] for r in self.records if k in r]
                if all(isinstance(v, (bool, np.bool_)) for v in vals):
                    # fraction of samples passing
                    inv_summary[k] = float(np.mean(vals))
                else:
                    inv_summary[f"max_abs_{k}"] = float(np.max(np.abs(vals)))
            (self.out_dir / "summary_invariants.json").write_text(
                json.dumps(inv_summary, indent=2)
            )
