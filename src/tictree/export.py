"""
Report export: reduce every driver scenario from one position and write the results.

Outputs under ``args.out``:
- ``trees/<scenario>.txt``: rendered reduced tree per scenario
- ``leaves.csv`` (and/or ``leaves.parquet``): one row per surviving final
- ``manifest.json``: args, provenance, per-scenario stats, schema hash, checksums
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .dominance import scenario_policies
from .game_basics import EMPTY_BOARD, deserialize_board, serialize_board
from .model import iter_finals, outcome_label
from .paths import get_git_commit
from .reducer import reduce_tree
from .render import result_to_string
from .stats import tree_stats
from .synthesis import synthesize
from .tracking import log_artifact, log_metrics, log_params

REPORT_VERSION = "1.0.0"
EXPORT_FORMATS = ("csv", "parquet", "both")
LEAF_FIELDS = ["scenario", "outcome", "path", "plies"]


@dataclass
class ExportArgs:
    out: Path
    board: str = serialize_board(EMPTY_BOARD)
    inline: bool = False  # trim while synthesizing instead of reducing the full tree
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: Optional[List[str]] = None


def _schema_hash(fields: List[str]) -> str:
    return hashlib.sha256("\n".join(sorted(fields)).encode("utf-8")).hexdigest()


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _parquet_available() -> bool:
    return (importlib.util.find_spec('pandas') is not None
            and importlib.util.find_spec('pyarrow') is not None)


def run_export(args: ExportArgs) -> Path:
    fmt = (args.format or "csv").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {args.format}")
    if fmt == "parquet" and not _parquet_available():
        # nothing is written when only parquet was asked for
        raise RuntimeError(
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )
    board = deserialize_board(args.board)

    policies = scenario_policies()
    raw = None
    if not args.inline:
        logging.info("Synthesizing full tree from %s…", args.board)
        raw = synthesize(board)
        logging.info("Full tree has %d finals", tree_stats(raw)["finals"])

    tree_dir = args.out / "trees"
    tree_dir.mkdir(parents=True, exist_ok=True)
    rows: List[Dict[str, Any]] = []
    scenario_stats: Dict[str, Dict[str, Any]] = {}
    for name, dominator in policies.items():
        if args.inline:
            reduced = synthesize(board, dominator=dominator)
        else:
            reduced = reduce_tree(raw, dominator)
        stats = tree_stats(reduced)
        scenario_stats[name] = stats
        (tree_dir / f"{name}.txt").write_text(result_to_string(reduced) + "\n")
        for leaf in iter_finals(reduced):
            rows.append({
                "scenario": name,
                "outcome": outcome_label(leaf.result),
                "path": ",".join(map(str, leaf.path)),
                "plies": len(leaf.path),
            })
        logging.info("%s: %d nodes, %d finals", name, stats["nodes"], stats["finals"])
        log_metrics({f"{name}_nodes": float(stats["nodes"]), f"{name}_finals": float(stats["finals"])})

    rows.sort(key=lambda r: (r["scenario"], r["outcome"], r["path"]))
    leaves_csv = args.out / "leaves.csv"
    leaves_parquet = args.out / "leaves.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with leaves_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=LEAF_FIELDS)
            w.writeheader()
            w.writerows(rows)
        wrote_csv = True
        logging.info("Wrote %s (%d rows)", leaves_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if _parquet_available():
            try:
                import pandas as pd  # type: ignore

                pd.DataFrame(rows, columns=LEAF_FIELDS).to_parquet(leaves_parquet)
                wrote_parquet = True
                logging.info("Wrote %s", leaves_parquet)
            except Exception as e:
                logging.warning("Failed to write Parquet file: %s: %s", type(e).__name__, e)
        else:
            logging.warning(
                "Parquet dependencies not available (install pandas and pyarrow). "
                "Proceeding with CSV only; manifest will record parquet_written=false."
            )

    files: Dict[str, Optional[str]] = {
        "leaves_csv": str(leaves_csv) if wrote_csv else None,
        "leaves_parquet": str(leaves_parquet) if wrote_parquet else None,
    }
    for name in policies:
        files[f"tree_{name}"] = str(tree_dir / f"{name}.txt")
    checksums = {label: _sha256_file(Path(p)) for label, p in files.items() if p is not None}

    manifest = {
        "report_version": REPORT_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "board": args.board,
            "inline": args.inline,
            "format": fmt,
        },
        "git_commit": get_git_commit(),
        "python_version": sys.version.split(" ")[0],
        "cli_argv": args.cli_argv,
        "row_count": len(rows),
        "scenarios": scenario_stats,
        "schema_hash": _schema_hash(LEAF_FIELDS),
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2, sort_keys=True))
    logging.info("Wrote %s", manifest_path)

    log_params({"board": args.board, "inline": args.inline, "format": fmt, "rows": len(rows)})
    log_artifact(manifest_path)
    if wrote_csv:
        log_artifact(leaves_csv)
    if wrote_parquet:
        log_artifact(leaves_parquet)
    return args.out
