"""
Summary statistics of an outcome tree (sizes, depth, outcome split, path lengths).
"""
from __future__ import annotations

from typing import Any, Dict, List

import numpy as np

from .model import ChoiceResult, FinalResult, Result, outcome_label


def tree_stats(result: Result) -> Dict[str, Any]:
    finals = 0
    choices = 0
    max_depth = 0
    outcomes = {"P1": 0, "P2": 0, "D": 0}
    path_lengths: List[int] = []
    branching: List[int] = []

    stack = [(result, 0)]
    while stack:
        node, depth = stack.pop()
        max_depth = max(max_depth, depth)
        if isinstance(node, FinalResult):
            finals += 1
            outcomes[outcome_label(node.result)] += 1
            path_lengths.append(len(node.path))
            continue
        choices += 1
        branching.append(len(node.choices))
        stack.extend((c, depth + 1) for c in node.choices)

    lengths = np.asarray(path_lengths, dtype=np.int64)
    fanout = np.asarray(branching, dtype=np.int64)
    return {
        "nodes": finals + choices,
        "finals": finals,
        "choices": choices,
        "depth": max_depth,
        "outcomes": outcomes,
        "path_length_min": int(lengths.min()),
        "path_length_max": int(lengths.max()),
        "path_length_mean": float(lengths.mean()),
        "mean_branching": float(fanout.mean()) if fanout.size else 0.0,
        "root_kind": "choice" if isinstance(result, ChoiceResult) else "final",
    }
