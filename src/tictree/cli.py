from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .dominance import POLICY_NAMES, SCENARIOS, get_policy, player_wants_result
from .export import EXPORT_FORMATS, ExportArgs, run_export
from .game_basics import deserialize_board, serialize_board, EMPTY_BOARD
from .model import outcome_label, parse_outcome, parse_player
from .paths import reports_dir
from .reducer import reduce_tree
from .render import result_to_string
from .stats import tree_stats
from .synthesis import synthesize
from .tracking import TRACKING_BACKENDS, log_metrics, log_params, tracking_run


def _add_board_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--board",
        default=serialize_board(EMPTY_BOARD),
        help="Board string, 9 digits 0=empty,1=P1,2=P2 (default: empty board)",
    )
    p.add_argument(
        "--inline",
        action="store_true",
        help="Trim each sub-tree while it is built instead of reducing the full tree",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictree", description="Tic-tac-toe outcome tree reducer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_red = sub.add_parser("reduce", help="Reduce the outcome tree under one dominance policy")
    _add_board_args(p_red)
    p_red.add_argument("--policy", choices=POLICY_NAMES, default="normal", help="Dominance policy")
    p_red.add_argument("--player", default=None, help="Biased player for --policy wants (P1|P2)")
    p_red.add_argument("--want", default="D", help="Desired outcome for --policy wants (P1|P2|D)")
    p_red.add_argument(
        "--tracking",
        choices=TRACKING_BACKENDS,
        default="none",
        help="Experiment tracking backend",
    )
    p_red.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_sc = sub.add_parser("scenarios", help="Reduce and print every (player, desired outcome) scenario")
    _add_board_args(p_sc)

    p_st = sub.add_parser("stats", help="Print size statistics of the full and reduced trees as JSON")
    _add_board_args(p_st)
    p_st.add_argument("--policy", choices=POLICY_NAMES, default="normal", help="Dominance policy")
    p_st.add_argument("--player", default=None, help="Biased player for --policy wants (P1|P2)")
    p_st.add_argument("--want", default="D", help="Desired outcome for --policy wants (P1|P2|D)")

    p_exp = sub.add_parser("export", help="Write reduced trees, leaves table and manifest")
    _add_board_args(p_exp)
    p_exp.add_argument(
        "--out", type=Path, default=None, help="Output directory (default: $TICTREE_REPORTS or ./reports)"
    )
    p_exp.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="csv",
        help="Leaves table format: csv (default), parquet, both",
    )
    p_exp.add_argument(
        "--tracking",
        choices=TRACKING_BACKENDS,
        default="none",
        help="Experiment tracking backend",
    )
    p_exp.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )
    return p


def _policy_from_args(ns: argparse.Namespace):
    player = parse_player(ns.player) if ns.player is not None else None
    return get_policy(ns.policy, player, parse_outcome(ns.want))


def _reduced(board, inline: bool, dominator):
    if inline:
        return synthesize(board, dominator=dominator)
    return reduce_tree(synthesize(board), dominator)


def _cmd_reduce(ns: argparse.Namespace) -> int:
    board = deserialize_board(ns.board)
    dominator = _policy_from_args(ns)
    with tracking_run(ns.tracking, run_name="reduce", log_dir=ns.log_dir):
        log_params({"board": ns.board, "policy": getattr(dominator, "__name__", ns.policy), "inline": ns.inline})
        reduced = _reduced(board, ns.inline, dominator)
        stats = tree_stats(reduced)
        log_metrics({"nodes": float(stats["nodes"]), "finals": float(stats["finals"])})
    logging.debug("reduced stats=%s", stats)
    print(result_to_string(reduced))
    return 0


def _cmd_scenarios(ns: argparse.Namespace) -> int:
    board = deserialize_board(ns.board)
    raw = None if ns.inline else synthesize(board)
    for player, want in SCENARIOS:
        dominator = player_wants_result(player, want)
        reduced = synthesize(board, dominator=dominator) if ns.inline else reduce_tree(raw, dominator)
        print("\n  ****")
        print(f"  **** {outcome_label(player)} wants {outcome_label(want)}")
        print("  ****\n")
        print(result_to_string(reduced))
    return 0


def _cmd_stats(ns: argparse.Namespace) -> int:
    board = deserialize_board(ns.board)
    dominator = _policy_from_args(ns)
    raw = synthesize(board)
    reduced = synthesize(board, dominator=dominator) if ns.inline else reduce_tree(raw, dominator)
    print(json.dumps({"full": tree_stats(raw), "reduced": tree_stats(reduced)}, indent=2))
    return 0


def _cmd_export(ns: argparse.Namespace, argv: list[str] | None) -> int:
    out = ns.out if ns.out is not None else reports_dir()
    with tracking_run(ns.tracking, run_name="export", log_dir=ns.log_dir):
        res = run_export(ExportArgs(
            out=out,
            board=ns.board,
            inline=ns.inline,
            format=ns.format,
            verbose=ns.verbose,
            cli_argv=list(argv) if argv is not None else None,
        ))
    logging.info("Exported reports to: %s", res)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictree"))
        except Exception:
            print("unknown")
        return 0

    commands = {
        "reduce": _cmd_reduce,
        "scenarios": _cmd_scenarios,
        "stats": _cmd_stats,
        "export": lambda n: _cmd_export(n, argv),
    }
    if ns.cmd not in commands:
        parser.print_help()
        return 0
    try:
        return commands[ns.cmd](ns)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    except RuntimeError as e:
        logging.error("%s", e)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
