import argparse
import csv
import logging
import sys

from . import __version__
from .build import build_graph
from .check import ensure_consistent, log_issues
from .config import load_config
from .errors import InputConsistencyError
from .fs import atomic_write_text
from .graph import SHORTEST_PATH_METHODS
from .io import Demographics, Parentage, RelatednessTable
from .pedigree import render_pedigree

RELATEDNESS_FORMATS = ("three-column", "ml-relate")


def _setup_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(level)


def _apply_flags(cfg, args: argparse.Namespace):
    """Command-line flags win over the config file and environment."""
    if args.max_distance is not None:
        cfg.max_distance = args.max_distance
    if args.shortest_path is not None:
        cfg.shortest_path = args.shortest_path
    if args.normalize:
        cfg.normalize = True
    if args.rm_arrows:
        cfg.remove_edge_arrows = True
    if args.keep_loops:
        cfg.keep_self_loops = True
    if args.undirected:
        cfg.directed = False
    if args.keep_redundant_paths:
        cfg.shortest_only = False
    return cfg.validate()


def _read_inputs(args: argparse.Namespace, cfg):
    with open(args.relatedness, "r", encoding="utf-8", newline="") as f:
        if args.format == "ml-relate":
            rels = RelatednessTable.read_ml_relate(f, normalize=cfg.normalize)
        else:
            rels = RelatednessTable.read_three_column(f, normalize=cfg.normalize)
    dems = pars = None
    if args.demographics:
        with open(args.demographics, "r", encoding="utf-8", newline="") as f:
            dems = Demographics.read_three_column(f)
    if args.parentage:
        with open(args.parentage, "r", encoding="utf-8", newline="") as f:
            pars = Parentage.read_three_column(f)
    return rels, pars, dems


def _run_build(args: argparse.Namespace) -> int:
    cfg = _apply_flags(load_config(args.config), args)

    try:
        rels, pars, dems = _read_inputs(args, cfg)
    except (OSError, csv.Error) as exc:
        logging.error("Could not read input: %s", exc)
        return 2

    try:
        log_issues(ensure_consistent(rels, parentage=pars, demographics=dems))
    except InputConsistencyError as exc:
        log_issues(exc.issues)
        logging.error("Cancelled further processing due to %d input error(s)", len(exc.issues))
        return 1

    graph = build_graph(
        rels,
        max_distance=cfg.max_distance,
        parentage=pars,
        demographics=dems,
        directed=cfg.directed,
        shortest_only=cfg.shortest_only,
    )
    pruned = graph.prune_to_shortest(keep_self_loops=cfg.keep_self_loops, method=cfg.shortest_path)
    dot, unmapped = render_pedigree(pruned, rels.indvs(), remove_edge_arrows=cfg.remove_edge_arrows)

    try:
        atomic_write_text(args.output, dot)
        if unmapped and args.unmapped:
            atomic_write_text(args.unmapped, "\n".join(unmapped) + "\n")
    except OSError as exc:
        logging.error("Could not write output: %s", exc)
        return 2

    if not unmapped:
        logging.info("All individuals were mapped")
    elif not args.unmapped:
        logging.warning("%d individual(s) could not be mapped: %s", len(unmapped), ", ".join(unmapped))
    else:
        logging.info("%d unmapped individual(s) written to %s", len(unmapped), args.unmapped)
    logging.info("Pedigree written to %s", args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relped",
        description="Build pedigrees from pairwise relatedness",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    build = subparsers.add_parser(
        "build",
        help="Build relatedness pedigree",
        description="Use pairwise relatedness, plus optional demographics and parentage, "
                    "to build a pedigree with the necessary unknown individuals.",
    )
    build.add_argument("--relatedness", required=True, help="Relatedness CSV file")
    build.add_argument("--output", required=True, help="Output DOT file")
    build.add_argument("--format", choices=RELATEDNESS_FORMATS, default="three-column",
                       help="Layout of the relatedness file (default: three-column)")
    build.add_argument("--demographics", help="Three-column demographics file (ID,Sex,Birth Year)")
    build.add_argument("--parentage", help="Three-column parentage file (ID,Sire,Dam)")
    build.add_argument("--unmapped", help="File to list individuals absent from the pedigree")
    build.add_argument("--normalize", action="store_true", help="Normalize relatedness to [0,1]")
    build.add_argument("--max-distance", type=int, help="Max relational distance to incorporate (default: 9)")
    build.add_argument("--rm-arrows", action="store_true", help="Draw plain lines instead of arrows")
    build.add_argument("--keep-loops", action="store_true", help="Keep loops between an individual and itself")
    build.add_argument("--undirected", action="store_true", help="Emit an undirected graph")
    build.add_argument("--keep-redundant-paths", action="store_true",
                       help="Insert inferred paths even when a shorter link already exists")
    build.add_argument("--shortest-path", choices=SHORTEST_PATH_METHODS,
                       help="Shortest path algorithm used for pruning (default: dijkstra)")
    build.add_argument("--config", help="JSON config file")
    noise = build.add_mutually_exclusive_group()
    noise.add_argument("--verbose", action="store_true", help="Verbose output")
    noise.add_argument("--quiet", action="store_true", help="Only report warnings and errors")
    build.set_defaults(func=_run_build)

    return parser


def main(argv=None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 2
    if not args.command:
        parser.print_help()
        return 2
    _setup_logging(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
