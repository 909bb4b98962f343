"""Command line entry point: ``fixc``.

Usage:
    fixc compile program.fx [--config formats.yaml] [--json]
    fixc check-registry [formats.yaml]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from fixlib.config import DEFAULT_REGISTRY_PATH, load_config, validate_registry
from fixlib.core.errors import ConfigError
from fixlib.graph.builder import compile_source
from fixlib.graph.nodes import Graph

logger = logging.getLogger(__name__)


def _graph_to_dict(graph: Graph) -> dict:
    return {
        "program": graph.name,
        "constants": [
            {
                "name": node.name,
                "format": node.format.key,
                "signed": node.format.signed,
                "integer_bits": node.format.integer_bits,
                "fractional_bits": node.format.fractional_bits,
                "tolerance": node.tolerance,
                "values": list(node.unbound()),
                "raw": [v.raw for v in node.values],
            }
            for node in graph
        ],
    }


def _print_graph(graph: Graph) -> None:
    if graph.name:
        print(f"program {graph.name}")
    for node in graph:
        values = ", ".join(repr(v) for v in node.unbound())
        shown = values if node.scalar else f"[{values}]"
        print(f"  {node.name:20s} {node.format.key:14s} = {shown}")


def cmd_compile(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    path = Path(args.source)
    try:
        source = path.read_text()
    except OSError as e:
        print(f"error: cannot read {path}: {e.strerror}", file=sys.stderr)
        return 1

    graph, diag = compile_source(source, str(path), config=config)
    for d in diag.get_all():
        print(d, file=sys.stderr)
    if args.json:
        print(json.dumps(_graph_to_dict(graph), indent=2))
    else:
        _print_graph(graph)
    return 1 if diag.has_errors() else 0


def cmd_check_registry(args: argparse.Namespace) -> int:
    path = Path(args.registry) if args.registry else DEFAULT_REGISTRY_PATH
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        print(f"error: file not found: {path}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"error: invalid YAML in {path}: {e}", file=sys.stderr)
        return 1

    problems = validate_registry(data)
    if problems:
        print(f"{path}: {len(problems)} problem(s)")
        for problem in problems:
            print(f"  ✗ {problem}")
        return 1

    print(f"{path}: {len(data['formats'])} presets")
    for name, preset in sorted(data["formats"].items()):
        sign = "sfix" if preset["signed"] else "ufix"
        print(f"  {name:12s} {sign}<{preset['integer_bits']},{preset['fractional_bits']}>")
    print("✓ Registry valid")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fixc", description="Fixed-point constant compiler")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug")
    sub = parser.add_subparsers(dest="command", required=True)

    p_compile = sub.add_parser("compile", help="Infer formats and bind the constants of a program")
    p_compile.add_argument("source", help="Constant program file")
    p_compile.add_argument("--config", default=None, help="Format registry YAML (default: packaged)")
    p_compile.add_argument("--json", action="store_true", help="Emit the graph as JSON")
    p_compile.set_defaults(func=cmd_compile)

    p_check = sub.add_parser("check-registry", help="Validate a format registry file")
    p_check.add_argument("registry", nargs="?", default=None, help="Registry YAML (default: packaged)")
    p_check.set_defaults(func=cmd_check_registry)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
