# springfem/cli.py
"""Command-line driver: read definition files, solve, print the results."""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .config import CONFIG
from .fem import SpringModel
from .kernel.errors import SpringFEMError
from .logging_config import setup_logging
from .post import nodal_results, spring_results
from .reader import read_model

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return CONFIG.float_format.format(value)


def print_results(model: SpringModel, out: TextIO = sys.stdout) -> None:
    """Print displacements, nodal forces and spring end forces of a solved model."""
    print("Global displacements:", file=out)
    print(file=out)
    for node in model.nodes:
        print(f"  - node {node.id}: {_fmt(model.get_global_displacement(node.id))}", file=out)
    print(file=out)

    print("Global forces:", file=out)
    print(file=out)
    for node in model.nodes:
        print(f"  - node {node.id}: {_fmt(model.get_global_force(node.id))}", file=out)
    print(file=out)

    print("Local forces at each element:", file=out)
    print(file=out)
    for spring in model.springs:
        forces = model.get_local_forces(spring.id)
        print(f"  - element {spring.id}: ({_fmt(forces[0])}, {_fmt(forces[1])})", file=out)
    print(file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='springfem',
        description='Static analysis of a 1-D spring assemblage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  springfem model.fem
  springfem supports.fem loads.fem --csv results/run1

Definition format:
  node <id> [d <displacement>] [f <force>]
  spring <id> <node1> <node2> <spring constant>
        """
    )
    parser.add_argument(
        'files',
        nargs='+',
        metavar='FILE',
        help='Model definition file(s); read in order into one model'
    )
    parser.add_argument(
        '--csv',
        metavar='PREFIX',
        default=None,
        help='Also write PREFIX_nodes.csv and PREFIX_springs.csv'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log solver details (DEBUG level)'
    )
    parser.add_argument(
        '--log-file',
        default=None,
        help='Write the log to this file as well'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else CONFIG.log_level, args.log_file)

    print()
    print("FEM: Spring Assemblage (1D)")
    print()

    print("Input files: ")
    print()
    for f in args.files:
        print(f"  - {f}")
    print()

    try:
        model = read_model(args.files)
        model.solve()
    except SpringFEMError as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR Could not read input file: {e}", file=sys.stderr)
        return 1

    print_results(model)

    if args.csv:
        try:
            nodal_results(model).to_csv(f"{args.csv}_nodes.csv")
            spring_results(model).to_csv(f"{args.csv}_springs.csv")
        except OSError as e:
            print(f"ERROR Could not write CSV output: {e}", file=sys.stderr)
            return 1
        logger.info("Wrote %s_nodes.csv and %s_springs.csv", args.csv, args.csv)

    print("fin.")
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
