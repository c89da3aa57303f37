#!/usr/bin/env python3
"""
I-Beam Optimizer CLI - Minimal entry point.

Runs the Jaya algorithm or the genetic algorithm on the I-beam sizing
problem. Parameters come from a YAML run file layered over the packaged
defaults (beam_opt/beam_opt_config.yaml).

Usage:
    python3 beam_cli.py [run_config.yaml] [--algorithm jaya|ga] [--seed N] [--no-plot]

Examples:
    # Jaya with the reference parameters (15 members, 200 iterations)
    python3 beam_cli.py examples/jaya_run.yaml

    # Genetic algorithm (30 individuals, 10000 generations)
    python3 beam_cli.py examples/ga_run.yaml

    # Defaults only, GA, fixed seed
    python3 beam_cli.py --algorithm ga --seed 7
"""

import sys
import argparse
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def build_parser():
    parser = argparse.ArgumentParser(
        description="I-beam cross-section sizing with Jaya and GA optimizers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("config", nargs="?", default=None,
                        help="Run configuration YAML file (defaults if omitted)")
    parser.add_argument("--algorithm", choices=["jaya", "ga"],
                        help="Override the configured algorithm")
    parser.add_argument("--seed", type=int,
                        help="Override the configured random seed")
    parser.add_argument("--no-plot", action="store_true",
                        help="Skip the convergence plot")
    return parser


def main(argv=None):
    """Main entry point for the optimizer CLI."""
    args = build_parser().parse_args(argv)

    try:
        from beam_opt.cli import run_from_config
        run_from_config(
            args.config,
            algorithm=args.algorithm,
            seed=args.seed,
            plot=False if args.no_plot else None
        )
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
