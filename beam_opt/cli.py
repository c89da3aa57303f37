"""
CLI module for the I-beam optimizers.

Handles run configuration loading, RNG setup, algorithm dispatch and
result reporting.
"""

from typing import Dict, Any, Optional, Union
from pathlib import Path
import time

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from .config import (
    ConfigValidationError,
    build_ga_config,
    build_jaya_config,
    load_run_config,
    merge_with_defaults,
    validate_run_config,
)
from .data_models import OptimizationResult
from .ga import run_ga
from .io_utils import create_output_folder, save_history_csv
from .jaya import run_jaya
from .reporting import plot_result, print_report, summarize_history


def _progress_printer(every: int, label: str):
    """Callback printing the population minimum every N iterations."""
    def callback(iteration, population, minimum):
        if iteration % every == 0:
            print(f"  {label} {iteration:>6d}: best objective = {minimum:.6f}")
    return callback


def run_optimizer(config: Dict[str, Any]) -> OptimizationResult:
    """
    Execute the algorithm named in a validated, merged run configuration.

    Args:
        config: Run configuration (see beam_opt_config.yaml)

    Returns:
        OptimizationResult of the run
    """
    algorithm = config['algorithm']

    seed = config.get('random_seed')
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    print(f"Random seed: {seed}")
    rng = np.random.default_rng(seed)

    every = config.get('output', {}).get('progress_every', 0) or 0

    if algorithm == 'jaya':
        jaya_config = build_jaya_config(config)
        print(f"Population: {jaya_config.population_size}, iterations: {jaya_config.iterations}")
        callback = _progress_printer(every, "Iteration") if every > 0 else None
        return run_jaya(jaya_config, rng, callback=callback, seed=seed)

    if algorithm == 'ga':
        ga_config = build_ga_config(config)
        print(
            f"Population: {ga_config.population_size}, generations: {ga_config.generations}, "
            f"crossover: {ga_config.crossover_rate}, mutation: {ga_config.mutation_rate} "
            f"(strength {ga_config.mutation_strength})"
        )
        callback = _progress_printer(every, "Generation") if every > 0 else None
        return run_ga(ga_config, rng, callback=callback, seed=seed)

    # Should never reach here due to validation
    raise ConfigValidationError(f"Invalid algorithm: {algorithm}")


def prepare_output_root(output_config: Dict[str, Any]) -> Optional[Path]:
    """
    Create the output directory before any optimization work starts.

    Returns:
        Path to the output directory, or None when nothing will be written

    Raises:
        FileExistsError: If the directory exists and overwrite is off
    """
    if not output_config.get('history_csv', False) and not output_config.get('plot', False):
        return None

    output_root = create_output_folder(
        output_config.get('root', 'output'),
        overwrite=output_config.get('overwrite', False)
    )
    print(f"Output directory: {output_root}")
    return output_root


def write_outputs(
    result: OptimizationResult,
    output_config: Dict[str, Any],
    output_root: Optional[Path]
) -> Dict[str, Path]:
    """
    Save history CSV and convergence plot as requested by the output section.

    Args:
        result: Finished run
        output_config: 'output' section of the run configuration
        output_root: Directory from prepare_output_root

    Returns:
        Mapping of output kind ('history', 'plot') to written path
    """
    written = {}
    wants_csv = output_config.get('history_csv', False)
    wants_plot = output_config.get('plot', False)

    if output_root is None or (not wants_csv and not wants_plot):
        return written

    if wants_csv:
        history_path = save_history_csv(result.history, output_root / "history.csv", overwrite=True)
        written['history'] = history_path
        print(f"  ✓ History: {history_path}")

    if wants_plot:
        # Non-interactive backend unless the plot is shown on screen
        if not output_config.get('show_plot', False):
            matplotlib.use('Agg')

        plot_path = output_root / f"{result.algorithm}_convergence.png"
        fig = plot_result(result, save_path=str(plot_path), show=output_config.get('show_plot', False))
        plt.close(fig)
        written['plot'] = plot_path
        print(f"  ✓ Plot: {plot_path}")

    return written


def run_from_config(
    config_path: Optional[Union[str, Path]] = None,
    algorithm: Optional[str] = None,
    seed: Optional[int] = None,
    plot: Optional[bool] = None
) -> OptimizationResult:
    """
    Load run configuration and execute the selected optimizer.

    This is the main entry point called by beam_cli.py.

    Args:
        config_path: Path to run configuration YAML file (defaults only if None)
        algorithm: Override of the configured algorithm
        seed: Override of the configured random seed
        plot: Override of output.plot

    Returns:
        OptimizationResult of the run

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        FileExistsError: If the output directory exists and overwrite is off
    """
    if config_path is not None:
        print(f"Loading configuration from: {config_path}")
        run_config = load_run_config(config_path)
    else:
        print("Using default configuration")
        run_config = {}

    config = merge_with_defaults(run_config)
    if algorithm is not None:
        config['algorithm'] = algorithm
    if seed is not None:
        config['random_seed'] = seed
    if plot is not None:
        config['output'] = dict(config.get('output', {}), plot=plot)

    print("Validating configuration...")
    validate_run_config(config)
    output_config = config.get('output', {})
    output_root = prepare_output_root(output_config)

    print("=" * 70)
    print(f"{config['algorithm'].upper()} OPTIMIZATION")
    print("=" * 70)

    start_time = time.time()
    result = run_optimizer(config)
    elapsed_time = time.time() - start_time
    print(f"Optimization completed in {elapsed_time:.3f} seconds\n")

    print_report(result)

    summary = summarize_history(result.history)
    print(f"Improving steps: {summary['improvements']} over {summary['iterations']} iterations, "
          f"lowest recorded objective: {summary['minimum']:.6f}")
    print()
    write_outputs(result, output_config, output_root)

    print("\n✅ Run completed successfully!")
    return result
