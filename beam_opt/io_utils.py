"""
I/O utilities for optimizer runs.

Handles output folder management and CSV export of the best-history.
"""

import csv
from pathlib import Path
from typing import List, Sequence, Union


def create_output_folder(output_root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output directory of a run.

    Args:
        output_root: Directory to create
        overwrite: Allow reusing an existing directory

    Returns:
        Path to the directory

    Raises:
        FileExistsError: If the directory exists and overwrite is False
    """
    output_root = Path(output_root)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=True)
    return output_root


def save_history_csv(
    history: Sequence[float],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a best-history sequence to CSV.

    CSV format:
        iteration,best_objective
        1,0.012345
        ...

    Raises:
        FileExistsError: If file exists and overwrite is False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['iteration', 'best_objective'])
        for iteration, value in enumerate(history, start=1):
            writer.writerow([iteration, repr(float(value))])

    return output_path


def load_history_csv(csv_path: Union[str, Path]) -> List[float]:
    """
    Load a best-history sequence written by save_history_csv.

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    history = []
    with open(csv_path, 'r') as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None or not all(
            col in reader.fieldnames for col in ['iteration', 'best_objective']
        ):
            raise ValueError(
                f"Invalid CSV format in {csv_path}. Expected columns: iteration,best_objective"
            )

        for row in reader:
            history.append(float(row['best_objective']))

    return history
