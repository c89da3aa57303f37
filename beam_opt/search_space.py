"""
Search space and population utilities shared by both optimizers.

Random initialization inside the bounds, clamping, order-preserving
population evaluation and best/worst lookup.
"""

from typing import Iterable, List

import numpy as np

from .data_models import Bounds, Design, Member
from .evaluator import evaluate_design, objective_key


def random_design(bounds: Bounds, rng: np.random.Generator) -> Design:
    """
    Draw a design uniformly at random inside the bounds.

    One uniform draw per variable, in field order h, b, tw, tf.
    """
    return Design(*(
        interval.lower + rng.random() * interval.width
        for interval in bounds.intervals()
    ))


def clamp_design(design: Design, bounds: Bounds) -> Design:
    return bounds.clamp(design)


def evaluate_population(designs: Iterable[Design]) -> List[Member]:
    """Evaluate designs, keeping their order in the returned population."""
    return [Member(design, evaluate_design(design)) for design in designs]


def initialize_population(size: int, bounds: Bounds, rng: np.random.Generator) -> List[Member]:
    """
    Create generation 0: size uniformly random designs, evaluated.

    Args:
        size: Population size
        bounds: Search space bounds
        rng: Random number generator

    Returns:
        List of evaluated members
    """
    designs = [random_design(bounds, rng) for _ in range(size)]
    return evaluate_population(designs)


def best_index(population: List[Member]) -> int:
    """Index of the lowest objective; ties go to the first occurrence."""
    return min(range(len(population)), key=lambda i: objective_key(population[i].objective))


def worst_index(population: List[Member]) -> int:
    """Index of the highest objective; ties go to the first occurrence."""
    worst = 0
    for i in range(1, len(population)):
        if objective_key(population[i].objective) > objective_key(population[worst].objective):
            worst = i
    return worst


def population_minimum(population: List[Member]) -> float:
    return population[best_index(population)].objective
