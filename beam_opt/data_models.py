"""
Data models for the I-beam optimizers.

Core value types shared by the Jaya and GA loops: design candidates, variable
bounds, evaluation results, population members, run configurations and
run results.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

FIELDS = ("h", "b", "tw", "tf")


@dataclass(frozen=True)
class Design:
    """
    An I-beam cross-section candidate.

    Attributes:
        h: Section height (cm)
        b: Flange width (cm)
        tw: Web thickness (cm)
        tf: Flange thickness (cm)
    """
    h: float
    b: float
    tw: float
    tf: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the variables in field order (h, b, tw, tf)."""
        return (self.h, self.b, self.tw, self.tf)

    def with_value(self, name: str, value: float) -> "Design":
        """Return a new design with one variable replaced."""
        return replace(self, **{name: float(value)})

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Design":
        """
        Build a design from four values in field order.

        Raises:
            ValueError: If values does not hold exactly four numbers
        """
        if len(values) != len(FIELDS):
            raise ValueError(f"Design needs {len(FIELDS)} values, got {len(values)}")
        return cls(*(float(v) for v in values))


@dataclass(frozen=True)
class Interval:
    """Closed interval [lower, upper] for one design variable."""
    lower: float
    upper: float

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(f"Invalid interval: lower {self.lower} > upper {self.upper}")

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def clamp(self, value: float) -> float:
        return min(max(value, self.lower), self.upper)

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class Bounds:
    """
    Box bounds of the search space, one closed interval per design variable.

    Constant for the whole run. Used for initialization and clamping by both
    optimizers.
    """
    h: Interval
    b: Interval
    tw: Interval
    tf: Interval

    @classmethod
    def default(cls) -> "Bounds":
        """Bounds of the reference I-beam problem (cm)."""
        return cls(
            h=Interval(10.0, 80.0),
            b=Interval(10.0, 50.0),
            tw=Interval(0.9, 5.0),
            tf=Interval(0.9, 5.0),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Bounds":
        """
        Build bounds from a mapping of variable name to [lower, upper].

        Variables missing from the mapping keep their default interval.

        Raises:
            ValueError: If a name is unknown or a pair is malformed
        """
        unknown = set(data) - set(FIELDS)
        if unknown:
            raise ValueError(f"Unknown design variables in bounds: {sorted(unknown)}")

        defaults = cls.default()
        intervals = {}
        for name in FIELDS:
            if name in data:
                pair = data[name]
                if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                    raise ValueError(f"Bounds for '{name}' must be [lower, upper], got: {pair}")
                intervals[name] = Interval(float(pair[0]), float(pair[1]))
            else:
                intervals[name] = defaults.interval(name)
        return cls(**intervals)

    def interval(self, name: str) -> Interval:
        return getattr(self, name)

    def intervals(self) -> tuple[Interval, Interval, Interval, Interval]:
        return (self.h, self.b, self.tw, self.tf)

    def clamp(self, design: Design) -> Design:
        """Return a copy of design with every variable clamped to its interval."""
        return Design(*(
            interval.clamp(value)
            for interval, value in zip(self.intervals(), design.as_tuple())
        ))

    def contains(self, design: Design) -> bool:
        return all(
            interval.contains(value)
            for interval, value in zip(self.intervals(), design.as_tuple())
        )


@dataclass(frozen=True)
class Evaluation:
    """
    Objective and constraint values derived from a design.

    Attributes:
        f: Objective (deflection proxy), or the penalty sentinel when infeasible
        g1: Cross-sectional area constraint value (feasible when <= 300)
        g2: Stress constraint value (feasible when <= 6)
        inertia: Second moment of area of the section
        feasible: True when both constraints hold
    """
    f: float
    g1: float
    g2: float
    inertia: float
    feasible: bool


@dataclass(frozen=True)
class Member:
    """A population slot: a design together with its evaluation."""
    design: Design
    evaluation: Evaluation

    @property
    def objective(self) -> float:
        return self.evaluation.f


def _check_positive_int(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"'{name}' must be a positive integer, got: {value}")


def _check_rate(name: str, value) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"'{name}' must lie in [0, 1], got: {value}")


@dataclass(frozen=True)
class JayaConfig:
    """
    Jaya run parameters.

    Attributes:
        population_size: Number of members (constant across iterations)
        iterations: Fixed iteration budget
        bounds: Search space bounds
    """
    population_size: int = 15
    iterations: int = 200
    bounds: Bounds = field(default_factory=Bounds.default)

    def __post_init__(self):
        _check_positive_int('population_size', self.population_size)
        _check_positive_int('iterations', self.iterations)


@dataclass(frozen=True)
class GAConfig:
    """
    Genetic algorithm run parameters.

    Attributes:
        population_size: Number of individuals (constant across generations)
        generations: Fixed generation budget
        crossover_rate: Probability that a parent pair is blended
        mutation_rate: Per-gene probability of Gaussian mutation
        mutation_strength: Standard deviation of the Gaussian noise
        bounds: Search space bounds
    """
    population_size: int = 30
    generations: int = 10_000
    crossover_rate: float = 0.8
    mutation_rate: float = 0.2
    mutation_strength: float = 0.1
    bounds: Bounds = field(default_factory=Bounds.default)

    def __post_init__(self):
        _check_positive_int('population_size', self.population_size)
        _check_positive_int('generations', self.generations)
        _check_rate('crossover_rate', self.crossover_rate)
        _check_rate('mutation_rate', self.mutation_rate)
        if self.mutation_strength < 0:
            raise ValueError(
                f"'mutation_strength' must be non-negative, got: {self.mutation_strength}"
            )


@dataclass
class OptimizationResult:
    """
    Outcome of one optimizer run, handed to the convergence reporter.

    Attributes:
        algorithm: "jaya" or "ga"
        best: Best member of the final population
        history: Population minimum objective after each iteration/generation
        population: Final population
        initial_best: Minimum objective of generation 0
        seed: Random seed used for the run, if known
    """
    algorithm: str
    best: Member
    history: list[float]
    population: list[Member]
    initial_best: float
    seed: Optional[int] = None

    def __post_init__(self):
        if self.algorithm not in ["jaya", "ga"]:
            raise ValueError(f"Invalid algorithm: {self.algorithm}. Must be 'jaya' or 'ga'")

    @property
    def iterations(self) -> int:
        return len(self.history)

    @property
    def final_minimum(self) -> float:
        return self.best.objective
