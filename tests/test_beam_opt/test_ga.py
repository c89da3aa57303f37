"""
Tests for GA operators and complete GA runs.
"""

import unittest
import numpy as np

from beam_opt.data_models import Bounds, Design, Evaluation, GAConfig, Member
from beam_opt.ga import (
    blend_crossover,
    breed_generation,
    gaussian_mutation,
    run_ga,
    tournament_selection,
)
from beam_opt.search_space import initialize_population, population_minimum


class ScriptedIndexRng:
    """Returns preset index pairs from integers(); used to pin tournaments."""

    def __init__(self, pairs):
        self.pairs = list(pairs)

    def integers(self, low, high, size=None):
        return np.array(self.pairs.pop(0))


def make_population(objectives):
    return [
        Member(
            Design(10.0 + i, 20.0, 1.0, 1.0),
            Evaluation(f=f, g1=0.0, g2=0.0, inertia=1.0, feasible=True)
        )
        for i, f in enumerate(objectives)
    ]


class TestTournamentSelection(unittest.TestCase):
    """Test binary tournament selection."""

    def test_lower_objective_wins(self):
        """Test the strictly better member is returned in either order."""
        population = make_population([5.0, 1.0, 3.0])

        winner = tournament_selection(population, ScriptedIndexRng([(0, 1)]))
        self.assertEqual(winner, population[1].design)

        winner = tournament_selection(population, ScriptedIndexRng([(1, 2)]))
        self.assertEqual(winner, population[1].design)

    def test_tie_goes_to_second_index(self):
        """Test equal objectives resolve to the second sampled member."""
        population = make_population([2.0, 2.0])

        winner = tournament_selection(population, ScriptedIndexRng([(0, 1)]))
        self.assertEqual(winner, population[1].design)

    def test_same_index_twice(self):
        """Test sampling with replacement can pick one member twice."""
        population = make_population([4.0, 1.0])

        winner = tournament_selection(population, ScriptedIndexRng([(0, 0)]))
        self.assertEqual(winner, population[0].design)

    def test_penalized_member_loses(self):
        """Test a penalized member never beats a feasible one."""
        population = make_population([1e6, 0.02])

        winner = tournament_selection(population, ScriptedIndexRng([(0, 1)]))
        self.assertEqual(winner, population[1].design)

        winner = tournament_selection(population, ScriptedIndexRng([(1, 0)]))
        self.assertEqual(winner, population[1].design)


class TestBlendCrossover(unittest.TestCase):
    """Test uniform arithmetic crossover."""

    def setUp(self):
        self.parent_a = Design(20.0, 40.0, 1.0, 4.0)
        self.parent_b = Design(60.0, 10.0, 3.0, 2.0)
        self.rng = np.random.default_rng(42)

    def test_children_are_complementary(self):
        """Test child_a + child_b == parent_a + parent_b per gene."""
        child_a, child_b = blend_crossover(self.parent_a, self.parent_b, self.rng)

        for ca, cb, pa, pb in zip(child_a.as_tuple(), child_b.as_tuple(),
                                  self.parent_a.as_tuple(), self.parent_b.as_tuple()):
            self.assertAlmostEqual(ca + cb, pa + pb, places=10)
            self.assertGreaterEqual(ca, min(pa, pb) - 1e-12)
            self.assertLessEqual(ca, max(pa, pb) + 1e-12)

    def test_uses_one_weight_per_gene(self):
        """Test weights drawn as a vector of four."""
        alpha = np.random.default_rng(42).random(4)
        child_a, _ = blend_crossover(self.parent_a, self.parent_b, self.rng)

        for value, a, pa, pb in zip(child_a.as_tuple(), alpha,
                                    self.parent_a.as_tuple(), self.parent_b.as_tuple()):
            self.assertAlmostEqual(value, a * pa + (1 - a) * pb, places=12)

    def test_parents_unchanged(self):
        """Test crossover does not alter its inputs."""
        blend_crossover(self.parent_a, self.parent_b, self.rng)
        self.assertEqual(self.parent_a, Design(20.0, 40.0, 1.0, 4.0))
        self.assertEqual(self.parent_b, Design(60.0, 10.0, 3.0, 2.0))


class TestGaussianMutation(unittest.TestCase):
    """Test per-gene Gaussian mutation."""

    def setUp(self):
        self.bounds = Bounds.default()
        self.design = Design(45.0, 30.0, 2.5, 2.5)

    def test_zero_rate_keeps_design(self):
        """Test no gene changes when mutation rate is 0."""
        mutated = gaussian_mutation(self.design, self.bounds, 0.0, 10.0, np.random.default_rng(0))
        self.assertEqual(mutated, self.design)

    def test_full_rate_changes_every_gene(self):
        """Test every gene moves when mutation rate is 1."""
        mutated = gaussian_mutation(self.design, self.bounds, 1.0, 0.1, np.random.default_rng(0))
        for before, after in zip(self.design.as_tuple(), mutated.as_tuple()):
            self.assertNotEqual(before, after)
            self.assertLess(abs(after - before), 1.0)

    def test_large_noise_is_clamped(self):
        """Test mutated genes stay in bounds."""
        rng = np.random.default_rng(11)
        for _ in range(100):
            mutated = gaussian_mutation(self.design, self.bounds, 1.0, 100.0, rng)
            self.assertTrue(self.bounds.contains(mutated))

    def test_draw_order(self):
        """Test coin then normal draw per gene, normal only when mutating."""
        reference = np.random.default_rng(5)
        expected = list(self.design.as_tuple())
        for j in range(4):
            if reference.random() < 0.5:
                value = expected[j] + 0.1 * reference.standard_normal()
                expected[j] = self.bounds.intervals()[j].clamp(value)

        mutated = gaussian_mutation(self.design, self.bounds, 0.5, 0.1, np.random.default_rng(5))

        for value, exp in zip(mutated.as_tuple(), expected):
            self.assertAlmostEqual(value, exp, places=12)


class TestBreedGeneration(unittest.TestCase):
    """Test building a new generation."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_even_population_size(self):
        """Test an even size is filled exactly."""
        config = GAConfig(population_size=30, generations=1)
        population = initialize_population(30, config.bounds, self.rng)

        children = breed_generation(population, config, self.rng)

        self.assertEqual(len(children), 30)

    def test_odd_population_size_truncates(self):
        """Test an odd size drops the last pair's second child."""
        config = GAConfig(population_size=7, generations=1)
        population = initialize_population(7, config.bounds, self.rng)

        children = breed_generation(population, config, self.rng)

        self.assertEqual(len(children), 7)

    def test_no_crossover_no_mutation_copies_parents(self):
        """Test children are copies of tournament winners when operators are off."""
        config = GAConfig(population_size=10, generations=1, crossover_rate=0.0, mutation_rate=0.0)
        population = initialize_population(10, config.bounds, self.rng)
        designs = [member.design for member in population]

        children = breed_generation(population, config, self.rng)

        for child in children:
            self.assertIn(child, designs)


class TestBreedDrawOrder(unittest.TestCase):
    """Test the random draw order of one breeding step."""

    def replay_breeding(self, population, config, replay):
        """Rebuild the children by consuming draws in the documented order."""
        size = config.population_size

        def tournament():
            i1, i2 = replay.integers(0, len(population), size=2)
            if population[i1].objective < population[i2].objective:
                return np.array(population[i1].design.as_tuple())
            return np.array(population[i2].design.as_tuple())

        def mutate(genes):
            genes = genes.copy()
            for j, interval in enumerate(config.bounds.intervals()):
                if replay.random() < config.mutation_rate:
                    genes[j] = interval.clamp(genes[j] + config.mutation_strength * replay.standard_normal())
            return genes

        children = []
        while len(children) < size:
            parent_a = tournament()
            parent_b = tournament()
            if replay.random() < config.crossover_rate:
                alpha = replay.random(4)
                child_a = alpha * parent_a + (1 - alpha) * parent_b
                child_b = alpha * parent_b + (1 - alpha) * parent_a
            else:
                child_a, child_b = parent_a, parent_b
            children.append(mutate(child_a))
            if len(children) < size:
                children.append(mutate(child_b))
        return children

    def test_odd_size_matches_replay(self):
        """Test tournaments, coin, weights and genes are drawn in order with size 7."""
        config = GAConfig(population_size=7, generations=1, mutation_rate=0.5, mutation_strength=2.0)
        rng = np.random.default_rng(77)
        population = initialize_population(7, config.bounds, rng)
        replay = np.random.default_rng()
        replay.bit_generator.state = rng.bit_generator.state

        expected = self.replay_breeding(population, config, replay)
        children = breed_generation(population, config, rng)

        self.assertEqual(len(children), 7)
        for child, genes in zip(children, expected):
            for value, exp in zip(child.as_tuple(), genes):
                self.assertAlmostEqual(value, exp, places=12)

        # The discarded second child of the last pair consumed no draws
        self.assertEqual(rng.bit_generator.state, replay.bit_generator.state)

    def test_discarded_child_draws_nothing(self):
        """Test size 7 consumes exactly the draws of seven children."""
        config = GAConfig(population_size=7, generations=1, crossover_rate=0.0, mutation_rate=1.0)
        rng = np.random.default_rng(3)
        population = initialize_population(7, config.bounds, rng)
        state = rng.bit_generator.state

        breed_generation(population, config, rng)
        after_odd = rng.bit_generator.state

        # Four pairs: 4 tournament pairs + 4 coins, then one (coin, normal) per mutated gene
        replay = np.random.default_rng()
        replay.bit_generator.state = state
        for pair in range(4):
            replay.integers(0, 7, size=2)
            replay.integers(0, 7, size=2)
            replay.random()
            children = 1 if pair == 3 else 2
            for _ in range(4 * children):
                replay.random()
                replay.standard_normal()

        self.assertEqual(after_odd, replay.bit_generator.state)


class TestRunGA(unittest.TestCase):
    """Test complete GA runs."""

    def test_deterministic_with_fixed_seed(self):
        """Test identical seeds give identical runs."""
        config = GAConfig(population_size=12, generations=40)
        first = run_ga(config, np.random.default_rng(2024))
        second = run_ga(config, np.random.default_rng(2024))

        self.assertEqual(first.history, second.history)
        self.assertEqual(
            [m.design for m in first.population],
            [m.design for m in second.population]
        )

    def test_size_and_bounds_every_generation(self):
        """Test population size and bounds hold after each generation."""
        bounds = Bounds.from_dict({'h': [40.0, 70.0], 'tw': [1.0, 2.0]})
        for size in [6, 7]:
            config = GAConfig(population_size=size, generations=30,
                              mutation_rate=0.5, mutation_strength=5.0, bounds=bounds)
            seen = []

            def check(generation, population, minimum):
                seen.append(generation)
                self.assertEqual(len(population), size)
                for member in population:
                    self.assertTrue(bounds.contains(member.design))
                self.assertEqual(minimum, population_minimum(population))

            result = run_ga(config, np.random.default_rng(size), callback=check)

            self.assertEqual(seen, list(range(1, 31)))
            self.assertEqual(len(result.history), 30)
            self.assertEqual(len(result.population), size)

    def test_result_reports_final_population_best(self):
        """Test best member comes from the final population."""
        config = GAConfig(population_size=10, generations=25)
        result = run_ga(config, np.random.default_rng(8), seed=8)

        self.assertEqual(result.algorithm, "ga")
        self.assertIn(result.best, result.population)
        self.assertEqual(result.best.objective, result.history[-1])
        self.assertEqual(result.seed, 8)

    def test_improves_on_average(self):
        """Test the final best beats generation 0 on average over seeds."""
        config = GAConfig(population_size=30, generations=400)
        initial, final = [], []

        for seed in range(5):
            result = run_ga(config, np.random.default_rng(seed))
            initial.append(result.initial_best)
            final.append(result.best.objective)

        self.assertLess(np.mean(final), np.mean(initial))


if __name__ == '__main__':
    unittest.main()
