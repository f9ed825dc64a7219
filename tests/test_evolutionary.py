import random

import pytest

from tsp_evo.errors import ConfigurationError, InvariantViolation
from tsp_evo.evolutionary import EvolutionConfig, Population, initial_population
from tsp_evo.tours import Tour


def make_population(space, rng, **kwargs):
    cfg = EvolutionConfig(**kwargs)
    tours = initial_population(space, cfg.population_size, rng)
    return Population(tours, space, cfg, rng=rng)


def test_derived_counts():
    cfg = EvolutionConfig(population_size=20, crossover_rate=0.8, survival_rate=0.2)
    assert cfg.breeding_count == 16
    assert cfg.surviving_parent_count == 3
    assert cfg.offspring_count == 15


def test_explicit_knobs_override_derivation():
    cfg = EvolutionConfig(population_size=20, elite_count=5, diversity_floor=4)
    assert cfg.surviving_parent_count == 5
    assert cfg.offspring_count == 11


@pytest.mark.parametrize(
    "kwargs",
    [
        {"crossover_rate": 1.5},
        {"mutation_rate": -0.1},
        {"survival_rate": 2.0},
        {"max_iterations": -1},
        {"population_size": 2},
        {"population_size": 3, "crossover_rate": 1.0, "survival_rate": 1.0},
        {"population_size": 10, "crossover_rate": 0.0},
        {"population_size": 10, "elite_count": 9},
        {"elite_count": -1},
        {"diversity_floor": -1},
    ],
)
def test_invalid_configs_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        EvolutionConfig(**kwargs).validate()


def test_smallest_valid_population():
    cfg = EvolutionConfig(population_size=3, crossover_rate=0.8, survival_rate=0.2)
    cfg.validate()
    assert cfg.offspring_count == 1


def test_population_rejects_bad_config_before_running(square, rng):
    cfg = EvolutionConfig(population_size=3, crossover_rate=1.0, survival_rate=1.0)
    tours = initial_population(square, 3, rng)
    with pytest.raises(ConfigurationError):
        Population(tours, square, cfg, rng=rng)


def test_population_size_must_match_config(square, rng):
    cfg = EvolutionConfig(population_size=10)
    with pytest.raises(ConfigurationError):
        Population(initial_population(square, 9, rng), square, cfg, rng=rng)


def test_find_fittest_single_element_returns_copy(square, rng):
    tour = Tour.from_order([0, 1, 2, 3], square)
    cfg = EvolutionConfig(population_size=1, diversity_floor=0, crossover_rate=1.0)
    pop = Population([tour], square, cfg, rng=rng)
    fittest = pop.find_fittest()
    assert fittest == tour
    assert fittest is not tour
    fittest.order.reverse()
    assert pop.tours[0].order == [0, 1, 2, 3]


def test_find_fittest_keeps_first_of_ties(square, rng):
    first = Tour.from_order([0, 1, 2, 3], square)
    second = Tour.from_order([3, 2, 1, 0], square)
    worse = Tour.from_order([0, 2, 1, 3], square)
    cfg = EvolutionConfig(population_size=3)
    pop = Population([worse, first, second], square, cfg, rng=rng)
    assert pop.find_fittest().order == [0, 1, 2, 3]


def test_ranked_is_stable_descending(square, rng):
    a = Tour.from_order([0, 2, 1, 3], square)
    b = Tour.from_order([0, 1, 2, 3], square)
    c = Tour.from_order([3, 2, 1, 0], square)
    pop = Population([a, b, c], square, EvolutionConfig(population_size=3), rng=rng)
    assert [t.order for t in pop.ranked()] == [b.order, c.order, a.order]


def test_advance_keeps_size_and_permutations(nine_cities, rng):
    pop = make_population(nine_cities, rng, population_size=30, mutation_rate=0.5)
    for _ in range(25):
        pop.advance()
        assert len(pop) == 30
        for tour in pop.tours:
            assert sorted(tour.order) == list(range(len(nine_cities)))
    assert pop.generation == 25


def test_advance_carries_elites_and_diversity_floor(nine_cities, rng):
    pop = make_population(
        nine_cities, rng, population_size=20, crossover_rate=0.8, survival_rate=0.2, mutation_rate=0.0
    )
    before = [t.order[:] for t in pop.ranked()]
    pop.advance()
    after = [t.order for t in pop.tours]
    assert after[:3] == before[:3]
    assert after[-2:] == before[-2:]


def test_carried_tours_are_copies(nine_cities, rng):
    pop = make_population(nine_cities, rng, population_size=10, mutation_rate=0.0)
    old = list(pop.tours)
    pop.advance()
    assert not any(new is prev for new in pop.tours for prev in old)


def test_full_mutation_keeps_fitness_consistent(nine_cities, rng):
    pop = make_population(nine_cities, rng, population_size=12, mutation_rate=1.0)
    pop.advance()
    for tour in pop.tours:
        assert tour.fitness == pytest.approx(Tour.from_order(tour.order, nine_cities).fitness)


def test_size_drift_raises_invariant_violation(nine_cities, rng, monkeypatch):
    pop = make_population(nine_cities, rng, population_size=10)
    monkeypatch.setattr(pop, "breed", lambda pool: [])
    with pytest.raises(InvariantViolation) as err:
        pop.advance()
    assert err.value.generation == 0
    assert err.value.context["expected"] == 10
    assert err.value.context["actual"] == 10 - pop.offspring_count


def test_seeded_runs_are_reproducible(nine_cities):
    def orders(seed):
        rng = random.Random(seed)
        pop = make_population(nine_cities, rng, population_size=15, mutation_rate=0.2)
        for _ in range(10):
            pop.advance()
        return [t.order for t in pop.tours]

    assert orders(7) == orders(7)
