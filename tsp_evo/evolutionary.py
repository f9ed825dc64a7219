import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .cities import CoordinateSpace
from .errors import ConfigurationError, InvariantViolation
from .tours import FitnessFunction, Tour, calculate_fitness


@dataclass(frozen=True)
class EvolutionConfig:
    """
    Fixed parameters of one simulation.

    ``elite_count`` is the number of top-ranked tours copied unchanged into the
    next generation; left as ``None`` it is derived from the rates as
    ``floor(floor(population_size * crossover_rate) * survival_rate)``.
    ``diversity_floor`` is the number of lowest-ranked tours carried over
    unchanged as well.
    """

    population_size: int = 100
    max_iterations: int = 100
    crossover_rate: float = 0.8
    mutation_rate: float = 0.001
    survival_rate: float = 0.2
    elite_count: Optional[int] = None
    diversity_floor: int = 2
    random_seed: Optional[int] = None

    @property
    def breeding_count(self) -> int:
        return math.floor(self.population_size * self.crossover_rate)

    @property
    def surviving_parent_count(self) -> int:
        if self.elite_count is not None:
            return self.elite_count
        return math.floor(self.breeding_count * self.survival_rate)

    @property
    def offspring_count(self) -> int:
        return self.population_size - self.surviving_parent_count - self.diversity_floor

    def validate(self, num_cities: Optional[int] = None) -> None:
        for name in ("crossover_rate", "mutation_rate", "survival_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.diversity_floor < 0:
            raise ConfigurationError(f"diversity_floor must be >= 0, got {self.diversity_floor}")
        if self.elite_count is not None and self.elite_count < 0:
            raise ConfigurationError(f"elite_count must be >= 0, got {self.elite_count}")
        if self.population_size < self.diversity_floor + 1:
            raise ConfigurationError(
                f"population_size must be at least {self.diversity_floor + 1}, "
                f"got {self.population_size}"
            )
        if self.offspring_count < 0:
            raise ConfigurationError(
                f"population_size={self.population_size} leaves no room for "
                f"{self.surviving_parent_count} elites and {self.diversity_floor} floor tours"
            )
        if self.offspring_count > 0 and self.breeding_count < 1:
            raise ConfigurationError(
                f"{self.offspring_count} offspring needed but the breeding pool is empty "
                f"(population_size={self.population_size}, crossover_rate={self.crossover_rate})"
            )
        if num_cities is not None and num_cities < 1:
            raise ConfigurationError("at least one city is required")


def initial_population(
    space: CoordinateSpace,
    size: int,
    rng: random.Random,
    fitness: FitnessFunction = calculate_fitness,
) -> List[Tour]:
    return [Tour.random(space, rng, fitness) for _ in range(size)]


class Population:
    """Owns one generation of tours and produces the next one."""

    def __init__(
        self,
        tours: Sequence[Tour],
        space: CoordinateSpace,
        config: EvolutionConfig,
        rng: random.Random = None,
        fitness: FitnessFunction = calculate_fitness,
    ):
        config.validate(num_cities=len(space))
        if len(tours) != config.population_size:
            raise ConfigurationError(
                f"expected {config.population_size} tours, got {len(tours)}"
            )
        self.cfg = config
        self.space = space
        self.fitness = fitness
        self.rng = rng or random.Random(config.random_seed)
        self.generation = 0
        self.breeding_count = config.breeding_count
        self.elite_count = config.surviving_parent_count
        self.diversity_floor = config.diversity_floor
        self.offspring_count = config.offspring_count
        self._tours: List[Tour] = list(tours)

    @property
    def tours(self) -> Sequence[Tour]:
        """Current generation, for reporting only."""
        return tuple(self._tours)

    def __len__(self) -> int:
        return len(self._tours)

    def find_fittest(self) -> Tour:
        # Strict comparison keeps the earliest tour among equal maxima.
        fittest = self._tours[0]
        for tour in self._tours[1:]:
            if tour.fitness > fittest.fitness:
                fittest = tour
        return fittest.copy()

    def ranked(self) -> List[Tour]:
        # sorted() is stable with reverse=True, so ties keep their input order.
        return sorted(self._tours, key=lambda t: t.fitness, reverse=True)

    def breed(self, pool: Sequence[Tour]) -> List[Tour]:
        """Cycle through ``pool`` as mothers, each paired with a random father from it."""
        offspring = []
        for i in range(self.offspring_count):
            mother = pool[i % len(pool)]
            father = self.rng.choice(pool)
            offspring.append(mother.breed(father, self.space, self.rng, self.fitness))
        return offspring

    def advance(self) -> None:
        ranked = self.ranked()
        size = len(ranked)
        pool = ranked[: self.breeding_count]
        elites = [t.copy() for t in ranked[: self.elite_count]]
        floor = [t.copy() for t in ranked[size - self.diversity_floor :]]

        next_generation = elites + self.breed(pool) + floor
        if len(next_generation) != size:
            raise InvariantViolation(
                "generation size changed",
                generation=self.generation,
                expected=size,
                actual=len(next_generation),
                elites=len(elites),
                offspring=self.offspring_count,
                floor=len(floor),
            )

        for tour in next_generation:
            if self.rng.random() < self.cfg.mutation_rate:
                tour.mutate(self.space, self.rng, self.fitness)

        self._tours = next_generation
        self.generation += 1
