import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .cities import CoordinateSpace
from .evolutionary import EvolutionConfig, Population, initial_population
from .tours import FitnessFunction, Tour, calculate_fitness


GenerationCallback = Callable[[int, Population, Tour], None]


@dataclass
class SimulationResult:
    best: Tour
    length: float
    generations: int
    history: List[float] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.best} (length={self.length:.4f}, generations={self.generations})"


class Simulation:
    """
    Runs a population for exactly ``config.max_iterations`` generations and
    keeps the fittest tour seen in any generation, not only the last one.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        space: CoordinateSpace,
        population: Optional[Sequence[Tour]] = None,
        rng: random.Random = None,
        fitness: FitnessFunction = calculate_fitness,
        on_generation: Optional[GenerationCallback] = None,
    ):
        config.validate(num_cities=len(space))
        self.cfg = config
        self.space = space
        self.rng = rng or random.Random(config.random_seed)
        self.fitness = fitness
        self.on_generation = on_generation
        if population is None:
            population = initial_population(space, config.population_size, self.rng, fitness)
        self.population = Population(population, space, config, rng=self.rng, fitness=fitness)

    def run(self) -> SimulationResult:
        fittest = self.population.find_fittest()
        history = [fittest.fitness]
        for _ in range(self.cfg.max_iterations):
            self.population.advance()
            challenger = self.population.find_fittest()
            if challenger.fitness > fittest.fitness:
                fittest = challenger
            history.append(fittest.fitness)
            if self.on_generation is not None:
                self.on_generation(self.population.generation, self.population, fittest)
        return SimulationResult(
            best=fittest,
            length=fittest.length(self.space),
            generations=self.population.generation,
            history=history,
        )
