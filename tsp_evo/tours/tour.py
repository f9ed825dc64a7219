from random import Random
from dataclasses import dataclass
from typing import List

from ..cities import CoordinateSpace
from .base import FitnessFunction, Order, calculate_fitness, path_length
from .operators import check_permutation, order_crossover, swap_positions


@dataclass
class Tour:
    """
    A candidate solution: a permutation of city indices and its cached fitness.

    Every operator that changes ``order`` recomputes ``fitness`` before
    returning, so the two fields never disagree.
    """

    order: Order
    fitness: float

    @staticmethod
    def from_order(
        order: List[int], space: CoordinateSpace, fitness: FitnessFunction = calculate_fitness
    ) -> "Tour":
        return Tour(order=list(order), fitness=fitness(order, space))

    @staticmethod
    def random(
        space: CoordinateSpace, rng: Random, fitness: FitnessFunction = calculate_fitness
    ) -> "Tour":
        order = list(range(len(space)))
        rng.shuffle(order)
        return Tour.from_order(order, space, fitness)

    def breed(
        self,
        other: "Tour",
        space: CoordinateSpace,
        rng: Random,
        fitness: FitnessFunction = calculate_fitness,
    ) -> "Tour":
        child = order_crossover(self.order, other.order, rng)
        check_permutation(child, len(space))
        return Tour(order=child, fitness=fitness(child, space))

    def mutate(
        self, space: CoordinateSpace, rng: Random, fitness: FitnessFunction = calculate_fitness
    ) -> None:
        swap_positions(self.order, rng)
        self.fitness = fitness(self.order, space)

    def copy(self) -> "Tour":
        return Tour(order=self.order[:], fitness=self.fitness)

    def length(self, space: CoordinateSpace) -> float:
        return path_length(self.order, space)

    def __len__(self) -> int:
        return len(self.order)

    def __str__(self) -> str:
        path = "->".join(str(i) for i in self.order)
        return f"Fitness: {self.fitness}, Path: {path}"
