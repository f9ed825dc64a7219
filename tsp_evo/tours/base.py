import math
from typing import Callable, List, Sequence

from ..cities import CoordinateSpace


Order = List[int]

# Maps an ordering to a score; selection only ever assumes higher is better.
FitnessFunction = Callable[[Sequence[int], CoordinateSpace], float]


def path_length(order: Sequence[int], space: CoordinateSpace) -> float:
    """Length of the open path through ``order``; there is no return edge."""
    dist = 0.0
    for i in range(len(order) - 1):
        dist += space.distance(order[i], order[i + 1])
    return float(dist)


def closed_tour_length(order: Sequence[int], space: CoordinateSpace) -> float:
    dist = path_length(order, space)
    if len(order) > 1:
        dist += space.distance(order[-1], order[0])
    return dist


def _reciprocal(length: float) -> float:
    # Coincident cities give a zero-length path; inf beats every finite score.
    if length == 0.0:
        return math.inf
    return 1.0 / length


def calculate_fitness(order: Sequence[int], space: CoordinateSpace) -> float:
    """
    Reciprocal of the open path length, so that shorter paths score higher.
    Returns ``math.inf`` when every visited city coincides.
    """
    return _reciprocal(path_length(order, space))


def closed_tour_fitness(order: Sequence[int], space: CoordinateSpace) -> float:
    return _reciprocal(closed_tour_length(order, space))
