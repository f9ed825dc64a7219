from .base import (
    FitnessFunction,
    Order,
    calculate_fitness,
    closed_tour_fitness,
    closed_tour_length,
    path_length,
)
from .operators import check_permutation, order_crossover, swap_positions
from .tour import Tour

__all__ = [
    "FitnessFunction",
    "Order",
    "Tour",
    "calculate_fitness",
    "closed_tour_fitness",
    "closed_tour_length",
    "path_length",
    "check_permutation",
    "order_crossover",
    "swap_positions",
]
