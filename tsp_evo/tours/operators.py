import random
from typing import Sequence

from ..errors import InvariantViolation
from .base import Order


def order_crossover(mother: Sequence[int], father: Sequence[int], rng: random.Random) -> Order:
    """
    Keep the mother's order up to a random cut point, then fill with the
    father's remaining cities in the order they appear in the father.
    """
    point = rng.randrange(len(mother))
    head = list(mother[:point])
    taken = set(head)
    return head + [city for city in father if city not in taken]


def swap_positions(order: Order, rng: random.Random) -> None:
    # Both positions are drawn independently; i == j leaves the order as is.
    i = rng.randrange(len(order))
    j = rng.randrange(len(order))
    order[i], order[j] = order[j], order[i]


def check_permutation(order: Sequence[int], n: int) -> None:
    if len(order) != n or set(order) != set(range(n)):
        raise InvariantViolation(
            "order is not a permutation of the city indices",
            expected_len=n,
            actual_len=len(order),
        )
