from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigurationError


@dataclass(frozen=True)
class City:
    x: float
    y: float


CityLike = Union[City, Tuple[float, float], Sequence[float]]


class CoordinateSpace:
    """
    Read-only set of cities shared by every tour.

    City ``i`` is row ``i`` of ``coords``; pairwise Euclidean distances are
    precomputed into a dense matrix.
    """

    def __init__(self, cities: Iterable[CityLike]):
        self.cities: Tuple[City, ...] = tuple(
            c if isinstance(c, City) else City(float(c[0]), float(c[1])) for c in cities
        )
        if not self.cities:
            raise ConfigurationError("at least one city is required")
        self.coords = np.array([(c.x, c.y) for c in self.cities], dtype=float)
        self.coords.setflags(write=False)
        self.matrix = self._distance_matrix(self.coords)
        self.matrix.setflags(write=False)

    @staticmethod
    def _distance_matrix(coords: np.ndarray) -> np.ndarray:
        diff = coords[:, None, :] - coords[None, :, :]
        return np.hypot(diff[..., 0], diff[..., 1])

    def distance(self, i: int, j: int) -> float:
        return float(self.matrix[i, j])

    def __len__(self) -> int:
        return len(self.cities)

    def __getitem__(self, index: int) -> City:
        return self.cities[index]

    def __repr__(self) -> str:
        return f"CoordinateSpace(cities={len(self.cities)})"

    def to_list(self) -> List[Tuple[float, float]]:
        return [(c.x, c.y) for c in self.cities]
