import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import tsplib95

from .cities import CoordinateSpace


DEFAULT_CITIES: List[Tuple[float, float]] = [
    (1.0, 3.0),
    (1.0, 2.0),
    (1.0, 1.0),
    (4.0, 3.0),
    (2.0, 1.0),
    (3.0, 3.0),
    (3.0, 2.0),
    (3.0, 1.0),
    (4.0, 4.0),
]

UNIT_SQUARE: List[Tuple[float, float]] = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    space: CoordinateSpace


def random_cities(
    n: int, rng: random.Random, square_size: float = 100.0
) -> List[Tuple[float, float]]:
    return [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]


def _read_dimension(path: Path) -> Optional[int]:
    with path.open("r") as f:
        for line in f:
            if "DIMENSION" in line.upper():
                parts = line.replace(":", " ").split()
                for token in parts:
                    if token.isdigit():
                        return int(token)
    return None


def load_instance(path: Path) -> Instance:
    """Read a TSPLIB file; city ``i`` is the ``i``-th node in file order."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"TSPLIB file not found: {path}")
    problem = tsplib95.load(str(path))
    if not problem.node_coords:
        raise ValueError(f"{path} has no NODE_COORD_SECTION; only coordinate instances are supported")
    coords = [problem.node_coords[n] for n in problem.get_nodes()]
    return Instance(name=problem.name or path.stem, path=path, space=CoordinateSpace(coords))


def load_tsplib_instances(root: Path, max_nodes: Optional[int] = None) -> List[Instance]:
    instances: List[Instance] = []
    for p in sorted(Path(root).glob("*.tsp")):
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
    return instances
