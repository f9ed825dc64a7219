import argparse
import random
import sys
import time
from pathlib import Path
from typing import Sequence

from tsp_evo.cities import CoordinateSpace
from tsp_evo.data import DEFAULT_CITIES, load_instance, random_cities
from tsp_evo.errors import ConfigurationError
from tsp_evo.evolutionary import EvolutionConfig, Population
from tsp_evo.simulation import Simulation
from tsp_evo.tours import Tour, calculate_fitness, closed_tour_fitness


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def print_generation(tours: Sequence[Tour], top_k: int = 10) -> None:
    print("Generation")
    for tour in tours[:top_k]:
        print(tour)


def _build_space(args) -> CoordinateSpace:
    if args.tsp:
        inst = load_instance(Path(args.tsp))
        log(f"loaded {inst.name} ({len(inst.space)} cities) from {inst.path}")
        return inst.space
    if args.random is not None:
        rng = random.Random(args.seed)
        log(f"generating {args.random} random cities")
        return CoordinateSpace(random_cities(args.random, rng))
    return CoordinateSpace(DEFAULT_CITIES)


def _config_from_args(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population_size,
        max_iterations=args.iterations,
        crossover_rate=args.crossover_rate,
        mutation_rate=args.mutation_rate,
        survival_rate=args.survival_rate,
        elite_count=args.elite_count,
        diversity_floor=args.diversity_floor,
        random_seed=args.seed,
    )


def run(args) -> None:
    space = _build_space(args)
    cfg = _config_from_args(args)
    fitness = closed_tour_fitness if args.closed else calculate_fitness

    def report(generation: int, population: Population, best: Tour) -> None:
        if args.every and generation % args.every == 0:
            log(f"gen {generation}: best fitness={best.fitness:.6f} length={best.length(space):.4f}")
        if args.show:
            print_generation(population.tours, top_k=args.show)

    sim = Simulation(cfg, space, fitness=fitness, on_generation=report)
    log(
        f"starting iterations: population={cfg.population_size} iterations={cfg.max_iterations} "
        f"elites={cfg.surviving_parent_count} offspring={cfg.offspring_count}"
    )
    t0 = time.perf_counter()
    result = sim.run()
    log(f"finished {result.generations} generations in {time.perf_counter() - t0:.2f}s")
    print(result.best)
    print(f"Length: {result.length:.4f}")


def cities(args) -> None:
    inst = load_instance(Path(args.tsp))
    print(f"{inst.name}: {len(inst.space)} cities")
    for idx, (x, y) in enumerate(inst.space.to_list()):
        print(f"{idx}\t{x}\t{y}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic algorithm for the open-path TSP")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for a fixed number of generations")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--tsp", help="TSPLIB .tsp file with node coordinates")
    source.add_argument("--random", type=int, help="Generate this many random cities")
    run_parser.add_argument("--population-size", type=int, default=100)
    run_parser.add_argument("--iterations", type=int, default=100)
    run_parser.add_argument("--crossover-rate", type=float, default=0.8)
    run_parser.add_argument("--mutation-rate", type=float, default=0.001)
    run_parser.add_argument("--survival-rate", type=float, default=0.2)
    run_parser.add_argument("--elite-count", type=int, default=None)
    run_parser.add_argument("--diversity-floor", type=int, default=2)
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--closed", action="store_true", help="Score tours as closed cycles")
    run_parser.add_argument("--show", type=int, default=0, help="Print the top N tours of each generation")
    run_parser.add_argument("--every", type=int, default=10, help="Log progress every K generations")
    run_parser.set_defaults(func=run)

    cities_parser = subparsers.add_parser("cities", help="List the cities of a TSPLIB instance")
    cities_parser.add_argument("--tsp", required=True)
    cities_parser.set_defaults(func=cities)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
