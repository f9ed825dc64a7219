from tsp_evo.cities import CoordinateSpace
from tsp_evo.data import UNIT_SQUARE
from tsp_evo.evolutionary import EvolutionConfig
from tsp_evo.simulation import Simulation


def main():
    space = CoordinateSpace(UNIT_SQUARE)
    cfg = EvolutionConfig(
        population_size=20,
        max_iterations=50,
        crossover_rate=0.8,
        mutation_rate=0.01,
        survival_rate=0.2,
    )

    def report(generation, population, best):
        if generation % 10 == 0:
            print(f"gen {generation}: best length={best.length(space):.3f}")

    result = Simulation(cfg, space, on_generation=report).run()
    print(result)


if __name__ == "__main__":
    main()
