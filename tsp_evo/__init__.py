"""
Genetic algorithm for the open-path Euclidean TSP: ordered crossover,
swap mutation and a fixed elites + offspring + diversity-floor replacement.
"""

__all__ = [
    "cities",
    "data",
    "errors",
    "evolutionary",
    "simulation",
    "tours",
]
