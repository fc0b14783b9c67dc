"""
Grey Wolf Optimizer
===================

Single-objective GWO for PID tuning of the DC motor speed loop.

The pack is led by the three best wolves found so far (alpha, beta,
delta). Every other wolf is pulled towards a point derived from all
three leaders:

    A = 2a·r1 - a,  C = 2·r2
    X_L = L - A·|C·L - x|         for L in (alpha, beta, delta)
    x'  = (X_alpha + X_beta + X_delta) / 3

with a decaying linearly from 2 (exploration) towards 0 (exploitation).
Positions are clamped to [0, upper_bound] on every coordinate.
"""

import numpy as np
from typing import List, Tuple, Optional, Callable
from dataclasses import dataclass, field

from .config import RunConfig
from .dc_motor import simulate_motor, UNSTABLE_FITNESS


N_GAINS = 3  # Kp, Ki, Kd
REPORT_EVERY = 10


@dataclass
class Wolf:
    """A candidate gain triple and its fitness."""
    position: np.ndarray  # [Kp, Ki, Kd]
    fitness: float = UNSTABLE_FITNESS

    def copy(self) -> 'Wolf':
        return Wolf(position=self.position.copy(), fitness=self.fitness)


def _sentinel_wolf() -> Wolf:
    return Wolf(position=np.zeros(N_GAINS), fitness=UNSTABLE_FITNESS)


@dataclass
class LeaderSet:
    """
    Alpha, beta and delta wolves (best, second, third).

    Leaders are value copies, so moving the pack never changes them.
    They persist across iterations and start at the unstable sentinel,
    which any real evaluation displaces.
    """
    alpha: Wolf = field(default_factory=_sentinel_wolf)
    beta: Wolf = field(default_factory=_sentinel_wolf)
    delta: Wolf = field(default_factory=_sentinel_wolf)

    def update(self, population: List[Wolf]):
        """
        Rank the pack against the current leaders.

        A single scan over a snapshot of the population with strict
        comparisons, so the first of several equal wolves wins. A new
        alpha demotes alpha to beta and beta to delta; the old delta is
        dropped.
        """
        snapshot = [wolf.copy() for wolf in population]

        for wolf in snapshot:
            if wolf.fitness < self.alpha.fitness:
                self.delta = self.beta
                self.beta = self.alpha
                self.alpha = wolf
            elif wolf.fitness < self.beta.fitness:
                self.delta = self.beta
                self.beta = wolf
            elif wolf.fitness < self.delta.fitness:
                self.delta = wolf

    def __iter__(self):
        return iter((self.alpha, self.beta, self.delta))


class GreyWolfOptimizer:
    """
    GWO minimizing the closed-loop ITAE of the motor speed loop.

    The random source is injected (`rng`) or built from `seed`, so a run
    is reproducible. Progress is reported every 10 iterations through
    `progress_callback(iteration, alpha_fitness)` and, when `verbose`,
    printed.
    """

    def __init__(
        self,
        config: RunConfig,
        objective_function: Callable[[float, float, float, float], float] = simulate_motor,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        progress_callback: Optional[Callable[[int, float], None]] = None,
        verbose: bool = False
    ):
        self.config = config
        self.objective_fn = objective_function
        self.progress_callback = progress_callback
        self.verbose = verbose

        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.population: List[Wolf] = []
        self.leaders = LeaderSet()

        # Iteration trace
        self.history = {
            'iterations': [],
            'best_fitness': [],
            'mean_fitness': [],
            'best_positions': []
        }

    def evaluate(self, position: np.ndarray) -> float:
        """Fitness of one gain triple at the configured setpoint."""
        return self.objective_fn(position[0], position[1], position[2], self.config.setpoint)

    def initialize_population(self) -> List[Wolf]:
        """
        Scatter the pack uniformly over [0, upper_bound]³ and evaluate it.
        """
        ub = self.config.upper_bound
        population = []
        for _ in range(self.config.pack_size):
            position = self.rng.random(N_GAINS) * ub
            population.append(Wolf(position=position, fitness=self.evaluate(position)))
        return population

    def decay_coefficient(self, iteration: int) -> float:
        """a = 2 at iteration 0, decreasing linearly towards 0."""
        return 2.0 * (1.0 - iteration / self.config.max_iterations)

    def reposition(self, wolf: Wolf, a: float):
        """
        Move one wolf towards the leaders, clamp it and re-evaluate it.

        One (r1, r2) pair is drawn per coordinate and shared by the three
        leader terms.
        """
        ub = self.config.upper_bound
        alpha, beta, delta = self.leaders

        for j in range(N_GAINS):
            r1 = self.rng.random()
            r2 = self.rng.random()
            A = 2.0 * a * r1 - a
            C = 2.0 * r2

            x = wolf.position[j]
            X1 = alpha.position[j] - A * abs(C * alpha.position[j] - x)
            X2 = beta.position[j] - A * abs(C * beta.position[j] - x)
            X3 = delta.position[j] - A * abs(C * delta.position[j] - x)

            new_x = (X1 + X2 + X3) / 3.0

            # Boundary constraints: keep gains within [0, UB]
            if new_x < 0:
                new_x = 0.0
            if new_x > ub:
                new_x = ub
            wolf.position[j] = new_x

        wolf.fitness = self.evaluate(wolf.position)

    def step(self, iteration: int):
        """One hunt iteration: rank, decay, move and re-evaluate the pack."""
        self.leaders.update(self.population)

        a = self.decay_coefficient(iteration)

        for wolf in self.population:
            self.reposition(wolf, a)

        alpha = self.leaders.alpha
        self.history['iterations'].append(iteration)
        self.history['best_fitness'].append(alpha.fitness)
        # Diverged wolves can score far above the sentinel; cap before averaging
        fitness = np.array([wolf.fitness for wolf in self.population])
        self.history['mean_fitness'].append(
            float(np.mean(np.minimum(fitness, UNSTABLE_FITNESS)))
        )
        self.history['best_positions'].append(alpha.position.copy())

        if iteration % REPORT_EVERY == 0:
            self.report(iteration, alpha.fitness)

    def report(self, iteration: int, best_fitness: float):
        if self.progress_callback is not None:
            self.progress_callback(iteration, best_fitness)
        if self.verbose:
            print(f"Iteration {iteration}: Best ITAE = {best_fitness:.4f}")

    def run(self) -> Tuple[Wolf, dict]:
        """
        Run GWO optimization.

        Returns:
            (alpha, history) - Best wolf found and the iteration trace
        """
        if self.verbose:
            print("=" * 60)
            print("Grey Wolf Optimizer - PID Tuning")
            print("=" * 60)
            print(f"Pack size: {self.config.pack_size}")
            print(f"Iterations: {self.config.max_iterations}")
            print(f"Search space: Kp, Ki, Kd in [0, {self.config.upper_bound}]")
            print("-" * 60)

        self.population = self.initialize_population()

        for iteration in range(self.config.max_iterations):
            self.step(iteration)

        if self.config.max_iterations == 0:
            # No hunt: first-occurring best of the initial pack
            best = min(self.population, key=lambda wolf: wolf.fitness)
        else:
            best = self.leaders.alpha

        if self.verbose:
            print("-" * 60)
            print(f"Optimization complete! Best ITAE: {best.fitness:.4f}")

        return best.copy(), self.history
