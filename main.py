"""
GWO-PID Optimizer
=================

Automated PID tuning for DC motor speed control with the Grey Wolf
Optimizer.

This script:
1. Reads the run settings (command-line flags, prompting for any missing)
2. Runs GWO to minimize the ITAE of a closed-loop speed step
3. Prints the best gains and their step-response performance
4. Optionally generates figures (--figures DIR)
"""

import argparse
import sys
import time
from typing import List, Optional

# Local imports
from gwo_pid.config import ConfigurationError, prompt_run_config
from gwo_pid.dc_motor import DCMotor, simulate_step_response
from gwo_pid.pid_controller import PIDController, PIDGains
from gwo_pid.gwo import GreyWolfOptimizer
from gwo_pid.objectives import get_performance_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tune DC motor PID gains with the Grey Wolf Optimizer."
    )
    parser.add_argument("--pack-size", type=int, dest="pack_size",
                        help="number of wolves in the pack")
    parser.add_argument("--max-iter", type=int, dest="max_iterations",
                        help="number of hunt iterations")
    parser.add_argument("--setpoint", type=float,
                        help="target motor speed")
    parser.add_argument("--upper-bound", type=float, dest="upper_bound",
                        help="upper bound for Kp, Ki and Kd")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed (default: nondeterministic)")
    parser.add_argument("--figures", metavar="DIR", default=None,
                        help="write convergence and step-response figures to DIR")
    parser.add_argument("--quiet", action="store_true",
                        help="suppress per-iteration progress")
    return parser


def main(argv: Optional[List[str]] = None, input_fn=input) -> int:
    """Optimization pipeline. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = prompt_run_config(
            input_fn=input_fn,
            pack_size=args.pack_size,
            max_iterations=args.max_iterations,
            setpoint=args.setpoint,
            upper_bound=args.upper_bound,
        )
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    optimizer = GreyWolfOptimizer(
        config=config,
        seed=args.seed,
        verbose=not args.quiet
    )

    start_time = time.time()
    alpha, history = optimizer.run()
    elapsed = time.time() - start_time

    gains = PIDGains.from_array(alpha.position)

    print("\n--- GWO Optimization Success ---")
    print(f"Best PID: Kp={gains.Kp:.2f}, Ki={gains.Ki:.2f}, Kd={gains.Kd:.2f}")
    print(f"Final ITAE: {alpha.fitness:.4f}")
    print(f"Optimization completed in {elapsed:.1f} seconds")

    # Time-domain check of the winning gains
    sim_result = simulate_step_response(
        motor=DCMotor(),
        controller=PIDController(gains),
        setpoint=config.setpoint
    )
    perf = get_performance_summary(sim_result, config.setpoint)
    print("\nStep Response Performance:")
    print(f"  Settling time: {perf['settling_time']:.3f} s")
    print(f"  Overshoot: {perf['overshoot']:.2f}%")
    print(f"  Rise time: {perf['rise_time']:.3f} s")
    print(f"  Steady-state error: {perf['steady_state_error']:.4f}")

    if args.figures:
        from gwo_pid.visualization import GWOVisualizer

        print("\nGenerating figures...")
        viz = GWOVisualizer(output_dir=args.figures)
        if history['iterations']:
            viz.plot_convergence(history=history)
            viz.plot_leader_gains(history=history, upper_bound=config.upper_bound)
        viz.plot_step_response(sim_result=sim_result, setpoint=config.setpoint, gains=gains)
        for f in sorted(viz.output_dir.glob("*.png")):
            print(f"  - {f.name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
