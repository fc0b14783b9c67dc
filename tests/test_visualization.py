import matplotlib.pyplot as plt
import numpy as np

from gwo_pid.config import RunConfig
from gwo_pid.dc_motor import DCMotor, simulate_step_response
from gwo_pid.gwo import GreyWolfOptimizer
from gwo_pid.pid_controller import PIDController, PIDGains
from gwo_pid.visualization import GWOVisualizer


def test_figures_saved(tmp_path):
    config = RunConfig(pack_size=5, max_iterations=8, setpoint=1.0, upper_bound=5.0)
    alpha, history = GreyWolfOptimizer(config, seed=0).run()
    gains = PIDGains.from_array(alpha.position)
    result = simulate_step_response(DCMotor(), PIDController(gains), setpoint=1.0)

    viz = GWOVisualizer(output_dir=str(tmp_path / "out"), dpi=50)
    figs = [
        viz.plot_convergence(history),
        viz.plot_step_response(result, setpoint=1.0, gains=gains),
        viz.plot_leader_gains(history, upper_bound=5.0),
    ]

    for name in ("convergence.png", "step_response.png", "leader_gains.png"):
        assert (tmp_path / "out" / name).stat().st_size > 0
    for fig in figs:
        assert isinstance(fig, plt.Figure)
        plt.close(fig)


def test_leader_gains_handles_single_iteration(tmp_path):
    history = {
        'iterations': [0],
        'best_fitness': [1.0],
        'mean_fitness': [2.0],
        'best_positions': [np.array([1.0, 2.0, 3.0])],
    }
    fig = GWOVisualizer(output_dir=str(tmp_path), dpi=50).plot_leader_gains(history)
    assert (tmp_path / "leader_gains.png").exists()
    plt.close(fig)


def test_convergence_with_diverged_history(tmp_path):
    history = {
        'iterations': [0, 1, 2],
        'best_fitness': [1e15, 1e15, 0.5],
        'mean_fitness': [5e296, float('inf'), float('nan')],
        'best_positions': [np.zeros(3)] * 3,
    }
    fig = GWOVisualizer(output_dir=str(tmp_path), dpi=50).plot_convergence(history)
    assert (tmp_path / "convergence.png").stat().st_size > 0
    plt.close(fig)
