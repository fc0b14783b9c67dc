"""
Visualization Module
====================

Figures for a GWO-PID tuning run:
- Convergence of the alpha and pack-mean ITAE
- Closed-loop step response of the tuned gains
- Alpha gain trajectories over the hunt
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional
from pathlib import Path

from .dc_motor import UNSTABLE_FITNESS
from .pid_controller import PIDGains


# Set professional style
plt.rcParams.update({
    'font.family': 'serif',
    'font.size': 11,
    'axes.labelsize': 12,
    'axes.titlesize': 14,
    'legend.fontsize': 10,
    'figure.dpi': 150,
    'savefig.bbox': 'tight',
    'axes.grid': True,
    'grid.alpha': 0.3,
})


class GWOVisualizer:
    """Visualization tools for GWO tuning results."""

    def __init__(self, output_dir: str = "figures", dpi: int = 300):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.dpi = dpi

        # Color scheme
        self.colors = {
            'alpha': '#e74c3c',     # Red
            'mean': '#3498db',      # Blue
            'response': '#2ecc71',  # Green
            'control': '#f39c12',   # Orange
            'reference': '#95a5a6',  # Gray
        }
        self.gain_colors = ['#e74c3c', '#3498db', '#2ecc71']

    def _save(self, fig: plt.Figure, save_name: str):
        fig.savefig(self.output_dir / save_name, dpi=self.dpi, bbox_inches='tight')

    def plot_convergence(
        self,
        history: dict,
        save_name: str = "convergence.png"
    ) -> plt.Figure:
        """Plot alpha and pack-mean ITAE per iteration (log scale)."""
        fig, ax = plt.subplots(figsize=(10, 5))

        iterations = history['iterations']

        # Log axis needs finite positive values
        best = np.clip(np.nan_to_num(history['best_fitness'], nan=UNSTABLE_FITNESS),
                       1e-12, UNSTABLE_FITNESS)
        mean = np.clip(np.nan_to_num(history['mean_fitness'], nan=UNSTABLE_FITNESS),
                       1e-12, UNSTABLE_FITNESS)

        ax.semilogy(iterations, best,
                    color=self.colors['alpha'], linewidth=2, label='Alpha ITAE')
        ax.semilogy(iterations, mean,
                    color=self.colors['mean'], linewidth=1.5, alpha=0.7,
                    label='Pack mean ITAE')
        ax.set_xlabel('Iteration')
        ax.set_ylabel('ITAE')
        ax.set_title('GWO Convergence')
        ax.legend(loc='upper right')

        plt.tight_layout()
        self._save(fig, save_name)

        return fig

    def plot_step_response(
        self,
        sim_result: dict,
        setpoint: float,
        gains: Optional[PIDGains] = None,
        save_name: str = "step_response.png"
    ) -> plt.Figure:
        """
        Speed, error and control signal of a closed-loop step.

        Args:
            sim_result: Dictionary from simulate_step_response
            setpoint: Target speed
            gains: Gains shown in the title, if given
        """
        fig, axes = plt.subplots(3, 1, figsize=(10, 10), sharex=True)
        time = sim_result['time']

        ax = axes[0]
        ax.plot(time, sim_result['speed'], color=self.colors['response'],
                linewidth=2, label='Speed')
        ax.axhline(y=setpoint, color='black', linestyle='--',
                   linewidth=1.5, label='Setpoint')
        ax.set_ylabel('Speed')
        title = 'Closed-Loop Step Response'
        if gains is not None:
            title += f"  (Kp={gains.Kp:.2f}, Ki={gains.Ki:.2f}, Kd={gains.Kd:.2f})"
        ax.set_title(title)
        ax.legend(loc='lower right')

        ax = axes[1]
        ax.plot(time, sim_result['error'], color=self.colors['alpha'], linewidth=2)
        ax.axhline(y=0, color='black', linestyle='--', linewidth=1)
        ax.set_ylabel('Error')

        ax = axes[2]
        ax.plot(time, sim_result['control'], color=self.colors['control'], linewidth=2)
        ax.set_ylabel('Control u')
        ax.set_xlabel('Time (s)')
        ax.set_xlim(left=0)

        plt.tight_layout()
        self._save(fig, save_name)

        return fig

    def plot_leader_gains(
        self,
        history: dict,
        upper_bound: Optional[float] = None,
        save_name: str = "leader_gains.png"
    ) -> plt.Figure:
        """Alpha Kp/Ki/Kd per iteration."""
        fig, ax = plt.subplots(figsize=(10, 5))

        iterations = history['iterations']
        positions = np.array(history['best_positions']).reshape(-1, 3)

        for i, name in enumerate(['K_p', 'K_i', 'K_d']):
            ax.plot(iterations, positions[:, i], color=self.gain_colors[i],
                    linewidth=2, label=f'${name}$')
        if upper_bound is not None:
            ax.axhline(y=upper_bound, color=self.colors['reference'],
                       linestyle=':', linewidth=1.5, label='Upper bound')
        ax.set_xlabel('Iteration')
        ax.set_ylabel('Gain')
        ax.set_title('Alpha Gains During the Hunt')
        ax.legend(loc='best')

        plt.tight_layout()
        self._save(fig, save_name)

        return fig
