# Automated PID Tuning for DC Motor Speed Control
# ===============================================
#
# A Grey Wolf Optimizer searches (Kp, Ki, Kd) for a PID speed controller
# on a first-order DC motor model, minimizing the ITAE of a speed step.

from .config import RunConfig, ConfigurationError, prompt_run_config
from .dc_motor import DCMotor, simulate_motor, simulate_step_response, UNSTABLE_FITNESS
from .pid_controller import PIDController, PIDGains
from .gwo import GreyWolfOptimizer, LeaderSet, Wolf
from .objectives import compute_itae, get_performance_summary

__all__ = [
    'RunConfig',
    'ConfigurationError',
    'prompt_run_config',
    'DCMotor',
    'simulate_motor',
    'simulate_step_response',
    'UNSTABLE_FITNESS',
    'PIDController',
    'PIDGains',
    'GreyWolfOptimizer',
    'LeaderSet',
    'Wolf',
    'compute_itae',
    'get_performance_summary',
]
