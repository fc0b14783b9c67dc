"""
Fitness and Performance Metrics
===============================

Fitness: gated ITAE (Integral Time-weighted Absolute Error)
    J = Σ_{t > t₀} t|e(t)|dt

with t₀ = 0.2 s so the unavoidable initial rise is not penalized.

The remaining metrics describe the step response of a tuned loop and are
only used for reporting.
"""

import numpy as np

from .dc_motor import ITAE_START_TIME


def compute_itae(
    time: np.ndarray,
    error: np.ndarray,
    dt: float,
    start_time: float = ITAE_START_TIME
) -> float:
    """
    Compute gated ITAE with the rectangle rule.

    Samples at or before `start_time` are ignored. The accumulation is
    sequential so the result matches the simulator's running sum.

    Args:
        time: Time array
        error: Error array (same length as time)
        dt: Time step
        start_time: Gate; only t > start_time contributes

    Returns:
        ITAE value (lower is better)
    """
    itae = 0.0
    for t, e in zip(time, error):
        t = float(t)
        if t > start_time:
            itae += t * abs(float(e)) * dt
    return itae


def compute_settling_time(
    time: np.ndarray,
    response: np.ndarray,
    setpoint: float,
    tolerance: float = 0.02
) -> float:
    """
    Compute settling time (2% criterion by default).

    Returns:
        Time after which the response stays inside the band, or inf if
        it is outside the band at the end of the horizon
    """
    if len(time) < 2:
        return np.inf

    error_band = tolerance * abs(setpoint)
    within_band = np.abs(response - setpoint) <= error_band

    if not within_band[-1]:
        return np.inf  # Never settles

    outside = np.flatnonzero(~within_band)
    if len(outside) == 0:
        return 0.0  # Always within band
    last_exit = outside[-1]
    return float(time[last_exit + 1]) if last_exit + 1 < len(time) else float(time[-1])


def compute_overshoot(response: np.ndarray, setpoint: float) -> float:
    """Percentage overshoot above the setpoint (0 if none)."""
    if setpoint == 0:
        return 0.0

    peak = np.max(response) if setpoint > 0 else np.min(response)
    overshoot = 100.0 * (peak - setpoint) / setpoint
    return max(float(overshoot), 0.0)


def compute_rise_time(
    time: np.ndarray,
    response: np.ndarray,
    setpoint: float,
    low_pct: float = 0.1,
    high_pct: float = 0.9
) -> float:
    """
    Compute rise time (10% to 90% by default).

    Returns:
        Rise time in seconds, inf if the response never crosses both levels
    """
    if len(time) < 2 or setpoint == 0:
        return np.inf

    # Work on the normalized response so negative setpoints behave the same
    normalized = response / setpoint
    low_hits = np.flatnonzero(normalized >= low_pct)
    high_hits = np.flatnonzero(normalized >= high_pct)

    if len(low_hits) == 0 or len(high_hits) == 0:
        return np.inf

    return float(time[high_hits[0]] - time[low_hits[0]])


def get_performance_summary(sim_result: dict, setpoint: float) -> dict:
    """
    Get step-response performance summary.

    Args:
        sim_result: Dictionary from simulate_step_response
        setpoint: Target speed

    Returns:
        Dictionary of performance metrics
    """
    time = sim_result['time']
    speed = sim_result['speed']
    error = sim_result['error']
    dt = sim_result['dt']

    return {
        'itae': compute_itae(time, error, dt),
        'settling_time': compute_settling_time(time, speed, setpoint),
        'overshoot': compute_overshoot(speed, setpoint),
        'rise_time': compute_rise_time(time, speed, setpoint),
        'steady_state_error': abs(float(speed[-1]) - setpoint)
    }
