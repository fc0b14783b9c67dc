import math

import numpy as np
import pytest

from gwo_pid.dc_motor import (
    DCMotor, DCMotorParams, simulate_motor, simulate_step_response,
    SIM_DT, SIM_STEPS, UNSTABLE_FITNESS
)
from gwo_pid.objectives import compute_itae
from gwo_pid.pid_controller import PIDController, PIDGains


def zero_gain_itae(setpoint):
    total = 0.0
    t = 0.0
    for _ in range(SIM_STEPS):
        if t > 0.2:
            total += t * 0.01
        t += SIM_DT
    return setpoint * total


def test_horizon_is_200_steps():
    assert SIM_STEPS == 200


def test_deterministic():
    first = simulate_motor(2.0, 1.5, 0.02, 1.0)
    second = simulate_motor(2.0, 1.5, 0.02, 1.0)
    assert first == second


@pytest.mark.parametrize("setpoint", [0.5, 1.0, 3.0])
def test_zero_gains_closed_form(setpoint):
    assert simulate_motor(0.0, 0.0, 0.0, setpoint) == pytest.approx(zero_gain_itae(setpoint), rel=1e-12)


def test_zero_gains_speed_stays_at_rest():
    result = simulate_step_response(DCMotor(), PIDController(PIDGains(0.0, 0.0, 0.0)), setpoint=2.0)
    assert np.all(result['speed'] == 0.0)
    assert np.all(result['error'] == 2.0)


def test_destabilizing_derivative_gain_returns_sentinel():
    assert simulate_motor(0.0, 0.0, 1e12, 1.0) == UNSTABLE_FITNESS


@pytest.mark.parametrize("gains", [
    (-50.0, -3.0, 7.0),
    (1e300, 1e300, 1e300),
    (float('nan'), 0.0, 0.0),
])
def test_arbitrary_inputs_do_not_raise(gains):
    fitness = simulate_motor(*gains, 1.0)
    assert math.isfinite(fitness)
    assert fitness >= 0.0


def test_good_gains_beat_open_loop():
    assert simulate_motor(2.0, 1.0, 0.01, 1.0) < simulate_motor(0.0, 0.0, 0.0, 1.0)


def test_step_response_reproduces_fitness():
    gains = PIDGains(Kp=2.0, Ki=1.0, Kd=0.01)
    result = simulate_step_response(DCMotor(), PIDController(gains), setpoint=1.0)

    assert len(result['time']) == SIM_STEPS
    itae = compute_itae(result['time'], result['error'], result['dt'])
    assert itae == pytest.approx(simulate_motor(2.0, 1.0, 0.01, 1.0), rel=1e-12)


def test_motor_step_first_order():
    motor = DCMotor(DCMotorParams(friction=0.1, inertia=0.1), dt=0.01)
    motor.reset()
    # dω = (u - 0.1ω)/0.1 · dt
    assert motor.step(1.0) == pytest.approx(0.1)
    assert motor.step(0.0) == pytest.approx(0.1 - 0.001)
    assert motor.time == pytest.approx(0.02)

    motor.reset()
    assert motor.speed == 0.0
    assert motor.time == 0.0


def test_itae_counts_step_landing_on_gate():
    # Accumulated 0.01 steps reach 0.20000000000000004 at step 20
    exact_grid = sum(k * SIM_DT * 0.01 for k in range(SIM_STEPS) if k * SIM_DT > 0.2)
    assert simulate_motor(0.0, 0.0, 0.0, 1.0) == pytest.approx(exact_grid + 0.2 * 0.01, rel=1e-12)


def test_step_response_time_matches_accumulated_clock():
    result = simulate_step_response(DCMotor(), PIDController(PIDGains(1.0, 0.0, 0.0)), setpoint=1.0)
    assert result['time'][20] > 0.2
    assert result['time'][0] == 0.0
