"""
DC Motor Speed Model
====================

Linearized first-order DC motor driven by a PID speed controller.

State equation (speed ω, control u):
    J * dω/dt = u - b * ω

with viscous friction b = 0.1 and inertia/gain J = 0.1, integrated with
forward Euler at dt = 0.01 over a 2.0 s horizon.

`simulate_motor` is the fitness evaluator used by the optimizer. It is
written as a flat loop over plain floats because it runs once per wolf
per iteration; `DCMotor` + `simulate_step_response` produce the same
trajectory with full histories for reporting and plotting.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .pid_controller import PIDController


# Fitness assigned to gains whose closed loop blows up (NaN/inf ITAE)
UNSTABLE_FITNESS = 1e15

SIM_DT = 0.01
SIM_DURATION = 2.0
SIM_STEPS = int(round(SIM_DURATION / SIM_DT))  # 200

# ITAE ignores the initial rise
ITAE_START_TIME = 0.2


@dataclass
class DCMotorParams:
    """Physical parameters of the motor."""
    friction: float = 0.1  # viscous friction coefficient b
    inertia: float = 0.1   # inertia / gain coefficient J


def simulate_motor(Kp: float, Ki: float, Kd: float, setpoint: float) -> float:
    """
    Closed-loop ITAE of the PID-controlled motor for a speed step.

    ITAE = Σ t·|e(t)|·dt over steps with t > 0.2 s

    Args:
        Kp, Ki, Kd: Controller gains
        setpoint: Target speed

    Returns:
        ITAE (lower is better), or UNSTABLE_FITNESS when the response
        diverges to NaN/inf
    """
    Kp, Ki, Kd, setpoint = float(Kp), float(Ki), float(Kd), float(setpoint)
    dt = SIM_DT
    friction = DCMotorParams.friction
    inertia = DCMotorParams.inertia

    current_speed = 0.0
    last_error = 0.0
    integral = 0.0
    itae = 0.0
    # Accumulated clock, so t at step 20 lands just above the 0.2 s gate
    t = 0.0

    for _ in range(SIM_STEPS):
        error = setpoint - current_speed
        integral += error * dt
        derivative = (error - last_error) / dt

        u = Kp * error + Ki * integral + Kd * derivative

        acceleration = (u - current_speed * friction) / inertia
        current_speed += acceleration * dt

        if t > ITAE_START_TIME:
            itae += t * abs(error) * dt
        last_error = error
        t += dt

    if math.isnan(itae) or math.isinf(itae):
        return UNSTABLE_FITNESS
    return itae


class DCMotor:
    """
    First-order DC motor speed plant.

        dω/dt = (u - b·ω) / J
    """

    def __init__(self, params: Optional[DCMotorParams] = None, dt: float = SIM_DT):
        self.params = params or DCMotorParams()
        self.dt = dt
        self._speed = 0.0
        self.time = 0.0

    def reset(self, initial_speed: float = 0.0):
        """Reset motor to rest (or a given speed)."""
        self._speed = float(initial_speed)
        self.time = 0.0

    def acceleration(self, u: float) -> float:
        p = self.params
        return (u - self._speed * p.friction) / p.inertia

    def step(self, u: float) -> float:
        """
        Advance simulation by one time step.

        Args:
            u: Control signal (armature command)

        Returns:
            Speed after the step
        """
        self._speed += self.acceleration(u) * self.dt
        self.time += self.dt
        return self._speed

    @property
    def speed(self) -> float:
        return self._speed


def simulate_step_response(
    motor: DCMotor,
    controller: PIDController,
    setpoint: float,
    duration: float = SIM_DURATION
) -> dict:
    """
    Simulate closed-loop speed step response.

    Uses the same update order as `simulate_motor`, so the recorded
    error trace reproduces its ITAE.

    Returns:
        Dictionary with time, speed, control, error histories
    """
    n_steps = int(round(duration / motor.dt))

    # Preallocate arrays
    time_history = np.zeros(n_steps)
    speed_history = np.zeros(n_steps)
    control_history = np.zeros(n_steps)
    error_history = np.zeros(n_steps)
    setpoint_history = np.full(n_steps, float(setpoint))

    # Reset systems
    motor.reset()
    controller.reset()

    for i in range(n_steps):
        t = motor.time

        error = setpoint - motor.speed
        u = controller.compute(error, motor.dt)

        # Record the pre-step state, matching the ITAE sample points
        time_history[i] = t
        error_history[i] = error
        control_history[i] = u

        speed_history[i] = motor.step(u)

    return {
        'time': time_history,
        'speed': speed_history,
        'control': control_history,
        'error': error_history,
        'setpoint': setpoint_history,
        'dt': motor.dt
    }
