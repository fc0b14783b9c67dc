"""
PID Controller Implementation
=============================

Parallel-form PID used in the DC motor speed loop:

    u(t) = Kp * e(t) + Ki * ∫e(t)dt + Kd * de(t)/dt

Discretized with a rectangle-rule integral and a backward-difference
derivative on the error. No derivative filtering and no output
saturation, so the control law matches the fitness evaluator exactly.
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class PIDGains:
    """PID controller gains."""
    Kp: float = 1.0
    Ki: float = 0.0
    Kd: float = 0.0

    def to_array(self) -> np.ndarray:
        return np.array([self.Kp, self.Ki, self.Kd])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'PIDGains':
        return cls(Kp=float(arr[0]), Ki=float(arr[1]), Kd=float(arr[2]))

    def __repr__(self):
        return f"PIDGains(Kp={self.Kp:.4f}, Ki={self.Ki:.4f}, Kd={self.Kd:.4f})"


class PIDController:
    """
    Discrete PID controller.

    Per call:
        integral   += error * dt
        derivative  = (error - prev_error) / dt
        u           = Kp * error + Ki * integral + Kd * derivative

    The previous error starts at zero, so the first call sees a
    derivative kick of error/dt.
    """

    def __init__(self, gains: PIDGains):
        self.gains = gains

        # Internal states
        self._integral = 0.0
        self._prev_error = 0.0

    def reset(self):
        """Reset controller states."""
        self._integral = 0.0
        self._prev_error = 0.0

    def compute(self, error: float, dt: float) -> float:
        """
        Compute PID control output.

        Args:
            error: Current error (setpoint - measurement)
            dt: Time step

        Returns:
            Control output
        """
        Kp, Ki, Kd = self.gains.Kp, self.gains.Ki, self.gains.Kd

        self._integral += error * dt
        derivative = (error - self._prev_error) / dt

        output = Kp * error + Ki * self._integral + Kd * derivative

        self._prev_error = error

        return output
