"""
Run Configuration
=================

The optimizer trusts its configuration; everything here belongs to the
boundary layer that builds a RunConfig from user input and rejects
degenerate values before a run starts.
"""

import math
from dataclasses import dataclass
from typing import Callable


class ConfigurationError(ValueError):
    """Raised when a run configuration is missing or out of range."""


@dataclass(frozen=True)
class RunConfig:
    """Parameters of a single GWO run."""
    pack_size: int = 30
    max_iterations: int = 100
    setpoint: float = 1.0
    upper_bound: float = 10.0

    def validate(self) -> 'RunConfig':
        """
        Check ranges, returning self so calls can be chained.

        max_iterations = 0 is allowed and yields the best initial wolf.
        """
        if self.pack_size <= 0:
            raise ConfigurationError(f"pack size must be positive, got {self.pack_size}")
        if self.max_iterations < 0:
            raise ConfigurationError(
                f"maximum iterations must be non-negative, got {self.max_iterations}"
            )
        if not math.isfinite(self.setpoint):
            raise ConfigurationError(f"setpoint must be finite, got {self.setpoint}")
        if not math.isfinite(self.upper_bound) or self.upper_bound <= 0:
            raise ConfigurationError(
                f"upper bound must be a positive finite number, got {self.upper_bound}"
            )
        return self


PROMPTS = {
    'pack_size': ("Enter the Pack Size: ", int),
    'max_iterations': ("Enter Maximum Iterations: ", int),
    'setpoint': ("Enter Target Speed (Setpoint): ", float),
    'upper_bound': ("Enter K Parameter Upper Bound: ", float),
}


def parse_value(name: str, raw: str):
    """Convert one raw answer to the field's type."""
    _, cast = PROMPTS[name]
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"invalid value for {name}: {raw!r}") from None


def prompt_run_config(
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
    **known
) -> RunConfig:
    """
    Interactively read the run settings.

    Fields passed in `known` (e.g. from command-line flags) are not
    prompted for. The result is validated.
    """
    print_fn("--- GWO-PID Optimizer Settings ---")
    values = {}
    for name, (prompt, _) in PROMPTS.items():
        if known.get(name) is not None:
            values[name] = known[name]
        else:
            try:
                raw = input_fn(prompt)
            except EOFError:
                raise ConfigurationError(f"no value given for {name}") from None
            values[name] = parse_value(name, raw)
    print_fn("----------------------------------")
    print_fn()

    return RunConfig(**values).validate()
