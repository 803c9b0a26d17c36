"""
Exceptions raised by the salary calculation engine.

The engine is total over its numeric domain: only configuration lookups,
opt-in precondition checks and the opt-in strict solver raise.
"""


class PayCalcError(Exception):
    """Base exception for calculation errors."""


class UnknownCityError(PayCalcError, KeyError):
    """Raised when a city id has no compiled policy."""

    def __init__(self, city_id: str):
        self.city_id = city_id
        super().__init__(f"Unknown city: {city_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"Unknown city: {self.city_id!r}"


class InputValidationError(PayCalcError, ValueError):
    """Raised by explicit precondition checks on calculation inputs."""


class SolverSaturatedError(PayCalcError):
    """Raised when a strict solve cannot reach the target inside its bounds."""

    def __init__(self, target_value: float, upper_bound: int, reached_value: float):
        self.target_value = target_value
        self.upper_bound = upper_bound
        self.reached_value = reached_value
        super().__init__(
            f"Target comprehensive value {target_value} unreachable: "
            f"monthly base {upper_bound} only yields {reached_value}"
        )
