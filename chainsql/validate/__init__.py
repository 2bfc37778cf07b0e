"""chainSQL step validation."""
from chainsql.validate.step_validator import StepValidator

__all__ = ["StepValidator"]
