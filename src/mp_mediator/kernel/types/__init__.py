"""Kernel types."""
from mp_mediator.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
