"""Kernel DDD – persistence ports."""
from mp_mediator.kernel.ddd.unit_of_work import TransactionManager

__all__ = ["TransactionManager"]
