"""SQLAlchemy adapter – async transaction manager."""
from mp_mediator.adapters.sqlalchemy.transaction import SqlAlchemyTransactionManager

__all__ = ["SqlAlchemyTransactionManager"]
