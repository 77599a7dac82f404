"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/persistence/ and are
handed out by a UnitOfWork wired at the application boundary.

Import from this package rather than individual modules to avoid coupling
services to specific repository module paths.
"""

from .base import ReadRepository, Repository, WriteRepository
from .catalog import CategoryRepository, ProductRepository
from .unit_of_work import TransactionState, UnitOfWork

__all__ = [
    "ReadRepository",
    "WriteRepository",
    "Repository",
    "UnitOfWork",
    "TransactionState",
    "ProductRepository",
    "CategoryRepository",
]
