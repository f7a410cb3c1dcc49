"""Base mapper for entity-model conversion."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

E = TypeVar("E")  # Entity type
M = TypeVar("M")  # Model type


class BaseMapper(ABC, Generic[E, M]):
    """Converts between domain entities and database models."""

    @abstractmethod
    def to_domain(self, model: M) -> E:
        pass

    @abstractmethod
    def to_model(self, entity: E) -> M:
        pass

    def to_domain_list(self, models: list[M]) -> list[E]:
        return [self.to_domain(model) for model in models]
