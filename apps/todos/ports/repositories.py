# apps/todos/ports/repositories.py
from abc import ABC, abstractmethod
from typing import List
from apps.todos.domain.entities import TodoEntity


class ITodoRepository(ABC):
    @abstractmethod
    def create(self, todo: TodoEntity) -> TodoEntity:
        pass

    @abstractmethod
    def list_recurring(self) -> List[TodoEntity]:
        """Wszystkie instancje todo z is_recurring=True (do okresowego przeglądu)."""
        pass
