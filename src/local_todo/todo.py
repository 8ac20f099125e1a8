"""Todo data model for the LocalTodo application."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


class TodoDecodeError(ValueError):
    """Raised when a document does not have the TodoList shape."""


def _expect(data: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is a subclass of int; an id of `true` is still a type error
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TodoDecodeError(
            f"field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass
class Todo:
    """A single task record."""

    id: int
    title: str = ""
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Todo to its JSON object form."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        """Create a Todo from a decoded JSON object.

        Missing fields take their zero values, wrongly typed ones raise
        TodoDecodeError.
        """
        if not isinstance(data, dict):
            raise TodoDecodeError(
                f"todo entry must be an object, got {type(data).__name__}"
            )

        todo_id = _expect(data, "id", int, 0)
        if todo_id < 0:
            raise TodoDecodeError(f"field 'id' must be non-negative, got {todo_id}")

        return cls(
            id=todo_id,
            title=_expect(data, "title", str, ""),
            completed=_expect(data, "completed", bool, False),
        )

    def display(self) -> str:
        """Single-line form used by the listing command."""
        completed = "true" if self.completed else "false"
        return f"{{ID: {self.id}, Title: {self.title}, Completed: {completed}}}"


@dataclass
class TodoList:
    """The persisted document: every Todo, in insertion order."""

    todos: List[Todo] = field(default_factory=list)

    def next_id(self) -> int:
        """Next free id, one past the current maximum."""
        if not self.todos:
            return 1
        return max(todo.id for todo in self.todos) + 1

    def find(self, todo_id: int) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"Todos": [todo.to_dict() for todo in self.todos]}

    @classmethod
    def from_dict(cls, data: Any) -> "TodoList":
        """Create a TodoList from a decoded JSON document.

        A `null` document or a missing `Todos` field is an empty list.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise TodoDecodeError(
                f"document must be an object, got {type(data).__name__}"
            )

        entries = data.get("Todos")
        if entries is None:
            return cls()
        if not isinstance(entries, list):
            raise TodoDecodeError(
                f"field 'Todos' must be a list, got {type(entries).__name__}"
            )

        return cls(todos=[Todo.from_dict(entry) for entry in entries])
