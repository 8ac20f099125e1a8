"""LocalTodo - a single-user todo list persisted to a local JSON file."""

__version__ = "0.1.0"

from .todo import Todo, TodoList
from .storage import TodoStore, TodoStoreError, TodoNotFoundError

__all__ = [
    "Todo",
    "TodoList",
    "TodoStore",
    "TodoStoreError",
    "TodoNotFoundError",
    "__version__",
]
