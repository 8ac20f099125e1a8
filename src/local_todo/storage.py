"""Storage layer for LocalTodo: one JSON document holding the whole TodoList."""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from .todo import Todo, TodoList, TodoDecodeError
from .utils.validation import InvalidValueError, clean_text, parse_bool, parse_todo_id


logger = logging.getLogger(__name__)


class TodoStoreError(Exception):
    """Base class for every failure a store operation reports."""


class StoreOpenError(TodoStoreError):
    """The backing file could not be created or opened."""


class StoreNotOpenError(TodoStoreError):
    """An operation was attempted outside of open()/close()."""


class StoreDecodeError(TodoStoreError):
    """The backing file holds something other than a TodoList."""


class StoreWriteError(TodoStoreError):
    """The document could not be rewritten; the previous one is intact."""


class TodoNotFoundError(TodoStoreError):
    """No todo carries the requested id."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"todo with ID {todo_id} not found")


class InvalidArgumentError(TodoStoreError):
    """An operation argument failed validation."""

    def __init__(self, error: InvalidValueError):
        self.field_name = error.field_name
        self.value = error.value
        super().__init__(str(error))


class TodoStore:
    """File-backed store for a single TodoList document.

    Every operation reloads the full document, mutates it in memory and
    replaces the file as a whole. Use it as a context manager:

        with TodoStore(Path("db.json")) as store:
            store.create("Buy milk")
    """

    def __init__(self, path: Union[str, Path], json_indent: Optional[int] = None):
        self.path = Path(path)
        self.json_indent = json_indent
        self._open = False

    def __enter__(self) -> "TodoStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        """Create the backing file if needed and mark the store usable."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            info = self.path.stat()
        except OSError as e:
            raise StoreOpenError(f"failed to open {self.path}: {e}") from e

        # touch() succeeds on an existing directory
        if not stat.S_ISREG(info.st_mode):
            raise StoreOpenError(f"failed to open {self.path}: not a regular file")
        size = info.st_size

        logger.debug("Opened %s (%d bytes)", self.path, size)
        self._open = True

    def close(self) -> None:
        self._open = False

    def _ensure_open(self) -> None:
        if not self._open:
            raise StoreNotOpenError("store is not opened")

    def load(self) -> TodoList:
        """Read and decode the whole document.

        An empty file means no todos yet; it is initialized with an empty
        TodoList before returning.
        """
        self._ensure_open()

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreDecodeError(f"failed to read {self.path}: {e}") from e

        if not content.strip():
            logger.info("Initializing empty todo file %s", self.path)
            todo_list = TodoList()
            self._rewrite(todo_list)
            return todo_list

        try:
            return TodoList.from_dict(json.loads(content))
        except (json.JSONDecodeError, RecursionError, TodoDecodeError) as e:
            raise StoreDecodeError(f"failed to decode JSON: {e}") from e

    def create(self, title: str) -> Todo:
        """Append a new, incomplete todo with the next free id."""
        todo_list = self.load()

        todo = Todo(id=todo_list.next_id(), title=clean_text(title), completed=False)
        todo_list.todos.append(todo)

        self._rewrite(todo_list)
        logger.debug("Created todo %d", todo.id)
        return todo

    def list(self) -> List[Todo]:
        """Return every todo in stored order."""
        return self.load().todos

    def update(
        self, todo_id: Union[int, str], title: str = "", completed: str = ""
    ) -> Todo:
        """Update a todo's title and/or completed flag.

        Empty strings leave the corresponding field alone. `completed` is
        parsed as a boolean, so "false" explicitly reopens a todo. Nothing
        is written unless every argument is valid and the id exists.
        """
        try:
            todo_id = parse_todo_id(todo_id)
            new_completed = parse_bool(completed) if completed != "" else None
        except InvalidValueError as e:
            raise InvalidArgumentError(e) from e

        todo_list = self.load()
        todo = todo_list.find(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)

        if title != "":
            todo.title = clean_text(title)
        if new_completed is not None:
            todo.completed = new_completed

        self._rewrite(todo_list)
        logger.debug("Updated todo %d", todo_id)
        return todo

    def clear(self) -> None:
        """Replace the document with an empty TodoList, unconditionally."""
        self._ensure_open()
        self._rewrite(TodoList())
        logger.debug("Cleared %s", self.path)

    def _rewrite(self, todo_list: TodoList) -> None:
        """Atomically replace the backing file with `todo_list`.

        The document is written to a sibling temp file, synced, then renamed
        over the original, so readers see either the old or the new file.
        """
        self._ensure_open()

        content = json.dumps(
            todo_list.to_dict(), indent=self.json_indent, ensure_ascii=False
        ) + "\n"

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600; keep the permissions of the file we replace
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except (OSError, UnicodeError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(f"failed to write {self.path}: {e}") from e
