"""Allow running LocalTodo with ``python -m local_todo``."""

from .cli import main

if __name__ == "__main__":
    main(prog_name="local-todo")
