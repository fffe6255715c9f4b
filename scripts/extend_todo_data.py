"""
Seed a running server with extra todo items from extra_todo_data.json via POST /api/todos.
"""

import json
import sys
from pathlib import Path

from taskboard.client import DEFAULT_BASE_URL, TodoClient
from taskboard.schemas import TodoCreate

DATA_FILE = Path(__file__).parent / "extra_todo_data.json"


def main(base_url: str = DEFAULT_BASE_URL) -> None:
    todos = json.loads(DATA_FILE.read_text())

    with TodoClient(base_url=base_url) as client:
        for i, todo in enumerate(todos, start=1):
            created = client.add_todo(TodoCreate.model_validate(todo))
            print(f"[{i}/{len(todos)}] Created #{created.id}: {created.name}")

    print(f"\nDone. {len(todos)} todos added.")


if __name__ == "__main__":
    main(*sys.argv[1:2])
