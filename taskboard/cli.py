"""Command-line front end over the taskboard API."""

import argparse
import sys
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from taskboard.client import DEFAULT_BASE_URL, TodoApiError, TodoClient
from taskboard.core.logging_setup import setup_logging
from taskboard.enums import Priority, StatusFilter
from taskboard.schemas import TodoCreate, TodoFilter, TodoResponse, TodoUpdate

PRIORITIES = [p.value for p in Priority]


def unique_tags(tags: list[str] | None) -> list[str]:
    # keep first occurrence, drop blanks and repeats
    seen: list[str] = []
    for tag in tags or []:
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def is_overdue(todo: TodoResponse, now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return not todo.is_done and todo.date_time < now


def overdue_warning(count: int) -> str:
    tasks = "1 task is" if count == 1 else f"{count} tasks are"
    return f"{tasks} overdue!"


def format_todo(todo: TodoResponse, now: datetime | None = None) -> str:
    mark = "x" if todo.is_done else " "
    when = todo.date_time.strftime("%Y-%m-%d %H:%M")
    line = f"[{mark}] #{todo.id} {todo.name} ({todo.priority.value}, {todo.category}) {when}"
    if todo.tags:
        line += " " + " ".join(f"#{tag}" for tag in todo.tags)
    if is_overdue(todo, now):
        line += " OVERDUE"
    return f"{line}\n      {todo.short_description}"


def cmd_list(api: TodoClient, args) -> None:
    filters = TodoFilter(
        filter=args.filter,
        search=args.search,
        category=args.category,
        priority=args.priority,
    )
    todos = api.get_todos(filters)
    if not todos:
        print("No todos found.")
    now = datetime.now(timezone.utc)
    for todo in todos:
        print(format_todo(todo, now))

    overdue = sum(1 for todo in todos if is_overdue(todo, now))
    if overdue:
        print(overdue_warning(overdue), file=sys.stderr)


def cmd_categories(api: TodoClient, args) -> None:
    for category in api.get_categories():
        print(category)


def cmd_add(api: TodoClient, args) -> None:
    todo = api.add_todo(
        TodoCreate(
            name=args.name,
            short_description=args.description,
            date_time=args.datetime,
            priority=args.priority,
            category=args.category,
            tags=unique_tags(args.tag),
        )
    )
    print(f"Created:\n{format_todo(todo)}")


def cmd_update(api: TodoClient, args) -> None:
    changes = {
        "name": args.name,
        "short_description": args.description,
        "date_time": args.datetime,
        "is_done": args.done,
        "priority": args.priority,
        "category": args.category,
        "tags": unique_tags(args.tag) if args.tag is not None else None,
    }
    # only send what was given on the command line
    data = TodoUpdate(**{k: v for k, v in changes.items() if v is not None})
    if not data.model_fields_set:
        raise SystemExit("update: nothing to change")
    todo = api.update_todo(args.id, data)
    print(f"Updated:\n{format_todo(todo)}")


def cmd_set_done(api: TodoClient, args) -> None:
    todo = api.update_todo(args.id, TodoUpdate(is_done=args.command == "done"))
    print(format_todo(todo))


def cmd_delete(api: TodoClient, args) -> None:
    api.delete_todo(args.id)
    print(f"Deleted #{args.id}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description=__doc__)
    parser.add_argument(
        "--api-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL (default: {DEFAULT_BASE_URL})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="list todos")
    p.add_argument(
        "--filter",
        choices=[f.value for f in StatusFilter],
        default=StatusFilter.ALL.value,
    )
    p.add_argument("--search")
    p.add_argument("--category")
    p.add_argument("--priority", choices=PRIORITIES)
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("categories", help="list categories in use")
    p.set_defaults(func=cmd_categories)

    p = sub.add_parser("add", help="add a todo")
    p.add_argument("name")
    p.add_argument("description")
    p.add_argument("datetime", help="ISO-8601, e.g. 2026-11-02T09:30")
    p.add_argument("--priority", choices=PRIORITIES, default=Priority.MEDIUM.value)
    p.add_argument("--category", default="General")
    p.add_argument("--tag", action="append", help="repeatable")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("update", help="edit a todo")
    p.add_argument("id", type=int)
    p.add_argument("--name")
    p.add_argument("--description")
    p.add_argument("--datetime")
    done = p.add_mutually_exclusive_group()
    done.add_argument("--done", dest="done", action="store_const", const=True)
    done.add_argument("--not-done", dest="done", action="store_const", const=False)
    p.add_argument("--priority", choices=PRIORITIES)
    p.add_argument("--category")
    p.add_argument("--tag", action="append", help="replaces all tags; repeatable")
    p.set_defaults(func=cmd_update)

    for name, help_text in (("done", "mark a todo done"), ("undone", "reopen a todo")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("id", type=int)
        p.set_defaults(func=cmd_set_done)

    p = sub.add_parser("delete", help="delete a todo")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_delete)

    sub.add_parser("serve", help="run the API server")

    return parser


def main(argv: list[str] | None = None, client: TodoClient | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        # the app lifespan configures logging at settings.LOG_LEVEL
        from taskboard.main import run

        run()
        return 0

    setup_logging("WARNING")

    api = client or TodoClient(base_url=args.api_url)
    try:
        args.func(api, args)
    except TodoApiError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except httpx.HTTPError:
        # connection refused or timed out, after the client's own retry
        print(f"error: cannot reach API at {args.api_url}", file=sys.stderr)
        return 1
    finally:
        api.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
