# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any, Final
from uuid import UUID

from dotenv import load_dotenv

from locallibrary.app import open_catalog
from locallibrary.config import ConfigurationError, configure_logging
from locallibrary.domain.catalog import AlreadyExists, Blocked, Created, Deleted, Updated
from locallibrary.domain.errors import NotFoundError, ValidationFailed
from locallibrary.domain.model import EntityType
from locallibrary.domain.views import AuthorView, BookInstanceView, BookView, GenreView, derive

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from locallibrary.domain.catalog import Catalog, CatalogService
    from locallibrary.domain.model import Entity

log = logging.getLogger(__name__)

EXIT_OK: Final = 0
EXIT_FAILURE: Final = 1
EXIT_USAGE: Final = 2
EXIT_BLOCKED: Final = 3
EXIT_NOT_FOUND: Final = 4

KIND_COMMANDS: Final[dict[str, EntityType]] = {
    "genre": EntityType.GENRE,
    "author": EntityType.AUTHOR,
    "book": EntityType.BOOK,
    "bookinstance": EntityType.BOOK_INSTANCE,
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the library catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Show record counts for the catalog")

    for name in KIND_COMMANDS:
        kind_parser = subparsers.add_parser(name, help=f"Manage {name} records")
        actions = kind_parser.add_subparsers(dest="action", required=True)

        actions.add_parser("list", help=f"List every {name}")

        show = actions.add_parser("show", help=f"Show one {name} and what references it")
        show.add_argument("id", type=str)

        create = actions.add_parser("create", help=f"Create a {name} unless it already exists")
        _add_assignments(create)

        update = actions.add_parser("update", help=f"Replace every field of a {name}")
        update.add_argument("id", type=str)
        _add_assignments(update)

        delete = actions.add_parser("delete", help=f"Delete a {name} nothing references")
        delete.add_argument("id", type=str)

        if name in {"book", "bookinstance"}:
            actions.add_parser("choices", help=f"List the records a {name} form can reference")

    return parser.parse_args(list(argv))


def _add_assignments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Form field value; repeat a field to submit several values",
    )


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _parse_assignments(assignments: Sequence[str]) -> dict[str, str | list[str]]:
    form: dict[str, str | list[str]] = {}
    for assignment in assignments:
        field, separator, value = assignment.partition("=")
        if not separator or not field.strip():
            raise ValueError(f"Expected FIELD=VALUE, got {assignment!r}")
        field = field.strip()
        previous = form.get(field)
        if previous is None:
            form[field] = value
        elif isinstance(previous, list):
            previous.append(value)
        else:
            form[field] = [previous, value]
    return form


# Presentation -------------------------------------------------------------------


def describe(entity: Entity) -> str:
    view = derive(entity)
    if isinstance(view, GenreView):
        label = view.name
    elif isinstance(view, AuthorView):
        label = f"{view.full_name} ({view.lifespan})"
    elif isinstance(view, BookView):
        label = view.title
    elif isinstance(view, BookInstanceView):
        due = f" due {view.due_back_input}" if view.due_back_input else ""
        label = f"{view.imprint} [{view.status}]{due}"
    else:
        label = str(view.id)
    return f"{label}  {view.url}"


def _print_entities(heading: str, entities: Sequence[Entity]) -> None:
    print(f"{heading}:")
    if not entities:
        print("  (none)")
    for entity in entities:
        print(f"  {describe(entity)}")


# Dispatch -----------------------------------------------------------------------


async def _run_kind_action(
    catalog: Catalog, entity_type: EntityType, args: argparse.Namespace
) -> int:
    service: CatalogService[Any, Any] = catalog.service_for(entity_type)
    action: str = args.action

    if action == "list":
        _print_entities(service.kind.label, await service.list())
    elif action == "show":
        detail = await service.detail(_parse_uuid(args.id))
        print(describe(detail.entity))
        if service.kind.dependency is not None:
            _print_entities("Referenced by", detail.dependents)
    elif action == "create":
        outcome = await service.create(_parse_assignments(args.assignments))
        if isinstance(outcome, Created):
            print(f"Created {describe(outcome.entity)}")
        elif isinstance(outcome, AlreadyExists):
            print(f"Already exists {describe(outcome.entity)}")
    elif action == "update":
        outcome = await service.update(
            _parse_uuid(args.id), _parse_assignments(args.assignments)
        )
        if isinstance(outcome, Updated):
            print(f"Updated {describe(outcome.entity)}")
    elif action == "delete":
        outcome = await service.delete(_parse_uuid(args.id))
        if isinstance(outcome, Blocked):
            print(f"Cannot delete {describe(outcome.entity)}")
            _print_entities("Delete these first", outcome.dependents)
            return EXIT_BLOCKED
        if isinstance(outcome, Deleted):
            print(f"Deleted {describe(outcome.entity)}")
    elif action == "choices" and entity_type is EntityType.BOOK:
        choices = await catalog.book_form_choices()
        _print_entities("Authors", choices.authors)
        _print_entities("Genres", choices.genres)
    elif action == "choices" and entity_type is EntityType.BOOK_INSTANCE:
        instance_choices = await catalog.book_instance_form_choices()
        _print_entities("Books", instance_choices.books)
    else:
        raise ValueError(f"Unsupported action: {action}")
    return EXIT_OK


async def _dispatch(args: argparse.Namespace) -> int:
    async with open_catalog() as catalog:
        if args.command == "summary":
            summary = await catalog.summary()
            print(f"Books: {summary.book_count}")
            print(
                f"Copies: {summary.book_instance_count}"
                f" ({summary.book_instance_available_count} available)"
            )
            print(f"Authors: {summary.author_count}")
            print(f"Genres: {summary.genre_count}")
            return EXIT_OK
        return await _run_kind_action(catalog, KIND_COMMANDS[args.command], args)


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point; returns the process exit code."""
    try:
        configure_logging()
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        return asyncio.run(_dispatch(parsed_args))
    except ValidationFailed as exc:
        for error in exc.errors:
            print(f"{error.field}: {error.message}", file=sys.stderr)
        return EXIT_USAGE
    except NotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NOT_FOUND
    except ConfigurationError:
        log.exception("Invalid configuration")
        return EXIT_USAGE
    except ValueError:
        log.exception("CLI validation error")
        return EXIT_USAGE
    except Exception:
        log.exception("Fatal error")
        return EXIT_FAILURE


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    sys.exit(main())


if __name__ == "__main__":
    run()
