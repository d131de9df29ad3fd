# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Interactive menu driver for a single tutoring session."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tutorlink.admin import HistoryResult
from tutorlink.desk import TutoringDesk
from tutorlink.session import Participant, Transitioned, TransitionResult

console = Console(highlight=False)

MENU = (
    "1. Accept session",
    "2. Reject session",
    "3. Complete session",
    "4. Assign tutor (admin command)",
    "5. Undo last admin command",
    "6. Quit",
)
QUIT = 6


def _print_transition(result: TransitionResult) -> None:
    if isinstance(result, Transitioned):
        console.print(f"[green]{result.source.value} → {result.target.value}[/green]")
    else:
        console.print(f"[yellow]Not allowed: {result.reason}.[/yellow]")


def _print_history(result: HistoryResult) -> None:
    style = "green" if result.ok else "yellow"
    console.print(f"[{style}]{escape(result.message)}[/{style}]")


def _print_notifications(*participants: Participant) -> None:
    for p in participants:
        for message in p.collect():
            console.print(
                f"Notification to {p.role.capitalize()} {escape(p.name)}: "
                f"{escape(message)}"
            )


def _run_option(desk: TutoringDesk, option: int) -> None:
    if option == 1:
        _print_transition(desk.accept_session())
    elif option == 2:
        _print_transition(desk.reject_session())
    elif option == 3:
        _print_transition(desk.complete_session())
    elif option == 4:
        _print_history(desk.assign_tutor())
    elif option == 5:
        _print_history(desk.undo_last_admin_action())
    _print_notifications(desk.tutor, desk.student)


def run_menu(desk: TutoringDesk) -> None:
    """Loop over the menu until the user quits or input ends."""
    while True:
        console.print(
            f"\nCurrent session state: [bold]{desk.current_state_name()}[/bold]"
        )
        console.print("Choose an option:")
        for line in MENU:
            console.print(f"  {line}")
        try:
            option = click.prompt("Option", type=click.IntRange(1, QUIT))
        except click.Abort:
            break
        if option == QUIT:
            break
        _run_option(desk, option)


def _ask(value: str | None, text: str) -> str:
    """Return `value`, prompting for it if the option was not given.

    Free-form: an empty line is a valid answer.
    """
    if value is not None:
        return value
    return click.prompt(text, default="", show_default=False)


@click.command()
@click.option("--tutor", "tutor_name", default=None, help="Tutor's name.")
@click.option("--student", "student_name", default=None, help="Student's name.")
@click.option("--description", default=None, help="What the session is about.")
@click.option(
    "--no-permission",
    is_flag=True,
    help="Run the administrator without permission to execute commands.",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write a JSONL event log under this directory.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    tutor_name: str | None,
    student_name: str | None,
    description: str | None,
    no_permission: bool,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Drive one tutoring session request from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        tutor_name = _ask(tutor_name, "Tutor name")
        student_name = _ask(student_name, "Student name")
        description = _ask(description, "Session description")
    except click.Abort:
        console.print("\nProgram finished.")
        return
    with TutoringDesk(
        tutor_name,
        student_name,
        description,
        has_permission=not no_permission,
        log_root=log_dir,
    ) as desk:
        run_menu(desk)
    console.print("Program finished.")


if __name__ == "__main__":
    main()
