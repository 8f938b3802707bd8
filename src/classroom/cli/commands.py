"""CLI commands for the classroom backend.

Commands:
- serve: run the Web API with uvicorn
- courses: list seeded courses, optionally filtered
- lessons: list the lessons of a course in order
- quizzes: list seeded quizzes, optionally filtered
- quiz: take a quiz interactively and see the graded result
- check-seed: validate a seed file without starting the server
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from classroom.config.app_config import load_app_config
from classroom.config.seed import load_seed_data, seed_store
from classroom.core.errors import ClassroomError
from classroom.core.grader import QuizGrader, SubmittedAnswer
from classroom.core.queries import QueryService
from classroom.core.store import EntityStore

app = typer.Typer(
    name="classroom",
    help="K-12 classroom backend: API server and catalog tools.",
    no_args_is_help=True,
)

console = Console()


def _seeded_store(seed_file: Path | None = None) -> EntityStore:
    """Build a store from the seed file (or the default catalog), or exit."""
    store = EntityStore()
    try:
        seed_store(store, load_seed_data(seed_file))
    except ClassroomError as e:
        console.print(f"[red]✗ Invalid seed data: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    return store


def _truncate(text: str | None, max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    text = text or ""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


# =============================================================================
# SERVER
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Web API."""
    import uvicorn

    config = load_app_config()
    console.print(f"[blue]Starting {config.api.title} {config.api.version} on {host}:{port}[/blue]")
    uvicorn.run(
        "classroom.web.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


# =============================================================================
# CATALOG
# =============================================================================


@app.command()
def courses(
    subject_id: int | None = typer.Option(None, "--subject", "-s", help="Subject id"),
    grade_level: int | None = typer.Option(None, "--grade", "-g", help="Grade level (1-12)"),
    featured: bool = typer.Option(False, "--featured", help="Only featured courses"),
) -> None:
    """List courses of the seeded catalog."""
    queries = QueryService(_seeded_store())

    if featured:
        found = queries.featured_courses()
    else:
        found = queries.filter_courses(subject_id=subject_id, grade_level=grade_level)

    if not found:
        console.print("[yellow]No courses match.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", width=36)
    table.add_column("Subject")
    table.add_column("Grade", justify="center")
    table.add_column("Lessons", justify="right")
    table.add_column("Featured", justify="center")

    for course in found:
        subject = queries.get_subject(course.subject_id)
        table.add_row(
            str(course.id),
            course.title,
            subject.name if subject else "?",
            str(course.grade_level),
            str(course.total_lessons),
            "[green]★[/green]" if course.featured else "",
        )

    console.print(table)


@app.command()
def lessons(
    course_id: int = typer.Argument(..., help="Course id"),
) -> None:
    """List the lessons of a course in order."""
    queries = QueryService(_seeded_store())

    course = queries.get_course(course_id)
    if course is None:
        console.print(f"[red]✗ Course {course_id} not found[/red]")
        raise typer.Exit(code=1)

    found = queries.lessons_by_course(course_id)
    console.print(f"[bold]{course.title}[/bold] ({len(found)} lessons)")
    for lesson in found:
        minutes = f"{lesson.duration_minutes} min" if lesson.duration_minutes else ""
        console.print(f"  {lesson.order}. {lesson.title} [dim]{minutes}[/dim]")


@app.command()
def quizzes(
    subject_id: int | None = typer.Option(None, "--subject", "-s", help="Subject id"),
    grade_level: int | None = typer.Option(None, "--grade", "-g", help="Grade level (1-12)"),
) -> None:
    """List quizzes of the seeded catalog."""
    queries = QueryService(_seeded_store())
    found = queries.filter_quizzes(subject_id=subject_id, grade_level=grade_level)

    if not found:
        console.print("[yellow]No quizzes match.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", width=36)
    table.add_column("Grade", justify="center")
    table.add_column("Questions", justify="right")
    table.add_column("Stored", justify="right")
    table.add_column("Minutes", justify="right")

    for quiz in found:
        stored = len(queries.questions_for_quiz(quiz.id))
        table.add_row(
            str(quiz.id),
            quiz.title,
            str(quiz.grade_level),
            str(quiz.question_count),
            str(stored) if stored == quiz.question_count else f"[yellow]{stored}[/yellow]",
            str(quiz.duration_minutes),
        )

    console.print(table)


# =============================================================================
# QUIZ COMMAND - Interactive flow
# =============================================================================


def _ask_option(question, console) -> str:
    """Ask a question and loop until a valid option id is entered."""
    option_ids = [o.id for o in question.options]

    while True:
        for option in question.options:
            console.print(f"  {option.id}) {option.text}")

        raw = typer.prompt(f"Your answer ({'/'.join(option_ids)})").strip().lower()
        if raw in option_ids:
            return raw
        console.print(f"[yellow]⚠ Choose one of: {', '.join(option_ids)}[/yellow]")


@app.command()
def quiz(
    quiz_id: int = typer.Argument(..., help="Quiz id"),
    user_id: int = typer.Option(1, "--user", "-u", help="User id to record the result for"),
) -> None:
    """Take a quiz in the terminal and show the graded result.

    Results are kept in a throwaway store; nothing is persisted.
    """
    store = _seeded_store()
    queries = QueryService(store)

    selected = queries.get_quiz(quiz_id)
    if selected is None:
        console.print(f"[red]✗ Quiz {quiz_id} not found[/red]")
        raise typer.Exit(code=1)

    questions = queries.questions_for_quiz(quiz_id)
    if not questions:
        console.print(f"[yellow]⚠ Quiz '{selected.title}' has no questions yet[/yellow]")
        raise typer.Exit(code=1)

    console.print(Panel(selected.description or "", title=f"[bold]{selected.title}[/bold]", expand=False))

    answers = []
    for index, question in enumerate(questions, start=1):
        console.print(f"\n[bold]{index}. {question.question_text}[/bold]")
        answers.append(SubmittedAnswer(option_id=_ask_option(question, console), question_id=question.id))

    outcome = QuizGrader(store).grade_submission(quiz_id, user_id, answers)

    color = "green" if outcome.score >= 50 else "red"
    console.print(
        Panel(
            f"[bold {color}]{outcome.score}%[/bold {color}]\n"
            f"Correct: {outcome.correct_answers}/{outcome.total_questions}",
            title="[bold]Result[/bold]",
            expand=False,
        )
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Explanation", width=60)

    for index, question in enumerate(questions, start=1):
        missed = question.id in outcome.incorrect_questions
        status_icon = "[red]✗[/red]" if missed else "[green]✓[/green]"
        table.add_row(str(index), status_icon, _truncate(question.explanation) if missed else "")

    console.print(table)


# =============================================================================
# SEED VALIDATION
# =============================================================================


@app.command(name="check-seed")
def check_seed(
    seed_file: Path = typer.Argument(..., help="Path to a seed YAML file"),
) -> None:
    """Validate a seed file by loading it into an empty store."""
    if not seed_file.exists():
        console.print(f"[red]✗ File not found: {seed_file}[/red]")
        raise typer.Exit(code=1)

    store = EntityStore()
    try:
        counts = seed_store(store, load_seed_data(seed_file))
    except ClassroomError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {seed_file} is valid[/green]")
    for table_name, count in counts.items():
        console.print(f"  [dim]{table_name}:[/dim] {count}")


if __name__ == "__main__":
    app()
