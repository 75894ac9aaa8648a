import sys
import typer
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from rich.console import Console
from rich.table import Table
from typing import Optional, List

from examdrill.config import settings
from examdrill.database import SessionLocal, init_db
from examdrill.crud import create_user, create_questions
from examdrill.errors import ExamDrillError
from examdrill.schemas import (
    UserCreate, QuestionCreate, StartSessionRequest, RecordAnswerRequest,
    StatsRequest, HistoryRequest, SessionStats
)
from examdrill.catalog_parser import QuestionCatalogParser
from examdrill import study

app = typer.Typer(help="Exam Drill CLI - spaced repetition for exam question banks")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    """Configure logging for every command"""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else settings.log_level)


def _print_stats(stats: SessionStats):
    console.print(f"  Questions: {stats.total_questions}")
    console.print(f"  Correct: {stats.correct_answers} ({stats.accuracy:.1f}%)")
    console.print(f"  Average time: {stats.average_time_per_question_ms / 1000:.1f}s per question")

    if stats.category_breakdown:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Correct", style="green", justify="right")
        table.add_column("Total", style="blue", justify="right")
        for category, tally in stats.category_breakdown.items():
            table.add_row(category, str(tally.correct), str(tally.total))
        console.print(table)


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from examdrill.database import engine, Base
    import examdrill.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command("create-user")
def create_user_command(
    username: str = typer.Option(..., prompt="Username"),
    name: Optional[str] = typer.Option(None, help="Display name")
):
    """Register a study account"""
    db = SessionLocal()
    try:
        user = create_user(db, UserCreate(username=username, name=name))
        console.print(f"[green]✓[/green] User created! User ID: {user.id}")
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid user: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1)
    except IntegrityError:
        db.rollback()
        console.print(f"[red]✗[/red] Username '{username}' is already taken")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def import_questions(
    file_path: str = typer.Option(..., prompt="Question file path (.csv or .xlsx)")
):
    """Load catalog questions from a CSV or Excel table"""
    db = SessionLocal()
    try:
        console.print("[yellow]Parsing question table...[/yellow]")
        raw_items = QuestionCatalogParser.auto_parse(file_path)

        questions = []
        for item in raw_items:
            try:
                questions.append(QuestionCreate(**item))
            except ValidationError as e:
                console.print(f"[red]Skipping - invalid question '{item['text'][:40]}': {e.errors()[0]['msg']}[/red]")

        created = create_questions(db, questions)
        console.print(f"[green]✓[/green] Imported {len(created)} of {len(raw_items)} questions")
    except ValueError as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def start_session(
    user_id: int = typer.Option(..., prompt="User ID"),
    count: int = typer.Option(settings.default_question_count, help="Number of questions"),
    category: Optional[List[str]] = typer.Option(None, help="Category filter (repeatable)"),
    difficulty: Optional[str] = typer.Option(None, help="easy, medium or hard"),
    all_questions: bool = typer.Option(False, "--all", help="Include questions not yet due")
):
    """Start a study session and list its questions"""
    db = SessionLocal()
    try:
        request = StartSessionRequest(
            question_count=count,
            categories=category or None,
            difficulty=difficulty,
            only_due=not all_questions
        )
        result = study.start_session(db, user_id, request)

        console.print(f"\n[green]✓[/green] [bold]Session {result.session_id} started[/bold] "
                      f"({len(result.questions)} questions)\n")
        if not result.questions:
            console.print("[yellow]Nothing is due right now. Try --all.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", style="dim", justify="right")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Category", style="green")
        table.add_column("Difficulty", style="yellow")
        table.add_column("Question")
        for i, question in enumerate(result.questions, 1):
            table.add_row(str(i), str(question.id), question.category, question.difficulty, question.text[:60])
        console.print(table)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid session options: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1)
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def answer(
    user_id: int = typer.Option(..., prompt="User ID"),
    session_id: int = typer.Option(..., prompt="Session ID"),
    question_id: int = typer.Option(..., prompt="Question ID"),
    correct: bool = typer.Option(..., prompt="Answered correctly?"),
    confidence: str = typer.Option("medium", help="low, medium or high"),
    seconds: float = typer.Option(10.0, help="Time spent answering (seconds)"),
    selected: Optional[List[str]] = typer.Option(None, help="Selected option labels (repeatable)")
):
    """Record an answer and show when the question comes back"""
    db = SessionLocal()
    try:
        request = RecordAnswerRequest(
            session_id=session_id,
            question_id=question_id,
            was_correct=correct,
            confidence=confidence,
            time_spent_ms=int(seconds * 1000),
            selected_answers=selected or []
        )
        result = study.record_answer(db, user_id, request)

        console.print("[green]✓[/green] Answer recorded!")
        console.print(f"  Quality: {result.quality_score}/5")
        console.print(f"  Next review: {result.review_state.next_review_at:%Y-%m-%d %H:%M} "
                      f"(in {result.next_interval_days} days)")
        console.print(f"  Strength: {result.review_state.strength:.2f}")
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid answer: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1)
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def finish_session(session_id: int = typer.Option(..., prompt="Session ID")):
    """Finish a session and show its statistics"""
    db = SessionLocal()
    try:
        stats = study.finish_session(db, session_id)
        console.print(f"\n[bold]Session {session_id} Results[/bold]")
        _print_stats(stats)
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def due_count(user_id: int):
    """Count questions due for review or never studied"""
    db = SessionLocal()
    try:
        count = study.get_due_count(db, user_id)
        console.print(f"[cyan]{count}[/cyan] questions ready to study")
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def stats(
    user_id: int,
    period: str = typer.Option("month", help="week, month, year or all")
):
    """View accuracy, category performance and study streak"""
    db = SessionLocal()
    try:
        user_stats = study.get_stats(db, user_id, StatsRequest(period=period))

        console.print(f"\n[bold]Study Statistics ({period})[/bold]\n")
        console.print(f"  Questions studied: {user_stats.total_studied}")
        console.print(f"  Accuracy: {user_stats.accuracy:.1f}%")
        console.print(f"  Sessions: {user_stats.total_sessions}")
        console.print(f"  Average session length: {user_stats.average_session_length_ms / 60000:.1f} min")
        console.print(f"  Current streak: {user_stats.current_streak} days")

        if user_stats.category_stats:
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Category", style="cyan")
            table.add_column("Studied", style="blue", justify="right")
            table.add_column("Accuracy", style="green", justify="right")
            for category, category_stats in user_stats.category_stats.items():
                table.add_row(category, str(category_stats.total), f"{category_stats.accuracy:.0f}%")
            console.print(table)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid period: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1)
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def history(
    user_id: int,
    limit: int = typer.Option(settings.history_page_size, help="Sessions per page"),
    offset: int = typer.Option(0, help="Sessions to skip"),
    category: Optional[str] = typer.Option(None, help="Only show answers in this category")
):
    """View finished study sessions"""
    db = SessionLocal()
    try:
        items = study.get_history(db, user_id, HistoryRequest(limit=limit, offset=offset, category=category))
        if not items:
            console.print(f"[yellow]No finished sessions for user {user_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Session", style="cyan", justify="right")
        table.add_column("Started", style="green")
        table.add_column("Questions", style="blue", justify="right")
        table.add_column("Accuracy", style="yellow", justify="right")
        table.add_column("Avg time", justify="right")
        for item in items:
            table.add_row(
                str(item.id),
                item.started_at.strftime("%Y-%m-%d %H:%M"),
                str(item.total_questions) if not category else f"{len(item.answers)} in {category}",
                f"{item.accuracy:.0f}%",
                f"{item.average_time_ms / 1000:.1f}s"
            )
        console.print(table)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid options: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1)
    except ExamDrillError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        db.close()


if __name__ == "__main__":
    app()
