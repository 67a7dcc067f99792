"""
CLI Planner Commands.

Commands:
    studyplan today        - Today's tasks, greeting and progress
    studyplan week         - Seven-day overview
    studyplan topics       - Every analyzed topic by priority
    studyplan score        - Brain Score dimensions
    studyplan rank         - Predicted rank and colleges
    studyplan challenge    - Today's challenge and weekly wins
    studyplan achievements - Achievement progress
    studyplan revision     - Topics due for revision
    studyplan replan       - Rebuild today for a smaller time budget
    studyplan config       - Show planner settings

Every command except `config` reads one JSON snapshot (profile + performance rows) and
prints; nothing is written back.

Usage:
    studyplan today -i snapshot.json
    studyplan week -i snapshot.json --date 2025-01-06
    studyplan replan -i snapshot.json --minutes 45 --seed 7
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import get_settings
from studyplan.core.constants import SUBJECT_ICONS
from studyplan.core.errors import PlannerError
from studyplan.core.models import DayPlan
from studyplan.core.utils import to_date
from studyplan.gamification.achievements import unlocked_ids
from studyplan.study.progression import get_phase_info
from studyplan.study.rank_predictor import get_exam_option

if TYPE_CHECKING:
    from studyplan.planner_service import PlannerService, PlannerState

console = Console()

app = typer.Typer(
    name="studyplan",
    help="Personalized study plans for JEE / NEET / CET aspirants",
    no_args_is_help=True,
)


def _configure_logging() -> None:
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
            rotation="1 MB",
        )


@app.callback()
def main_callback() -> None:
    """Read a learner snapshot and print plans, scores and predictions."""
    _configure_logging()


def _load_state(input_file: Path, day: str | None, seed: int | None) -> tuple[PlannerService, PlannerState]:
    """Build planner state or exit with a red error."""
    from studyplan.planner_service import PlannerService, load_snapshot

    try:
        snapshot = load_snapshot(input_file)
        today = to_date(day) if day else None
    except PlannerError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except ValueError:
        rprint(f"[red]Error:[/red] Invalid --date {day!r}, expected YYYY-MM-DD")
        raise typer.Exit(code=1)

    rng = random.Random(seed) if seed is not None else None
    service = PlannerService(rng=rng)
    state = service.build_state(snapshot, today=today)
    return service, state


def _require_data(state: PlannerState) -> bool:
    if state.has_enough_data:
        return True
    rprint("[yellow]Not enough practice data for a personalized plan yet.[/yellow]")
    if state.needs_diagnostic:
        rprint("Take the diagnostic test first, then come back.")
    else:
        rprint(
            f"Need at least {get_settings().min_questions_for_plan} questions across "
            f"{get_settings().min_topics_for_plan} topics ({state.total_questions} answered so far)."
        )
    return False


def _format_progress_bar(score: float, width: int = 10) -> str:
    filled = int(score / 100 * width)
    return "#" * filled + "-" * (width - filled)


def _print_day(plan: DayPlan, title: str) -> None:
    if plan.is_rest_day and not plan.tasks:
        rprint(f"[dim]{plan.day_name} {plan.date}: rest day, nothing scheduled.[/dim]")
        return

    table = Table(title=title)
    table.add_column("Slot", style="cyan")
    table.add_column("Subject")
    table.add_column("Topic")
    table.add_column("Type")
    table.add_column("Min", justify="right")
    table.add_column("Qs", justify="right")
    table.add_column("XP", justify="right", style="green")
    table.add_column("Done", justify="center")

    for task in plan.tasks:
        icon = SUBJECT_ICONS.get(task.subject, "")
        table.add_row(
            task.time_slot.value,
            f"{icon} {task.subject}".strip(),
            f"[{task.priority.color}]{task.topic}[/{task.priority.color}]",
            task.type.value,
            str(task.allocated_minutes),
            str(task.questions_target),
            str(task.xp_reward),
            "[green]x[/green]" if task.is_completed else "",
        )

    console.print(table)
    rprint(
        f"[dim]{plan.total_minutes} min planned, {plan.completed_minutes} min done, "
        f"focus: {plan.focus_subject or '-'}[/dim]"
    )


@app.command("today")
def planner_today(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show today's plan with greeting and headline stats.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    stats = state.stats
    phase = get_phase_info(stats.exam_phase)

    content = Text()
    content.append(f"{state.greeting}\n", style="bold")
    content.append(f"{state.motivation}\n\n", style="italic")
    content.append(f"{state.target_exam} in {stats.days_to_exam} days ", style="cyan")
    content.append(f"({phase.emoji} {phase.label})\n")
    content.append(f"Level {stats.level} {stats.level_icon} {stats.level_title}  ")
    content.append(f"{_format_progress_bar(stats.xp_progress)} {stats.xp_to_next_level} XP to next\n")
    content.append(f"Streak: {stats.current_streak} days  ", style="bold yellow")
    content.append(f"Accuracy: {stats.avg_accuracy}%  ")
    content.append(f"Tasks: {stats.today_tasks_done}/{stats.today_tasks_total}")

    console.print(Panel(content, title="[bold]Today[/bold]", border_style="blue"))
    _print_day(state.today_plan, f"{state.today_plan.day_name} {state.today_plan.date}")


@app.command("week")
def planner_week(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show the seven-day plan overview.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    table = Table(title="Week Plan")
    table.add_column("Day", style="cyan")
    table.add_column("Date")
    table.add_column("Tasks", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("XP", justify="right", style="green")
    table.add_column("Focus")

    for plan in state.week_plan:
        name = f"[bold]{plan.day_short}*[/bold]" if plan.is_today else plan.day_short
        if plan.is_rest_day:
            name += " (rest)"
        table.add_row(
            name,
            plan.date,
            str(len(plan.tasks)),
            str(plan.total_minutes),
            str(plan.total_xp),
            plan.focus_subject or "-",
        )

    console.print(table)


@app.command("topics")
def planner_topics(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    List every analyzed topic, most urgent first.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    table = Table(title="Topics")
    table.add_column("Subject", style="cyan")
    table.add_column("Topic")
    table.add_column("Status")
    table.add_column("Accuracy", justify="right")
    table.add_column("Qs", justify="right")
    table.add_column("Days", justify="right")
    table.add_column("Priority", justify="right")

    for t in state.topics:
        color = t.status.color
        table.add_row(
            t.subject,
            t.topic,
            f"[{color}]{t.status.display_name}[/{color}]",
            f"{t.accuracy}%",
            str(t.questions_attempted),
            str(t.days_since_practice),
            str(t.priority_score),
        )

    console.print(table)


@app.command("score")
def planner_score(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show the Brain Score and its five dimensions.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    score = state.brain_score
    table = Table(title=f"Brain Score: {score.overall}", show_header=False)
    table.add_column("Dimension", style="cyan")
    table.add_column("Bar")
    table.add_column("Value", justify="right")

    for name, value in score.dimensions.to_dict().items():
        table.add_row(name.replace("_", " ").title(), _format_progress_bar(value), str(value))

    console.print(table)
    sign = "+" if score.weekly_delta > 0 else ""
    rprint(f"Trend: [bold]{score.trend.value}[/bold] ({sign}{score.weekly_delta} this week)")


@app.command("rank")
def planner_rank(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show the predicted rank range and reachable colleges.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    pred = state.rank_prediction
    content = Text()
    content.append(f"Estimated rank: {pred.estimated_rank:,}\n", style="bold")
    content.append(f"Range: {pred.rank_range.min:,} - {pred.rank_range.max:,}\n")
    content.append(f"Score: {pred.estimated_score}/{pred.max_score}  ")
    content.append(f"Confidence: {pred.confidence}%  ")
    content.append(f"Trajectory: {pred.trajectory.value}\n\n")
    for college in pred.top_colleges:
        content.append(f"  - {college}\n", style="green")

    console.print(Panel(content, title=f"[bold]{get_exam_option(state.target_exam).label} Rank Prediction[/bold]", border_style="magenta"))

    table = Table(title="Subjects")
    table.add_column("Subject", style="cyan")
    table.add_column("Accuracy", justify="right")
    table.add_column("Topics", justify="right")
    table.add_column("Weak", justify="right", style="red")
    for b in state.subject_breakdowns:
        table.add_row(b.subject, f"{b.avg_accuracy}%", str(b.topic_count), str(b.weak_count))
    console.print(table)


@app.command("challenge")
def planner_challenge(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show today's challenge and this week's wins.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    ch = state.daily_challenge
    rprint(
        Panel(
            f"{ch.icon} [bold]{ch.title}[/bold]\n{ch.description}\n"
            f"Target: {ch.target}  Reward: {ch.xp_reward} XP",
            title="[bold]Daily Challenge[/bold]",
            border_style="yellow",
        )
    )

    if state.weekly_wins:
        rprint("\n[bold]Weekly wins[/bold]")
        for win in state.weekly_wins:
            rprint(f"  {win.emoji} {win.title} [dim]{win.detail}[/dim] [green]+{win.xp} XP[/green]")


@app.command("achievements")
def planner_achievements(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show achievement progress; newly unlocked ones are highlighted.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    table = Table(title="Achievements")
    table.add_column("", justify="center")
    table.add_column("Title", style="cyan")
    table.add_column("Rarity")
    table.add_column("Progress", justify="right")
    table.add_column("XP", justify="right", style="green")

    for a in state.achievements:
        title = f"[bold green]{a.title} (new!)[/bold green]" if a.newly_unlocked else a.title
        table.add_row(a.icon if a.unlocked else "-", title, a.rarity.value, f"{a.progress}%", str(a.xp_reward))

    console.print(table)

    ids = unlocked_ids(state.achievements)
    if ids:
        rprint(f"[dim]Unlocked ids: {', '.join(ids)}[/dim]")


@app.command("revision")
def planner_revision(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Show topics at risk of being forgotten.
    """
    _, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    if not state.revision_due:
        rprint("[green]Nothing due for revision.[/green]")
        return

    colors = {"overdue": "red", "due": "yellow", "upcoming": "dim"}
    table = Table(title="Revision Due")
    table.add_column("Subject", style="cyan")
    table.add_column("Topic")
    table.add_column("Days", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Urgency")
    for item in state.revision_due:
        color = colors[item.urgency.value]
        table.add_row(
            item.subject,
            item.topic,
            str(item.days_since),
            f"{item.forgetting_risk}%",
            f"[{color}]{item.urgency.value}[/{color}]",
        )
    console.print(table)


@app.command("replan")
def planner_replan(
    input_file: Path = typer.Option(..., "--input", "-i", help="Snapshot JSON file (profile + rows)"),
    minutes: int = typer.Option(..., "--minutes", "-m", min=1, help="Minutes available today"),
    day: str | None = typer.Option(None, "--date", help="Plan date as YYYY-MM-DD (default: today)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for motivation text and weekly delta"),
) -> None:
    """
    Rebuild today's plan for a reduced time budget.
    """
    service, state = _load_state(input_file, day, seed)
    if not _require_data(state):
        return

    state = service.replan(state, minutes)
    _print_day(state.today_plan, f"Replanned for {minutes} min")


@app.command("config")
def planner_config() -> None:
    """
    Show the planner settings in effect.
    """
    console.print_json(json.dumps(get_settings().get_planner_config(), indent=2))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
