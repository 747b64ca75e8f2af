"""Rich-powered console output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from careerdeck.browsing.comparison import ComparisonColumn
from careerdeck.models import Job, SalaryRange, Sector

_console = Console()

_DIFFICULTY_STYLES = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "red",
}


def format_salary(salary: SalaryRange) -> str:
    return f"${salary.minimum / 1000:g}k - ${salary.maximum / 1000:g}k"


def print_message(text: str, style: str = "") -> None:
    _console.print(text, style=style or None)


def print_sectors(sectors: list[Sector], job_counts: dict[str, int]) -> None:
    table = Table(title="Sectors", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Sector")
    table.add_column("Careers", justify="right")
    for sector in sectors:
        table.add_row(sector.id, f"{sector.icon} {sector.name}".strip(), str(job_counts.get(sector.id, 0)))
    _console.print(table)


def print_jobs(
    jobs: list[Job],
    title: str = "Careers",
    favorites: set[str] | None = None,
    compare: list[str] | None = None,
) -> None:
    """Display a job list; favorites get a heart, compared jobs a marker."""
    favorites = favorites or set()
    compare = compare or []
    if not jobs:
        _console.print(f"[dim]{title}: nothing to show.[/dim]")
        return
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("", width=2)
    table.add_column("ID", style="cyan")
    table.add_column("Career")
    table.add_column("Difficulty")
    table.add_column("Salary", justify="right")
    for job in jobs:
        marks = ("♥" if job.id in favorites else "") + ("⇄" if job.id in compare else "")
        style = _DIFFICULTY_STYLES.get(job.difficulty, "")
        table.add_row(
            marks,
            job.id,
            job.name,
            f"[{style}]{job.difficulty}[/{style}]" if style else job.difficulty,
            format_salary(job.salary),
        )
    _console.print(table)


def print_job_detail(job: Job, sector: Sector, is_favorite: bool, views: int) -> None:
    heart = "[bold red]♥[/bold red] " if is_favorite else ""
    _console.print(
        Panel.fit(
            f"{heart}[bold cyan]{job.name}[/bold cyan]\n{job.description}",
            title=sector.name,
            border_style="cyan",
        )
    )
    _console.print(f"  Salary: {format_salary(job.salary)}   Difficulty: {job.difficulty}   Views: {views}")
    if job.detailed_description:
        _console.print()
        _console.print(job.detailed_description)
    _console.print()
    _console.print("[bold]Skills:[/bold] " + ", ".join(job.skills))
    if job.roadmap:
        _console.print("[bold]Roadmap:[/bold]")
        for number, step in enumerate(job.roadmap, start=1):
            suffix = f" - {step.description}" if step.description else ""
            _console.print(f"  {number}. {step.title}{suffix}")
    if job.certificates:
        _console.print("[bold]Certificates:[/bold]")
        for cert in job.certificates:
            _console.print(f"  • {cert.name} ({cert.type})")
    if job.links:
        _console.print("[bold]Learn:[/bold]")
        for link in job.links:
            _console.print(f"  • {link.name} ({link.platform}, {link.type}) {link.url}")


def print_comparison(columns: list[ComparisonColumn]) -> None:
    """Display jobs side by side."""
    if not columns:
        _console.print("[dim]Nothing to compare yet.[/dim]")
        return
    table = Table(title="Compare", show_header=True, header_style="bold magenta")
    table.add_column("", style="cyan")
    for col in columns:
        table.add_column(col.job.name)

    table.add_row("Salary", *(format_salary(c.salary) for c in columns))
    table.add_row(
        "Difficulty",
        *(f"{c.difficulty} {'●' * c.difficulty_score}{'○' * (3 - c.difficulty_score)}" for c in columns),
    )
    table.add_row(
        "Skills",
        *(
            ", ".join(c.top_skills) + (f" +{c.more_skills} more" if c.more_skills else "")
            for c in columns
        ),
    )
    table.add_row("Roadmap", *(f"{c.roadmap_steps} steps" for c in columns))
    table.add_row(
        "Certificates",
        *(f"{c.certificate_count} ({c.required_certificates} required)" for c in columns),
    )
    _console.print(table)
