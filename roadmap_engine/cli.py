# roadmap_engine/cli.py
"""
CLI interface for roadmap-engine.

Thin presentation layer over the generation pipeline. All commands delegate
to the same functions library callers use.
"""

import json
from datetime import date, datetime, time, timezone
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from roadmap_engine.catalog.provider import CatalogSnapshot, YamlCatalog
from roadmap_engine.config.loader import get_config_path, load_config
from roadmap_engine.config.schema import RoadmapEngineConfig
from roadmap_engine.errors import CatalogError, EngineError, InvalidInputError
from roadmap_engine.logging_config import configure_logging
from roadmap_engine.models.roadmap import GenerationInput, ModuleStatus, Roadmap
from roadmap_engine.planning.gap import analyze_gap
from roadmap_engine.planning.graph import load_graph
from roadmap_engine.planning.output import RoadmapRenderer
from roadmap_engine.planning.phases import assign_phases
from roadmap_engine.planning.pipeline import generate_roadmap, regenerate_roadmap
from roadmap_engine.planning.sequencer import sequence

app = typer.Typer(
    name="roadmap-engine",
    help="Deterministic learning roadmap generation over a skill prerequisite graph.",
    no_args_is_help=True,
)

EXIT_CATALOG_ERROR = 1
EXIT_INPUT_ERROR = 2

_FORMATS = ("table", "json", "markdown")


def _setup(verbose: bool) -> RoadmapEngineConfig:
    """Load config and configure stderr logging."""
    try:
        config = load_config()
    except InvalidInputError as e:
        _fail(e)
    configure_logging("verbose" if verbose else config.output.verbosity)
    return config


def _open_snapshot(catalog_path: str | None, config: RoadmapEngineConfig) -> CatalogSnapshot:
    return CatalogSnapshot.from_provider(YamlCatalog(catalog_path or config.catalog.path))


def _clock_for(today: str | None):
    """Return a clock pinned to midnight UTC of --today, or None for now."""
    if not today:
        return None
    try:
        day = date.fromisoformat(today)
    except ValueError:
        raise InvalidInputError(f"Invalid --today '{today}': expected YYYY-MM-DD", field="today")
    pinned = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return lambda: pinned


def _fail(error: Exception) -> None:
    """Print an error to stderr and exit with the matching code."""
    if isinstance(error, InvalidInputError):
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(EXIT_INPUT_ERROR)
    if isinstance(error, EngineError):
        typer.echo(
            typer.style(f"Catalog error [{error.code}]: {error.message}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(EXIT_CATALOG_ERROR)
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(EXIT_CATALOG_ERROR)


def _print_roadmap(roadmap: Roadmap, fmt: str, role_name: str | None = None) -> None:
    if fmt == "json":
        typer.echo(roadmap.model_dump_json(indent=2))
        return
    if fmt == "markdown":
        typer.echo(RoadmapRenderer().render(roadmap, role_name=role_name))
        return

    from rich.console import Console
    from rich.table import Table

    console = Console()
    console.print(f"[bold]Roadmap: {role_name or roadmap.target_role}[/bold]")
    console.print(
        f"{len(roadmap.modules)} modules, {roadmap.total_hours} hours at "
        f"{roadmap.weekly_hours:g} h/week, projected completion "
        f"{roadmap.projected_completion.date().isoformat()}"
    )
    if not roadmap.modules:
        console.print("Nothing left to learn for this role.")
        return

    for number, summary in enumerate(roadmap.phases, start=1):
        console.print()
        console.print(
            f"[bold cyan]Phase {number}: {summary.name}[/bold cyan] "
            f"[dim]({summary.total_modules} modules, {summary.total_hours:.1f}h)[/dim]"
        )
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", width=3)
        table.add_column("Module")
        table.add_column("Hours", justify="right")
        table.add_column("Resource", style="dim")
        for module in summary.modules:
            table.add_row(
                str(module.position),
                module.name,
                f"{module.estimated_hours:.1f}",
                module.resource_id or "-",
            )
        console.print(table)


def _parse_statuses(values: list[str] | None) -> dict[str, ModuleStatus]:
    statuses: dict[str, ModuleStatus] = {}
    for value in values or []:
        skill_id, sep, status = value.partition("=")
        if not sep:
            raise InvalidInputError(
                f"Invalid --status '{value}': expected SKILL_ID=STATUS", field="status"
            )
        try:
            statuses[skill_id.strip()] = ModuleStatus(status.strip())
        except ValueError:
            allowed = ", ".join(s.value for s in ModuleStatus)
            raise InvalidInputError(
                f"Invalid status '{status}' for '{skill_id}': expected one of {allowed}",
                field="status",
            )
    return statuses


@app.command()
def generate(
    role: str = typer.Argument(..., help="Target role id (see 'roles')"),
    weekly_hours: float = typer.Option(10, "--weekly-hours", "-w", help="Hours per week"),
    known: list[str] = typer.Option(None, "--known", "-k", help="Skill id already known (repeatable)"),
    exclude_optional: bool = typer.Option(False, "--exclude-optional", help="Skip optional skills"),
    catalog: str = typer.Option(None, "--catalog", "-c", help="Catalog YAML file"),
    fmt: str = typer.Option(None, "--format", "-f", help="Output format: table, json, markdown"),
    today: str = typer.Option(None, "--today", help="Generation date YYYY-MM-DD (default: now)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Generate a roadmap for a target role."""
    config = _setup(verbose)
    fmt = fmt or config.output.format
    if fmt not in _FORMATS:
        typer.echo(f"Error: invalid format '{fmt}'. Must be one of: {', '.join(_FORMATS)}", err=True)
        raise typer.Exit(EXIT_INPUT_ERROR)

    try:
        snapshot = _open_snapshot(catalog, config)
        request = GenerationInput(
            target_role=role,
            weekly_hours=weekly_hours,
            known_skill_ids=frozenset(known or []),
            include_optional=not exclude_optional,
        )
        roadmap = generate_roadmap(snapshot, request, clock=_clock_for(today), config=config)
    except (EngineError, FileNotFoundError) as e:
        _fail(e)

    role_def = snapshot.roles.get(roadmap.target_role)
    _print_roadmap(roadmap, fmt, role_def.display_name if role_def else None)


@app.command()
def regenerate(
    previous: Path = typer.Argument(..., help="Previous roadmap JSON (from 'generate -f json')"),
    role: str = typer.Argument(..., help="Target role id"),
    weekly_hours: float = typer.Option(10, "--weekly-hours", "-w", help="Hours per week"),
    known: list[str] = typer.Option(None, "--known", "-k", help="Skill id already known (repeatable)"),
    status: list[str] = typer.Option(
        None, "--status", "-s", help="Current progress as SKILL_ID=STATUS (repeatable)"
    ),
    exclude_optional: bool = typer.Option(False, "--exclude-optional", help="Skip optional skills"),
    catalog: str = typer.Option(None, "--catalog", "-c", help="Catalog YAML file"),
    fmt: str = typer.Option(None, "--format", "-f", help="Output format: table, json, markdown"),
    today: str = typer.Option(None, "--today", help="Generation date YYYY-MM-DD (default: now)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Regenerate a roadmap and report which progress carries over."""
    config = _setup(verbose)
    fmt = fmt or config.output.format
    if fmt not in _FORMATS:
        typer.echo(f"Error: invalid format '{fmt}'. Must be one of: {', '.join(_FORMATS)}", err=True)
        raise typer.Exit(EXIT_INPUT_ERROR)

    try:
        old = Roadmap.model_validate_json(previous.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        typer.echo(f"Error: could not read previous roadmap '{previous}': {e}", err=True)
        raise typer.Exit(EXIT_INPUT_ERROR)

    try:
        snapshot = _open_snapshot(catalog, config)
        request = GenerationInput(
            target_role=role,
            weekly_hours=weekly_hours,
            known_skill_ids=frozenset(known or []),
            include_optional=not exclude_optional,
        )
        result = regenerate_roadmap(
            old,
            snapshot,
            request,
            clock=_clock_for(today),
            config=config,
            statuses=_parse_statuses(status),
        )
    except (EngineError, FileNotFoundError) as e:
        _fail(e)

    if fmt == "json":
        payload = result.model_dump(mode="json")
        payload["preserved_count"] = result.preserved_count
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Preserved: {result.preserved_count}")
    for item in result.preserved:
        typer.echo(
            f"  {item.skill_id} [{item.status.value}] "
            f"#{item.previous_position} -> #{item.new_position}"
        )
    typer.echo(f"Added:     {', '.join(result.added_skill_ids) or '-'}")
    typer.echo(f"Removed:   {', '.join(result.removed_skill_ids) or '-'}")
    typer.echo()
    role_def = snapshot.roles.get(result.roadmap.target_role)
    _print_roadmap(result.roadmap, fmt, role_def.display_name if role_def else None)


@app.command()
def validate(
    catalog: str = typer.Option(None, "--catalog", "-c", help="Catalog YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Check a catalog for unknown skills, cycles and phase-order violations."""
    config = _setup(verbose)

    try:
        snapshot = _open_snapshot(catalog, config)
        graph = load_graph(snapshot.skills, snapshot.edges)
        role_requirements = {role_id: role.skill_ids for role_id, role in snapshot.roles.items()}
        for role_id in snapshot.role_ids:
            gap = analyze_gap(graph, role_id, frozenset(), role_requirements)
            assign_phases(sequence(graph, gap))
    except (CatalogError, FileNotFoundError) as e:
        _fail(e)

    typer.echo(
        typer.style("Catalog OK", fg=typer.colors.GREEN)
        + f": {len(graph)} skills, {graph.edge_count} edges, {len(snapshot.roles)} roles"
    )


@app.command()
def roles(
    catalog: str = typer.Option(None, "--catalog", "-c", help="Catalog YAML file"),
):
    """List target roles in the catalog."""
    config = _setup(False)

    try:
        snapshot = _open_snapshot(catalog, config)
    except (CatalogError, FileNotFoundError) as e:
        _fail(e)

    if not snapshot.roles:
        typer.echo("No roles found.")
        return

    typer.echo(f"{'ROLE':<18} {'SKILLS':<7} NAME")
    typer.echo("-" * 60)
    for role_id in snapshot.role_ids:
        definition = snapshot.roles[role_id]
        typer.echo(f"{role_id:<18} {len(definition.skill_ids):<7} {definition.display_name}")


@app.command("config")
def show_config():
    """Show the config file path and effective settings."""
    config = _setup(False)
    typer.echo(f"Config file: {get_config_path()}")
    typer.echo(yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    app()
