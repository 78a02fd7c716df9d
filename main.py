"""NEP Timetable Engine: main CLI.

Usage:
  python main.py config init              Write the default configuration
  python main.py config show              Show the configuration
  python main.py sample                   Generate a sample catalog (JSON)
  python main.py generate                 Generate a timetable (remote, with fallback)
  python main.py generate --offline       Generate with the heuristic engine only
  python main.py analyze <timetable>      NEP 2020 compliance report
  python main.py export <timetable>       Excel export
  python main.py serve                    Start the HTTP API
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    """Routes library logs through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config_or_abort():
    """Loads the configuration (defaults when no file exists) or aborts."""
    from config.manager import ConfigManager, ConfigurationError
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ConfigurationError as e:
        console.print(f"[red bold]Configuration error:[/red bold]\n{e}")
        sys.exit(1)
    _setup_logging(config.logging.level.value)
    return mgr, config


def _load_catalog_or_abort(catalog_path: Optional[str], config):
    """Loads the catalog JSON or aborts with a hint."""
    from models.catalog import Catalog

    p = Path(catalog_path or config.scheduling.catalog_path)
    if not p.exists():
        console.print(
            f"[red]No catalog found: {p}[/red]\n"
            "Create one with [bold]python main.py sample[/bold] "
            "or pass [bold]--catalog[/bold]."
        )
        sys.exit(1)
    return Catalog.load_json(p)


def _load_entries_or_abort(path: Path):
    from models.timetable_entry import load_entries
    try:
        return load_entries(path)
    except ValueError as e:
        console.print(f"[red bold]Unreadable timetable file:[/red bold] {path}\n{e}")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Show or create the configuration."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Overwrite an existing configuration.")
def config_init(force: bool):
    """Writes the default configuration as commented YAML."""
    from config.manager import ConfigManager
    from config.defaults import default_app_config

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]A configuration already exists: {mgr.DEFAULT_CONFIG}[/yellow]\n"
            "Use [bold]--force[/bold] to overwrite it."
        )
        return
    mgr.save(default_app_config())


@cmd_config.command("show")
def config_show():
    """Shows the active configuration."""
    mgr, config = _load_config_or_abort()
    source = "defaults" if mgr.first_run_check() else str(mgr.DEFAULT_CONFIG)

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  source: {source}",
        title="Configuration",
        border_style="cyan",
    ))

    rc = config.remote
    table = Table(title="Remote generation", box=box.ROUNDED)
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("enabled", "✓" if rc.enabled else "✗")
    table.add_row("api_url", rc.api_url)
    table.add_row("model", rc.model)
    table.add_row("temperature", str(rc.temperature))
    table.add_row("max_tokens", str(rc.max_tokens))
    table.add_row("timeout", f"{rc.timeout_seconds:.0f}s")
    table.add_row("api key", f"${rc.api_key_env}")
    console.print(table)

    sc = config.scheduling
    console.print(
        f"\n[bold]Scheduling:[/bold] school {sc.school_id} | class {sc.class_id} | "
        f"heuristic confidence {sc.heuristic_confidence} | "
        f"fallback score {sc.fallback_compliance_score}"
    )
    console.print(f"[bold]Catalog:[/bold] {sc.catalog_path} | [bold]Output:[/bold] {sc.output_dir}")


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--seed", default=42, help="Random seed for reproducible data.")
@click.option("--output", "-o", default=None,
              help="Catalog path (default: scheduling.catalog_path).")
def cmd_sample(seed: int, output: Optional[str]):
    """Generates a sample catalog (subjects, teachers, time slots)."""
    mgr, config = _load_config_or_abort()
    from data.sample_data import SampleCatalogGenerator

    console.print("[bold]Generating sample catalog...[/bold]")
    gen = SampleCatalogGenerator(school_id=config.scheduling.school_id, seed=seed)
    catalog = gen.generate()
    gen.print_summary(catalog)

    report = catalog.validate_feasibility()
    report.print_rich()

    out_path = Path(output or config.scheduling.catalog_path)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Catalog saved: {out_path}")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--catalog", "catalog_path", default=None,
              help="Catalog JSON (default: scheduling.catalog_path).")
@click.option("--offline", is_flag=True, default=False,
              help="Skip the remote service, use the heuristic engine.")
@click.option("--school-id", default=None, help="Target school id.")
@click.option("--class-id", default=None, help="Target class id.")
@click.option("--output", "-o", default=None,
              help="Result JSON (default: <output_dir>/timetable.json).")
@click.option("--excel", is_flag=True, default=False, help="Also write an Excel file.")
def cmd_generate(
    catalog_path: Optional[str],
    offline: bool,
    school_id: Optional[str],
    class_id: Optional[str],
    output: Optional[str],
    excel: bool,
):
    """Generates the weekly timetable of one class."""
    mgr, config = _load_config_or_abort()
    from analysis.compliance import ComplianceScorer
    from config.defaults import default_request
    from config.manager import ConfigurationError
    from export.tui_renderer import render_timetable
    from solver.generation import generate_timetable, prepare_generator
    from solver.matcher import NoTeachersAvailable

    catalog = _load_catalog_or_abort(catalog_path, config)
    request = default_request(config)
    if school_id:
        request.school_id = school_id
    if class_id:
        request.class_id = class_id
    if offline:
        config.remote.enabled = False

    try:
        generator = prepare_generator(config)
    except ConfigurationError as e:
        console.print(f"[red bold]Configuration error:[/red bold]\n{e}")
        sys.exit(1)

    mode = "remote generator" if generator else "heuristic engine"
    console.print(f"[bold]Generating timetable for class {request.class_id}[/bold] ({mode})...")
    try:
        result = asyncio.run(generate_timetable(catalog, request, config, generator=generator))
    except NoTeachersAvailable as e:
        console.print(f"[red bold]Generation failed:[/red bold] {e}")
        sys.exit(1)

    if result.provenance == "heuristic":
        if generator is not None:
            console.print(f"[yellow]Remote generation failed, heuristic fallback used:[/yellow] "
                          f"{result.fallback_reason}")
        if result.dropped_count:
            console.print(
                f"[yellow]⚠ {result.dropped_count} subject(s) did not fit the week "
                f"and were dropped:[/yellow] {', '.join(result.dropped_subject_ids)}"
            )

    render_timetable(
        result.entries, catalog,
        title=f"{config.school_name} – Class {request.class_id}",
        console=console,
    )
    result.report.print_rich(title=f"Reported compliance ({result.provenance})")

    rubric = ComplianceScorer().score(result.entries, catalog.subjects, catalog.time_slots)
    rubric.print_rich(title="NEP 2020 rubric")

    out_path = Path(output) if output else Path(config.scheduling.output_dir) / "timetable.json"
    result.save_json(out_path)
    console.print(f"[green]✓[/green] Timetable saved: {out_path}")

    if excel:
        from export.excel_export import ExcelExporter
        xlsx_path = out_path.with_suffix(".xlsx")
        ExcelExporter(
            result.entries, catalog, school_name=config.school_name, class_id=request.class_id
        ).export(xlsx_path, report=rubric)
        console.print(f"[green]✓[/green] Excel saved: {xlsx_path}")


# ─── ANALYZE ──────────────────────────────────────────────────────────────────

@click.command("analyze")
@click.argument("timetable", type=click.Path(exists=True, path_type=Path))
@click.option("--catalog", "catalog_path", default=None,
              help="Catalog JSON (default: scheduling.catalog_path).")
def cmd_analyze(timetable: Path, catalog_path: Optional[str]):
    """Scores a timetable against the NEP 2020 rubric."""
    mgr, config = _load_config_or_abort()
    from analysis.compliance import ComplianceScorer
    from analysis.solution_validator import SolutionValidator

    catalog = _load_catalog_or_abort(catalog_path, config)
    entries = _load_entries_or_abort(timetable)
    console.print(f"[bold]Loaded:[/bold] {timetable} ({len(entries)} entries)")

    SolutionValidator().validate(entries, catalog).print_rich()
    report = ComplianceScorer().score(entries, catalog.subjects, catalog.time_slots)
    report.print_rich()


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("timetable", type=click.Path(exists=True, path_type=Path))
@click.option("--catalog", "catalog_path", default=None,
              help="Catalog JSON (default: scheduling.catalog_path).")
@click.option("--output", "-o", default=None,
              help="Excel path (default: <output_dir>/timetable.xlsx).")
def cmd_export(timetable: Path, catalog_path: Optional[str], output: Optional[str]):
    """Exports a timetable as Excel, including the compliance sheet."""
    mgr, config = _load_config_or_abort()
    from analysis.compliance import ComplianceScorer
    from export.excel_export import ExcelExporter

    catalog = _load_catalog_or_abort(catalog_path, config)
    entries = _load_entries_or_abort(timetable)
    report = ComplianceScorer().score(entries, catalog.subjects, catalog.time_slots)

    out_path = Path(output) if output else Path(config.scheduling.output_dir) / "timetable.xlsx"
    ExcelExporter(entries, catalog, school_name=config.school_name).export(out_path, report=report)
    console.print(f"[green]✓[/green] Excel saved: {out_path}")


# ─── SERVE ────────────────────────────────────────────────────────────────────

@click.command("serve")
@click.option("--catalog", "catalog_path", default=None,
              help="Catalog JSON (default: scheduling.catalog_path).")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=3001, help="Port.")
def cmd_serve(catalog_path: Optional[str], host: str, port: int):
    """Starts the HTTP API (FastAPI + uvicorn)."""
    mgr, config = _load_config_or_abort()
    import uvicorn
    from api.app import create_app

    catalog = _load_catalog_or_abort(catalog_path, config)
    console.print(f"[bold]NEP Timetable Server[/bold] on http://{host}:{port}")
    uvicorn.run(create_app(catalog, config), host=host, port=port,
                log_level=config.logging.level.value.lower())


# ─── MAIN CLI ─────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """NEP 2020 timetable engine.

    Get started with: python main.py sample && python main.py generate --offline
    """


def main():
    """Entry point. Points to `config init` on the very first call."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Welcome to the NEP Timetable Engine![/bold]\n\n"
            "No configuration found, defaults are in effect.\n"
            "Run [bold]python main.py config init[/bold] to write them to a file.",
            border_style="cyan",
        ))

    cli()


# Register commands
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_generate)
cli.add_command(cmd_analyze)
cli.add_command(cmd_export)
cli.add_command(cmd_serve)


if __name__ == "__main__":
    main()
