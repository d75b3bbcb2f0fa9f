# src/hwkiosk/cli.py
"""
hwkiosk Command Line Interface (CLI).

This module is the operator's terminal entry point, built with `typer` and
`rich`. It drives the same `KioskService` the HTTP API uses, so a technician
at the console sees exactly what the panel would.

Features
--------
- **Inventory**: collect and render the hardware snapshot (or dump it as JSON).
- **Probe catalogue**: list every probe with its command and output shape.
- **Actions**: run any diagnostic or control action by name.
- **Export**: save a snapshot plus test results, mirrored to USB if mounted.
- **Serve**: start the HTTP API for the kiosk panel.

Usage
-----
    $ hwkiosk info
    $ hwkiosk run cpu-stress --duration 60
    $ hwkiosk export --results results.json
    $ hwkiosk serve --port 8765
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.core.contracts.snapshot import Snapshot
from hwkiosk.service import KioskService

load_dotenv()

app = typer.Typer(
    help="hwkiosk: hardware inventory and diagnostics for boot-time kiosks.",
    rich_markup_mode="markdown",
)
console = Console()

# Actions that take the machine down; confirmed interactively unless --yes.
DESTRUCTIVE = {"shutdown", "reboot"}


def _service() -> KioskService:
    """Indirection point so tests can patch in a service with a fake runner."""
    return KioskService()


def _leave_session() -> None:
    """Exit hook for the CLI: the command returns and the shell takes over."""
    console.print("[dim]Leaving kiosk session; returning to the console.[/dim]")


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _gib(n: int) -> str:
    return f"{n / 1024**3:.1f} GiB"


def _render_snapshot(snap: Snapshot) -> None:
    """Render host facts and the status of every extended probe."""
    host = snap.host
    model = host.cpus[0].model if host.cpus else "unknown"
    console.rule(f"[bold]{host.hostname}[/bold]")
    console.print(f"Platform : {host.platform} {host.release} ({host.arch})")
    console.print(f"CPU      : {model} x{len(host.cpus)}")
    console.print(f"Memory   : {_gib(host.free_memory)} free of {_gib(host.total_memory)}")
    console.print(f"Uptime   : {host.uptime / 3600:.1f} h")
    console.print("Load     : " + " ".join(f"{x:.2f}" for x in host.load_average))
    console.print(f"Network  : {', '.join(sorted(host.network_interfaces)) or 'none'}")

    table = Table(title="Extended probes", show_lines=False)
    table.add_column("Probe", style="cyan")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")
    colors = {"ok": "green", "warning": "yellow", "failed": "red"}
    for name, res in snap.extended.items():
        status = res.status.value
        if res.value is None:
            detail = res.error.splitlines()[0] if res.error else ""
        elif isinstance(res.value, list):
            detail = f"{len(res.value)} entries"
        elif isinstance(res.value, str):
            detail = f"{len(res.value.splitlines())} lines"
        else:
            detail = "structured"
        table.add_row(name, f"[{colors[status]}]{status}[/{colors[status]}]", Text(detail))
    console.print(table)


def _render_outcome(outcome: ActionOutcome) -> None:
    if not outcome.success:
        console.print(f"[bold red]❌ {outcome.action} failed:[/bold red] {escape(outcome.error or '')}")
        return
    console.print(f"[bold green]✅ {outcome.action} complete[/bold green]")
    output = outcome.output
    if isinstance(output, dict):
        for key, value in output.items():
            body = value if isinstance(value, str) else json.dumps(value, indent=2)
            console.print(Panel(Text(body.strip() or "(empty)"), title=str(key), border_style="dim"))
    elif output:
        console.print(str(output), markup=False)


def _load_results(path: Path | None) -> Any:
    if path is None:
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def info(
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the snapshot as JSON instead of tables.")
    ] = False,
) -> None:
    """Collect the hardware snapshot and show it."""
    service = _service()
    if as_json:
        snap = service.get_system_info()
        typer.echo(snap.model_dump_json(indent=2))
        return
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("[cyan]Probing hardware...", total=None)
        snap = service.get_system_info()
    _render_snapshot(snap)


@app.command()  # type: ignore[misc]
def probes() -> None:
    """List the probe catalogue."""
    service = _service()
    table = Table(title="Probes")
    table.add_column("Name", style="cyan")
    table.add_column("Shape")
    table.add_column("Command")
    for probe in service.context.registry:
        table.add_row(probe.name, probe.shape.value, probe.command)
    console.print(table)


@app.command()  # type: ignore[misc]
def run(
    action: Annotated[str, typer.Argument(help="Action name, e.g. storage, cpu-stress.")],
    duration: Annotated[
        int | None, typer.Option("--duration", "-d", min=1, help="Stress duration in seconds.")
    ] = None,
    size: Annotated[
        str | None, typer.Option("--size", "-s", help="Memory test size, e.g. 100M.")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompts.")] = False,
) -> None:
    """Run one diagnostic or control action."""
    service = _service()
    if action not in service.dispatcher.actions:
        console.print(f"[bold red]Unknown action:[/bold red] {escape(action)}")
        console.print(f"Available: {', '.join(service.dispatcher.actions)}")
        raise typer.Exit(code=2)

    if action in DESTRUCTIVE and not yes and not Confirm.ask(f"Really {action} now?"):
        raise typer.Exit(code=1)

    params: dict[str, Any] = {}
    if action == "cpu-stress":
        params["duration_seconds"] = duration
    elif action == "memory":
        params["size_spec"] = size
    elif action == "exit":
        service.context.set_exit_hook(_leave_session)

    with console.status(f"[yellow]Running {action}..."):
        outcome = service.dispatcher.dispatch(action, **params)
    _render_outcome(outcome)
    if not outcome.success:
        raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def export(
    results: Annotated[
        Path | None,
        typer.Option(
            "--results",
            "-r",
            exists=True,
            dir_okay=False,
            readable=True,
            help="JSON file with test results to include.",
        ),
    ] = None,
) -> None:
    """Save the snapshot plus test results to disk (and USB if mounted)."""
    service = _service()
    try:
        test_results = _load_results(results)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]❌ Could not read results:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    outcome = service.save_test_results(test_results)
    if not outcome.success:
        console.print(f"[bold red]❌ Export failed:[/bold red] {escape(outcome.error or '')}")
        raise typer.Exit(code=1)

    lines = [f"Saved to: {outcome.filepath}"]
    if outcome.mirror.path:
        lines.append(f"USB copy: {outcome.mirror.path}")
    console.print(Panel("\n".join(lines), title="Export", border_style="green"))


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Bind port.")] = None,
) -> None:
    """Start the HTTP API for the kiosk panel."""
    from hwkiosk.api import server

    server.main(host=host, port=port)


if __name__ == "__main__":
    app()
