"""Typer CLI: init, parse, tokens, check commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pipeforge import __version__

app = typer.Typer(
    name="pipeforge",
    help="Compile shell input lines into command descriptors.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pipeforge v{__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _parse_overrides(assignments: list[str] | None) -> dict[str, str]:
    from pipeforge.utils import parse_assignment

    overrides: dict[str, str] = {}
    for text in assignments or []:
        parsed = parse_assignment(text)
        if parsed is None:
            console.print(f"[red]Invalid assignment '{escape(text)}', expected NAME=VALUE[/red]")
            raise typer.Exit(2)
        name, value = parsed
        overrides[name] = value
    return overrides


def _load_environment(project_dir: Path, assignments: list[str] | None):
    from pipeforge.config import build_environment, load_config, validate_config

    config = load_config(project_dir)
    errors = validate_config(config)
    if errors:
        for e in errors:
            console.print(f"[red]Config error: {e}[/red]")
        raise typer.Exit(1)
    return config, build_environment(config, _parse_overrides(assignments))


def _format_redirect(redirect) -> str:
    if redirect is None:
        return ""
    return escape(f"{'>>' if redirect.append else '>'} {redirect.path}")


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """pipeforge - shell input-line compiler."""


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Create .pipeforge/config.json in the project directory."""
    from pipeforge.config import CONFIG_DIR, CONFIG_FILE, DEFAULT_CONFIG, save_config
    from pipeforge.utils import deep_merge, load_json

    config_path = project_dir / CONFIG_DIR / CONFIG_FILE
    if config_path.exists() and not force:
        config = deep_merge(DEFAULT_CONFIG, load_json(config_path))
        console.print("  [yellow]Merged with existing config[/yellow]")
    else:
        config = dict(DEFAULT_CONFIG)
        console.print("  [green]Created default config[/green]")

    save_config(config, project_dir)
    console.print(f"  Config: [cyan]{config_path}[/cyan]")


@app.command()
def parse(
    line: str = typer.Argument(..., help="Input line to compile"),
    assignments: list[str] = typer.Option(None, "--set", "-s", help="Define a variable (NAME=VALUE)"),
    as_json: bool = typer.Option(False, "--json", help="Print descriptors as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each processing stage"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Compile one line and show the resulting command descriptors."""
    from pipeforge.errors import CliError
    from pipeforge.processor import process

    _setup_logging(verbose)
    config, env = _load_environment(project_dir, assignments)

    try:
        commands = process(line, env)
    except CliError as exc:
        console.print(f"[red]parse error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if as_json or config.get("output") == "json":
        typer.echo(json.dumps([c.to_dict() for c in commands], indent=2))
        return

    table = Table(title="Pipeline", show_lines=True)
    table.add_column("#", width=3)
    table.add_column("Name", style="bold")
    table.add_column("Args")
    table.add_column("Stdin")
    table.add_column("Stdout")
    table.add_column("Stderr")
    for idx, cmd in enumerate(commands, 1):
        table.add_row(
            str(idx),
            escape(cmd.name),
            escape(" ".join(repr(a) for a in cmd.args)),
            escape(cmd.stdin or ""),
            _format_redirect(cmd.stdout),
            _format_redirect(cmd.stderr),
        )
    console.print(table)
    console.print(f"[bold]{len(commands)}[/bold] command(s)")


@app.command()
def tokens(
    line: str = typer.Argument(..., help="Input line to inspect"),
    assignments: list[str] = typer.Option(None, "--set", "-s", help="Define a variable (NAME=VALUE)"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Show every processing stage for one line."""
    from pipeforge.errors import QuoteError
    from pipeforge.expander import expand
    from pipeforge.quoting import classify
    from pipeforge.splitter import split_on_pipes
    from pipeforge.tokenizer import tokenize

    _, env = _load_environment(project_dir, assignments)

    try:
        raw = tokenize(line)
    except QuoteError as exc:
        console.print(f"[red]parse error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    for idx, segment in enumerate(split_on_pipes(raw), 1):
        classified = classify(segment)
        pieces = expand(env, classified)
        table = Table(title=f"Segment {idx}")
        table.add_column("Raw")
        table.add_column("Mode", width=6)
        table.add_column("Value")
        table.add_column("Expanded")
        for raw_token, token, piece in zip(segment, classified, pieces):
            table.add_row(escape(raw_token), token.mode.value, escape(token.value), escape(piece))
        console.print(table)


@app.command()
def check(
    cases_file: Path = typer.Argument(None, help="YAML case file (default: built-in suite)"),
    case_id: str = typer.Option(None, "--case", "-c", help="Run a single case"),
    verbose: bool = typer.Option(False, "--verbose", help="Show failure details"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Run a case suite and report which lines parse as expected."""
    from pipeforge.cases import run_cases
    from pipeforge.config import load_config

    console.print(Panel("[bold]pipeforge check[/bold]", style="blue"))

    if cases_file is None:
        configured = load_config(project_dir).get("cases_file")
        if configured:
            cases_file = project_dir / configured

    results = run_cases(cases_file, case_filter=case_id)
    if not results:
        console.print("[red]No cases found[/red]")
        raise typer.Exit(1)

    table = Table(title="Case Results", show_lines=True)
    table.add_column("Status", style="bold", width=6)
    table.add_column("ID", width=12)
    table.add_column("Name", width=36)
    table.add_column("Line")

    passed = 0
    for r in results:
        if r.passed:
            passed += 1
            status = "[green]PASS[/green]"
        else:
            status = "[red]FAIL[/red]"
        table.add_row(status, escape(r.id), escape(r.name), escape(r.line))
        if verbose and not r.passed:
            console.print(f"    [dim]{escape(r.id)}: {escape(r.reason)}[/dim]")

    console.print(table)
    failed = len(results) - passed
    console.print(
        f"\n[bold]Results:[/bold] [green]{passed} passed[/green], "
        f"[red]{failed} failed[/red] / {len(results)} total"
    )
    if failed:
        raise typer.Exit(1)
