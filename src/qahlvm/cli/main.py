# src/qahlvm/cli/main.py
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table

from .. import __version__
from ..config import Config
from ..errors import QahlError
from ..executor import Executor
from ..loader import dump, load_file
from ..memory import GcApproach

console = Console()


def _setup_logging(level):
    logger = logging.getLogger("qahlvm")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name="qahl")
def cli():
    """qahl - tree-walking executor for JSON program trees"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--gc', 'gc_name', type=click.Choice([a.value for a in GcApproach]),
              default=None, help="Collection approach applied after the run")
@click.option('--debug', is_flag=True, help="Trace every statement")
@click.option('--strict', is_flag=True, help="Fail on use-count underflow")
@click.option('--no-builtins', is_flag=True, help="Start with an empty function registry")
def run(file, gc_name, debug, strict, no_builtins):
    """Run a program tree stored as JSON"""
    config = Config.from_env()
    if debug:
        config.log_level = "debug"
    if gc_name:
        config.gc_approach = GcApproach.parse(gc_name)
    if strict:
        config.strict_counts = True
    # the end-of-run report is printed as a table below
    config.report_leaks = False
    _setup_logging(config.level)

    try:
        program = load_file(file)
        if no_builtins:
            executor = Executor(config=config)
        else:
            executor = Executor.with_builtins(config=config)
        created = executor.run(program)
    except QahlError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    if created:
        console.print(f"\n[bold green]New globals:[/bold green] {', '.join(sorted(created))}")

    leaks = executor.heap.leaks()
    if leaks:
        table = Table(title="Objects still allocated")
        table.add_column("Address", style="cyan")
        table.add_column("Uses", style="yellow")
        table.add_column("Fields", style="green")
        for address, obj in leaks:
            table.add_row(f"{address:#08x}", str(executor.heap.use_count(address)), escape(repr(obj)))
        console.print(table)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def check(file):
    """Check that a JSON program tree loads"""
    try:
        program = load_file(file)
    except QahlError as e:
        console.print(f"[bold red]Invalid program:[/bold red] {escape(str(e))}")
        sys.exit(1)
    console.print(f"[bold green]OK:[/bold green] {len(program.statements)} statements")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def ast(file):
    """Show the loaded program tree"""
    try:
        program = load_file(file)
    except QahlError as e:
        console.print(f"[bold red]Invalid program:[/bold red] {escape(str(e))}")
        sys.exit(1)

    console.print(Panel.fit(
        Pretty(dump(program)),
        title="[bold blue]Program Tree[/bold blue]",
        border_style="blue"
    ))


if __name__ == "__main__":
    cli()
