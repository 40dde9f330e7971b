"""
Command-line interface for gomodkit.

The commands work on output the caller already captured from the Go
toolchain, and on go.sum files.
"""

import sys
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from gomodkit.config import set_verbose
from gomodkit.console import console, debug
from gomodkit.errors import GomodkitError
from gomodkit.graph import output_to_set, parse_module_ref
from gomodkit.scanner import default_scanner
from gomodkit.sumfile import (
    fetch_modules_from_go_sum,
    modules_to_set,
    print_go_sum_content,
    sum_file_exists,
)

# --- Typer App ---
app = typer.Typer(help="Interpret Go toolchain output and inspect go.sum files.")


@app.callback()
def main(
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable debug output. If not specified, uses config file default.",
    ),
):
    """Interpret Go toolchain output and inspect go.sum files."""
    if verbose is not None:
        set_verbose(verbose)


def _print_plain(text: str, end: str = "\n") -> None:
    """Write tool output verbatim, bypassing rich rendering."""
    console.file.write(text + end)
    console.file.flush()


def _read_text(path: Path | None) -> str:
    # Bytes in, so "\r\n" is not translated by universal newlines
    if path is None:
        return sys.stdin.buffer.read().decode("utf-8", errors="replace")
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(code=1)
    return path.read_bytes().decode("utf-8", errors="replace")


@app.command()
def scan(
    file: Path | None = typer.Argument(
        None,
        help="File with captured go output. Reads stdin if omitted.",
    ),
):
    """
    Mask credentials in go output and fail on known error lines.

    Example:
        go mod graph 2>&1 | gomodkit scan
    """
    text = _read_text(file)
    scanner = default_scanner()
    try:
        result = scanner.process(text)
    except GomodkitError as e:
        console.print(
            f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True
        )
        raise typer.Exit(code=1) from None
    _print_plain(result, end="")


@app.command("sum-modules")
def sum_modules(
    root_dir: Path = typer.Argument(
        Path("."),
        help="Go module root containing go.sum.",
    ),
    count: bool = typer.Option(
        False,
        "--count",
        help="Print only the number of modules.",
    ),
):
    """List the module@version entries declared in go.sum."""
    if not root_dir.is_dir():
        console.print(f"[red]Error: Directory not found: {root_dir}[/red]")
        raise typer.Exit(code=1)

    if not sum_file_exists(root_dir):
        console.print(f"[yellow]No go.sum found in {root_dir}[/yellow]")
        raise typer.Exit(code=0)

    try:
        print_go_sum_content(root_dir)
        modules = sorted(modules_to_set(fetch_modules_from_go_sum(root_dir)))
    except GomodkitError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from None

    if count:
        console.print(str(len(modules)), highlight=False)
        return
    for module in modules:
        _print_plain(module)


@app.command("graph-deps")
def graph_deps(
    stdout_file: Path = typer.Argument(
        ...,
        help="File with the stdout of go mod graph.",
    ),
    stderr_file: Path | None = typer.Argument(
        None,
        help="File with the stderr of go mod graph.",
    ),
    table: bool = typer.Option(
        False,
        "--table",
        help="Render the dependencies as a table of module and version.",
    ),
):
    """Print the dependencies found in go mod graph output."""
    output = _read_text(stdout_file)
    error_output = _read_text(stderr_file) if stderr_file is not None else ""

    deps = sorted(output_to_set(output, error_output))
    debug(f"Found {len(deps)} dependencies")

    if not table:
        for dep in deps:
            _print_plain(dep)
        return

    dep_table = Table(show_header=True, header_style="bold magenta")
    dep_table.add_column("Module", style="cyan")
    dep_table.add_column("Version")
    for dep in deps:
        name, version = parse_module_ref(dep)
        dep_table.add_row(name, version)
    console.print(dep_table)


if __name__ == "__main__":
    app()
