"""Main CLI entry point."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler

from pyssr import __version__
from pyssr.compiler.anode import load_anode_file
from pyssr.compiler.codegen.render import RenderCodegen
from pyssr.compiler.exceptions import PySSRCompileError
from pyssr.config import CompilerOptions
from pyssr.runtime.context import Context
from pyssr.runtime.loader import TemplateLoader

console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'pyssr --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
        force=True,
    )


def _load_json(path: Path, what: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid {what} JSON in {path}: {e}")


@click.group(
    help=f"""
[bold white on cyan] pyssr [/] [bold cyan]v{__version__}[/] Server-side rendering for template nodes.

Run [bold cyan]pyssr compile FILE[/] to print the generated render function.
Run [bold cyan]pyssr render FILE --data DATA[/] to render HTML.

[dim]FILE is the JSON serialization of a parsed template node.[/dim]
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    _setup_logging(verbose)


@cli.command("compile")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--function-name",
    default="render",
    help="Name of the generated render function.",
)
@click.option(
    "--out",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the module to a file instead of stdout.",
)
def compile_cmd(file: Path, function_name: str, out: Optional[Path]) -> None:
    """Compile a template node into a Python render module."""
    options = CompilerOptions(function_name=function_name)
    try:
        source = RenderCodegen(options).generate_source(load_anode_file(file))
    except PySSRCompileError as e:
        raise click.ClickException(e.format())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid template JSON in {file}: {e}")

    if out:
        out.write_text(source, encoding="utf-8")
        console.print(f"✅ Wrote [cyan]{out}[/]")
    else:
        click.echo(source, nl=False)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--data",
    "data_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the template data.",
)
@click.option("--tag-name", default=None, help="Tag name for dynamic-tag roots.")
def render(file: Path, data_file: Optional[Path], tag_name: Optional[str]) -> None:
    """Render a template node to HTML."""
    data: Dict[str, Any] = {}
    if data_file:
        data = _load_json(data_file, "data")
        if not isinstance(data, dict):
            raise click.ClickException("Template data must be a JSON object")

    loader = TemplateLoader()
    try:
        render_fn = loader.load_file(file)
    except PySSRCompileError as e:
        raise click.ClickException(e.format())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid template JSON in {file}: {e}")

    click.echo(render_fn(Context(data), tag_name))


if __name__ == "__main__":
    cli()
