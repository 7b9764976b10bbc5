#!/usr/bin/env python3
"""Templator CLI - render provisioning templates from the command line."""
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from templator.cli_support import (
    handle_cli_error,
    load_context,
    log_and_print,
    print_success,
    read_template,
    setup_file_logging,
)
from templator.core.config import get_config
from templator.core.data import format_markdown
from templator.core.errors import TemplatorError
from templator.core.logger import get_logger
from templator.core.templator import Templator

app = typer.Typer(
    name="templator",
    help="""Templator - render provisioning templates against node data

Quick start:
  templator render dhcp.conf.j2 --context node01.yml     # Print rendered text
  templator render cluster.yml.j2 --context c.yml --yaml # Parse result as YAML
  templator render notes.md.j2 --markdown                # Format for terminal
  templator render kickstart.ks.j2 --edit -o ks.cfg      # Refine in $EDITOR
""",
    add_completion=False,
)

console = Console(stderr=True)
logger = get_logger(__name__)


@app.command()
def render(
    template: str = typer.Argument(..., help="Template file ('-' reads stdin)"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="YAML mapping to render against"),
    as_yaml: bool = typer.Option(False, "--yaml", help="Parse the result as YAML and print it back"),
    as_markdown: bool = typer.Option(False, "--markdown", "-m", help="Format the result as Markdown"),
    edit: bool = typer.Option(False, "--edit", "-e", help="Open the rendered text in an editor first"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result to a file"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and tracebacks"),
):
    """Render a template against a context file.

    Without --context every name in the template renders as absent.

    Examples:
        templator render power-on.sh.j2 --context node01.yml
        templator render cluster.yml.j2 --context cluster.yml --edit --yaml
    """
    if as_yaml and as_markdown:
        console.print("[red]Error:[/red] --yaml and --markdown are mutually exclusive")
        raise typer.Exit(2)

    setup_file_logging(log_file=log_file or get_config().log_file, verbose=verbose)

    try:
        text = read_template(template)
        templator = Templator(load_context(context))

        if as_yaml:
            data = templator.edit_yaml(text) if edit else templator.yaml(text)
            result = yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
        elif as_markdown:
            rendered = templator.edit(text) if edit else templator.render(text)
            config = get_config()
            result = format_markdown(
                rendered, width=config.markdown_width, color=config.markdown_color
            )
        else:
            result = templator.edit(text) if edit else templator.render(text)
    except (TemplatorError, FileNotFoundError) as e:
        logger.debug(f"Render of {template} failed: {e}")
        handle_cli_error(e, console, verbose=verbose)

    if output:
        output.write_text(result)
        log_and_print(console, logger, f"Wrote {output}")
    else:
        typer.echo(result, nl=False)


@app.command()
def check(
    template: str = typer.Argument(..., help="Template file ('-' reads stdin)"),
):
    """Compile a template and report syntax errors without rendering it."""
    try:
        Templator().compile(read_template(template))
    except (TemplatorError, FileNotFoundError) as e:
        handle_cli_error(e, console)

    print_success(console, f"{template} is a valid template")


if __name__ == "__main__":
    app()
