"""Command-line interface for fieldtoc."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .backends import HtmlBackend, MarkdownBackend
from .exceptions import FieldTocError
from .formatter import TableOfContentsFormatter
from .generator import TableOfContentsGenerator
from .logger import setup_logger
from .models import ContentItem
from .parser import load_content
from .settings import FieldTocConfig
from .store import ContentStore

app = typer.Typer(
    name="fieldtoc",
    help="Build tables of contents from the headings of nested content entities",
    add_completion=False,
)


class OutputFormat(Enum):
    """Output formats for the outline command."""

    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show headings, 2=show fields, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: fieldtoc_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for fieldtoc commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _load(file: Path) -> tuple[ContentStore, FieldTocConfig]:
    try:
        return load_content(file), context.get_config(file)
    except FieldTocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _get_entity(store: ContentStore, key: str) -> ContentItem:
    entity = store.load(key)
    if entity is None:
        typer.echo(f"Error: Entity '{key}' not found", err=True)
        raise typer.Exit(1)
    return entity


def _write(text: str, output: Path | None, what: str) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"{what} written to {output}")
    else:
        typer.echo(text)


@app.command()
def outline(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="Path to the content YAML file")],
    *,
    entity: Annotated[str, typer.Option("--entity", "-e", help="Root entity as type:id")],
    format: Annotated[  # noqa: A002 - 'format' is appropriate name for CLI option
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.HTML,
    title: Annotated[
        str | None, typer.Option("--title", "-t", help="Title shown above the outline")
    ] = None,
    relative: Annotated[
        bool | None,
        typer.Option(
            "--relative/--absolute",
            help="Link anchors within the page or on the entity URL (default: from config)",
        ),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Generate the table of contents of an entity."""
    store, config = _load(file)
    root = _get_entity(store, entity)

    settings = config.generator
    if relative is not None:
        settings = settings.model_copy(update={"is_relative": relative})

    generator = TableOfContentsGenerator(store)
    try:
        toc = generator.generate(root, settings)
    except FieldTocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if format == OutputFormat.JSON:
        text = json.dumps(toc.to_dict(), indent=2)
    else:
        backend = HtmlBackend() if format == OutputFormat.HTML else MarkdownBackend()
        text = backend.render(toc, title=title, base_url=store.entity_url(root))

    _write(text, output, "Table of contents")


@app.command()
def anchors(
    file: Annotated[Path, typer.Argument(help="Path to the content YAML file")],
    *,
    entity: Annotated[str, typer.Option("--entity", "-e", help="Root entity as type:id")],
) -> None:
    """Show field content rewritten with heading anchors."""
    store, config = _load(file)
    root = _get_entity(store, entity)

    try:
        toc = TableOfContentsGenerator(store).generate(root, config.generator)
    except FieldTocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    rewrites = toc.get_rewrites()
    if not rewrites:
        typer.echo("No headings found")
        return

    for rewrite in rewrites:
        typer.echo(f"{rewrite.entity_key} {rewrite.field_name}[{rewrite.delta}]")
        typer.echo(rewrite.content)
        typer.echo("")


@app.command("render-field")
def render_field(
    file: Annotated[Path, typer.Argument(help="Path to the content YAML file")],
    *,
    entity: Annotated[
        str, typer.Option("--entity", "-e", help="Entity holding the field, as type:id")
    ],
    field: Annotated[str, typer.Option("--field", help="Table of contents field name")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Render a table of contents field the way a page would show it."""
    store, config = _load(file)
    host = _get_entity(store, entity)

    formatter = TableOfContentsFormatter(TableOfContentsGenerator(store), config.formatter)
    try:
        elements = formatter.view_field(host, field)
    except FieldTocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if not elements:
        typer.echo(f"Error: Field '{field}' on {entity} has no values", err=True)
        raise typer.Exit(1)

    _write("\n".join(elements), output, "Field output")


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    main()
