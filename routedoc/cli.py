"""CLI entry point for routedoc."""

from pathlib import Path
from typing import Optional

import click

from routedoc.config import settings


@click.group()
def main():
    """Routedoc: Petstore routes that document themselves."""
    pass


@main.command()
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the document to a file instead of stdout.")
@click.option("--indent", default=2, show_default=True, type=int, help="JSON indentation.")
def openapi(output: Optional[Path], indent: int):
    """Print the OpenAPI document aggregated from the route tree."""
    from routedoc.main import build_document, setup_logging
    from routedoc.routes import api

    setup_logging(settings.log_level)
    document = build_document(api(), settings)
    rendered = document.to_json(indent=indent)

    if output is None:
        click.echo(rendered)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered + "\n", encoding="utf-8")
    click.echo(f"Wrote {len(document.routes)} operations to {output}", err=True)


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to ROUTEDOC_HOST).")
@click.option("--port", default=None, type=int, help="Bind port (defaults to ROUTEDOC_PORT).")
@click.option("--print-openapi", is_flag=True, help="Also print the document to stdout at startup.")
def serve(host: Optional[str], port: Optional[int], print_openapi: bool):
    """Serve the Petstore API with uvicorn."""
    import uvicorn

    from routedoc.main import create_app

    config = settings.model_copy(update={"print_openapi_on_startup": print_openapi or settings.print_openapi_on_startup})
    uvicorn.run(
        create_app(config=config),
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
    )
