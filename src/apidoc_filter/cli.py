"""CLI entry point for apidoc-filter."""

import json
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from apidoc_filter.config import load_settings
from apidoc_filter.errors import FilterError
from apidoc_filter.filter.engine import DocumentFilter
from apidoc_filter.model.base import ListingsIndex, SwaggerResource
from apidoc_filter.parser.detect import JSON_SUFFIXES, YAML_SUFFIXES, detect_format
from apidoc_filter.parser.listings import build_listings, load_listings
from apidoc_filter.parser.swagger import load_document, render_document
from apidoc_filter.ui import propagate_query, redirect_for_url

KNOWN_SUFFIXES = JSON_SUFFIXES + YAML_SUFFIXES


def _load_listings(listings_path: Path | None, document) -> ListingsIndex:
    if listings_path is None:
        return build_listings(document)
    return load_listings(listings_path)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log filtering decisions to stderr.")
def main(verbose: bool):
    """apidoc-filter: narrow Swagger 2.0 documents to what a request needs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


@main.command("filter")
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout).")
@click.option("--path", "request_path", default=None, help="Exact path or path prefix to keep.")
@click.option("--tags", "request_tags", default=None, help="Comma-separated tag names to keep.")
@click.option("--listings", "listings_path", default=None, type=click.Path(exists=True, path_type=Path), help="Listings index file (derived from the document if omitted).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Settings YAML file.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
def filter_cmd(doc_path: Path, output: Path | None, request_path: str | None, request_tags: str | None,
               listings_path: Path | None, config_path: Path | None, fmt: str):
    """Filter a descriptor document by path and tags."""
    try:
        settings = load_settings(config_path)
        document = load_document(doc_path)
        listings = _load_listings(listings_path, document)
        result = DocumentFilter(settings.filter).filter(request_path, request_tags, document, listings)
    except FilterError as e:
        raise click.ClickException(str(e)) from e

    if fmt == "auto":
        target = output if output is not None and output.suffix.lower() in KNOWN_SUFFIXES else doc_path
        fmt = detect_format(target)
    text = render_document(result, fmt)

    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Kept {len(result.paths)} paths, {len(result.definitions)} definitions. Saved to {output}", err=True)


@main.command("redirect-url")
@click.argument("url")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Settings YAML file.")
def redirect_url(url: str, config_path: Path | None):
    """Print the documentation UI location a request URL redirects to."""
    try:
        settings = load_settings(config_path)
    except FilterError as e:
        raise click.ClickException(str(e)) from e

    location = redirect_for_url(url, settings.ui)
    if location is None:
        click.echo(f"No redirect: '{settings.ui.flag_param}' is not set", err=True)
        sys.exit(1)
    click.echo(location)


@main.command()
@click.argument("resources_path", type=click.Path(exists=True, path_type=Path))
@click.option("--query", required=True, help="Query string to forward to every resource.")
def resources(resources_path: Path, query: str):
    """Forward a query string to each swagger resource location."""
    try:
        data = yaml.safe_load(resources_path.read_text(encoding="utf-8")) or []
    except yaml.YAMLError as e:
        raise click.ClickException(f"{resources_path} is not valid JSON or YAML: {e}") from e
    if not isinstance(data, list):
        raise click.ClickException("Resources file must contain a list")
    try:
        items = [SwaggerResource.model_validate(r) for r in data]
    except ValidationError as e:
        raise click.ClickException(f"Malformed resources file: {e}") from e
    result = propagate_query(items, query)
    click.echo(json.dumps([r.model_dump(by_alias=True) for r in result], indent=2))
