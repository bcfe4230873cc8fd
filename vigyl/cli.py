"""
VIGYL CLI - prospect scope and discovery

Examples:
    # Classify a prospect file for a viewer in Georgia
    vigyl classify prospects.json --region GA --radius 100

    # Only local prospects, as JSON
    vigyl classify prospects.json --region Georgia --scope local -f json | jq '.'

    # Browse the taxonomy
    vigyl taxonomy sectors
    vigyl taxonomy search qsr
    vigyl taxonomy untapped --tracked "Healthcare IT" --tracked "FinTech"

    # Generate more prospects for a vertical
    vigyl expand fast-casual-qsr --scope national --region GA --records prospects.json

    # Check configuration
    vigyl check
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .api import classify_prospects, expand_prospects, load_records
from .config import Settings, load_config
from .expansion import ExpansionError, GeneratorError
from .export import format_output
from .models import EXPANSION_SCOPES, ClassifiedProspect, Scope, UserLocale, radius_band
from .scope import scope_counts
from .taxonomy import IndustryTaxonomyIndex

# Progress to stderr, data to stdout
console = Console(stderr=True)
logger = logging.getLogger(__name__)

SCOPE_COLORS = {
    Scope.LOCAL: "green",
    Scope.NATIONAL: "yellow",
    Scope.INTERNATIONAL: "magenta",
}


def setup_logging(verbose: bool, quiet: bool, debug: bool) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def display_summary(classified: list[ClassifiedProspect], locale: UserLocale) -> None:
    """Display a table of classified prospects with scope counts."""
    table = Table(title="Prospects by Scope", show_header=True, header_style="bold magenta")

    table.add_column("Company", style="cyan", max_width=30)
    table.add_column("Location", max_width=30)
    table.add_column("Industry", max_width=25)
    table.add_column("Scope", justify="center")
    table.add_column("Source", justify="center")

    for item in classified:
        record = item.record
        location = ", ".join(
            p for p in (record.location.city, record.location.region, record.location.country) if p
        ) or "-"
        color = SCOPE_COLORS[item.scope]

        table.add_row(
            record.company_name[:30],
            location[:30],
            (record.industry_name or record.industry_id or "-")[:25],
            f"[{color}]{item.scope.value}[/{color}]",
            "expanded" if record.is_expanded else "core",
        )

    console.print(table)

    counts = scope_counts(classified)
    console.print(
        f"\n[dim]Viewer: {locale.region or '-'}, {locale.country or '-'} "
        f"(radius {locale.local_radius} mi, {radius_band(locale.local_radius).value})[/dim]"
    )
    console.print(
        f"[green]{counts['local']} local[/green] · "
        f"[yellow]{counts['national']} national[/yellow] · "
        f"[magenta]{counts['international']} international[/magenta]"
    )


def _emit(text: str, output: Optional[str], quiet: bool) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        if not quiet:
            console.print(f"[green]Saved to {output}[/green]")
    else:
        click.echo(text)


# ============================================================================
# CLI Group
# ============================================================================

@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version="0.3.0")
def cli(ctx):
    """Prospect scope classification and taxonomy-driven discovery."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============================================================================
# Classify Command
# ============================================================================

@cli.command()
@click.argument("records_file", type=click.Path(exists=True))
@click.option("--country", default="US", help="Viewer country")
@click.option("--region", default="", help="Viewer state/region (name or code)")
@click.option("--city", default="", help="Viewer city")
@click.option("--radius", type=click.IntRange(10, 200), default=None,
              help="Local radius in miles (10-200)")
@click.option("--scope", type=click.Choice([s.value for s in Scope]), default=None,
              help="Only show one scope")
@click.option("-o", "--output", type=click.Path(), help="Output file (default: stdout)")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["table", "csv", "json", "jsonl", "tsv"]),
              default="table", help="Output format")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress, only emit data")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def classify(
    records_file: str,
    country: str,
    region: str,
    city: str,
    radius: Optional[int],
    scope: Optional[str],
    output: Optional[str],
    output_format: str,
    config: Optional[str],
    quiet: bool,
    verbose: bool,
    debug: bool,
):
    """
    Label prospects as local, national or international.

    Examples:

        vigyl classify prospects.json --region GA --radius 100

        vigyl classify prospects.json --region Georgia -f csv -o scoped.csv
    """
    setup_logging(verbose, quiet, debug)
    settings = load_config(config) if config else Settings()

    try:
        records = load_records(records_file)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Could not read {records_file}:[/red] {e}")
        sys.exit(1)

    classified = classify_prospects(
        records,
        country=country,
        region=region,
        city=city,
        local_radius=radius,
        scope=scope,
        config_path=config,
    )
    locale = UserLocale(country, region, city, settings.clamp_radius(radius))

    if output_format == "table":
        if classified:
            display_summary(classified, locale)
        else:
            console.print("[yellow]No prospects to show[/yellow]")
        return

    _emit(format_output(classified, output_format), output, quiet)


# ============================================================================
# Taxonomy Commands
# ============================================================================

@cli.group()
@click.option("--catalog", type=click.Path(exists=True), default=None,
              help="Alternative taxonomy YAML")
@click.pass_context
def taxonomy(ctx, catalog: Optional[str]):
    """Browse the industry taxonomy."""
    ctx.ensure_object(dict)
    ctx.obj["index"] = (
        IndustryTaxonomyIndex.from_file(catalog) if catalog else IndustryTaxonomyIndex()
    )


def _print_verticals(verticals, output_format: str, title: str) -> None:
    if output_format == "json":
        click.echo(json.dumps([v.to_dict() for v in verticals], indent=2))
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Vertical", style="cyan", max_width=40)
    table.add_column("Sector", max_width=30)
    table.add_column("Tier", justify="center")
    table.add_column("Examples", max_width=40)

    for v in verticals:
        tier_color = {"high": "green", "medium": "yellow", "low": "red"}[v.opportunity_tier.value]
        table.add_row(
            v.id,
            v.name,
            v.sector,
            f"[{tier_color}]{v.opportunity_tier.value}[/{tier_color}]",
            ", ".join(v.example_entities[:3]),
        )

    console.print(table)
    console.print(f"\n[dim]{len(verticals)} verticals[/dim]")


@taxonomy.command()
@click.pass_context
def sectors(ctx):
    """List sectors with vertical and company counts."""
    index: IndustryTaxonomyIndex = ctx.obj["index"]

    table = Table(title="Industry Sectors", show_header=True, header_style="bold magenta")
    table.add_column("", justify="center")
    table.add_column("ID", style="dim")
    table.add_column("Sector", style="cyan")
    table.add_column("Verticals", justify="right")
    table.add_column("Companies", justify="right")

    for s in index.sector_summary():
        table.add_row(s["icon"], s["id"], s["name"], str(s["vertical_count"]), str(s["company_count"]))

    console.print(table)


@taxonomy.command("search")
@click.argument("query")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json"]),
              default="table", help="Output format")
@click.pass_context
def search_cmd(ctx, query: str, output_format: str):
    """Search verticals by name, sector, keyword or example company."""
    index: IndustryTaxonomyIndex = ctx.obj["index"]
    _print_verticals(index.search(query), output_format, f"Verticals matching '{query}'")


@taxonomy.command()
@click.option("-t", "--tracked", multiple=True, help="Tracked industry name (repeatable)")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json"]),
              default="table", help="Output format")
@click.pass_context
def untapped(ctx, tracked: tuple, output_format: str):
    """List verticals not covered by the tracked industries."""
    index: IndustryTaxonomyIndex = ctx.obj["index"]
    _print_verticals(index.untapped(list(tracked)), output_format, "Untapped Verticals")


@taxonomy.command()
@click.argument("vertical_id")
@click.pass_context
def show(ctx, vertical_id: str):
    """Show one vertical."""
    index: IndustryTaxonomyIndex = ctx.obj["index"]
    vertical = index.get(vertical_id)
    if vertical is None:
        console.print(f"[red]Unknown vertical:[/red] {vertical_id}")
        sys.exit(1)

    console.print(Panel.fit(
        f"[bold]{vertical.name}[/bold]  [dim]({vertical.id})[/dim]\n"
        f"Sector: {vertical.sector}\n"
        f"Opportunity: {vertical.opportunity_tier.value}\n"
        f"Keywords: {', '.join(vertical.keywords)}\n"
        f"Examples: {', '.join(vertical.example_entities)}",
        border_style="blue",
    ))


# ============================================================================
# Expand Command
# ============================================================================

@cli.command()
@click.argument("vertical_id")
@click.option("--scope", type=click.Choice(list(EXPANSION_SCOPES)), default="all",
              help="Geographic scope to generate")
@click.option("--country", default="US", help="Viewer country")
@click.option("--region", default="", help="Viewer state/region")
@click.option("--city", default="", help="Viewer city")
@click.option("--radius", type=click.IntRange(10, 200), default=None, help="Local radius in miles")
@click.option("--records", "records_file", type=click.Path(exists=True),
              help="Existing prospects JSON (avoids duplicates, merged into output)")
@click.option("-o", "--output", type=click.Path(), help="Output file (default: stdout)")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["table", "csv", "json", "jsonl"]),
              default="json", help="Output format")
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress, only emit data")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def expand(
    vertical_id: str,
    scope: str,
    country: str,
    region: str,
    city: str,
    radius: Optional[int],
    records_file: Optional[str],
    output: Optional[str],
    output_format: str,
    config: Optional[str],
    quiet: bool,
    verbose: bool,
    debug: bool,
):
    """
    Generate new prospects for a vertical and merge them.

    Examples:

        vigyl expand fast-casual-qsr --scope local --region GA

        vigyl expand cybersecurity --records prospects.json -o merged.json
    """
    setup_logging(verbose, quiet, debug)
    settings = load_config(config) if config else Settings()
    locale = UserLocale(country, region, city, settings.clamp_radius(radius))
    try:
        records = load_records(records_file) if records_file else []
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Could not read {records_file}:[/red] {e}")
        sys.exit(1)

    try:
        if quiet:
            classified = expand_prospects(vertical_id, locale, scope, records, config)
        else:
            with console.status(f"[bold blue]Expanding {vertical_id} ({scope})..."):
                classified = expand_prospects(vertical_id, locale, scope, records, config)
    except KeyError:
        console.print(f"[red]Unknown vertical:[/red] {vertical_id}")
        sys.exit(1)
    except GeneratorError as e:
        console.print(f"[red]Generator error:[/red] {e}")
        sys.exit(1)
    except ExpansionError as e:
        console.print(f"[red]Expansion failed:[/red] {e}")
        sys.exit(1)

    if not quiet:
        added = sum(1 for c in classified if c.record.expanded_from == vertical_id)
        console.print(f"[green]Added {added} prospects ({len(classified)} total)[/green]")

    if output_format == "table":
        display_summary(classified, locale)
        return

    _emit(format_output(classified, output_format), output, quiet)


# ============================================================================
# Check Command
# ============================================================================

@cli.command()
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
def check(config: Optional[str]):
    """Check configuration and catalog availability."""
    settings = load_config(config)

    if settings.generator_api_key:
        click.echo(f"✓ Generator key: {settings.generator_api_key[:8]}...")
    else:
        click.echo("✗ Generator key: not set (VIGYL_GENERATOR_KEY)")

    click.echo(f"  Generator: {settings.generator_url} ({settings.generator_model})")
    click.echo(f"  Home country: {settings.home_country}")
    click.echo(f"  Default radius: {settings.default_local_radius} mi")

    try:
        index = IndustryTaxonomyIndex.from_file(settings.taxonomy_path)
        click.echo(f"✓ Taxonomy: {len(index.sectors)} sectors, {len(index)} verticals")
    except (OSError, ValueError, KeyError) as e:
        click.echo(f"✗ Taxonomy: {e}")

    classifier = settings.build_classifier()
    if classifier.adjacency.is_symmetric():
        click.echo(f"✓ Adjacency: {len(classifier.adjacency)} regions, symmetric")
    else:
        click.echo(f"✗ Adjacency: asymmetric pairs {classifier.adjacency.asymmetries()}")


# ============================================================================
# Version Command
# ============================================================================

@cli.command()
def version():
    """Show version info."""
    from vigyl import __version__
    click.echo(f"vigyl {__version__}")


# ============================================================================
# Web Command
# ============================================================================

@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--port", default=8000, help="Port to bind to.")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development.")
def web(host: str, port: int, reload: bool) -> None:
    """Start the JSON API."""
    import uvicorn

    console.print(
        Panel.fit(
            f"[bold]VIGYL Prospect API[/bold]\n"
            f"Running at: [cyan]http://{host}:{port}/docs[/cyan]",
            border_style="blue",
        )
    )
    console.print("Press Ctrl+C to stop\n")

    uvicorn.run(
        "vigyl.web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def main():
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    cli()
