"""
SCKAN exporter CLI

Runs the export against the configured Stardog endpoint and prints helpers
for the schema and configuration. Status goes to stderr; only the JSON
document is written to stdout.
"""
import click
from rich.console import Console
from rich.table import Table

from sckan_export import __version__
from sckan_export.assembler import build_json_schema
from sckan_export.graph.connection import StardogClient
from sckan_export.graph.queries import QUERY_ORDER, get_template
from sckan_export.identifiers import PREFIX_IRI_MAPPING
from sckan_export.pipeline import run_export
from sckan_export.settings import get_settings, reload_settings
from sckan_export.utils import (
    QueryError,
    SchemaValidationError,
    dump_json,
    get_logger,
    setup_logging,
    write_json,
)

console = Console(stderr=True)
logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help='YAML settings file')
def main(config_path):
    """
    SCKAN exporter

    Exports SCKAN neuron connectivity, pathway segments, locations and
    labels from the NPO knowledge base as a single JSON document.
    """
    if config_path:
        reload_settings(config_path)


# ═══════════════════════════════════════════════════════════════════
# EXPORT
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output JSON file (default: stdout)')
@click.option('--indent', type=int, default=2, show_default=True, help='JSON indentation')
@click.option('--log-level', help='Override the configured log level')
def export(output, indent, log_level):
    """Export the knowledge graph as JSON"""
    cfg = get_settings()
    setup_logging(log_level or cfg.log_level, cfg.log_file)
    client = StardogClient.from_settings(cfg)

    try:
        with console.status(f"[bold green]Querying {cfg.database} at {cfg.endpoint}..."):
            result = run_export(client)
    except QueryError as e:
        console.print(f"\n[red]✗ Query '{e.query_name}' failed: {e}[/red]")
        raise SystemExit(1)
    except SchemaValidationError as e:
        console.print(f"\n[red]✗ Assembled document failed schema validation: {e}[/red]")
        raise SystemExit(1)

    logger.info("Export finished with %d rejected rows", result.rejected_rows)

    if result.diagnostics:
        table = Table(title="Skipped rows")
        table.add_column("Query", style="cyan")
        table.add_column("Row", style="magenta")
        table.add_column("Problem")
        for diag in result.diagnostics[:20]:
            table.add_row(diag.query, str(diag.row_index), diag.message)
        console.print(table)
        if len(result.diagnostics) > 20:
            console.print(f"... and {len(result.diagnostics) - 20} more")

    if output:
        write_json(result.document, output, indent=indent)
        console.print(f"\n[green]✓ Saved to {output}[/green]")
    else:
        click.echo(dump_json(result.document, indent=indent))


# ═══════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.option('--indent', type=int, default=2, show_default=True)
def schema(indent):
    """Print the JSON schema of the export document"""
    click.echo(dump_json(build_json_schema(), indent=indent))


@main.command()
def info():
    """Show connection settings, queries and the prefix table"""
    cfg = get_settings()

    table = Table(title="Connection")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Endpoint", cfg.endpoint)
    table.add_row("Database", cfg.database)
    table.add_row("User", cfg.username)
    table.add_row("Password", "set" if cfg.password else "not set")
    table.add_row("Reasoning", str(cfg.reasoning))
    console.print(table)

    queries = Table(title="Queries (execution order)")
    queries.add_column("Name", style="cyan", no_wrap=True)
    queries.add_column("Description")
    for name in QUERY_ORDER:
        queries.add_row(name, get_template(name)["description"])
    console.print(queries)

    prefixes = Table(title="Prefixes")
    prefixes.add_column("Prefix", style="cyan", no_wrap=True)
    prefixes.add_column("Namespace")
    for prefix, namespace in PREFIX_IRI_MAPPING:
        prefixes.add_row(prefix, namespace)
    console.print(prefixes)


if __name__ == '__main__':
    main()
