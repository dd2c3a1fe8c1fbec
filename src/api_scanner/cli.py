"""CLI entry point for api-scanner."""

import logging
from pathlib import Path

import click

from api_scanner.config import DEFAULT_CONFIG_PATH, ScannerConfig, load_config, save_config
from api_scanner.errors import ScanError, ScanPathNotFoundError
from api_scanner.formatter.dispatch import DEFAULT_OUTPUTS, FORMATS, write_documentation
from api_scanner.parser.base import DocumentationInfo
from api_scanner.parser.locator import DEFAULT_IGNORE
from api_scanner.scanner import DEFAULT_PATH, ScanOptions, scan


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _build_options(path: str, config: ScannerConfig, workers: int) -> ScanOptions:
    info = DocumentationInfo()
    overrides = {
        "title": config.title,
        "version": config.version,
        "description": config.description,
        "base_url": config.base_url,
        "authentication": config.authentication,
    }
    info = info.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    login = config.authentication.endpoint if config.authentication else None
    return ScanOptions(
        root_path=Path(path),
        ignore=config.ignore if config.ignore is not None else list(DEFAULT_IGNORE),
        info=info,
        login_endpoint=login,
        workers=workers,
    )


def _run_scan(path: str, output: str, fmt: str, config: ScannerConfig, workers: int, verbose: bool) -> None:
    if verbose:
        click.echo("Configuration:")
        click.echo(f"  Path: {path}")
        click.echo(f"  Output: {output}")
        click.echo(f"  Format: {fmt}")

    try:
        doc = scan(_build_options(path, config, workers))
    except ScanPathNotFoundError as e:
        raise click.ClickException(str(e)) from e
    except ScanError as e:
        raise click.ClickException(f"Failed to generate documentation: {e}") from e

    click.echo(f"Found {doc.total_endpoints} endpoints.")
    written = write_documentation(doc, fmt, Path(output))

    if fmt == "json-folder":
        click.echo(f"Documentation saved to {output} ({len(written)} files)")
    else:
        size_kb = written[0].stat().st_size / 1024
        click.echo(f"Documentation saved to {written[0].resolve()}")
        click.echo(f"Size: {size_kb:.2f} KB")


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context):
    """API Scanner — generate API documentation from Next.js route handlers."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(scan_cmd)


@main.command("scan")
@click.option("-p", "--path", default=None, help="Path to scan for API routes (default: src/app/api).")
@click.option("-o", "--output", default=None, help="Output file path (a directory for json-folder).")
@click.option("-f", "--format", "fmt", default=None, type=click.Choice(FORMATS), help="Output format.")
@click.option("-c", "--config", "config_path", default=str(DEFAULT_CONFIG_PATH), type=click.Path(path_type=Path), help="Configuration file path.")
@click.option("-w", "--workers", default=1, type=click.IntRange(min=1), help="Parallel file workers.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose output.")
def scan_cmd(path: str | None, output: str | None, fmt: str | None, config_path: Path, workers: int, verbose: bool):
    """Scan API routes and write documentation."""
    config = load_config(config_path)
    verbose = verbose or config.verbose
    _setup_logging(verbose)

    fmt = fmt or config.format or "json"
    path = path or config.path or str(DEFAULT_PATH)
    # a configured output belongs to the configured format
    configured_output = config.output if fmt == (config.format or "json") else None
    output = output or configured_output or DEFAULT_OUTPUTS[fmt]

    click.echo(f"Scanning API routes in {path}...")
    _run_scan(path, output, fmt, config, workers, verbose)


@main.command()
@click.option("-c", "--config", "config_path", default=str(DEFAULT_CONFIG_PATH), type=click.Path(path_type=Path), help="Where to save the configuration.")
def init(config_path: Path):
    """Interactive setup wizard."""
    click.echo("API Scanner - Interactive Setup Wizard\n")

    path = click.prompt("Path to scan for API routes", default=str(DEFAULT_PATH))
    fmt = click.prompt("Output format", default="json", type=click.Choice(FORMATS))
    output = click.prompt("Output path", default=DEFAULT_OUTPUTS[fmt])
    verbose = click.confirm("Enable verbose output?", default=False)

    config = ScannerConfig(path=path, output=output, format=fmt, verbose=verbose)
    if click.confirm(f"Save these settings to {config_path}?", default=True):
        save_config(config, config_path)
        click.echo(f"Configuration saved to {config_path}")

    if click.confirm("Run API Scanner now?", default=True):
        _setup_logging(verbose)
        _run_scan(path, output, fmt, config, 1, verbose)
    else:
        click.echo("To run later, use:")
        click.echo(f"  api-scanner scan --path {path} --format {fmt} --output {output}")


@main.command()
@click.argument("json_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--host", default="127.0.0.1", help="Host to bind.")
@click.option("--port", default=4000, type=int, help="Port to listen on.")
@click.option("--open/--no-open", "open_browser", default=True, help="Open the editor in a browser.")
def edit(json_path: Path, host: str, port: int, open_browser: bool):
    """Open a browser editor for a generated JSON documentation file."""
    from api_scanner.server import serve

    url = f"http://{host}:{port}"
    click.echo(f"Editing {json_path} at {url} (Ctrl+C to stop)")
    if open_browser:
        click.launch(url)
    serve(json_path, host=host, port=port)
