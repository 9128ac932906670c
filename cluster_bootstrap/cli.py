"""
Command-line interface for cluster-bootstrap
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cluster_bootstrap import __version__
from cluster_bootstrap.core.config import get_settings
from cluster_bootstrap.core.exceptions import BootstrapError

console = Console()


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """cluster-bootstrap - startup coordination for clustered servers"""
    pass


@main.command()
@click.option("--host", default=None, help="API server host (default: from settings)")
@click.option("--port", default=None, type=int, help="API server port (default: from settings)")
def serve(host: str | None, port: int | None) -> None:
    """Start the server with the bootstrap lifecycle attached"""
    import uvicorn

    from cluster_bootstrap.api.app import create_app
    from cluster_bootstrap.core.log_setup import configure_logging

    settings = get_settings()
    configure_logging(settings)

    actual_host = host or settings.api_host
    actual_port = port or settings.api_port

    console.print(
        Panel.fit(
            f"[bold cyan]{settings.server_name}[/bold cyan]\n"
            f"Starting on http://{actual_host}:{actual_port} "
            f"({'stand alone' if settings.standalone else 'cluster'} mode)",
            border_style="cyan",
        )
    )

    uvicorn.run(
        create_app(settings),
        host=actual_host,
        port=actual_port,
        log_level=settings.log_level.lower(),
    )


@main.command()
def members() -> None:
    """Show the cluster member list"""
    from cluster_bootstrap.core.paths import get_cluster_conf_path
    from cluster_bootstrap.startup.cluster_conf import read_cluster_conf

    settings = get_settings()
    conf_path = get_cluster_conf_path(settings.home)

    try:
        addresses = read_cluster_conf(conf_path)
    except BootstrapError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    table = Table(title=f"Cluster Members ({conf_path})", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Address", style="white")
    for index, address in enumerate(addresses, start=1):
        table.add_row(str(index), address)

    console.print(table)


@main.command()
def prepare() -> None:
    """Create the logs, conf and data directories"""
    from cluster_bootstrap.startup.directories import provision_directories

    settings = get_settings()
    try:
        paths = provision_directories(settings.home, server_name=settings.server_name)
    except BootstrapError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    for path in paths:
        console.print(f"[green]OK[/green] {path}")


@main.command()
def env() -> None:
    """Show the properties published during environment preparation"""
    from cluster_bootstrap.startup.environment import Environment, configure_environment

    environment = Environment(get_settings())
    configure_environment(environment)

    table = Table(title="Published Properties", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="white")
    table.add_column("Value", style="green")
    for key, value in sorted(environment.properties.items()):
        table.add_row(key, value)

    console.print(table)


if __name__ == "__main__":
    main()
