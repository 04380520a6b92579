"""
Command Line Interface for promdress.
"""

import random
from typing import List, Optional, Tuple

import httpx
import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from ..config import ExpositionConfig
from ..exceptions import ConfigurationError
from ..metrics import Counter, Gauge, Histogram, get_default_registry
from ..utils.helpers import setup_logging
from ..version import print_version_info

app = typer.Typer(
    name="promdress",
    help="Prometheus metrics instrumentation toolkit",
    add_completion=False
)
console = Console()


@app.command()
def version():
    """Show version information."""
    print_version_info()


@app.command()
def report(
    demo: bool = typer.Option(False, help="Seed sample metrics before reporting")
):
    """Print the default registry in the text exposition format."""
    registry = get_default_registry()
    if demo:
        _seed_demo_metrics()
    typer.echo(registry.report(), nl=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (default from PROMDRESS_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default from PROMDRESS_PORT)"),
    path: Optional[str] = typer.Option(None, help="Scrape path (default from PROMDRESS_METRICS_PATH)"),
    demo: bool = typer.Option(False, help="Seed sample metrics before serving")
):
    """Serve the default registry over HTTP."""
    import uvicorn

    from ..metrics.middleware import create_app

    try:
        config = ExpositionConfig.from_env()
        overrides = {k: v for k, v in (('host', host), ('port', port), ('metrics_path', path)) if v is not None}
        if overrides:
            config = ExpositionConfig(**{**config.model_dump(), **overrides})
    except (ConfigurationError, ValueError) as e:
        rprint(f"❌ [red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(config.log_level.value)
    if demo:
        _seed_demo_metrics()

    rprint(f"📈 [green]Serving metrics at http://{config.host}:{config.port}{config.metrics_path}[/green]")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.value.lower())


@app.command()
def scrape(
    url: str = typer.Argument(..., help="Scrape endpoint URL, e.g. http://localhost:9464/metrics"),
    timeout: float = typer.Option(10.0, help="Request timeout in seconds")
):
    """Fetch a scrape endpoint and show its series."""
    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        rprint(f"❌ [red]Scrape failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Series at {url}")
    table.add_column("Series", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Timestamp", style="magenta", justify="right")

    for series, value, timestamp in parse_samples(response.text):
        table.add_row(series, value, timestamp or "")

    console.print(table)


def parse_samples(text: str) -> List[Tuple[str, str, Optional[str]]]:
    """Split exposition text into ``(series, value, timestamp)`` rows, skipping comments."""
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        closing = line.rfind('}')
        if closing != -1:
            head_end = closing + 1
        else:
            head_end = line.find(' ') if ' ' in line else len(line)
        series = line[:head_end]
        parts = line[head_end:].split()
        value = parts[0] if parts else ""
        timestamp = parts[1] if len(parts) > 1 else None
        rows.append((series, value, timestamp))
    return rows


def _seed_demo_metrics() -> None:
    """Register and populate a few sample metrics on the default registry."""
    requests = Counter(
        'demo_requests_total',
        'Demo requests handled.',
        labels=['method', 'code']
    )
    in_flight = Gauge('demo_in_flight_requests', 'Demo requests in flight.')
    latency = Histogram(
        'demo_request_duration_seconds',
        'Demo request latency.',
        labels=['method'],
        buckets=[0.1, 0.25, 0.5, 1]
    )

    for method, code in (('get', '200'), ('get', '200'), ('post', '201'), ('get', '404')):
        requests.inc({'method': method, 'code': code})
        latency.observe(round(random.uniform(0.05, 1.2), 3), {'method': method})
    in_flight.set(3)


if __name__ == "__main__":
    app()
