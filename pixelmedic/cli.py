"""
Command-Line Interface

CLI using rich for colored output and progress indicators. Analyzes a
screenshot file or a live page and prints the located issues, their
fixes and the overall score.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .capture import ScreenshotCapturer
from .client import AnalysisClient
from .config import load_config
from .credentials import CredentialFile, CredentialStore, credential_key
from .errors import AnalysisError, ImageRejected
from .imaging import load_image
from .models import PROVIDERS, SEVERITY_FILTERS, AnalysisResult, Config
from .providers import get_provider
from .session import CritiqueSession
from .view_state import ViewStateStore


console = Console()
err_console = Console(stderr=True)

SEVERITY_STYLES = {"critical": "bold red", "warning": "yellow", "suggestion": "cyan"}
SEVERITY_ICONS = {"critical": "🔴", "warning": "🟡", "suggestion": "🔵"}
FIX_LEXERS = {"html": "html", "css": "css", "angular": "typescript"}


@click.group()
@click.option('--debug', is_flag=True, help='Verbose logging and tracebacks on errors')
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, debug: bool):
    """
    PixelMedic - Screenshot UI Critique

    Send a screenshot to a vision model and get back located UI issues,
    code fixes and an overall score.

    Examples:

      # Store an API key once
      pixelmedic configure

      # Critique a screenshot
      pixelmedic analyze screen.png

      # Only critical issues, JSON for scripts
      pixelmedic analyze screen.png --filter critical --output json

      # Critique a running app
      pixelmedic analyze --url http://localhost:4200 --wait-for app-root
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    _setup_logging(debug)


@main.command()
@click.option(
    '--provider',
    default=None,
    type=click.Choice(PROVIDERS, case_sensitive=False),
    help='Provider the key belongs to. Defaults to VISION_PROVIDER from .env'
)
@click.option(
    '--env-file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to .env file (defaults to ./.env)'
)
def configure(provider: Optional[str], env_file: Optional[str]):
    """Prompt for an API key and save it for later runs."""
    config = load_config(Path(env_file) if env_file else None)
    provider_name = (provider or config.vision_provider).lower()

    key = click.prompt(f"{provider_name} API key", hide_input=True).strip()
    if not key:
        raise click.UsageError("API key must not be empty")

    store = _credential_file(config)
    store.save(credential_key(provider_name), key)
    console.print(f"[green]✓ Saved {provider_name} API key to {store.path}[/green]")


@main.command()
@click.argument('image', required=False, type=click.Path(exists=True, dir_okay=False))
@click.option('--url', default=None, help='Capture and critique a live page instead of a file')
@click.option('--selector', default=None, help='CSS selector to click before capture (with --url)')
@click.option('--wait-for', default=None, help='CSS selector to wait for before capture (with --url)')
@click.option(
    '--provider',
    default=None,
    type=click.Choice(PROVIDERS, case_sensitive=False),
    help='Vision provider to use. Defaults to VISION_PROVIDER from .env'
)
@click.option(
    '--filter', 'severity_filter',
    default='all',
    type=click.Choice(SEVERITY_FILTERS, case_sensitive=False),
    help='Only list issues of this severity'
)
@click.option(
    '--output',
    default='rich',
    type=click.Choice(['rich', 'json'], case_sensitive=False),
    help='Output format: rich (colored terminal) or json (for scripts)'
)
@click.option(
    '--env-file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to .env file (defaults to ./.env)'
)
@click.pass_context
def analyze(
    ctx: click.Context,
    image: Optional[str],
    url: Optional[str],
    selector: Optional[str],
    wait_for: Optional[str],
    provider: Optional[str],
    severity_filter: str,
    output: str,
    env_file: Optional[str]
):
    """Critique a screenshot IMAGE (or a page given with --url)."""
    if not image and not url:
        raise click.UsageError("Provide an IMAGE path or --url")
    if image and url:
        raise click.UsageError("Use either IMAGE or --url, not both")

    debug = ctx.obj.get("debug", False) if ctx.obj else False

    try:
        config = load_config(Path(env_file) if env_file else None)
        provider_name = (provider or config.vision_provider).lower()
        session = build_session(config, provider_name)

        if not session.client.is_configured:
            err_console.print(
                f"[red]❌ No {provider_name} API key configured[/red]\n"
                f"Run `pixelmedic configure --provider {provider_name}` "
                f"or set {credential_key(provider_name).upper()} in .env"
            )
            sys.exit(1)

        result = asyncio.run(_run_analysis(
            session,
            image=Path(image) if image else None,
            url=url,
            selector=selector,
            wait_for=wait_for
        ))

        if result is None:
            err_console.print(f"[red]❌ Analysis failed: {escape(str(session.client.error))}[/red]")
            sys.exit(1)

        session.set_filter(severity_filter.lower())

        if output == 'json':
            _output_json(session.view, provider_name)
        else:
            _output_rich(session.view, provider_name)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        sys.exit(130)
    except (AnalysisError, ImageRejected, RuntimeError, ValueError) as e:
        err_console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        if debug:
            err_console.print_exception()
        sys.exit(1)


def build_session(config: Config, provider_name: str) -> CritiqueSession:
    """
    Wire credential store, client and view state for one provider.

    The credential comes from the environment first, then from the saved
    credentials file.
    """
    credential = config.api_key_for(provider_name)
    if credential is None:
        credential = _credential_file(config).load(credential_key(provider_name))

    credentials = CredentialStore()
    if credential:
        credentials.set_credential(credential)

    client = AnalysisClient(
        credentials,
        lambda key: get_provider(provider_name, key, model=config.model)
    )
    return CritiqueSession(client, ViewStateStore())


async def _run_analysis(
    session: CritiqueSession,
    image: Optional[Path],
    url: Optional[str],
    selector: Optional[str],
    wait_for: Optional[str]
) -> Optional[AnalysisResult]:
    """Load the image and run the analysis with progress indicators"""

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True
    ) as progress:

        if url:
            task = progress.add_task("[cyan]Capturing screenshot...", total=None)
            payload = await ScreenshotCapturer().capture_data_uri(
                url,
                selector=selector,
                wait_for=wait_for
            )
        else:
            task = progress.add_task("[cyan]Loading image...", total=None)
            payload = load_image(image)

        session.select_image(payload)

        progress.update(task, description="[cyan]Analyzing UI with vision model...")
        result = await session.analyze_current()

        progress.update(task, description="[green]✓ Analysis complete", completed=True)

    return result


def _output_rich(view: ViewStateStore, provider_name: str):
    """Output the view state as rich formatted terminal output"""
    result = view.result

    console.print()
    console.print(Panel.fit(
        f"[bold]Score: [{_score_color(result.overall_score)}]{result.overall_score}/100[/] "
        f"({result.rating()})[/bold]\n"
        f"{escape(result.summary)}\n"
        f"[dim]Provider: {provider_name}[/dim]",
        title="UI Critique",
        border_style="cyan"
    ))

    console.print(
        f"\n[bold]🔍 Issues ({len(result.issues)})[/bold]  "
        f"[red]{view.critical_count} critical[/red]  "
        f"[yellow]{view.warning_count} warnings[/yellow]"
    )

    issues = view.filtered_issues
    if not result.issues:
        console.print("\n[bold green]✓ No issues found![/bold green]")
    elif not issues:
        console.print(f"\n[dim]No {view.filter} issues[/dim]")
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim")
        table.add_column("Severity")
        table.add_column("Type", style="cyan")
        table.add_column("Title")
        table.add_column("Location (x, y, w, h %)", justify="right")

        for issue in issues:
            loc = issue.location
            marker = "▶ " if issue.id == view.selected_issue_id else ""
            table.add_row(
                f"{marker}{issue.id}",
                f"[{SEVERITY_STYLES[issue.severity]}]{SEVERITY_ICONS[issue.severity]} {issue.severity}[/]",
                issue.category,
                escape(issue.title),
                f"{loc.x:g}, {loc.y:g}, {loc.width:g}, {loc.height:g}"
            )
        console.print(table)

    selected = view.selected_issue
    if selected is not None:
        _print_issue_detail(selected)

    console.print()


def _print_issue_detail(issue):
    console.print(f"\n[bold]{SEVERITY_ICONS[issue.severity]} {escape(issue.title)}[/bold]")
    console.print(f"  {escape(issue.description)}")
    console.print(f"  [dim]Why it matters:[/dim] {escape(issue.why_it_matters)}")

    snippets = issue.fix.available()
    if not snippets:
        return

    for surface, code in snippets.items():
        console.print(f"\n  [bold]💡 Fix ({escape(surface)})[/bold]")
        console.print(Syntax(code, FIX_LEXERS.get(surface, "text"), word_wrap=True))


def _output_json(view: ViewStateStore, provider_name: str):
    """Output result and view counts as JSON for scripts"""
    output = {
        **view.result.to_wire(),
        "rating": view.result.rating(),
        "provider": provider_name,
        "view": {
            "filter": view.filter,
            "criticalCount": view.critical_count,
            "warningCount": view.warning_count,
            "selectedIssueId": view.selected_issue_id,
            "filteredIssueIds": [issue.id for issue in view.filtered_issues],
        }
    }

    print(json.dumps(output, indent=2))


def _score_color(score: int) -> str:
    if score >= 90:
        return "green"
    elif score >= 70:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    else:
        return "red"


def _credential_file(config: Config) -> CredentialFile:
    return CredentialFile(Path(config.credentials_file) if config.credentials_file else None)


def _setup_logging(debug: bool):
    """Route the package's log records through rich on stderr"""
    package_logger = logging.getLogger("pixelmedic")
    package_logger.setLevel(logging.DEBUG if debug else logging.ERROR)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


if __name__ == "__main__":
    main()
