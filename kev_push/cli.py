"""CLI interface for kev-push."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kev_push import KEV_CATALOG_URL, KEV_FEED_URL, KevPushError, __version__
from kev_push.cache.snapshot_store import SnapshotStore
from kev_push.detector import RunOutcome, UpdateDetector
from kev_push.feeds.cisa_kev import DEFAULT_TIMEOUT, CatalogFetcher
from kev_push.notify import Notifier
from kev_push.notify.desktop import desktop_sink_for_platform
from kev_push.notify.pushover import PushoverConfig, PushoverSink

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("kev_push")

OUTCOME_MESSAGES = {
    RunOutcome.BASELINE: "[cyan]Baseline snapshot recorded.[/cyan]",
    RunOutcome.UNCHANGED: "[green]No new KEV release.[/green]",
    RunOutcome.UPDATED: "[bold yellow]New KEV release![/bold yellow]",
}


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = RichHandler(console=err_console, show_path=False, show_time=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.option("--cache-dir", envvar="KEV_PUSH_CACHE_DIR", default=None,
              type=click.Path(file_okay=False), help="Directory holding the cached catalog")
@click.pass_context
def cli(ctx, verbose, cache_dir):
    """kev-push: get notified when the CISA KEV catalog is updated."""
    setup_logging(verbose)
    ctx.obj = {"store": SnapshotStore(cache_dir)}


@cli.command()
@click.option("--feed-url", envvar="KEV_PUSH_FEED_URL", default=KEV_FEED_URL, show_default=True,
              help="KEV JSON feed to poll")
@click.option("--timeout", default=DEFAULT_TIMEOUT, type=float, show_default=True,
              help="Fetch timeout in seconds")
@click.option("--pushover-app", envvar="PUSHOVER_APP", default=None, show_envvar=True,
              help="Pushover application token")
@click.option("--pushover-user", envvar="PUSHOVER_USER", default=None, show_envvar=True,
              help="Pushover user key")
@click.option("--desktop/--no-desktop", default=True, help="Also raise a desktop notification")
@click.option("--strict", is_flag=True, envvar="KEV_PUSH_STRICT",
              help="Exit with status 1 when the check fails")
@click.pass_obj
def check(obj, feed_url, timeout, pushover_app, pushover_user, desktop, strict):
    """Compare the live catalog with the cached one and notify on change."""
    store = obj["store"]
    sinks = [PushoverSink(PushoverConfig(app_token=pushover_app, user_key=pushover_user))]
    if desktop:
        sinks.append(desktop_sink_for_platform())

    detector = UpdateDetector(
        store=store,
        fetcher=CatalogFetcher(url=feed_url, timeout=timeout),
        notifier=Notifier(sinks),
    )

    try:
        outcome = detector.run()
    except KevPushError as exc:
        logger.error("%s", exc)
        if strict:
            sys.exit(1)
        return

    console.print(OUTCOME_MESSAGES[outcome])


@cli.command()
@click.option("--limit", default=10, type=click.IntRange(min=0), show_default=True,
              help="Number of most recently added entries to list")
@click.pass_obj
def show(obj, limit):
    """Show the cached catalog snapshot."""
    store = obj["store"]
    if not store.exists():
        console.print(f"[yellow]No snapshot at {escape(str(store.path))}. Run 'kev-push check' first.[/yellow]")
        sys.exit(1)
    try:
        doc = store.load()
    except KevPushError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        console.print("[dim]Delete the file to record a fresh baseline on the next check.[/dim]")
        sys.exit(1)

    header = f"[bold]{escape(doc.title)}[/bold]\n"
    header += f"Released: {doc.release_date}\n"
    header += f"Version: {doc.catalog_version or 'n/a'}\n"
    header += f"Entries: {doc.count if doc.count is not None else 'n/a'}"
    console.print(Panel(header, title=str(store.path), subtitle=KEV_CATALOG_URL, border_style="cyan"))

    newest = doc.newest_entries(limit)
    if newest:
        t = Table(title="Recently Added", show_header=True, header_style="bold")
        t.add_column("Added", width=10)
        t.add_column("CVE", style="cyan", width=16)
        t.add_column("Vendor / Product")
        t.add_column("Due", width=10)
        for e in newest:
            t.add_row(e.date_added, e.cve_id, escape(f"{e.vendor} {e.product}"), e.due_date)
        console.print(t)


def main():
    cli()


if __name__ == "__main__":
    main()
