import json
from collections import Counter
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlsplit

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from sitecheck.core import config, http
from sitecheck.core import logging as log
from sitecheck.core.errors import CrawlAborted
from .crawler import crawl
from .outcomes import KINDS

app = typer.Typer(help="Crawl a site and report the status of every link")

def seed_host(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            return None
        return parts.hostname
    except ValueError:
        return None

def report_path(out: Path) -> Path:
    target = out if out.parent != Path(".") else Path("reports/linkscan") / out.name
    if target.suffix == "":
        target = target.with_suffix(".json")
    return target

@app.command("run")
def run(
    url: str = typer.Argument(..., help="Seed URL (absolute http/https)"),
    domain: Optional[str] = typer.Option(None, "--domain", help="Domain to stay in (default: seed host)"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Worker threads (default 10)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds (default 10)"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Stop admitting new URLs after this many"),
    broken_only: bool = typer.Option(False, "--broken-only/--all", help="Only print failing links"),
    out: Optional[Path] = typer.Option(None, "--out", help="Save a JSON report (bare names go to reports/linkscan)"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 1 if any link fails"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    try:
        level = "DEBUG" if verbose else config.log_level()
        workers = workers if workers is not None else config.workers()
        timeout = timeout if timeout is not None else config.timeout()
    except ValueError as e:
        print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=2)
    _ = log.setup(level)

    host = seed_host(url)
    if not host:
        print(f"[red]Invalid seed URL:[/red] {escape(repr(url))} (expected an absolute http/https URL)")
        raise typer.Exit(code=2)
    domain = domain or host

    print(f"[bold]🔗 linkscan[/bold] {url} | domain {domain} | {workers} workers | {timeout}s timeout")

    outcomes: List = []
    with http.client(timeout=http.abandon_timeout(timeout), user_agent=config.user_agent()) as c:
        try:
            stream = crawl(domain, url, workers=workers, timeout=timeout, limit=limit, get=http.getter(c))
        except ValueError as e:
            print(f"[red]Invalid options:[/red] {e}")
            raise typer.Exit(code=2)
        try:
            try:
                for o in stream:
                    outcomes.append(o)
                    if not (broken_only and o.ok):
                        print(o.markup())
            except KeyboardInterrupt:
                print("[yellow]Cancelled, waiting for in-flight requests...[/yellow]")
                stream.cancel()
                outcomes.extend(stream)
        except CrawlAborted as e:
            print(f"[red]Crawl aborted:[/red] {e.__cause__ or e}")
            raise typer.Exit(code=1)

    counts = Counter(o.kind for o in outcomes)
    table = Table(title="Summary")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    for kind in KINDS:
        table.add_row(kind, str(counts.get(kind, 0)))
    table.add_row("[bold]Total[/bold]", str(len(outcomes)))
    print(table)

    broken = [o for o in outcomes if not o.ok]
    if not broken:
        print("✅ No broken links.")

    if out:
        target = report_path(out)
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "seed": url,
            "domain": domain,
            "stats": stream.stats(),
            "outcomes": [o.to_dict() for o in outcomes],
        }
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"📝 Report saved to: {target}")

    if strict and broken:
        raise typer.Exit(code=1)
