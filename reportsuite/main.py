from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .finance.amortization import RepaymentMethod
from .models import JobStatus, reset_engine
from .pipeline.ingest import ingest_requests, list_jobs
from .pipeline.render import build_report
from .pipeline.run import run_pipeline

app = typer.Typer(help="Banking assessment report generator")


def _use_out_dir(out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()


def _echo_results(results: dict[str, list[str]]) -> None:
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log page breaks and pipeline steps")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def build(
    input: Optional[Path] = typer.Option(None, "--input", help="JSON file with report requests"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    kind: Optional[str] = typer.Option(None, "--kind", help="Filter by report kind"),
    dry_run_ingest: bool = typer.Option(False, "--dry-run-ingest", help="Only ingest requests"),
) -> None:
    _use_out_dir(out)
    if input:
        jobs = ingest_requests(input)
        typer.echo(f"Ingested {len(jobs)} reports")
        if dry_run_ingest:
            return
    jobs = list_jobs([JobStatus.DRAFT], kind=kind)
    if not jobs:
        typer.echo("No reports to build")
        return
    _echo_results(run_pipeline(jobs))


@app.command()
def retry(
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    failed: bool = typer.Option(True, "--failed/--drafts", help="Retry failed (default) or pending drafts"),
) -> None:
    _use_out_dir(out)
    statuses = [JobStatus.FAILED] if failed else [JobStatus.DRAFT]
    jobs = list_jobs(statuses)
    if not jobs:
        typer.echo("No reports to retry")
        return
    _echo_results(run_pipeline(jobs))


@app.command()
def schedule(
    principal: float = typer.Option(..., "--principal", help="Loan amount"),
    rate: float = typer.Option(..., "--rate", help="Annual interest rate in percent"),
    tenure: int = typer.Option(..., "--tenure", help="Tenure in months"),
    method: RepaymentMethod = typer.Option(RepaymentMethod.REDUCING, "--method", help="Repayment method"),
    title: str = typer.Option("Loan Amortization Report", "--title", help="Report title"),
    output: Path = typer.Option(Path("amortization-schedule.pdf"), "--output", "-o", help="PDF path"),
) -> None:
    """Render a one-off amortization report without touching the ledger."""
    request = {
        "kind": "amortization",
        "title": title,
        "loan": {
            "principal": principal,
            "annual_rate": rate,
            "tenure_months": tenure,
            "method": method.value,
        },
    }
    surface = build_report(request, output)
    typer.echo(f"Wrote {output} ({surface.page_count} page(s))")


if __name__ == "__main__":
    app()
