"""Command-line interface for the FAIR metadata checks."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from composition_root import bootstrap_fair_checks
from config.fair_config import FairChecksConfig
from domain.fair_models import CheckResult, FairCheck

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: fair-checks <check-name> <record-reference-url>\n"
    f"check names: {', '.join(check.value for check in FairCheck)}"
)


# --- Typer App ---
app = typer.Typer(
    help="Check CESSDA Data Catalogue records against FAIR criteria.",
    add_completion=False,
)


async def run_check(check: FairCheck, url: str, config: FairChecksConfig) -> CheckResult:
    """Runs one check with a freshly wired service."""
    async with bootstrap_fair_checks(config) as service:
        return await service.run_check(check, url)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def check(
    check_name: Optional[str] = typer.Argument(None, help="Check to run, e.g. access-rights"),
    url: Optional[str] = typer.Argument(None, help="Catalogue detail page URL of the record"),
):
    """Runs a FAIR check; exits 0 on PASS and 1 otherwise."""
    fair_check = FairCheck.from_name(check_name) if check_name else None
    if fair_check is None or not url:
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=1)

    config = FairChecksConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    result = asyncio.run(run_check(fair_check, url, config))

    logger.info(f"Result: {result.value}")
    typer.echo(result.value)
    raise typer.Exit(code=result.exit_code)


def main():
    """Console script entry point."""
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
