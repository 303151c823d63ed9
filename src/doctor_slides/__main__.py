"""
Command-line entry point.

    doctor-slides DOCUMENT_ID
    python -m doctor_slides DOCUMENT_ID --debug

All failures end up in ``cli``, which prints a short diagnostic and decides
the exit status.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from doctor_slides import __version__, pipeline
from doctor_slides.config.settings import AppSettings, create_settings
from doctor_slides.services.deck_synthesizer import DeckSynthesizer
from doctor_slides.services.document_reader import DocumentReader
from doctor_slides.services.google_auth import FileTokenStore, GoogleAuth
from doctor_slides.services.outline_generator import OutlineGenerator
from doctor_slides.utils.error_handling import (
    AppException,
    EmptyOutlineError,
    format_exception_for_logging,
)
from doctor_slides.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def authorize(settings: AppSettings) -> GoogleAuth:
    """Return Google credentials, walking the user through consent if needed."""
    auth = GoogleAuth(
        FileTokenStore(settings.google.token_path),
        credentials_path=settings.google.credentials_path,
    )
    if auth.is_authorized():
        return auth

    redirect_uri = settings.google.redirect_uri
    url = auth.get_auth_url(redirect_uri)
    click.echo(
        "Go to the following link in your browser, then paste the "
        "authorization code (the 'code' parameter of the page you are "
        f"sent to):\n{url}"
    )
    code = click.prompt("Authorization code")
    auth.authorize(code, redirect_uri)
    return auth


def build_deck(
    settings: AppSettings,
    document_id: Optional[str],
    outline_file: Optional[Path],
) -> pipeline.DeckResult:
    """Wire the services from ``settings`` and run the pipeline."""
    auth = authorize(settings)
    synthesizer = DeckSynthesizer(auth.build_slides_service(), settings.closing_label)

    if outline_file is not None:
        title = f"Doctor Slides Test: {datetime.now():%Y-%m-%d %H:%M:%S}"
        raw = outline_file.read_text(encoding="utf-8")
        return pipeline.run_from_outline_text(raw, title, synthesizer)

    reader = DocumentReader(auth.build_docs_service())
    generator = OutlineGenerator.from_settings(settings)
    return pipeline.run(document_id, reader, generator, synthesizer)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("document_id", required=False)
@click.option("--debug", is_flag=True, help="Verbose logging; print the model output if it cannot be parsed.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Optional YAML configuration file.",
)
@click.option(
    "--outline-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Build the deck from a saved outline instead of a document.",
)
@click.version_option(__version__, prog_name="doctor-slides")
@click.pass_context
def cli(
    ctx: click.Context,
    document_id: Optional[str],
    debug: bool,
    config_path: Optional[Path],
    outline_file: Optional[Path],
):
    """Turn the Google Doc DOCUMENT_ID into a Google Slides presentation."""
    click.echo("Here Comes Doctor Slides!")
    if not document_id and outline_file is None:
        click.echo("I need a document ID to get started.")
        click.echo(ctx.get_usage())
        return
    if document_id and outline_file is not None:
        raise click.UsageError("Give either DOCUMENT_ID or --outline-file, not both.", ctx=ctx)

    overrides = {"debug": True} if debug else {}
    try:
        settings = create_settings(config_path, **overrides)
    except AppException as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        ctx.exit(1)

    setup_logging(settings.effective_log_level, settings.logging.format)

    try:
        result = build_deck(settings, document_id, outline_file)
    except EmptyOutlineError as exc:
        click.echo(
            "Sorry. The model gave me garbage. I can't do anything with this. Try again?",
            err=True,
        )
        if settings.debug:
            click.echo(exc.raw_text)
        ctx.exit(1)
    except AppException as exc:
        logger.debug("Run failed", extra=format_exception_for_logging(exc))
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

    click.echo(f"Created Presentation: {result.url}")


def main() -> None:
    """Console script entry point."""
    cli(prog_name="doctor-slides")


if __name__ == "__main__":
    main()
