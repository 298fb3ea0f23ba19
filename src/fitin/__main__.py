"""CLI entry point for fitin."""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

import click
import yaml

from .adapters.llm import create_analyzer
from .adapters.storage import JsonFileDocumentStore
from .config import Settings, load_settings
from .domain.answers import SECTIONS, answer_question, faq_for_section
from .domain.categories import classify, group_by_category
from .domain.dates import parse_iso_date
from .domain.deadlines import upcoming_deadlines
from .domain.models import Analysis, Deadline, Document, parse_timeline
from .domain.services import VaultService

logger = logging.getLogger(__name__)

URGENCY_MARKERS = {"critical": "!!", "soon": "! ", "normal": "  "}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_as_of(value: str | None) -> date:
    """Parse an optional YYYY-MM-DD reference date (defaults to today)."""
    if value is None:
        return date.today()
    day = parse_iso_date(value)
    if day is None:
        raise click.BadParameter("Date must be YYYY-MM-DD")
    return day


def read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path.name} is not valid JSON: {e}")


def format_deadline(deadline: Deadline) -> str:
    marker = URGENCY_MARKERS[deadline.urgency.value]
    when = "today" if deadline.days_until == 0 else f"in {deadline.days_until}d"
    return (
        f"{marker} {deadline.date.isoformat()}  {when:>7}  "
        f"[{deadline.kind.value}] {deadline.label} ({deadline.document_name})"
    )


def render_document(doc: Document) -> str:
    """YAML view of a stored document, including its derived category."""
    data = doc.to_dict()
    data["category"] = classify(doc).value
    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


def open_store(settings: Settings) -> JsonFileDocumentStore:
    return JsonFileDocumentStore(settings.paths.store)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """FitIn - Italian bureaucracy document vault."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("name")
@click.option("--type", "doc_type", default="Document", help="Declared document type")
@click.option("--text-file", type=click.Path(exists=True, path_type=Path), help="OCR text")
@click.option("--analysis-file", type=click.Path(exists=True, path_type=Path), help="Analysis JSON")
@click.option("--timeline-file", type=click.Path(exists=True, path_type=Path), help="Timeline JSON")
@click.option("--tips", default="", help="Street tips for this document")
@click.option("--analyze/--no-analyze", default=False, help="Ask the AI gateway for analysis")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    doc_type: str,
    text_file: Path | None,
    analysis_file: Path | None,
    timeline_file: Path | None,
    tips: str,
    analyze: bool,
) -> None:
    """Save a document to the vault."""
    settings = load_settings(ctx.obj["config_path"])

    analysis = Analysis.from_dict(read_json_file(analysis_file)) if analysis_file else None
    timeline = parse_timeline(read_json_file(timeline_file)) if timeline_file else None
    ocr_text = text_file.read_text(encoding="utf-8") if text_file else ""

    service = VaultService(
        store=open_store(settings),
        analyzer=create_analyzer(settings.llm) if analyze else None,
    )
    doc = service.save(
        name=name,
        type=doc_type,
        ocr_text=ocr_text,
        timeline=timeline,
        tips=tips,
        analysis=analysis,
    )
    click.echo(f"Saved {doc.id}: {doc.name} ({doc.effective_category})")


@cli.command(name="list")
@click.option("--grouped", is_flag=True, help="Group documents by category")
@click.pass_context
def list_documents(ctx: click.Context, grouped: bool) -> None:
    """List saved documents, newest first."""
    store = open_store(load_settings(ctx.obj["config_path"]))
    docs = store.list()

    if not docs:
        click.echo("No documents saved")
        return

    if grouped:
        for category, group in group_by_category(docs).items():
            click.echo(f"{category.value} ({len(group)})")
            for doc in group:
                click.echo(f"  {doc.id}  {doc.name}")
        return

    for doc in docs:
        click.echo(f"{doc.id}  {doc.created_at:%Y-%m-%d}  {doc.name} ({doc.effective_category})")


@cli.command()
@click.argument("doc_id")
@click.pass_context
def show(ctx: click.Context, doc_id: str) -> None:
    """Show a stored document."""
    store = open_store(load_settings(ctx.obj["config_path"]))
    doc = store.get(doc_id)
    if doc is None:
        click.echo(f"Document not found: {doc_id}", err=True)
        sys.exit(1)
    click.echo(render_document(doc), nl=False)


@cli.command()
@click.argument("doc_id")
@click.pass_context
def delete(ctx: click.Context, doc_id: str) -> None:
    """Delete a stored document."""
    store = open_store(load_settings(ctx.obj["config_path"]))
    store.delete(doc_id)
    click.echo(f"Deleted: {doc_id}")


@cli.command()
@click.argument("doc_id")
@click.pass_context
def reanalyze(ctx: click.Context, doc_id: str) -> None:
    """Refresh analysis and timeline of a stored document."""
    settings = load_settings(ctx.obj["config_path"])
    service = VaultService(store=open_store(settings), analyzer=create_analyzer(settings.llm))

    doc = service.reanalyze(doc_id)
    if doc is None:
        click.echo(f"Document not found: {doc_id}", err=True)
        sys.exit(1)
    click.echo(f"Reanalyzed {doc.id}: {doc.name} ({doc.effective_category})")


@cli.command()
@click.option("--as-of", help="Reference date YYYY-MM-DD (default: today)")
@click.option("--window", type=click.IntRange(min=0), help="Days ahead to include")
@click.pass_context
def deadlines(ctx: click.Context, as_of: str | None, window: int | None) -> None:
    """Show upcoming deadlines (scadenze)."""
    settings = load_settings(ctx.obj["config_path"])
    reference = parse_as_of(as_of)
    window_days = settings.deadlines.window_days if window is None else window

    found = upcoming_deadlines(
        open_store(settings).list(),
        reference,
        window_days=window_days,
        critical_days=settings.deadlines.critical_days,
        soon_days=settings.deadlines.soon_days,
    )
    if not found:
        click.echo("No upcoming deadlines")
        return

    click.echo(f"Scadenze ({len(found)}) - next {window_days} days")
    for deadline in found:
        click.echo(format_deadline(deadline))


@cli.command()
@click.argument("question_id", required=False)
@click.option("--as-of", help="Reference date YYYY-MM-DD (default: today)")
@click.option("--section", type=click.Choice(SECTIONS), help="Only list this section")
@click.pass_context
def ask(
    ctx: click.Context,
    question_id: str | None,
    as_of: str | None,
    section: str | None,
) -> None:
    """Answer a quick question about your documents (lists them without an id)."""
    if question_id is None:
        for item in faq_for_section(section):
            click.echo(f"{item.id:<20} {item.question}")
        return

    settings = load_settings(ctx.obj["config_path"])
    docs = open_store(settings).list()
    try:
        answer = answer_question(
            question_id, docs, parse_as_of(as_of), settings.deadlines.window_days
        )
    except KeyError:
        click.echo(f"Unknown question: {question_id}", err=True)
        sys.exit(1)
    click.echo(answer)


if __name__ == "__main__":
    cli()
