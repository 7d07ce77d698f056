"""Furikaeri CLI - reflection questions and a one-line-a-day diary."""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .adapters.github_contents import GitHubContentsStore
from .config import (
    CONFIG_FILE,
    generate_share_url,
    load_config,
    load_config_from_url,
    save_config,
)
from .core.questions import get_question
from .export import read_export, write_export
from .ports.document_store import WriteResult
from .sync import DIARY, REFLECTIONS
from .workflows import open_session

offline_option = click.option(
    "--offline", is_flag=True, help="Use the local copy only, skip GitHub"
)
date_option = click.option(
    "--date", "-d", "target_date", default=None,
    help="Date (YYYY-MM-DD), defaults to today",
)


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date", param_hint="--date")


def _report_save(result: WriteResult) -> None:
    """Print a remote save outcome. The local copy is already written either way."""
    if result.ok:
        click.echo("✓ Saved!")
        return
    click.echo(f"Saved locally only. {result.message}", err=True)
    sys.exit(1)


def _format_day(day: date) -> str:
    return day.strftime("%A, %b %d %Y")


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Furikaeri - reflection and diary, kept in a GitHub repo."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


# ============== Reflection ==============


@main.command()
@click.option("--question-id", "-q", type=int, default=None, help="Ask a specific question")
@offline_option
def ask(question_id: int | None, offline: bool):
    """Show a reflection question and your past answers to it."""
    config = load_config()
    orchestrator = open_session(config, offline=offline)
    session = orchestrator.session

    if question_id is not None:
        question = get_question(question_id)
        if question is None:
            click.echo(f"Error: no question with id {question_id}", err=True)
            sys.exit(1)
        session.current_question = question
    else:
        question = session.next_question()

    click.echo(f"[{question.category}] #{question.id}")
    click.echo(f"{question.text}\n")

    answers = session.reflections.query_by_question(question.id)
    if not answers:
        click.echo("No answers to this question yet.")
        click.echo(f"Answer with: furikaeri answer {question.id} \"...\"")
        return

    click.echo("Past answers:")
    for a in answers:
        click.echo(f"  {a.date}  {a.text}")


@main.command()
@click.argument("question_id", type=int)
@click.argument("text")
def answer(question_id: int, text: str):
    """Record an answer to a question."""
    if get_question(question_id) is None:
        click.echo(f"Error: no question with id {question_id}", err=True)
        sys.exit(1)

    if not text.strip():
        click.echo("Error: please enter an answer", err=True)
        sys.exit(1)

    config = load_config()
    orchestrator = open_session(config)
    _report_save(orchestrator.record_answer(question_id, text))


@main.command()
@click.argument("question_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@offline_option
def answers(question_id: int, as_json: bool, offline: bool):
    """List past answers to a question, newest first."""
    config = load_config()
    orchestrator = open_session(config, offline=offline)
    found = orchestrator.session.reflections.query_by_question(question_id)

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in found], indent=2, ensure_ascii=False))
        return

    if not found:
        click.echo("No answers to this question yet.")
        return

    for a in found:
        click.echo(f"{a.date}  {a.text}")


# ============== Diary ==============


@main.group(invoke_without_command=True)
@click.pass_context
def diary(ctx):
    """Read and write diary entries."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(diary_show)


@diary.command("show")
@date_option
@click.option("--offset", "-o", type=int, default=0,
              help="Shift the date by N days (negative for earlier)")
@offline_option
def diary_show(target_date: str | None = None, offset: int = 0, offline: bool = False):
    """Show the entry for a day and the same day in other years."""
    config = load_config()
    orchestrator = open_session(config, offline=offline)
    session = orchestrator.session
    session.current_date = _parse_date(target_date)
    session.change_date(offset)

    click.echo(f"### {_format_day(session.current_date)}\n")
    entry = session.diary.get(session.date_key)
    click.echo(entry.text if entry else "(no entry)")

    past = session.diary.on_this_day(session.current_date)
    click.echo("\nOn this day:")
    if not past:
        click.echo("  No entries from other years.")
        return
    for e in past:
        click.echo(f"  {e.date[:4]}  {e.text}")


@diary.command("write")
@click.argument("text")
@date_option
def diary_write(text: str, target_date: str | None):
    """Save the entry for a day. An empty TEXT deletes it."""
    config = load_config()
    orchestrator = open_session(config)
    orchestrator.session.current_date = _parse_date(target_date)
    _report_save(orchestrator.save_diary(text))


@diary.command("on-this-day")
@date_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@offline_option
def diary_on_this_day(target_date: str | None, as_json: bool, offline: bool):
    """List entries from other years on the same month and day."""
    config = load_config()
    orchestrator = open_session(config, offline=offline)
    past = orchestrator.session.diary.on_this_day(_parse_date(target_date))

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in past], indent=2, ensure_ascii=False))
        return

    if not past:
        click.echo("No entries from other years.")
        return
    for e in past:
        click.echo(f"{e.date}  {e.text}")


# ============== Settings ==============


@main.group()
def settings():
    """GitHub repository settings."""


@settings.command("show")
def settings_show():
    """Show current settings (token masked)."""
    config = load_config()
    token = f"{config.github_token[:4]}…" if config.github_token else "(not set)"
    click.echo(f"Config file: {CONFIG_FILE}")
    click.echo(f"Repository:  {config.github_repo or '(not set)'}")
    click.echo(f"Token:       {token}")
    click.echo(f"Branch:      {config.github_branch}")


@settings.command("set")
@click.option("--repo", default=None, help="Repository as owner/name")
@click.option("--token", default=None, help="GitHub token with contents access")
@click.option("--branch", default=None, help="Branch to read and write (default: main)")
def settings_set(repo: str | None, token: str | None, branch: str | None):
    """Update and save settings."""
    config = load_config()
    if repo is not None:
        config.github_repo = repo.strip()
    if token is not None:
        config.github_token = token.strip()
    if branch is not None:
        config.github_branch = branch.strip() or "main"
    save_config(config)
    click.echo("Settings saved")


@settings.command("import-url")
@click.argument("url")
def settings_import_url(url: str):
    """Load settings from a share link."""
    config, stripped = load_config_from_url(url, base=load_config())
    if config is None:
        click.echo("Error: the link does not contain readable settings", err=True)
        sys.exit(1)
    save_config(config)
    click.echo("Settings loaded!")
    click.echo(f"Link without settings: {stripped}")


@main.command("share-url")
@click.option("--base-url", required=True, help="Address the link should point at")
def share_url(base_url: str):
    """Print a link carrying your settings. Bookmark it; it contains your token."""
    url = generate_share_url(load_config(), base_url)
    if url is None:
        click.echo("Error: save your GitHub settings first", err=True)
        sys.exit(1)
    click.echo(url)


@main.command("test-connection")
def test_connection():
    """Check the repository is reachable."""
    result = GitHubContentsStore(load_config()).test_connection()
    if result.ok:
        click.echo(f"✓ {result.message}")
    else:
        click.echo(f"✗ {result.message}", err=True)
        sys.exit(1)


# ============== Data ==============


@main.command()
def sync():
    """Pull both documents from GitHub."""
    config = load_config()
    orchestrator = open_session(config, offline=True)
    click.echo("Syncing...")
    report = orchestrator.sync()
    if not report.ok:
        click.echo(f"Error: {report.message}", err=True)
        sys.exit(1)
    click.echo(f"{report.message} ({', '.join(report.loaded)})")


@main.command()
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path),
              default=Path.cwd, help="Directory to write the export into")
@offline_option
def export(output_dir: Path, offline: bool):
    """Export reflections and diary to one JSON file."""
    config = load_config()
    orchestrator = open_session(config, offline=offline)
    path = write_export(orchestrator.session, output_dir)
    click.echo(f"Exported to {path}")


@main.command("import")
@click.argument("export_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_(export_file: Path):
    """Replace both documents with an export and save them."""
    try:
        reflections, diary_store = read_export(export_file)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = load_config()
    orchestrator = open_session(config, offline=True)
    orchestrator.session.reflections = reflections
    orchestrator.session.diary = diary_store

    failed = False
    for kind in (REFLECTIONS, DIARY):
        result = orchestrator.persist(kind)
        if not result.ok:
            click.echo(f"{kind}: saved locally only. {result.message}", err=True)
            failed = True
    if failed:
        sys.exit(1)
    click.echo(f"✓ Imported {len(reflections.answers)} answers and {len(diary_store.entries)} diary entries")


if __name__ == "__main__":
    main()
