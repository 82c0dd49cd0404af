"""cloudpass CLI — practice selection, stats, mock exams, config and server."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from cloudpass.application.config import AppConfig, resolve_config
from cloudpass.application.factory import get_practice_service
from cloudpass.domain.constants import DOMAINS
from cloudpass.domain.practice.models import Question
from cloudpass.domain.practice.ports import MasteryStoreError, QuestionBankError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="cloudpass: adaptive practice for cloud certification exams.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage cloudpass configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for cloudpass."""
    if verbose:
        logging.getLogger("cloudpass").setLevel(logging.DEBUG)


def _resolve(
    question_bank_dir: Path | None = None,
    mastery_store_path: Path | None = None,
    seed: int | None = None,
) -> AppConfig:
    return resolve_config(
        {
            "question_bank_dir": question_bank_dir,
            "mastery_store_path": mastery_store_path,
            "seed": seed,
        }
    )


def _print_questions(questions: list[Question], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([asdict(q) for q in questions], indent=2))
        return
    for i, q in enumerate(questions, 1):
        typer.echo(f"{i:>3}. [{q.id}] {q.text}")


QuestionsOpt = Annotated[
    Path | None, typer.Option("--questions", help="Directory holding domainN.json files.")
]
MasteryOpt = Annotated[Path | None, typer.Option("--mastery", help="Mastery store JSON file.")]
SeedOpt = Annotated[int | None, typer.Option(help="Seed for a reproducible draw.")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Emit JSON.")]


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def practice(
    domain: Annotated[int, typer.Argument(help="Domain number (1-4).")],
    count: Annotated[int | None, typer.Option("--count", "-n", help="Session size.")] = None,
    user: Annotated[
        str | None, typer.Option(help="User id. Omit for a guest (random) session.")
    ] = None,
    seed: SeedOpt = None,
    questions_dir: QuestionsOpt = None,
    mastery: MasteryOpt = None,
    as_json: JsonOpt = False,
):
    """[bold green]Select[/bold green] questions for a practice session."""
    config = _resolve(questions_dir, mastery, seed)
    service = get_practice_service(config)
    size = count if count is not None else config.session_size

    try:
        result = asyncio.run(service.start_session(domain, size, user))
    except QuestionBankError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1) from e

    if as_json:
        payload = {
            "questions": [asdict(q) for q in result.questions],
            "stats": asdict(result.stats) if result.stats else None,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Domain {domain}: {DOMAINS.get(domain, '?')}")
    _print_questions(result.questions, as_json=False)
    if len(result.questions) < size:
        typer.secho(f"Only {len(result.questions)} question(s) available.", fg="yellow")


@app.command()
def stats(
    domain: Annotated[int, typer.Argument(help="Domain number (1-4).")],
    user: Annotated[str, typer.Option(help="User id.")],
    questions_dir: QuestionsOpt = None,
    mastery: MasteryOpt = None,
):
    """Show new/learning/struggling/mastered counts for a domain."""
    config = _resolve(questions_dir, mastery)
    service = get_practice_service(config)

    try:
        result = asyncio.run(service.domain_stats(domain, user))
    except (QuestionBankError, MasteryStoreError) as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1) from e

    typer.echo(json.dumps(asdict(result), indent=2))


@app.command()
def exam(
    seed: SeedOpt = None,
    questions_dir: QuestionsOpt = None,
    as_json: JsonOpt = False,
):
    """Assemble a full mock exam using the domain blueprint."""
    config = _resolve(questions_dir, seed=seed)
    service = get_practice_service(config)

    try:
        questions = asyncio.run(service.mock_exam())
    except QuestionBankError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1) from e

    _print_questions(questions, as_json)


@app.command()
def server(
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port.")] = 8777,
    reload: Annotated[bool, typer.Option(help="Auto-reload on code changes.")] = False,
):
    """Run the HTTP selection server."""
    import uvicorn

    uvicorn.run("cloudpass.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
