"""CLI entrypoint for prompt-eval — typer app with `run` and `evaluators` commands."""

import asyncio
import json
import sys
import time
from pathlib import Path

import structlog
import typer

from prompt_eval.cli.output.summary import TestSummary, summarize
from prompt_eval.config.application.resolver import EvaluatorConfigResolver
from prompt_eval.config.domain.project import ProjectConfig
from prompt_eval.config.infrastructure.observer import StructlogConfigObserver
from prompt_eval.config.infrastructure.yaml_loader import YamlProjectLoader
from prompt_eval.core.errors import PromptEvalError
from prompt_eval.evaluation.application.engine import EvaluationEngine
from prompt_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from prompt_eval.evaluator.infrastructure.observer import StructlogJudgeObserver
from prompt_eval.evaluator.infrastructure.registry import build_default_registry
from prompt_eval.storage.infrastructure.seed import seed_store
from prompt_eval.testing.application.orchestrator import TestRunOrchestrator
from prompt_eval.testing.domain.observer import TestRunObserver
from prompt_eval.testing.domain.outcome import RunAllOutcome
from prompt_eval.testing.domain.test_run import TestRun
from prompt_eval.testing.infrastructure.composite_observer import (
    CompositeTestRunObserver,
)
from prompt_eval.testing.infrastructure.litellm_generator import (
    LiteLLMResponseGenerator,
)
from prompt_eval.testing.infrastructure.observer import StructlogTestRunObserver
from prompt_eval.testing.infrastructure.progress_observer import (
    ProgressTestRunObserver,
)

app = typer.Typer(add_completion=False)

_LOG_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}


def _configure_structlog(log_format: str, log_level: str = "info") -> None:
    """Configure structlog based on the requested format and level."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    if log_level not in _LOG_LEVELS:
        typer.echo(
            f"Invalid log level: {log_level!r}. "
            f"Must be one of: {', '.join(_LOG_LEVELS)}."
        )
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LOG_LEVELS[log_level]),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"


def _score_color(score: float) -> str:
    if score >= 80.0:
        return _GREEN
    if score >= 50.0:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def _print_summary(
    project: ProjectConfig,
    version_id: str,
    summaries: list[TestSummary],
    elapsed_seconds: float,
) -> None:
    """Print a colorized per-test table to stdout."""
    total_runs = sum(s.total for s in summaries)

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  prompt-eval  ·  Test Run Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Project", f"{project.name} ({project.version})"),
        ("Version", version_id),
        ("Total runs", str(total_runs)),
        ("Elapsed", _format_elapsed(elapsed_seconds=elapsed_seconds)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    name_w = max([len("Test"), *(len(s.test_id) for s in summaries)])
    typer.echo("")
    typer.echo(
        f"  {_DIM}{'Test':<{name_w}}  {'Pass':>5}  {'Fail':>5}  {'Err':>5}"
        f"  {'Score':>6}  {'±Std':>6}{_RESET}"
    )
    rules = ["─" * w for w in (name_w, 5, 5, 5, 6, 6)]
    typer.echo("  " + "  ".join(rules))
    for s in summaries:
        if s.score_mean is None:
            score_cell = f"{_DIM}{'—':>6}{_RESET}"
        else:
            color = _score_color(score=s.score_mean)
            score_cell = f"{color}{s.score_mean:>6.1f}{_RESET}"
        typer.echo(
            f"  {_WHITE}{s.test_id:<{name_w}}{_RESET}"
            f"  {_GREEN}{s.passed:>5}{_RESET}"
            f"  {_YELLOW}{s.failed:>5}{_RESET}"
            f"  {_RED}{s.errored:>5}{_RESET}"
            f"  {score_cell}"
            f"  {_DIM}{s.score_stddev:>6.1f}{_RESET}"
        )

    errors = [r for s in summaries for r in s.runs if r.error_message]
    if errors:
        typer.echo("")
        typer.echo(f"  {_RED}{_BOLD}Errors  ({len(errors)} total){_RESET}")
        for r in errors[:10]:
            typer.echo(f"  {_DIM}[{r.prompt_test_id}]{_RESET} {r.error_message}")
        if len(errors) > 10:
            typer.echo(f"  {_DIM}… and {len(errors) - 10} more{_RESET}")

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")


async def _run_all(
    orchestrator: TestRunOrchestrator, version_id: str, dataset_id: str | None
) -> tuple[RunAllOutcome, list[TestRun]]:
    outcome = await orchestrator.run_all(
        version_id=version_id, dataset_id=dataset_id, triggered_by="cli"
    )
    if outcome.nothing_to_run:
        return outcome, []
    return outcome, await orchestrator.wait()


@app.command()
def run(
    project_path: Path = typer.Argument(..., help="Path to project YAML"),
    version_id: str = typer.Option(
        ..., "--version", "-v", help="Prompt version whose tests to run"
    ),
    dataset_id: str | None = typer.Option(
        None, "--dataset", "-d", help="Dataset to replay each test over"
    ),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write finished test runs as JSON to this file"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Minimum log level: debug, info, warning or error",
    ),
) -> None:
    """Run every enabled test of a prompt version and print a summary."""
    try:
        _configure_structlog(log_format=log_format, log_level=log_level)

        loader = YamlProjectLoader(observer=StructlogConfigObserver())
        project = loader.load(path=project_path)
        store = seed_store(project)

        registry = build_default_registry(judge_observer=StructlogJudgeObserver())
        evaluation_observer = StructlogEvaluationObserver()
        engine = EvaluationEngine(
            registry=registry,
            results=store,
            observer=evaluation_observer,
            evaluator_timeout_seconds=project.execution.evaluator_timeout_seconds,
        )
        resolver = EvaluatorConfigResolver(
            prompts=store,
            configs=store,
            registry=registry,
            observer=evaluation_observer,
        )
        observers: list[TestRunObserver] = [StructlogTestRunObserver()]
        if log_format != "json":
            observers.append(ProgressTestRunObserver())

        orchestrator = TestRunOrchestrator(
            store=store,
            resolver=resolver,
            engine=engine,
            generator=LiteLLMResponseGenerator(),
            execution=project.execution,
            observer=CompositeTestRunObserver(observers=observers),
        )

        started_at = time.monotonic()
        outcome, runs = asyncio.run(
            _run_all(orchestrator, version_id=version_id, dataset_id=dataset_id)
        )
        elapsed_seconds = time.monotonic() - started_at

        if outcome.nothing_to_run:
            typer.echo(outcome.message)
            return

        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                json.dumps([r.model_dump(mode="json") for r in runs], indent=2),
                encoding="utf-8",
            )

        _print_summary(
            project=project,
            version_id=version_id,
            summaries=summarize(runs),
            elapsed_seconds=elapsed_seconds,
        )

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        typer.echo("Test run interrupted.")
        sys.exit(1)
    except PromptEvalError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def evaluators() -> None:
    """List the built-in evaluators and their default configuration."""
    registry = build_default_registry(judge_observer=StructlogJudgeObserver())
    for key, metadata in registry.all():
        typer.echo(f"{_BOLD}{key}{_RESET}  {_DIM}[{metadata.category}]{_RESET}")
        typer.echo(f"  {metadata.name}: {metadata.description}")
        typer.echo(f"  {_DIM}defaults: {json.dumps(metadata.default_config)}{_RESET}")


if __name__ == "__main__":
    app()
