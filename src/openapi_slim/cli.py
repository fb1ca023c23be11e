"""CLI entry point for openapi-slim."""

import logging
import time
from pathlib import Path

import click

from openapi_slim.config import DEFAULT_MAX_DESCRIPTION_LENGTH, DEFAULT_SEED_SCHEMAS, RefPolicy, SimplifierConfig
from openapi_slim.debounce import Debouncer
from openapi_slim.errors import ParserUnavailable, SlimError
from openapi_slim.llm import LlmClient
from openapi_slim.parser.base import SimplifyResult
from openapi_slim.parser.structured import ParserHandle
from openapi_slim.simplifier import simplify

logger = logging.getLogger(__name__)

DEFAULT_WATCH_DELAY = 0.3
POLL_INTERVAL = 0.1


def _read_doc(doc_path: Path) -> str:
    if str(doc_path) == "-":
        return click.get_text_stream("stdin").read()
    return doc_path.read_text(encoding="utf-8")


def _simplify_text(text: str, config: SimplifierConfig, handle: ParserHandle) -> SimplifyResult:
    """Run the engine, loading the YAML parser only once the input needs it."""
    try:
        return simplify(text, handle.get(), config)
    except ParserUnavailable:
        logger.debug("Input is not JSON, loading YAML parser")
        return simplify(text, handle.load(), config)


def _build_config(policy: str, max_desc: int, seeds: tuple[str, ...], no_seeds: bool) -> SimplifierConfig:
    return SimplifierConfig(
        ref_policy=RefPolicy(policy),
        max_description_length=max_desc,
        seed_schemas=() if no_seeds else (seeds or DEFAULT_SEED_SCHEMAS),
    )


def _format_stats(result: SimplifyResult) -> str:
    stats = f"{result.input_length:,} chars -> {result.output_length:,} chars"
    if result.reduction is not None:
        stats += f" (~{result.reduction}% reduction)"
    return stats


def _rebuild(doc_path: Path, output: Path, config: SimplifierConfig, handle: ParserHandle) -> bool:
    """Re-run the engine for watch mode. Errors leave the output untouched."""
    try:
        result = _simplify_text(_read_doc(doc_path), config, handle)
    except (OSError, SlimError) as e:
        click.echo(f"Error processing {doc_path}: {e}", err=True)
        return False

    output.write_text(result.output, encoding="utf-8")
    click.echo(f"Updated {output}: {_format_stats(result)}", err=True)
    return True


def engine_options(f):
    """Options shared by every command that runs the engine."""
    f = click.option("--no-seeds", is_flag=True, envvar="OPENAPI_SLIM_NO_SEEDS", help="Do not force-include seed schemas.")(f)
    f = click.option(
        "--seed", "seeds", multiple=True, envvar="OPENAPI_SLIM_SEEDS",
        help="Schema always kept when defined (repeatable; space-separated in the env var).",
    )(f)
    f = click.option(
        "--max-desc", default=DEFAULT_MAX_DESCRIPTION_LENGTH, type=click.IntRange(min=1),
        envvar="OPENAPI_SLIM_MAX_DESC", show_default=True, help="Description length cap.",
    )(f)
    f = click.option(
        "--policy", default=RefPolicy.DIRECT.value, type=click.Choice([p.value for p in RefPolicy]),
        envvar="OPENAPI_SLIM_POLICY", show_default=True,
        help="Follow $ref edges only under paths (direct) or through schemas too (transitive).",
    )(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """openapi-slim — shrink OpenAPI/Swagger documents into a compact notation for LLMs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ParserHandle()


@main.command(name="simplify")
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Write the compact document here instead of stdout.")
@engine_options
@click.pass_obj
def simplify_cmd(handle: ParserHandle, doc_path: Path, output: Path | None, policy: str, max_desc: int, seeds: tuple[str, ...], no_seeds: bool):
    """Compact an OpenAPI/Swagger document (JSON or YAML, '-' for stdin)."""
    config = _build_config(policy, max_desc, seeds, no_seeds)
    try:
        result = _simplify_text(_read_doc(doc_path), config, handle)
    except SlimError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(result.output)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.output, encoding="utf-8")
        click.echo(f"Compact document saved to {output}", err=True)
    click.echo(_format_stats(result), err=True)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Output file rewritten on every change.")
@click.option("--delay", default=DEFAULT_WATCH_DELAY, type=click.FloatRange(min=0), show_default=True, help="Seconds the input must stay unchanged before re-running.")
@engine_options
@click.pass_obj
def watch(handle: ParserHandle, doc_path: Path, output: Path, delay: float, policy: str, max_desc: int, seeds: tuple[str, ...], no_seeds: bool):
    """Re-compact DOC_PATH into OUTPUT whenever it changes."""
    config = _build_config(policy, max_desc, seeds, no_seeds)
    output.parent.mkdir(parents=True, exist_ok=True)
    debouncer = Debouncer(delay, _rebuild)

    click.echo(f"Watching {doc_path} (Ctrl+C to stop)...", err=True)
    _rebuild(doc_path, output, config, handle)
    last_mtime = doc_path.stat().st_mtime_ns
    try:
        while True:
            time.sleep(POLL_INTERVAL)
            try:
                mtime = doc_path.stat().st_mtime_ns
            except FileNotFoundError:
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                debouncer.trigger(doc_path, output, config, handle)
    except KeyboardInterrupt:
        debouncer.cancel()
        click.echo("Stopped.", err=True)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path))
@click.argument("question")
@click.option("--model", default=None, help="LLM model to use.")
@engine_options
@click.pass_obj
def ask(handle: ParserHandle, doc_path: Path, question: str, model: str | None, policy: str, max_desc: int, seeds: tuple[str, ...], no_seeds: bool):
    """Compact DOC_PATH and ask an LLM a QUESTION about the API."""
    config = _build_config(policy, max_desc, seeds, no_seeds)
    try:
        result = _simplify_text(_read_doc(doc_path), config, handle)
    except SlimError as e:
        raise click.ClickException(str(e)) from e
    if not result.output:
        raise click.ClickException("The API document is empty.")

    click.echo(f"Sending compact document ({_format_stats(result)})...", err=True)
    client = LlmClient(model=model)
    click.echo(client.ask(result.output, question))
