"""Typer CLI application: encode, stats, presets, serve."""

from __future__ import annotations

import sys
from typing import Annotated, Any, Optional

import typer

import toonlite
from toonlite.contracts.common import Target
from toonlite.engine.dispatcher import (
    error_code_for,
    error_envelope,
    exit_code_for,
    print_response,
    success_envelope,
)
from toonlite.engine.runner import preset_table, run_encode, run_stats
from toonlite.engine.tokens import TokenCounter, approx_token_count
from toonlite.io.fileops import atomic_write, load_data, parse_data
from toonlite.observe.events import EventEmitter

_MAIN_HELP = """\
Encode JSON or YAML data as TOON, a compact notation that costs LLMs fewer tokens.

**Examples:**

`toon encode -f data.json`  — envelope with the TOON text and token estimate

`toon encode -f data.json --preset for-llm --raw`  — bare TOON for piping into a prompt

`toon encode --data '{"tags":["jazz","chill"]}'`  — inline JSON input

`toon stats -f data.json --tiktoken cl100k_base`  — compare JSON and TOON token counts

**Presets:** for-llm, for-llm-nested, for-debugging, for-compatibility (see `toon presets`).

**Exit codes:** 0=success, 10=validation, 50=io, 70=unsupported, 90=internal
"""


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(toonlite.__version__)
        raise typer.Exit()


app = typer.Typer(
    name="toon",
    help=_MAIN_HELP,
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Print version and exit.", is_eager=True)
    ] = False,
) -> None:
    if version:
        _version_callback(True)


# Type aliases for common options
FilePath = Annotated[Optional[str], typer.Option("--file", "-f", help="Path to a .json/.yaml input file ('-' reads stdin)")]
InlineData = Annotated[Optional[str], typer.Option("--data", help="Inline JSON value to encode")]
TiktokenOpt = Annotated[Optional[str], typer.Option("--tiktoken", help="Count tokens with this tiktoken encoding or model (needs the 'tokens' extra)")]
EventsFlag = Annotated[bool, typer.Option("--events", help="Emit NDJSON lifecycle events on stderr")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _emit(envelope, code=None):
    print_response(envelope)
    raise typer.Exit(code if code is not None else exit_code_for(envelope))


def _load_input(file: str | None, data: str | None, cmd: str) -> Any:
    """Load the value to encode, or emit an error envelope."""
    target = Target(file=file)
    if file and data:
        _emit(error_envelope(cmd, "ERR_INVALID_ARGUMENT", "Use either --file or --data", target=target))
    if not file and data is None:
        _emit(error_envelope(cmd, "ERR_MISSING_DATA", "Provide --file or --data", target=target))
    try:
        if data is not None:
            return parse_data(data)
        if file == "-":
            return parse_data(sys.stdin.read())
        return load_data(file)
    except Exception as e:
        code = error_code_for(e)
        if code == "ERR_INPUT_INVALID":
            message = f"Cannot parse input: {e}"
        else:
            message = str(e)
        _emit(error_envelope(cmd, code, message, target=target))


def _token_counter(tiktoken_name: str | None, cmd: str) -> tuple[TokenCounter, str]:
    if not tiktoken_name:
        return approx_token_count, "approx"
    from toonlite.engine.tokens import tiktoken_counter

    try:
        return tiktoken_counter(tiktoken_name), f"tiktoken:{tiktoken_name}"
    except ImportError:
        _emit(error_envelope(cmd, "ERR_UNSUPPORTED_COUNTER", "tiktoken is not installed; install the 'tokens' extra"))
    except (KeyError, ValueError) as e:
        _emit(error_envelope(cmd, "ERR_INVALID_ARGUMENT", f"Unknown tiktoken encoding: {e}"))


# ---------------------------------------------------------------------------
# toon version
# ---------------------------------------------------------------------------
@app.command()
def version():
    """Print the toon CLI version.

    Example: `toon version`
    """
    env = success_envelope("version", {"version": toonlite.__version__})
    _emit(env)


# ---------------------------------------------------------------------------
# toon encode
# ---------------------------------------------------------------------------
@app.command("encode")
def encode_cmd(
    file: FilePath = None,
    data: InlineData = None,
    preset: Annotated[Optional[str], typer.Option("--preset", "-p", help="Start from a named preset (see 'toon presets')")] = None,
    config: Annotated[Optional[str], typer.Option("--config", help="YAML/JSON file of option fields, applied over the preset")] = None,
    delimiter: Annotated[Optional[str], typer.Option("--delimiter", "-d", help="comma, tab, or pipe")] = None,
    compact_booleans: Annotated[Optional[bool], typer.Option("--compact-booleans/--no-compact-booleans", help="Render booleans as 1/0")] = None,
    compact_null: Annotated[Optional[bool], typer.Option("--compact-null/--no-compact-null", help="Render null as ~")] = None,
    readable: Annotated[Optional[bool], typer.Option("--readable/--no-readable", help="Add a space after separators")] = None,
    tabular: Annotated[Optional[bool], typer.Option("--tabular/--no-tabular", help="Render uniform object arrays as tables")] = None,
    flatten: Annotated[Optional[bool], typer.Option("--flatten/--no-flatten", help="Flatten nested objects in arrays into table columns")] = None,
    strict_keys: Annotated[Optional[bool], typer.Option("--strict-keys/--no-strict-keys", help="Fail when flattening maps two fields onto one column")] = None,
    raw: Annotated[bool, typer.Option("--raw", help="Write bare TOON text to stdout instead of the JSON envelope")] = False,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Also write the TOON text to this file")] = None,
    tiktoken_name: TiktokenOpt = None,
    events: EventsFlag = False,
):
    """Encode a JSON or YAML value as TOON.

    Options are resolved as defaults < `--preset` < `--config` < flags.
    Flattening collisions are reported as `WARN_FLATTEN_COLLISION` warnings
    unless `--strict-keys` turns them into errors.

    Example: `toon encode -f orders.json --preset for-llm-nested`

    Example: `toon encode --data '[{"id":1},{"id":2}]' --raw`
    """
    from toonlite.presets import resolve_options

    target = Target(file=file, preset=preset)
    value = _load_input(file, data, "encode")

    overrides = {
        "delimiter": delimiter,
        "compact_booleans": compact_booleans,
        "compact_null": compact_null,
        "readable": readable,
        "tabular": tabular,
        "flatten": flatten,
        "strict_keys": strict_keys,
    }
    try:
        options = resolve_options(preset, overrides, config)
    except Exception as e:
        code = error_code_for(e)
        if code == "ERR_INPUT_INVALID":
            code = "ERR_OPTIONS_INVALID"
        _emit(error_envelope("encode", code, str(e), target=target))

    count_tokens, _ = _token_counter(tiktoken_name, "encode")
    env, text = run_encode(
        value,
        options,
        target=target,
        count_tokens=count_tokens,
        emitter=EventEmitter(enabled=events),
    )

    if text is not None and out:
        try:
            atomic_write(out, text)
        except OSError as e:
            _emit(error_envelope("encode", "ERR_IO_WRITE", f"Cannot write {out}: {e}", target=target))
        env.result["out_path"] = out

    if text is not None and raw:
        sys.stdout.write(text + "\n")
        raise typer.Exit(0)
    _emit(env)


# ---------------------------------------------------------------------------
# toon stats
# ---------------------------------------------------------------------------
@app.command("stats")
def stats_cmd(
    file: FilePath = None,
    data: InlineData = None,
    tiktoken_name: TiktokenOpt = None,
    events: EventsFlag = False,
):
    """Compare token counts of JSON and TOON renderings of a value.

    Reports characters, tokens and savings against pretty-printed JSON for
    compact JSON, default TOON, and the for-llm / for-llm-nested presets.
    Tokens are estimated at four characters each unless `--tiktoken` is given.

    Example: `toon stats -f data.json --tiktoken cl100k_base`
    """
    value = _load_input(file, data, "stats")
    count_tokens, counter_name = _token_counter(tiktoken_name, "stats")
    env = run_stats(
        value,
        target=Target(file=file),
        count_tokens=count_tokens,
        counter_name=counter_name,
        emitter=EventEmitter(enabled=events),
    )
    _emit(env)


# ---------------------------------------------------------------------------
# toon presets
# ---------------------------------------------------------------------------
@app.command("presets")
def presets_cmd():
    """List the named option presets and their settings.

    Example: `toon presets`
    """
    rows = [p.model_dump() for p in preset_table()]
    _emit(success_envelope("presets", rows))


# ---------------------------------------------------------------------------
# toon serve --stdio
# ---------------------------------------------------------------------------
@app.command("serve")
def serve_cmd(
    stdio: Annotated[bool, typer.Option("--stdio", help="Use stdin/stdout for JSON request/response (for agent tool integration)")] = True,
):
    """Start a stdio server for agent tool integration.

    Reads JSON commands from stdin and writes JSON responses to stdout.
    Each line is a JSON object: `{"id": "1", "command": "encode", "args": {"value": {...}, "preset": "for-llm"}}`

    Example: `toon serve --stdio`
    """
    from toonlite.server.stdio import StdioServer

    server = StdioServer()
    server.run()


# ---------------------------------------------------------------------------
# Entrypoint (for `python -m toonlite`)
# ---------------------------------------------------------------------------
def run() -> None:
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        # Any unhandled exception still reaches the caller as a JSON envelope.
        env = error_envelope("unknown", "ERR_INTERNAL", str(exc))
        print_response(env)
        raise SystemExit(90) from exc


if __name__ == "__main__":
    run()
