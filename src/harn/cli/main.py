"""CLI entry point for harn."""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional, Tuple

import click
from click.core import ParameterSource
from colorama import just_fix_windows_console

from harn import __version__
from harn.config import ConfigError, HarnConfig, load_config, resolve_config_path
from harn.core import HarnessRunner, PatternError, RunOptions, discover_cases
from harn.logs import init_logging
from harn.reporting import JsonReporter, ReportManager, Reporter, RunInfo, TerminalReporter, Theme
from harn.utils.durations import DURATION

logger = logging.getLogger(__name__)

# -h selects hash mode, so help is long-form only.
CONTEXT_SETTINGS = {"help_option_names": ["--help"]}

USAGE_LINES = (
    "Usage: harn [options] <program_to_execute> <glob_pattern>",
    "Example: harn -v -t 5s ./myprogram 'testcases/*.in'",
    "  -v               Enable full output when tests fail",
    "  -s               Do not print a diff when a test fails",
    "  -t               Set timeout for program execution (default: 30s)",
    "  -g               Generate output files if they don't exist",
    "  -f               (when -g is passed in) Overwrite the output file even if it exists",
    "  -h               Use SHA256 to compare with .hash files instead of .out files",
    "  --help           Show all options",
)

# config key -> click parameter name
_CONFIG_PARAMS = {
    "timeout": "timeout",
    "verbose": "verbose",
    "silent": "silent",
    "generate": "generate",
    "force": "force",
    "hash": "hash_mode",
    "color": "no_color",
    "strict": "strict",
    "report": "report_format",
    "report_path": "report_path",
}


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"harn {__version__}")
    raise click.exceptions.Exit()


def _apply_config(ctx: click.Context, config: HarnConfig, values: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in options the user did not pass explicitly from the defaults file."""

    merged = dict(values)
    for key, value in config.as_dict().items():
        param_name = _CONFIG_PARAMS[key]
        if ctx.get_parameter_source(param_name) not in (ParameterSource.DEFAULT, None):
            continue
        merged[param_name] = not value if key == "color" else value
    return merged


def _build_reporter(
    report_format: str,
    report_path: Optional[str],
    *,
    verbose: bool,
    silent: bool,
    use_color: bool,
) -> Reporter:
    if report_format == "json":
        return JsonReporter(report_path)
    theme = Theme() if use_color else Theme.plain()
    return TerminalReporter(theme=theme, verbose=verbose, silent=silent)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("targets", nargs=-1, metavar="PROGRAM GLOB_PATTERN")
@click.option("-v", "verbose", is_flag=True, help="Show expected and actual output for every compared test.")
@click.option("-s", "silent", is_flag=True, help="Do not print a diff when a test fails.")
@click.option(
    "-t",
    "timeout",
    type=DURATION,
    default="30s",
    show_default=True,
    help="Timeout for program execution (e.g. 500ms, 5s, 1m).",
)
@click.option("-g", "generate", is_flag=True, help="Generate expected output files if they don't exist.")
@click.option("-f", "force", is_flag=True, help="With -g, overwrite expected output files that already exist.")
@click.option("-h", "hash_mode", is_flag=True, help="Compare SHA256 digests in .hash files instead of .out files.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    show_default=True,
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path instead of stdout.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML file with default option values (or set HARN_CONFIG).",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 when any test does not pass.")
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the harn version and exit.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    targets: Tuple[str, ...],
    verbose: bool,
    silent: bool,
    timeout: float,
    generate: bool,
    force: bool,
    hash_mode: bool,
    no_color: bool,
    report_format: str,
    report_path: Optional[str],
    config_path: Optional[str],
    strict: bool,
    debug: bool,
) -> None:
    """Run PROGRAM once per file matching GLOB_PATTERN and check its output."""

    init_logging(debug)
    try:
        config = load_config(resolve_config_path(config_path))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    values = _apply_config(
        ctx,
        config,
        {
            "verbose": verbose,
            "silent": silent,
            "timeout": timeout,
            "generate": generate,
            "force": force,
            "hash_mode": hash_mode,
            "no_color": no_color,
            "strict": strict,
            "report_format": report_format,
            "report_path": report_path,
        },
    )

    if len(targets) < 2:
        for line in USAGE_LINES:
            click.echo(line)
        raise click.exceptions.Exit(1)
    program, pattern = targets[0], targets[1]

    try:
        cases = discover_cases(pattern, values["hash_mode"])
    except PatternError as exc:
        raise click.ClickException(f"Error matching glob pattern: {exc}") from exc
    if not cases:
        click.echo(f"No files found matching pattern: {pattern}")
        return

    just_fix_windows_console()
    options = RunOptions(
        program=program,
        timeout_s=values["timeout"],
        generate=values["generate"],
        force=values["force"],
        hash_mode=values["hash_mode"],
    )
    logger.debug("running %d case(s) with %s", len(cases), options)
    reporter = _build_reporter(
        values["report_format"],
        values["report_path"],
        verbose=values["verbose"],
        silent=values["silent"],
        use_color=not values["no_color"],
    )
    manager = ReportManager([reporter])
    manager.start(
        RunInfo(
            program=program,
            pattern=pattern,
            total=len(cases),
            timeout_s=options.timeout_s,
            generate=options.generate,
            hash_mode=options.hash_mode,
        )
    )
    summary = HarnessRunner(options).run(cases, on_result=manager.handle_result)
    try:
        manager.complete(summary)
    except RuntimeError as exc:
        raise click.ClickException(str(exc)) from exc
    if values["strict"] and not summary.all_passed:
        raise click.exceptions.Exit(1)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="harn", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
