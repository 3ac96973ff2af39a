"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from sonar_scan_manager.analysis.driver import analyze
from sonar_scan_manager.configuration.driver import get_analysis_config
from sonar_scan_manager.configuration.exceptions import (
    RequiredConfigurationElementError,
    SonarAuthenticationConfigurationUndefinedError,
)
from sonar_scan_manager.configuration.models import AnalysisConfig
from sonar_scan_manager.lifecycle.readiness import wait_until_ready
from sonar_scan_manager.lifecycle.server import start_and_wait_ready
from sonar_scan_manager.resolve.functions import resolve_function
from sonar_scan_manager.scanning.issues import fetch_issues
from sonar_scan_manager.schemas.issues import AnalysisResultModel
from sonar_scan_manager.sonar.adapter import SonarHttpxAdapter
from sonar_scan_manager.sonar.exceptions import SonarScanManagerError
from sonar_scan_manager.utils.constants import DEFAULT_FUNCTION_KEYWORD
from sonar_scan_manager.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Scan source trees with SonarQube and map issues to functions.")


def sonar_callback(
    ctx: typer.Context,
    sonar_url: Annotated[str | None, Option(envvar="SONAR_URL", help="SonarQube server URL.")] = None,
    sonar_token: Annotated[str | None, Option(envvar="SONAR_TOKEN", help="SonarQube user token.")] = None,
    sonar_user: Annotated[str | None, Option(envvar="SONAR_USER", help="SonarQube user name.")] = None,
    sonar_password: Annotated[str | None, Option(envvar="SONAR_PASSWORD", help="SonarQube user password.")] = None,
    project_key: Annotated[str | None, Option(envvar="SONAR_PROJECT_KEY", help="SonarQube project key.")] = None,
    language: Annotated[str | None, Option(envvar="SONAR_LANGUAGE", help="Language of the issues to fetch.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Store the SonarQube connection options for the current context."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["sonar_url"] = sonar_url
    ctx.obj["sonar_token"] = sonar_token
    ctx.obj["sonar_user"] = sonar_user
    ctx.obj["sonar_password"] = sonar_password
    ctx.obj["project_key"] = project_key
    ctx.obj["language"] = language
    ctx.obj["debug"] = debug


typer_app.callback()(sonar_callback)


def _get_config(ctx: typer.Context, **overrides: object) -> AnalysisConfig:
    """Reconcile the context's connection options with the environment, exiting on invalid configuration."""
    options = dict(ctx.find_root().obj or {})
    options.update(overrides)
    try:
        return get_analysis_config(**options)  # type: ignore[arg-type]
    except (SonarAuthenticationConfigurationUndefinedError, RequiredConfigurationElementError, ValueError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(1) from exc


def _parse_properties(properties: list[str]) -> dict[str, str]:
    """Parse repeated key=value scanner properties."""
    parsed: dict[str, str] = {}
    for prop in properties:
        name, separator, value = prop.partition("=")
        if not separator or not name:
            typer.echo(f"Scanner property must be in key=value form: {prop}", err=True)
            raise typer.Exit(1)
        parsed[name] = value
    return parsed


def _emit_result(result: AnalysisResultModel, output_file: Path | None) -> None:
    content = result.model_dump_json(indent=2)
    if output_file is None:
        typer.echo(content)
        return
    output_file.write_text(content + "\n", encoding="utf-8")
    typer.echo(f"Wrote {len(result.issues)} issues to {output_file}", err=True)


def _create_adapter(config: AnalysisConfig) -> SonarHttpxAdapter:
    return SonarHttpxAdapter.create(
        sonar_auth_type=config.sonar_authentication_type,
        sonar_token=config.sonar_token,
        sonar_user=config.sonar_user,
        sonar_password=config.sonar_password,
        sonar_url=config.sonar_url,
    )


@typer_app.command(name="analyze")
def analyze_cli(
    ctx: typer.Context,
    source_path: Annotated[Path, Argument(help="Directory containing the source code to analyze.")],
    start_server: Annotated[bool, Option(help="Launch the SonarQube server and wait until it is ready first.")] = False,
    ready_timeout: Annotated[
        float | None, Option(envvar="SONAR_READY_TIMEOUT", help="Seconds to wait for the server to become ready (default: forever).")
    ] = None,
    scanner_property: Annotated[list[str] | None, Option("--property", "-D", help="Extra scanner property as key=value.")] = None,
    output_file: Annotated[Path | None, Option("--output", help="Write the JSON result to this file instead of stdout.")] = None,
) -> None:
    """Scan a source tree and print its issues resolved to their enclosing functions."""
    if not source_path.exists():
        typer.echo(f"Source path not found: {source_path.absolute()}", err=True)
        raise typer.Exit(1)
    if not source_path.is_dir():
        typer.echo(f"Source path is not a directory: {source_path.absolute()}", err=True)
        raise typer.Exit(1)

    config = _get_config(ctx, ready_timeout=ready_timeout, scanner_properties=_parse_properties(scanner_property or []))
    typer.echo(f"Analyzing {source_path.absolute()} as SonarQube project '{config.project_key}'", err=True)

    try:
        result = asyncio.run(analyze(source_path.absolute(), config, start_server=start_server))
    except (SonarScanManagerError, OSError) as exc:
        typer.echo(f"Analysis failed: {exc}", err=True)
        raise typer.Exit(1) from exc

    _emit_result(result, output_file)


@typer_app.command(name="issues")
def issues_cli(
    ctx: typer.Context,
    output_file: Annotated[Path | None, Option("--output", help="Write the JSON result to this file instead of stdout.")] = None,
) -> None:
    """Fetch the current issues of the SonarQube project without scanning."""
    config = _get_config(ctx)

    async def run_fetch() -> AnalysisResultModel:
        async with _create_adapter(config) as adapter:
            return await fetch_issues(adapter, config.project_key, config.language, config.page_size)

    try:
        result = asyncio.run(run_fetch())
    except SonarScanManagerError as exc:
        typer.echo(f"Fetching issues failed: {exc}", err=True)
        raise typer.Exit(1) from exc

    _emit_result(result, output_file)


@typer_app.command(name="resolve")
def resolve_cli(
    file_path: Annotated[Path, Argument(help="Source file to read.")],
    line: Annotated[int, Argument(help="1-based line number.")],
    keyword: Annotated[str, Option(envvar="SONAR_FUNCTION_KEYWORD", help="Function declaration keyword.")] = DEFAULT_FUNCTION_KEYWORD,
) -> None:
    """Print the name of the function enclosing a line of a source file."""
    try:
        typer.echo(resolve_function(file_path, line, keyword))
    except OSError as exc:
        typer.echo(f"Cannot read {file_path}: {exc}", err=True)
        raise typer.Exit(1) from exc


# --- Add a new Typer group for server commands ---
server_app = typer.Typer(help="SonarQube server commands")


@server_app.command(name="start")
def server_start_cli(
    ctx: typer.Context,
    ready_timeout: Annotated[
        float | None, Option(envvar="SONAR_READY_TIMEOUT", help="Seconds to wait for the server to become ready (default: forever).")
    ] = None,
) -> None:
    """Launch the SonarQube server, wait until it is ready, then keep it running in the foreground."""
    config = _get_config(ctx, ready_timeout=ready_timeout)

    async def run_server() -> int:
        async with _create_adapter(config) as adapter:
            process = await start_and_wait_ready(adapter, config)
        typer.echo(f"SonarQube server is ready at {config.sonar_url}", err=True)
        return await process.wait()

    try:
        returncode = asyncio.run(run_server())
    except (SonarScanManagerError, OSError) as exc:
        typer.echo(f"SonarQube server failed to start: {exc}", err=True)
        raise typer.Exit(1) from exc
    raise typer.Exit(returncode)


@server_app.command(name="wait")
def server_wait_cli(
    ctx: typer.Context,
    ready_timeout: Annotated[
        float | None, Option(envvar="SONAR_READY_TIMEOUT", help="Seconds to wait for the server to become ready (default: forever).")
    ] = None,
) -> None:
    """Wait until an already running SonarQube server is ready."""
    config = _get_config(ctx, ready_timeout=ready_timeout)

    async def run_wait() -> None:
        async with _create_adapter(config) as adapter:
            await wait_until_ready(adapter, poll_interval=config.health_poll_interval, timeout=config.ready_timeout)

    try:
        asyncio.run(run_wait())
    except SonarScanManagerError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"SonarQube server is ready at {config.sonar_url}")


# --- Register the server_app as a sub-app of the main Typer app ---
typer_app.add_typer(server_app, name="server")


if __name__ == "__main__":
    typer_app()
