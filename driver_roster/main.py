from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import typer

from driver_roster.config import PageConfig, Settings, get_settings, load_page_config
from driver_roster.controller import PageController
from driver_roster.errors import ConfigError
from driver_roster.mock_api import run_mock_api
from driver_roster.reporter import print_rows
from driver_roster.utils.logging import configure_logging

app = typer.Typer(help="Driver roster: list, filter and export driver records.")

ConfigOption = typer.Option(None, "--config", "-c", help="Page configuration JSON file.")
ModeOption = typer.Option(None, "--mode", "-m", help="Data source: mock or api.")
StatusOption = typer.Option(None, "--status", help="Status to match (case-insensitive).")
SearchOption = typer.Option(None, "--search", "-q", help="Text searched in the text filter's fields.")
FromOption = typer.Option(None, "--from", help="Earliest hire date (YYYY-MM-DD).")
ToOption = typer.Option(None, "--to", help="Latest hire date, inclusive (YYYY-MM-DD).")
PresetOption = typer.Option(None, "--preset", help="Date preset id (e.g. last7, last30).")
FilterOption = typer.Option(None, "--filter", help="Raw filter value as ID=VALUE (repeatable).")


def _first_of_kind(config: PageConfig, kind: str) -> Optional[str]:
    for definition in config.filters:
        if definition.kind == kind:
            return definition.id
    return None


def _build_controller(
    settings: Settings, config_path: Optional[Path], mode: Optional[str]
) -> PageController:
    overrides = {"dataSource": {"mode": mode}} if mode else None
    try:
        config = load_page_config(config_path, overrides=overrides, settings=settings)
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    return PageController(config, settings=settings)


def _apply_cli_filters(
    controller: PageController,
    status: Optional[str],
    search: Optional[str],
    start: Optional[str],
    end: Optional[str],
    preset: Optional[str],
    raw: Optional[List[str]],
) -> None:
    config = controller.config
    try:
        select_id = _first_of_kind(config, "select")
        text_id = _first_of_kind(config, "text")
        range_id = _first_of_kind(config, "dateRange")
        if status is not None and select_id:
            controller.set_filter(select_id, status)
        if search is not None and text_id:
            controller.set_filter(text_id, search)
        if range_id and preset:
            controller.apply_preset(range_id, preset)
        if range_id and (start is not None or end is not None):
            controller.patch_date_range(range_id, start=start, end=end)
        for item in raw or []:
            filter_id, sep, value = item.partition("=")
            if not sep:
                raise ValueError(f"Expected ID=VALUE, got '{item}'")
            controller.set_filter(filter_id.strip(), value)
    except (KeyError, ValueError) as exc:
        typer.echo(f"Invalid filter: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _load(controller: PageController) -> None:
    asyncio.run(controller.reload())


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"mode={settings.data_source_mode} api={settings.api_method} {settings.api_url} | "
        f"export_dir={settings.export_dir} base={settings.file_base_name} | "
        f"attempts={settings.fetch_attempts} timeout={settings.fetch_timeout_seconds}s "
        f"lang={settings.language}"
    )


@app.command()
def formats() -> None:
    """
    List the registered export formats.
    """
    settings = get_settings()
    controller = PageController(load_page_config(settings=settings), settings=settings)
    for name, description in controller.registry.describe().items():
        typer.echo(f"{name:<12} {description}")


@app.command("list")
def list_drivers(
    config_path: Optional[Path] = ConfigOption,
    mode: Optional[str] = ModeOption,
    status: Optional[str] = StatusOption,
    search: Optional[str] = SearchOption,
    start: Optional[str] = FromOption,
    end: Optional[str] = ToOption,
    preset: Optional[str] = PresetOption,
    raw: Optional[List[str]] = FilterOption,
) -> None:
    """
    Load drivers, apply filters and print the table.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    controller = _build_controller(settings, config_path, mode)
    _apply_cli_filters(controller, status, search, start, end, preset, raw)
    _load(controller)
    print_rows(
        controller.filtered(),
        controller.columns(),
        title=controller.translate(controller.config.title_key),
        empty_message=controller.translate("empty.noRows"),
        source_label=controller.source_label(),
    )


@app.command()
def export(
    fmt: List[str] = typer.Option(
        ["csv"],
        "--format",
        "-f",
        help="Export format (repeatable): csv, xlsx, pdf, json, quickbooks, fmcsa, or all.",
    ),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for exported files."),
    name: Optional[str] = typer.Option(None, "--name", help="File base name (default from config)."),
    config_path: Optional[Path] = ConfigOption,
    mode: Optional[str] = ModeOption,
    status: Optional[str] = StatusOption,
    search: Optional[str] = SearchOption,
    start: Optional[str] = FromOption,
    end: Optional[str] = ToOption,
    preset: Optional[str] = PresetOption,
    raw: Optional[List[str]] = FilterOption,
) -> None:
    """
    Load drivers, apply filters and write the requested export files.
    """
    settings = get_settings()
    if output_dir is not None:
        settings = settings.model_copy(update={"export_dir": output_dir})
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    controller = _build_controller(settings, config_path, mode)
    _apply_cli_filters(controller, status, search, start, end, preset, raw)

    names = controller.export_formats() if "all" in fmt else fmt
    unknown = [n for n in names if n not in controller.registry]
    if unknown:
        typer.echo(
            f"Unknown format(s): {', '.join(unknown)}. Available: {', '.join(controller.export_formats())}",
            err=True,
        )
        raise typer.Exit(code=2)

    _load(controller)
    failed = 0
    for format_name in names:
        outcome = controller.export(format_name, file_base_name=name)
        if outcome.ok:
            typer.echo(f"{format_name}: {outcome.rows} row(s) -> {outcome.path}")
        else:
            failed += 1
            typer.echo(f"{format_name}: export failed: {outcome.error}", err=True)
    if failed:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
) -> None:
    """
    Run the mock driver API.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    run_mock_api(host or settings.mock_api_host, port or settings.mock_api_port)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
