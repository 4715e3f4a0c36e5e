"""Implementation of the `pagesmith build` command."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError
import typer

from pagesmith.core.assembler import render_all_pages
from pagesmith.core.config import RenderOptions, SiteConfig, load_site_config
from pagesmith.core.exceptions import ConfigError, PageRenderingError

from .._options import (
    AlternateStatusOption,
    BasePathOption,
    ConfigOption,
    DebugOption,
    FileUriOption,
    KeepGoingOption,
    MockOption,
    OutputDirOption,
    SiteModuleArgument,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_build_summary
from ..state import emit_error, set_cli_state
from ..utils import collect_site_pages, load_site_module, output_file_path, write_output_file


def resolve_site_config(
    config_path: Path | None,
    *,
    output_dir: Path | None = None,
    base_path: str | None = None,
    keep_going: bool = False,
    mode_flags: dict[str, bool] | None = None,
) -> SiteConfig:
    """Merge the configuration file with command line overrides.

    Command line flags only ever enable options, so a mode enabled in the file
    and a different mode enabled on the command line conflict.
    """
    site_config = load_site_config(config_path) if config_path is not None else SiteConfig()
    payload: dict[str, Any] = site_config.model_dump()
    if output_dir is not None:
        payload["output_dir"] = output_dir
    if base_path is not None:
        payload["base_path"] = base_path
    if keep_going:
        payload["keep_going"] = True

    render = dict(payload["render"])
    render.update({name: True for name, enabled in (mode_flags or {}).items() if enabled})
    payload["render"] = RenderOptions.model_validate(render)

    try:
        return SiteConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid build settings: {exc}") from exc


def build(
    ctx: typer.Context,
    site: SiteModuleArgument,
    config: ConfigOption = None,
    output_dir: OutputDirOption = None,
    base_path: BasePathOption = None,
    mock: MockOption = False,
    file_uri: FileUriOption = False,
    allow_alternate_status: AlternateStatusOption = False,
    keep_going: KeepGoingOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render every page of a site into an output directory."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    try:
        site_config = resolve_site_config(
            config,
            output_dir=output_dir,
            base_path=base_path,
            keep_going=keep_going,
            mode_flags={
                "mock": mock,
                "for_file_uri": file_uri,
                "allow_alternate_status": allow_alternate_status,
            },
        )
    except PageRenderingError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    pages = collect_site_pages(load_site_module(site))
    emitter = CliEmitter(state=state)

    try:
        files = render_all_pages(
            pages,
            site_config.site_base_path,
            site_config.render,
            emitter=emitter,
            keep_going=site_config.keep_going,
        )
    except PageRenderingError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    written: list[tuple[str, Path]] = []
    permalinks = {
        event.get("output"): event.get("permalink")
        for event in state.consume_events("page_rendered")
    }
    for site_path, text in files.items():
        target = output_file_path(site_config.output_dir, site_path)
        try:
            write_output_file(target, text)
        except OSError as exc:
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc
        written.append((permalinks.get(site_path) or site_path, target))

    failures = len(state.consume_events("page_failed"))
    present_build_summary(state, written, failures)
    if failures:
        raise typer.Exit(code=1)


__all__ = ["build", "resolve_site_config"]
