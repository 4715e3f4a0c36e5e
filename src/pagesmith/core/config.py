"""Configuration models used by the page renderer.

RenderOptions

`mock` (`bool`)
: Render pages for an embedding preview. Navigation links carry a
  `data-navlink` attribute instead of `href` and the page ships a small script
  that reports link clicks to the parent frame.

`for_file_uri` (`bool`)
: Render pages for browsing straight from the filesystem. Navigation links
  point at `index.html` explicitly since no server resolves directory indexes.

`allow_alternate_status` (`bool`)
: Emit 404 pages as PHP documents that set the HTTP status before returning the
  HTML.

`mock_base_tag_prefix` (`str | None`)
: URL prefix of the preview server. When set in mock mode, pages gain a
  `<base>` tag so relative URLs keep resolving inside the preview frame.

SiteConfig

`base_path` (`str`)
: Directory the site is deployed to on its host, e.g. `/` or `/~me/site/`.
  Pages using absolute links resolve them against this directory.

`output_dir` (`Path`)
: Directory receiving one file per rendered page.

`keep_going` (`bool`)
: Keep rendering remaining pages after one of them fails.

`render` (`RenderOptions`)
: Output mode flags. At most one of `mock`, `for_file_uri` and
  `allow_alternate_status` may be enabled.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
import yaml

from .exceptions import ConfigError, ConflictingRenderModesError
from .paths import SitePath, parse_path


EXCLUSIVE_MODES = ("mock", "for_file_uri", "allow_alternate_status")


def ensure_single_mode(options: RenderOptions) -> RenderOptions:
    """Raise when ``options`` enable more than one exclusive output mode."""
    enabled = [name for name in EXCLUSIVE_MODES if getattr(options, name)]
    if len(enabled) > 1:
        raise ConflictingRenderModesError(
            f"Only one output mode may be enabled at once, got: {', '.join(enabled)}"
        )
    return options


class RenderOptions(BaseModel):
    """Output mode flags shared by every render operation of a page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mock: bool = False
    for_file_uri: bool = False
    allow_alternate_status: bool = False
    mock_base_tag_prefix: str | None = None

    @model_validator(mode="after")
    def check_modes(self) -> RenderOptions:
        """Reject option sets enabling more than one exclusive output mode."""
        return ensure_single_mode(self)


class SiteConfig(BaseModel):
    """Site-wide settings usually read from ``pagesmith.yml``."""

    model_config = ConfigDict(extra="forbid")

    base_path: str = "/"
    output_dir: Path = Path("site")
    keep_going: bool = False
    render: RenderOptions = Field(default_factory=RenderOptions)

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, value: str) -> str:
        """Ensure the deployment root is an absolute directory path."""
        parsed = parse_path(value)
        if parsed is None or not parsed.is_directory:
            raise ValueError(
                f"base_path must be an absolute directory path ending in '/': {value!r}"
            )
        return value

    @property
    def site_base_path(self) -> SitePath:
        """Return the deployment root as a site path."""
        parsed = parse_path(self.base_path)
        if parsed is None:
            raise ConfigError(f"Invalid deployment root {self.base_path!r}")
        return parsed


def load_site_config(path: Path) -> SiteConfig:
    """Load a YAML site configuration, falling back to defaults for an empty file."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file '{path}': {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping")

    try:
        return SiteConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in '{path}': {exc}") from exc


__all__ = [
    "EXCLUSIVE_MODES",
    "RenderOptions",
    "SiteConfig",
    "ensure_single_mode",
    "load_site_config",
]
