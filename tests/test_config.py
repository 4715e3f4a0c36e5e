from pathlib import Path

import pytest

from pagesmith.core.config import RenderOptions, SiteConfig, load_site_config
from pagesmith.core.exceptions import ConfigError, PageRenderingError
from pagesmith.core.paths import SitePath


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "pagesmith.yml"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults() -> None:
    config = SiteConfig()
    assert config.base_path == "/"
    assert config.site_base_path == SitePath()
    assert config.output_dir == Path("site")
    assert config.render == RenderOptions()


def test_load_site_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "base_path: /blog/\noutput_dir: public\nkeep_going: true\nrender:\n  for_file_uri: true\n",
    )
    config = load_site_config(path)

    assert config.site_base_path == SitePath(("blog",), "")
    assert config.output_dir == Path("public")
    assert config.keep_going is True
    assert config.render.for_file_uri is True
    assert config.render.mock is False


def test_unvalidated_base_path_raises_config_error() -> None:
    config = SiteConfig.model_construct(base_path="blog/")
    with pytest.raises(ConfigError, match="Invalid deployment root"):
        config.site_base_path


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    assert load_site_config(_write(tmp_path, "")) == SiteConfig()


@pytest.mark.parametrize(
    "content",
    [
        "base_path: [unclosed\n",
        "- just\n- a list\n",
        "unknown: 1\n",
        "base_path: blog/\n",
        "base_path: /blog/index.html\n",
    ],
)
def test_invalid_configuration(tmp_path: Path, content: str) -> None:
    with pytest.raises(ConfigError):
        load_site_config(_write(tmp_path, content))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to read"):
        load_site_config(tmp_path / "absent.yml")


def test_conflicting_modes_in_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "render:\n  mock: true\n  allow_alternate_status: true\n")
    with pytest.raises(PageRenderingError):
        load_site_config(path)


def test_render_options_are_frozen() -> None:
    options = RenderOptions()
    with pytest.raises(ValueError):
        options.mock = True  # type: ignore[misc]
