from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from pagesmith.core.assembler import ALTERNATE_STATUS_PREAMBLE
from pagesmith.ui.cli import app


SITE = """
from pagesmith import NameNavLink, define_page, make_page


def define_pages(pages):
    define_page(pages, make_page(
        "/", name="Home", title="Home", icon="/favicon.ico",
        body=["Welcome, see ", NameNavLink("/about/")],
    ))
    define_page(pages, make_page(
        "/about/", name="About", title="About", icon="/favicon.ico", body="About us",
    ))
"""

DECLARED_SITE = """
from pagesmith import make_page

PAGES = [
    make_page("/", name="Home", title="Home", icon="/favicon.ico", body="Home"),
    make_page(
        "/missing/", name="Missing", title="Missing", icon="/favicon.ico",
        body="Nothing here", is_404=True, uses_absolute=True,
    ),
]
"""

BROKEN_SITE = """
from pagesmith import NameNavLink, make_page

PAGES = {
    "/": make_page("/", name="Home", title="Home", icon="/favicon.ico", body="Home"),
    "/broken/": make_page(
        "/broken/", name="Broken", title="Broken", icon="/favicon.ico",
        body=NameNavLink("/nowhere/"),
    ),
}
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


def _write_site(tmp_path: Path, source: str) -> Path:
    site = tmp_path / "site.py"
    site.write_text(textwrap.dedent(source), encoding="utf-8")
    return site


def test_build_writes_one_file_per_page(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, SITE)
    output = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site), "--output", str(output)])

    assert result.exit_code == 0, result.output
    home = (output / "index.html").read_text(encoding="utf-8")
    assert '<a href="about/">About</a>' in home
    assert (output / "about" / "index.html").read_text(encoding="utf-8").startswith(
        "<!DOCTYPE html>\n"
    )
    assert "2 page(s) written" in result.output


def test_build_file_uri_mode(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, SITE)
    output = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site), "-o", str(output), "--file-uri"])

    assert result.exit_code == 0, result.output
    assert '<a href="about/index.html">About</a>' in (output / "index.html").read_text(
        encoding="utf-8"
    )


def test_build_with_alternate_status(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, DECLARED_SITE)
    output = tmp_path / "public"

    result = runner.invoke(
        app,
        [
            "build",
            str(site),
            "-o",
            str(output),
            "--base-path",
            "/deploy/",
            "--allow-alternate-status",
        ],
    )

    assert result.exit_code == 0, result.output
    php = (output / "missing" / "index.php").read_text(encoding="utf-8")
    assert php.startswith(ALTERNATE_STATUS_PREAMBLE)
    assert 'href="/deploy/favicon.ico"' in php
    assert not (output / "missing" / "index.html").exists()


def test_build_reads_configuration_file(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, SITE)
    output = tmp_path / "from-config"
    config = tmp_path / "pagesmith.yml"
    config.write_text(
        f"output_dir: {output.as_posix()}\nrender:\n  mock: true\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["build", str(site), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert '<a data-navlink="about/">About</a>' in (output / "index.html").read_text(
        encoding="utf-8"
    )


def test_build_rejects_conflicting_modes(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, SITE)
    output = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site), "-o", str(output), "--mock", "--file-uri"])

    assert result.exit_code == 1
    assert "Only one output mode" in result.output
    assert not output.exists()


def test_build_stops_on_first_failure(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, BROKEN_SITE)
    output = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site), "-o", str(output)])

    assert result.exit_code == 1
    assert "/nowhere/" in result.output
    assert not output.exists()


def test_build_keep_going_writes_remaining_pages(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, BROKEN_SITE)
    output = tmp_path / "public"

    result = runner.invoke(app, ["build", str(site), "-o", str(output), "--keep-going"])

    assert result.exit_code == 1
    assert (output / "index.html").exists()
    assert not (output / "broken").exists()
    assert "1 failed" in result.output


def test_build_requires_page_declarations(runner: CliRunner, tmp_path: Path) -> None:
    site = _write_site(tmp_path, "VALUE = 1\n")

    result = runner.invoke(app, ["build", str(site), "-o", str(tmp_path / "out")])

    assert result.exit_code != 0


def test_rules_prints_support_matrix(runner: CliRunner) -> None:
    result = runner.invoke(app, ["rules"])

    assert result.exit_code == 0, result.output
    assert "Render Support" in result.output
    for variant in ("NameNavLink", "Composed", "Token"):
        assert variant in result.output


def test_rules_verbose_lists_handler_names(runner: CliRunner) -> None:
    result = runner.invoke(app, ["rules", "-v"])

    assert result.exit_code == 0, result.output
    assert "render_text" in result.output
