"""
Renders markdown posts into a static site.
Each post becomes an HTML page; an index page and, when the site URL is known,
an Atom feed are written next to them.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import HIGHLIGHTER_NAMES, ConfigError, build_config
from .exceptions import MdrError
from .site import build_site

__all__ = ["cli"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.command()
@click.version_option()
@click.option("--name", "site_name", envvar="SITE_NAME", help="The site's name")
@click.option(
    "--out", "-o", "out_dir", envvar="OUT_DIR", help="The directory the build result is saved to"
)
@click.option("--twitter", "twitter_handle", envvar="TWITTER_HANDLE", help="Your Twitter handle")
@click.option("--github", "github_handle", envvar="GITHUB_HANDLE", help="Your GitHub handle")
@click.option("--url", envvar="URL", help="The absolute URL of your site")
@click.option(
    "--highlighter",
    envvar="MDR_HIGHLIGHTER",
    type=click.Choice(HIGHLIGHTER_NAMES),
    help="Code highlighting backend",
)
@click.option(
    "--strikethrough/--no-strikethrough",
    default=None,
    help="Render ~~text~~ as strikethrough",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(path_type=Path, dir_okay=True)
)
def cli(
    files: tuple[Path, ...],
    site_name: str | None = None,
    out_dir: str | None = None,
    twitter_handle: str | None = None,
    github_handle: str | None = None,
    url: str | None = None,
    highlighter: str | None = None,
    strikethrough: bool | None = None,
    log_level: str = "WARNING",
):
    """
    Simple opinionated markdown renderer.

    Args:
        files: Markdown files to render.
        site_name: Override for the site name.
        out_dir: Override for the output directory.
        twitter_handle: Twitter handle linked from every page.
        github_handle: GitHub user linked from every page.
        url: Absolute site URL; enables the Atom feed.
        highlighter: Code highlighting backend.
        strikethrough: Whether ``~~text~~`` renders as strikethrough.
        log_level: Logging verbosity.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If an input is rejected or reading or writing
            fails.

    Examples:
        mdr --name "My Blog" --url https://example.com posts/*.md
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()), format="%(levelname)s: %(message)s"
    )

    try:
        config = build_config(
            Path.cwd(),
            site_name=site_name,
            out_dir=out_dir,
            twitter_handle=twitter_handle,
            github_handle=github_handle,
            url=url,
            highlighter=highlighter,
            strikethrough=strikethrough,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        posts = build_site(list(files), config)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error
    except (MdrError, ValueError, IOError) as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"Rendered {len(posts)} post(s) into {config.out_dir}", err=True)


if __name__ == "__main__":
    cli()
