from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

import typer

from .api import CratesClient
from ..core.errors import CratesClientError
from ..infra import schemas


app = typer.Typer(help="crates.io registry client")


@app.callback()
def main(
    ctx: typer.Context,
    user_agent: str | None = typer.Option(
        None,
        "--user-agent",
        "-u",
        envvar="CRATES_CLIENT_USER_AGENT",
        help="User-Agent sent to the registry, e.g. 'my_crawler (help@my_crawler.com)'",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log requests and rate-limit waits"),
) -> None:
    ctx.obj = {"user_agent": user_agent}
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")


@contextmanager
def provide_client(ctx: typer.Context) -> Iterator[CratesClient]:
    user_agent = (ctx.obj or {}).get("user_agent")
    try:
        client = CratesClient(user_agent=user_agent)
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)
    try:
        yield client
    except CratesClientError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()


@app.command(help="Search crates. Accepts bare words plus cat=, kw=, sort=, page=, num= options (e.g. 'api cat=web sort=update').")
def search(ctx: typer.Context, query: list[str] = typer.Argument(..., help="Query tokens", metavar="QUERY")) -> None:
    with provide_client(ctx) as client:
        page = client.search(" ".join(query))
        _print_crates(page.crates)
        typer.echo(f"{len(page.crates)} of {page.meta.total} crates")


@app.command(help="Show a crate: description, latest version, downloads, links, categories and keywords.")
def info(ctx: typer.Context, name: str = typer.Argument(..., help="Crate name")) -> None:
    with provide_client(ctx) as client:
        resp = client.crate(name)
        _print_detail(resp)


@app.command(help="Print the readme of a crate version.")
def readme(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Crate name"),
    version: str = typer.Argument(..., help="Version number, e.g. 1.0.0"),
) -> None:
    with provide_client(ctx) as client:
        typer.echo(client.readme(name, version))


def _print_crates(crates: Sequence[schemas.Crate]) -> None:
    typer.echo(f"{'Name':30} {'Version':12} {'Downloads':>12}  Description")
    for c in crates:
        desc = (c.description or "").strip().replace("\n", " ")
        if len(desc) > 60:
            desc = desc[:57] + "..."
        typer.echo(f"{c.name:30} {c.max_version:12} {c.downloads:>12}  {desc}")


def _print_detail(resp: schemas.CrateResponse) -> None:
    c = resp.crate_data
    typer.echo(f"Name: {c.name}")
    typer.echo(f"Version: {c.max_version}")
    if c.description:
        typer.echo(f"Description: {c.description.strip()}")
    typer.echo(f"Downloads: {c.downloads}")
    if c.license:
        typer.echo(f"License: {c.license}")
    if c.repository:
        typer.echo(f"Repository: {c.repository}")
    if c.documentation:
        typer.echo(f"Documentation: {c.documentation}")
    if resp.categories:
        typer.echo(f"Categories: {', '.join(cat.slug for cat in resp.categories)}")
    if resp.keywords:
        typer.echo(f"Keywords: {', '.join(k.keyword for k in resp.keywords)}")
    typer.echo(f"Updated: {c.updated_at}")
