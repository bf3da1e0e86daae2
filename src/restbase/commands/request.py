"""Request commands -- issue cached GETs from the command line.

Provides ``restbase get`` for any JSON API plus shortcuts for the bundled
clients (``restbase cats`` and ``restbase swapi person``).  Every command
goes through :class:`~restbase.client.ApiClientBase`, so responses are
cached exactly as they would be in library code.
"""

from __future__ import annotations

from typing import Optional

import typer

from restbase.apis import CatApi, Swapi
from restbase.client import ApiClientBase
from restbase.commands._common import cli_errors, open_client, print_result
from restbase.models import RequestOptions
from restbase.output import format_response

swapi_app = typer.Typer(no_args_is_help=True)


def _call_options(ttl: Optional[int]) -> Optional[RequestOptions]:
    return RequestOptions(time_to_live=ttl) if ttl is not None else None


def get_command(
    base_url: str = typer.Argument(help="Base URL of the API, e.g. https://swapi.dev/api/"),
    endpoint: str = typer.Argument(help="Path relative to the base URL, may include a query."),
    ttl: Optional[int] = typer.Option(
        None, "--ttl", help="Seconds to cache this response (overrides the configured TTL)."
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the response cache."),
) -> None:
    """GET an endpoint and print its JSON body.

    Example::

        restbase get https://swapi.dev/api/ people/1/
        restbase get https://api.thecatapi.com/v1/ "images/search?limit=3" --ttl 60
    """
    with cli_errors(), open_client(ApiClientBase, base_url=base_url, no_cache=no_cache) as client:
        print_result(client.fetch_json(endpoint, _call_options(ttl)))


def cats_command(
    limit: int = typer.Option(10, "--limit", "-l", min=1, help="Number of images."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the response cache."),
) -> None:
    """Print random cat images from TheCatAPI."""
    with cli_errors(), open_client(CatApi, no_cache=no_cache) as api:
        print_result(api.search_images(limit))


@swapi_app.command("person")
def swapi_person(
    person_id: str = typer.Argument(help="SWAPI person id, e.g. 1 for Luke Skywalker."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the response cache."),
) -> None:
    """Print a Star Wars character."""
    with cli_errors(), open_client(Swapi, no_cache=no_cache) as api:
        person = api.get_person(person_id)
        format_response(person.model_dump(mode="json"))
