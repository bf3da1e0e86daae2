"""Ready-made clients for public JSON APIs.

Each client is a thin :class:`~restbase.client.ApiClientBase` subclass that
maps endpoints to methods and validates results into Pydantic models.

Classes:
    :class:`CatApi` -- https://thecatapi.com image search.
    :class:`Swapi` -- the Star Wars API.
"""

from restbase.apis.catapi import CatApi, CatImage
from restbase.apis.swapi import Person, Swapi

__all__ = ["CatApi", "CatImage", "Person", "Swapi"]
