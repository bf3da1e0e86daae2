"""Client for the `Star Wars API <https://swapi.dev>`_."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from restbase.client import ApiClientBase
from restbase.exceptions import ResponseFormatError
from restbase.models import RequestOptions


class Person(BaseModel):
    """A character from ``people/<id>/``.

    SWAPI returns most numeric fields as strings (``"172"``, ``"unknown"``),
    so they are kept as strings here.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    height: Optional[str] = None
    mass: Optional[str] = None
    birth_year: Optional[str] = None
    films: list[str] = Field(default_factory=list)
    url: Optional[str] = None


class Swapi(ApiClientBase):
    """People, planets and starships of the Star Wars films."""

    base_url = "https://swapi.dev/api/"

    def get_person(self, person_id: str, options: Optional[RequestOptions] = None) -> Person:
        """Fetch one character.

        Raises:
            ResponseFormatError: If the body is empty, not JSON, or not a person.
        """
        data = self.get_json(f"people/{person_id}/", options)
        try:
            return Person.model_validate(data)
        except ValidationError as exc:
            raise ResponseFormatError(
                f"Unexpected body for person {person_id!r}: {exc.error_count()} validation error(s)"
            ) from exc

    def trigger_404(self) -> Any:
        return self.get_json("does-not-exist")
