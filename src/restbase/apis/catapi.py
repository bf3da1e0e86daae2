"""Client for `TheCatAPI <https://thecatapi.com>`_."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from restbase.client import ApiClientBase, JsonResult
from restbase.models import RequestOptions


class CatImage(BaseModel):
    """One image returned by ``images/search``."""

    model_config = ConfigDict(extra="allow")

    id: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class CatApi(ApiClientBase):
    """Random cat pictures."""

    base_url = "https://api.thecatapi.com/v1/"

    def search_images(self, limit: int = 10, options: Optional[RequestOptions] = None) -> JsonResult:
        """Return the raw ``images/search`` result for *limit* images."""
        return self.fetch_json(f"images/search?limit={limit}", options)

    def get_random_cats(self, limit: int = 10, options: Optional[RequestOptions] = None) -> list[CatImage]:
        data: Any = self.search_images(limit, options).data or []
        return [CatImage.model_validate(item) for item in data]

    def trigger_404(self) -> Any:
        """Request an endpoint that does not exist.  Raises :class:`~restbase.exceptions.UserError`."""
        return self.get_json("does-not-exist")
