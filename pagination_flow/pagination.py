from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """One page of ``T`` plus the metadata needed to navigate the rest.

    ``items`` holds at most ``page_size`` entries. A page past the end is
    not an error: it comes back with no items and the real ``total_items``.
    """

    model_config = ConfigDict(frozen=True)

    items: list[T]
    total_items: int = Field(ge=0)
    page_number: int = Field(ge=1)
    page_size: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_items_fit_page(self):
        if len(self.items) > self.page_size:
            raise ValueError("items must not exceed page_size")
        return self

    @computed_field
    @property
    def total_pages(self) -> int:
        return (self.total_items + self.page_size - 1) // self.page_size

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.page_number > 1
