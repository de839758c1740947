"""Navigation metadata returned with every paginated list."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaginationDetails(BaseModel):
    """nextPage/previousPage are null when there is no such page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_next_page: bool
    has_previous_page: bool
    next_page: int | None = None
    previous_page: int | None = None
