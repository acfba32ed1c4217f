"""Base model for Betfair request structures."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BetfairModel(BaseModel):
    """
    Base for request structures sent to Betfair.

    Fields are snake_case in Python and camelCase on the wire. Unset
    fields are dropped on serialization rather than sent as null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        coerce_numbers_to_str=True,
    )

    def to_params(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
