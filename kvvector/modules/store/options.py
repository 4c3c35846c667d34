"""Option parsing for store operations."""

from collections.abc import Callable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kvvector.modules.documents import VectorDocument
from kvvector.modules.store.exceptions import InvalidArgumentError, UnsupportedOptionError

DocumentFilter = Callable[[VectorDocument], bool]


class QueryOptions(BaseModel):
    """Options accepted by Store.query().

    Keys may be given in camelCase (``maxItems``) or snake_case
    (``max_items``).
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )

    max_items: Annotated[int, Field(strict=True, gt=0)] | None = Field(
        default=None,
        alias="maxItems",
    )
    filter: DocumentFilter | None = None


def parse_query_options(options: Mapping[str, Any] | QueryOptions | None) -> QueryOptions:
    """Validate raw query options.

    Raises:
        UnsupportedOptionError: If an unknown key is present.
        InvalidArgumentError: If a known key has an invalid value.
    """
    if options is None:
        return QueryOptions()
    if isinstance(options, QueryOptions):
        return options

    try:
        return QueryOptions.model_validate(dict(options))
    except ValidationError as e:
        errors = e.errors()
        for error in errors:
            if error["type"] == "extra_forbidden":
                raise UnsupportedOptionError(str(error["loc"][0]), operation="query") from e
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors
        )
        raise InvalidArgumentError(f"Invalid query options: {details}", operation="query") from e


def reject_options(options: Mapping[str, Any] | None, *, operation: str) -> None:
    """Fail on any option for operations that define none.

    Raises:
        UnsupportedOptionError: For the first option key found.
    """
    for key in options or {}:
        raise UnsupportedOptionError(str(key), operation=operation)
