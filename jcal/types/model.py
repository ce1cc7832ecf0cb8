"""Base pydantic model for rich value objects."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from jcal.exceptions import CalendarParseError

_LOGGER = logging.getLogger(__name__)


class ValueModel(BaseModel):
    """Abstract class for a decorated value backed by a pydantic model.

    A validation failure of a value model means the document is malformed,
    so it is raised as a CalendarParseError.
    """

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            _LOGGER.debug("Failed to parse value %s", err)
            message = [f"Failed to parse {self.__class__.__name__.upper()} value"]
            for error in err.errors():
                if msg := error.get("msg"):
                    message.append(msg)
            error_str = ": ".join(message)
            raise CalendarParseError(error_str, detailed_error=str(err)) from err

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
