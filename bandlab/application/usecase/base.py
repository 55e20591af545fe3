"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from bandlab.config import ContentSettings
from bandlab.domain.error import ValidationError
from bandlab.domain.value import Creator


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def resolve_text(
    value: str | None, default: str, content_settings: ContentSettings, field: str
) -> str:
    """Apply the default-substitution policy to an optional text field.

    Raises:
        ValidationError: If the value is blank and substitution is disabled
    """
    if value is not None and value.strip():
        return value
    if content_settings.substitute_defaults:
        return default
    raise ValidationError(f"{field} is required")


def resolve_creator(value: str | None, content_settings: ContentSettings) -> Creator:
    """Use the identity from the auth layer, or the anonymous creator.

    Raises:
        ValidationError: If the supplied identity is not a valid creator
    """
    try:
        return Creator(value or content_settings.anonymous_creator)
    except PydanticValidationError as e:
        raise ValidationError("Creator must be 1-255 characters") from e
