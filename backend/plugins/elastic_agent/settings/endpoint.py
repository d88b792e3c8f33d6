"""Plugin settings API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from plugins.elastic_agent.settings.models import (
    FieldMetadata,
    ValidatePluginSettingsRequest,
    ValidationError,
)
from plugins.elastic_agent.settings.service import (
    SettingsValidator,
    get_settings_validator,
)

router = APIRouter()


@router.post(
    "/validate",
    response_model=list[ValidationError],
    summary="Validate plugin settings",
    description=(
        "Checks the settings an operator is about to save. Returns one entry per "
        "problem found; an empty list means the settings are accepted."
    ),
)
def validate_plugin_settings(
    request: ValidatePluginSettingsRequest,
    validator: Annotated[SettingsValidator, Depends(get_settings_validator)],
):
    return list(validator.validate(request.to_settings()))


@router.get(
    "/fields",
    response_model=dict[str, FieldMetadata],
    summary="List plugin settings fields",
    description="Returns every known settings field with its display metadata.",
)
def get_plugin_settings_fields(
    validator: Annotated[SettingsValidator, Depends(get_settings_validator)],
):
    return validator.describe_fields()


@router.get(
    "/fields/{key}",
    response_model=FieldMetadata,
    summary="Get a plugin settings field",
    description="Returns the display metadata of a single settings field.",
)
def get_plugin_settings_field(
    key: str,
    validator: Annotated[SettingsValidator, Depends(get_settings_validator)],
):
    """Unknown keys raise UnknownFieldError, handled globally as a 404."""
    return validator.describe_field(key)
