"""Pydantic models for the plugin settings validation API."""

from pydantic import BaseModel, ConfigDict, Field


class ValidationError(BaseModel):
    """A single problem found in the submitted settings, attributed to one field."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "key": "oauth_token",
                "message": "Oauth token is required when authentication strategy is set to OAUTH_TOKEN.",
            }
        },
    )

    key: str
    message: str


ValidationResult = tuple[ValidationError, ...]


class SettingValue(BaseModel):
    value: str | None = None


class ValidatePluginSettingsRequest(BaseModel):
    """Request body sent by the Go server when an operator saves plugin settings."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "plugin-settings": {
                    "go_server_url": {"value": "https://gocd.example.com:8154/go"},
                    "authentication_strategy": {"value": "OAUTH_TOKEN"},
                    "oauth_token": {"value": "token"},
                }
            }
        },
    )

    plugin_settings: dict[str, SettingValue] = Field(
        default_factory=dict, alias="plugin-settings"
    )

    def to_settings(self) -> dict[str, str | None]:
        """Flatten the request into a plain key -> raw value mapping."""
        return {key: setting.value for key, setting in self.plugin_settings.items()}


class FieldMetadata(BaseModel):
    """How a settings field is presented to the operator by the Go server."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(..., alias="display-name")
    default_value: str | None = Field(None, alias="default-value")
    required: bool
    secure: bool
    display_order: int = Field(..., alias="display-order")
