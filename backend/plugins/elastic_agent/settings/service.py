# backend/plugins/elastic_agent/settings/service.py
"""Validation of plugin settings submitted by an operator before they are saved."""

from collections.abc import Mapping
from typing import Annotated

from elastic_agent_core.tracing import get_tracer
from fastapi import Depends
from structlog import get_logger
from utils.dependencies import ServerInfo, get_server_info
from utils.exceptions import UnknownFieldError

from .collector import ErrorCollector
from .fields import (
    AUTHENTICATION_STRATEGY,
    CLIENT_CERT_DATA,
    CLIENT_KEY_DATA,
    CLUSTER_CA_CERT,
    CLUSTER_URL,
    FIELDS,
    GO_SERVER_URL,
    OAUTH_TOKEN,
    PluginField,
    is_blank,
)
from .models import FieldMetadata, ValidationError, ValidationResult
from .strategies import AuthenticationStrategy, UnsupportedAuthenticationStrategyError

logger = get_logger(__name__)
tracer = get_tracer(__name__)

Settings = Mapping[str, str | None]

GO_SERVER_URL_NOT_CONFIGURED = (
    "Secure site url is not configured. Please specify Go Server Url."
)


def required_fields(strategy: AuthenticationStrategy) -> tuple[PluginField, ...]:
    """Fields that must be filled in when the given strategy is selected."""
    match strategy:
        case AuthenticationStrategy.OAUTH_TOKEN:
            return (OAUTH_TOKEN,)
        case AuthenticationStrategy.CLUSTER_CERTS:
            return (CLUSTER_CA_CERT, CLIENT_KEY_DATA, CLIENT_CERT_DATA, CLUSTER_URL)
        case _:
            return ()


def required_by_strategy_message(
    field: PluginField, strategy: AuthenticationStrategy
) -> str:
    return (
        f"{field.display_name} is required when authentication strategy "
        f"is set to {strategy.name}."
    )


class SettingsValidator:
    """
    Checks a flat set of plugin settings and reports every problem it finds.

    Each catalog field is checked with its own rule first, then the rules that
    relate several fields run: the Go server URL fallback and the fields
    required by the selected authentication strategy. `validate` never raises;
    an empty result means the settings can be saved.
    """

    def __init__(
        self,
        server_info: ServerInfo,
        fields: Mapping[str, PluginField] = FIELDS,
    ):
        self.server_info = server_info
        self.fields = fields

    def validate(self, settings: Settings) -> ValidationResult:
        with tracer.start_as_current_span("validate_plugin_settings") as span:
            logger.debug("Validating plugin settings", submitted_keys=sorted(settings))

            errors = ErrorCollector()
            self._run_field_rules(settings, errors)
            self._check_go_server_url(settings, errors)
            self._check_authentication_strategy(settings, errors)
            result = errors.result()

            span.set_attribute("settings.error_count", len(result))
            logger.info(
                "Validated plugin settings",
                error_count=len(result),
                error_keys=[error.key for error in result],
            )
            return result

    def _field(self, field: PluginField) -> PluginField:
        # Prefer the injected catalog's definition so display names stay consistent.
        return self.fields.get(field.key, field)

    def _run_field_rules(self, settings: Settings, errors: ErrorCollector) -> None:
        for key, field in self.fields.items():
            try:
                error = field.validate_value(settings.get(key))
            except Exception as e:
                logger.exception("Unexpected error in field rule", field=key)
                error = ValidationError(key=key, message=str(e) or type(e).__name__)
            if error:
                errors.append(error)

    def _check_go_server_url(self, settings: Settings, errors: ErrorCollector) -> None:
        if not is_blank(settings.get(GO_SERVER_URL.key)):
            return

        if is_blank(self.server_info.secure_site_url):
            errors.add(GO_SERVER_URL.key, GO_SERVER_URL_NOT_CONFIGURED)

    def _check_authentication_strategy(
        self, settings: Settings, errors: ErrorCollector
    ) -> None:
        try:
            authentication_errors = self._authentication_errors(settings)
        except Exception as e:
            logger.exception("Unexpected error while checking authentication settings")
            errors.add(AUTHENTICATION_STRATEGY.key, str(e) or type(e).__name__)
            return

        errors.extend(authentication_errors)

    def _authentication_errors(self, settings: Settings) -> list[ValidationError]:
        raw_strategy = settings.get(AUTHENTICATION_STRATEGY.key)
        if is_blank(raw_strategy):
            return []

        try:
            strategy = AuthenticationStrategy.parse(raw_strategy)
        except UnsupportedAuthenticationStrategyError as e:
            logger.info("Rejected authentication strategy", strategy=raw_strategy)
            return [ValidationError(key=AUTHENTICATION_STRATEGY.key, message=str(e))]

        return [
            ValidationError(
                key=field.key,
                message=required_by_strategy_message(field, strategy),
            )
            for field in map(self._field, required_fields(strategy))
            if is_blank(settings.get(field.key))
        ]

    def describe_fields(self) -> dict[str, FieldMetadata]:
        """Catalog metadata in display order, keyed by field key."""
        return {key: self.describe_field(key) for key in self.fields}

    def describe_field(self, key: str) -> FieldMetadata:
        field = self.fields.get(key)
        if field is None:
            raise UnknownFieldError(key)

        return FieldMetadata(
            display_name=field.display_name,
            default_value=field.default_value,
            required=field.required,
            secure=field.secure,
            display_order=field.display_order,
        )


def get_settings_validator(
    server_info: Annotated[ServerInfo, Depends(get_server_info)],
) -> SettingsValidator:
    return SettingsValidator(server_info)
