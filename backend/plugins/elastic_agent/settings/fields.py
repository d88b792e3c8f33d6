"""Catalog of the plugin settings fields and their single-field rules.

A rule takes the field's display name and a non-blank raw value and returns an
error message, or None when the value is acceptable. Blank values never reach
a rule: they are handled by `PluginField.validate_value` according to
`required`. Rules never raise, whatever the submitted text.
"""

import re
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .models import ValidationError

Rule = Callable[[str, str], str | None]

KUBERNETES_NAME_PATTERN = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?")
KUBERNETES_NAME_MAX_LENGTH = 63
POSITIVE_INTEGER_PATTERN = re.compile(r"[0-9]{1,9}")

http_url_adapter = TypeAdapter(HttpUrl)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def positive_integer(display_name: str, value: str) -> str | None:
    number = value.strip()
    if POSITIVE_INTEGER_PATTERN.fullmatch(number) and int(number) > 0:
        return None
    return f"{display_name} must be a positive integer."


def parse_https_url(value: str) -> HttpUrl | None:
    """The parsed URL, or None when the value is not an absolute https URL."""
    try:
        url = http_url_adapter.validate_python(value.strip())
    except PydanticValidationError:
        return None
    return url if url.scheme == "https" else None


def https_url(display_name: str, value: str) -> str | None:
    if parse_https_url(value) is None:
        return f"{display_name} must be a valid HTTPS URL (https://example.com)."
    return None


def go_server_url(display_name: str, value: str) -> str | None:
    url = parse_https_url(value)
    if url is None:
        return f"{display_name} must be a valid HTTPS URL (https://example.com)."
    if not (url.path or "").rstrip("/").endswith("/go"):
        return f"{display_name} must be in format https://<GO_SERVER_HOST>:<GO_SERVER_PORT>/go."
    return None


def kubernetes_name(display_name: str, value: str) -> str | None:
    name = value.strip()
    if len(name) > KUBERNETES_NAME_MAX_LENGTH or not KUBERNETES_NAME_PATTERN.fullmatch(name):
        return (
            f"{display_name} must consist of lowercase alphanumeric characters or '-', "
            f"start and end with an alphanumeric character and be at most "
            f"{KUBERNETES_NAME_MAX_LENGTH} characters long."
        )
    return None


class PluginField(BaseModel):
    """A known settings field: its presentation and its own validation rule."""

    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    default_value: str | None = None
    required: bool = False
    secure: bool = False
    display_order: int = 0
    rule: Rule | None = Field(default=None, exclude=True)

    def validate_value(self, value: str | None) -> ValidationError | None:
        if is_blank(value):
            if self.required:
                return ValidationError(
                    key=self.key, message=f"{self.display_name} must not be blank."
                )
            return None

        if self.rule is None:
            return None

        message = self.rule(self.display_name, value)
        return ValidationError(key=self.key, message=message) if message else None


GO_SERVER_URL = PluginField(
    key="go_server_url",
    display_name="Go Server URL",
    display_order=0,
    rule=go_server_url,
)
AUTO_REGISTER_TIMEOUT = PluginField(
    key="auto_register_timeout",
    display_name="Agent auto-register timeout (in minutes)",
    default_value="10",
    display_order=1,
    rule=positive_integer,
)
MAX_PENDING_PODS = PluginField(
    key="pending_pods_count",
    display_name="Maximum pending pods",
    default_value="10",
    display_order=2,
    rule=positive_integer,
)
AUTHENTICATION_STRATEGY = PluginField(
    key="authentication_strategy",
    display_name="Authentication strategy",
    default_value="OAUTH_TOKEN",
    display_order=3,
)
OAUTH_TOKEN = PluginField(
    key="oauth_token",
    display_name="Oauth token",
    secure=True,
    display_order=4,
)
CLUSTER_URL = PluginField(
    key="kubernetes_cluster_url",
    display_name="Cluster URL",
    display_order=5,
    rule=https_url,
)
CLUSTER_CA_CERT = PluginField(
    key="kubernetes_cluster_ca_cert",
    display_name="Cluster ca certificate",
    secure=True,
    display_order=6,
)
CLIENT_KEY_DATA = PluginField(
    key="client_key_data",
    display_name="Client key data",
    secure=True,
    display_order=7,
)
CLIENT_CERT_DATA = PluginField(
    key="client_cert_data",
    display_name="Client certificate data",
    secure=True,
    display_order=8,
)
NAMESPACE = PluginField(
    key="namespace",
    display_name="Namespace",
    default_value="default",
    display_order=9,
    rule=kubernetes_name,
)

FIELDS: dict[str, PluginField] = {
    field.key: field
    for field in (
        GO_SERVER_URL,
        AUTO_REGISTER_TIMEOUT,
        MAX_PENDING_PODS,
        AUTHENTICATION_STRATEGY,
        OAUTH_TOKEN,
        CLUSTER_URL,
        CLUSTER_CA_CERT,
        CLIENT_KEY_DATA,
        CLIENT_CERT_DATA,
        NAMESPACE,
    )
}
