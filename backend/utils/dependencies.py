from config import settings
from pydantic import BaseModel


class ServerInfo(BaseModel):
    """Connection info of the Go server the plugin is registered with."""

    server_id: str | None = None
    site_url: str | None = None
    secure_site_url: str | None = None


def get_server_info() -> ServerInfo:
    """Dependency to get the server info configured for this deployment."""
    return ServerInfo(
        server_id=settings.go_server_id,
        site_url=settings.go_site_url,
        secure_site_url=settings.go_secure_site_url,
    )
