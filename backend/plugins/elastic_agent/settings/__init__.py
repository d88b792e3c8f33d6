"""Validation of the elastic agent plugin settings."""

PLUGIN_METADATA = {
    "name": "settings",
    "version": "1.0.0",
    "description": "Validates plugin settings and describes the known settings fields.",
    "author": "elastic-agent",
}
