"""
Application-level constants
"""

PROJECT_NAME = "Variant Badges"
VERSION = "1.0.0"
DEFAULT_PORT = 8000
ENVIRONMENT_DEVELOPMENT = "development"
ENVIRONMENT_PRODUCTION = "production"
SHOPIFY_API_VERSION = "2024-10"
HTTP_TIMEOUT_SECONDS = 30.0

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DEFAULT_PORT",
    "ENVIRONMENT_DEVELOPMENT",
    "ENVIRONMENT_PRODUCTION",
    "SHOPIFY_API_VERSION",
    "HTTP_TIMEOUT_SECONDS",
]
