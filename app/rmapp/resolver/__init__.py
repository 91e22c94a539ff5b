"""Application name and bundle identifier resolution."""

from rmapp.resolver.bundle import (
    AppNotFoundError,
    ResolverError,
    extract_quoted_substring,
    get_dot_app,
    locate_bundle,
    normalize_app_name,
    resolve_bundle_id,
)

__all__ = [
    "AppNotFoundError",
    "ResolverError",
    "extract_quoted_substring",
    "get_dot_app",
    "locate_bundle",
    "normalize_app_name",
    "resolve_bundle_id",
]
