"""
Route classification for inbound page requests.

Pure functions only: given a URL path, decide which area of the web app it
belongs to. The middleware in ``bizbot.middleware.route_classifier`` decides
what to do with each category.
"""
import re
from enum import Enum

API_PREFIX = "/api/"
FRAMEWORK_ASSET_PREFIX = "/_next/"

PUBLIC_PATHS = ("/", "/login", "/register")

PROTECTED_PREFIXES = (
    "/dashboard",
    "/sales",
    "/expenses",
    "/employees",
    "/inventory",
    "/insights",
    "/profile",
)

LOGIN_PATH = "/login"

# Paths matching these never reach the filter
_EXCLUDED_PATH_RE = re.compile(r"^/(?:_next/static|_next/image|favicon\.ico|public/)")


class RouteCategory(str, Enum):
    """Area of the application a path belongs to."""

    STATIC = "static"
    API = "api"
    PUBLIC = "public"
    PROTECTED = "protected"
    OTHER = "other"


class AuthorizationPolicy(str, Enum):
    """How protected pages are guarded on the server."""

    # Forward everything; the browser checks its stored token and redirects itself
    DEFERRED_TO_CLIENT = "deferred_to_client"
    # Redirect to the login page unless the request carries a valid token
    ENFORCED = "enforced"


def is_filtered_path(path: str) -> bool:
    """Return True when the routing filter applies to ``path``."""
    return _EXCLUDED_PATH_RE.match(path) is None


def is_protected_path(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in PROTECTED_PREFIXES)


def classify_path(path: str) -> RouteCategory:
    """
    Classify a URL path.

    Order matters: API and asset checks run before the public list, and a
    dotted path under a protected prefix (``/sales/export.csv``) is static.
    """
    if path.startswith(API_PREFIX):
        return RouteCategory.API
    if path.startswith(FRAMEWORK_ASSET_PREFIX) or "." in path:
        return RouteCategory.STATIC

    if path in PUBLIC_PATHS:
        return RouteCategory.PUBLIC

    if is_protected_path(path):
        return RouteCategory.PROTECTED

    return RouteCategory.OTHER
