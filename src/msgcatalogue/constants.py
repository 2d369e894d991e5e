"""Shared constants for msgcatalogue.

Centralized configuration constants used across the catalogue, provider
and cache packages. Placing constants here avoids circular imports.

Constants are grouped by domain:
- Catalogue defaults: domain naming
- Locale validation: accepted identifier pattern
- Cache layout: artifact naming and format version

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Catalogue defaults
    "DEFAULT_DOMAIN",
    # Locale validation
    "LOCALE_PATTERN",
    "LOCALE_VARIANT_SEPARATOR",
    # Cache layout
    "CACHE_FILE_PREFIX",
    "CACHE_FILE_SUFFIX",
    "META_FILE_SUFFIX",
    "CACHE_FORMAT_VERSION",
    "BASE_LINK_ID",
]

# ============================================================================
# CATALOGUE DEFAULTS
# ============================================================================

# Domain used when a resource is registered without one.
DEFAULT_DOMAIN: str = "messages"

# ============================================================================
# LOCALE VALIDATION
# ============================================================================

# ASCII alphanumerics plus '@', '_', '.', '-'; any length including empty.
# Used with fullmatch() so that a trailing newline is rejected.
LOCALE_PATTERN: re.Pattern[str] = re.compile(r"[a-z0-9@_.\-]*", re.IGNORECASE | re.ASCII)

# Separator between a base language and its region/script suffix (fr_FR).
LOCALE_VARIANT_SEPARATOR: str = "_"

# ============================================================================
# CACHE LAYOUT
# ============================================================================

CACHE_FILE_PREFIX: str = "catalogue"
CACHE_FILE_SUFFIX: str = ".json"

# Sidecar holding the dependency set of an artifact.
META_FILE_SUFFIX: str = ".meta"

# Bump when the artifact document shape changes; older artifacts become stale.
CACHE_FORMAT_VERSION: int = 1

# Record id of the head of a serialized chain.
BASE_LINK_ID: str = "catalogue"
