"""Application file discovery.

This module provides the root catalog, the name matcher and the
concurrent finder that together locate every path belonging to a
macOS application.
"""

from rmapp.finder.catalog import CatalogEntry, RootCategory, ScanKind, build_catalog
from rmapp.finder.matcher import NamePattern, get_domain_hint, is_match, tokenize
from rmapp.finder.models import (
    DiscoveryOptions,
    DiscoveryResult,
    MatchRecord,
    ScanContext,
    ScanTarget,
    SizeMode,
    TokenRunPolicy,
)
from rmapp.finder.scanner import Finder

__all__ = [
    "CatalogEntry",
    "DiscoveryOptions",
    "DiscoveryResult",
    "Finder",
    "MatchRecord",
    "NamePattern",
    "RootCategory",
    "ScanContext",
    "ScanKind",
    "ScanTarget",
    "SizeMode",
    "TokenRunPolicy",
    "build_catalog",
    "get_domain_hint",
    "is_match",
    "tokenize",
]
