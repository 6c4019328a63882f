"""Type catalog input: document loading, export selection and doc comments."""

from .docs import Documentation, parse_documentation, parse_summary
from .loader import (
    Catalog,
    CatalogError,
    fold_extension_methods,
    load_catalog,
    parse_catalog,
    select_exported,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "Documentation",
    "fold_extension_methods",
    "load_catalog",
    "parse_catalog",
    "parse_documentation",
    "parse_summary",
    "select_exported",
]
