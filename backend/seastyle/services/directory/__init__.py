"""Marina directory: normalize GetMarinaList payloads and search them."""
from seastyle.services.directory.normalize import normalize_directory
from seastyle.services.directory.search import (
    DirectoryLoad,
    MarinaSearch,
    load_directory,
    normalize_search_text,
)

__all__ = [
    "DirectoryLoad",
    "MarinaSearch",
    "load_directory",
    "normalize_directory",
    "normalize_search_text",
]
