"""Article queue and episode list persistence."""

from .store import Library, LibraryData, load_library, save_library

__all__ = ["Library", "LibraryData", "load_library", "save_library"]
