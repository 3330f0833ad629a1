"""Widget modules for BrestTrans mobile UI."""

from .autocomplete_input import AutoCompleteInput
from .nav_bar import NavBar
from .toast import Toast

__all__ = ["AutoCompleteInput", "NavBar", "Toast"]
