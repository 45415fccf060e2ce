"""
ajaxkit

Server-side plugin registry and code generator for an AJAX web library.
"""

from .context import AjaxContext, build_context
from .version import __version__

__all__ = ["AjaxContext", "build_context", "__version__"]
