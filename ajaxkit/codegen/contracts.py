"""
Code Contributor Contract

Every object registered with the code generator contributes through these
accessors. All of them have empty defaults so subclasses only override what
they actually emit.
"""

from __future__ import annotations


class CodeContributor:
    """Source of CSS/JS fragments for the generated page code."""

    def get_hash(self) -> str:
        """Stable fragment folded into the export cache key."""
        return ""

    def get_css(self) -> str:
        """HTML tags including CSS code or files."""
        return ""

    def get_js(self) -> str:
        """HTML tags including javascript files."""
        return ""

    def get_script(self) -> str:
        """Javascript code added to the persistent script."""
        return ""

    def get_ready_script(self) -> str:
        """Javascript code run once the page is loaded."""
        return ""

    def ready_inlined(self) -> bool:
        """Whether the ready script goes into the page instead of the exported file."""
        return False

    def ready_enabled(self) -> bool:
        """Whether an inlined ready script is emitted at all."""
        return True
