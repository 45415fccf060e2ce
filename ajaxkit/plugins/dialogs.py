"""
Built-in dialogs

Fallback alert and confirm providers backed by the browser's native
``alert()`` and ``confirm()`` functions. They are used until a plugin
implementing AlertProvider or ConfirmProvider is registered.
"""

from __future__ import annotations

from ajaxkit.plugins.base import AlertProvider, ConfirmProvider


class DefaultAlert(AlertProvider):
    name = "alert"

    def alert(self, message: str, title: str | None = None, level: str = "info") -> str:
        # The native dialog has no title nor level
        return f"alert({message})"


class DefaultConfirm(ConfirmProvider):
    name = "confirm"

    def confirm(self, question: str, yes_script: str, no_script: str = "") -> str:
        script = f"if(confirm({question})){{{yes_script};}}"
        if no_script:
            script += f"else{{{no_script};}}"
        return script
