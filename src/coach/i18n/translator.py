"""Text resolution for tutorial text references.

Steps carry dotted keys (``tutorial.choosePhoto``); the renderer resolves them
through a ``Translator``. Lookup order: active locale, English, the caller's
default, then the key itself, so a missing string never blanks a bubble.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

__all__ = ["Translator", "DEFAULT_CATALOGS", "FALLBACK_LOCALE"]

FALLBACK_LOCALE = "en"

DEFAULT_CATALOGS: Dict[str, Dict[str, Any]] = {
    "en": {
        "tutorial": {
            "choosePhoto": "Tap here to add your first item from a photo.",
            "chooseTags": "Pick the colours and tags that describe this item.",
            "gotoProfile": "Now open your profile to create a look.",
            "addMyPhoto": "Add a photo of yourself to try looks on.",
            "chooseBase": "Choose the base photo for this look.",
            "pickType": "Pick the type of item to add.",
            "continue": "All set? Tap continue.",
            "tapAnywhere": "Tap anywhere to continue",
        }
    }
}


def _lookup(catalog: Mapping[str, Any], key: str) -> Optional[str]:
    node: Any = catalog
    for part in key.split("."):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node if isinstance(node, str) else None


class Translator:
    def __init__(
        self,
        catalogs: Optional[Mapping[str, Mapping[str, Any]]] = None,
        locale: str = FALLBACK_LOCALE,
    ) -> None:
        self._catalogs = dict(catalogs if catalogs is not None else DEFAULT_CATALOGS)
        self.locale = locale

    def t(self, key: str, default: Optional[str] = None) -> str:
        if not key:
            return default or ""
        for loc in (self.locale, FALLBACK_LOCALE):
            text = _lookup(self._catalogs.get(loc, {}), key)
            if text is not None:
                return text
        return default if default is not None else key

    __call__ = t
