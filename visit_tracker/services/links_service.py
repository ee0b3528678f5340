"""
Links Service

Owns the "links" settings document: its defaults, the permissive merge
applied to admin writes, and seeding at startup.

Write semantics are merge-then-replace, not a field-level patch: the
payload is laid over a fresh copy of the defaults and the result replaces
the stored document. Fields the admin omits therefore return to their
defaults rather than keeping their previous stored value.
"""

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable

from visit_tracker.core.validators import string_or_default
from visit_tracker.services.settings_store import SettingsStore
from visit_tracker.services.visit_store import now_ms

logger = logging.getLogger(__name__)

LINKS_KEY = "links"

BUTTON_KEYS = (
    "operator",
    "chats",
    "reviews",
    "bot",
    "channel",
    "exchanger",
    "jobs",
    "support",
)

DEFAULT_LINKS = MappingProxyType({
    "fortune": "fortune.html",
    "job": "#",
    "buttons": MappingProxyType({key: "https://t.me/" for key in BUTTON_KEYS}),
})


def default_links() -> dict:
    """A fresh, mutable copy of the default links document."""
    return {
        "fortune": DEFAULT_LINKS["fortune"],
        "job": DEFAULT_LINKS["job"],
        "buttons": dict(DEFAULT_LINKS["buttons"]),
    }


def merge_links(payload: Any) -> dict:
    """
    Merge an admin payload onto the defaults.

    - A non-object payload counts as {}
    - Unknown top-level keys are kept as sent
    - Non-string fortune/job fall back to their defaults
    - Missing or non-object buttons become the default buttons
    - Each known button whose value is not a string falls back to its
      default; extra button keys are kept

    Never raises on malformed input.
    """
    defaults = default_links()
    incoming = copy.deepcopy(payload) if isinstance(payload, dict) else {}

    merged = {**defaults, **incoming}
    merged["fortune"] = string_or_default(merged.get("fortune"), defaults["fortune"])
    merged["job"] = string_or_default(merged.get("job"), defaults["job"])

    buttons = merged.get("buttons")
    if not isinstance(buttons, dict) or not buttons:
        buttons = dict(defaults["buttons"])
    for key in BUTTON_KEYS:
        buttons[key] = string_or_default(buttons.get(key), defaults["buttons"][key])
    merged["buttons"] = buttons

    return merged


class LinksService:
    """
    Read, write and seed the links document through a SettingsStore.
    """

    def __init__(self, store: SettingsStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock

    async def get_links(self) -> dict:
        """Stored document, or the defaults when nothing has been written."""
        document = await self.store.get(LINKS_KEY)
        if document is None:
            return default_links()
        return document

    async def save_links(self, payload: Any) -> dict:
        """Merge payload onto the defaults, replace the stored document, return it."""
        document = merge_links(payload)
        await self.store.upsert(LINKS_KEY, document, self.clock())
        return document

    async def ensure_defaults(self) -> bool:
        """
        Write the default document if none is stored.

        Returns:
            True if the defaults were written
        """
        if await self.store.get(LINKS_KEY) is not None:
            return False

        await self.store.upsert(LINKS_KEY, default_links(), self.clock())
        logger.info("Seeded default links document")
        return True
