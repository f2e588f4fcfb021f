"""Application service: product name/description suggestions.

Keeps sorted, de-duplicated lists of names and descriptions the user has
typed before, to help with data entry.  This is convenience data only:
a failure to store a suggestion is logged and never interrupts the order
operation that triggered it.
"""

from __future__ import annotations

import logging

from orderdesk.domain.exceptions import PersistenceError
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class SuggestionIndex:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def name_suggestions(self) -> list[str]:
        return self._settings_repo.get_name_suggestions()

    def description_suggestions(self) -> list[str]:
        return self._settings_repo.get_description_suggestions()

    def add_name_suggestion(self, text: str | None) -> None:
        self._add(
            text,
            self._settings_repo.get_name_suggestions,
            self._settings_repo.save_name_suggestions,
        )

    def add_description_suggestion(self, text: str | None) -> None:
        self._add(
            text,
            self._settings_repo.get_description_suggestions,
            self._settings_repo.save_description_suggestions,
        )

    def record_order(self, order: Order) -> None:
        """Feed every product name and description in *order* into the index."""
        for item in order.iter_items():
            self.add_name_suggestion(item.name)
            self.add_description_suggestion(item.description)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _add(text, load, save) -> None:
        if text is None:
            return
        value = text.strip()
        if not value:
            return
        try:
            current = load()
            if value in current:
                return
            save(sorted([*current, value]))
        except PersistenceError as exc:
            logger.warning("Could not store suggestion %r: %s", value, exc)
