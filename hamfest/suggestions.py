from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from hamfest.data.countries import COUNTRY_NAMES
from hamfest.data.equipment import (
    MANUFACTURER_MODEL_PREFIXES,
    POPULAR_MANUFACTURERS,
    get_models_by_category,
)
from hamfest.enums import ListingCategory
from hamfest.settings import get_settings

_logger = logging.getLogger(__name__)

# manufacturer values shorter than this never narrow the model list
MIN_MANUFACTURER_LENGTH = 2

KEY_DOWN = "ArrowDown"
KEY_UP = "ArrowUp"
KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


def suggestions(
    query: str, vocabulary: Sequence[str], min_length: int = 2, limit: int | None = None
) -> list[str]:
    """
    Return the vocabulary entries containing ``query`` (case-insensitive), in vocabulary order.

    Nothing is suggested until the query is at least ``min_length`` characters long.
    """
    if len(query) < min_length:
        return []

    needle = query.lower()
    matches = [entry for entry in vocabulary if needle in entry.lower()]
    return matches[:limit] if limit is not None else matches


def models_for(category: ListingCategory | str | None, manufacturer: str | None) -> list[str]:
    """
    Model suggestions for a listing form, narrowed by category and then by manufacturer.

    The category picks a curated model list. If the manufacturer is a known brand, only models
    whose names start with one of that brand's model prefixes are kept. Unknown brands (or values
    too short to be a brand) leave the category list as is.
    """
    category_models = list(get_models_by_category(category))
    if not manufacturer or len(manufacturer) < MIN_MANUFACTURER_LENGTH:
        return category_models

    prefixes = MANUFACTURER_MODEL_PREFIXES.get(manufacturer)
    if not prefixes:
        return category_models

    return [model for model in category_models if model.startswith(tuple(prefixes))]


@dataclass(frozen=True)
class SuggestionView:
    value: str
    suggestions: list[str]
    highlighted_index: int
    is_open: bool
    hint: str | None


class Autocomplete:
    """
    Keyboard-navigable autocomplete state for a single text input.

    ``highlighted_index`` is -1 when nothing is highlighted and otherwise an index into
    ``suggestions``. Arrow keys only act while the list is open. Committing a suggestion (Enter on
    a highlighted entry, or ``select``) sets the value, closes the list and calls ``on_commit``;
    Escape and clicks outside the list close it without committing.
    """

    def __init__(
        self,
        vocabulary: Sequence[str],
        min_length: int | None = None,
        value: str = "",
        on_commit: Callable[[str], None] | None = None,
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        if min_length is None:
            min_length = get_settings().suggestion_min_length

        self.vocabulary: Sequence[str] = vocabulary
        self.min_length = min_length
        self.value = value
        self.highlighted_index = -1
        self.on_commit = on_commit
        self.on_change = on_change
        self._manually_open = False

    @property
    def suggestions(self) -> list[str]:
        return suggestions(self.value, self.vocabulary, self.min_length)

    @property
    def is_open(self) -> bool:
        return self._manually_open and len(self.value) >= self.min_length and bool(self.suggestions)

    @property
    def highlighted(self) -> str | None:
        current = self.suggestions
        if 0 <= self.highlighted_index < len(current):
            return current[self.highlighted_index]
        return None

    @property
    def hint(self) -> str | None:
        if 0 < len(self.value) < self.min_length:
            return f"Type at least {self.min_length} characters to see suggestions"
        return None

    def view(self) -> SuggestionView:
        is_open = self.is_open
        return SuggestionView(
            value=self.value,
            suggestions=self.suggestions if is_open else [],
            highlighted_index=self.highlighted_index,
            is_open=is_open,
            hint=self.hint,
        )

    def set_vocabulary(self, vocabulary: Sequence[str]) -> None:
        self.vocabulary = vocabulary
        self.highlighted_index = -1

    def set_value(self, value: str) -> None:
        self.value = value
        self.highlighted_index = -1
        self._manually_open = True
        if self.on_change:
            self.on_change(value)

    def focus(self) -> None:
        self._manually_open = True

    def move_down(self) -> None:
        if not self.is_open:
            return
        if self.highlighted_index < len(self.suggestions) - 1:
            self.highlighted_index += 1

    def move_up(self) -> None:
        if not self.is_open:
            return
        self.highlighted_index = self.highlighted_index - 1 if self.highlighted_index > 0 else -1

    def enter(self) -> str | None:
        if not self.is_open:
            return None
        highlighted = self.highlighted
        if highlighted is None:
            return None
        self.select(highlighted)
        return highlighted

    def escape(self) -> None:
        if not self.is_open:
            return
        self._manually_open = False
        self.highlighted_index = -1

    def click_outside(self) -> None:
        self._manually_open = False

    def select(self, suggestion: str) -> None:
        _logger.debug(f"Committing suggestion {suggestion!r}")
        self.value = suggestion
        self._manually_open = False
        self.highlighted_index = -1
        if self.on_change:
            self.on_change(suggestion)
        if self.on_commit:
            self.on_commit(suggestion)

    def handle_key(self, key: str) -> str | None:
        """Dispatch a key press. Returns the committed suggestion, if any."""
        if key == KEY_DOWN:
            self.move_down()
        elif key == KEY_UP:
            self.move_up()
        elif key == KEY_ENTER:
            return self.enter()
        elif key == KEY_ESCAPE:
            self.escape()
        return None


def manufacturer_autocomplete(value: str = "", **kwargs: Any) -> Autocomplete:
    return Autocomplete(POPULAR_MANUFACTURERS, value=value, **kwargs)


def country_autocomplete(value: str = "", **kwargs: Any) -> Autocomplete:
    return Autocomplete(
        COUNTRY_NAMES,
        min_length=get_settings().country_suggestion_min_length,
        value=value,
        **kwargs,
    )


class ModelAutocomplete(Autocomplete):
    """Model autocomplete whose vocabulary follows the selected category and manufacturer."""

    def __init__(
        self,
        category: ListingCategory | str | None = None,
        manufacturer: str | None = None,
        value: str = "",
        **kwargs: Any,
    ) -> None:
        self.category = category
        self.manufacturer = manufacturer
        super().__init__(models_for(category, manufacturer), value=value, **kwargs)

    def set_category(self, category: ListingCategory | str | None) -> None:
        self.category = category
        self.set_vocabulary(models_for(self.category, self.manufacturer))

    def set_manufacturer(self, manufacturer: str | None) -> None:
        self.manufacturer = manufacturer
        self.set_vocabulary(models_for(self.category, self.manufacturer))
