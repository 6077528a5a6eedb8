"""
Field Tooltip Store

Field-keyed error messages shown inline next to form inputs. A validation
run replaces the whole set; single entries are dropped optimistically as the
user types, and the next validation run is authoritative again.
"""

from typing import Iterator, Mapping


class FieldTooltipStore:
    """Current error message per field key."""

    def __init__(self):
        self._messages: dict[str, str] = {}

    def replace(self, messages: Mapping[str, str]) -> None:
        """Replace every message with the result of a new validation run."""
        self._messages = dict(messages)

    def show(self, field_key: str, message: str) -> None:
        self._messages[field_key] = message

    def hide(self, field_key: str) -> None:
        self._messages.pop(field_key, None)

    def get(self, field_key: str) -> str | None:
        return self._messages.get(field_key)

    def clear_if_satisfied(self, field_key: str, value) -> bool:
        """
        Drop the field's message once the user has entered something.

        Returns True if a message was removed.
        """
        if field_key not in self._messages:
            return False
        if value is None or not str(value).strip():
            return False
        del self._messages[field_key]
        return True

    def clear(self) -> None:
        self._messages = {}

    def as_dict(self) -> dict[str, str]:
        return dict(self._messages)

    def __contains__(self, field_key: str) -> bool:
        return field_key in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)
