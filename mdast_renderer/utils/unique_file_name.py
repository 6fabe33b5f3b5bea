"""Collision-free file names for files persisted during one export session."""
from __future__ import annotations

import uuid
from typing import Dict, Set, Tuple


def split_extension(file_name: str) -> Tuple[str, str]:
    """Split ``file_name`` at its last dot; the extension keeps the dot."""
    dot_index = file_name.rfind(".")
    if dot_index == -1:
        return file_name, ""
    return file_name[:dot_index], file_name[dot_index:]


class UniqueFileName:
    """Issues file names that are never repeated by the same instance.

    Not safe for concurrent use: issuing a name is a check-then-add over the
    used-name set.
    """

    def __init__(self) -> None:
        self._used_names: Set[str] = set()
        self._counters: Dict[str, int] = {}

    def generate(self, origin_file_name: str) -> str:
        """Return ``origin_file_name`` or the first free ``<stem>-<n><ext>``.

        The counter for ``origin_file_name`` persists across calls, so a later
        collision continues from the last suffix tried.
        """
        new_file_name = origin_file_name
        stem, extension = split_extension(origin_file_name)

        while new_file_name in self._used_names:
            counter = self._counters.get(origin_file_name, 0) + 1
            self._counters[origin_file_name] = counter
            new_file_name = f"{stem}-{counter}{extension}"

        self._used_names.add(new_file_name)
        return new_file_name

    def generate_with_uuid(self, origin_file_name: str) -> str:
        """Return ``<uuid4><ext>``, suffixed with ``-<n>`` in the unlikely case of a clash."""
        _, extension = split_extension(origin_file_name)
        token = str(uuid.uuid4())

        final_file_name = f"{token}{extension}"
        counter = 1
        while final_file_name in self._used_names:
            final_file_name = f"{token}-{counter}{extension}"
            counter += 1

        self._used_names.add(final_file_name)
        return final_file_name

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._used_names

    def __len__(self) -> int:
        return len(self._used_names)
