"""ParseConfig — the filter switches threaded through parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import UnknownFilterError

FILTER_NAMES: tuple[str, ...] = ("dates", "state", "uuids")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Which kinds of noise to drop from the converted output.

    - ``no_dates``: date strings and entries under timestamp-like keys
    - ``no_state``: window geometry, toolbar layouts, caches
    - ``no_uuids``: UUIDs and ``_<md5>`` hashed identifiers
    """

    no_dates: bool = False
    no_state: bool = False
    no_uuids: bool = False

    @classmethod
    def from_filter(cls, text: str | None) -> ParseConfig:
        """Build a config from a comma list such as ``"dates,state"``."""
        flags = {name: False for name in FILTER_NAMES}
        for item in (text or "").split(","):
            name = item.strip().lower()
            if not name:
                continue
            if name not in flags:
                raise UnknownFilterError(item.strip(), FILTER_NAMES)
            flags[name] = True
        return cls(
            no_dates=flags["dates"],
            no_state=flags["state"],
            no_uuids=flags["uuids"],
        )

    @property
    def filters(self) -> list[str]:
        """Names of the enabled filters, in canonical order."""
        enabled = (self.no_dates, self.no_state, self.no_uuids)
        return [name for name, on in zip(FILTER_NAMES, enabled) if on]
