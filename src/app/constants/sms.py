"""Enums de domínio para callbacks SMS (TransmitSMS)."""

from __future__ import annotations

from enum import StrEnum


class CallbackType(StrEnum):
    """Tipos de callback suportados pela TransmitSMS."""

    DLR = "dlr"
    REPLY = "reply"
    LINK_HITS = "link_hits"

    @property
    def path(self) -> str:
        """Segmento de URL padrão do callback."""
        return _PATHS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_PATHS: dict[CallbackType, str] = {
    CallbackType.DLR: "dlr",
    CallbackType.REPLY: "reply",
    CallbackType.LINK_HITS: "link-hits",
}

_LABELS: dict[CallbackType, str] = {
    CallbackType.DLR: "Delivery Receipt",
    CallbackType.REPLY: "Reply",
    CallbackType.LINK_HITS: "Link Hit",
}
