from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from rich.markup import escape

TICK = "✔"
CROSS = "✘"


@dataclass(frozen=True)
class _Outcome:
    origin: str

    ok = False

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def target(self) -> str:
        return self.url  # type: ignore[attr-defined]

    @property
    def reason(self) -> Optional[str]:
        return None

    def _parts(self):
        glyph = TICK if self.ok else CROSS
        tail = f" ({self.reason})" if self.reason else ""
        return glyph, f"{self.origin} {self.target}{tail}"

    def __str__(self) -> str:
        glyph, rest = self._parts()
        return f"{glyph} {rest}"

    def markup(self) -> str:
        glyph, rest = self._parts()
        color = "green" if self.ok else "red"
        return f"[{color}]{glyph}[/{color}] {escape(rest)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "ok": self.ok,
            "origin": self.origin,
            "target": self.target,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Accessible(_Outcome):
    url: str
    ok = True


@dataclass(frozen=True)
class BadStatus(_Outcome):
    url: str
    status: int

    @property
    def reason(self) -> Optional[str]:
        return str(self.status)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["status"] = self.status
        return d


@dataclass(frozen=True)
class ConnectionFailed(_Outcome):
    url: str

    @property
    def reason(self) -> Optional[str]:
        return "connection failed"


@dataclass(frozen=True)
class TimedOut(_Outcome):
    url: str

    @property
    def reason(self) -> Optional[str]:
        return "timed out"


@dataclass(frozen=True)
class Malformed(_Outcome):
    raw: str

    @property
    def target(self) -> str:
        return self.raw

    @property
    def reason(self) -> Optional[str]:
        return "malformed"


UrlOutcome = Union[Accessible, BadStatus, ConnectionFailed, TimedOut, Malformed]

KINDS = ("Accessible", "BadStatus", "ConnectionFailed", "TimedOut", "Malformed")
