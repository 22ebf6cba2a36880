"""TransitionResult dataclass for the outcome of a status decision."""

from dataclasses import dataclass
from typing import Optional

from .status import VehicleStatus


@dataclass(frozen=True)
class TransitionResult:
    """Allow or deny decision for a vehicle status change.

    A denial carries ``error`` and no ``new_status``; the caller must not
    mutate anything. An allowed result carries ``new_status`` and possibly a
    ``warning`` the caller should show while still applying the change.
    """

    allowed: bool
    new_status: Optional[VehicleStatus] = None
    warning: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def allow(
        cls, new_status: VehicleStatus, warning: Optional[str] = None
    ) -> "TransitionResult":
        return cls(allowed=True, new_status=new_status, warning=warning)

    @classmethod
    def deny(cls, error: str) -> "TransitionResult":
        return cls(allowed=False, error=error)

    @property
    def message(self) -> Optional[str]:
        """Error for denials, otherwise the warning (if any)."""
        return self.error if not self.allowed else self.warning

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape used by the web layer."""
        return {
            "allowed": self.allowed,
            "newStatus": self.new_status.value if self.new_status else None,
            "warning": self.warning,
            "error": self.error,
        }
