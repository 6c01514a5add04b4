from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..core.constants import DEFAULT_CONTRACT_KEY, DEFAULT_LEAVE_ENTITLEMENTS
from ..core.enums import LeaveType


@dataclass(frozen=True)
class LeavePolicy:
    """Paid leave entitlements per year, keyed by contract.

    The contract key is the employee's status (e.g. "probation"); keys that
    are not configured fall back to "default".
    """

    entitlements: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: {DEFAULT_CONTRACT_KEY: dict(DEFAULT_LEAVE_ENTITLEMENTS)}
    )

    def entitlement_for(self, contract: str) -> dict[LeaveType, int]:
        table = (
            self.entitlements.get(contract)
            or self.entitlements.get(DEFAULT_CONTRACT_KEY)
            or DEFAULT_LEAVE_ENTITLEMENTS
        )
        return {LeaveType(k): int(v) for k, v in table.items()}
