from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AssetCondition, AssetStatus, AssetType


@dataclass(frozen=True)
class Asset:
    id: int
    name: str
    asset_type: AssetType
    model: Optional[str] = None
    serial_number: Optional[str] = None
    assigned_to: Optional[int] = None
    assigned_date: Optional[date] = None
    status: AssetStatus = AssetStatus.AVAILABLE
    condition: AssetCondition = AssetCondition.NEW
    purchase_date: Optional[date] = None
    warranty_date: Optional[date] = None
    value: Optional[float] = None
    assigned_to_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AssetData:
    """Editable fields; assignment is changed only through assign/return."""

    name: str
    asset_type: AssetType
    model: Optional[str]
    serial_number: Optional[str]
    status: AssetStatus
    condition: AssetCondition
    purchase_date: Optional[date]
    warranty_date: Optional[date]
    value: Optional[float]


@dataclass(frozen=True)
class AssetStats:
    total: int
    available: int
    assigned: int
    maintenance: int
    retired: int
    total_value: float
