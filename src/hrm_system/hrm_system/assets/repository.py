from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import AssetStatus, AssetType
from .model import Asset, AssetData


class AssetRepository(Protocol):
    def get_by_id(self, asset_id: int) -> Optional[Asset]:
        raise NotImplementedError

    def list_assets(
        self,
        *,
        scope: Scope,
        status: Optional[AssetStatus] = None,
        asset_type: Optional[AssetType] = None,
        search: Optional[str] = None,
    ) -> Sequence[Asset]:
        """A non-global scope sees only assets held by employees it covers."""

        raise NotImplementedError

    def create(self, data: AssetData) -> int:
        raise NotImplementedError

    def update(self, asset_id: int, data: AssetData) -> bool:
        raise NotImplementedError

    def assign(self, *, asset_id: int, employee_id: int, assigned_date: date) -> bool:
        """Only succeeds while the asset is available."""

        raise NotImplementedError

    def release(self, asset_id: int) -> bool:
        """Only succeeds while the asset is assigned."""

        raise NotImplementedError
