from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..access.policy import require_role, scope_for
from ..access.scope import CallerContext
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_str,
    parse_enum,
    parse_filter_enum,
    parse_int,
    parse_optional_date,
    parse_optional_float,
    require_non_empty,
)
from ..core.enums import BACK_OFFICE_ROLES, AssetCondition, AssetStatus, AssetType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Asset, AssetData, AssetStats
from .repository import AssetRepository

logger = logging.getLogger(__name__)


def asset_data_from_payload(payload: Mapping[str, Any], current: Optional[Asset] = None) -> AssetData:
    def pick(key: str, attr: Optional[str] = None) -> Any:
        if key in payload:
            return payload[key]
        if current is not None:
            return getattr(current, attr or key)
        return None

    value = parse_optional_float(pick("value"), "value")
    if value is not None and value < 0:
        raise ValidationError("value must not be negative")

    return AssetData(
        name=require_non_empty(pick("name"), "name"),
        asset_type=parse_enum(AssetType, pick("type", "asset_type"), "type"),
        model=optional_str(pick("model")),
        serial_number=optional_str(pick("serial_number")),
        status=parse_enum(AssetStatus, pick("status"), "status", default=AssetStatus.AVAILABLE),
        condition=parse_enum(
            AssetCondition, pick("condition_status", "condition"), "condition_status", default=AssetCondition.NEW
        ),
        purchase_date=parse_optional_date(pick("purchase_date"), "purchase_date"),
        warranty_date=parse_optional_date(pick("warranty_date"), "warranty_date"),
        value=value,
    )


class AssetService:
    def __init__(self, assets: AssetRepository, employees: EmployeeRepository):
        self._assets = assets
        self._employees = employees

    def list_assets(
        self,
        caller: CallerContext,
        *,
        status: Optional[str] = None,
        asset_type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Asset]:
        return self._assets.list_assets(
            scope=scope_for(caller),
            status=parse_filter_enum(AssetStatus, status, "status"),
            asset_type=parse_filter_enum(AssetType, asset_type, "type"),
            search=optional_str(search),
        )

    def stats(self, caller: CallerContext) -> AssetStats:
        assets = self._assets.list_assets(scope=scope_for(caller))

        def count(status: AssetStatus) -> int:
            return sum(1 for a in assets if a.status == status)

        return AssetStats(
            total=len(assets),
            available=count(AssetStatus.AVAILABLE),
            assigned=count(AssetStatus.ASSIGNED),
            maintenance=count(AssetStatus.MAINTENANCE),
            retired=count(AssetStatus.RETIRED),
            total_value=round(sum(a.value or 0.0 for a in assets), 2),
        )

    def create_asset(self, caller: CallerContext, payload: Mapping[str, Any]) -> int:
        require_role(caller, BACK_OFFICE_ROLES)
        data = asset_data_from_payload(payload)
        if data.status == AssetStatus.ASSIGNED:
            raise ValidationError("Use the assign action to hand out an asset")
        asset_id = self._assets.create(data)
        logger.info("Asset %s (%s) created by user %s", asset_id, data.name, caller.user_id)
        return asset_id

    def update_asset(self, caller: CallerContext, asset_id: int, payload: Mapping[str, Any]) -> Asset:
        require_role(caller, BACK_OFFICE_ROLES)
        current = self._require(asset_id)
        data = asset_data_from_payload(payload, current)

        held = current.status == AssetStatus.ASSIGNED
        if held and data.status != AssetStatus.ASSIGNED:
            raise ValidationError("Return the asset before changing its status")
        if not held and data.status == AssetStatus.ASSIGNED:
            raise ValidationError("Use the assign action to hand out an asset")

        self._assets.update(current.id, data)
        return self._require(current.id)

    def assign_asset(
        self, caller: CallerContext, asset_id: int, employee_id: Any, *, today: Optional[date] = None
    ) -> Asset:
        require_role(caller, BACK_OFFICE_ROLES)
        today = today or now_local().date()
        holder_id = parse_int(employee_id, "employee_id")
        current = self._require(asset_id)

        if not self._employees.get_by_id(holder_id):
            raise ValidationError("Employee does not exist")
        if current.status != AssetStatus.AVAILABLE:
            raise ValidationError("Only available assets can be assigned")
        if not self._assets.assign(asset_id=current.id, employee_id=holder_id, assigned_date=today):
            raise ValidationError("Only available assets can be assigned")

        logger.info("Asset %s assigned to employee %s", current.id, holder_id)
        return self._require(current.id)

    def return_asset(self, caller: CallerContext, asset_id: int) -> Asset:
        require_role(caller, BACK_OFFICE_ROLES)
        current = self._require(asset_id)
        if current.status != AssetStatus.ASSIGNED or not self._assets.release(current.id):
            raise ValidationError("Asset is not assigned")

        logger.info("Asset %s returned by employee %s", current.id, current.assigned_to)
        return self._require(current.id)

    def _require(self, asset_id: int) -> Asset:
        asset = self._assets.get_by_id(int(asset_id))
        if not asset:
            raise NotFoundError("Asset not found")
        return asset
