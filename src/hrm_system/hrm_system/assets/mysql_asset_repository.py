from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..access.scope import Scope
from ..core.enums import AssetCondition, AssetStatus, AssetType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scope_clause, to_float
from .model import Asset, AssetData
from .repository import AssetRepository

_SELECT = """
    SELECT a.id, a.name, a.type, a.model, a.serial_number, a.assigned_to, a.assigned_date,
           a.status, a.condition_status, a.purchase_date, a.warranty_date, a.value,
           a.created_at, e.name AS assigned_to_name
    FROM assets a
    LEFT JOIN employees e ON e.id = a.assigned_to
"""

_DUPLICATE_SERIAL = "Serial number already exists"


class MySQLAssetRepository(AssetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_asset(r: dict) -> Asset:
        return Asset(
            id=int(r["id"]),
            name=str(r["name"]),
            asset_type=AssetType(r["type"]),
            model=r.get("model"),
            serial_number=r.get("serial_number"),
            assigned_to=r.get("assigned_to"),
            assigned_date=r.get("assigned_date"),
            status=AssetStatus(r["status"]),
            condition=AssetCondition(r.get("condition_status") or AssetCondition.NEW.value),
            purchase_date=r.get("purchase_date"),
            warranty_date=r.get("warranty_date"),
            value=to_float(r.get("value")),
            assigned_to_name=r.get("assigned_to_name"),
            created_at=r.get("created_at"),
        )

    @staticmethod
    def _params(data: AssetData) -> tuple:
        return (
            data.name,
            data.asset_type.value,
            data.model,
            data.serial_number,
            data.status.value,
            data.condition.value,
            data.purchase_date,
            data.warranty_date,
            data.value,
        )

    def get_by_id(self, asset_id: int) -> Optional[Asset]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.id=%s", (int(asset_id),))
            r = fetchone(cur)
            return self._to_asset(r) if r else None

    def list_assets(
        self,
        *,
        scope: Scope,
        status: Optional[AssetStatus] = None,
        asset_type: Optional[AssetType] = None,
        search: Optional[str] = None,
    ) -> Sequence[Asset]:
        scope_sql, params = scope_clause(
            scope, employee_col="a.assigned_to", department_col="e.department", manager_col="e.manager_id"
        )
        clauses = [scope_sql]

        if status is not None:
            clauses.append("a.status=%s")
            params.append(status.value)
        if asset_type is not None:
            clauses.append("a.type=%s")
            params.append(asset_type.value)
        if search:
            clauses.append("(a.name LIKE %s OR a.serial_number LIKE %s OR a.model LIKE %s)")
            like = f"%{search}%"
            params.extend([like, like, like])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY a.created_at DESC, a.id DESC", tuple(params))
            return [self._to_asset(r) for r in fetchall(cur)]

    def create(self, data: AssetData) -> int:
        with db_cursor(self._conn_factory, duplicate_message=_DUPLICATE_SERIAL) as (_, cur):
            cur.execute(
                """
                INSERT INTO assets(name, type, model, serial_number, status, condition_status,
                                   purchase_date, warranty_date, value)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                self._params(data),
            )
            return int(cur.lastrowid)

    def update(self, asset_id: int, data: AssetData) -> bool:
        with db_cursor(self._conn_factory, duplicate_message=_DUPLICATE_SERIAL) as (_, cur):
            cur.execute(
                """
                UPDATE assets
                SET name=%s, type=%s, model=%s, serial_number=%s, status=%s, condition_status=%s,
                    purchase_date=%s, warranty_date=%s, value=%s
                WHERE id=%s
                """,
                self._params(data) + (int(asset_id),),
            )
            return cur.rowcount > 0

    def assign(self, *, asset_id: int, employee_id: int, assigned_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE assets SET assigned_to=%s, assigned_date=%s, status=%s
                WHERE id=%s AND status=%s
                """,
                (
                    int(employee_id),
                    assigned_date,
                    AssetStatus.ASSIGNED.value,
                    int(asset_id),
                    AssetStatus.AVAILABLE.value,
                ),
            )
            return cur.rowcount > 0

    def release(self, asset_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE assets SET assigned_to=NULL, assigned_date=NULL, status=%s
                WHERE id=%s AND status=%s
                """,
                (AssetStatus.AVAILABLE.value, int(asset_id), AssetStatus.ASSIGNED.value),
            )
            return cur.rowcount > 0
