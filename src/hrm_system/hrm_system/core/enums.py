from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


# Roles that see every row and may mutate master data (employees, assets).
BACK_OFFICE_ROLES = frozenset({Role.ADMIN, Role.HR})
APPROVER_ROLES = frozenset({Role.ADMIN, Role.HR, Role.MANAGER})


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PROBATION = "probation"
    TERMINATED = "terminated"


class AttendanceStatus(str, Enum):
    """Normalized attendance status as stored in the database."""

    ON_TIME = "on_time"
    LATE = "late"
    EARLY_LEAVE = "early_leave"


class WorkType(str, Enum):
    OFFICE = "office"
    WFH = "wfh"
    BUSINESS_TRIP = "business_trip"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    UNPAID = "unpaid"
    MATERNITY = "maternity"
    EMERGENCY = "emergency"


class RequestStatus(str, Enum):
    """Leave request approval state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    # Never stored; derived from due_date when tasks are read.
    OVERDUE = "overdue"


class AssetType(str, Enum):
    LAPTOP = "laptop"
    MONITOR = "monitor"
    PHONE = "phone"
    EQUIPMENT = "equipment"
    FURNITURE = "furniture"


class AssetStatus(str, Enum):
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class AssetCondition(str, Enum):
    NEW = "new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ReportType(str, Enum):
    ASSIGNED = "assigned"
    UNPLANNED = "unplanned"


class ReportStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
