"""Shared utilities for the resource and capacity tools."""

# Month arithmetic and labels
from utils.months import (
    compute_window,
    current_month,
    format_month_label,
    index_to_month,
    month_to_index,
    parse_month,
    recent_months,
)

# Calendar month selection
from utils.selection import MAX_WINDOW, MonthWindowSelector, ToggleOutcome

# Allocation categories
from utils.categories import (
    CALENDAR_BUCKETS,
    CAPACITY_BUCKETS,
    group_by_category,
    normalize_category,
)

# Roles and capabilities
from utils.roles import Capability, Role, UserRecord, account_types_with, can

# Validation utilities
from utils.validation import (
    ValidationIssue,
    ValidationResult,
    check_initiative_fields,
)

# Configuration
from utils.config import AppConfig, Config

__all__ = [
    # Months
    "compute_window",
    "current_month",
    "format_month_label",
    "index_to_month",
    "month_to_index",
    "parse_month",
    "recent_months",
    # Selection
    "MAX_WINDOW",
    "MonthWindowSelector",
    "ToggleOutcome",
    # Categories
    "CALENDAR_BUCKETS",
    "CAPACITY_BUCKETS",
    "group_by_category",
    "normalize_category",
    # Roles
    "Capability",
    "Role",
    "UserRecord",
    "account_types_with",
    "can",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "check_initiative_fields",
    # Config
    "AppConfig",
    "Config",
]
