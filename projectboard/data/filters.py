"""
View-mode filtering for the project dashboards.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Type, Union

from projectboard.data.records import ProjectRecord, ProjectStatus, Role


class ProviderView(str, Enum):
    HIRED = "hired"
    COMPLETED = "completed"
    ALL = "all"


class ClientView(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


ViewMode = Union[ProviderView, ClientView]

VIEW_ENUMS: Dict[Role, Type[Enum]] = {
    Role.PROVIDER: ProviderView,
    Role.CLIENT: ClientView,
}

DEFAULT_VIEWS: Dict[Role, ViewMode] = {
    Role.PROVIDER: ProviderView.HIRED,
    Role.CLIENT: ClientView.ACTIVE,
}

# Keyed by view value; None means "keep every record"
VIEW_STATUS: Dict[str, Optional[ProjectStatus]] = {
    "hired": ProjectStatus.IN_PROGRESS,
    "active": ProjectStatus.IN_PROGRESS,
    "completed": ProjectStatus.COMPLETED,
    "all": None,
}


def view_modes(role: Role) -> List[ViewMode]:
    """Return the view modes of a role in toggle order (primary mode first)."""
    return list(VIEW_ENUMS[role])  # type: ignore[arg-type]


def coerce_view(role: Role, mode: Union[str, ViewMode]) -> ViewMode:
    """Resolve a string or enum member to the role's view enum; unknown values raise ValueError."""
    enum_cls = VIEW_ENUMS[role]
    if isinstance(mode, Enum):
        if not isinstance(mode, enum_cls):
            raise ValueError(f"{mode!r} is not a {role.value} view mode")
        return mode  # type: ignore[return-value]
    try:
        return enum_cls(str(mode).strip().lower())  # type: ignore[return-value]
    except ValueError:
        raise ValueError(f"unknown {role.value} view mode: {mode!r}") from None


def filter_records(records: Sequence[ProjectRecord], mode: ViewMode) -> List[ProjectRecord]:
    """
    Keep the records that belong to the given view mode.

    The result preserves input order; "all" returns every record and an empty
    input always yields an empty list.
    """
    status = VIEW_STATUS[mode.value]
    if status is None:
        return list(records)
    return [record for record in records if record.status is status]


@dataclass
class ViewSelector:
    """Currently selected view mode of one dashboard instance."""

    role: Role
    initial: InitVar[Optional[Union[str, ViewMode]]] = None
    mode: ViewMode = field(init=False)

    def __post_init__(self, initial: Optional[Union[str, ViewMode]]) -> None:
        self.role = Role(self.role)
        self.mode = DEFAULT_VIEWS[self.role] if initial is None else coerce_view(self.role, initial)

    @property
    def options(self) -> List[ViewMode]:
        return view_modes(self.role)

    def select(self, mode: Union[str, ViewMode]) -> ViewMode:
        self.mode = coerce_view(self.role, mode)
        return self.mode

    def apply(self, records: Sequence[ProjectRecord]) -> List[ProjectRecord]:
        return filter_records(records, self.mode)
