from __future__ import annotations

from dataclasses import dataclass

from projectboard.config import Settings
from projectboard.data.state import DashboardState


@dataclass
class PageContext:
    settings: Settings
    state: DashboardState
