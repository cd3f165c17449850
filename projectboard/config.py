"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

import streamlit as st

from projectboard.data.records import Role


@dataclass(frozen=True)
class ViewConfig:
    key: str
    label: str


# Ordered view toggles per role; the first entry is the initial view
VIEW_LABELS: Dict[Role, List[ViewConfig]] = {
    Role.PROVIDER: [
        ViewConfig("hired", "Active Hired"),
        ViewConfig("completed", "Completed"),
        ViewConfig("all", "All Projects"),
    ],
    Role.CLIENT: [
        ViewConfig("active", "Active"),
        ViewConfig("completed", "Completed"),
        ViewConfig("all", "All Projects"),
    ],
}

DASHBOARD_TITLES: Dict[Role, str] = {
    Role.PROVIDER: "Creator Dashboard",
    Role.CLIENT: "Member Dashboard",
}

DASHBOARD_SUBTITLES: Dict[Role, str] = {
    Role.PROVIDER: "Manage your hired projects and track your performance",
    Role.CLIENT: "Manage your projects, track progress, and communicate with your team.",
}

RECORD_SOURCES = ("sample", "sheets")


@dataclass(frozen=True)
class Settings:
    record_source: str = "sample"
    spreadsheet_id: Optional[str] = None
    projects_sheet: str = "Projects"
    milestones_sheet: Optional[str] = "Milestones"
    credentials: str = "google-credentials.json"
    role: Role = Role.PROVIDER
    user_id: str = "demo-user"
    currency: str = "UGX"
    log_level: str = "INFO"


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists outside Streamlit Cloud
        pass
    return default


def load_settings() -> Settings:
    """Resolve Settings from env / st.secrets; invalid values raise ValueError."""
    record_source = (get_secret("RECORD_SOURCE", "sample") or "sample").strip().lower()
    if record_source not in RECORD_SOURCES:
        raise ValueError(f"RECORD_SOURCE must be one of {RECORD_SOURCES}, got {record_source!r}")

    role_raw = (get_secret("DASHBOARD_ROLE", Role.PROVIDER.value) or Role.PROVIDER.value).strip().lower()
    try:
        role = Role(role_raw)
    except ValueError:
        raise ValueError(f"DASHBOARD_ROLE must be 'provider' or 'client', got {role_raw!r}") from None

    milestones_sheet = get_secret("MILESTONES_SHEET", "Milestones")
    return Settings(
        record_source=record_source,
        spreadsheet_id=get_secret("SPREADSHEET_ID"),
        projects_sheet=get_secret("PROJECTS_SHEET", "Projects") or "Projects",
        milestones_sheet=milestones_sheet or None,
        credentials=get_secret("GOOGLE_APPLICATION_CREDENTIALS", "google-credentials.json")
        or "google-credentials.json",
        role=role,
        user_id=get_secret("DASHBOARD_USER_ID", "demo-user") or "demo-user",
        currency=get_secret("DISPLAY_CURRENCY", "UGX") or "UGX",
        log_level=(get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    root.setLevel(level)
