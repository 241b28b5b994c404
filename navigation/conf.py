from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from django.conf import settings

DEFAULT_NAV_TABLE = "menu_items"


@dataclass(frozen=True)
class NavigationSettings:
    """Configuration for the navigation builder.

    Built from ``settings.DBMENU``; any key missing there falls back to the
    defaults below.
    """

    nav_table: str = DEFAULT_NAV_TABLE
    cache_enabled: bool = False
    cache_dir: Optional[Path] = None
    invalidate_on_change: bool = True
    handlers: Dict[str, str] = field(default_factory=dict)
    uri_sanitizer: Optional[str] = None
    context_slot: Optional[str] = "main"

    @classmethod
    def from_django(cls) -> "NavigationSettings":
        raw = getattr(settings, "DBMENU", None) or {}

        table = raw.get("NAV_TABLE")
        if not isinstance(table, str) or not table.strip():
            table = DEFAULT_NAV_TABLE

        cache_dir = raw.get("CACHE_DIR")
        return cls(
            nav_table=table.strip(),
            cache_enabled=bool(raw.get("CACHE_ENABLED", False)),
            cache_dir=Path(cache_dir) if cache_dir else None,
            invalidate_on_change=bool(raw.get("INVALIDATE_ON_CHANGE", True)),
            handlers=dict(raw.get("HANDLERS") or {}),
            uri_sanitizer=raw.get("URI_SANITIZER") or None,
            context_slot=raw.get("CONTEXT_SLOT", "main") or None,
        )


def nav_table_name() -> str:
    """Table name used by the MenuItem model (read once, at model import)."""
    return NavigationSettings.from_django().nav_table
