"""File-based cache for built navigation trees.

One JSON document per slot:

    <CACHE_DIR>/
    ├── main.json
    └── footer.json

Document layout:

    {"format": "dbmenu.navigation", "version": 1, "slot": "main", "tree": [...]}

A slot is write-once: ``put`` never replaces an existing file. Stale slots are
removed with ``invalidate`` / ``clear`` (called from the MenuItem signals).
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from django.core.serializers.json import DjangoJSONEncoder
from django.utils.text import get_valid_filename

from navigation.conf import NavigationSettings

logger = logging.getLogger(__name__)

CACHE_FORMAT = "dbmenu.navigation"
CACHE_VERSION = 1


def _valid_tree(tree) -> bool:
    """A tree is a list of node objects, each carrying a ``children`` key.

    Children produced by handlers are opaque and are not checked further.
    """
    if not isinstance(tree, list):
        return False
    for node in tree:
        if not isinstance(node, dict) or "children" not in node:
            return False
        children = node["children"]
        if isinstance(children, list) and children and isinstance(children[0], dict) and "children" in children[0]:
            if not _valid_tree(children):
                return False
    return True


class NavigationCache:
    """Write-once cache slots backed by one file each."""

    def __init__(self, cache_dir: Path | None, enabled: bool = False) -> None:
        self._cache_dir = Path(cache_dir) if cache_dir else None
        self.enabled = enabled

    @classmethod
    def from_settings(cls, config: NavigationSettings | None = None) -> "NavigationCache":
        config = config or NavigationSettings.from_django()
        return cls(config.cache_dir, enabled=config.cache_enabled)

    @property
    def cache_dir(self) -> Path | None:
        return self._cache_dir

    @property
    def active(self) -> bool:
        return self.enabled and self._cache_dir is not None

    def slot_path(self, slot: str) -> Path:
        if self._cache_dir is None:
            raise ValueError("No cache directory configured")
        return self._cache_dir / f"{get_valid_filename(slot)}.json"

    def exists(self, slot: str) -> bool:
        return self.active and self.slot_path(slot).exists()

    def get(self, slot: str):
        """Return the cached tree for ``slot`` or ``None`` on a miss."""
        if not self.active:
            return None

        path = self.slot_path(slot)
        if not path.exists():
            return None

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable navigation cache %s: %s", path, e)
            return None

        if (
            not isinstance(payload, dict)
            or payload.get("format") != CACHE_FORMAT
            or payload.get("version") != CACHE_VERSION
            or not _valid_tree(payload.get("tree"))
        ):
            logger.warning("Ignoring navigation cache %s: unexpected layout", path)
            return None

        logger.debug("Navigation cache hit for slot %s", slot)
        return payload["tree"]

    def put(self, slot: str, tree) -> bool:
        """Store ``tree`` unless the slot already has a file. Failures are logged, not raised."""
        if not self.active:
            return False

        path = self.slot_path(slot)
        if path.exists():
            return False

        try:
            body = json.dumps(
                {"format": CACHE_FORMAT, "version": CACHE_VERSION, "slot": slot, "tree": tree},
                cls=DjangoJSONEncoder,
                ensure_ascii=False,
                indent=2,
            )
        except (TypeError, ValueError) as e:
            logger.warning("Could not serialise navigation tree for slot %s: %s", slot, e)
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create navigation cache directory %s: %s", path.parent, e)
            return False

        tmp_path = None
        try:
            # Write the full body aside, then link it into place: the slot either
            # appears complete or not at all, and the link fails if it exists.
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp", delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(body)
            os.link(tmp_path, path)
        except FileExistsError:
            return False
        except OSError as e:
            logger.warning("Could not write navigation cache %s: %s", path, e)
            return False
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.debug("Navigation cache written for slot %s", slot)
        return True

    def invalidate(self, slot: str) -> bool:
        if self._cache_dir is None:
            return False
        try:
            self.slot_path(slot).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not remove navigation cache for slot %s: %s", slot, e)
            return False
        return True

    def clear(self) -> int:
        """Remove every slot file. Returns the number of files removed."""
        if self._cache_dir is None or not self._cache_dir.exists():
            return 0
        removed = 0
        for path in self._cache_dir.glob("*.json"):
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning("Could not remove navigation cache %s: %s", path, e)
        return removed
