import logging

from navigation.conf import NavigationSettings
from navigation.exceptions import MenuCycleError
from navigation.handlers import registry as default_registry
from .cache import NavigationCache
from .repository import MenuItemRepository

logger = logging.getLogger(__name__)


class NavigationTree:
    """Builds the navigation tree from the menu table.

    A node is the item's row (see ``NODE_FIELDS``) plus ``children``:

    - ``None`` when the item has no active children
    - a list of nodes, by ascending ``sort_order``
    - whatever a registered handler returned, when the item names one

    Built trees can be kept in a cache slot (``get_navigation_array``).
    """

    def __init__(self, repository=None, config=None, cache=None, handlers=None):
        self.config = config or NavigationSettings.from_django()
        self.repository = repository or MenuItemRepository(config=self.config)
        self.cache = cache or NavigationCache.from_settings(self.config)
        self.handlers = handlers or default_registry
        # slot -> tree already loaded or built by this instance
        self._held = {}

    @property
    def nav_table(self) -> str:
        return self.repository.table

    # -----------------------------
    # item maintenance
    # -----------------------------
    def add_nav_item(self, label, uri, parent_id=None, **extra):
        return self.repository.add(label, uri, parent_id, **extra)

    def edit_nav_item(self, item_id, **fields):
        return self.repository.edit(item_id, **fields)

    def delete_nav_item(self, item_id):
        return self.repository.delete(item_id)

    def next_order(self, parent_id=None):
        return self.repository.next_order(parent_id)

    # -----------------------------
    # tree building
    # -----------------------------
    def _handler_children(self, node, current_url):
        if node.get("handler_class"):
            handler_class = self.handlers.resolve_class(node["handler_class"], self.config)
            return handler_class(self.repository, self.config).get_children(current_url)
        func = self.handlers.resolve_function(node["handler_function"], self.config)
        return func(current_url)

    def build_navigation(self, current_url="", parent_id=None, filters=None, _path=()):
        """Active items below ``parent_id`` (root when ``None``), with their children.

        Returns ``None`` when the level has no active items.
        Raises ``MenuCycleError`` if an item turns out to be its own ancestor.
        """
        if parent_id is not None and parent_id in _path:
            raise MenuCycleError(parent_id, _path)

        nodes = self.repository.select_level(parent_id, **(filters or {}))
        if nodes is None:
            return None

        path = _path + ((parent_id,) if parent_id is not None else ())
        for node in nodes:
            if node.get("handler_class") or node.get("handler_function"):
                node["children"] = self._handler_children(node, current_url)
            else:
                node["children"] = self.build_navigation(current_url, node["id"], filters, path)
        return nodes

    def get_navigation_array(self, current_url="", parent_id=None, filters=None, slot=None):
        """Tree for ``parent_id``, served from the ``slot`` cache when possible.

        Without a slot the tree is built on every call.
        """
        if slot is None:
            return self.build_navigation(current_url, parent_id, filters)

        if slot in self._held:
            return self._held[slot]

        tree = self.cache.get(slot)
        if tree is None:
            logger.debug("Building navigation for slot %s", slot)
            tree = self.build_navigation(current_url, parent_id, filters)
            if tree is not None:
                self.cache.put(slot, tree)

        self._held[slot] = tree
        return tree

    def forget(self, slot=None):
        """Drop trees held in memory (all slots when ``slot`` is None)."""
        if slot is None:
            self._held.clear()
        else:
            self._held.pop(slot, None)
