from .menu_item import MenuItem, NODE_FIELDS
