import logging

from django.core.exceptions import FieldDoesNotExist
from django.db import DatabaseError, transaction

from navigation.conf import NavigationSettings
from navigation.models import MenuItem, NODE_FIELDS
from navigation.utils.uri import get_uri_sanitizer

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or not str(value).strip()


class MenuItemRepository:
    """Create / update / delete / count menu rows.

    Expected failures are reported as return values (``False`` or ``None``),
    never as exceptions. Callers check the result.
    """

    def __init__(self, model=MenuItem, config: NavigationSettings | None = None):
        self.model = model
        self.config = config or NavigationSettings.from_django()
        self.sanitize_uri = get_uri_sanitizer(self.config)

    @property
    def table(self) -> str:
        return self.model._meta.db_table

    def _parent_filter(self, parent_id):
        if parent_id is None:
            return {"parent__isnull": True}
        return {"parent_id": parent_id}

    # -----------------------------
    # reads
    # -----------------------------
    def get(self, item_id):
        return self.model.objects.filter(pk=item_id).first()

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()

    def next_order(self, parent_id=None) -> int:
        """Sort key for the next child of ``parent_id``: sibling count + 1."""
        return self.count(**self._parent_filter(parent_id)) + 1

    def select_level(self, parent_id=None, **filters):
        """Active rows directly below ``parent_id``, as node dicts.

        Returns ``None`` when nothing matches, so "no children" can be told
        apart from an empty list produced elsewhere.
        """
        rows = list(
            self.model.objects.filter(active=True, **self._parent_filter(parent_id))
            .filter(**filters)
            .order_by("sort_order", "id")
            .values(*NODE_FIELDS)
        )
        return rows or None

    # -----------------------------
    # writes
    # -----------------------------
    def _concrete_fields(self, names):
        """Model fields for ``names``; ``None`` if any of them is not a writable column."""
        found = []
        for name in names:
            try:
                field = self.model._meta.get_field(name)
            except FieldDoesNotExist:
                return None
            if not field.concrete or field.primary_key:
                return None
            found.append(field)
        return found

    def add(self, label, uri, parent_id=None, **extra):
        """Insert a new item after its siblings. Returns the new id or ``False``."""
        if _blank(label) or _blank(uri):
            logger.debug("Rejected menu item with empty label or uri (label=%r, uri=%r)", label, uri)
            return False

        if self._concrete_fields(extra) is None:
            logger.warning("Rejected menu item with unknown fields: %s", sorted(extra))
            return False

        fields = dict(extra)
        fields.update(
            label=str(label).strip(),
            uri=self.sanitize_uri(uri),
            parent_id=parent_id,
        )

        try:
            # Count and insert under one lock so two writers under the same parent
            # cannot both read the same sibling count.
            with transaction.atomic():
                list(
                    self.model.objects.select_for_update()
                    .filter(**self._parent_filter(parent_id))
                    .values_list("pk", flat=True)
                )
                fields["sort_order"] = self.next_order(parent_id)
                item = self.model.objects.create(**fields)
        except DatabaseError as e:
            logger.warning("Could not insert menu item %r under %s: %s", fields["label"], parent_id, e)
            return False

        logger.debug("Added menu item %s (%s) under %s at %s", item.pk, item.label, parent_id, item.sort_order)
        return item.pk

    def edit(self, item_id, **fields) -> bool:
        """Update one item. A ``uri`` value is sanitised again before saving."""
        if not fields:
            return False

        model_fields = self._concrete_fields(fields)
        if model_fields is None:
            logger.warning("Edit of menu item %s rejected, unknown fields: %s", item_id, sorted(fields))
            return False

        item = self.get(item_id)
        if item is None:
            logger.debug("Edit skipped, menu item %s not found", item_id)
            return False

        if "uri" in fields:
            fields["uri"] = self.sanitize_uri(fields["uri"])

        update_fields = {"updated_at"}
        for field, value in zip(model_fields, fields.values()):
            setattr(item, field.attname, value)
            update_fields.add(field.name)

        try:
            with transaction.atomic():
                item.save(update_fields=update_fields)
        except DatabaseError as e:
            logger.warning("Could not update menu item %s: %s", item_id, e)
            return False
        return True

    def delete(self, item_id) -> bool:
        item = self.get(item_id)
        if item is None:
            return False
        try:
            with transaction.atomic():
                item.delete()
        except DatabaseError as e:
            logger.warning("Could not delete menu item %s: %s", item_id, e)
            return False
        logger.debug("Deleted menu item %s", item_id)
        return True
