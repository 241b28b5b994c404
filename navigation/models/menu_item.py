from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords

from navigation.conf import nav_table_name

# Fields copied into every tree node. "children" is added by the builder.
NODE_FIELDS = (
    "id",
    "parent_id",
    "label",
    "uri",
    "sort_order",
    "fragment",
    "target",
    "rel",
    "css_class",
    "dom_id",
    "li_class",
    "li_id",
    "ul_class",
    "ul_id",
    "handler_class",
    "handler_function",
)


class MenuItem(models.Model):
    """One navigation link.

    Items form a tree through ``parent`` (NULL = root level). Siblings are
    ordered by ``sort_order``; a new item is placed after its existing siblings
    (see ``MenuItemRepository.next_order``) and the numbers are never compacted,
    so gaps after deletes are normal.

    ``handler_class`` / ``handler_function`` name a registered handler that
    produces this node's children instead of the rows below it.
    """

    label = models.CharField(_("label"), max_length=255)
    uri = models.CharField(_("URI"), max_length=500)

    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        related_name="children",
        on_delete=models.CASCADE,
    )

    # order within the same parent (top-level uses parent=NULL)
    sort_order = models.PositiveIntegerField(default=0)
    active = models.BooleanField(default=True)

    # presentation, passed through untouched
    fragment = models.CharField(max_length=255, blank=True, default="")
    target = models.CharField(max_length=50, blank=True, default="")
    rel = models.CharField(max_length=100, blank=True, default="")
    css_class = models.CharField(max_length=255, blank=True, default="")
    dom_id = models.CharField(max_length=255, blank=True, default="")
    li_class = models.CharField(max_length=255, blank=True, default="")
    li_id = models.CharField(max_length=255, blank=True, default="")
    ul_class = models.CharField(max_length=255, blank=True, default="")
    ul_id = models.CharField(max_length=255, blank=True, default="")

    handler_class = models.CharField(
        max_length=255, blank=True, default="",
        help_text=_("Registry key of a class handler that supplies the children."),
    )
    handler_function = models.CharField(
        max_length=255, blank=True, default="",
        help_text=_("Registry key of a function handler that supplies the children."),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    history = HistoricalRecords()

    class Meta:
        db_table = nav_table_name()
        ordering = ["parent_id", "sort_order", "id"]
        indexes = [
            models.Index(fields=["parent", "active", "sort_order"], name="menuitem_level_idx"),
        ]
        verbose_name = _("menu item")
        verbose_name_plural = _("menu items")

    def __str__(self):
        return self.label

    def ancestor_ids(self):
        """Ids from the direct parent upwards. Stops if the chain loops."""
        seen = []
        parent_id = self.parent_id
        while parent_id is not None and parent_id not in seen:
            seen.append(parent_id)
            parent_id = (
                type(self).objects.filter(pk=parent_id)
                .values_list("parent_id", flat=True)
                .first()
            )
        return seen

    def clean(self):
        super().clean()
        if self.parent_id is None:
            return
        if self.pk is not None and (
            self.parent_id == self.pk or self.pk in self.parent.ancestor_ids()
        ):
            raise ValidationError(
                {"parent": _("A menu item cannot be placed below itself or one of its children.")}
            )
