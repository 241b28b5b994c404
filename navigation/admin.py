from django.contrib import admin, messages
from django.shortcuts import redirect
from django.utils.translation import gettext_lazy as _
from django_object_actions import DjangoObjectActions, action
from simple_history.admin import SimpleHistoryAdmin
from unfold.admin import ModelAdmin

from navigation.models import MenuItem
from navigation.services import MenuItemRepository, NavigationCache


@admin.register(MenuItem)
class MenuItemAdmin(DjangoObjectActions, SimpleHistoryAdmin, ModelAdmin):
    list_display = ("label", "uri", "parent", "sort_order", "active", "handler_class", "handler_function")
    list_filter = ("active", "parent")
    search_fields = ("label", "uri")
    ordering = ("parent_id", "sort_order", "id")
    autocomplete_fields = ("parent",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (_("Link"), {"fields": ("label", "uri", "fragment", "parent", "sort_order", "active")}),
        (_("Presentation"), {"fields": ("target", "rel", "css_class", "dom_id", "li_class", "li_id", "ul_class", "ul_id")}),
        (_("Children handler"), {"fields": ("handler_class", "handler_function")}),
        (_("Audit"), {"fields": ("created_at", "updated_at")}),
    )

    changelist_actions = ("clear_navigation_cache",)

    def save_model(self, request, obj, form, change):
        """New items go through the repository so they get the next sibling order and a sanitised uri."""
        repo = MenuItemRepository()
        if change:
            obj.uri = repo.sanitize_uri(obj.uri)
            super().save_model(request, obj, form, change)
            return

        fields = {
            f: form.cleaned_data[f]
            for f in form.cleaned_data
            if f not in ("label", "uri", "parent", "sort_order")
        }
        pk = repo.add(obj.label, obj.uri, obj.parent_id, **fields)
        if pk:
            obj.pk = pk
            obj.refresh_from_db()
        else:
            self.message_user(request, "Label and URI are required.", level=messages.ERROR)

    @action(label=_("Clear navigation cache"), description=_("Remove every cached navigation tree"))
    def clear_navigation_cache(self, request, queryset):
        removed = NavigationCache.from_settings().clear()
        self.message_user(request, f"Removed {removed} cached navigation slot(s).", level=messages.SUCCESS)
        return redirect("admin:navigation_menuitem_changelist")
