from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

NAVIGATION_APP_LABEL = "navigation"
AUTH_APP_LABEL = "auth"


def admin_changelist(app_label: str, model: str):
    """
    model must be the lowercase model name used by Django admin url patterns.
    Examples:
      admin:navigation_menuitem_changelist
      admin:auth_user_changelist
    """
    return reverse_lazy(f"admin:{app_label}_{model}_changelist")


UNFOLD = {
    "SITE_HEADER": "dbmenu",
    "SITE_TITLE": "dbmenu",
    "SITE_URL": "/",

    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Navigation"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {"title": _("Menu items"), "icon": "account_tree", "link": admin_changelist(NAVIGATION_APP_LABEL, "menuitem")},
                    {"title": _("Menu editor"), "icon": "edit_note", "link": reverse_lazy("navigation:menu-edit")},
                ],
            },
            {
                "title": _("Users & access"),
                "collapsible": True,
                "items": [
                    {"title": _("Users"), "icon": "person", "link": admin_changelist(AUTH_APP_LABEL, "user")},
                    {"title": _("Groups"), "icon": "group", "link": admin_changelist(AUTH_APP_LABEL, "group")},
                ],
            },
        ],
    },
}
