from django.urls import path
from navigation.views import menu_edit, menu_delete, navigation_tree

app_name = "navigation"

urlpatterns = [
    path("menus/", menu_edit, name="menu-edit"),
    path("menus/<int:pk>/", menu_edit, name="menu-edit"),
    path("menus/<int:pk>/delete/", menu_delete, name="menu-delete"),
    path("navigation.json", navigation_tree, name="navigation-tree"),
]
