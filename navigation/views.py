import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render, get_object_or_404, redirect
from django.views.decorators.http import require_GET, require_POST

from navigation.exceptions import NavigationError
from navigation.forms import MenuItemForm
from navigation.models import MenuItem
from navigation.services import NavigationTree

logger = logging.getLogger(__name__)


@login_required
def menu_edit(request, pk=None):
    item = get_object_or_404(MenuItem, pk=pk) if pk else None
    nav = NavigationTree()

    if request.method == "POST":
        form = MenuItemForm(request.POST, instance=item)
        if form.is_valid():
            fields = form.item_fields()
            if item is None:
                ok = nav.add_nav_item(fields.pop("label"), fields.pop("uri"), fields.pop("parent_id"), **fields)
            else:
                ok = nav.edit_nav_item(item.pk, **fields)

            if ok:
                messages.success(request, "Menu item saved")
                return redirect("navigation:menu-edit")
            form.add_error(None, "The menu item could not be saved.")
    else:
        form = MenuItemForm(instance=item)

    all_menus = MenuItem.objects.select_related("parent").order_by("parent_id", "sort_order", "id")

    return render(request, "navigation/menu_edit.html", {
        "form": form,
        "editing": item,
        "all_menus": all_menus,
    })


@require_POST
@login_required
def menu_delete(request, pk):
    if NavigationTree().delete_nav_item(pk):
        messages.success(request, "Menu item deleted")
    else:
        messages.error(request, "Menu item not found")
    return redirect("navigation:menu-edit")


@require_GET
@login_required
def navigation_tree(request):
    """JSON tree: ``?parent=<id>`` picks the root, ``?slot=<name>`` uses the cache."""
    parent = request.GET.get("parent") or None
    if parent is not None and not parent.isdigit():
        return JsonResponse({"error": "parent must be an integer id"}, status=400)

    nav = NavigationTree()
    try:
        tree = nav.get_navigation_array(
            current_url=request.GET.get("url", request.path),
            parent_id=int(parent) if parent else None,
            slot=request.GET.get("slot") or None,
        )
    except NavigationError as e:
        logger.exception("Navigation build failed")
        return JsonResponse({"error": str(e)}, status=500)

    return JsonResponse({"parent": parent and int(parent), "children": tree})
