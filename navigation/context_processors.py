from navigation.services import NavigationTree


def navigation(request):
    if not request.user.is_authenticated:
        return {}

    tree = NavigationTree()
    return {
        "navigation": tree.get_navigation_array(
            current_url=request.path,
            slot=tree.config.context_slot,
        ) or [],
    }
