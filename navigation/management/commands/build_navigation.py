import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from navigation.exceptions import NavigationError
from navigation.services import NavigationTree


class Command(BaseCommand):
    help = "Build the navigation tree, optionally warming a cache slot, and print it as JSON"

    def add_arguments(self, parser):
        parser.add_argument("--parent", type=int, default=None, help="Root the tree at this menu item id")
        parser.add_argument("--slot", default=None, help="Cache slot to read from / write to")
        parser.add_argument("--url", default="/", help="Current URL passed to children handlers")
        parser.add_argument("--quiet", action="store_true", help="Do not print the tree")

    def handle(self, *args, **opts):
        nav = NavigationTree()
        try:
            tree = nav.get_navigation_array(
                current_url=opts["url"],
                parent_id=opts["parent"],
                slot=opts["slot"],
            )
        except NavigationError as e:
            raise CommandError(str(e)) from e

        if tree is None:
            self.stdout.write(self.style.WARNING("No active menu items below the requested parent."))
            return

        if opts["slot"] and nav.cache.exists(opts["slot"]):
            self.stderr.write(f"Slot {opts['slot']!r} cached at {nav.cache.slot_path(opts['slot'])}")

        if not opts["quiet"]:
            self.stdout.write(json.dumps(tree, cls=DjangoJSONEncoder, indent=2, ensure_ascii=False))
