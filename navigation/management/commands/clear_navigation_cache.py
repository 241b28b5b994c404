from django.core.management.base import BaseCommand

from navigation.services import NavigationCache


class Command(BaseCommand):
    help = "Remove cached navigation trees (all slots, or only the given ones)"

    def add_arguments(self, parser):
        parser.add_argument("slots", nargs="*", help="Slot names; omit to clear every slot")

    def handle(self, *args, **opts):
        cache = NavigationCache.from_settings()
        if opts["slots"]:
            removed = sum(1 for slot in opts["slots"] if cache.invalidate(slot))
        else:
            removed = cache.clear()
        self.stdout.write(self.style.SUCCESS(f"Removed {removed} navigation cache slot(s)"))
