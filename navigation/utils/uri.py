import re

from django.utils.encoding import iri_to_uri
from django.utils.module_loading import import_string

from navigation.conf import NavigationSettings

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")


def sanitize_uri(uri: str) -> str:
    """Normalise a link target before it is stored.

    - strips surrounding whitespace and control characters
    - percent-encodes non-ASCII characters (``iri_to_uri``)
    - replaces script-capable schemes with ``#``
    """
    cleaned = _CONTROL_CHARS.sub("", str(uri)).strip()
    if cleaned.replace(" ", "").lower().startswith(_UNSAFE_SCHEMES):
        return "#"
    return iri_to_uri(cleaned)


def get_uri_sanitizer(config: NavigationSettings | None = None):
    """Return the configured sanitiser (``DBMENU["URI_SANITIZER"]``) or the default."""
    config = config or NavigationSettings.from_django()
    if config.uri_sanitizer:
        return import_string(config.uri_sanitizer)
    return sanitize_uri
