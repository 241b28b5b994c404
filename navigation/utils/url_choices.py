from django.urls import get_resolver, URLPattern, URLResolver, reverse
from django.urls.exceptions import NoReverseMatch

# Namespaces that never make sense as a menu target
EXCLUDED_NAMESPACES = ("admin",)


def _walk(patterns, namespace_prefix=""):
    for p in patterns:
        if isinstance(p, URLPattern) and p.name:
            yield f"{namespace_prefix}{p.name}"
        elif isinstance(p, URLResolver):
            if p.namespace in EXCLUDED_NAMESPACES:
                continue
            ns = f"{p.namespace}:" if p.namespace else ""
            yield from _walk(p.url_patterns, f"{namespace_prefix}{ns}")


def discover_named_urls():
    """(path, label) pairs for every named URL that reverses without arguments."""
    choices = {}
    for full_name in _walk(get_resolver().url_patterns):
        try:
            path = reverse(full_name)
        except NoReverseMatch:
            continue
        choices.setdefault(path, f"{full_name}  →  {path}")

    return sorted(choices.items(), key=lambda x: x[1])
