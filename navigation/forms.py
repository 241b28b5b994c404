from django import forms

from navigation.models import MenuItem
from navigation.utils.url_choices import discover_named_urls


class MenuItemForm(forms.ModelForm):
    known_url = forms.ChoiceField(choices=(), required=False, label="Pick a page")
    uri = forms.CharField(max_length=500, required=False, label="URI")

    class Meta:
        model = MenuItem
        fields = [
            "label", "uri", "parent", "sort_order", "active",
            "fragment", "target", "rel",
            "css_class", "dom_id", "li_class", "li_id", "ul_class", "ul_id",
            "handler_class", "handler_function",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["known_url"].choices = [("", "— select —")] + discover_named_urls()
        self.fields["sort_order"].help_text = "Lower numbers appear first."

        if self.instance.pk is None:
            # new items are appended after their siblings
            del self.fields["sort_order"]
        else:
            excluded = [self.instance.pk]
            excluded += [
                m.pk for m in MenuItem.objects.exclude(pk=self.instance.pk).only("pk", "parent_id")
                if self.instance.pk in m.ancestor_ids()
            ]
            self.fields["parent"].queryset = MenuItem.objects.exclude(pk__in=excluded)

    def clean(self):
        cleaned = super().clean()
        if not (cleaned.get("uri") or "").strip():
            cleaned["uri"] = cleaned.get("known_url") or ""
        if not cleaned["uri"].strip():
            self.add_error("uri", "Enter a URI or pick a page.")
        return cleaned

    def item_fields(self):
        """Cleaned values keyed by model field, ready for the repository."""
        data = {name: self.cleaned_data[name] for name in self._meta.fields if name in self.cleaned_data}
        parent = data.pop("parent", None)
        data["parent_id"] = parent.pk if parent else None
        return data
