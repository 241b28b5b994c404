from django.contrib.auth.models import User
from django.test import TestCase
from django.urls import reverse

from navigation.models import MenuItem
from navigation.services import MenuItemRepository


class MenuEditorViewTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="alice", password="pass")
        self.client.force_login(self.user)
        self.repo = MenuItemRepository()

    def test_login_required(self):
        self.client.logout()
        response = self.client.get(reverse("navigation:menu-edit"))
        self.assertEqual(response.status_code, 302)

    def test_editor_lists_items_and_renders_navigation(self):
        home = self.repo.add("Home", "/")
        self.repo.add("About", "/about/", home)

        response = self.client.get(reverse("navigation:menu-edit"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([m.label for m in response.context["all_menus"]], ["Home", "About"])
        self.assertEqual(response.context["navigation"][0]["children"][0]["label"], "About")
        self.assertContains(response, 'href="/about/"')

    def test_create_appends_after_siblings(self):
        self.repo.add("Home", "/")

        response = self.client.post(reverse("navigation:menu-edit"), {
            "label": "Contact",
            "uri": "/contact us/",
            "active": "on",
        })

        self.assertRedirects(response, reverse("navigation:menu-edit"), fetch_redirect_response=False)
        item = MenuItem.objects.get(label="Contact")
        self.assertEqual(item.sort_order, 2)
        self.assertEqual(item.uri, "/contact%20us/")

    def test_create_from_known_url(self):
        self.client.post(reverse("navigation:menu-edit"), {
            "label": "Editor",
            "known_url": reverse("navigation:menu-edit"),
            "active": "on",
        })

        self.assertEqual(MenuItem.objects.get(label="Editor").uri, "/menus/")

    def test_create_requires_label_and_uri(self):
        response = self.client.post(reverse("navigation:menu-edit"), {"label": "  ", "uri": ""})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context["form"].errors)
        self.assertEqual(MenuItem.objects.count(), 0)

    def test_update_item(self):
        pk = self.repo.add("Home", "/")

        response = self.client.post(reverse("navigation:menu-edit", args=[pk]), {
            "label": "Start",
            "uri": "/start page/",
            "sort_order": 5,
        })

        self.assertEqual(response.status_code, 302)
        item = MenuItem.objects.get(pk=pk)
        self.assertEqual(item.label, "Start")
        self.assertEqual(item.uri, "/start%20page/")
        self.assertEqual(item.sort_order, 5)
        self.assertFalse(item.active)

    def test_update_rejects_cycle(self):
        home = self.repo.add("Home", "/")
        about = self.repo.add("About", "/about/", home)

        response = self.client.post(reverse("navigation:menu-edit", args=[home]), {
            "label": "Home",
            "uri": "/",
            "sort_order": 1,
            "parent": about,
            "active": "on",
        })

        self.assertEqual(response.status_code, 200)
        self.assertIn("parent", response.context["form"].errors)
        self.assertIsNone(MenuItem.objects.get(pk=home).parent_id)

    def test_delete_requires_post(self):
        pk = self.repo.add("Home", "/")
        response = self.client.get(reverse("navigation:menu-delete", args=[pk]))
        self.assertEqual(response.status_code, 405)

    def test_delete(self):
        pk = self.repo.add("Home", "/")

        response = self.client.post(reverse("navigation:menu-delete", args=[pk]))

        self.assertEqual(response.status_code, 302)
        self.assertFalse(MenuItem.objects.filter(pk=pk).exists())


class NavigationTreeViewTests(TestCase):
    def setUp(self):
        self.client.force_login(User.objects.create_user(username="bob", password="pass"))
        repo = MenuItemRepository()
        self.home = repo.add("Home", "/")
        repo.add("About", "/about/", self.home)

    def test_full_tree(self):
        response = self.client.get(reverse("navigation:navigation-tree"))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertIsNone(data["parent"])
        self.assertEqual(data["children"][0]["label"], "Home")
        self.assertEqual(data["children"][0]["children"][0]["label"], "About")

    def test_subtree(self):
        response = self.client.get(reverse("navigation:navigation-tree"), {"parent": self.home})

        data = response.json()
        self.assertEqual(data["parent"], self.home)
        self.assertEqual([n["label"] for n in data["children"]], ["About"])

    def test_leaf_has_no_children(self):
        about = MenuItem.objects.get(label="About").pk
        response = self.client.get(reverse("navigation:navigation-tree"), {"parent": about})
        self.assertIsNone(response.json()["children"])

    def test_bad_parent(self):
        response = self.client.get(reverse("navigation:navigation-tree"), {"parent": "home"})
        self.assertEqual(response.status_code, 400)
