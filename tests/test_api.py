"""Flask adapter: every request carries its own state."""

from __future__ import annotations

import unittest
from unittest import mock

from taxonomy_widget.api import main as api

from tree_fixtures import sample_tree

FINCH = ["Animals", "Birds", "Finch"]
OAK = ["Plants", "Trees", "Oak"]


class ApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = api.app.test_client()
        patcher = mock.patch.object(api, "load_taxonomy", side_effect=lambda *a, **kw: sample_tree())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["status"], "ok")

    def test_taxonomy(self) -> None:
        body = self.client.get("/taxonomy").get_json()
        self.assertEqual(body["nodes"], 13)
        self.assertEqual(body["items"][0]["label"], "Animals")
        self.assertEqual(body["items"][0]["children"][0]["path"], ["Animals", "Birds"])

    def test_view_with_search(self) -> None:
        resp = self.client.post("/taxonomy/view", json={
            "selected": [FINCH],
            "options": {"maxUsages": 1, "showFullPath": True},
            "search": "Fin",
        })
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        animals = body["nodes"][0]
        self.assertEqual(animals["label"], "Animals")
        self.assertTrue(animals["indeterminate"])
        self.assertTrue(animals["expanded"])
        finch = animals["children"][0]["children"][0]
        self.assertTrue(finch["checked"])
        self.assertEqual(len(body["nodes"]), 1)
        self.assertTrue(body["options"]["max_usages_reached"])
        self.assertEqual(body["summary"], [{"path": FINCH, "text": "Animals / Birds / Finch"}])
        self.assertEqual(body["placeholder"], api.TaxonomyWidget([]).placeholder)

    def test_toggle(self) -> None:
        resp = self.client.post("/taxonomy/toggle", json={"selected": [FINCH], "path": OAK, "value": True})
        self.assertEqual(resp.get_json(), {"selected": [FINCH, OAK], "changed": True, "reason": None})

    def test_toggle_refused(self) -> None:
        resp = self.client.post("/taxonomy/toggle", json={
            "selected": [],
            "options": {"leafsOnly": True},
            "path": ["Plants"],
            "value": True,
        })
        body = resp.get_json()
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(body["changed"])
        self.assertEqual(body["selected"], [])
        self.assertEqual(body["reason"], "Only leaf nodes allowed")

    def test_items_in_body(self) -> None:
        items = [{"label": "X", "path": ["X"], "depth": 0}]
        body = self.client.post("/taxonomy/view", json={"items": items}).get_json()
        self.assertEqual([n["label"] for n in body["nodes"]], ["X"])

    def test_invalid_body(self) -> None:
        resp = self.client.post("/taxonomy/toggle", json={"path": ["A"]})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"], "Invalid request body")

        resp = self.client.post("/taxonomy/view", data="[1, 2]", content_type="application/json")
        self.assertEqual(resp.status_code, 400)

    def test_inconsistent_tree(self) -> None:
        items = [{"label": "X", "path": ["X"], "depth": 0, "children": [{"label": "Y", "path": ["X", "Y"], "depth": 3}]}]
        resp = self.client.post("/taxonomy/view", json={"items": items})
        self.assertEqual(resp.status_code, 422)

    def test_missing_taxonomy_file(self) -> None:
        with mock.patch.object(api, "load_taxonomy", side_effect=FileNotFoundError("gone")):
            resp = self.client.get("/taxonomy")
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
