"""Tests for the spell_server HTTP endpoints and its CORS header behavior.

Run with:
    python -m pytest unit_tests/test_spell_server.py -v
"""
from __future__ import annotations
import os
import sys

# Ensure the code directory is on the path before importing anything.
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import unittest

import speller_settings
from spell_corrector import SpellCorrector


def _make_app(flask_manage_cors: bool):
    """Re-import spell_server with a specific FLASK_MANAGE_CORS value.

    Because spell_server runs module-level code at import time we need to
    reload it (or import it fresh) for each test scenario.
    """
    os.environ["FLASK_MANAGE_CORS"] = "true" if flask_manage_cors else "false"

    # Remove cached module so the re-import re-runs module-level code.
    for key in list(sys.modules):
        if key == "spell_server":
            del sys.modules[key]

    # A tiny dictionary keeps the tests from loading the full English word list.
    speller_settings.set_spell_corrector(SpellCorrector.from_words(["hello", "world", "help"]))

    import spell_server  # noqa: PLC0415
    return spell_server.app


class TestEndpoints(unittest.TestCase):
    def setUp(self):
        self.app = _make_app(flask_manage_cors=False)
        self.client = self.app.test_client()

    def tearDown(self):
        speller_settings._SPELL_CORRECTOR = None

    def test_lookup(self):
        resp = self.client.get("/lookup?term=wrld&verbosity=top")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"suggestions": [{"term": "world", "distance": 1, "count": 1}]})

    def test_lookup_closest_by_default(self):
        resp = self.client.get("/lookup?term=helo")
        terms = sorted(s["term"] for s in resp.get_json()["suggestions"])
        self.assertEqual(terms, ["hello", "help"])

    def test_lookup_include_unknown(self):
        resp = self.client.post("/lookup", json={"term": "zzzz", "include_unknown": True,
                                                 "max_edit_distance": 1})
        self.assertEqual(resp.get_json(), {"suggestions": [{"term": "zzzz", "distance": 2, "count": 0}]})

    def test_lookup_transfer_casing(self):
        resp = self.client.get("/lookup?term=WRLD&verbosity=top&transfer_casing=true")
        self.assertEqual(resp.get_json()["suggestions"][0]["term"], "WORLD")

    def test_lookup_missing_term(self):
        resp = self.client.get("/lookup")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("term", resp.get_json()["error"])

    def test_lookup_unknown_verbosity(self):
        resp = self.client.get("/lookup?term=helo&verbosity=some")
        self.assertEqual(resp.status_code, 400)

    def test_lookup_bad_distance(self):
        resp = self.client.get("/lookup?term=helo&max_edit_distance=two")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/lookup?term=helo&max_edit_distance=-1")
        self.assertEqual(resp.status_code, 400)

    def test_lookup_compound(self):
        resp = self.client.get("/lookup_compound", query_string={"phrase": "hello wrld"})
        self.assertEqual(resp.status_code, 200)
        suggestion = resp.get_json()["suggestion"]
        self.assertEqual(suggestion["term"], "hello world")
        self.assertEqual(suggestion["distance"], 1)

    def test_segment(self):
        resp = self.client.post("/segment", data={"text": "helloworld"})
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual(body["segmented_string"], "hello world")
        self.assertEqual(body["corrected_string"], "hello world")
        self.assertEqual(body["distance_sum"], 1)

    def test_fix(self):
        resp = self.client.post("/fix", json={"text": "Helo wrld!"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"text": "Hello world!"})

    def test_fix_missing_text(self):
        resp = self.client.post("/fix", json={})
        self.assertEqual(resp.status_code, 400)


class TestCorsHeadersManaged(unittest.TestCase):
    """When FLASK_MANAGE_CORS=True Flask should add CORS headers."""

    def setUp(self):
        self.app = _make_app(flask_manage_cors=True)
        self.client = self.app.test_client()

    def tearDown(self):
        speller_settings._SPELL_CORRECTOR = None

    def test_get_has_cors_header(self):
        resp = self.client.get(
            "/lookup?term=hello",
            headers={"Origin": "http://localhost:8002"},
        )
        acao = resp.headers.getlist("Access-Control-Allow-Origin")
        self.assertTrue(
            len(acao) > 0,
            "Expected at least one Access-Control-Allow-Origin header",
        )
        # Duplicate headers break browsers.
        self.assertEqual(
            len(acao),
            1,
            f"Duplicate Access-Control-Allow-Origin headers found: {acao}",
        )
        self.assertEqual(acao[0], "*")

    def test_options_preflight_has_cors_header(self):
        resp = self.client.options(
            "/lookup",
            headers={
                "Origin": "http://localhost:8002",
                "Access-Control-Request-Method": "GET",
            },
        )
        acao = resp.headers.getlist("Access-Control-Allow-Origin")
        self.assertTrue(len(acao) > 0, "OPTIONS response missing Access-Control-Allow-Origin")
        self.assertEqual(len(acao), 1, f"Duplicate ACAO on OPTIONS: {acao}")


class TestCorsHeadersNotManaged(unittest.TestCase):
    """When FLASK_MANAGE_CORS=False Flask must NOT add any CORS headers
    (nginx handles it; duplicates break the browser CORS check)."""

    def setUp(self):
        self.app = _make_app(flask_manage_cors=False)
        self.client = self.app.test_client()

    def tearDown(self):
        speller_settings._SPELL_CORRECTOR = None

    def test_get_has_no_cors_header(self):
        resp = self.client.get(
            "/lookup?term=hello",
            headers={"Origin": "http://localhost:8002"},
        )
        acao = resp.headers.getlist("Access-Control-Allow-Origin")
        self.assertEqual(
            len(acao),
            0,
            f"Flask should NOT add CORS headers in production mode, but got: {acao}",
        )


if __name__ == "__main__":
    unittest.main()
