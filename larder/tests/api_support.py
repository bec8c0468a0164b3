"""Shared fixture for API tests: a TestClient against a throwaway SQLite file."""
from pathlib import Path
import tempfile
import unittest

from fastapi.testclient import TestClient

from larder.api.api_run import app
from larder.infra.database import Database, set_database


class ApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        set_database(Database(Path(self.tmp.name) / "api.db"))

    def tearDown(self):
        set_database(None)
        self.tmp.cleanup()

    def add_recipe(self, title, lines, recipe_id):
        resp = self.client.post('/api/recipes', json={'title': title, 'ingredients': lines, 'recipeId': recipe_id})
        self.assertEqual(resp.status_code, 200)
        return resp.json()['recipe']

    def plan(self, day, slot, recipe_id, **extra):
        resp = self.client.post('/api/plan/meal', json={'date': day, 'slot': slot, 'recipeId': recipe_id, **extra})
        self.assertEqual(resp.status_code, 200)
        return resp.json()['meal']
