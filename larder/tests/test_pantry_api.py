from datetime import date, timedelta
import unittest

from larder.events import web_observers
from larder.tests.api_support import ApiTestCase


class TestPantryAPI(ApiTestCase):

    def test_crud(self):
        resp = self.client.post('/api/pantry', json={'name': 'Rice', 'qtyText': '2 kg'})
        self.assertEqual(resp.status_code, 200)
        item = resp.json()['item']
        self.assertEqual(item['QtyNum'], 2)
        self.assertEqual(item['Unit'], 'kg')
        listed = self.client.get('/api/pantry', params={'q': 'ric'}).json()['items']
        self.assertEqual([i['ItemId'] for i in listed], [item['ItemId']])
        resp = self.client.post('/api/pantry', json={'itemId': item['ItemId'], 'name': 'Rice', 'qtyNum': 1, 'unit': 'kg'})
        self.assertEqual(resp.json()['item']['QtyNum'], 1)
        self.assertEqual(len(self.client.get('/api/pantry').json()['items']), 1)
        self.assertTrue(self.client.delete(f"/api/pantry/{item['ItemId']}").json()['ok'])
        resp = self.client.delete(f"/api/pantry/{item['ItemId']}")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {'ok': False, 'error': 'Pantry item not found'})

    def test_rejects_blank_name_and_negative_quantity(self):
        self.assertEqual(self.client.post('/api/pantry', json={'name': ''}).status_code, 400)
        self.assertEqual(self.client.post('/api/pantry', json={'name': 'Rice', 'qtyNum': -1}).status_code, 400)

    def test_low_stock_and_expiring(self):
        soon = (date.today() + timedelta(days=2)).isoformat()
        later = (date.today() + timedelta(days=60)).isoformat()
        self.client.post('/api/pantry', json={'name': 'Beans', 'qtyNum': 1, 'unit': 'can', 'low_stock_threshold': 2})
        self.client.post('/api/pantry', json={'name': 'Milk', 'qtyNum': 1, 'unit': 'l', 'expiration_date': soon})
        self.client.post('/api/pantry', json={'name': 'Cheese', 'qtyNum': 1, 'unit': 'each', 'expiration_date': later})
        low = self.client.get('/api/pantry/low-stock').json()['items']
        self.assertEqual([w['name'] for w in low], ['Beans'])
        expiring = self.client.get('/api/pantry/expiring', params={'days': 7}).json()['items']
        self.assertEqual([e['name'] for e in expiring], ['Milk'])
        expiring = self.client.get('/api/pantry/expiring', params={'days': 500}).json()['items']
        self.assertEqual([e['name'] for e in expiring], ['Milk', 'Cheese'])

    def test_alerts_feed(self):
        web_observers.start()
        self.client.post('/api/pantry', json={'name': 'Beans', 'qtyNum': 1, 'unit': 'can', 'low_stock_threshold': 2})
        data = self.client.get('/api/pantry/alerts').json()
        self.assertIn('events', data)
        self.assertIn('next_cursor', data)
        self.assertTrue(any(e.get('name') == 'Beans' for e in data['events']))
        again = self.client.get('/api/pantry/alerts', params={'since': data['next_cursor']}).json()
        self.assertEqual(again['events'], [])


class TestStoresAndRecipesAPI(ApiTestCase):

    def test_stores(self):
        self.client.post('/api/stores', json={'name': 'Whole Foods'})
        self.client.post('/api/stores', json={'name': 'Aldi', 'priority': 1})
        stores = self.client.get('/api/stores').json()['stores']
        self.assertEqual([s['StoreId'] for s in stores], ['aldi', 'whole-foods'])
        self.assertTrue(self.client.delete('/api/stores/aldi').json()['ok'])
        self.assertEqual(self.client.delete('/api/stores/aldi').status_code, 404)
        self.assertEqual(self.client.post('/api/stores', json={'name': '  '}).status_code, 400)

    def test_recipe_lines_are_parsed(self):
        recipe = self.add_recipe('Pancakes', ['1 1/2 cups flour', '', '2 large eggs, beaten'], 'pancakes')
        lines = recipe['ingredients']
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0]['QtyNum'], 1.5)
        self.assertEqual(lines[0]['Unit'], 'cup')
        self.assertEqual(lines[1]['idx'], 1)
        self.assertEqual(lines[1]['Notes'], 'beaten')
        listed = self.client.get('/api/recipes').json()['recipes']
        self.assertEqual(listed, [{'RecipeId': 'pancakes', 'Title': 'Pancakes'}])

    def test_unknown_recipe(self):
        resp = self.client.get('/api/recipes/nope/ingredients')
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(resp.json()['ok'])
        resp = self.client.post('/api/plan/meal', json={'date': '2026-01-05', 'slot': 'dinner', 'recipeId': 'nope'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], 'Unknown recipe: nope')

    def test_bad_slot(self):
        self.add_recipe('Toast', ['2 slices bread'], 'toast')
        resp = self.client.post('/api/plan/meal', json={'date': '2026-01-05', 'slot': 'brunch', 'recipeId': 'toast'})
        self.assertEqual(resp.status_code, 400)

    def test_plan_listing(self):
        self.add_recipe('Toast', ['2 slices bread'], 'toast')
        self.plan('2026-01-05', 'breakfast', 'toast')
        self.plan('2026-01-05', 'dinner', 'toast', additional=True)
        meals = self.client.get('/api/plan/meals', params={'start': '2026-01-01', 'end': '2026-01-31'}).json()['meals']
        self.assertEqual([m['additional'] for m in meals], [False, True])
        self.assertEqual(meals[0]['title'], 'Toast')

    def test_parse_line(self):
        resp = self.client.post('/api/recipes/parse-line', json={'text': '2 to 3 tbsp honey'})
        parsed = resp.json()['parsed']
        self.assertEqual(parsed['qty_num'], 2)
        self.assertEqual(parsed['qty_text'], '2 to 3 tbsp')
        self.assertEqual(parsed['unit'], 'tbsp')
        self.assertEqual(parsed['name'], 'honey')
        self.assertEqual(self.client.post('/api/recipes/parse-line', json={'text': ' '}).status_code, 400)


if __name__ == '__main__':
    unittest.main()
