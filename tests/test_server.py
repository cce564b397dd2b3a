"""Tests for the dictee HTTP API."""

import tempfile
import unittest

from fastapi.testclient import TestClient

import server.app as server_app
from server.file_storage import FileStorage


class TestDicteeAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        server_app.storage = FileStorage(self.tmp.name)
        server_app.user_engines.clear()
        server_app.user_lists.clear()
        self.client = TestClient(server_app.create_app())

    def tearDown(self):
        server_app.storage = None
        self.tmp.cleanup()

    def start(self, **body):
        return self.client.post('/api/round/start', json=body)

    def test_root(self):
        self.assertEqual(self.client.get('/').json(), {"service": "dictee"})

    def test_lists(self):
        data = self.client.get('/api/lists').json()
        self.assertIn("Dagen van de week", data['lists'])
        self.assertEqual(data['min_question_count'], 1)
        self.assertEqual(data['max_question_count'], 100)
        self.assertEqual(data['locale'], 'nl-NL')

    def test_get_list(self):
        data = self.client.get('/api/lists/Dagen van de week').json()
        self.assertEqual(data['entries'][0], "maandag")
        self.assertFalse(data['random'])
        self.assertTrue(data['builtin'])

    def test_get_unknown_list(self):
        self.assertEqual(self.client.get('/api/lists/Nergens').status_code, 404)

    def test_create_edit_delete_list(self):
        response = self.client.post('/api/lists', json={"title": "Dieren", "body": "kat\nhond\n"})
        self.assertEqual(response.json(), {"name": "Dieren"})
        response = self.client.post('/api/lists', json={"title": "Dieren", "body": "muis"})
        self.assertEqual(response.json(), {"name": "Dieren (1)"})

        response = self.client.put('/api/lists/Dieren', json={"title": "Huisdieren", "body": "kat", "random": False})
        self.assertEqual(response.json(), {"name": "Huisdieren"})
        data = self.client.get('/api/lists/Huisdieren').json()
        self.assertEqual(data['entries'], ["kat"])
        self.assertFalse(data['builtin'])
        self.assertEqual(self.client.get('/api/lists/Dieren').status_code, 404)

        response = self.client.delete('/api/lists/Huisdieren')
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("Huisdieren", response.json()['lists'])

    def test_list_validation(self):
        response = self.client.post('/api/lists', json={"title": "Leeg", "body": "  \n"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.delete('/api/lists/Dagen van de week').status_code, 400)
        self.assertEqual(self.client.delete('/api/lists/Nergens').status_code, 404)

    def test_round_flow(self):
        status = self.start(list_name="Dagen van de week", question_count=2).json()
        self.assertEqual(status['phase'], 'in_round')
        self.assertEqual(status['current_item'], "maandag")
        self.assertEqual(status['questions_per_round'], 2)
        self.assertEqual(status['question_number'], 1)

        result = self.client.post('/api/round/submit', json={"attempt": "maandg"}).json()
        self.assertFalse(result['correct'])
        kinds = [j['kind'] for j in result['alignment']]
        self.assertEqual(kinds.count('missing'), 1)
        self.assertEqual(kinds.count('correct'), 6)
        self.assertEqual(result['next_item'], "dinsdag")

        result = self.client.post('/api/round/submit', json={"attempt": "Dinsdag "}).json()
        self.assertTrue(result['correct'])
        self.assertTrue(result['round_complete'])
        self.assertIsNone(result['next_item'])

        status = self.client.get('/api/status').json()
        self.assertEqual(status['phase'], 'round_complete')
        self.assertEqual(status['mistake_tally'], {"maandag": 1})
        self.assertEqual(status['mistakes'][0]['attempt'], "maandg")
        self.assertEqual(status['accuracy'], 50)

        status = self.client.post('/api/round/next', json={}).json()
        self.assertEqual(status['round_number'], 2)
        self.assertEqual(status['asked_count'], 0)
        self.assertEqual(status['current_item'], "maandag")

    def test_until_all_correct(self):
        status = self.start(list_name="Dagen van de week", until_all_correct=True).json()
        self.assertTrue(status['until_all_correct'])
        self.assertIsNone(status['questions_per_round'])
        self.assertEqual(status['remaining_count'], 7)

    def test_default_count_is_list_length(self):
        status = self.start(list_name="Dagen van de week").json()
        self.assertEqual(status['questions_per_round'], 7)

    def test_count_is_clamped(self):
        status = self.start(list_name="Dagen van de week", question_count=0).json()
        self.assertEqual(status['questions_per_round'], 1)

    def test_start_unknown_list(self):
        self.assertEqual(self.start(list_name="Nergens").status_code, 404)

    def test_submit_without_round(self):
        response = self.client.post('/api/round/submit', json={"attempt": "kat"})
        self.assertEqual(response.status_code, 409)

    def test_next_before_round_complete(self):
        self.start(list_name="Dagen van de week")
        self.assertEqual(self.client.post('/api/round/next', json={}).status_code, 409)

    def test_replay(self):
        self.assertEqual(self.client.post('/api/round/replay', json={}).status_code, 409)
        self.start(list_name="Dagen van de week")
        self.assertEqual(self.client.post('/api/round/replay', json={}).json(), {"current_item": "maandag"})

    def test_reset_keeps_mistakes(self):
        self.start(list_name="Dagen van de week")
        self.client.post('/api/round/submit', json={"attempt": "x"})
        status = self.client.post('/api/round/reset', json={}).json()
        self.assertEqual(status['phase'], 'idle')
        self.assertIsNone(status['list_name'])
        self.assertEqual(status['mistake_tally'], {"maandag": 1})

    def test_users_are_separate(self):
        self.start(user_id="anna", list_name="Dagen van de week")
        status = self.client.get('/api/status', params={"user_id": "bram"}).json()
        self.assertEqual(status['phase'], 'idle')


if __name__ == '__main__':
    unittest.main()
