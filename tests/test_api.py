#!/usr/bin/env python3
"""
HTTP tests for the FastAPI layer (api/*, main.py).

Every test gets its own app and its own GameStore.
"""
import unittest

from fastapi.testclient import TestClient

from config import Settings
from core.game_manager import GameStore
from main import create_app


class ApiMixin(unittest.TestCase):

    def setUp(self):
        self.store = GameStore(Settings())
        self.client = TestClient(create_app(store=self.store, settings=Settings()))

    def _create_game(self, **body):
        body.setdefault("name", "Family Night")
        resp = self.client.post("/api/games", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["game"]

    def _add_player(self, game_id, name):
        resp = self.client.post(f"/api/games/{game_id}/players", json={"name": name})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["game"]["players"][-1]

    def _transact(self, game_id, **body):
        return self.client.post(f"/api/games/{game_id}/transactions", json=body)


class TestHealth(ApiMixin):

    def test_root_and_health(self):
        self.assertEqual(self.client.get("/").json()["status"], "ok")
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})


class TestGamesApi(ApiMixin):

    def test_create_uses_camel_case(self):
        game = self._create_game(startingBalance=2000, currency="$")
        self.assertEqual(game["startingBalance"], 2000)
        self.assertEqual(game["currency"], "$")
        self.assertIn("createdAt", game)
        self.assertIn("joinCode", game)
        self.assertEqual(game["players"], [])

    def test_create_invalid_balance_defaults(self):
        game = self._create_game(startingBalance="lots")
        self.assertEqual(game["startingBalance"], 1500)

    def test_create_requires_name(self):
        resp = self.client.post("/api/games", json={"name": "   "})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("name", resp.json()["detail"])

    def test_huge_starting_balance_defaults(self):
        body = '{"name": "Huge", "startingBalance": %s}' % ("9" * 401)
        resp = self.client.post(
            "/api/games", content=body, headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["game"]["startingBalance"], 1500)

    def test_numeric_name_and_currency_accepted(self):
        game = self._create_game(name=7, currency=0)
        self.assertEqual(game["name"], "7")
        self.assertEqual(game["currency"], "0")

    def test_list(self):
        self._create_game(name="A")
        self._create_game(name="B")
        games = self.client.get("/api/games").json()["games"]
        self.assertEqual([g["name"] for g in games], ["A", "B"])
        self.assertEqual(games[0]["playerCount"], 0)
        self.assertEqual(games[0]["transactionCount"], 0)

    def test_get_and_not_found(self):
        game = self._create_game()
        self.assertEqual(self.client.get(f"/api/games/{game['id']}").json()["game"], game)
        self.assertEqual(self.client.get("/api/games/missing").status_code, 404)

    def test_get_by_code(self):
        game = self._create_game()
        resp = self.client.get(f"/api/games/code/{game['joinCode'].lower()}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["game"]["id"], game["id"])
        self.assertEqual(self.client.get("/api/games/code/NOPE").status_code, 404)


class TestPlayersApi(ApiMixin):

    def test_add_player(self):
        game = self._create_game()
        player = self._add_player(game["id"], "Ann")
        self.assertEqual(player["name"], "Ann")
        self.assertEqual(player["balance"], 1500)

    def test_numeric_name_is_coerced(self):
        game = self._create_game()
        player = self._add_player(game["id"], 7)
        self.assertEqual(player["name"], "7")

    def test_blank_name(self):
        game = self._create_game()
        resp = self.client.post(f"/api/games/{game['id']}/players", json={"name": ""})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_game(self):
        resp = self.client.post("/api/games/missing/players", json={"name": "Ann"})
        self.assertEqual(resp.status_code, 404)


class TestTransactionsApi(ApiMixin):

    def setUp(self):
        super().setUp()
        self.game = self._create_game()
        self.ann = self._add_player(self.game["id"], "Ann")
        self.ben = self._add_player(self.game["id"], "Ben")

    def test_transfer(self):
        resp = self._transact(
            self.game["id"], type="Transfer", amount="500",
            fromPlayerId=self.ann["id"], toPlayerId=self.ben["id"], note=" rent "
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        game = resp.json()["game"]
        tx = game["transactions"][0]
        self.assertEqual(tx["type"], "transfer")
        self.assertEqual(tx["amount"], 500)
        self.assertEqual(tx["note"], "rent")
        self.assertEqual(tx["results"], {self.ann["id"]: 1000, self.ben["id"]: 2000})
        self.assertEqual(tx["actors"]["from"], {"id": self.ann["id"], "name": "Ann"})

    def test_insufficient_funds_is_400(self):
        resp = self._transact(
            self.game["id"], type="withdraw", amount=3000, fromPlayerId=self.ben["id"]
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Ben", resp.json()["detail"])

    def test_bad_type_is_400(self):
        resp = self._transact(self.game["id"], type="steal", amount=1, toPlayerId=self.ann["id"])
        self.assertEqual(resp.status_code, 400)
        game = self.client.get(f"/api/games/{self.game['id']}").json()["game"]
        self.assertEqual(game["transactions"], [])

    def test_bad_amount_is_400(self):
        resp = self._transact(self.game["id"], type="deposit", amount=-5, toPlayerId=self.ann["id"])
        self.assertEqual(resp.status_code, 400)

    def test_unknown_player_is_400(self):
        resp = self._transact(self.game["id"], type="deposit", amount=5, toPlayerId="ghost")
        self.assertEqual(resp.status_code, 400)

    def test_unknown_game_is_404(self):
        resp = self._transact("missing", type="deposit", amount=5, toPlayerId=self.ann["id"])
        self.assertEqual(resp.status_code, 404)

    def test_huge_integer_amount_is_400(self):
        body = '{"type": "deposit", "amount": %s, "toPlayerId": "%s"}' % ("9" * 401, self.ann["id"])
        resp = self.client.post(
            f"/api/games/{self.game['id']}/transactions",
            content=body,
            headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status_code, 400, resp.text)

    def test_non_string_type_is_400(self):
        resp = self._transact(self.game["id"], type=5, amount=1, toPlayerId=self.ann["id"])
        self.assertEqual(resp.status_code, 400, resp.text)
        self.assertIn("Transaction type", resp.json()["detail"])

    def test_non_string_player_id_is_400(self):
        resp = self._transact(self.game["id"], type="deposit", amount=1, toPlayerId=12345)
        self.assertEqual(resp.status_code, 400, resp.text)

    def test_summary_counts(self):
        self._transact(self.game["id"], type="deposit", amount=5, toPlayerId=self.ann["id"])
        summary = self.client.get("/api/games").json()["games"][0]
        self.assertEqual(summary["playerCount"], 2)
        self.assertEqual(summary["transactionCount"], 1)


if __name__ == "__main__":
    unittest.main()
