import unittest
from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy import update

from starlaunch.db.models import Project
from starlaunch.db.session import build_engine
from starlaunch.main import create_app
from starlaunch.storage import MemStorage, SqlStorage
from tests.helpers import FrozenClock, project_payload


class ApiTestBase(unittest.TestCase):
    def setUp(self):
        self.clock = FrozenClock(datetime.utcnow())
        self.storage = self.make_storage(self.clock)
        self.storage.init_schema()
        self.client = TestClient(create_app(storage=self.storage))

    def make_storage(self, clock):
        return MemStorage(clock=clock)

    def set_project_status(self, project_id, status):
        with self.storage._lock:
            self.storage._projects[project_id].status = status

    def connect(self, wallet, referral_code=None):
        body = {"walletAddress": wallet}
        if referral_code is not None:
            body["referralCode"] = referral_code
        response = self.client.post("/api/auth/connect", json=body)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def mint(self, wallet, xlm):
        response = self.client.post("/api/points/mint", json={"walletAddress": wallet, "xlmAmount": xlm})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def create_project(self, wallet, **overrides):
        response = self.client.post("/api/projects/create", json=project_payload(wallet, **overrides))
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def participate(self, project_id, wallet, points):
        return self.client.post(
            f"/api/projects/{project_id}/participate",
            json={"walletAddress": wallet, "starPoints": points},
        )

    def balance(self, wallet):
        return self.client.get("/api/users/me", params={"walletAddress": wallet}).json()["starPoints"]


class TestLaunchScenario(ApiTestBase):
    def test_mint_create_and_participate(self):
        creator = self.connect("W1")
        self.assertEqual(self.mint("W1", 100)["user"]["starPoints"], 1000)

        project = self.create_project("W1", participationPeriodDays=7)
        self.assertEqual(project["creatorId"], creator["id"])
        self.assertEqual(project["symbol"], "NEB")
        self.assertEqual(project["status"], "active")
        created_at = datetime.fromisoformat(project["createdAt"])
        ends_at = datetime.fromisoformat(project["endsAt"])
        self.assertEqual(ends_at - created_at, timedelta(days=7))

        self.connect("W2")
        self.assertEqual(self.mint("W2", 50)["user"]["starPoints"], 500)

        response = self.participate(project["id"], "W2", 200)
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["burned"], 100)
        self.assertEqual(body["toCreator"], 100)
        self.assertEqual(body["newBalance"], 300)
        self.assertEqual(body["participation"]["starPointsUsed"], 200)
        self.assertEqual(body["participation"]["projectId"], project["id"])

        self.assertEqual(self.balance("W2"), 300)
        self.assertEqual(self.balance("W1"), 1100)

        stats = self.client.get("/api/stats/global").json()
        self.assertEqual(
            stats,
            {"totalUsers": 2, "dailyActiveUsers": 0, "activeProjects": 1, "totalPointsMinted": 1400},
        )


class TestConnect(ApiTestBase):
    def test_new_wallet_gets_referral_code_and_zero_balance(self):
        user = self.connect("W1")
        self.assertRegex(user["referralCode"], r"^STAR[A-Z0-9]{6}$")
        self.assertEqual(user["starPoints"], 0)
        self.assertIsNone(user["referredBy"])

    def test_reconnect_returns_existing_user(self):
        first = self.connect("W1")
        second = self.connect("W1", referral_code="STARWHATEVR")
        self.assertEqual(first["id"], second["id"])
        self.assertEqual(len(self.storage.get_all_users()), 1)

    def test_known_referral_code_links_referrer(self):
        referrer = self.connect("W1")
        referee = self.connect("W2", referral_code=referrer["referralCode"])
        self.assertEqual(referee["referredBy"], referrer["referralCode"])

        referrals = self.client.get(f"/api/users/{referrer['id']}/referrals").json()
        self.assertEqual([u["walletAddress"] for u in referrals], ["W2"])

    def test_unknown_referral_code_is_ignored(self):
        user = self.connect("W1", referral_code="STARNOPE00")
        self.assertIsNone(user["referredBy"])

    def test_missing_wallet_is_rejected(self):
        response = self.client.post("/api/auth/connect", json={"walletAddress": ""})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid request data")
        self.assertTrue(response.json()["details"])

    def test_wallet_longer_than_column_is_rejected(self):
        response = self.client.post("/api/auth/connect", json={"walletAddress": "G" * 129})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid request data")
        self.assertEqual(self.storage.get_all_users(), [])
        self.connect("G" * 128)


class TestUsers(ApiTestBase):
    def test_me_requires_wallet_parameter(self):
        response = self.client.get("/api/users/me")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "walletAddress query parameter is required")

    def test_me_unknown_wallet(self):
        response = self.client.get("/api/users/me", params={"walletAddress": "GHOST"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "User not found")

    def test_unknown_user_reads_are_404(self):
        for path in (
            "/api/users/missing/referrals",
            "/api/users/missing/projects",
            "/api/users/missing/participations",
        ):
            self.assertEqual(self.client.get(path).status_code, 404, path)

    def test_user_projects_and_participations(self):
        creator = self.connect("W1")
        backer = self.connect("W2")
        self.mint("W2", 10)
        project = self.create_project("W1")
        self.assertEqual(self.participate(project["id"], "W2", 40).status_code, 200)

        projects = self.client.get(f"/api/users/{creator['id']}/projects").json()
        self.assertEqual([p["id"] for p in projects], [project["id"]])

        rows = self.client.get(f"/api/users/{backer['id']}/participations").json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["participation"]["starPointsUsed"], 40)
        self.assertEqual(rows[0]["project"]["id"], project["id"])


class TestMint(ApiTestBase):
    def test_referrer_earns_ten_percent_of_minted_points(self):
        referrer = self.connect("W1")
        self.connect("W2", referral_code=referrer["referralCode"])
        self.mint("W1", 5)

        body = self.mint("W2", 3)
        self.assertEqual(body["user"]["starPoints"], 30)
        self.assertEqual(
            body["transaction"],
            {
                "xlmAmount": 3,
                "starPointsMinted": 30,
                "referrerReward": 3,
                "referrerWallet": "W1",
                "txHash": None,
                "explorerUrl": None,
            },
        )
        self.assertEqual(self.balance("W1"), 53)

        # Reward is based on the new mint, not the running total.
        self.mint("W2", 3)
        self.assertEqual(self.balance("W1"), 56)

    def test_no_referrer_no_reward(self):
        self.connect("W1")
        body = self.mint("W1", 1)
        self.assertEqual(body["transaction"]["referrerReward"], 0)
        self.assertIsNone(body["transaction"]["referrerWallet"])

    def test_tx_hash_is_echoed_with_explorer_link(self):
        self.connect("W1")
        response = self.client.post(
            "/api/points/mint",
            json={"walletAddress": "W1", "xlmAmount": 1, "txHash": "abc123"},
        )
        transaction = response.json()["transaction"]
        self.assertEqual(transaction["txHash"], "abc123")
        self.assertEqual(transaction["explorerUrl"], "https://stellar.expert/explorer/testnet/tx/abc123")

    def test_invalid_amounts(self):
        self.connect("W1")
        for amount in (0, -1, 10001):
            response = self.client.post("/api/points/mint", json={"walletAddress": "W1", "xlmAmount": amount})
            self.assertEqual(response.status_code, 400, amount)
        self.assertEqual(self.balance("W1"), 0)

    def test_unregistered_wallet(self):
        response = self.client.post("/api/points/mint", json={"walletAddress": "GHOST", "xlmAmount": 1})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "User not found. Please connect your wallet first.")


class TestProjects(ApiTestBase):
    def test_create_rejects_bad_percentage_split(self):
        self.connect("W1")
        response = self.client.post(
            "/api/projects/create",
            json=project_payload("W1", airdropPercent=40, creatorPercent=30, liquidityPercent=31),
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("must sum to 100%", response.text)
        self.assertEqual(response.json()["error"], "Validation failed")

    def test_create_rejects_oversized_fields(self):
        self.connect("W1")
        for overrides in ({"websiteUrl": "https://x.io/" + "a" * 490}, {"totalSupply": "1" * 81}):
            response = self.client.post("/api/projects/create", json=project_payload("W1", **overrides))
            self.assertEqual(response.status_code, 400, overrides)
            self.assertEqual(response.json()["error"], "Validation failed")
        self.assertEqual(self.storage.get_all_projects(), [])

    def test_create_requires_vesting_period_when_vesting(self):
        self.connect("W1")
        response = self.client.post("/api/projects/create", json=project_payload("W1", hasVesting=True))
        self.assertEqual(response.status_code, 400)

    def test_create_requires_registered_creator(self):
        response = self.client.post("/api/projects/create", json=project_payload("GHOST"))
        self.assertEqual(response.status_code, 404)

    def test_list_is_active_only_newest_first(self):
        self.connect("W1")
        old = self.create_project("W1", participationPeriodDays=3, symbol="OLD")
        self.clock.advance(days=1)
        new = self.create_project("W1", participationPeriodDays=10, symbol="NEW")
        self.clock.advance(minutes=5)

        listed = self.client.get("/api/projects").json()
        self.assertEqual([p["id"] for p in listed], [new["id"], old["id"]])

        self.clock.advance(days=2)
        listed = self.client.get("/api/projects").json()
        self.assertEqual([p["id"] for p in listed], [new["id"]])

    def test_get_project(self):
        self.connect("W1")
        project = self.create_project("W1")
        self.assertEqual(self.client.get(f"/api/projects/{project['id']}").json()["name"], "Nebula Token")
        missing = self.client.get("/api/projects/missing")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["error"], "Project not found")

    def test_project_participations(self):
        self.connect("W1")
        self.connect("W2")
        self.mint("W2", 10)
        project = self.create_project("W1")
        self.participate(project["id"], "W2", 10)
        self.participate(project["id"], "W2", 20)

        rows = self.client.get(f"/api/projects/{project['id']}/participations").json()
        self.assertEqual(sorted(r["starPointsUsed"] for r in rows), [10, 20])
        self.assertEqual(self.client.get("/api/projects/missing/participations").status_code, 404)


class TestParticipate(ApiTestBase):
    def setUp(self):
        super().setUp()
        self.connect("W1")
        self.connect("W2")
        self.mint("W1", 100)
        self.mint("W2", 10)
        self.project = self.create_project("W1")

    def test_own_project_rejected_regardless_of_balance(self):
        for points in (10, 5000):
            response = self.participate(self.project["id"], "W1", points)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["error"], "You cannot participate in your own project")
        self.assertEqual(self.balance("W1"), 1000)

    def test_insufficient_balance(self):
        response = self.participate(self.project["id"], "W2", 100.5)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Insufficient STAR points balance")
        self.assertEqual(self.balance("W2"), 100)
        self.assertEqual(self.balance("W1"), 1000)

    def test_full_balance_can_be_spent(self):
        response = self.participate(self.project["id"], "W2", 100)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["newBalance"], 0)

    def test_expired_project_rejected(self):
        self.clock.advance(days=7)
        response = self.participate(self.project["id"], "W2", 10)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Project is not active or has ended")
        self.assertEqual(self.balance("W2"), 100)

    def test_non_active_status_rejected(self):
        self.set_project_status(self.project["id"], "paused")
        response = self.participate(self.project["id"], "W2", 10)
        self.assertEqual(response.status_code, 400)

    def test_unknown_project_and_wallet(self):
        self.assertEqual(self.participate("missing", "W2", 10).status_code, 404)
        self.assertEqual(self.participate(self.project["id"], "GHOST", 10).status_code, 404)

    def test_non_positive_points_rejected(self):
        self.assertEqual(self.participate(self.project["id"], "W2", 0).status_code, 400)
        self.assertEqual(self.participate(self.project["id"], "W2", -5).status_code, 400)


class TestHealth(ApiTestBase):
    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["storage"], "memory")
        self.assertIn("X-Request-ID", response.headers)

    def test_network_info(self):
        body = self.client.get("/api/network").json()
        self.assertEqual(body["network"], "testnet")
        self.assertEqual(body["networkPassphrase"], "Test SDF Network ; September 2015")
        self.assertEqual(body["rpcUrl"], "https://soroban-testnet.stellar.org")


class SqlBackend:
    """Runs an API test class against SQLite instead of the in-memory store."""

    def make_storage(self, clock):
        storage = SqlStorage(build_engine("sqlite://"), clock=clock)
        self.addCleanup(storage.engine.dispose)
        return storage

    def set_project_status(self, project_id, status):
        with self.storage.engine.begin() as conn:
            conn.execute(update(Project).where(Project.id == project_id).values(status=status))


class TestLaunchScenarioSql(SqlBackend, TestLaunchScenario):
    pass


class TestConnectSql(SqlBackend, TestConnect):
    pass


class TestUsersSql(SqlBackend, TestUsers):
    pass


class TestMintSql(SqlBackend, TestMint):
    pass


class TestProjectsSql(SqlBackend, TestProjects):
    pass


class TestParticipateSql(SqlBackend, TestParticipate):
    pass


class TestHealthSql(SqlBackend, TestHealth):
    def test_health(self):
        self.assertEqual(self.client.get("/api/health").json()["storage"], "sql")


if __name__ == "__main__":
    unittest.main()
