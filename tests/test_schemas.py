import unittest

from pydantic import ValidationError

from starlaunch.schemas.points import MintRequest
from starlaunch.schemas.project import ParticipateRequest, ProjectCreateRequest
from starlaunch.schemas.user import ConnectRequest
from tests.helpers import project_payload


class TestProjectCreateRequest(unittest.TestCase):
    def test_valid_payload_uppercases_symbol(self):
        payload = ProjectCreateRequest.model_validate(project_payload("GWALLET1"))
        self.assertEqual(payload.symbol, "NEB")
        self.assertEqual(payload.participation_period_days, 7)

    def test_percentages_must_sum_to_exactly_100(self):
        with self.assertRaises(ValidationError) as ctx:
            ProjectCreateRequest.model_validate(project_payload("GWALLET1", liquidityPercent=31))
        self.assertIn("must sum to 100%", str(ctx.exception))

    def test_negative_percentage_rejected(self):
        with self.assertRaises(ValidationError):
            ProjectCreateRequest.model_validate(
                project_payload("GWALLET1", airdropPercent=80, creatorPercent=-10, liquidityPercent=30)
            )

    def test_vesting_requires_period(self):
        with self.assertRaises(ValidationError) as ctx:
            ProjectCreateRequest.model_validate(project_payload("GWALLET1", hasVesting=True))
        self.assertIn("Vesting period must be set", str(ctx.exception))

        payload = ProjectCreateRequest.model_validate(
            project_payload("GWALLET1", hasVesting=True, vestingPeriodDays=90)
        )
        self.assertEqual(payload.vesting_period_days, 90)

    def test_participation_period_bounds(self):
        for days in (3, 15):
            ProjectCreateRequest.model_validate(project_payload("GWALLET1", participationPeriodDays=days))
        for days in (2, 16):
            with self.assertRaises(ValidationError):
                ProjectCreateRequest.model_validate(project_payload("GWALLET1", participationPeriodDays=days))

    def test_amount_strings(self):
        for overrides in (
            {"totalSupply": "0"},
            {"totalSupply": "lots"},
            {"minimumLiquidity": "499.99"},
            {"minimumLiquidity": "nan"},
        ):
            with self.assertRaises(ValidationError):
                ProjectCreateRequest.model_validate(project_payload("GWALLET1", **overrides))

    def test_text_length_bounds(self):
        for overrides in (
            {"name": "N"},
            {"name": "N" * 51},
            {"symbol": "N"},
            {"symbol": "NEBULATOKEN"},
            {"description": "too short"},
            {"logoUrl": "u" * 501},
            {"telegramUrl": "u" * 501},
            {"minimumLiquidity": "5" * 81},
            {"walletAddress": "G" * 129},
        ):
            with self.assertRaises(ValidationError):
                ProjectCreateRequest.model_validate(project_payload("GWALLET1", **overrides))

    def test_to_project_create_drops_request_only_fields(self):
        payload = ProjectCreateRequest.model_validate(project_payload("GWALLET1", txHash="abc"))
        data = payload.to_project_create(creator_id="user-1")
        self.assertEqual(data.creator_id, "user-1")
        self.assertFalse(hasattr(data, "wallet_address"))


class TestPointRequests(unittest.TestCase):
    def test_mint_amount_must_be_positive_and_capped(self):
        self.assertEqual(MintRequest.model_validate({"walletAddress": "G1", "xlmAmount": 10000}).xlm_amount, 10000)
        for amount in (0, -5, 10000.01):
            with self.assertRaises(ValidationError):
                MintRequest.model_validate({"walletAddress": "G1", "xlmAmount": amount})

    def test_wallet_required(self):
        with self.assertRaises(ValidationError):
            MintRequest.model_validate({"walletAddress": "", "xlmAmount": 5})

    def test_participation_points_positive(self):
        with self.assertRaises(ValidationError):
            ParticipateRequest.model_validate({"walletAddress": "G1", "starPoints": 0})

    def test_wallet_fits_user_column(self):
        for model in (MintRequest, ParticipateRequest, ConnectRequest):
            body = {"walletAddress": "G" * 129, "xlmAmount": 1, "starPoints": 1}
            with self.assertRaises(ValidationError):
                model.model_validate(body)
        with self.assertRaises(ValidationError):
            ConnectRequest.model_validate({"walletAddress": "G1", "referralCode": "S" * 25})


if __name__ == "__main__":
    unittest.main()
