from datetime import datetime, timedelta


class FrozenClock:
    """Callable clock the tests can move by hand."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def project_payload(wallet_address: str, **overrides) -> dict:
    payload = {
        "walletAddress": wallet_address,
        "name": "Nebula Token",
        "symbol": "neb",
        "description": "A community token for the Nebula project.",
        "totalSupply": "1000000",
        "decimals": 7,
        "airdropPercent": 40,
        "creatorPercent": 30,
        "liquidityPercent": 30,
        "minimumLiquidity": "500",
        "hasVesting": False,
        "participationPeriodDays": 7,
    }
    payload.update(overrides)
    return payload
