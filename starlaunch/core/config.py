from functools import lru_cache
from pathlib import Path
from typing import List, Literal
from urllib.parse import urlparse
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ENV_FILE), case_sensitive=False)

    APP_NAME: str = "STAR Launch Backend"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 5000

    # "memory" keeps everything in process; "sql" persists through DATABASE_URL.
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./star.db"

    CORS_ORIGINS: str = (
        "http://localhost:5000,"
        "http://127.0.0.1:5000,"
        "http://localhost:5173,"
        "http://127.0.0.1:5173"
    )

    POINTS_PER_XLM: float = 10
    MAX_MINT_XLM: float = 10000
    REFERRAL_REWARD_PERCENT: float = 10

    REFERRAL_CODE_PREFIX: str = "STAR"
    REFERRAL_CODE_LENGTH: int = 6
    REFERRAL_CODE_MAX_ATTEMPTS: int = 10
    # A stored referrer that resolves to the minting user still earns the bonus unless disabled.
    ALLOW_SELF_REFERRAL: bool = True

    STELLAR_NETWORK: Literal["testnet", "mainnet"] = "testnet"
    SOROBAN_RPC_URL: str = "https://soroban-testnet.stellar.org"
    STAR_TOKEN_CONTRACT_ID: str = "CBGTK4RQSA3XRJLOW7MX3FJBFPXZVFZLZXUK2WVQXG3DFI5NBVSAMPLE"
    TOKEN_LAUNCH_CONTRACT_ID: str = "CCGTK4RQSA3XRJLOW7MX3FJBFPXZVFZLZXUK2WVQXG3DFI5NBVSAMPLE"

    @property
    def cors_origins(self) -> List[str]:
        origins: list[str] = []
        for raw in self.CORS_ORIGINS.split(","):
            value = raw.strip()
            if not value:
                continue
            parsed = urlparse(value)
            if parsed.scheme and parsed.netloc:
                value = f"{parsed.scheme}://{parsed.netloc}"
            origins.append(value.rstrip("/"))
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
