"""Stellar / Soroban network boundary.

The TokenLaunch and STAR token contracts are not deployed yet, so the
transaction builders refuse to run and the chain queries return empty
values. Wallet signing happens in the browser extension.
"""

import logging
from typing import Any

from starlaunch.core.config import get_settings
from starlaunch.core.exceptions import AppException, ContractsNotDeployedError

settings = get_settings()
logger = logging.getLogger(__name__)

NETWORK_PASSPHRASES = {
    "testnet": "Test SDF Network ; September 2015",
    "mainnet": "Public Global Stellar Network ; September 2015",
}

EXPLORER_BASES = {
    "testnet": "https://stellar.expert/explorer/testnet",
    "mainnet": "https://stellar.expert/explorer/public",
}

EXPLORER_KINDS = {"tx", "contract"}


def _network_key(network: str) -> str:
    key = (network or "").strip().lower()
    if key not in NETWORK_PASSPHRASES:
        raise AppException(f"Unsupported Stellar network: {network}", status_code=400)
    return key


def get_network_passphrase(network: str) -> str:
    return NETWORK_PASSPHRASES[_network_key(network)]


def get_explorer_url(network: str, kind: str, identifier: str) -> str:
    if kind not in EXPLORER_KINDS:
        raise AppException(f"Unsupported explorer kind: {kind}", status_code=400)
    return f"{EXPLORER_BASES[_network_key(network)]}/{kind}/{identifier}"


def get_network_info() -> dict:
    network = _network_key(settings.STELLAR_NETWORK)
    return {
        "network": network,
        "networkPassphrase": NETWORK_PASSPHRASES[network],
        "rpcUrl": settings.SOROBAN_RPC_URL,
        "starTokenContractId": settings.STAR_TOKEN_CONTRACT_ID,
        "tokenLaunchContractId": settings.TOKEN_LAUNCH_CONTRACT_ID,
        "explorerBase": EXPLORER_BASES[network],
    }


def build_mint_star_points_transaction(public_key: str, xlm_amount: float, network: str = "testnet") -> str:
    logger.info("Building mint transaction for %s amount=%s XLM", public_key, xlm_amount)
    raise ContractsNotDeployedError()


def build_create_project_transaction(public_key: str, project_data: dict[str, Any], network: str = "testnet") -> str:
    logger.info("Building create-project transaction for %s symbol=%s", public_key, project_data.get("symbol"))
    raise ContractsNotDeployedError()


def build_participate_transaction(public_key: str, project_id: int, star_points: float, network: str = "testnet") -> str:
    logger.info("Building participate transaction for %s project=%s", public_key, project_id)
    raise ContractsNotDeployedError()


def submit_transaction(signed_xdr: str) -> dict:
    logger.info("Submitting signed transaction (%d bytes)", len(signed_xdr or ""))
    raise ContractsNotDeployedError()


def get_star_points_balance(wallet_address: str) -> float:
    logger.debug("Querying on-chain STAR balance for %s", wallet_address)
    return 0.0


def get_project_from_chain(project_id: int, source_account: str) -> dict | None:
    logger.debug("Querying on-chain project %s", project_id)
    return None
