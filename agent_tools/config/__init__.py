"""
Configuration package for the agent tools.
"""

from agent_tools.config.network import (
    NETWORKS,
    SUPPORTED_NETWORKS,
    STX_DECIMALS,
    MICRO_STX_PER_STX,
    get_network_config,
    get_api_url,
    get_address_version,
    get_explorer_tx_url,
)

from agent_tools.config.contracts import (
    JING_CONTRACTS,
    FAUCET_CONTRACT,
    get_jing_contract,
    get_faucet_contract,
)

from agent_tools.config.tokens import (
    TOKEN_CONFIG,
    get_token_info,
    display_value,
    normalize_price,
    calculate_ask_fees,
    format_token_amount,
)

__all__ = [
    # Network
    'NETWORKS',
    'SUPPORTED_NETWORKS',
    'STX_DECIMALS',
    'MICRO_STX_PER_STX',
    'get_network_config',
    'get_api_url',
    'get_address_version',
    'get_explorer_tx_url',

    # Contracts
    'JING_CONTRACTS',
    'FAUCET_CONTRACT',
    'get_jing_contract',
    'get_faucet_contract',

    # Tokens
    'TOKEN_CONFIG',
    'get_token_info',
    'display_value',
    'normalize_price',
    'calculate_ask_fees',
    'format_token_amount',
]
