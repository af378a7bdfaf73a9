"""
Tests for the wallet scripts.
"""
import json

import pytest

from agent_tools.commands.wallet import get_wallet_addresses as addresses_module
from agent_tools.commands.wallet import get_wallet_status as status_module
from agent_tools.config.settings import Settings
from agent_tools.exceptions import NetworkError
from agent_tools.helpers.accounts import derive_child_account
from tests.conftest import TEST_API_URL, TEST_MNEMONIC


def test_wallet_addresses_lists_ten(settings, capsys):
    response = addresses_module.get_wallet_addresses(settings)

    assert response.success
    assert response.message == "Derived 10 addresses on testnet"
    assert list(response.data) == [str(i) for i in range(10)]
    assert response.data["0"] == derive_child_account("testnet", TEST_MNEMONIC, 0).address
    assert response.data["7"] == derive_child_account("testnet", TEST_MNEMONIC, 7).address
    assert all(address.startswith("ST") for address in response.data.values())

    progress = capsys.readouterr().err.splitlines()
    assert progress[0] == f"0: {response.data['0']}"
    assert len(progress) == 10


def test_wallet_addresses_mainnet_prefix():
    settings = Settings(network="mainnet", mnemonic=TEST_MNEMONIC)
    response = addresses_module.get_wallet_addresses(settings, max_index=2)
    assert len(response.data) == 3
    assert all(address.startswith("SP") for address in response.data.values())


def test_wallet_addresses_main_requires_mnemonic(capsys):
    with pytest.raises(SystemExit) as excinfo:
        addresses_module.main([])
    assert excinfo.value.code == 1
    envelope = json.loads(capsys.readouterr().out)
    assert envelope == {"success": False, "message": "MNEMONIC environment variable is required"}


def test_wallet_addresses_main_prints_envelope(mnemonic_env, capsys):
    with pytest.raises(SystemExit) as excinfo:
        addresses_module.main([])
    assert excinfo.value.code == 0
    envelope = json.loads(capsys.readouterr().out)
    assert envelope["success"] is True
    assert len(envelope["data"]) == 10


def test_wallet_status(client, requests_mock):
    settings = Settings(network="testnet", mnemonic=TEST_MNEMONIC, account_index=2)
    address = derive_child_account("testnet", TEST_MNEMONIC, 2).address
    requests_mock.get(f"{TEST_API_URL}/v2/accounts/{address}", json={"nonce": 17, "balance": "0x0"})

    response = status_module.get_wallet_status(settings, client=client)

    assert response.success
    assert response.data == {"account_index": 2, "address": address, "nonce": 17}
    assert requests_mock.last_request.qs == {"proof": ["0"]}


def test_wallet_status_api_failure(settings, account, client, requests_mock):
    requests_mock.get(f"{TEST_API_URL}/v2/accounts/{account.address}", status_code=500)
    with pytest.raises(NetworkError):
        status_module.get_wallet_status(settings, client=client)
