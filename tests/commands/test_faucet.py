"""
Tests for the faucet-flood script.
"""
from unittest.mock import patch

import pytest

from agent_tools.commands.faucet import faucet_flood as faucet_module
from agent_tools.exceptions import BroadcastError
from agent_tools.helpers.clarity import standard_principal_cv
from agent_tools.helpers.transactions import PostConditionMode, make_contract_call
from tests.conftest import DEPLOYER, TEST_API_URL

TXID = "0x" + "12" * 32


@pytest.fixture
def faucet_env(monkeypatch):
    monkeypatch.setenv("FAUCET_CONTRACT", f"{DEPLOYER}.faucet")


def _mock_nonce(requests_mock, address, nonce=2):
    requests_mock.get(
        f"{TEST_API_URL}/extended/v1/address/{address}/nonces",
        json={"possible_next_nonce": nonce},
    )


@pytest.mark.usefixtures("faucet_env")
def test_faucet_flood_intent(settings, account, client, requests_mock, capsys):
    _mock_nonce(requests_mock, account.address)
    requests_mock.post(f"{TEST_API_URL}/v2/transactions", json=TXID)

    with patch.object(faucet_module, "make_contract_call", wraps=make_contract_call) as spy:
        response = faucet_module.faucet_flood(settings, client=client)

    assert response.success
    assert response.message == f"Transaction broadcasted successfully: {TXID}"

    intent = spy.call_args[0][0]
    assert intent.contract_id == f"{DEPLOYER}.faucet"
    assert intent.function_name == "faucet-flood"
    assert intent.function_args == (standard_principal_cv(account.address),)
    assert intent.fee == 250_000
    assert intent.nonce == 2
    assert intent.post_condition_mode is PostConditionMode.DENY
    assert intent.post_conditions == ()
    assert f"FROM: {account.address}" in capsys.readouterr().err


@pytest.mark.usefixtures("faucet_env")
def test_faucet_flood_rejected(settings, account, client, requests_mock):
    _mock_nonce(requests_mock, account.address)
    requests_mock.post(
        f"{TEST_API_URL}/v2/transactions",
        status_code=400,
        json={"error": "transaction rejected", "reason": "NotEnoughFunds", "reason_data": {"actual": "0x0"}},
    )
    with pytest.raises(BroadcastError) as excinfo:
        faucet_module.faucet_flood(settings, client=client)
    assert excinfo.value.reason == "NotEnoughFunds"
    assert "transaction rejected" in str(excinfo.value)


def test_faucet_default_contract():
    from agent_tools.config.contracts import get_faucet_contract
    assert get_faucet_contract() == ("STKYNF473GQ1V0WWCF24TV7ZR1WYAKTC79V25E3P", "aibtcdev-aibtc")
