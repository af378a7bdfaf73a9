"""
Broadcast helper shared by the transaction scripts.
"""
from __future__ import annotations

import json
import logging

from agent_tools.config.logging_config import log_broadcast, setup_broadcast_logger
from agent_tools.config.network import get_explorer_tx_url
from agent_tools.exceptions import BroadcastError
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import BroadcastResult, StacksApiClient
from agent_tools.helpers.transactions import StacksTransaction

logger = logging.getLogger(__name__)

__all__ = ["broadcast_tx"]


def _format_rejection(result: BroadcastResult) -> str:
    parts = [f"Transaction failed to broadcast: {result.error}"]
    if result.reason:
        parts.append(f"Reason: {result.reason}")
    if result.reason_data:
        parts.append(f"Reason Data: {json.dumps(result.reason_data, indent=2)}")
    return "\n".join(parts)


def broadcast_tx(client: StacksApiClient, transaction: StacksTransaction) -> ToolResponse[BroadcastResult]:
    """Broadcast a signed transaction.

    Raises:
        BroadcastError: the node rejected the transaction.
        NetworkError: transport failure or malformed response.
    """
    intent = transaction.intent
    audit = setup_broadcast_logger()
    result = client.broadcast_transaction(transaction)

    log_broadcast(
        audit,
        function=f"{intent.contract_id}::{intent.function_name}",
        fee=intent.fee,
        nonce=intent.nonce,
        txid=result.txid,
        success=result.success,
        reason=result.reason,
    )

    if not result.success:
        raise BroadcastError(
            _format_rejection(result),
            reason=result.reason,
            reason_data=result.reason_data,
            txid=result.txid,
        )

    txid = result.txid if result.txid.startswith("0x") else f"0x{result.txid}"
    logger.debug("Explorer: %s", get_explorer_tx_url(txid, intent.network))
    return ToolResponse(
        success=True,
        message=f"Transaction broadcasted successfully: {txid}",
        data=result,
    )
