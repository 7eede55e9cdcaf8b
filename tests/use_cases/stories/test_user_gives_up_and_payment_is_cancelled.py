"""Story: PSD2 payment verification - user never answers, application cancels."""

from __future__ import annotations

import pytest

from vonage_verify import Client, HandleConsumedError, VerifyState, VerifyStatus
from tests.fixtures import ScriptedTransport, submit_body, verify_info_record


@pytest.mark.asyncio
async def test_user_gives_up_and_payment_is_cancelled(
    client: Client, transport: ScriptedTransport
) -> None:
    """
    Story: PSD2 payment verification is cancelled.

    Step 1: Application asks the user to authorize a payment
    Step 2: User asks for the code again, so the next event is triggered
    Step 3: User abandons the payment and the application cancels
    Step 4: The handle is spent; search reports the request as cancelled
    """
    transport.queue_json(submit_body("psd2-1"))
    transport.queue_json({"status": "0", "command": "trigger_next_event"})
    transport.queue_json({"status": "0", "command": "cancel"})
    transport.queue_json(
        verify_info_record(
            "psd2-1",
            status="CANCELLED",
            date_finalized="",
            checks=[],
            events=[{"type": "sms", "id": "e1"}, {"type": "tts", "id": "e2"}],
        )
    )

    # Step 1: Payment authorization
    pending = await client.verify("447700900000", "ACME").psd2("Acme Shop", 19.99).send()
    assert transport.path() == "/verify/psd2/json"

    # Step 2: Resend
    await pending.trigger_next_event()
    assert pending.state is VerifyState.PENDING

    # Step 3: Cancel
    await pending.cancel()
    assert pending.state is VerifyState.CANCELLED

    # Step 4: Spent handle, searchable request
    with pytest.raises(HandleConsumedError):
        await pending.check("1234")

    [info] = await client.search([pending])
    assert info is not None
    assert info.status is VerifyStatus.CANCELLED
    assert info.date_finalized is None
    assert [event_id for _, event_id in info.events] == ["e1", "e2"]
