import jwt
import pytest
from pydantic import SecretStr

from vonage_verify import Client
from vonage_verify.crypto.signature import Signature, SignatureMethod
from vonage_verify.domain.errors import AuthError
from vonage_verify.env import Settings
from vonage_verify.infrastructure.http.http_client import AsyncHttpTransport
from tests.conftest import API_KEY, API_SECRET
from tests.fixtures import ScriptedTransport, submit_body, verify_info_record


def test_builder_requires_credentials() -> None:
    with pytest.raises(AuthError, match="no credentials"):
        Client.builder().transport(ScriptedTransport()).build()


def test_new_uses_default_transport() -> None:
    client = Client.new(API_KEY, API_SECRET)
    assert isinstance(client.transport, AsyncHttpTransport)
    assert client.auth.has_api_key


def test_repr_hides_secret(client: Client) -> None:
    assert API_SECRET not in repr(client)


@pytest.mark.asyncio
async def test_shared_transport_across_handles(
    client: Client, transport: ScriptedTransport
) -> None:
    transport.queue_json(submit_body("req-1")).queue_json(submit_body("req-2"))
    transport.queue_json(
        {"verification_requests": [verify_info_record("req-1"), verify_info_record("req-2")]}
    )

    first = await client.verify("447700900000", "ACME").send()
    second = await client.verify("447700900001", "ACME").send()
    results = await client.search([second, first])

    assert first.transport is second.transport is transport
    assert [r.request_id for r in results] == ["req-2", "req-1"]
    assert transport.pending_responses == 0


@pytest.mark.asyncio
async def test_injected_transport_not_closed(
    client: Client, transport: ScriptedTransport
) -> None:
    async with client:
        pass
    assert not transport.closed


@pytest.mark.asyncio
async def test_owned_transport_closed() -> None:
    async with Client.new(API_KEY, API_SECRET) as client:
        inner = client.transport._client
    assert inner.is_closed


def test_sign_sms_requires_signature(client: Client) -> None:
    with pytest.raises(AuthError):
        client.sign_sms({"to": "447700900000"})


def test_sign_sms_adds_timestamp_and_signature(transport: ScriptedTransport) -> None:
    signature = Signature("sigsecret", SignatureMethod.SHA256_HMAC)
    client = (
        Client.builder()
        .auth_api_key(API_KEY, API_SECRET)
        .sms_signature(signature)
        .transport(transport)
        .build()
    )

    params = client.sign_sms({"to": "447700900000", "text": "hello"})

    assert params["to"] == "447700900000"
    assert "timestamp" in params
    assert signature.verify(params)


def test_jwt_only_client(rsa_private_key_pem: str, rsa_public_key_pem: str) -> None:
    client = (
        Client.builder()
        .auth_jwt("app-1", rsa_private_key_pem)
        .id_generator(lambda: "jti-1")
        .transport(ScriptedTransport())
        .build()
    )

    token = client.auth.generate_jwt({"sub": "me"})
    claims = jwt.decode(token, rsa_public_key_pem, algorithms=["RS256"])
    assert claims["jti"] == "jti-1"
    assert claims["application_id"] == "app-1"

    with pytest.raises(AuthError):
        client.verify("447700900000", "ACME")


def test_from_settings() -> None:
    settings = Settings(
        api_key=API_KEY,
        api_secret=SecretStr(API_SECRET),
        signature_secret=SecretStr("sigsecret"),
        signature_method=SignatureMethod.SHA1_HMAC,
        base_url="http://localhost:9000",
    )

    client = Client.from_settings(settings)

    assert client.auth.has_api_key
    assert not client.auth.has_jwt
    assert client.sms_signature is not None
    assert client.sms_signature.method is SignatureMethod.SHA1_HMAC
    assert client.verify("447700900000", "ACME")._base_url == "http://localhost:9000"


def test_from_settings_without_credentials() -> None:
    with pytest.raises(AuthError):
        Client.from_settings(Settings())
