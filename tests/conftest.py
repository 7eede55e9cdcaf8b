"""Shared pytest fixtures for verify client tests."""

from __future__ import annotations

from typing import Callable

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import SecretStr

from vonage_verify.application.auth import ApiCredentials
from vonage_verify.application.verify.pending import PendingVerify
from vonage_verify.client import Client
from vonage_verify.domain.entities import RequestId
from tests.fixtures import ScriptedTransport

API_KEY = "abcd1234"
API_SECRET = "s3cr3t-value"


@pytest.fixture
def transport() -> ScriptedTransport:
    """An empty scripted transport; tests queue the responses they need."""
    return ScriptedTransport()


@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(api_key=API_KEY, api_secret=SecretStr(API_SECRET))


@pytest.fixture
def client(transport: ScriptedTransport) -> Client:
    """Client authenticated with an API key pair over the scripted transport."""
    return Client.builder().auth_api_key(API_KEY, API_SECRET).transport(transport).build()


@pytest.fixture
def make_pending(
    transport: ScriptedTransport, credentials: ApiCredentials
) -> Callable[..., PendingVerify]:
    """Factory for pending handles bound to the scripted transport."""

    def _make(request_id: str = "req-1", **kwargs) -> PendingVerify:
        return PendingVerify(transport, credentials, RequestId(request_id), **kwargs)

    return _make


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Generate an RSA key for JWT tests."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """Get the RSA private key as PEM string."""
    pem = rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return pem.decode("utf-8")


@pytest.fixture(scope="session")
def rsa_public_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    pem = rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return pem.decode("utf-8")
