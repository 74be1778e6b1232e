import sys
import time
from pathlib import Path

import pytest

# Ensure `src/` is importable in tests without installing the package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat


@pytest.fixture
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture
def public_key_hex(private_key) -> str:
    raw = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return raw.hex()


@pytest.fixture
def sign(private_key):
    """Return a helper producing Discord signature headers for a raw body."""

    def _sign(body: bytes, timestamp: str | None = None) -> dict:
        ts = timestamp or str(int(time.time()))
        signature = private_key.sign(ts.encode("utf-8") + body).hex()
        return {
            "X-Signature-Ed25519": signature,
            "X-Signature-Timestamp": ts,
        }

    return _sign
