"""
Pytest Configuration and Shared Fixtures

Fornisce fixture condivise per tutti i test:
- Chiavi di Alice e Bob da scalari fissi (compresse)
- Codec configurati nei due versi (Alice -> Bob, Bob -> Alice)
- Messaggio di riferimento
- Cache dei logger svuotata tra un test e l'altro

Author: ecies-mue Project
Date: October 2026
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecies_mue.core.keys import PrivateKey
from ecies_mue.security.ecies import EciesCodec
from ecies_mue.utils.logger import EciesLogger


ALICE_SCALAR_HEX = "1fa76f9c799ca3a51e2c7c901d3ba8e24f6d870beccf8df56faf30120b38f360"
BOB_SCALAR_HEX = "3c9229289a6125f7fdf1885a77bb12c37a8d3b4962d936f7e3084dece32a3ca1"

MESSAGE = b"hello, to MonetaryUnit world"


@pytest.fixture
def alice_key():
    """Chiave privata di Alice (chiave pubblica compressa)"""
    return PrivateKey.from_hex(ALICE_SCALAR_HEX)


@pytest.fixture
def bob_key():
    """Chiave privata di Bob (chiave pubblica compressa)"""
    return PrivateKey.from_hex(BOB_SCALAR_HEX)


@pytest.fixture
def alice(alice_key, bob_key):
    """Codec di Alice: chiave privata di Alice, chiave pubblica di Bob"""
    return EciesCodec().with_private_key(alice_key).with_public_key(bob_key.public_key)


@pytest.fixture
def bob(alice_key, bob_key):
    """Codec di Bob: chiave privata di Bob, chiave pubblica di Alice"""
    return EciesCodec().with_private_key(bob_key).with_public_key(alice_key.public_key)


@pytest.fixture
def message():
    return MESSAGE


@pytest.fixture(autouse=True)
def reset_logger_cache():
    """Ogni test parte con la cache dei logger vuota"""
    EciesLogger.clear_cache()
    yield
    EciesLogger.clear_cache()
