"""
ECIES Configuration - costanti centralizzate

Questo file centralizza dimensioni dei campi del frame, etichetta KDF e
impostazioni di logging del codec. Modificando qui i valori si applicano
automaticamente a tutto il sistema.

Usage:
    from ecies_mue.config.ecies_config import ECIES_CONSTANTS

    iv = os.urandom(ECIES_CONSTANTS.IV_SIZE)
"""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class EciesConstants:
    """
    Costanti centralizzate per il codec ECIES.

    Attributi:
        IV_SIZE: Lunghezza IV AES-CBC (bytes)
        BLOCK_SIZE: Dimensione blocco AES (bytes)
        ENC_KEY_SIZE: Lunghezza chiave AES-256 (bytes)
        MAC_KEY_SIZE: Lunghezza chiave HMAC-SHA256 (bytes)
        FULL_TAG_SIZE: Tag HMAC-SHA256 completo (bytes)
        SHORT_TAG_SIZE: Tag troncato con opzione short_tag (bytes)
        KDF_LABEL: Chiave HMAC-SHA512 usata per espandere il segreto condiviso
        LOGGER_NAME: Nome del logger di default del codec
        LOG_LEVEL: Livello di log di default
    """
    # Frame
    IV_SIZE: int = 16
    BLOCK_SIZE: int = 16
    FULL_TAG_SIZE: int = 32
    SHORT_TAG_SIZE: int = 4

    # Key derivation
    ENC_KEY_SIZE: int = 32
    MAC_KEY_SIZE: int = 32
    KDF_LABEL: bytes = b"ecies-mue"

    # Logging
    LOGGER_NAME: str = "ECIES"
    LOG_LEVEL: int = logging.INFO


# Istanza singleton globale
ECIES_CONSTANTS = EciesConstants()


def get_default_options():
    """
    Ritorna le opzioni di default del codec (frame completo, tag completo).

    Examples:
        >>> get_default_options().tag_length
        32
    """
    # Import locale: core.types dipende da questo modulo
    from ecies_mue.core.types import EciesOptions

    return EciesOptions()
