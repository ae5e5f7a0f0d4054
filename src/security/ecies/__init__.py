"""
Модуль объединяет recipient-сторону ECIES-HKDF KEM.
Предназначение: единая точка импорта для восстановления симметричного ключа
получателем по KEM bytes отправителя.
EN: Top-level API of the ECIES-HKDF recipient KEM (NIST P-curves and X25519).
"""

from src.security.ecies.algorithms.recipient_kem import (
    EciesHkdfNistPCurveRecipientKem,
    EciesHkdfRecipientKem,
    EciesHkdfX25519RecipientKem,
    create_recipient_kem,
)
from src.security.ecies.config import EciesHkdfParams, EciesProfile
from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType, HashType
from src.security.ecies.core.exceptions import (
    AlgorithmNotSupportedError,
    CryptoError,
    InvalidInputError,
    InvalidKeyError,
    InvalidKeySizeError,
    InvalidParameterError,
    KeyAgreementError,
    KeyDerivationError,
    ValidationError,
)
from src.security.ecies.core.protocols import RecipientKemProtocol

__all__ = [
    # Identifiers
    "EllipticCurveType",
    "EcPointFormat",
    "HashType",
    # KEM
    "RecipientKemProtocol",
    "EciesHkdfRecipientKem",
    "EciesHkdfNistPCurveRecipientKem",
    "EciesHkdfX25519RecipientKem",
    "create_recipient_kem",
    # Config
    "EciesHkdfParams",
    "EciesProfile",
    # Errors
    "CryptoError",
    "ValidationError",
    "InvalidParameterError",
    "InvalidInputError",
    "InvalidKeyError",
    "InvalidKeySizeError",
    "AlgorithmNotSupportedError",
    "KeyAgreementError",
    "KeyDerivationError",
]
