"""
Ядро ECIES-HKDF recipient KEM: перечисления, протоколы и исключения.
"""

from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType, HashType
from src.security.ecies.core.exceptions import (
    AlgorithmError,
    AlgorithmNotSupportedError,
    CryptoError,
    CryptoKeyError,
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
    "EcPointFormat",
    "EllipticCurveType",
    "HashType",
    "RecipientKemProtocol",
    "CryptoError",
    "AlgorithmError",
    "AlgorithmNotSupportedError",
    "ValidationError",
    "InvalidParameterError",
    "InvalidInputError",
    "CryptoKeyError",
    "InvalidKeyError",
    "InvalidKeySizeError",
    "KeyAgreementError",
    "KeyDerivationError",
]
