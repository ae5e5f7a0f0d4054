"""
Перечисления для ECIES-HKDF recipient KEM.

Три независимых идентификатора, которые выбирают поведение KEM:
- EllipticCurveType — семейство кривой (NIST P-curves или X25519)
- EcPointFormat — кодирование публичной точки (KEM bytes)
- HashType — хеш-функция внутри HKDF

Все enums наследуют str для корректной JSON сериализации и
человекочитаемых логов.

Example:
    >>> from src.security.ecies.core.enums import EllipticCurveType
    >>> EllipticCurveType.NIST_P256.is_nist_curve
    True
    >>> EllipticCurveType.CURVE25519.is_nist_curve
    False
"""

from __future__ import annotations

from enum import Enum

# ==============================================================================
# ENUM: ELLIPTIC CURVE TYPE
# ==============================================================================


class EllipticCurveType(str, Enum):
    """
    Идентификатор эллиптической кривой.

    Значения:
        - UNKNOWN_CURVE: Не задана (всегда отклоняется dispatcher'ом)
        - NIST_P256: secp256r1
        - NIST_P384: secp384r1
        - NIST_P521: secp521r1
        - CURVE25519: X25519 (RFC 7748)
    """

    UNKNOWN_CURVE = "unknown_curve"
    NIST_P256 = "nist_p256"
    NIST_P384 = "nist_p384"
    NIST_P521 = "nist_p521"
    CURVE25519 = "curve25519"

    @property
    def is_nist_curve(self) -> bool:
        return self in (
            EllipticCurveType.NIST_P256,
            EllipticCurveType.NIST_P384,
            EllipticCurveType.NIST_P521,
        )

    def label(self) -> str:
        """Каноническое имя кривой для логов и сообщений об ошибках."""
        labels = {
            EllipticCurveType.UNKNOWN_CURVE: "UNKNOWN",
            EllipticCurveType.NIST_P256: "P-256",
            EllipticCurveType.NIST_P384: "P-384",
            EllipticCurveType.NIST_P521: "P-521",
            EllipticCurveType.CURVE25519: "X25519",
        }
        return labels[self]


# ==============================================================================
# ENUM: POINT FORMAT
# ==============================================================================


class EcPointFormat(str, Enum):
    """
    Формат кодирования точки эллиптической кривой.

    Значения:
        - UNCOMPRESSED: SEC1, 0x04 || x || y
        - COMPRESSED: SEC1, 0x02/0x03 || x (единственный формат для X25519)
        - DO_NOT_USE_CRUNCHY_UNCOMPRESSED: x || y без префикса.
          Только для совместимости с legacy отправителями.
    """

    UNKNOWN_FORMAT = "unknown_format"
    UNCOMPRESSED = "uncompressed"
    COMPRESSED = "compressed"
    DO_NOT_USE_CRUNCHY_UNCOMPRESSED = "do_not_use_crunchy_uncompressed"


# ==============================================================================
# ENUM: HASH TYPE
# ==============================================================================


class HashType(str, Enum):
    """Хеш-функция для HKDF."""

    UNKNOWN_HASH = "unknown_hash"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


__all__ = [
    "EllipticCurveType",
    "EcPointFormat",
    "HashType",
]
