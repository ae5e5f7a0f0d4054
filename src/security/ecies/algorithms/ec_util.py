"""
Параметры кривых, кодек точек и вычисление shared secret.

Тонкий слой над библиотекой cryptography, который приводит её API к
контракту ECIES KEM:

Curve Parameters Provider:
    get_curve() — объект кривой cryptography по EllipticCurveType.
    field_size_in_bytes() — ширина координаты (32/48/66, X25519: 32).

Point Codec:
    encoding_size_in_bytes() — ожидаемая длина KEM bytes для формата.
    ec_point_decode() — строгий разбор SEC1 точки с проверкой длины,
    префикса и принадлежности кривой.

Shared Secret:
    compute_ecdh_shared_secret() — ECDH на NIST кривых; результат —
    аффинная x-координата фиксированной ширины (SEC1, NIST SP 800-56A).
    compute_x25519_shared_secret() — X25519 (RFC 7748), 32 байта.

Форматы точек (n = field_size_in_bytes):

    UNCOMPRESSED                     0x04 || x || y      1 + 2n байт
    COMPRESSED                       0x02/0x03 || x      1 + n байт
    DO_NOT_USE_CRUNCHY_UNCOMPRESSED  x || y              2n байт

Security Note:
    - Точка всегда проверяется на принадлежность кривой (invalid curve
      attacks).
    - Нулевой результат X25519 (точка малого порядка) отклоняется.
    - Приватный скаляр и shared secret никогда не попадают в логи.

References:
    - SEC 1 v2: https://www.secg.org/sec1-v2.pdf
    - RFC 7748: https://tools.ietf.org/html/rfc7748
    - NIST SP 800-56A Rev. 3
"""

from __future__ import annotations

import logging
from typing import Dict

from cryptography.hazmat.primitives.asymmetric import ec, x25519

from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType
from src.security.ecies.core.exceptions import (
    AlgorithmNotSupportedError,
    InvalidInputError,
    InvalidKeySizeError,
    InvalidParameterError,
    KeyAgreementError,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# CONSTANTS
# ==============================================================================

X25519_PRIVATE_KEY_LEN = 32  # bytes
X25519_PUBLIC_VALUE_LEN = 32  # bytes
X25519_SHARED_KEY_LEN = 32  # bytes

_UNCOMPRESSED_PREFIX = 0x04
_COMPRESSED_PREFIXES = (0x02, 0x03)

_NIST_CURVES: Dict[EllipticCurveType, type[ec.EllipticCurve]] = {
    EllipticCurveType.NIST_P256: ec.SECP256R1,
    EllipticCurveType.NIST_P384: ec.SECP384R1,
    EllipticCurveType.NIST_P521: ec.SECP521R1,
}


# ==============================================================================
# CURVE PARAMETERS
# ==============================================================================


def get_curve(curve_type: EllipticCurveType) -> ec.EllipticCurve:
    """
    Получить параметры NIST кривой.

    Args:
        curve_type: Идентификатор кривой

    Returns:
        Объект кривой cryptography (SECP256R1, SECP384R1, SECP521R1)

    Raises:
        AlgorithmNotSupportedError: Кривая не является NIST P-curve
    """
    curve_cls = _NIST_CURVES.get(curve_type)
    if curve_cls is None:
        raise AlgorithmNotSupportedError(
            algorithm=curve_label(curve_type),
            reason="Unsupported elliptic curve",
        )
    return curve_cls()


def field_size_in_bytes(curve_type: EllipticCurveType) -> int:
    """
    Ширина координаты кривой в байтах.

    Returns:
        32 для P-256 и X25519, 48 для P-384, 66 для P-521

    Raises:
        AlgorithmNotSupportedError: Неизвестная кривая
    """
    if curve_type == EllipticCurveType.CURVE25519:
        return X25519_PUBLIC_VALUE_LEN
    return (get_curve(curve_type).key_size + 7) // 8


def encoding_size_in_bytes(
    curve_type: EllipticCurveType, point_format: EcPointFormat
) -> int:
    """
    Ожидаемая длина закодированной точки.

    Args:
        curve_type: Идентификатор кривой
        point_format: Формат кодирования

    Returns:
        Длина в байтах

    Raises:
        AlgorithmNotSupportedError: Неизвестная кривая
        InvalidParameterError: Формат не поддерживается для кривой
            или не является EcPointFormat
    """
    coordinate_size = field_size_in_bytes(curve_type)
    point_format = coerce_point_format(point_format, curve_label(curve_type))

    if curve_type == EllipticCurveType.CURVE25519:
        if point_format != EcPointFormat.COMPRESSED:
            raise InvalidParameterError(
                "point_format",
                "X25519 only supports compressed elliptic curve points",
                value=point_format.value,
                algorithm="X25519",
            )
        return coordinate_size

    if point_format == EcPointFormat.UNCOMPRESSED:
        return 2 * coordinate_size + 1
    if point_format == EcPointFormat.COMPRESSED:
        return coordinate_size + 1
    if point_format == EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED:
        return 2 * coordinate_size

    raise InvalidParameterError(
        "point_format",
        "unsupported point format",
        value=point_format.value,
        algorithm=curve_label(curve_type),
    )


# ==============================================================================
# POINT CODEC
# ==============================================================================


def ec_point_decode(
    curve_type: EllipticCurveType,
    point_format: EcPointFormat,
    encoded: bytes,
) -> ec.EllipticCurvePublicKey:
    """
    Разобрать закодированную точку NIST кривой.

    Args:
        curve_type: NIST кривая
        point_format: Формат кодирования encoded
        encoded: Закодированная точка

    Returns:
        Публичный ключ, точка которого лежит на кривой

    Raises:
        AlgorithmNotSupportedError: Кривая не является NIST P-curve
        InvalidParameterError: Неподдерживаемый формат
        InvalidInputError: Неверная длина, префикс или точка вне кривой
    """
    curve = get_curve(curve_type)
    label = curve_label(curve_type)
    point_format = coerce_point_format(point_format, label)
    expected_size = encoding_size_in_bytes(curve_type, point_format)

    if len(encoded) != expected_size:
        raise InvalidInputError(
            f"encoded point has unexpected length: "
            f"expected {expected_size} bytes, got {len(encoded)} bytes",
            algorithm=label,
            context={"point_format": point_format.value},
        )

    if point_format == EcPointFormat.UNCOMPRESSED:
        if encoded[0] != _UNCOMPRESSED_PREFIX:
            raise InvalidInputError(
                "invalid uncompressed point prefix", algorithm=label
            )
        sec1_point = encoded
    elif point_format == EcPointFormat.COMPRESSED:
        if encoded[0] not in _COMPRESSED_PREFIXES:
            raise InvalidInputError(
                "invalid compressed point prefix", algorithm=label
            )
        sec1_point = encoded
    else:
        # crunchy: x || y без префикса
        sec1_point = bytes([_UNCOMPRESSED_PREFIX]) + encoded

    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(curve, sec1_point)
    except ValueError as exc:
        raise InvalidInputError(
            f"point is not on curve {label}", algorithm=label
        ) from exc

    logger.debug("%s: decoded %s point (%dB)", label, point_format.value, len(encoded))
    return public_key


# ==============================================================================
# SHARED SECRET
# ==============================================================================


def compute_ecdh_shared_secret(
    curve_type: EllipticCurveType,
    private_scalar: bytes,
    public_key: ec.EllipticCurvePublicKey,
) -> bytes:
    """
    Вычислить ECDH shared secret на NIST кривой.

    Args:
        curve_type: NIST кривая
        private_scalar: Приватный скаляр, big-endian произвольной длины
        public_key: Публичная точка отправителя (уже проверенная)

    Returns:
        Аффинная x-координата d·Q, field_size_in_bytes(curve_type) байт

    Raises:
        AlgorithmNotSupportedError: Кривая не является NIST P-curve
        KeyAgreementError: Скаляр вне диапазона или сбой ECDH
    """
    curve = get_curve(curve_type)
    label = curve_label(curve_type)
    coordinate_size = field_size_in_bytes(curve_type)

    if public_key.curve.name != curve.name:
        raise KeyAgreementError(
            f"public key is on {public_key.curve.name}, expected {curve.name}",
            algorithm=label,
        )

    scalar = int.from_bytes(private_scalar, "big")
    try:
        private_key = ec.derive_private_key(scalar, curve)
        shared_secret = private_key.exchange(ec.ECDH(), public_key)
    except (ValueError, TypeError) as exc:
        raise KeyAgreementError(
            f"ECDH computation failed: {exc}", algorithm=label
        ) from exc

    if len(shared_secret) != coordinate_size:
        raise KeyAgreementError(
            "ECDH shared secret has unexpected length",
            algorithm=label,
            context={
                "expected_size": coordinate_size,
                "actual_size": len(shared_secret),
            },
        )

    logger.debug("%s ECDH: derived %dB shared secret", label, len(shared_secret))
    return shared_secret


def compute_x25519_shared_secret(private_key: bytes, public_value: bytes) -> bytes:
    """
    Вычислить X25519 shared secret.

    Args:
        private_key: Приватный ключ (32 байта)
        public_value: Публичное значение отправителя (32 байта)

    Returns:
        Shared secret (32 байта)

    Raises:
        InvalidKeySizeError: Неверная длина ключа или публичного значения
        KeyAgreementError: Нулевой результат (точка малого порядка)
    """
    if len(private_key) != X25519_PRIVATE_KEY_LEN:
        raise InvalidKeySizeError("X25519", X25519_PRIVATE_KEY_LEN, len(private_key))
    if len(public_value) != X25519_PUBLIC_VALUE_LEN:
        raise InvalidKeySizeError(
            "X25519", X25519_PUBLIC_VALUE_LEN, len(public_value)
        )

    try:
        private_key_obj = x25519.X25519PrivateKey.from_private_bytes(private_key)
        public_key_obj = x25519.X25519PublicKey.from_public_bytes(public_value)
        shared_secret = private_key_obj.exchange(public_key_obj)
    except ValueError as exc:
        raise KeyAgreementError(
            f"X25519 computation failed: {exc}", algorithm="X25519"
        ) from exc

    if len(shared_secret) != X25519_SHARED_KEY_LEN:
        raise KeyAgreementError(
            "X25519 shared secret has unexpected length",
            algorithm="X25519",
            context={
                "expected_size": X25519_SHARED_KEY_LEN,
                "actual_size": len(shared_secret),
            },
        )

    logger.debug("X25519: derived %dB shared secret", len(shared_secret))
    return shared_secret


# ==============================================================================
# HELPERS
# ==============================================================================


def curve_label(curve_type: EllipticCurveType) -> str:
    """Каноническое имя кривой; для значений вне enum — str(value)."""
    if isinstance(curve_type, EllipticCurveType):
        return curve_type.label()
    return str(curve_type)


def coerce_point_format(point_format: object, algorithm: str) -> EcPointFormat:
    """
    Привести значение к EcPointFormat.

    Принимает член enum или его строковое значение ("uncompressed").

    Raises:
        InvalidParameterError: Значение не является форматом точки
    """
    try:
        return EcPointFormat(point_format)
    except ValueError as exc:
        raise InvalidParameterError(
            "point_format",
            "not an EcPointFormat",
            value=point_format,
            algorithm=algorithm,
        ) from exc


__all__ = [
    "X25519_PRIVATE_KEY_LEN",
    "X25519_PUBLIC_VALUE_LEN",
    "X25519_SHARED_KEY_LEN",
    "curve_label",
    "coerce_point_format",
    "get_curve",
    "field_size_in_bytes",
    "encoding_size_in_bytes",
    "ec_point_decode",
    "compute_ecdh_shared_secret",
    "compute_x25519_shared_secret",
]
