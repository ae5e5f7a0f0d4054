"""
Symmetric Key Deriver — HKDF (RFC 5869) для ECIES.

Модуль предоставляет две функции:

1. **compute_hkdf** — extract-and-expand с выбираемой хеш-функцией.
2. **compute_ecies_hkdf_symmetric_key** — ECIES-вариант, в котором
   входной материал ключа (IKM) — это конкатенация KEM bytes и shared
   secret:

       IKM = kem_bytes || shared_secret
       key = HKDF-Expand(HKDF-Extract(salt, IKM), info, L)

Привязка KEM bytes к деривации — фиксированное решение протокола:
выведенный ключ зависит от конкретного ephemeral обмена, а не только от
значения shared secret.

Security Considerations
-----------------------
- HKDF только для high-entropy входов (shared secret после ECDH).
- Пустая соль эквивалентна соли из hash_len нулевых байт (RFC 5869 §2.2).
- Максимальная длина вывода: 255 * hash_len байт.
- Входной материал и вывод никогда не логируются, только их длины.

Example:
    >>> key = compute_ecies_hkdf_symmetric_key(
    ...     HashType.SHA256,
    ...     kem_bytes,
    ...     shared_secret,
    ...     salt=b"",
    ...     info=b"ecies",
    ...     out_len=32,
    ... )

References
----------
- RFC 5869: HMAC-based Extract-and-Expand KDF (HKDF)
- ISO/IEC 18033-2: ECIES-KEM
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from src.security.ecies.core.enums import HashType
from src.security.ecies.core.exceptions import (
    AlgorithmNotSupportedError,
    KeyDerivationError,
)
from src.security.ecies.utils import BytesLike, SecretBuffer

logger = logging.getLogger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

HKDF_MAX_OUTPUT_BLOCKS = 255  # RFC 5869 §2.3

_HASH_FACTORIES: Dict[HashType, Callable[[], hashes.HashAlgorithm]] = {
    HashType.SHA1: hashes.SHA1,
    HashType.SHA224: hashes.SHA224,
    HashType.SHA256: hashes.SHA256,
    HashType.SHA384: hashes.SHA384,
    HashType.SHA512: hashes.SHA512,
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def get_hash_algorithm(hash_type: HashType) -> hashes.HashAlgorithm:
    """
    Получить хеш-функцию cryptography по HashType.

    Raises:
        AlgorithmNotSupportedError: Неизвестная хеш-функция
    """
    factory = _HASH_FACTORIES.get(hash_type)
    if factory is None:
        name = hash_type.value if isinstance(hash_type, HashType) else str(hash_type)
        raise AlgorithmNotSupportedError(
            algorithm=f"HKDF-{name}",
            reason="unsupported hash function",
        )
    return factory()


def max_output_length(hash_type: HashType) -> int:
    """Максимальная длина вывода HKDF для хеш-функции (255 * hash_len)."""
    return HKDF_MAX_OUTPUT_BLOCKS * get_hash_algorithm(hash_type).digest_size


# ============================================================================
# HKDF
# ============================================================================


def compute_hkdf(
    hash_type: HashType,
    ikm: BytesLike,
    salt: bytes,
    info: bytes,
    out_len: int,
) -> bytes:
    """
    Вывести ключ через HKDF (RFC 5869).

    Args:
        hash_type: Хеш-функция
        ikm: Входной материал ключа (high-entropy!), bytes-like
        salt: Соль (может быть пустой)
        info: Контекстная информация (может быть пустой)
        out_len: Длина вывода в байтах (1..255 * hash_len)

    Returns:
        Выведенный ключ длиной out_len

    Raises:
        AlgorithmNotSupportedError: Неизвестная хеш-функция
        KeyDerivationError: Недопустимая длина или сбой HKDF
    """
    algorithm = get_hash_algorithm(hash_type)
    name = f"HKDF-{algorithm.name.upper()}"

    max_len = HKDF_MAX_OUTPUT_BLOCKS * algorithm.digest_size
    if (
        isinstance(out_len, bool)
        or not isinstance(out_len, int)
        or out_len < 1
        or out_len > max_len
    ):
        raise KeyDerivationError(
            f"output length must be between 1 and {max_len} bytes, got {out_len}",
            algorithm=name,
        )

    logger.debug(
        "%s: deriving %d-byte key (ikm_len=%d, salt_len=%d, info_len=%d)",
        name,
        out_len,
        len(ikm),
        len(salt),
        len(info),
    )

    try:
        hkdf = HKDF(
            algorithm=algorithm,
            length=out_len,
            salt=salt if salt else None,
            info=info,
        )
        return hkdf.derive(ikm)
    except (ValueError, TypeError) as exc:
        raise KeyDerivationError(
            f"{name} derivation failed: {exc}", algorithm=name
        ) from exc


def compute_ecies_hkdf_symmetric_key(
    hash_type: HashType,
    kem_bytes: bytes,
    shared_secret: BytesLike,
    salt: bytes,
    info: bytes,
    out_len: int,
) -> bytes:
    """
    Вывести симметричный ключ ECIES из KEM bytes и shared secret.

    KEM bytes включаются в IKM перед shared secret. IKM собирается прямо
    в SecretBuffer и стирается после деривации; стирание не затрагивает
    объекты bytes, переданные вызывающей стороной.

    Args:
        hash_type: Хеш-функция для HKDF
        kem_bytes: Публичное значение отправителя в том виде, в каком
            оно было передано
        shared_secret: Результат ECDH / X25519
        salt: Соль HKDF
        info: Контекстная информация HKDF
        out_len: Длина ключа в байтах

    Returns:
        Выведенный ключ длиной out_len

    Raises:
        AlgorithmNotSupportedError: Неизвестная хеш-функция
        KeyDerivationError: Недопустимая длина или сбой HKDF
    """
    with SecretBuffer.concat(kem_bytes, shared_secret) as ikm:
        return compute_hkdf(hash_type, ikm.view(), salt, info, out_len)


# ============================================================================
# PUBLIC API
# ============================================================================

__all__ = [
    "HKDF_MAX_OUTPUT_BLOCKS",
    "get_hash_algorithm",
    "max_output_length",
    "compute_hkdf",
    "compute_ecies_hkdf_symmetric_key",
]
