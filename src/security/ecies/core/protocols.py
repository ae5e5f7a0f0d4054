"""
Протокольные интерфейсы для ECIES-HKDF recipient KEM.

RecipientKemProtocol — единый контракт обоих семейств кривых (NIST P-curves
и X25519). Сигнатура generate_key одинакова для всех вариантов, поэтому
вызывающий код использует KEM полиморфно и не знает, какая кривая за ним.

Модуль использует typing.Protocol (structural subtyping) и
@runtime_checkable для поддержки isinstance() проверок.

Example:
    >>> from src.security.ecies import create_recipient_kem
    >>> kem = create_recipient_kem(EllipticCurveType.CURVE25519, private_key)
    >>> isinstance(kem, RecipientKemProtocol)
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType, HashType

# ==============================================================================
# RECIPIENT KEM PROTOCOL
# ==============================================================================


@runtime_checkable
class RecipientKemProtocol(Protocol):
    """
    Протокол для recipient-стороны ECIES KEM.

    Attributes:
        curve: Кривая, к которой экземпляр привязан навсегда
        algorithm_name: Название алгоритма (например, "ECIES-HKDF-X25519")

    Invariants:
        - Экземпляр привязан к одной кривой и одному приватному ключу
        - generate_key не изменяет состояние экземпляра
        - Shared secret никогда не возвращается вызывающей стороне
    """

    curve: EllipticCurveType
    algorithm_name: str

    def generate_key(
        self,
        kem_bytes: bytes,
        hash_type: HashType,
        hkdf_salt: bytes,
        hkdf_info: bytes,
        key_size_in_bytes: int,
        point_format: EcPointFormat,
    ) -> bytes:
        """
        Восстановить shared secret и вывести симметричный ключ.

        Args:
            kem_bytes: Ephemeral публичное значение отправителя
            hash_type: Хеш-функция для HKDF
            hkdf_salt: Соль HKDF (может быть пустой)
            hkdf_info: Контекстная информация HKDF
            key_size_in_bytes: Точная длина выходного ключа
            point_format: Формат кодирования kem_bytes

        Returns:
            Выведенный ключ длиной key_size_in_bytes

        Raises:
            ValidationError: Некорректные kem_bytes или point_format
            KeyAgreementError: Сбой ECDH / X25519
            KeyDerivationError: Сбой HKDF
        """
        ...


__all__ = ["RecipientKemProtocol"]
