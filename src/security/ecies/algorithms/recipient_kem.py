"""
ECIES-HKDF Recipient KEM — восстановление симметричного ключа получателем.

Recipient-сторона ECIES: по статическому приватному ключу получателя и
ephemeral публичному значению отправителя (KEM bytes) восстанавливает
shared secret и детерминированно выводит симметричный ключ заданной длины
для внешнего AEAD слоя.

Семейства кривых (закрытый набор):

    1. NIST P-curves (P-256, P-384, P-521)
       - Приватный ключ: big-endian скаляр произвольной длины
       - Shared secret: x-координата d·Q фиксированной ширины
       - KEM bytes: UNCOMPRESSED / COMPRESSED / DO_NOT_USE_CRUNCHY_UNCOMPRESSED

    2. X25519 (RFC 7748)
       - Приватный ключ: ровно 32 байта
       - Shared secret: 32 байта
       - KEM bytes: ровно 32 байта, формат только COMPRESSED

Деривация (одинакова для обоих семейств):

    key = HKDF(hash, IKM = kem_bytes || shared_secret, salt, info, L)

Контракт ошибок:
    - ValidationError (InvalidArgument): пустой / неверной длины ключ,
      некорректные KEM bytes, неподдерживаемый формат точки
    - AlgorithmNotSupportedError (Unimplemented): неизвестная кривая
    - KeyAgreementError / KeyDerivationError: сбои cryptography
      (исходное исключение в __cause__)

Потокобезопасность:
    После создания состояние экземпляра только читается; generate_key
    можно вызывать конкурентно из нескольких потоков. Единственная мутация —
    явный destroy() по инициативе вызывающей стороны.

Examples:
    >>> from src.security.ecies.algorithms.recipient_kem import create_recipient_kem
    >>>
    >>> # Получатель: один раз при старте
    >>> kem = create_recipient_kem(EllipticCurveType.CURVE25519, private_key)
    >>>
    >>> # Для каждого сообщения
    >>> dem_key = kem.generate_key(
    ...     kem_bytes,
    ...     HashType.SHA256,
    ...     hkdf_salt=b"",
    ...     hkdf_info=b"mail/v1",
    ...     key_size_in_bytes=32,
    ...     point_format=EcPointFormat.COMPRESSED,
    ... )

    >>> # Секретный материал стирается при выходе из блока
    >>> with create_recipient_kem(EllipticCurveType.NIST_P256, scalar) as kem:
    ...     dem_key = kem.generate_key_with(kem_bytes, params)

References:
    - ISO/IEC 18033-2: ECIES-KEM
    - SEC 1 v2 §3.8: ECIES
    - RFC 5869: HKDF
    - RFC 7748: X25519
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from cryptography.hazmat.primitives.asymmetric import ec

from src.security.ecies.algorithms.ec_util import (
    X25519_PRIVATE_KEY_LEN,
    X25519_PUBLIC_VALUE_LEN,
    compute_ecdh_shared_secret,
    compute_x25519_shared_secret,
    curve_label,
    ec_point_decode,
    get_curve,
)
from src.security.ecies.algorithms.kdf import compute_ecies_hkdf_symmetric_key
from src.security.ecies.config import EciesHkdfParams
from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType, HashType
from src.security.ecies.core.exceptions import (
    AlgorithmNotSupportedError,
    InvalidInputError,
    InvalidKeyError,
    InvalidKeySizeError,
    InvalidParameterError,
    ValidationError,
)
from src.security.ecies.utils import SecretBuffer, ensure_bytes

logger = logging.getLogger(__name__)


# ==============================================================================
# BASE CLASS & DISPATCHER
# ==============================================================================


class EciesHkdfRecipientKem(ABC):
    """
    Базовый класс recipient KEM и dispatcher по кривой.

    Экземпляр привязан к одной кривой и одному приватному ключу на всё
    время жизни. Приватный ключ хранится в SecretBuffer и стирается через
    destroy() или при выходе из with-блока.

    Подклассы: EciesHkdfNistPCurveRecipientKem, EciesHkdfX25519RecipientKem.
    Набор закрыт: новые семейства кривых — изменение протокола.
    """

    ALGORITHM_NAME: str

    def __init__(self, curve: EllipticCurveType, private_key: bytes) -> None:
        self._curve = curve
        self._private_key = SecretBuffer(private_key)
        self._logger = logger.getChild(self.ALGORITHM_NAME.lower())

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def new(curve: EllipticCurveType, private_key: bytes) -> "EciesHkdfRecipientKem":
        """
        Создать recipient KEM для кривой.

        Args:
            curve: Идентификатор кривой
            private_key: Приватный ключ получателя (raw bytes)

        Returns:
            EciesHkdfNistPCurveRecipientKem для P-256/P-384/P-521,
            EciesHkdfX25519RecipientKem для CURVE25519

        Raises:
            TypeError: private_key не bytes-like
            InvalidKeyError: Пустой ключ (NIST) или ключ не 32 байта (X25519)
            AlgorithmNotSupportedError: Неподдерживаемая кривая
        """
        try:
            curve_type = EllipticCurveType(curve)
        except ValueError:
            curve_type = EllipticCurveType.UNKNOWN_CURVE

        if curve_type.is_nist_curve:
            return EciesHkdfNistPCurveRecipientKem.new(curve_type, private_key)
        if curve_type == EllipticCurveType.CURVE25519:
            return EciesHkdfX25519RecipientKem.new(curve_type, private_key)

        raise AlgorithmNotSupportedError(
            algorithm=curve_label(curve),
            reason="Unsupported elliptic curve",
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def curve(self) -> EllipticCurveType:
        return self._curve

    @property
    def algorithm_name(self) -> str:
        return self.ALGORITHM_NAME

    @property
    def is_destroyed(self) -> bool:
        return self._private_key.wiped

    @abstractmethod
    def generate_key(
        self,
        kem_bytes: bytes,
        hash_type: HashType,
        hkdf_salt: bytes,
        hkdf_info: bytes,
        key_size_in_bytes: int,
        point_format: EcPointFormat,
    ) -> bytes:
        """Восстановить shared secret из kem_bytes и вывести ключ."""
        ...

    def generate_key_with(self, kem_bytes: bytes, params: EciesHkdfParams) -> bytes:
        """
        Вывести ключ по набору параметров.

        Args:
            kem_bytes: Ephemeral публичное значение отправителя
            params: Параметры KEM (кривая должна совпадать с экземпляром)

        Raises:
            InvalidParameterError: params.curve не совпадает с кривой KEM
        """
        if params.curve != self._curve:
            raise InvalidParameterError(
                "params.curve",
                f"parameters are for {curve_label(params.curve)}, "
                f"KEM is bound to {curve_label(self._curve)}",
                algorithm=self.ALGORITHM_NAME,
            )
        return self.generate_key(
            kem_bytes,
            params.hash_type,
            params.hkdf_salt,
            params.hkdf_info,
            params.key_size_in_bytes,
            params.point_format,
        )

    def destroy(self) -> None:
        """
        Стереть приватный ключ.

        После вызова generate_key поднимает InvalidKeyError.
        Стирание best-effort: Python не гарантирует отсутствие копий.
        """
        self._private_key.wipe()
        self._logger.debug(f"{self.ALGORITHM_NAME}: private key wiped")

    def __enter__(self) -> "EciesHkdfRecipientKem":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.destroy()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"curve={curve_label(self._curve)}, "
            f"destroyed={self.is_destroyed})"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_alive(self) -> None:
        if self._private_key.wiped:
            raise InvalidKeyError(
                "private key has been destroyed", algorithm=self.ALGORITHM_NAME
            )

    def _derive(
        self,
        hash_type: HashType,
        kem_bytes: bytes,
        shared_secret: bytes,
        hkdf_salt: bytes,
        hkdf_info: bytes,
        key_size_in_bytes: int,
    ) -> bytes:
        """
        Свернуть shared secret в ключ.

        Копия shared secret в SecretBuffer стирается сразу после деривации.
        Исходный объект bytes, возвращённый cryptography, неизменяем и
        стиранию не подлежит.
        """
        with SecretBuffer(shared_secret) as secret:
            key = compute_ecies_hkdf_symmetric_key(
                hash_type,
                kem_bytes,
                secret.view(),
                hkdf_salt,
                hkdf_info,
                key_size_in_bytes,
            )

        self._logger.debug(
            f"{self.ALGORITHM_NAME}: derived {len(key)}B key "
            f"from {len(kem_bytes)}B KEM bytes"
        )
        return key


# ==============================================================================
# NIST P-CURVES
# ==============================================================================


class EciesHkdfNistPCurveRecipientKem(EciesHkdfRecipientKem):
    """
    Recipient KEM на NIST P-curves (P-256, P-384, P-521).

    Приватный ключ — big-endian скаляр произвольной длины. Диапазон
    скаляра при создании не проверяется: скаляр 0 или >= n приводит к
    KeyAgreementError в generate_key.

    Example:
        >>> kem = EciesHkdfNistPCurveRecipientKem.new(
        ...     EllipticCurveType.NIST_P256, scalar_bytes
        ... )
        >>> key = kem.generate_key(
        ...     kem_bytes, HashType.SHA256, b"", b"", 32,
        ...     EcPointFormat.UNCOMPRESSED,
        ... )
    """

    ALGORITHM_NAME = "ECIES-HKDF-NIST-P"

    def __init__(
        self,
        curve: EllipticCurveType,
        private_key: bytes,
        ec_curve: ec.EllipticCurve,
    ) -> None:
        super().__init__(curve, private_key)
        self._ec_curve = ec_curve

    @classmethod
    def new(  # type: ignore[override]
        cls, curve: EllipticCurveType, private_key: bytes
    ) -> "EciesHkdfNistPCurveRecipientKem":
        """
        Создать NIST recipient KEM.

        Raises:
            TypeError: private_key не bytes-like
            InvalidKeyError: Пустой private_key
            AlgorithmNotSupportedError: Кривая не является NIST P-curve
        """
        private_key = ensure_bytes(private_key, "private_key")
        if not private_key:
            raise InvalidKeyError(
                "empty priv_key", algorithm=curve_label(curve), actual_size=0
            )

        ec_curve = get_curve(curve)
        return cls(curve, private_key, ec_curve)

    @property
    def algorithm_name(self) -> str:
        return f"ECIES-HKDF-{curve_label(self._curve)}"

    @property
    def ec_curve(self) -> ec.EllipticCurve:
        """Параметры кривой (cryptography), полученные при создании."""
        return self._ec_curve

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
        Вывести ключ из KEM bytes на NIST кривой.

        Args:
            kem_bytes: Закодированная ephemeral точка отправителя
            hash_type: Хеш-функция для HKDF
            hkdf_salt: Соль HKDF
            hkdf_info: Контекстная информация HKDF
            key_size_in_bytes: Длина ключа
            point_format: Формат кодирования kem_bytes

        Returns:
            Выведенный ключ длиной key_size_in_bytes

        Raises:
            TypeError: Аргументы не bytes-like
            InvalidInputError: "Invalid KEM bytes: ..." — длина, префикс,
                точка вне кривой или неподдерживаемый формат
            InvalidKeyError: KEM уничтожен через destroy()
            KeyAgreementError: Скаляр вне диапазона или сбой ECDH
            AlgorithmNotSupportedError / KeyDerivationError: сбой HKDF
        """
        kem_bytes = ensure_bytes(kem_bytes, "kem_bytes")
        hkdf_salt = ensure_bytes(hkdf_salt, "hkdf_salt")
        hkdf_info = ensure_bytes(hkdf_info, "hkdf_info")

        try:
            public_key = ec_point_decode(self._curve, point_format, kem_bytes)
        except ValidationError as exc:
            raise InvalidInputError(
                f"Invalid KEM bytes: {exc.message}",
                algorithm=self.algorithm_name,
            ) from exc

        self._ensure_alive()

        shared_secret = compute_ecdh_shared_secret(
            self._curve, self._private_key.view(), public_key
        )
        return self._derive(
            hash_type,
            kem_bytes,
            shared_secret,
            hkdf_salt,
            hkdf_info,
            key_size_in_bytes,
        )


# ==============================================================================
# X25519
# ==============================================================================


class EciesHkdfX25519RecipientKem(EciesHkdfRecipientKem):
    """
    Recipient KEM на X25519 (RFC 7748).

    Приватный ключ — ровно 32 байта, копируется в буфер фиксированного
    размера при создании. KEM bytes — ровно 32 байта; единственный
    допустимый формат — COMPRESSED.

    Example:
        >>> kem = EciesHkdfX25519RecipientKem.new(
        ...     EllipticCurveType.CURVE25519, private_key
        ... )
        >>> key = kem.generate_key(
        ...     kem_bytes, HashType.SHA256, b"", b"", 32,
        ...     EcPointFormat.COMPRESSED,
        ... )
    """

    ALGORITHM_NAME = "ECIES-HKDF-X25519"

    @classmethod
    def new(  # type: ignore[override]
        cls, curve: EllipticCurveType, private_key: bytes
    ) -> "EciesHkdfX25519RecipientKem":
        """
        Создать X25519 recipient KEM.

        Raises:
            TypeError: private_key не bytes-like
            InvalidParameterError: curve не CURVE25519
            InvalidKeySizeError: private_key не 32 байта
        """
        if curve != EllipticCurveType.CURVE25519:
            raise InvalidParameterError(
                "curve",
                "curve is not CURVE25519",
                value=curve_label(curve),
                algorithm=cls.ALGORITHM_NAME,
            )
        private_key = ensure_bytes(private_key, "private_key")
        if len(private_key) != X25519_PRIVATE_KEY_LEN:
            raise InvalidKeySizeError("X25519", X25519_PRIVATE_KEY_LEN, len(private_key))

        return cls(curve, private_key)

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
        Вывести ключ из 32-байтового публичного значения X25519.

        Raises:
            InvalidParameterError: point_format не COMPRESSED
            InvalidInputError: kem_bytes не 32 байта
            InvalidKeyError: KEM уничтожен через destroy()
            KeyAgreementError: Нулевой результат X25519
            AlgorithmNotSupportedError / KeyDerivationError: сбой HKDF
        """
        if point_format != EcPointFormat.COMPRESSED:
            raise InvalidParameterError(
                "point_format",
                "X25519 only supports compressed elliptic curve points",
                value=getattr(point_format, "value", point_format),
                algorithm=self.ALGORITHM_NAME,
            )

        kem_bytes = ensure_bytes(kem_bytes, "kem_bytes")
        if len(kem_bytes) != X25519_PUBLIC_VALUE_LEN:
            raise InvalidInputError(
                "kem_bytes has unexpected size",
                algorithm=self.ALGORITHM_NAME,
                context={
                    "expected_size": X25519_PUBLIC_VALUE_LEN,
                    "actual_size": len(kem_bytes),
                },
            )
        hkdf_salt = ensure_bytes(hkdf_salt, "hkdf_salt")
        hkdf_info = ensure_bytes(hkdf_info, "hkdf_info")

        self._ensure_alive()

        shared_secret = compute_x25519_shared_secret(
            self._private_key.view(), kem_bytes
        )
        return self._derive(
            hash_type,
            kem_bytes,
            shared_secret,
            hkdf_salt,
            hkdf_info,
            key_size_in_bytes,
        )


# ==============================================================================
# FACTORY FUNCTION
# ==============================================================================


def create_recipient_kem(
    curve: EllipticCurveType, private_key: bytes
) -> EciesHkdfRecipientKem:
    """
    Создать recipient KEM для кривой.

    Эквивалент EciesHkdfRecipientKem.new().

    Example:
        >>> kem = create_recipient_kem(EllipticCurveType.NIST_P384, scalar)
        >>> kem.algorithm_name
        'ECIES-HKDF-P-384'
    """
    kem = EciesHkdfRecipientKem.new(curve, private_key)
    logger.debug(f"Created {kem.algorithm_name} recipient KEM")
    return kem


__all__ = [
    "EciesHkdfRecipientKem",
    "EciesHkdfNistPCurveRecipientKem",
    "EciesHkdfX25519RecipientKem",
    "create_recipient_kem",
]
