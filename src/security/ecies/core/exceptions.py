"""
Централизованные исключения ECIES-HKDF recipient KEM.

Иерархия отражает три класса ошибок KEM:

    CryptoError (базовое)
    ├── AlgorithmError
    │   └── AlgorithmNotSupportedError      — "Unimplemented"
    ├── ValidationError                      — "InvalidArgument"
    │   ├── InvalidParameterError
    │   ├── InvalidInputError
    │   └── InvalidKeyError (также CryptoKeyError)
    │       └── InvalidKeySizeError
    └── CryptoKeyError
        ├── KeyAgreementError                — сбой ECDH/X25519
        └── KeyDerivationError               — сбой HKDF

ValidationError и AlgorithmNotSupportedError — ошибки вызывающей стороны,
которые исправляются изменением аргументов. KeyAgreementError и
KeyDerivationError пробрасывают сбои библиотеки cryptography; исходное
исключение доступно через __cause__.

Example:
    >>> from src.security.ecies.core.exceptions import CryptoError
    >>> try:
    ...     kem.generate_key(kem_bytes, HashType.SHA256, b"", b"", 32,
    ...                      EcPointFormat.UNCOMPRESSED)
    ... except ValidationError as e:
    ...     print(f"Bad input: {e}")

Security Note:
    Сообщения исключений НЕ содержат приватных ключей, shared secret
    или выведенных ключей.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
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


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех ошибок KEM.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Имя алгоритма или кривой (опционально)
        context: Дополнительный контекст для отладки (без секретов!)

    Example:
        >>> str(CryptoError("Operation failed", algorithm="X25519"))
        'CryptoError: Operation failed [algorithm=X25519]'
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# ALGORITHM ERRORS
# ==============================================================================


class AlgorithmError(CryptoError):
    """Ошибки выбора или конфигурации алгоритма."""

    pass


class AlgorithmNotSupportedError(AlgorithmError):
    """
    Алгоритм (кривая, хеш) не поддерживается.

    Raises когда:
    - Dispatcher получил неизвестный идентификатор кривой
    - Provider параметров кривой не знает кривую
    - HKDF запрошен с неизвестной хеш-функцией

    Example:
        >>> create_recipient_kem(EllipticCurveType.UNKNOWN_CURVE, key)
        AlgorithmNotSupportedError: Algorithm 'UNKNOWN' not supported: Unsupported elliptic curve
    """

    def __init__(self, algorithm: str, reason: str) -> None:
        message = f"Algorithm '{algorithm}' not supported: {reason}"
        super().__init__(message, algorithm=algorithm, context={"reason": reason})
        self.reason = reason


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(CryptoError):
    """
    Базовая ошибка валидации аргументов ("InvalidArgument").

    Все ошибки этой ветки исправляются вызывающей стороной.
    """

    pass


class InvalidParameterError(ValidationError):
    """
    Некорректный параметр.

    Example:
        >>> kem.generate_key(..., point_format=EcPointFormat.UNCOMPRESSED)
        InvalidParameterError: Invalid parameter 'point_format': X25519 only supports compressed elliptic curve points
    """

    def __init__(
        self,
        parameter_name: str,
        reason: str,
        *,
        value: Any = None,
        algorithm: Optional[str] = None,
    ) -> None:
        message = f"Invalid parameter '{parameter_name}': {reason}"

        context: Dict[str, Any] = {"parameter": parameter_name}
        if value is not None:
            # SECURITY: value никогда не должен быть секретом
            context["value"] = str(value)[:50]

        super().__init__(message, algorithm=algorithm, context=context)
        self.parameter_name = parameter_name
        self.reason = reason


class InvalidInputError(ValidationError):
    """
    Некорректные входные данные (например, KEM bytes).

    Raises когда:
    - Длина KEM bytes не соответствует формату точки
    - Точка не лежит на кривой
    - Неверный префикс SEC1
    """

    pass


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class CryptoKeyError(CryptoError):
    """
    Базовая ошибка для операций с ключами.

    Note:
        Названа CryptoKeyError чтобы не конфликтовать с builtin KeyError.
    """

    pass


class InvalidKeyError(CryptoKeyError, ValidationError):
    """
    Некорректный приватный ключ.

    Одновременно CryptoKeyError и ValidationError: пустой ключ или ключ
    неверной длины — ошибка вызывающей стороны.

    Attributes:
        expected_size: Ожидаемый размер ключа в байтах
        actual_size: Фактический размер ключа в байтах
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        expected_size: Optional[int] = None,
        actual_size: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if expected_size is not None:
            context["expected_size"] = expected_size
        if actual_size is not None:
            context["actual_size"] = actual_size

        super().__init__(message, algorithm=algorithm, context=context)
        self.expected_size = expected_size
        self.actual_size = actual_size


class InvalidKeySizeError(InvalidKeyError):
    """
    Неверный размер ключа.

    Example:
        >>> InvalidKeySizeError("X25519", 32, 16)
        InvalidKeySizeError: Invalid key size for X25519: expected 32 bytes, got 16 bytes
    """

    def __init__(
        self,
        algorithm: str,
        expected: int,
        actual: int,
    ) -> None:
        message = (
            f"Invalid key size for {algorithm}: "
            f"expected {expected} bytes, got {actual} bytes"
        )
        super().__init__(
            message,
            algorithm=algorithm,
            expected_size=expected,
            actual_size=actual,
        )


class KeyAgreementError(CryptoKeyError):
    """
    Ошибка вычисления shared secret (ECDH / X25519).

    Raises когда:
    - Приватный скаляр вне диапазона [1, n-1]
    - Результат X25519 — нулевой (точка малого порядка)
    - Внутренняя ошибка библиотеки cryptography
    """

    pass


class KeyDerivationError(CryptoKeyError):
    """
    Ошибка вывода ключа (HKDF).

    Raises когда:
    - Запрошенная длина вне [1, 255 * hash_len]
    - Внутренняя ошибка HKDF
    """

    pass
