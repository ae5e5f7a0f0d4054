# -*- coding: utf-8 -*-
"""
RU: Утилиты для работы с секретным материалом: best-effort зануление буферов,
фиксированный по размеру SecretBuffer и проверки типов входных данных.
EN: Secret-material helpers: best-effort buffer wiping, a fixed-size
wipeable SecretBuffer and input type checks.
"""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Final, Optional, Type, Union

_LOGGER: Final = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def zero_memory(buf: Optional[bytearray]) -> None:
    """
    Best-effort zeroization of mutable buffer.

    Args:
        buf: bytearray to wipe (None is silently ignored).

    Notes:
        - Only works on bytearray (mutable); bytes cannot be wiped.
        - Ограничения Python: сборщик мусора, копии при конкатенации и
          swap-файлы означают, что истинное криптографическое стирание
          недостижимо на чистом Python.
    """
    if buf is None:
        return
    try:
        for i in range(len(buf)):
            buf[i] = 0
    except (TypeError, AttributeError) as e:
        _LOGGER.debug("zero_memory skip (immutable): %s", e.__class__.__name__)


def ensure_bytes(value: object, name: str) -> bytes:
    """
    Проверить, что значение bytes-like, и вернуть его как bytes.

    Args:
        value: Значение для проверки
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        TypeError: Если value не является bytes, bytearray или memoryview
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes, got {type(value).__name__}")


class SecretBuffer:
    """
    Фиксированный по размеру буфер для секретного материала.

    Содержимое копируется в собственный bytearray при создании и больше не
    меняет размер. wipe() зануляет буфер на месте; при использовании как
    context manager зануление происходит автоматически при выходе.

    Стирается только собственный буфер. Объекты bytes, из которых он был
    создан, и копии, полученные через bytes(), неизменяемы и остаются в
    памяти до сборки мусора. Для передачи в cryptography без копирования
    используйте view().

    Example:
        >>> with SecretBuffer(shared_secret) as secret:
        ...     key = derive(secret.view())
        >>> # буфер уже занулён
    """

    __slots__ = ("_buf", "_wiped")

    def __init__(self, data: BytesLike) -> None:
        self._buf = bytearray(data)
        self._wiped = False

    @classmethod
    def zeros(cls, size: int) -> "SecretBuffer":
        """Создать занулённый буфер заданного размера."""
        if size < 0:
            raise ValueError("size must be >= 0")
        return cls(bytes(size))

    @classmethod
    def concat(cls, *parts: BytesLike) -> "SecretBuffer":
        """
        Собрать буфер из нескольких частей без промежуточной конкатенации.

        Буфер выделяется один раз под итоговый размер, части копируются
        в него на месте.
        """
        views = [memoryview(part).cast("B") for part in parts]
        secret = cls.zeros(sum(view.nbytes for view in views))
        offset = 0
        for view in views:
            secret._buf[offset : offset + view.nbytes] = view
            offset += view.nbytes
        return secret

    def bytes(self) -> bytes:
        """Вернуть копию содержимого в виде bytes."""
        return bytes(self._buf)

    def view(self) -> memoryview:
        """Вернуть memoryview на буфер без копирования."""
        return memoryview(self._buf)

    def wipe(self) -> None:
        """Занулить буфер на месте. Повторные вызовы безопасны."""
        zero_memory(self._buf)
        self._wiped = True

    @property
    def wiped(self) -> bool:
        return self._wiped

    def __len__(self) -> int:
        return len(self._buf)

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.wipe()

    def __repr__(self) -> str:
        return f"SecretBuffer(size={len(self._buf)}, wiped={self._wiped})"


__all__ = [
    "BytesLike",
    "SecretBuffer",
    "ensure_bytes",
    "zero_memory",
]
