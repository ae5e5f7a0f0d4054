"""
Пакет ECIES-HKDF Recipient KEM
==============================

Recipient-сторона механизма инкапсуляции ключа (KEM) гибридной схемы
шифрования ECIES: по статическому приватному ключу получателя и ephemeral
публичному значению отправителя восстанавливает shared secret и выводит
симметричный ключ через HKDF.

Этот пакет предоставляет:
    - Recipient KEM на NIST P-256, P-384, P-521 (ECDH)
    - Recipient KEM на X25519 (RFC 7748)
    - HKDF (RFC 5869) с привязкой KEM bytes к деривации
    - Строгий разбор точек (UNCOMPRESSED, COMPRESSED, legacy crunchy)
    - Типизированную иерархию исключений
    - Профили параметров KEM для типовых DEM

Пример базового использования:
    >>> from src.security.ecies import (
    ...     EllipticCurveType, EcPointFormat, HashType, create_recipient_kem,
    ... )
    >>>
    >>> kem = create_recipient_kem(EllipticCurveType.CURVE25519, private_key)
    >>> dem_key = kem.generate_key(
    ...     kem_bytes, HashType.SHA256, b"", b"", 32, EcPointFormat.COMPRESSED
    ... )

Управление логированием:
    ECIES_LOG_LEVEL задаёт уровень логгера пакета, но консольный
    обработчик (stderr) всегда пропускает только WARNING и выше.
    Чтобы увидеть DEBUG записи, задайте также ECIES_LOG_FILE (путь к
    файлу лога) до первого импорта пакета, либо подключите свой
    обработчик к логгеру "src".

    >>> import os
    >>> os.environ['ECIES_LOG_LEVEL'] = 'DEBUG'
    >>> os.environ['ECIES_LOG_FILE'] = '/tmp/ecies.log'
    >>>
    >>> from src import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Запись попадёт в /tmp/ecies.log, но не в stderr")

Автор: ECIES KEM Development Team
Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Dict

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "ECIES KEM Development Team"
__description__ = "ECIES-HKDF recipient key encapsulation for NIST P-curves and X25519"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"ECIES KEM требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

# Все логгеры пакета живут под именем пакета верхнего уровня
_LOGGER_NAMESPACE = __name__

_LOG_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная окружения
      ECIES_LOG_FILE (по умолчанию библиотека не пишет файлов)
    - Структурированным форматом с временной меткой, уровнем,
      модулем и сообщением

    Уровень логирования контролируется переменной окружения
    ECIES_LOG_LEVEL. Допустимые значения:
    DEBUG, INFO, WARNING, ERROR, CRITICAL

    Функция идемпотентна - повторные вызовы не имеют дополнительного эффекта.
    """
    log_level_str = os.environ.get("ECIES_LOG_LEVEL", "INFO").upper()
    log_level = _LOG_LEVEL_MAP.get(log_level_str, logging.INFO)

    # Избегаем дублирования конфигурации
    package_logger = logging.getLogger(_LOGGER_NAMESPACE)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # Файловый обработчик (ротирующий) - только по запросу
    log_file = os.environ.get("ECIES_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                f"Не удалось инициализировать файловое логирование: {e}. "
                f"Используется только консоль."
            )

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер для указанного модуля в пространстве имён пакета.

    Логгеры именуются как '<пакет>.<module_name>' и наследуют
    конфигурацию логгера пакета (см. _setup_logging).

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        Экземпляр logging.Logger.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.debug("KEM создан: %s", kem.algorithm_name)

    Примечание:
        Никогда не передавайте в логгер приватные ключи, shared secret или
        выведенные ключи. Логируйте только длины и имена алгоритмов.
    """
    if module_name == _LOGGER_NAMESPACE or module_name.startswith(
        _LOGGER_NAMESPACE + "."
    ):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_LOGGER_NAMESPACE}.main")

    # Удаляем ведущие точки из относительных импортов
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{_LOGGER_NAMESPACE}.{clean_name}")


# =============================================================================
# ПРОВЕРКА ЗАВИСИМОСТЕЙ
# =============================================================================


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить, установлены ли зависимости пакета.

    Функция не вызывает исключений для отсутствующих пакетов - вместо
    этого возвращает словарь состояний.

    Проверяемые зависимости:
        Обязательные:
        - cryptography: ECDH, X25519, HKDF

    Возвращает:
        Словарь, отображающий имена пакетов на статус доступности.

    Пример:
        >>> deps = check_dependencies()
        >>> if not deps['cryptography']:
        ...     print("Внимание: cryptography не установлена.")
    """
    dependencies: Dict[str, bool] = {}

    try:
        import cryptography  # noqa: F401

        dependencies["cryptography"] = True
    except ImportError:
        dependencies["cryptography"] = False

    return dependencies


_setup_logging()

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "get_logger",
    "check_dependencies",
]
