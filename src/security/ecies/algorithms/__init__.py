"""
Алгоритмы ECIES-HKDF recipient KEM: параметры кривых и кодек точек,
HKDF и recipient KEM варианты с dispatcher'ом.
"""

from src.security.ecies.algorithms.ec_util import (
    X25519_PRIVATE_KEY_LEN,
    X25519_PUBLIC_VALUE_LEN,
    X25519_SHARED_KEY_LEN,
    compute_ecdh_shared_secret,
    compute_x25519_shared_secret,
    ec_point_decode,
    encoding_size_in_bytes,
    field_size_in_bytes,
    get_curve,
)
from src.security.ecies.algorithms.kdf import (
    compute_ecies_hkdf_symmetric_key,
    compute_hkdf,
)
from src.security.ecies.algorithms.recipient_kem import (
    EciesHkdfNistPCurveRecipientKem,
    EciesHkdfRecipientKem,
    EciesHkdfX25519RecipientKem,
    create_recipient_kem,
)

__all__ = [
    "X25519_PRIVATE_KEY_LEN",
    "X25519_PUBLIC_VALUE_LEN",
    "X25519_SHARED_KEY_LEN",
    "get_curve",
    "field_size_in_bytes",
    "encoding_size_in_bytes",
    "ec_point_decode",
    "compute_ecdh_shared_secret",
    "compute_x25519_shared_secret",
    "compute_hkdf",
    "compute_ecies_hkdf_symmetric_key",
    "EciesHkdfRecipientKem",
    "EciesHkdfNistPCurveRecipientKem",
    "EciesHkdfX25519RecipientKem",
    "create_recipient_kem",
]
