# -*- coding: utf-8 -*-
"""
RU: Наборы параметров ECIES-HKDF KEM с предопределёнными профилями.
EN: ECIES-HKDF KEM parameter bundles with predefined profiles.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from src.security.ecies.algorithms.kdf import max_output_length
from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType, HashType


class EciesProfile(str, Enum):
    """Predefined KEM parameter profiles, named after the DEM they feed."""

    P256_AES128_GCM = "p256_aes128_gcm"
    P256_AES256_GCM = "p256_aes256_gcm"
    P384_AES256_GCM = "p384_aes256_gcm"
    P521_AES256_GCM = "p521_aes256_gcm"
    X25519_AES256_GCM = "x25519_aes256_gcm"


@dataclass(frozen=True)
class EciesHkdfParams:
    """
    ECIES-HKDF KEM parameters shared by sender and recipient.

    Attributes:
        curve: Elliptic curve of the recipient key.
        hash_type: Hash function used inside HKDF.
        point_format: Encoding of the KEM bytes.
        key_size_in_bytes: Length of the derived DEM key.
        hkdf_salt: HKDF salt (empty means RFC 5869 zero salt).
        hkdf_info: HKDF context info.

    Examples:
        >>> params = EciesHkdfParams.from_profile(EciesProfile.X25519_AES256_GCM)
        >>> params.key_size_in_bytes
        32

        >>> params = params.with_context(info=b"mail/v1")
        >>> params.hkdf_info
        b'mail/v1'
    """

    curve: EllipticCurveType
    hash_type: HashType
    point_format: EcPointFormat
    key_size_in_bytes: int
    hkdf_salt: bytes = b""
    hkdf_info: bytes = b""

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.curve == EllipticCurveType.UNKNOWN_CURVE:
            raise ValueError("curve must be set")
        if self.hash_type == HashType.UNKNOWN_HASH:
            raise ValueError("hash_type must be set")
        if self.point_format == EcPointFormat.UNKNOWN_FORMAT:
            raise ValueError("point_format must be set")
        if (
            self.curve == EllipticCurveType.CURVE25519
            and self.point_format != EcPointFormat.COMPRESSED
        ):
            raise ValueError("X25519 only supports COMPRESSED point format")
        max_len = max_output_length(self.hash_type)
        if (
            isinstance(self.key_size_in_bytes, bool)
            or not isinstance(self.key_size_in_bytes, int)
            or self.key_size_in_bytes < 1
            or self.key_size_in_bytes > max_len
        ):
            raise ValueError(f"key_size_in_bytes must be between 1 and {max_len}")
        if not isinstance(self.hkdf_salt, bytes) or not isinstance(
            self.hkdf_info, bytes
        ):
            raise ValueError("hkdf_salt and hkdf_info must be bytes")

    @staticmethod
    def from_profile(profile: EciesProfile) -> "EciesHkdfParams":
        """
        Create parameters from predefined profile.

        Args:
            profile: KEM/DEM profile.

        Returns:
            EciesHkdfParams instance with empty salt and info.
        """
        return _PROFILE_PARAMS[profile]

    def with_context(
        self, salt: bytes | None = None, info: bytes | None = None
    ) -> "EciesHkdfParams":
        """Return a copy with HKDF salt and/or info replaced."""
        return replace(
            self,
            hkdf_salt=self.hkdf_salt if salt is None else salt,
            hkdf_info=self.hkdf_info if info is None else info,
        )


# Predefined profiles
_PROFILE_PARAMS: Final[dict[EciesProfile, EciesHkdfParams]] = {
    EciesProfile.P256_AES128_GCM: EciesHkdfParams(
        curve=EllipticCurveType.NIST_P256,
        hash_type=HashType.SHA256,
        point_format=EcPointFormat.UNCOMPRESSED,
        key_size_in_bytes=16,
    ),
    EciesProfile.P256_AES256_GCM: EciesHkdfParams(
        curve=EllipticCurveType.NIST_P256,
        hash_type=HashType.SHA256,
        point_format=EcPointFormat.UNCOMPRESSED,
        key_size_in_bytes=32,
    ),
    EciesProfile.P384_AES256_GCM: EciesHkdfParams(
        curve=EllipticCurveType.NIST_P384,
        hash_type=HashType.SHA384,
        point_format=EcPointFormat.UNCOMPRESSED,
        key_size_in_bytes=32,
    ),
    EciesProfile.P521_AES256_GCM: EciesHkdfParams(
        curve=EllipticCurveType.NIST_P521,
        hash_type=HashType.SHA512,
        point_format=EcPointFormat.UNCOMPRESSED,
        key_size_in_bytes=32,
    ),
    EciesProfile.X25519_AES256_GCM: EciesHkdfParams(
        curve=EllipticCurveType.CURVE25519,
        hash_type=HashType.SHA256,
        point_format=EcPointFormat.COMPRESSED,
        key_size_in_bytes=32,
    ),
}


__all__ = [
    "EciesProfile",
    "EciesHkdfParams",
]
