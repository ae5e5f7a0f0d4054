"""
Тесты для модуля ec_util.py (параметры кривых, кодек точек, shared secret).

Покрытие:
- Размеры поля и кодировок для всех кривых и форматов
- Разбор точек: UNCOMPRESSED, COMPRESSED, crunchy
- Отклонение неверной длины, префикса и точек вне кривой
- ECDH на NIST кривых против cryptography
- X25519 shared secret и отклонение нулевого результата
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, x25519

from src.security.ecies.algorithms.ec_util import (
    X25519_PUBLIC_VALUE_LEN,
    X25519_SHARED_KEY_LEN,
    coerce_point_format,
    compute_ecdh_shared_secret,
    compute_x25519_shared_secret,
    curve_label,
    ec_point_decode,
    encoding_size_in_bytes,
    field_size_in_bytes,
    get_curve,
)
from src.security.ecies.core.enums import EcPointFormat, EllipticCurveType
from src.security.ecies.core.exceptions import (
    AlgorithmNotSupportedError,
    InvalidInputError,
    InvalidKeySizeError,
    InvalidParameterError,
    KeyAgreementError,
)

NIST_CURVES = [
    (EllipticCurveType.NIST_P256, ec.SECP256R1, 32),
    (EllipticCurveType.NIST_P384, ec.SECP384R1, 48),
    (EllipticCurveType.NIST_P521, ec.SECP521R1, 66),
]


def _uncompressed(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
    )


def _compressed(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )


# ==============================================================================
# TEST: CURVE PARAMETERS
# ==============================================================================


class TestCurveParameters:
    """Тесты provider'а параметров кривых."""

    @pytest.mark.parametrize("curve,curve_cls,field_size", NIST_CURVES)
    def test_nist_curves(self, curve: EllipticCurveType, curve_cls: type, field_size: int) -> None:
        assert isinstance(get_curve(curve), curve_cls)
        assert field_size_in_bytes(curve) == field_size

    def test_x25519_field_size(self) -> None:
        assert field_size_in_bytes(EllipticCurveType.CURVE25519) == 32

    @pytest.mark.parametrize(
        "curve", [EllipticCurveType.CURVE25519, EllipticCurveType.UNKNOWN_CURVE]
    )
    def test_non_nist_curve_unsupported(self, curve: EllipticCurveType) -> None:
        with pytest.raises(AlgorithmNotSupportedError, match="Unsupported elliptic curve"):
            get_curve(curve)

    def test_curve_label(self) -> None:
        assert curve_label(EllipticCurveType.NIST_P521) == "P-521"
        assert curve_label(EllipticCurveType.CURVE25519) == "X25519"
        assert curve_label("brainpool") == "brainpool"  # type: ignore[arg-type]


class TestEncodingSize:
    """Тесты ожидаемых длин закодированных точек."""

    @pytest.mark.parametrize(
        "curve,point_format,expected",
        [
            (EllipticCurveType.NIST_P256, EcPointFormat.UNCOMPRESSED, 65),
            (EllipticCurveType.NIST_P256, EcPointFormat.COMPRESSED, 33),
            (EllipticCurveType.NIST_P256, EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED, 64),
            (EllipticCurveType.NIST_P384, EcPointFormat.UNCOMPRESSED, 97),
            (EllipticCurveType.NIST_P384, EcPointFormat.COMPRESSED, 49),
            (EllipticCurveType.NIST_P384, EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED, 96),
            (EllipticCurveType.NIST_P521, EcPointFormat.UNCOMPRESSED, 133),
            (EllipticCurveType.NIST_P521, EcPointFormat.COMPRESSED, 67),
            (EllipticCurveType.NIST_P521, EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED, 132),
            (EllipticCurveType.CURVE25519, EcPointFormat.COMPRESSED, 32),
        ],
    )
    def test_sizes(
        self, curve: EllipticCurveType, point_format: EcPointFormat, expected: int
    ) -> None:
        assert encoding_size_in_bytes(curve, point_format) == expected

    @pytest.mark.parametrize(
        "point_format",
        [
            EcPointFormat.UNCOMPRESSED,
            EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED,
            EcPointFormat.UNKNOWN_FORMAT,
        ],
    )
    def test_x25519_only_compressed(self, point_format: EcPointFormat) -> None:
        with pytest.raises(InvalidParameterError, match="only supports compressed"):
            encoding_size_in_bytes(EllipticCurveType.CURVE25519, point_format)

    def test_unknown_format_nist(self) -> None:
        with pytest.raises(InvalidParameterError, match="unsupported point format"):
            encoding_size_in_bytes(EllipticCurveType.NIST_P256, EcPointFormat.UNKNOWN_FORMAT)

    def test_string_format_value(self) -> None:
        assert encoding_size_in_bytes(EllipticCurveType.NIST_P256, "uncompressed") == 65  # type: ignore[arg-type]
        assert encoding_size_in_bytes(EllipticCurveType.CURVE25519, "compressed") == 32  # type: ignore[arg-type]


class TestCoercePointFormat:
    """Тесты приведения значения к EcPointFormat."""

    def test_enum_member_returned(self) -> None:
        assert coerce_point_format(EcPointFormat.COMPRESSED, "NIST_P256") is EcPointFormat.COMPRESSED

    def test_string_value(self) -> None:
        assert coerce_point_format("compressed", "NIST_P256") is EcPointFormat.COMPRESSED

    @pytest.mark.parametrize("value", ["bogus", "COMPRESSED", None, 4, [1]])
    def test_rejects_non_format(self, value: object) -> None:
        with pytest.raises(InvalidParameterError, match="not an EcPointFormat") as exc_info:
            coerce_point_format(value, "NIST_P256")

        assert exc_info.value.algorithm == "NIST_P256"
        assert exc_info.value.parameter_name == "point_format"


# ==============================================================================
# TEST: POINT CODEC
# ==============================================================================


class TestPointDecode:
    """Тесты строгого разбора точек."""

    @pytest.mark.parametrize("curve,curve_cls,field_size", NIST_CURVES)
    def test_all_formats_decode_same_point(
        self, curve: EllipticCurveType, curve_cls: type, field_size: int
    ) -> None:
        """Все три формата одной точки дают одинаковый публичный ключ."""
        public_key = ec.generate_private_key(curve_cls()).public_key()
        uncompressed = _uncompressed(public_key)

        decoded = [
            ec_point_decode(curve, EcPointFormat.UNCOMPRESSED, uncompressed),
            ec_point_decode(curve, EcPointFormat.COMPRESSED, _compressed(public_key)),
            ec_point_decode(
                curve, EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED, uncompressed[1:]
            ),
        ]

        for key in decoded:
            assert key.public_numbers() == public_key.public_numbers()

    def test_wrong_length(self) -> None:
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()
        encoded = _uncompressed(public_key)

        with pytest.raises(InvalidInputError, match="unexpected length"):
            ec_point_decode(EllipticCurveType.NIST_P256, EcPointFormat.UNCOMPRESSED, encoded[:-1])

    def test_empty_input(self) -> None:
        with pytest.raises(InvalidInputError):
            ec_point_decode(EllipticCurveType.NIST_P256, EcPointFormat.COMPRESSED, b"")

    @pytest.mark.parametrize("prefix", [0x00, 0x02, 0x03, 0x05, 0xFF])
    def test_bad_uncompressed_prefix(self, prefix: int) -> None:
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()
        encoded = bytes([prefix]) + _uncompressed(public_key)[1:]

        with pytest.raises(InvalidInputError, match="uncompressed point prefix"):
            ec_point_decode(EllipticCurveType.NIST_P256, EcPointFormat.UNCOMPRESSED, encoded)

    @pytest.mark.parametrize("prefix", [0x00, 0x01, 0x04, 0x06])
    def test_bad_compressed_prefix(self, prefix: int) -> None:
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()
        encoded = bytes([prefix]) + _compressed(public_key)[1:]

        with pytest.raises(InvalidInputError, match="compressed point prefix"):
            ec_point_decode(EllipticCurveType.NIST_P256, EcPointFormat.COMPRESSED, encoded)

    def test_point_not_on_curve(self) -> None:
        """Точка (0, 0) в uncompressed форме не лежит на P-256."""
        encoded = b"\x04" + bytes(64)

        with pytest.raises(InvalidInputError, match="not on curve") as exc_info:
            ec_point_decode(EllipticCurveType.NIST_P256, EcPointFormat.UNCOMPRESSED, encoded)

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_crunchy_not_on_curve(self) -> None:
        with pytest.raises(InvalidInputError, match="not on curve"):
            ec_point_decode(
                EllipticCurveType.NIST_P384,
                EcPointFormat.DO_NOT_USE_CRUNCHY_UNCOMPRESSED,
                b"\x01" * 96,
            )

    def test_string_format_value(self) -> None:
        """Строковое значение формата разбирается как член enum."""
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()

        decoded = ec_point_decode(
            EllipticCurveType.NIST_P256, "compressed", _compressed(public_key)  # type: ignore[arg-type]
        )

        assert decoded.public_numbers() == public_key.public_numbers()

    def test_invalid_format_value(self) -> None:
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()

        with pytest.raises(InvalidParameterError, match="not an EcPointFormat"):
            ec_point_decode(EllipticCurveType.NIST_P256, "bogus", _uncompressed(public_key))  # type: ignore[arg-type]

    def test_x25519_not_decodable(self) -> None:
        """Разбор X25519 через кодек NIST точек недоступен."""
        with pytest.raises(AlgorithmNotSupportedError):
            ec_point_decode(EllipticCurveType.CURVE25519, EcPointFormat.COMPRESSED, bytes(32))


# ==============================================================================
# TEST: SHARED SECRET
# ==============================================================================


class TestEcdhSharedSecret:
    """Тесты ECDH на NIST кривых."""

    @pytest.mark.parametrize("curve,curve_cls,field_size", NIST_CURVES)
    def test_matches_cryptography(
        self, curve: EllipticCurveType, curve_cls: type, field_size: int
    ) -> None:
        recipient = ec.generate_private_key(curve_cls())
        sender = ec.generate_private_key(curve_cls())
        scalar = recipient.private_numbers().private_value.to_bytes(field_size, "big")

        shared = compute_ecdh_shared_secret(curve, scalar, sender.public_key())

        assert len(shared) == field_size
        assert shared == sender.exchange(ec.ECDH(), recipient.public_key())

    def test_accepts_memoryview(self) -> None:
        recipient = ec.generate_private_key(ec.SECP256R1())
        sender = ec.generate_private_key(ec.SECP256R1())
        scalar = bytearray(recipient.private_numbers().private_value.to_bytes(32, "big"))

        shared = compute_ecdh_shared_secret(
            EllipticCurveType.NIST_P256, memoryview(scalar), sender.public_key()
        )

        assert shared == sender.exchange(ec.ECDH(), recipient.public_key())

    def test_curve_mismatch(self) -> None:
        sender = ec.generate_private_key(ec.SECP384R1())

        with pytest.raises(KeyAgreementError, match="expected secp256r1"):
            compute_ecdh_shared_secret(EllipticCurveType.NIST_P256, b"\x01", sender.public_key())

    def test_zero_scalar(self) -> None:
        sender = ec.generate_private_key(ec.SECP256R1())

        with pytest.raises(KeyAgreementError) as exc_info:
            compute_ecdh_shared_secret(EllipticCurveType.NIST_P256, bytes(32), sender.public_key())

        assert exc_info.value.__cause__ is not None


class TestX25519SharedSecret:
    """Тесты X25519 shared secret."""

    def test_rfc7748_vector(self) -> None:
        """RFC 7748 Section 6.1."""
        alice_priv = bytes.fromhex(
            "77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a"
        )
        bob_pub = bytes.fromhex(
            "de9edb7d7b7dc1b4d35b61c2ece435373f8343c85b78674dadfc7e146f882b4f"
        )
        expected = bytes.fromhex(
            "4a5d9d5ba4ce2de1728e3bf480350f25e07e21c947d19e3376f09b3c1e161742"
        )

        assert compute_x25519_shared_secret(alice_priv, bob_pub) == expected

    def test_matches_cryptography(self) -> None:
        recipient = x25519.X25519PrivateKey.generate()
        sender = x25519.X25519PrivateKey.generate()
        raw = recipient.private_bytes(
            serialization.Encoding.Raw,
            serialization.PrivateFormat.Raw,
            serialization.NoEncryption(),
        )
        sender_pub = sender.public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )

        shared = compute_x25519_shared_secret(raw, sender_pub)

        assert len(shared) == X25519_PUBLIC_VALUE_LEN
        assert shared == sender.exchange(recipient.public_key())

    @pytest.mark.parametrize("priv_len,pub_len", [(31, 32), (33, 32), (32, 31), (32, 0)])
    def test_wrong_sizes(self, priv_len: int, pub_len: int) -> None:
        with pytest.raises(InvalidKeySizeError):
            compute_x25519_shared_secret(b"\x01" * priv_len, b"\x09" * pub_len)

    def test_all_zero_result_rejected(self) -> None:
        with pytest.raises(KeyAgreementError, match="X25519"):
            compute_x25519_shared_secret(b"\x01" * 32, bytes(32))

    def test_shared_key_length(self) -> None:
        recipient = x25519.X25519PrivateKey.generate()
        sender_pub = x25519.X25519PrivateKey.generate().public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )
        raw = recipient.private_bytes(
            serialization.Encoding.Raw,
            serialization.PrivateFormat.Raw,
            serialization.NoEncryption(),
        )

        assert X25519_SHARED_KEY_LEN == 32
        assert len(compute_x25519_shared_secret(raw, sender_pub)) == X25519_SHARED_KEY_LEN

    def test_accepts_memoryview(self) -> None:
        """Приватный ключ передаётся как view на стираемый буфер."""
        alice_priv = bytearray.fromhex(
            "77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a"
        )
        bob_pub = bytes.fromhex(
            "de9edb7d7b7dc1b4d35b61c2ece435373f8343c85b78674dadfc7e146f882b4f"
        )

        shared = compute_x25519_shared_secret(memoryview(alice_priv), bob_pub)

        assert shared.hex() == "4a5d9d5ba4ce2de1728e3bf480350f25e07e21c947d19e3376f09b3c1e161742"
