import coincurve
import pytest
from hypothesis import given, settings, strategies as st

from dlogproof import (
    FIELD_PRIME,
    G,
    INFINITY,
    ORDER,
    AffinePoint,
    DeserializationError,
    FieldElement,
    InvalidOperand,
    InvalidPoint,
    JacobianPoint,
    multiply,
)

# 2·G from SEC 2 test data
TWO_G_X = 0xC6047F9441ED7D6D3045406E95C07CD85C778E4B8CEF3CA7ABAC09B95C709EE5
TWO_G_Y = 0x1AE168FEA63DC339A3C58419466CEAEEF7F632653266D0E1236431A950CFE52A

scalars = st.integers(min_value=1, max_value=ORDER - 1)


def _oracle(k):
    """k·G computed by libsecp256k1."""
    pk = coincurve.PrivateKey(k.to_bytes(32, "big")).public_key
    return AffinePoint.from_bytes(pk.format(compressed=False))


def test_generator_is_on_curve():
    assert G.is_on_curve()
    assert not G.is_identity()
    assert G.to_jacobian().is_on_curve()


def test_doubling_matches_known_vector():
    assert G.double() == AffinePoint(TWO_G_X, TWO_G_Y)
    assert G + G == AffinePoint(TWO_G_X, TWO_G_Y)


def test_addition_matches_oracle():
    two_g = G.double()
    assert two_g + G == _oracle(3)
    assert (two_g + G) + two_g == _oracle(5)


# ── identity edge cases ────────────────────────────────────────────────

def test_add_identity():
    assert G + INFINITY == G
    assert INFINITY + G == G
    assert INFINITY + INFINITY == INFINITY


def test_add_negation_is_identity():
    assert (G + (-G)).is_identity()
    assert (G - G).is_identity()
    jg = G.to_jacobian()
    assert jg.add(jg.negate()).is_identity()
    assert jg.add_affine(-G).is_identity()


def test_double_identity():
    assert INFINITY.double().is_identity()
    assert JacobianPoint.identity().double().is_identity()


def test_double_vertical_tangent_is_identity():
    # secp256k1 has no 2-torsion, so y = 0 only occurs off the curve;
    # the doubling formula must still return the identity
    assert AffinePoint(5, 0).double().is_identity()
    assert JacobianPoint(5, 0, 1).double().is_identity()


def test_negate_identity():
    assert (-INFINITY).is_identity()


def test_add_equal_points_takes_doubling_branch():
    jg = G.to_jacobian()
    assert jg.add(jg) == G.double()
    assert jg.add_affine(G) == G.double()


# ── Jacobian representation ────────────────────────────────────────────

@given(st.integers(min_value=1, max_value=FIELD_PRIME - 1))
def test_jacobian_equality_ignores_z_scaling(z):
    x, y = G.x.value, G.y.value
    scaled = JacobianPoint(x * z * z, y * z * z * z, z)
    assert scaled == G.to_jacobian()
    assert scaled == G
    assert scaled.is_on_curve()
    assert scaled.to_affine() == G


def test_jacobian_inequality():
    assert G.to_jacobian() != (-G).to_jacobian()
    assert G.to_jacobian() != JacobianPoint.identity()
    assert JacobianPoint.identity() == INFINITY


def test_identity_to_affine_is_sentinel():
    assert JacobianPoint.identity().to_affine() is not None
    assert JacobianPoint.identity().to_affine().is_identity()
    assert JacobianPoint(7, 9, 0).is_identity()


def test_off_curve_detection():
    assert not AffinePoint(G.x, G.y + FieldElement(1)).is_on_curve()
    assert not JacobianPoint(1, 1, 1).is_on_curve()


def test_partial_coordinates_rejected():
    with pytest.raises(InvalidPoint):
        AffinePoint(1, None)


# ── SEC 1 encoding ─────────────────────────────────────────────────────

@settings(max_examples=25, deadline=None)
@given(scalars)
def test_encoding_round_trip_and_matches_oracle(k):
    point = _oracle(k)
    pk = coincurve.PrivateKey(k.to_bytes(32, "big")).public_key
    assert point.to_bytes() == pk.format(compressed=True)
    assert point.to_bytes(compressed=False) == pk.format(compressed=False)
    assert AffinePoint.from_bytes(point.to_bytes()) == point
    assert AffinePoint.from_bytes(point.to_bytes(compressed=False)) == point


def test_hex_round_trip():
    assert AffinePoint.from_hex(G.to_hex()) == G
    assert G.to_hex().startswith("02")


def test_identity_has_no_encoding():
    with pytest.raises(InvalidPoint):
        INFINITY.to_bytes()


@pytest.mark.parametrize("data", [
    b"",
    b"\x02" * 32,
    b"\x05" + b"\x00" * 32,
    b"\x02" + FIELD_PRIME.to_bytes(32, "big"),
    b"\x02" + b"\x00" * 33,
    b"\x00" * 65,
    "02" * 33,
])
def test_malformed_encodings_raise_deserialization_error(data):
    with pytest.raises(DeserializationError):
        AffinePoint.from_bytes(data)


def test_x_not_on_curve_raises_invalid_point():
    x = 1
    while True:
        try:
            (FieldElement(x) ** 3 + FieldElement(7)).sqrt()
        except InvalidOperand:
            break
        x += 1
    with pytest.raises(InvalidPoint):
        AffinePoint.from_bytes(b"\x02" + x.to_bytes(32, "big"))


def test_uncompressed_off_curve_raises_invalid_point():
    bad = b"\x04" + G.x.to_bytes() + (G.y + FieldElement(1)).to_bytes()
    with pytest.raises(InvalidPoint):
        AffinePoint.from_bytes(bad)


def test_bad_hex_raises():
    with pytest.raises(DeserializationError):
        AffinePoint.from_hex("zz")


def test_points_are_hashable():
    assert len({G, G.double(), multiply(2, G), INFINITY}) == 3
