import pytest
from hypothesis import given, strategies as st

from dlogproof import (
    FIELD_PRIME,
    ORDER,
    DeserializationError,
    FieldElement,
    InvalidOperand,
    InvalidScalar,
    Scalar,
    batch_inverse,
)

field_ints = st.integers(min_value=0, max_value=FIELD_PRIME - 1)
nonzero_field_ints = st.integers(min_value=1, max_value=FIELD_PRIME - 1)
scalar_ints = st.integers(min_value=0, max_value=ORDER - 1)


def test_construction_reduces_canonically():
    assert FieldElement(FIELD_PRIME).value == 0
    assert FieldElement(-1).value == FIELD_PRIME - 1
    assert Scalar(ORDER + 5).value == 5
    assert Scalar(-1).value == ORDER - 1


@given(field_ints, field_ints)
def test_field_add_sub_mul_match_integers(a, b):
    fa, fb = FieldElement(a), FieldElement(b)
    assert (fa + fb).value == (a + b) % FIELD_PRIME
    assert (fa - fb).value == (a - b) % FIELD_PRIME
    assert (fa * fb).value == (a * b) % FIELD_PRIME
    assert (-fa).value == (-a) % FIELD_PRIME


@given(nonzero_field_ints)
def test_field_inverse(a):
    fa = FieldElement(a)
    assert fa * fa.inv() == FieldElement.one()
    assert fa / fa == 1


@given(st.integers(min_value=1, max_value=ORDER - 1))
def test_scalar_inverse(a):
    sa = Scalar(a)
    assert sa * sa.inv() == Scalar.one()
    assert sa ** -1 == sa.inv()


def test_invert_zero_raises():
    with pytest.raises(InvalidOperand):
        FieldElement.zero().inv()
    with pytest.raises(InvalidOperand):
        Scalar(ORDER).inv()


def test_results_stay_in_range():
    big = FieldElement(FIELD_PRIME - 1)
    assert 0 <= (big + big).value < FIELD_PRIME
    assert 0 <= (FieldElement.zero() - big).value < FIELD_PRIME
    top = Scalar(ORDER - 1)
    assert (top + Scalar.one()).is_zero()


def test_field_and_scalar_do_not_mix():
    with pytest.raises(TypeError):
        FieldElement(3) + Scalar(3)
    with pytest.raises(TypeError):
        Scalar(3) * FieldElement(3)
    assert FieldElement(3) != Scalar(3)


def test_int_coefficients_and_sum():
    assert 3 * Scalar(5) == Scalar(15)
    assert sum([Scalar(1), Scalar(2), Scalar(3)]) == 6


@given(scalar_ints)
def test_scalar_bytes_round_trip(a):
    s = Scalar(a)
    data = s.to_bytes()
    assert len(data) == 32
    assert Scalar.from_bytes(data) == s


@given(field_ints)
def test_field_bytes_round_trip(a):
    f = FieldElement(a)
    assert FieldElement.from_bytes(f.to_bytes()) == f


def test_strict_decoding():
    with pytest.raises(DeserializationError):
        Scalar.from_bytes(b"\x01" * 31)
    with pytest.raises(InvalidScalar):
        Scalar.from_bytes(ORDER.to_bytes(32, "big"))
    with pytest.raises(DeserializationError):
        FieldElement.from_bytes(FIELD_PRIME.to_bytes(32, "big"))
    with pytest.raises(InvalidScalar):
        Scalar.from_int(-1)
    with pytest.raises(InvalidScalar):
        Scalar.from_int(ORDER)


def test_from_bytes_reduce_accepts_any_length():
    assert Scalar.from_bytes_reduce(b"\xff" * 64).value == (
        int.from_bytes(b"\xff" * 64, "big") % ORDER
    )


@given(nonzero_field_ints)
def test_sqrt_of_square(a):
    f = FieldElement(a)
    root = (f * f).sqrt()
    assert root == f or root == -f


def test_sqrt_of_non_residue_raises():
    # -1 is a non-residue because p ≡ 3 (mod 4)
    with pytest.raises(InvalidOperand):
        FieldElement(-1).sqrt()


def test_batch_inverse_matches_individual():
    values = [Scalar(v) for v in (1, 2, 3, 0xDEADBEEF, ORDER - 1)]
    assert batch_inverse(values) == [v.inv() for v in values]
    fields = [FieldElement(v) for v in (7, 11, FIELD_PRIME - 2)]
    assert batch_inverse(fields) == [f.inv() for f in fields]
    assert batch_inverse([]) == []


def test_batch_inverse_rejects_zero():
    with pytest.raises(InvalidOperand):
        batch_inverse([Scalar(2), Scalar.zero(), Scalar(3)])


def test_repr_is_truncated():
    assert repr(Scalar(5)) == "Scalar(0x5)"
    assert repr(Scalar(ORDER - 1)).startswith("Scalar(0xffffffff")
