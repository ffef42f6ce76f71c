from shamir_audit.rational import ZERO, Rational, add


def test_add_reduces_result():
    assert add(Rational(1, 2), Rational(1, 3)) == Rational(5, 6)
    assert add(Rational(1, 2), Rational(1, 2)) == Rational(1, 1)
    assert add(Rational(3, 4), Rational(-3, 4)) == Rational(0, 1)


def test_add_keeps_denominator_sign():
    total = add(Rational(1, -2), Rational(1, 2))
    assert total.numerator == 0
    assert total.denominator == -1

    total = add(ZERO, Rational(6, -4))
    assert total == Rational(3, -2)


def test_add_with_zero():
    assert add(ZERO, ZERO) == ZERO
    assert add(ZERO, Rational(7, 1)) == Rational(7, 1)


def test_big_integers_do_not_overflow():
    big = 10**40
    assert add(Rational(big, 3), Rational(2 * big, 3)) == Rational(big, 1)
    assert add(Rational(2**521 - 1, 1), Rational(1, 1)).numerator == 2**521


def test_exact_quotient():
    assert Rational(12, -4).exact_quotient() == (-3, 0)
    _, remainder = Rational(9, 2).exact_quotient()
    assert remainder != 0
    assert Rational(9, 3).exact_quotient() == (3, 0)
    assert str(Rational(9, 2)) == "9/2"
