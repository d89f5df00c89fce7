import pytest

from scalargrad import Op, Scalar
from scalargrad.ops import BINARY, FORWARD, LOCAL_GRADS, forward, local_grads


def test_catalogue_is_complete():
    for op in Op:
        assert op in FORWARD
        assert op in LOCAL_GRADS
    assert {op for op in Op if op.arity == 2} == BINARY


@pytest.mark.parametrize(
    "op, args, expected",
    [
        (Op.ADD, (2.0, 3.0), (1.0, 1.0)),
        (Op.SUB, (2.0, 3.0), (1.0, -1.0)),
        (Op.MUL, (2.0, 3.0), (3.0, 2.0)),
        (Op.DIV, (6.0, 3.0), (1.0 / 3.0, -6.0 / 9.0)),
        (Op.NEG, (2.0, None), (-1.0,)),
        (Op.POW, (3.0, 2), (6.0,)),
    ],
)
def test_local_grads(op, args, expected):
    out = forward(op, *args)
    assert local_grads(op, out, *args) == pytest.approx(expected)


def test_tanh_and_exp_reuse_forward_value():
    t = forward(Op.TANH, 0.5, None)
    assert local_grads(Op.TANH, t, 0.5, None) == pytest.approx((1.0 - t * t,))

    e = forward(Op.EXP, 0.5, None)
    assert local_grads(Op.EXP, e, 0.5, None) == pytest.approx((e,))


def _numeric_grad(f, x, h=1e-6):
    return (f(x + h) - f(x - h)) / (2 * h)


@pytest.mark.parametrize(
    "build",
    [
        lambda x: x + x * x,
        lambda x: x - 3.0 * x,
        lambda x: 1.0 / x,
        lambda x: -x,
        lambda x: x ** 3,
        lambda x: x ** -0.5,
        lambda x: x.tanh(),
        lambda x: x.exp(),
        lambda x: (x * 2.0).tanh() / (x + 4.0).exp(),
    ],
)
def test_gradient_matches_finite_difference(build):
    point = 1.3
    x = Scalar(point)
    y = build(x)
    y.backward()

    expected = _numeric_grad(lambda v: float(build(Scalar(v)).data), point)
    assert x.grad == pytest.approx(expected, rel=1e-5)


def test_pow_records_exponent():
    x = Scalar(2.0)
    y = x ** 3

    assert y.op is Op.POW
    assert y.exponent == 3
    assert y.data == 8.0
