import unittest
import cmath

from splitnep import SplitNEP, scalar_function
from splitnep.typing import FunctionType, EvaluationFailure, Rational, Exponential
from utils import backends

class TestScalarFunction(unittest.TestCase):

    def setUp(self):
        self.splitnep = [SplitNEP(backend) for backend in backends]
        self.points = [0.0, 1.5, -2.0+0.5j, 3j]

    def test_polynomial(self) -> None:
        for nep in self.splitnep:
            func = nep.polynomial([-1.0, 0.0])
            for lam in self.points:
                val, der = func.evaluate(lam)
                self.assertAlmostEqual(val, -lam)
                self.assertAlmostEqual(der, -1.0)

            func = nep.polynomial([1.0, 0.0, 1.0])
            self.assertAlmostEqual(func(1j), 0.0)
            self.assertAlmostEqual(func.derivative(2.0), 4.0)

    def test_constant(self) -> None:
        for nep in self.splitnep:
            func = nep.constant(2.5)
            for lam in self.points:
                self.assertEqual(func.evaluate(lam), (2.5, 0.0))

    def test_exp(self) -> None:
        tau = 0.001
        for nep in self.splitnep:
            func = nep.exp(-tau)
            for lam in self.points:
                val, der = func.evaluate(lam)
                self.assertAlmostEqual(val, cmath.exp(-tau*lam))
                self.assertAlmostEqual(der, -tau*cmath.exp(-tau*lam))

            func = nep.exp(2.0, offset=1.0, scale=3.0)
            self.assertAlmostEqual(func(0.5), 3.0*cmath.exp(2.0))
            self.assertAlmostEqual(func.derivative(0.5), 6.0*cmath.exp(2.0))

    def test_rational(self) -> None:
        for nep in self.splitnep:
            func = nep.rational([1.0], [1.0, -1.0])
            val, der = func.evaluate(3.0)
            self.assertAlmostEqual(val, 0.5)
            self.assertAlmostEqual(der, -0.25)

            func = nep.rational([1.0, 0.0], [1.0, 2.0], scale=2.0)
            val, der = func.evaluate(1.0)
            self.assertAlmostEqual(val, 2.0/3.0)
            self.assertAlmostEqual(der, 2.0*2.0/9.0)

    def test_failure(self) -> None:
        func = Rational([1.0], [1.0, -1.0])
        with self.assertRaises(EvaluationFailure) as ctx:
            func.evaluate(1.0)
        self.assertEqual(ctx.exception.value, 1.0)

        func = Exponential(1000.0)
        with self.assertRaises(EvaluationFailure):
            func.evaluate(1000.0)

    def test_invalid(self) -> None:
        with self.assertRaises(ValueError):
            Rational([])
        with self.assertRaises(ValueError):
            Rational([1.0], [0.0, 0.0])

    def test_factory(self) -> None:
        func = scalar_function(FunctionType.EXPONENTIAL, factor=-0.5)
        self.assertIsInstance(func, Exponential)
        self.assertEqual(func.kind, FunctionType.EXPONENTIAL)
        func = scalar_function(FunctionType.RATIONAL, numerator=[1.0, 0.0])
        self.assertIsInstance(func, Rational)
        self.assertAlmostEqual(func(2.0), 2.0)

if __name__ == "__main__":
    unittest.main()
