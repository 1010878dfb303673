import unittest
import numpy as np

from splitnep import SplitNEP
from splitnep.typing import ProjectedProblem, EvaluationFailure
from utils import backends

class TestSLP(unittest.TestCase):

    def setUp(self):
        self.splitnep = [SplitNEP(backend) for backend in backends]

    def get_diagonal(self, nep, values=(1.0, 2.0, 3.0)):
        mats = np.stack([np.diag(values), np.eye(len(values))]).astype(np.complex128)
        return ProjectedProblem([nep.constant(1.0), nep.polynomial([-1.0, 0.0])], mats)

    def test_linear(self) -> None:
        for nep in self.splitnep:
            slp = nep.slp()
            res = slp(self.get_diagonal(nep), 1.9)
            self.assertIsNotNone(res)
            self.assertTrue(res.converged)
            self.assertAlmostEqual(res.value, 2.0)
            self.assertAlmostEqual(abs(res.array[1]), 1.0)
            self.assertAlmostEqual(np.linalg.norm(res.array), 1.0)

    def test_locked(self) -> None:
        for nep in self.splitnep:
            slp = nep.slp()
            res = slp(self.get_diagonal(nep), 1.9, [2.0])
            self.assertIsNotNone(res)
            self.assertGreater(abs(res.value - 2.0), 0.5)
            self.assertLess(min(abs(res.value - 1.0), abs(res.value - 3.0)), 1e-10)

    def test_target(self) -> None:
        for nep in self.splitnep:
            res = nep.slp()(self.get_diagonal(nep), 2.9, [], 1.1)
            self.assertTrue(res.converged)
            self.assertAlmostEqual(res.value, 3.0)

            res = nep.slp()(self.get_diagonal(nep, (0.0, 1000.0)), 1000.0, [1000.0])
            self.assertIsNotNone(res)
            self.assertTrue(res.converged)
            self.assertLess(abs(res.value), 1e-10)

    def test_unconverged(self) -> None:
        for nep in self.splitnep:
            res = nep.slp(nsteps=1)(self.get_diagonal(nep), 1.9)
            self.assertFalse(res.converged)
            self.assertEqual(res.steps, 1)

    def test_pole(self) -> None:
        for nep in self.splitnep:
            problem = ProjectedProblem([nep.constant(1.0), nep.rational([-1.0], [1.0, 0.0])],
                                       np.asarray([[[2.0]], [[1.0]]], dtype=np.complex128))
            res = nep.slp()(problem, 0.0)
            self.assertIsNotNone(res)
            self.assertTrue(res.converged)
            self.assertLess(abs(res.value - 0.5), 1e-12)

            with self.assertRaises(EvaluationFailure):
                nep.slp(max_nudges=0)(problem, 0.0)

    def test_quadratic(self) -> None:
        for nep in self.splitnep:
            slp = nep.slp()
            problem = ProjectedProblem([nep.polynomial([1.0, 0.0, 1.0])], np.ones((1, 1, 1), dtype=np.complex128))
            res = slp(problem, 0.0)
            self.assertIsNotNone(res)
            self.assertLess(abs(res.value - 1j), 1e-12)

            res = slp(problem, res.value, [res.value])
            self.assertIsNotNone(res)
            self.assertLess(abs(res.value + 1j), 1e-12)

            res = slp(problem, 0.0, [1j])
            self.assertIsNotNone(res)
            self.assertLess(abs(res.value + 1j), 1e-12)
            self.assertIsNone(slp(problem, 0.0, [1j, -1j]))

    def test_delay(self) -> None:
        for nep in self.splitnep:
            tau = 0.5
            problem = ProjectedProblem([nep.polynomial([-1.0, 0.0]), nep.constant(1.0), nep.exp(-tau)],
                                       np.asarray([[[1.0]], [[2.0]], [[1.0]]], dtype=np.complex128))
            res = nep.slp()(problem, 0.0)
            self.assertIsNotNone(res)
            self.assertTrue(res.converged)
            lam = res.value
            self.assertLess(abs(-lam + 2.0 + np.exp(-tau*lam)), 1e-12)

    def test_constant(self) -> None:
        for nep in self.splitnep:
            problem = ProjectedProblem([nep.constant(1.0)], np.ones((1, 2, 2), dtype=np.complex128))
            self.assertIsNone(nep.slp()(problem, 0.0))

    def test_invalid(self) -> None:
        for nep in self.splitnep:
            with self.assertRaises(ValueError):
                nep.slp(nsteps=0)
            with self.assertRaises(ValueError):
                nep.slp(eps=-1.0)
            with self.assertRaises(ValueError):
                ProjectedProblem([nep.constant(1.0)], np.ones((2, 2, 2)))

if __name__ == "__main__":
    unittest.main()
