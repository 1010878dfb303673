import unittest
from itertools import product
import numpy as np
import scipy.sparse as sp

from splitnep import SplitNEP
from splitnep.typing import DimensionMismatch
from utils import backends, delay_matrices, rand_data

class TestSplitOperator(unittest.TestCase):

    def setUp(self):
        self.splitnep = [SplitNEP(backend) for backend in backends]
        self.sizes = [8, 33]
        self.points = [0.3, -1.0+2.0j]

    def get_operator(self, nep, n: int, sparse: bool):
        eye, a, b = delay_matrices(n, sparse)
        return nep.split_operator((eye, nep.polynomial([-1.0, 0.0])),
                                  (a, nep.constant(1.0)),
                                  (b, nep.exp(-0.5)))

    def reference(self, n: int, lam: complex):
        eye, a, b = delay_matrices(n)
        mat = -lam*eye + a + np.exp(-0.5*lam)*b
        der = -eye - 0.5*np.exp(-0.5*lam)*b
        return mat, der

    def test_apply(self) -> None:
        for nep, n, sparse in product(self.splitnep, self.sizes, (False, True)):
            xp = nep.namespace
            op = self.get_operator(nep, n, sparse)
            self.assertEqual(op.size, n)
            self.assertEqual(op.nterms, 3)
            x = rand_data(xp, n)
            for lam in self.points:
                mat, der = self.reference(n, lam)
                self.assertTrue(np.allclose(op.apply(lam, x), mat @ np.asarray(x)))
                self.assertTrue(np.allclose(op.apply_derivative(lam, x), der @ np.asarray(x)))

    def test_assemble(self) -> None:
        for nep, n, sparse in product(self.splitnep, self.sizes, (False, True)):
            op = self.get_operator(nep, n, sparse)
            for lam in self.points:
                res = op.assemble(lam)
                self.assertEqual(sp.issparse(res), sparse)
                dense = res.toarray() if sparse else np.asarray(res)
                self.assertTrue(np.allclose(dense, self.reference(n, lam)[0]))

    def test_projection(self) -> None:
        for nep, n, sparse in product(self.splitnep, self.sizes, (False, True)):
            xp = nep.namespace
            op = self.get_operator(nep, n, sparse)
            basis, _ = np.linalg.qr(np.asarray(rand_data(xp, n, 4, seed=1)))
            basis = xp.asarray(basis.T)
            proj = np.asarray(op.projected_matrices(basis))
            self.assertEqual(proj.shape, (3, 4, 4))
            for i, (mat, ref) in enumerate(zip(delay_matrices(n), proj)):
                expect = np.conj(np.asarray(basis)) @ mat @ np.asarray(basis).T
                self.assertTrue(np.allclose(ref, expect), f"term {i}")

            with self.assertRaises(DimensionMismatch):
                op.projected_matrices(xp.zeros((2, n+1)))

    def test_norms(self) -> None:
        for nep, sparse in product(self.splitnep, (False, True)):
            n = 10
            op = self.get_operator(nep, n, sparse)
            refs = [np.max(np.sum(np.abs(mat), axis=1)) for mat in delay_matrices(n)]
            self.assertTrue(np.allclose(op.norms, refs))
            lam = 2.0
            fnorm = abs(-lam)*refs[0] + refs[1] + abs(np.exp(-0.5*lam))*refs[2]
            self.assertAlmostEqual(op.function_norm(lam), fnorm)

    def test_mismatch(self) -> None:
        for nep in self.splitnep:
            with self.assertRaises(DimensionMismatch):
                nep.split_operator((np.eye(4), nep.constant(1.0)),
                                   (np.eye(5), nep.polynomial([1.0, 0.0])))
            with self.assertRaises(DimensionMismatch):
                nep.split_operator((np.ones((4, 3)), nep.constant(1.0)))
            with self.assertRaises(DimensionMismatch):
                nep.split_operator()
            with self.assertRaises(TypeError):
                nep.split_operator((np.eye(4), 1.0))

if __name__ == "__main__":
    unittest.main()
