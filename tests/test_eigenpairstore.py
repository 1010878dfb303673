import unittest
import numpy as np

from splitnep.typing import (
    Eigenpair,
    EigenpairStore,
    ErrorType,
    NEPResult,
    NEPReason,
    NEPStatus,
    MaxIterationsExceeded,
    SplitNEPError
)
from splitnep.utils import EPS
from utils import backends

class TestEigenpairStore(unittest.TestCase):

    def get_store(self, xp) -> EigenpairStore:
        store = EigenpairStore()
        for i, value in enumerate([3.0, 1.0, 2.0+1j]):
            store.append(Eigenpair(value=value, array=xp.ones(4) / 2.0,
                                   residual=1e-10, norm=10.0, iteration=i+1))
        return store

    def test_order(self) -> None:
        for xp in backends:
            store = self.get_store(xp)
            self.assertEqual(store.count(), 3)
            self.assertEqual(len(store), 3)
            self.assertEqual(store.values, [3.0, 1.0, 2.0+1j])
            self.assertEqual([pair.iteration for pair in store], [1, 2, 3])
            self.assertEqual(store.get(2).value, 2.0+1j)
            self.assertIs(store[1], store.get(1))

    def test_errors(self) -> None:
        for xp in backends:
            store = self.get_store(xp)
            self.assertAlmostEqual(store.error(0, ErrorType.ABSOLUTE), 1e-10)
            self.assertAlmostEqual(store.error(0, ErrorType.RELATIVE), 1e-10 / 3.0)
            self.assertAlmostEqual(store.error(2), 1e-10 / abs(2.0+1j))
            for err in store.errors(ErrorType.BACKWARD):
                self.assertAlmostEqual(err, 1e-11)

            pair = Eigenpair(value=0.0, array=xp.ones(1), residual=1e-20, norm=0.0, iteration=1)
            self.assertEqual(pair.error(ErrorType.RELATIVE), 1e-20 / EPS)
            self.assertEqual(pair.error(ErrorType.BACKWARD), 1e-20 / EPS)

    def test_frozen(self) -> None:
        pair = self.get_store(np).get(0)
        with self.assertRaises(AttributeError):
            pair.value = 0.0 # type: ignore

    def test_result(self) -> None:
        for xp in backends:
            store = self.get_store(xp)
            result = NEPResult(reason=NEPReason.CONVERGED_TOL, message="done", eigenpairs=store, nev=3)
            self.assertTrue(result.converged)
            self.assertIs(result.check(), result)

            result = NEPResult(reason=NEPReason.DIVERGED_ITS, message="", eigenpairs=store, nev=4, iterations=9)
            self.assertEqual(result.status, NEPStatus.MAX_IT_REACHED)
            with self.assertRaises(MaxIterationsExceeded) as ctx:
                result.check()
            self.assertEqual(ctx.exception.nconv, 3)

            result = NEPResult(reason=NEPReason.DIVERGED_SUBSPACE_EXHAUSTED, message="full", eigenpairs=store, nev=4)
            self.assertEqual(result.status, NEPStatus.FAILED)
            with self.assertRaises(SplitNEPError):
                result.check()

if __name__ == "__main__":
    unittest.main()
