import unittest
import numpy as np

from splitnep import SplitNEP
from splitnep.typing import ErrorType
from utils import backends

class TestErrorView(unittest.TestCase):

    def setUp(self):
        self.splitnep = [SplitNEP(backend) for backend in backends]

    def get_result(self, nep, **params):
        op = nep.split_operator((np.eye(4), nep.polynomial([1.0, 0.0, 1.0])))
        return nep.solve(op, **params)

    def test_converged(self) -> None:
        for nep in self.splitnep:
            result = self.get_result(nep, nev=2)
            text = nep.reason_view(result)
            self.assertIn("converged (2 eigenpairs) due to CONVERGED_TOL", text)
            self.assertIn(f"iterations {result.iterations}", text)

            text = nep.error_view(result, terse=True)
            self.assertIn("All requested eigenvalues computed up to the required tolerance:", text)
            self.assertIn("0.00000+1.00000i, 0.00000-1.00000i", text)

            text = nep.error_view(result)
            lines = text.splitlines()
            self.assertIn("||T(k)x||/||kx||", lines[0])
            self.assertEqual(len([line for line in lines if line.strip()]), 2 + 2 + 1)

            text = nep.error_view(result, ErrorType.BACKWARD)
            self.assertIn("eta(x,k)", text)

            text = nep.history_view(result)
            self.assertEqual(len(text.splitlines()), len(result.history))
            self.assertIn("locked", text)

    def test_not_converged(self) -> None:
        for nep in self.splitnep:
            result = self.get_result(nep, nev=2, max_it=1)
            text = nep.reason_view(result)
            self.assertIn("did not converge due to DIVERGED_ITS", text)
            self.assertIn("Problem: less than 2 eigenvalues converged", nep.error_view(result, terse=True))

if __name__ == "__main__":
    unittest.main()
