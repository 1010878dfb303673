# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""typing has all classes used in the external API of splitnep."""

from .scalarfunction import ScalarFunction, FunctionType
from .rational import Rational
from .exponential import Exponential
from .splitoperator import SplitOperator, Matrix

from .projectedproblem import ProjectedProblem
from .projectedeigsolver import ProjectedEigSolver, ProjectedEigSolverResult
from .matrixpencildecomposition import MatrixPencilDecomposition
from .slp import SLP, SLPResult

from .linearsolveservice import LinearSolveService, LinearSolveResult, KrylovSolver
from .solveresult import SolveResult
from .preconditioner import Preconditioner, PreconditionerType
from .krylovsolve import KrylovSolve, KrylovMethod
from .directsolve import DirectSolve
from .linsolver import LinearSolverType

from .convergence import ConvergenceTest, ErrorType
from .eigenpairstore import Eigenpair, EigenpairStore
from .nepresult import NEPResult, NEPStatus, NEPReason, IterationRecord
from .narnoldi import NArnoldi
from .subspace import Subspace

from .errors import (
    SplitNEPError,
    DimensionMismatch,
    EvaluationFailure,
    LinearSolveDivergence,
    SubspaceBreakdown,
    MaxIterationsExceeded
)
