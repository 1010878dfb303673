# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .splitnep import SplitNEP
from .functions import scalar_function
from .linsolver import linear_solve_service
from .errorview import reason_view, error_view, history_view
