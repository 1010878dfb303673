# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Type, overload
import h5py
import numpy as np

from .backend import ArrayNamespace, ArrayLike, to_numpy
from .eigenpairstore import Eigenpair, EigenpairStore
from .nepresult import NEPResult, NEPReason, IterationRecord

_RECORD_FIELDS = ("iteration", "value", "error", "residual", "subspace",
                  "linear_iterations", "refreshed", "locked")

@overload
def write(group: h5py.Group, obj: Eigenpair) -> None: ...
@overload
def write(group: h5py.Group, obj: EigenpairStore) -> None: ...
@overload
def write(group: h5py.Group, obj: NEPResult) -> None: ...
#implementation
def write(group: h5py.Group, obj: Any) -> None:
    if isinstance(obj, Eigenpair):
        group.attrs["value"] = complex(obj.value)
        group.attrs["residual"] = obj.residual
        group.attrs["norm"] = obj.norm
        group.attrs["iteration"] = obj.iteration
        group.create_dataset("array", data=to_numpy(obj.array))
    elif isinstance(obj, EigenpairStore):
        group.attrs["count"] = len(obj)
        for i, pair in enumerate(obj):
            write(group.create_group(f"pair{i}"), pair)
    elif isinstance(obj, NEPResult):
        group.attrs["reason"] = obj.reason.name
        group.attrs["message"] = obj.message
        group.attrs["nev"] = obj.nev
        group.attrs["iterations"] = obj.iterations
        group.attrs["refreshes"] = obj.refreshes
        group.attrs["linear_failures"] = obj.linear_failures
        group.attrs["restarts"] = obj.restarts
        group.attrs["time"] = obj.time
        write(group.create_group("eigenpairs"), obj.eigenpairs)
        hgroup = group.create_group("history")
        for name in _RECORD_FIELDS:
            data = [getattr(rec, name) for rec in obj.history]
            if name == "value":
                data = [np.nan if val is None else val for val in data]
                hgroup.create_dataset(name, data=np.asarray(data, dtype=np.complex128))
            else:
                hgroup.create_dataset(name, data=np.asarray(data))
    else:
        raise ValueError("Invalid object.")

@overload
def read[T: ArrayLike](group: h5py.Group, cls: Type[Eigenpair], xp: Optional[ArrayNamespace[T]] = None) -> Eigenpair[T]: ...
@overload
def read[T: ArrayLike](group: h5py.Group, cls: Type[EigenpairStore], xp: Optional[ArrayNamespace[T]] = None) -> EigenpairStore[T]: ...
@overload
def read[T: ArrayLike](group: h5py.Group, cls: Type[NEPResult], xp: Optional[ArrayNamespace[T]] = None) -> NEPResult[T]: ...
#implementation
def read(group: h5py.Group, cls: Any, xp: Optional[ArrayNamespace] = None) -> Any:
    if cls == Eigenpair:
        dataset = group["array"]
        assert isinstance(dataset, h5py.Dataset)
        array = np.asarray(dataset)
        return Eigenpair(value=complex(get_attr(group, "value")),
                         array=array if xp is None else xp.asarray(array),
                         residual=float(get_attr(group, "residual")),
                         norm=float(get_attr(group, "norm")),
                         iteration=int(get_attr(group, "iteration")))
    elif cls == EigenpairStore:
        store = EigenpairStore()
        for i in range(int(get_attr(group, "count"))):
            pgroup = group[f"pair{i}"]
            assert isinstance(pgroup, h5py.Group)
            store.append(read(pgroup, Eigenpair, xp))
        return store
    elif cls == NEPResult:
        sgroup = group["eigenpairs"]
        assert isinstance(sgroup, h5py.Group)
        hgroup = group["history"]
        assert isinstance(hgroup, h5py.Group)
        columns = {name: np.asarray(hgroup[name]) for name in _RECORD_FIELDS}
        history = []
        for i in range(len(columns["iteration"])):
            value = complex(columns["value"][i])
            history.append(IterationRecord(
                iteration=int(columns["iteration"][i]),
                value=None if np.isnan(value) else value,
                error=float(columns["error"][i]),
                residual=float(columns["residual"][i]),
                subspace=int(columns["subspace"][i]),
                linear_iterations=int(columns["linear_iterations"][i]),
                refreshed=bool(columns["refreshed"][i]),
                locked=bool(columns["locked"][i])))
        return NEPResult(reason=NEPReason[str(get_attr(group, "reason"))],
                         message=str(get_attr(group, "message")),
                         eigenpairs=read(sgroup, EigenpairStore, xp),
                         nev=int(get_attr(group, "nev")),
                         iterations=int(get_attr(group, "iterations")),
                         refreshes=int(get_attr(group, "refreshes")),
                         linear_failures=int(get_attr(group, "linear_failures")),
                         restarts=int(get_attr(group, "restarts")),
                         time=float(get_attr(group, "time")),
                         history=history)

    raise ValueError("Invalid class.")

def get_attr(group: h5py.Group, name: str) -> Any:
    return group.attrs[name]
