"""MoveDataMixin."""

import dataclasses
from collections.abc import Iterator
from copy import copy as shallowcopy
from copy import deepcopy
from typing import ClassVar, cast

import torch
from typing_extensions import Any, Protocol, Self, TypeVar, runtime_checkable


class InconsistentDeviceError(ValueError):  # noqa: D101
    def __init__(self, *devices):  # noqa: D107
        super().__init__(f'Inconsistent devices found, found at least {", ".join(str(d) for d in devices)}')


@runtime_checkable
class DataclassInstance(Protocol):
    """An instance of a dataclass."""

    __dataclass_fields__: ClassVar[dict[str, dataclasses.Field[Any]]]


T = TypeVar('T')


class MoveDataMixin:
    """Move dataclass fields to cpu/gpu, convert dtypes and deep copy.

    Fields can be tensors, other `MoveDataMixin` instances, or lists and tuples of these.
    Per-echo containers keep their tensors in lists, so the conversion recurses into sequences.
    """

    def to(
        self,
        device: str | torch.device | int | None = None,
        dtype: torch.dtype | None = None,
        *,
        copy: bool = False,
    ) -> Self:
        """Perform dtype and/or device conversion of data.

        The dtype-type, i.e. float or complex, will always be preserved,
        but the precision might be changed: with ``dtype=torch.float64``
        a ``complex64`` tensor becomes ``complex128`` and a ``float32`` tensor becomes ``float64``.
        Integer and bool tensors (e.g. subsample indices) are only moved.

        Parameters
        ----------
        device
            The destination device.
        dtype
            The destination precision.
        copy
            If `True`, a deep copy will be returned even if no conversion is necessary.
            If `False`, some tensors might be shared between the original and the new object.
        """
        return self._to(device=device, dtype=dtype, copy=copy)

    def _items(self) -> Iterator[tuple[str, Any]]:
        """Return an iterator over the fields of the object."""
        if isinstance(self, DataclassInstance):
            for field in dataclasses.fields(self):
                name = field.name
                data = getattr(self, name)
                yield name, data

    def _to(
        self,
        device: torch.device | str | int | None = None,
        dtype: torch.dtype | None = None,
        copy: bool = False,
        memo: dict | None = None,
    ) -> Self:
        """Move data to device and convert dtype if necessary.

        This method is called by `to`, `cpu` and `clone`. It should not be called directly.

        Parameters
        ----------
        device
            The destination device.
        dtype
            The destination dtype.
        copy
            If `True`, the returned tensors will always be copies.
            Fields that are neither tensors nor `MoveDataMixin` are deep copied.
        memo
            A dictionary to keep track of already converted objects to avoid multiple conversions.
        """
        new = shallowcopy(self)

        if memo is None:
            memo = {}

        def _tensor_to(data: torch.Tensor) -> torch.Tensor:
            new_dtype: torch.dtype | None
            if dtype is not None and data.dtype.is_floating_point:
                new_dtype = dtype.to_real()
            elif dtype is not None and data.dtype.is_complex:
                new_dtype = dtype.to_complex()
            else:
                # bool or int: keep as is
                new_dtype = None
            return data.to(device, new_dtype, copy=copy)

        def _convert(data: T) -> T:
            if id(data) in memo:
                return cast(T, memo[id(data)])
            converted: Any
            if isinstance(data, torch.Tensor):
                converted = _tensor_to(data)
            elif isinstance(data, MoveDataMixin):
                converted = data._to(device=device, dtype=dtype, copy=copy, memo=memo)
            elif isinstance(data, list | tuple):
                converted = type(data)(_convert(element) for element in data)
            elif copy:
                converted = deepcopy(data)
            else:
                converted = data
            memo[id(data)] = converted
            return cast(T, converted)

        for name, data in new._items():
            object.__setattr__(new, name, _convert(data))
        return new

    def cpu(self, *, copy: bool = False) -> Self:
        """Put in CPU memory.

        Parameters
        ----------
        copy
            If `True`, the returned tensors will always be copies, even if already on the CPU.
        """
        return self._to(device='cpu', copy=copy)

    def clone(self: Self) -> Self:
        """Return a deep copy of the object.

        No tensor, list or nested object is shared between the copy and the original.
        """
        return self._to(copy=True)

    @property
    def device(self) -> torch.device | None:
        """Return the device of the tensors.

        Raises
        ------
        `InconsistentDeviceError`
            If the devices of different fields differ.

        Returns
        -------
            The device of the fields or `None` if no field holds a tensor.
        """
        devices: set[torch.device] = set()

        def collect(data: object) -> None:
            if isinstance(data, torch.Tensor):
                devices.add(data.device)
            elif isinstance(data, MoveDataMixin):
                if (device := data.device) is not None:
                    devices.add(device)
            elif isinstance(data, list | tuple):
                for element in data:
                    collect(element)

        for _, data in self._items():
            collect(data)
        if len(devices) > 1:
            raise InconsistentDeviceError(*devices)
        return devices.pop() if devices else None
