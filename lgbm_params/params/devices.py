# lgbm_params/params/devices.py
"""Compute device selection (LightGBM ``device_type``)."""

from dataclasses import dataclass
from typing import Tuple

from .base import Option, coerce_members
from .refined import NonNegativeInt


class GPUParam(Option):
    """Option scoped to the GPU device."""


class GpuPlatformId(GPUParam):
    """OpenCL platform id."""
    value_type = NonNegativeInt


class GpuDeviceId(GPUParam):
    """OpenCL device id within the platform."""
    value_type = NonNegativeInt


class GpuUseDP(GPUParam):
    """Use double precision math on the GPU."""
    value_type = bool


class DeviceKind:
    """Marker base for devices."""

    params: Tuple[Option, ...] = ()


@dataclass(frozen=True)
class CPU(DeviceKind):
    pass


@dataclass(frozen=True)
class GPU(DeviceKind):
    params: Tuple[GPUParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'params', coerce_members(self.params, GPUParam, 'GPU'))
