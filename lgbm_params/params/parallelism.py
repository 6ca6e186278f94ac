# lgbm_params/params/parallelism.py
"""Tree learner styles (LightGBM ``tree_learner``) and network settings.

The three distributed styles each carry a parallelism record: either a
socket-based one (machine count, machine list, port, timeout) or an
MPI-based one (machine count only).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .base import coerce_payload
from .refined import NonNegativeInt, PositiveInt
from ..utils.exceptions import validate_parameter

DEFAULT_LISTEN_PORT = 12400
DEFAULT_TIME_OUT_MINUTES = 120


class ParallelismParams:
    """Marker base for distributed network settings."""

    num_machines: PositiveInt


@dataclass(frozen=True)
class SocketParallelism(ParallelismParams):
    """Socket-based distributed learning.

    Attributes:
        num_machines: Number of machines taking part
        machine_list_file: File listing ``ip port`` of every machine
        local_listen_port: TCP port this machine listens on
        time_out: Socket time-out in minutes
    """

    num_machines: PositiveInt
    machine_list_file: Optional[str] = None
    local_listen_port: NonNegativeInt = NonNegativeInt(DEFAULT_LISTEN_PORT)
    time_out: NonNegativeInt = NonNegativeInt(DEFAULT_TIME_OUT_MINUTES)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'num_machines', PositiveInt.coerce(self.num_machines))
        if self.machine_list_file is not None:
            object.__setattr__(
                self, 'machine_list_file',
                coerce_payload(Path, self.machine_list_file, 'SocketParallelism')
            )
        port = NonNegativeInt.coerce(self.local_listen_port)
        validate_parameter("local_listen_port", port.value, max_value=65535)
        object.__setattr__(self, 'local_listen_port', port)
        object.__setattr__(self, 'time_out', NonNegativeInt.coerce(self.time_out))


@dataclass(frozen=True)
class MPIParallelism(ParallelismParams):
    """MPI-based distributed learning; MPI supplies the machine list."""

    num_machines: PositiveInt

    def __post_init__(self) -> None:
        object.__setattr__(self, 'num_machines', PositiveInt.coerce(self.num_machines))


class ParallelismStyle:
    """Marker base for tree learners."""


@dataclass(frozen=True)
class Serial(ParallelismStyle):
    """Single-machine tree learner."""


@dataclass(frozen=True)
class DistributedParallelism(ParallelismStyle):
    """Base for the distributed tree learners."""

    params: ParallelismParams

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'params', coerce_payload(ParallelismParams, self.params, type(self).__name__)
        )


@dataclass(frozen=True)
class FeatureParallel(DistributedParallelism):
    pass


@dataclass(frozen=True)
class DataParallel(DistributedParallelism):
    pass


@dataclass(frozen=True)
class VotingParallel(DistributedParallelism):
    """Voting parallel learner; the only one that honours ``top_k``."""
