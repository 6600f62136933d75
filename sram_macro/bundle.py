#
# # Interfaces Module
#
# Describing Cells in terms of their IO Interfaces
#

from typing import Tuple, Optional, Iterator
from enum import Enum, auto

from pydantic.dataclasses import dataclass


class PortKind(Enum):
    # Flat Scalar Port, e.g. `clk`
    Scalar = auto()
    # Array-Based Port, e.g. `din[63:0]`
    Array = auto()


class PortDir(Enum):
    Input = auto()
    Output = auto()
    InOut = auto()


# # Port
#
# Logical port, as in a netlist or HDL description.
# Includes scalar and vector (bus) ports.
# Does not include physical/ geometric information.
#
@dataclass(frozen=True)
class Port:
    # Port Name
    name: str
    # Port Type
    kind: PortKind
    # Direction
    direction: PortDir
    # Number of bits. Always one for `Scalar`s.
    width: int = 1

    @staticmethod
    def scalar(name: str, direction: PortDir) -> "Port":
        return Port(name=name, kind=PortKind.Scalar, direction=direction, width=1)

    @staticmethod
    def array(name: str, width: int, direction: PortDir) -> "Port":
        return Port(name=name, kind=PortKind.Array, direction=direction, width=width)

    # Get a reference to bit `index`
    def bit(self, index: int = 0) -> "PortBit":
        return PortBit(port=self.name, index=index)

    # Iterate over all of our bits, in ascending index order
    def bits(self) -> Iterator["PortBit"]:
        for i in range(self.width):
            yield self.bit(i)


# # Port Bit
#
# A single bit of a [Port], referred to by port-name and bit-index.
# Scalar ports have a single bit at index zero.
#
@dataclass(frozen=True)
class PortBit:
    port: str
    index: int = 0

    def __str__(self) -> str:
        return f"{self.port}[{self.index}]"


@dataclass(frozen=True)
class Bundle:
    name: str
    ports: Tuple[Port, ...]

    # Retrieve a port by name.
    # Returns `None` if no port with that name exists.
    def port(self, name: str) -> Optional[Port]:
        for port in self.ports:
            if port.name == name:
                return port
        return None

    # Boolean indication of whether `bit` lies within one of our ports
    def contains(self, bit: PortBit) -> bool:
        port = self.port(bit.port)
        if port is None:
            return False
        return 0 <= bit.index < port.width

    # Total number of bits across all ports
    def width(self) -> int:
        return sum([p.width for p in self.ports])
