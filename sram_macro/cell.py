#
# # Bound Cell Definition
#
# Defines the [BoundCell] type: an externally-defined subcircuit,
# with each of its interface pins connected to a bit of the macro's logical IO.
#

from typing import Dict, List, Set
from dataclasses import field

from pydantic.dataclasses import dataclass

# Local imports
from .bundle import Bundle, PortBit
from .error import BindingError
from .netlist import Subckt, convert_schema
from .schema import NamingSchema, remap


@dataclass
class BoundCell:
    # Cell Name, equal to that of its subcircuit
    name: str
    # Logical Interface
    io: Bundle
    # Subcircuit, with pin-names in `schema`
    subckt: Subckt
    # Naming schema of `subckt` and `connections`
    schema: NamingSchema
    # Subcircuit pin-name to logical port-bit
    connections: Dict[str, PortBit] = field(default_factory=dict)

    # Connect subcircuit pin `pin` to logical port-bit `bit`.
    def connect(self, pin: str, bit: PortBit) -> None:
        if not self.subckt.has_pin(pin):
            raise BindingError(f"Subcircuit `{self.subckt.name}` has no pin `{pin}`")
        if pin in self.connections:
            raise BindingError(f"Pin `{pin}` of `{self.name}` is already connected")
        if not self.io.contains(bit):
            raise BindingError(f"Bit {bit} is outside interface `{self.io.name}`")
        if bit in self.connections.values():
            raise BindingError(f"Bit {bit} of `{self.name}` is already connected")
        self.connections[pin] = bit

    # Set of connected pin-names
    def pins(self) -> Set[str]:
        return set(self.connections.keys())

    def num_connections(self) -> int:
        return len(self.connections)

    # Subcircuit pins left unconnected, in definition order.
    # Only pins outside the macro's fixed port-set can remain so.
    def unconnected(self) -> List[str]:
        return [p for p in self.subckt.pins if p not in self.connections]

    # Boolean indication of whether every bit of `io` is connected
    def is_complete(self) -> bool:
        bound = set(self.connections.values())
        return all(bit in bound for port in self.io.ports for bit in port.bits())

    def convert(self, schema: NamingSchema) -> "BoundCell":
        """# Create a copy of this cell with its pins renamed into `schema`"""
        if schema == self.schema:
            return BoundCell(
                name=self.name,
                io=self.io,
                subckt=self.subckt,
                schema=self.schema,
                connections=dict(self.connections),
            )
        connections = {}
        for pin, bit in self.connections.items():
            new = remap(pin, self.schema, schema)
            if new is None:
                raise BindingError(f"Connected pin `{pin}` has no name in {schema.name}")
            connections[new] = bit
        return BoundCell(
            name=self.name,
            io=self.io,
            subckt=convert_schema(self.subckt, schema),
            schema=schema,
            connections=connections,
        )
