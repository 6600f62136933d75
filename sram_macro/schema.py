#
# # Naming Schemas
#
# Each [NamingSchema] is a fixed mapping from logical port-bits to the literal pin-names
# used by a netlist dialect. The tables here are the only place pin-name strings are produced.
#

import re
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

# Local imports
from .bundle import Bundle, Port, PortBit, PortKind
from .error import BindingError


class NamingSchema(Enum):
    # Pin names as authored in the macro's own netlist, e.g. `ADDR[3]`, `WE`
    RawElectrical = "raw"
    # Lower-case pin names, per the PDK's netlisting convention, e.g. `addr[3]`, `we`
    PdkNormalized = "pdk"


# Logical port name to pin base-name, per schema
_BASE_NAMES: Dict[NamingSchema, Dict[str, str]] = {
    NamingSchema.RawElectrical: {
        "addr": "ADDR",
        "din": "DIN",
        "we": "WE",
        "wmask": "WMASK",
        "clk": "CLK",
        "dout": "DOUT",
        "vdd": "VDD",
        "vss": "VSS",
    },
    NamingSchema.PdkNormalized: {
        "addr": "addr",
        "din": "din",
        "we": "we",
        "wmask": "wmask",
        "clk": "clk",
        "dout": "dout",
        "vdd": "vdd",
        "vss": "vss",
    },
}

# Inverse tables, pin base-name to logical port name
_PORT_NAMES: Dict[NamingSchema, Dict[str, str]] = {
    schema: {base: port for port, base in table.items()}
    for schema, table in _BASE_NAMES.items()
}

# Logical ports with a single, un-indexed pin. All others are indexed arrays.
_SCALAR_PORTS = frozenset(("we", "clk", "vdd", "vss"))

_PIN_RE = re.compile(r"^(?P<base>[^\[\]]+)(\[(?P<index>\d+)\])?$")


# Get the literal pin-name for bit `index` of `port`, under `schema`.
def pin_name(schema: NamingSchema, port: Port, index: int = 0) -> str:
    base = _BASE_NAMES[schema].get(port.name)
    if base is None:
        raise BindingError(f"Port `{port.name}` has no pin name in schema {schema.name}")
    if not 0 <= index < port.width:
        msg = f"Bit {index} out of range for port `{port.name}` of width {port.width}"
        raise BindingError(msg)
    if port.kind == PortKind.Scalar:
        return base
    return f"{base}[{index}]"


def connection_order(io: Bundle) -> Iterator[Tuple[Port, int]]:
    """
    # Connection Order
    Yields every (port, bit-index) of the macro interface exactly once:
    address bits, write-enable, write-mask bits, data-in/ data-out bit-pairs,
    then `vss`, `vdd`, and `clk`.
    Order carries no meaning beyond making netlists deterministic.
    """

    def get(name: str) -> Port:
        port = io.port(name)
        if port is None:
            raise BindingError(f"Interface `{io.name}` has no port `{name}`")
        return port

    addr, din, dout, wmask = get("addr"), get("din"), get("dout"), get("wmask")
    for i in range(addr.width):
        yield addr, i
    yield get("we"), 0
    for i in range(wmask.width):
        yield wmask, i
    if din.width != dout.width:
        raise BindingError("Mismatched `din` and `dout` widths")
    for i in range(din.width):
        yield din, i
        yield dout, i
    yield get("vss"), 0
    yield get("vdd"), 0
    yield get("clk"), 0


# Map each pin-name of interface `io` to its [PortBit], in connection order.
def pin_map(schema: NamingSchema, io: Bundle) -> Dict[str, PortBit]:
    return {pin_name(schema, port, i): port.bit(i) for port, i in connection_order(io)}


# Translate pin-name `pin` from schema `src` to schema `dst`.
# Returns `None` for pins outside the macro's fixed port set,
# including indexed scalar names such as `WE[0]` and bare array names such as `DIN`.
def remap(pin: str, src: NamingSchema, dst: NamingSchema) -> Optional[str]:
    m = _PIN_RE.match(pin)
    if m is None:
        return None
    port = _PORT_NAMES[src].get(m.group("base"))
    if port is None:
        return None
    index = m.group("index")
    if (index is None) != (port in _SCALAR_PORTS):
        return None
    base = _BASE_NAMES[dst][port]
    if index is None:
        return base
    return f"{base}[{index}]"
