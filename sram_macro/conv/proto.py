#
# # VLSIR Export
#
# Converts [BoundCell]s and [Library]s to `vlsir.circuit` schema Packages,
# from which `vlsirtools` writes SPICE and other text netlists.
#
# Each cell's subcircuit becomes an `ExternalModule`, defined by its source netlist.
# Each cell becomes a wrapper `Module`, with the macro's logical IO as its ports,
# and a single instance of the subcircuit.
# Text netlists `.include` each source netlist, so that the subcircuits they instantiate are defined.
#

import logging
from pathlib import Path
from typing import IO, Iterable, List, Union

import vlsir.circuit_pb2 as vckt
import vlsir.utils_pb2 as vutils
import vlsirtools

# Local imports
from ..bundle import PortDir, PortKind
from ..cell import BoundCell
from ..library import Library
from ..netlist import Subckt

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    PortDir.Input: vckt.Port.INPUT,
    PortDir.Output: vckt.Port.OUTPUT,
    PortDir.InOut: vckt.Port.INOUT,
}

# Name of the subcircuit instance within each wrapper module
INSTANCE_NAME = "macro"


# Name of the wrapper module exported for `cell`
def wrapper_name(cell: BoundCell) -> str:
    return f"{cell.name}_wrapper"


def to_proto(src: Union[Library, BoundCell], domain: str = "sram_macro") -> vckt.Package:
    """# Export a [Library], or a single [BoundCell], to a `vlsir.circuit.Package`"""
    lib = _as_library(src)
    pkg = vckt.Package(domain=domain)
    for subckt in lib.subckts():
        pkg.ext_modules.append(export_subckt(subckt, domain))
    for cell in lib.cells.values():
        pkg.modules.append(export_cell(cell, domain))
    logger.debug("Exported %d cells to VLSIR package %s", len(lib.cells), domain)
    return pkg


# Export a [Subckt] as an `ExternalModule`, with one scalar inout port per pin
def export_subckt(subckt: Subckt, domain: str) -> vckt.ExternalModule:
    return vckt.ExternalModule(
        name=vutils.QualifiedName(domain=domain, name=subckt.name),
        ports=[vckt.Port(signal=pin, direction=vckt.Port.INOUT) for pin in subckt.pins],
        signals=[vckt.Signal(name=pin, width=1) for pin in subckt.pins],
    )


def export_cell(cell: BoundCell, domain: str) -> vckt.Module:
    """
    # Export a [BoundCell] to its wrapper `Module`
    Connects every subcircuit pin, in definition order.
    Pins outside the macro's port-set are tied to their own floating signals.
    """
    module = vckt.Module(name=wrapper_name(cell))
    for port in cell.io.ports:
        module.signals.append(vckt.Signal(name=port.name, width=port.width))
        module.ports.append(vckt.Port(signal=port.name, direction=_DIRECTIONS[port.direction]))

    inst = vckt.Instance(
        name=INSTANCE_NAME,
        module=vutils.Reference(
            external=vutils.QualifiedName(domain=domain, name=cell.subckt.name)
        ),
    )
    num_floating = 0
    for pin in cell.subckt.pins:
        bit = cell.connections.get(pin)
        if bit is None:
            signal = f"_nc{num_floating}"
            num_floating += 1
            module.signals.append(vckt.Signal(name=signal, width=1))
            target = vckt.ConnectionTarget(sig=signal)
        elif cell.io.port(bit.port).kind == PortKind.Scalar:
            target = vckt.ConnectionTarget(sig=bit.port)
        else:
            target = vckt.ConnectionTarget(
                slice=vckt.Slice(signal=bit.port, top=bit.index, bot=bit.index)
            )
        inst.connections.append(vckt.Connection(portname=pin, target=target))
    module.instances.append(inst)
    return module


# Formats which accept SPICE `.include` statements
SPICE_FORMATS = ("spice", "ngspice", "xyce")


# Wrap a single [BoundCell] in a [Library]
def _as_library(src: Union[Library, BoundCell]) -> Library:
    if isinstance(src, Library):
        return src
    if isinstance(src, BoundCell):
        lib = Library(name=src.name)
        lib.add_cell(src)
        return lib
    raise TypeError(f"Cannot export {type(src).__name__} to VLSIR")


# Distinct source netlists of `src`'s subcircuits, in cell-insertion order
def include_paths(src: Union[Library, BoundCell]) -> List[Path]:
    paths: List[Path] = []
    for subckt in _as_library(src).subckts():
        if subckt.path is not None and subckt.path not in paths:
            paths.append(subckt.path)
    return paths


def netlist(
    src: Union[Library, BoundCell, vckt.Package],
    dest: IO,
    fmt: str = "spice",
    includes: Iterable[Path] = (),
) -> None:
    """
    # Write a text netlist of `src` to `dest`, in format `fmt`
    SPICE-family netlists `.include` the source netlist of each subcircuit,
    followed by any additional `includes`.
    Packages carry no source paths, so netlisting one includes only `includes`.
    """
    if isinstance(src, vckt.Package):
        pkg, paths = src, []
    else:
        pkg, paths = to_proto(src), include_paths(src)
    paths += [Path(p) for p in includes if Path(p) not in paths]

    if fmt in SPICE_FORMATS:
        dest.write("* sram_macro netlist\n")
        for path in paths:
            dest.write(f'.include "{path}"\n')
        dest.write("\n")
    elif paths:
        raise ValueError(f"Cannot `.include` netlists in format {fmt}")
    vlsirtools.netlist(pkg=pkg, dest=dest, fmt=fmt)
