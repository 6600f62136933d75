#
# # Interface Binder
#
# Binds an [SramMacro]'s logical interface to the pins of its pre-generated subcircuit.
#

import logging

# Local imports
from .cell import BoundCell
from .macro import SramMacro
from .netlist import convert_schema, load_subcircuit
from .schema import NamingSchema, connection_order, pin_name

logger = logging.getLogger(__name__)


def bind(
    macro: SramMacro, schema: NamingSchema = NamingSchema.RawElectrical
) -> BoundCell:
    """
    # Bind
    Load `macro`'s subcircuit from its netlist, convert it to `schema`,
    and connect every bit of the macro's interface to the correspondingly named pin.

    Raises a [NetlistLoadError] if the netlist cannot be loaded,
    or lacks the subcircuit or any of its interface pins.
    Raises a [BindingError] on any duplicate or out-of-range connection.
    Either way no partially connected cell is returned.
    """
    name = macro.subcircuit_name()
    io = macro.io()

    subckt = load_subcircuit(macro.netlist_path, name)
    # Check the full port-set against the as-authored pins, then rename into `schema`
    subckt = convert_schema(subckt, schema, io=io)
    logger.debug("Binding %s under the %s schema", name, schema.name)

    cell = BoundCell(name=name, io=io, subckt=subckt, schema=schema)
    for port, index in connection_order(io):
        cell.connect(pin_name(schema, port, index), port.bit(index))

    logger.info(
        "Bound %s: %d connections, %d unconnected pins",
        name,
        cell.num_connections(),
        len(cell.unconnected()),
    )
    return cell
