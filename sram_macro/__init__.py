__version__ = "0.1.0.dev0"


from .error import *
from .bundle import *
from .schema import NamingSchema, pin_name, pin_map, remap, connection_order
from .macro import SramMacro
from .netlist import Subckt, load_subcircuit, convert_schema
from .cell import BoundCell
from .binder import bind
from .library import Library
from .context import Sky130Context
