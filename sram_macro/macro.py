#
# # SRAM Macro Parameters
#
# Defines [SramMacro], the immutable parameter-set of a pre-generated SRAM macro,
# and the quantities derived from it: address width, subcircuit name, and IO interface.
#

from pathlib import Path

from pydantic import TypeAdapter
from pydantic.dataclasses import dataclass

# Local imports
from .bundle import Bundle, Port, PortDir
from .error import InvalidParameter

# Family prefix of generated macro subcircuit names
FAMILY = "sram22"


@dataclass(frozen=True)
class SramMacro:
    """
    # SRAM Macro
    Parameters of a single SRAM macro, and a path to its pre-generated netlist.
    Equal parameters make equal (and equally-hashed) macros, suitable as cache keys.
    The netlist file is not accessed until the macro is bound.
    """

    # Number of data bits per word
    width: int
    # Number of words. Must be a power of two.
    depth: int
    # Number of write-mask segments. Must evenly divide `width`.
    mask_width: int
    # Column-mux ratio. Only affects the subcircuit name.
    mux_ratio: int
    # Path to the netlist defining the macro subcircuit
    netlist_path: Path

    def __post_init__(self):
        for field in ("width", "depth", "mask_width", "mux_ratio"):
            value = getattr(self, field)
            if value < 1:
                raise InvalidParameter(f"SramMacro `{field}` must be positive, got {value}")
        # Validate both derived quantities eagerly
        self.addr_width()
        self.subcircuit_name()

    # The width of the address port, in bits.
    def addr_width(self) -> int:
        if self.depth < 1 or self.depth & (self.depth - 1):
            msg = f"SramMacro depth must be a power of two, got {self.depth}"
            raise InvalidParameter(msg)
        return self.depth.bit_length() - 1

    # Width of each write-mask segment, in bits
    def mask_granularity(self) -> int:
        if self.width % self.mask_width:
            msg = f"SramMacro mask_width {self.mask_width} does not divide width {self.width}"
            raise InvalidParameter(msg)
        return self.width // self.mask_width

    # Name of the macro's subcircuit, e.g. `sram22_512x64m4w8`
    def subcircuit_name(self) -> str:
        return f"{FAMILY}_{self.depth}x{self.width}m{self.mux_ratio}w{self.mask_granularity()}"

    def io(self) -> Bundle:
        """# Create the macro's logical IO interface"""
        return Bundle(
            name="sram_macro",
            ports=(
                Port.array("addr", self.addr_width(), PortDir.Input),
                Port.array("din", self.width, PortDir.Input),
                Port.scalar("we", PortDir.Input),
                Port.array("wmask", self.mask_width, PortDir.Input),
                Port.scalar("clk", PortDir.Input),
                Port.array("dout", self.width, PortDir.Output),
                Port.scalar("vdd", PortDir.InOut),
                Port.scalar("vss", PortDir.InOut),
            ),
        )

    # Total number of interface pins, i.e. connections made when bound
    def num_pins(self) -> int:
        return self.addr_width() + 2 * self.width + self.mask_width + 4

    def to_json(self) -> str:
        return _adapter.dump_json(self).decode("utf-8")

    @staticmethod
    def from_json(text: str) -> "SramMacro":
        return _adapter.validate_json(text)


_adapter = TypeAdapter(SramMacro)
