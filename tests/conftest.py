#
# # Shared Test Fixtures
#

from pathlib import Path
from typing import Dict, List

import pytest

from sram_macro import SramMacro


# Create the as-authored pin-list of a macro's subcircuit
def raw_pins(macro: SramMacro) -> List[str]:
    pins = [f"ADDR[{i}]" for i in range(macro.addr_width())]
    pins += [f"DIN[{i}]" for i in range(macro.width)]
    pins += [f"DOUT[{i}]" for i in range(macro.width)]
    pins += [f"WMASK[{i}]" for i in range(macro.mask_width)]
    pins += ["WE", "CLK", "VDD", "VSS"]
    return pins


# Write a SPICE netlist defining each of `subckts`, with their pins split across continuation lines
def write_spice(path: Path, subckts: Dict[str, List[str]]) -> Path:
    lines = ["* Generated by the sram_macro test suite", ""]
    for name, pins in subckts.items():
        lines.append(f".subckt {name}")
        for i in range(0, len(pins), 8):
            lines.append("+ " + " ".join(pins[i : i + 8]))
        lines.append("* body")
        lines.append(f"R0 {pins[0]} {pins[-1]} 1k" if pins else "R0 a b 1k")
        lines.append(f".ends {name}")
        lines.append("")
    path.write_text("\n".join(lines))
    return path


def sram_512x64m4w8(netlist_path: Path) -> SramMacro:
    return SramMacro(
        width=64, depth=512, mask_width=8, mux_ratio=4, netlist_path=netlist_path,
    )


@pytest.fixture
def macro(tmp_path: Path) -> SramMacro:
    """# The 512x64m4w8 macro, with a netlist defining its subcircuit"""
    path = tmp_path / "schematic.pex.spice"
    macro = sram_512x64m4w8(path)
    write_spice(path, {macro.subcircuit_name(): raw_pins(macro)})
    return macro
