#
# # Interface Binding Tests
#

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from sram_macro import (
    BindingError,
    BoundCell,
    NamingSchema,
    NetlistLoadError,
    PortBit,
    SramMacro,
    bind,
)

from conftest import raw_pins, sram_512x64m4w8, write_spice


# Expected pins of the 512x64m4w8 macro, per schema
def expected_pins(schema: NamingSchema) -> set:
    pins = [f"ADDR[{i}]" for i in range(9)]
    pins += ["WE"] + [f"WMASK[{i}]" for i in range(8)]
    pins += [f"DIN[{i}]" for i in range(64)] + [f"DOUT[{i}]" for i in range(64)]
    pins += ["VSS", "VDD", "CLK"]
    if schema == NamingSchema.PdkNormalized:
        pins = [p.lower() for p in pins]
    return set(pins)


def test_bind_raw(macro: SramMacro) -> None:
    cell = bind(macro, NamingSchema.RawElectrical)
    assert isinstance(cell, BoundCell)
    assert cell.name == "sram22_512x64m4w8"
    assert cell.schema == NamingSchema.RawElectrical
    assert cell.num_connections() == 149
    assert cell.pins() == expected_pins(NamingSchema.RawElectrical)
    assert cell.connections["ADDR[8]"] == PortBit(port="addr", index=8)
    assert cell.connections["DOUT[63]"] == PortBit(port="dout", index=63)
    assert cell.connections["WE"] == PortBit(port="we", index=0)
    assert cell.is_complete()
    assert cell.unconnected() == []


def test_bind_pdk(macro: SramMacro) -> None:
    cell = bind(macro, NamingSchema.PdkNormalized)
    assert cell.schema == NamingSchema.PdkNormalized
    assert cell.subckt.schema == NamingSchema.PdkNormalized
    assert cell.num_connections() == 149
    assert cell.pins() == expected_pins(NamingSchema.PdkNormalized)
    assert cell.connections["wmask[7]"] == PortBit(port="wmask", index=7)
    assert cell.connections["vss"] == PortBit(port="vss", index=0)
    assert cell.is_complete()


def test_bind_default_schema(macro: SramMacro) -> None:
    assert bind(macro).schema == NamingSchema.RawElectrical


def test_bind_is_deterministic(macro: SramMacro) -> None:
    for schema in NamingSchema:
        a, b = bind(macro, schema), bind(macro, schema)
        assert a == b
        assert a is not b
        assert a.connections is not b.connections


def test_connection_counts(tmp_path: Path) -> None:
    params = [(1, 1, 1), (8, 2, 1), (16, 16, 4), (32, 64, 32), (72, 128, 9)]
    for width, depth, mask_width in params:
        path = tmp_path / f"sram_{width}_{depth}_{mask_width}.spice"
        macro = SramMacro(
            width=width, depth=depth, mask_width=mask_width, mux_ratio=2, netlist_path=path
        )
        write_spice(path, {macro.subcircuit_name(): raw_pins(macro)})
        expected = macro.addr_width() + width + 1 + mask_width + 1 + width + 1 + 1
        for schema in NamingSchema:
            cell = bind(macro, schema)
            assert cell.num_connections() == expected
            assert len(cell.pins()) == expected


def test_schema_round_trip(macro: SramMacro) -> None:
    raw = bind(macro, NamingSchema.RawElectrical)
    pdk = raw.convert(NamingSchema.PdkNormalized)
    assert pdk.connections == bind(macro, NamingSchema.PdkNormalized).connections
    back = pdk.convert(NamingSchema.RawElectrical)
    assert back.connections == raw.connections
    assert back == raw


def test_missing_subcircuit(tmp_path: Path) -> None:
    path = tmp_path / "other.spice"
    macro = sram_512x64m4w8(path)
    write_spice(path, {"sram22_256x64m4w8": raw_pins(macro)})
    for schema in NamingSchema:
        with pytest.raises(NetlistLoadError):
            bind(macro, schema)


def test_missing_netlist(tmp_path: Path) -> None:
    macro = sram_512x64m4w8(tmp_path / "does" / "not" / "exist.spice")
    with pytest.raises(NetlistLoadError):
        bind(macro)


def test_missing_pin(tmp_path: Path) -> None:
    path = tmp_path / "partial.spice"
    macro = sram_512x64m4w8(path)
    pins = [p for p in raw_pins(macro) if p != "WMASK[7]"]
    write_spice(path, {macro.subcircuit_name(): pins})
    for schema in NamingSchema:
        with pytest.raises(NetlistLoadError):
            bind(macro, schema)


def test_lower_case_netlist_is_rejected(tmp_path: Path) -> None:
    # Netlists are authored in the raw schema, even when bound to the PDK's
    path = tmp_path / "lower.spice"
    macro = sram_512x64m4w8(path)
    write_spice(path, {macro.subcircuit_name(): [p.lower() for p in raw_pins(macro)]})
    with pytest.raises(NetlistLoadError):
        bind(macro, NamingSchema.PdkNormalized)


def test_extra_pins(tmp_path: Path) -> None:
    path = tmp_path / "extra.spice"
    macro = sram_512x64m4w8(path)
    write_spice(path, {macro.subcircuit_name(): ["VNB"] + raw_pins(macro) + ["VPB"]})
    cell = bind(macro, NamingSchema.PdkNormalized)
    assert cell.num_connections() == 149
    assert cell.unconnected() == ["VNB", "VPB"]


def test_connect_violations(macro: SramMacro) -> None:
    cell = bind(macro)
    # Pin already connected
    with pytest.raises(BindingError):
        cell.connect("WE", PortBit(port="we", index=0))

    empty = BoundCell(name=cell.name, io=cell.io, subckt=cell.subckt, schema=cell.schema)
    # Bit outside its port's width
    with pytest.raises(BindingError):
        empty.connect("ADDR[0]", PortBit(port="addr", index=9))
    # Port not in the interface
    with pytest.raises(BindingError):
        empty.connect("ADDR[0]", PortBit(port="reset", index=0))
    # Pin not on the subcircuit
    with pytest.raises(BindingError):
        empty.connect("ADDR[9]", PortBit(port="addr", index=0))
    # Bit already bound to another pin
    empty.connect("ADDR[0]", PortBit(port="addr", index=0))
    with pytest.raises(BindingError):
        empty.connect("ADDR[1]", PortBit(port="addr", index=0))
    assert empty.num_connections() == 1
    assert not empty.is_complete()


def test_schema_round_trip_with_extra_pins(tmp_path: Path) -> None:
    # Extra pins resembling interface names keep their names in both directions
    path = tmp_path / "lookalikes.spice"
    macro = SramMacro(width=8, depth=16, mask_width=2, mux_ratio=4, netlist_path=path)
    extra = ["din", "DIN", "WE[0]", "VNB"]
    write_spice(path, {macro.subcircuit_name(): raw_pins(macro) + extra})
    raw = bind(macro, NamingSchema.RawElectrical)
    pdk = raw.convert(NamingSchema.PdkNormalized)
    assert pdk.unconnected() == extra
    back = pdk.convert(NamingSchema.RawElectrical)
    assert back.subckt.pins == raw.subckt.pins
    assert back == raw


def test_parallel_binds(tmp_path: Path) -> None:
    macros = []
    for width, depth in [(32, 256), (64, 512), (16, 64), (8, 1024)]:
        path = tmp_path / f"sram_{width}x{depth}.spice"
        macro = SramMacro(width=width, depth=depth, mask_width=4, mux_ratio=4, netlist_path=path)
        write_spice(path, {macro.subcircuit_name(): raw_pins(macro)})
        macros.append(macro)
    jobs = [(m, s) for m in macros for s in NamingSchema]

    serial = [bind(m, s) for m, s in jobs]
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(lambda job: bind(*job), jobs))
    assert parallel == serial
    # Each call owns its result
    for a, b in zip(parallel, serial):
        assert a is not b
        assert a.connections is not b.connections
