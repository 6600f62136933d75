#
# # Netlist Store
#
# Loads subcircuit definitions from pre-generated SPICE netlists,
# and converts them between [NamingSchema]s.
#
# Only subcircuit headers are read: the subcircuit name and its ordered pin-list.
# Subcircuit bodies, which for extracted macros can run to millions of lines,
# are skipped over without being parsed.
#

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from pydantic.dataclasses import dataclass

# Local imports
from .bundle import Bundle
from .error import NetlistLoadError
from .schema import NamingSchema, pin_map, remap

logger = logging.getLogger(__name__)

# Inline comments: `$` or `;` at the start of a line or after whitespace, through end-of-line
_INLINE_COMMENT_RE = re.compile(r"(^|\s)[$;].*$")


@dataclass(frozen=True)
class Subckt:
    """
    # Subcircuit Handle
    The name and ordered pin-list of a subcircuit defined in an external netlist,
    tagged with the [NamingSchema] its pin-names follow.
    """

    # Subcircuit Name
    name: str
    # Pin names, in definition order
    pins: Tuple[str, ...]
    # Naming schema of `pins`
    schema: NamingSchema = NamingSchema.RawElectrical
    # Source netlist, if loaded from a file
    path: Optional[Path] = None

    def has_pin(self, pin: str) -> bool:
        return pin in self.pins

    # Assert that every pin in `pins` is defined.
    # Raises a [NetlistLoadError] naming all missing pins otherwise.
    def require(self, pins: Iterable[str]) -> None:
        defined = set(self.pins)
        missing = [p for p in pins if p not in defined]
        if missing:
            msg = f"Subcircuit `{self.name}` ({self.schema.name}) is missing pins {missing}"
            if self.path is not None:
                msg += f" in netlist {self.path}"
            raise NetlistLoadError(msg)


def load_subcircuit(path: Union[str, Path], name: str) -> Subckt:
    """
    # Load Subcircuit
    Load the subcircuit named `name` from the SPICE netlist at `path`.
    Name matching is exact and case-sensitive.
    Pins are returned as authored, i.e. in the [NamingSchema.RawElectrical] schema.
    Raises a [NetlistLoadError] if the file is unreadable or malformed,
    or does not define the subcircuit.
    """
    path = Path(path)
    logger.debug("Loading subcircuit %s from %s", name, path)
    try:
        with path.open("r", encoding="utf-8") as f:
            pins = _find_subckt(f, name, path)
    except OSError as e:
        raise NetlistLoadError(f"Failed to read netlist {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise NetlistLoadError(f"Netlist {path} is not valid UTF-8 text: {e}") from e

    if pins is None:
        raise NetlistLoadError(f"Netlist {path} does not define subcircuit `{name}`")
    if len(set(pins)) != len(pins):
        dups = sorted({p for p in pins if pins.count(p) > 1})
        raise NetlistLoadError(f"Subcircuit `{name}` in {path} has duplicate pins {dups}")
    logger.debug("Loaded subcircuit %s with %d pins", name, len(pins))
    return Subckt(name=name, pins=tuple(pins), path=path)


def convert_schema(
    subckt: Subckt, target: NamingSchema, io: Optional[Bundle] = None
) -> Subckt:
    """
    # Convert Schema
    Create a copy of `subckt` with each pin of the macro's fixed port-set renamed into `target`.
    Pins outside the fixed port-set keep their names.
    If `io` is provided, every pin of `io` must be present before conversion,
    or a [NetlistLoadError] is raised.
    """
    if io is not None:
        subckt.require(pin_map(subckt.schema, io).keys())
    if subckt.schema == target:
        return subckt

    pins = []
    for pin in subckt.pins:
        new = remap(pin, subckt.schema, target)
        pins.append(pin if new is None else new)
    if len(set(pins)) != len(pins):
        msg = f"Converting subcircuit `{subckt.name}` to {target.name} produces duplicate pins"
        raise NetlistLoadError(msg)
    return Subckt(name=subckt.name, pins=tuple(pins), schema=target, path=subckt.path)


# Join continuation lines, and drop comments (full-line and inline) and blank lines.
# Yields (line-number, text) pairs, numbered by the first physical line of each.
def _logical_lines(f: TextIO) -> Iterator[Tuple[int, str]]:
    start, parts = 0, []
    for num, raw in enumerate(f, start=1):
        line = _INLINE_COMMENT_RE.sub("", raw.strip()).strip()
        if not line or line.startswith("*"):
            continue
        if line.startswith("+"):
            if not parts:
                raise NetlistLoadError(f"Continuation line {num} follows no statement")
            parts.append(line[1:])
            continue
        if parts:
            yield start, " ".join(parts)
        start, parts = num, [line]
    if parts:
        yield start, " ".join(parts)


# Find the pins of subcircuit `name` in netlist `f`.
# Returns `None` if it is not defined.
def _find_subckt(f: TextIO, name: str, path: Path) -> Optional[List[str]]:
    depth = 0  # Subcircuit nesting depth
    pins: Optional[List[str]] = None
    found_at = 0  # Nesting depth of the target, once found
    for num, line in _logical_lines(f):
        tokens = line.split()
        keyword = tokens[0].lower()
        if keyword == ".subckt":
            if len(tokens) < 2:
                raise NetlistLoadError(f"{path}:{num}: `.subckt` statement without a name")
            depth += 1
            if pins is None and tokens[1] == name:
                pins = _header_pins(tokens[2:])
                found_at = depth
        elif keyword == ".ends":
            if depth == 0:
                raise NetlistLoadError(f"{path}:{num}: `.ends` without a matching `.subckt`")
            if pins is not None and depth == found_at:
                return pins
            depth -= 1
    if pins is not None:
        raise NetlistLoadError(f"{path}: subcircuit `{name}` is missing its `.ends`")
    return None


# Extract the pin-names from the tokens following a subcircuit name,
# stopping at the first parameter declaration.
def _header_pins(tokens: List[str]) -> List[str]:
    pins = []
    for tok in tokens:
        if "=" in tok or tok.lower() == "params:":
            break
        pins.append(tok)
    return pins
