#
# # SKY130 Context
#
# Environment-derived configuration for exporting macros against the SKY130 PDK.
#

import logging
import os
from dataclasses import field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import vlsir.circuit_pb2 as vckt
from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

# Local imports
from .binder import bind
from .conv import netlist, to_proto
from .error import ConfigError
from .macro import SramMacro
from .schema import NamingSchema

logger = logging.getLogger(__name__)

# Open PDK, needed for standard cells
OPEN_PDK_ROOT_VAR = "SKY130_OPEN_PDK_ROOT"
# Commercial PDK, needed for device models
COMMERCIAL_PDK_ROOT_VAR = "SKY130_COMMERCIAL_PDK_ROOT"


@dataclass(config=ConfigDict(arbitrary_types_allowed=True))
class Sky130Context:
    """
    # SKY130 Context
    PDK installation roots, plus a cache of exported macros.
    The roots are carried for callers assembling simulation decks, e.g. locating
    device models and standard cells. Exported packages and netlists do not reference them.
    Exports are cached per (macro, schema). The cache is not thread-safe;
    share a context between threads only with external locking.
    """

    open_pdk_root: Path
    commercial_pdk_root: Path
    cache: Dict[Tuple[SramMacro, NamingSchema], vckt.Package] = field(
        default_factory=dict, repr=False, compare=False
    )

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Sky130Context":
        """# Create a [Sky130Context] from the environment variables naming both PDK roots"""
        if environ is None:
            environ = os.environ
        roots = []
        for var in (OPEN_PDK_ROOT_VAR, COMMERCIAL_PDK_ROOT_VAR):
            value = environ.get(var)
            if not value:
                raise ConfigError(f"The {var} environment variable must be set")
            roots.append(Path(value))
        return Sky130Context(open_pdk_root=roots[0], commercial_pdk_root=roots[1])

    def export(
        self, macro: SramMacro, schema: NamingSchema = NamingSchema.PdkNormalized
    ) -> vckt.Package:
        key = (macro, schema)
        if key not in self.cache:
            self.cache[key] = to_proto(bind(macro, schema), domain=f"sky130.{schema.value}")
        else:
            logger.debug("Using cached export of %s", macro.subcircuit_name())
        return self.cache[key]

    # Write a SPICE netlist of `macro` to `path`, creating its parent directories.
    # The netlist `.include`s the macro's own netlist, which defines its subcircuit.
    def write_netlist(
        self,
        macro: SramMacro,
        path: Path,
        schema: NamingSchema = NamingSchema.PdkNormalized,
    ) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pkg = self.export(macro, schema)
        with path.open("w") as f:
            netlist(pkg, f, fmt="spice", includes=[macro.netlist_path])
        logger.info("Wrote %s netlist to %s", macro.subcircuit_name(), path)
        return path
