#
# # Cell Library Module
#

from typing import Dict, List
from dataclasses import field

from pydantic.dataclasses import dataclass

# Local imports
from .cell import BoundCell
from .error import BindingError
from .netlist import Subckt


@dataclass
class Library:
    """
    # # Cell Library
    #
    # A named collection of bound macro cells, keyed by cell name.
    #
    """

    name: str  # Library Name
    cells: Dict[str, BoundCell] = field(default_factory=dict)

    def add_cell(self, cell: BoundCell) -> BoundCell:
        """# Add a [BoundCell]"""
        if not isinstance(cell, BoundCell):
            raise TypeError(f"Library `{self.name}` cannot hold {type(cell).__name__}")
        if cell.name in self.cells:
            raise BindingError(f"Library `{self.name}` already has a cell `{cell.name}`")
        self.cells[cell.name] = cell
        return cell

    # Subcircuits instantiated by our cells, in cell-insertion order
    def subckts(self) -> List[Subckt]:
        return [cell.subckt for cell in self.cells.values()]
