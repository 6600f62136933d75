#
# # Error Types
#


class SramMacroError(Exception):
    """Base class for all errors raised by `sram_macro`"""


class InvalidParameter(SramMacroError):
    # Macro parameters violating a numeric invariant,
    # e.g. a non-power-of-two `depth`, or a `mask_width` which does not divide `width`.
    ...


class NetlistLoadError(SramMacroError):
    # The external netlist is missing, unreadable, or malformed,
    # lacks the requested subcircuit, or lacks a pin of the macro interface.
    ...


class BindingError(SramMacroError):
    # Internal contract violation while connecting pins:
    # a duplicate connection, or a bit outside its port's width.
    ...


class ConfigError(SramMacroError):
    # Missing or invalid environment configuration
    ...
