from .proto import to_proto, netlist, wrapper_name, include_paths
