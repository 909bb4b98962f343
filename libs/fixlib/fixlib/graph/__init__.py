"""fixlib graph subpackage (Layer 3 -- depends on binding, config, parser)."""

from fixlib.graph.builder import GraphBuilder, compile_source
from fixlib.graph.nodes import ConstantNode, Graph

__all__ = ["ConstantNode", "Graph", "GraphBuilder", "compile_source"]
