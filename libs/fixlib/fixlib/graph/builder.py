"""Build a constant graph from a parsed program by inferring and binding formats."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator

from fixlib.binding.binder import DynamicTypeBinder, default_binder
from fixlib.binding.values import FixedValue
from fixlib.config import FixConfig, load_config
from fixlib.core.errors import EmptyInputError, FixError
from fixlib.core.format import FormatDescriptor
from fixlib.core.inference import infer_format
from fixlib.diagnostics.collector import DiagnosticCollector
from fixlib.graph.nodes import ConstantNode, Graph
from fixlib.parser.ast_nodes import ConstDeclNode, ExplicitFormatNode, FormatNode, ProgramNode
from fixlib.parser.expressions import ArrayLiteral, ExprEvalError, ExprNode, Identifier, evaluate_expr
from fixlib.parser.parser import parse

logger = logging.getLogger(__name__)


def _identifiers(expr: ExprNode) -> Iterator[Identifier]:
    """Yield every identifier referenced by *expr*."""
    if isinstance(expr, Identifier):
        yield expr
        return
    for f in dataclasses.fields(expr):
        child = getattr(expr, f.name)
        if isinstance(child, ExprNode):
            yield from _identifiers(child)
        elif isinstance(child, tuple):
            for item in child:
                if isinstance(item, ExprNode):
                    yield from _identifiers(item)


class GraphBuilder:
    """Turns ``const`` declarations into :class:`ConstantNode` objects.

    Each declaration either carries a ``within`` tolerance, in which case its
    format is inferred from its samples, or an explicit format (``sfix<I,F>``,
    ``ufix<I,F>`` or a registry preset). A failing declaration is reported to
    the diagnostic collector and skipped; later declarations still build.
    """

    def __init__(
        self,
        binder: DynamicTypeBinder | None = None,
        config: FixConfig | None = None,
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        if binder is None:
            binder = default_binder() if config is None else DynamicTypeBinder.from_config(config)
        self._config = config if config is not None else load_config()
        self._binder = binder
        self._diag = diagnostics or DiagnosticCollector()

    @property
    def diagnostics(self) -> DiagnosticCollector:
        return self._diag

    def build(self, program: ProgramNode) -> Graph:
        graph = Graph(program.name)
        for decl in program.statements:
            if decl.name in graph:
                self._diag.error(f"Duplicate constant declaration {decl.name}", decl.location)
                continue
            try:
                graph.add(self.build_constant(decl, graph))
            except FixError as e:
                self._diag.report(e, decl.location)
        logger.info("Built graph %s with %d constants", program.name or "<anonymous>", len(graph))
        return graph

    def build_constant(self, decl: ConstDeclNode, graph: Graph) -> ConstantNode:
        """Evaluate one declaration against the constants already in *graph*.

        Raises:
            FixError: If the declaration cannot be evaluated, inferred or bound.
        """
        if decl.format is not None and decl.tolerance is not None:
            raise FixError(f"Constant {decl.name} cannot have both an explicit format and a tolerance")
        if decl.format is None and decl.tolerance is None:
            raise FixError(f"Constant {decl.name} needs an explicit format or a 'within' tolerance")

        source = graph.get(decl.value.name) if isinstance(decl.value, Identifier) else None
        if source is not None:
            samples = list(source.unbound())
            scalar = source.scalar
        elif isinstance(decl.value, ArrayLiteral):
            samples = [self._evaluate(e, graph) for e in decl.value.elements]
            scalar = False
        else:
            samples = [self._evaluate(decl.value, graph)]
            scalar = True
        if not samples:
            raise EmptyInputError(f"Constant {decl.name} has an empty sample list", decl.value.location)

        tolerance: float | None = None
        if decl.tolerance is not None:
            tolerance = self._evaluate(decl.tolerance, graph)
            descriptor = infer_format(
                samples,
                tolerance,
                max_fractional_bits=self._config.max_fractional_bits,
            )
        else:
            descriptor = self._resolve_format(decl.format)

        values: tuple[FixedValue, ...]
        if source is not None and decl.tolerance is None:
            values = tuple(self._binder.reformat(v, descriptor) for v in source.values)
        else:
            values = self._binder.bind_all(descriptor, samples)

        logger.debug("Constant %s: %s x%d", decl.name, descriptor, len(values))
        return ConstantNode(
            name=decl.name,
            format=descriptor,
            values=values,
            scalar=scalar,
            tolerance=tolerance,
            location=decl.location,
        )

    def _resolve_format(self, node: FormatNode) -> FormatDescriptor:
        if isinstance(node, ExplicitFormatNode):
            return FormatDescriptor(node.signed, node.integer_bits, node.fractional_bits)
        descriptor = self._config.preset(node.name)
        if descriptor is None:
            raise FixError(f"Unknown format preset {node.name}", node.location)
        return descriptor

    def _evaluate(self, expr: ExprNode, graph: Graph) -> float:
        env: dict[str, float] = {}
        for ident in _identifiers(expr):
            node = graph.get(ident.name)
            if node is None:
                continue
            if not node.scalar:
                raise ExprEvalError(
                    f"Constant {ident.name} is a sample list and cannot be used in an expression",
                    ident.location,
                )
            env[ident.name] = float(node.value)
        return evaluate_expr(expr, env)


def compile_source(
    source: str,
    filename: str = "<string>",
    *,
    binder: DynamicTypeBinder | None = None,
    config: FixConfig | None = None,
) -> tuple[Graph, DiagnosticCollector]:
    """Parse *source* and build its constant graph.

    Returns:
        A ``(graph, diagnostics)`` tuple. The graph holds every declaration
        that built successfully.
    """
    program, diag = parse(source, filename)
    graph = GraphBuilder(binder, config, diag).build(program)
    return graph, diag
