"""Execution order composition for standalone test runs.

Given a target test, the resolver composes the minimal ordered list of
blocks needed to run it alone: ambient blocks declared before the
target, its transitive dependencies in dependency-first order, and
the target itself.

Resolution passes through the following states, any failure aborting
the remaining ones without a partial result:

    unresolved -> cycle-checked -> ambient-collected
        -> dependencies-resolved -> finalized
"""

from typing import TYPE_CHECKING

from resty_blocks.errors import ErrorKind
from resty_blocks.schema import Failure, Resolution

from .graph import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

if TYPE_CHECKING:
    from resty_blocks.schema import Block


class DependencyResolver:
    """Resolver of execution orders over a snapshot of blocks.

    The resolver keeps no state between calls: every call to `resolve`
    works on the same immutable snapshot and returns a fresh result.
    """

    def __init__(self, blocks: 'Iterable[Block]', *, strict: bool = False) -> None:
        """Initialize the resolver.

        Args:
            blocks: Classified blocks in document order.
            strict: Whether to raise on duplicate test names.

        Raises:
            DocumentError: On a duplicate test name in strict mode.
        """
        self.graph = DependencyGraph(blocks, strict=strict)

    @property
    def blocks(self) -> tuple['Block', ...]:
        """Snapshot of all blocks in document order."""
        return self.graph.blocks

    def resolve(self, target: str) -> Resolution:
        """Resolve the execution order for a test.

        Args:
            target: Name of the test to run.

        Returns:
            Resolution with ambient blocks first (in document order),
            dependencies next (each at most once, never before anything
            it depends on) and the target last; or a resolution carrying
            a `NOT_FOUND`, `CIRCULAR_DEPENDENCY` or `MISSING_DEPENDENCY`
            failure.
        """
        if target not in self.graph:
            return Resolution.fail(target, ErrorKind.NOT_FOUND, name=target)

        if cycle := self.graph.detect_cycle(target):
            return Resolution.fail(target, ErrorKind.CIRCULAR_DEPENDENCY, name=target, cycle=cycle)

        ambient = self.collect_ambient(target)

        dependencies = self.collect_dependencies(target)
        if isinstance(dependencies, Failure):
            return Resolution(target=target, failure=dependencies)

        return Resolution(
            target=target,
            blocks=(*ambient, *dependencies, self.blocks[self.graph.position(target)]),
        )

    def collect_ambient(self, target: str) -> tuple['Block', ...]:
        """Return ambient blocks declared before a test.

        Variables and include blocks declared after the target are
        never collected, even if they precede its dependencies.

        Args:
            target: Name of an existing test.

        Returns:
            Ambient blocks in document order.
        """
        position = self.graph.position(target)

        return tuple(
            block
            for block in self.blocks[:position]
            if block.is_ambient
        )

    def collect_dependencies(self, target: str) -> tuple['Block', ...] | Failure:
        """Return the transitive dependencies of a test.

        Walks `requires` depth-first with an explicit stack: the
        dependencies of every required test are placed before the test
        itself, and a test already placed is skipped. The graph must be
        acyclic from `target`.

        Args:
            target: Name of an existing test.

        Returns:
            Dependency blocks without the target, or a
            `MISSING_DEPENDENCY` failure naming the first absent test.
        """
        order: list[Block] = []
        placed: set[str] = set()

        pending: list[tuple[str, Iterator[str]]] = [
            (target, iter(self.graph.requires(target))),
        ]

        while pending:
            parent, requires = pending[-1]
            name = next(requires, None)

            if name is None:
                pending.pop()
                if pending:
                    order.append(self.blocks[self.graph.position(parent)])
                    placed.add(parent)
                continue

            if name in placed:
                continue

            if name not in self.graph:
                return Failure(
                    kind=ErrorKind.MISSING_DEPENDENCY,
                    name=name,
                    required_by=parent,
                )

            pending.append((name, iter(self.graph.requires(name))))

        return tuple(order)

    def validate_all(self) -> Failure | None:
        """Validate dependencies of every test in the document.

        Missing dependencies are checked for all tests first, then
        cycles are searched from every test.

        Returns:
            The first failure found, or `None` if all tests resolve.
        """
        for name in self.graph.names:
            for required in self.graph.requires(name):
                if required not in self.graph:
                    return Failure(
                        kind=ErrorKind.MISSING_DEPENDENCY,
                        name=required,
                        required_by=name,
                    )

        for name in self.graph.names:
            if cycle := self.graph.detect_cycle(name):
                return Failure(kind=ErrorKind.CIRCULAR_DEPENDENCY, name=name, cycle=cycle)

        return None
