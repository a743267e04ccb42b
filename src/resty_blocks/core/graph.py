"""Dependency graph over named test blocks.

The graph is implicit: nodes are test names and edges are entries of
the `requires` lists. It is built from a snapshot of blocks for every
resolution request and is never shared between documents.
"""

from typing import TYPE_CHECKING
from warnings import warn

from resty_blocks.errors import DocumentError, DuplicateTestWarning, ErrorContext

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

if TYPE_CHECKING:
    from resty_blocks.schema import Block


class DependencyGraph:
    """Index of test blocks by name.

    Only test blocks with a non-empty name become nodes. When a name
    is declared more than once the last declaration wins and a
    `DuplicateTestWarning` is emitted, or `DocumentError` is raised
    in strict mode.

    Attributes:
        blocks: Snapshot of all blocks in document order.
        strict: Whether duplicate names are rejected.
    """

    def __init__(self, blocks: 'Iterable[Block]', *, strict: bool = False) -> None:
        """Build the graph.

        Args:
            blocks: Classified blocks in document order.
            strict: Whether to raise on duplicate test names.

        Raises:
            DocumentError: On a duplicate test name in strict mode.
        """
        self.blocks = tuple(blocks)
        self.strict = strict

        self._nodes: dict[str, int] = {}

        for position, block in enumerate(self.blocks):
            name = block.test_name
            if not block.is_named_test or name is None:
                continue

            if name in self._nodes:
                self._emit_duplicate(name, block)

            self._nodes[name] = position

    def _emit_duplicate(self, name: str, block: 'Block') -> None:
        message = f'Test {name!r} is shadowing an earlier declaration'
        if self.strict:
            raise DocumentError(message, context=ErrorContext(
                line_num=block.start_line,
                test_name=name,
            ))

        warn(message, category=DuplicateTestWarning, stacklevel=3)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> 'Iterator[str]':
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def names(self) -> tuple[str, ...]:
        """Test names in the order of their effective declarations."""
        return tuple(sorted(self._nodes, key=self._nodes.__getitem__))

    def get(self, name: str) -> 'Block | None':
        """Return the block declaring a test, if any."""
        if (position := self._nodes.get(name)) is None:
            return None

        return self.blocks[position]

    def position(self, name: str) -> int:
        """Return the document position of a test block.

        Raises:
            KeyError: If the test does not exist.
        """
        return self._nodes[name]

    def requires(self, name: str) -> tuple[str, ...]:
        """Return the declared dependencies of a test.

        Unknown names have no dependencies.
        """
        if (block := self.get(name)) is None:
            return ()

        return block.requires

    def detect_cycle(self, start: str) -> tuple[str, ...] | None:
        """Find a circular dependency reachable from a test.

        Performs a depth-first traversal with an explicit stack, so the
        length of dependency chains is not bound by the interpreter
        recursion limit. Names on the active path are tracked apart from
        names whose dependencies are fully explored. Names absent from
        the graph are skipped.

        Args:
            start: Name of the test to start from.

        Returns:
            The cycle from the first occurrence of the repeated name to
            its repetition, inclusive (for example `('a', 'b', 'a')`),
            or `None` if the transitive closure is acyclic.
        """
        if start not in self._nodes:
            return None

        path = [start]
        active = {start}
        explored: set[str] = set()
        pending = [iter(self.requires(start))]

        while pending:
            name = next(pending[-1], None)

            if name is None:
                pending.pop()
                done = path.pop()
                active.discard(done)
                explored.add(done)
                continue

            if name in active:
                return (*path[path.index(name):], name)

            if name in explored or name not in self._nodes:
                continue

            path.append(name)
            active.add(name)
            pending.append(iter(self.requires(name)))

        return None
