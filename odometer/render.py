"""Render collaborators.

``Renderer`` is the small surface the odometer draws through. ``TextRenderer``
implements it with an in-memory node tree and produces rich ``Text``; the
CLI, the textual widget and the tests all draw with it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

from rich.text import Text

from .matrix import Role, RotatingColumn, StaticColumn, SymbolColumn
from .theme import PALETTE, Palette, style_for


def column_hints(column: SymbolColumn) -> tuple[str, ...]:
    """Styling hints for a column, e.g. ``("reel", "integer", "_1e2")``."""
    if column.role is Role.RADIX:
        return ("radix-mark",)
    if column.role is Role.DECIMAL_MARK:
        return ("decimal-mark",)
    hints = ("reel", "integer" if column.role is Role.INTEGER else "decimal")
    if column.magnitude is not None:
        hints += (f"_1e{column.magnitude}",)
    return hints


class Renderer(ABC):
    """Drawing primitives the odometer depends on.

    Nodes are opaque to the odometer. ``attach(None, child)`` attaches to the
    render target itself.
    """

    #: Offset distance of one symbol along a reel.
    symbol_extent: float = 1.0

    @abstractmethod
    def create_container(self, kind: str):
        """Create an empty container node."""

    @abstractmethod
    def create_symbol_node(self, column: SymbolColumn, hints: Sequence[str]):
        """Create a node showing ``column``."""

    @abstractmethod
    def attach(self, parent, child) -> None:
        """Append ``child`` under ``parent`` (the target when None)."""

    @abstractmethod
    def remove(self, node) -> None:
        """Detach ``node``; a node that is already gone is ignored."""

    @abstractmethod
    def set_offset(self, node, distance: float) -> None:
        """Scroll a reel node ``distance`` along its symbols."""

    def clear(self) -> None:
        """Drop every node under the target."""

    def show_error(self, message: str) -> None:
        """Replace the target's content with an error indicator."""

    def mark_exiting(self, node) -> None:
        """Flag a node that is about to be removed."""

    def set_text(self, node, text: str) -> None:
        """Relabel a mark node."""

    def set_currency_position(self, position: str) -> None:
        """Move the currency symbol to ``"start"`` or ``"end"``."""


@dataclass(eq=False)
class RenderNode:
    """A node of the text renderer's tree."""

    kind: str
    column: Optional[SymbolColumn] = None
    hints: tuple[str, ...] = ()
    text: str = ""
    offset: float = 0.0
    exiting: bool = False
    removed: bool = False
    parent: Optional["RenderNode"] = field(default=None, repr=False)
    children: list["RenderNode"] = field(default_factory=list, repr=False)

    @property
    def is_rolling(self) -> bool:
        column = self.column
        return isinstance(column, RotatingColumn) and column.is_animatable

    def symbol(self, extent: float = 1.0) -> str:
        """Symbol currently in view."""
        if isinstance(self.column, RotatingColumn):
            sequence = self.column.sequence
            index = int(round(self.offset / extent)) if extent else 0
            return sequence[max(0, min(index, len(sequence) - 1))]
        return self.text


class TextRenderer(Renderer):
    """Renderer backed by an in-memory tree, drawn as rich ``Text``.

    Args:
        palette: Colors for digits, marks and decorations.
        on_change: Called after every mutation (the widget refreshes here).
    """

    def __init__(
        self,
        palette: Palette = PALETTE,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.palette = palette
        self.on_change = on_change
        self.root = RenderNode("root")
        self.error: Optional[str] = None
        self.currency_position = "start"

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()

    # -- Renderer primitives ------------------------------------------------

    def create_container(self, kind: str) -> RenderNode:
        return RenderNode(kind)

    def create_symbol_node(self, column: SymbolColumn, hints: Sequence[str]) -> RenderNode:
        text = column.symbol if isinstance(column, StaticColumn) else ""
        return RenderNode("symbol", column=column, hints=tuple(hints), text=text)

    def attach(self, parent: Optional[RenderNode], child: RenderNode) -> None:
        parent = parent or self.root
        child.parent = parent
        child.removed = False
        parent.children.append(child)
        self._changed()

    def remove(self, node: RenderNode) -> None:
        if node.removed or node.parent is None:
            return
        siblings = node.parent.children
        if node in siblings:
            siblings.remove(node)
        node.removed = True
        node.parent = None
        self._changed()

    def set_offset(self, node: RenderNode, distance: float) -> None:
        if node.removed:
            return
        node.offset = distance
        self._changed()

    def clear(self) -> None:
        for node in self.root.children:
            self._detach_tree(node)
        self.root.children = []
        self.error = None
        self._changed()

    def show_error(self, message: str) -> None:
        self.clear()
        self.error = message
        self._changed()

    def mark_exiting(self, node: RenderNode) -> None:
        if node.removed:
            return
        node.exiting = True
        self._changed()

    def set_text(self, node: RenderNode, text: str) -> None:
        if node.removed:
            return
        node.text = text
        self._changed()

    def set_currency_position(self, position: str) -> None:
        self.currency_position = position
        self._changed()

    # -- Inspection -------------------------------------------------------

    def _detach_tree(self, node: RenderNode) -> None:
        node.removed = True
        node.parent = None
        for child in node.children:
            self._detach_tree(child)

    def _leaves(self, node: RenderNode) -> Iterator[RenderNode]:
        for child in node.children:
            if child.children or child.kind != "symbol":
                yield from self._leaves(child)
            else:
                yield child

    def visible_nodes(self) -> list[RenderNode]:
        """Leaf nodes in display order, currency placed per its position."""
        leaves = list(self._leaves(self.root))
        currency = [n for n in leaves if "currency" in n.hints]
        rest = [n for n in leaves if "currency" not in n.hints]
        if self.currency_position == "end":
            return rest + currency
        return currency + rest

    def reel_nodes(self) -> list[RenderNode]:
        """Nodes of the reels container (digits and marks only)."""
        return [n for n in self.visible_nodes() if "currency" not in n.hints and "number-sign" not in n.hints]

    def display_text(self) -> str:
        """Plain string of everything currently in view."""
        if self.error is not None:
            return self.error
        return "".join(n.symbol(self.symbol_extent) for n in self.visible_nodes())

    def _style(self, node: RenderNode) -> str:
        if node.exiting:
            return style_for("exiting", self.palette)
        if "currency" in node.hints:
            return style_for("currency", self.palette)
        if "number-sign" in node.hints:
            return style_for("sign", self.palette)
        if "radix-mark" in node.hints or "decimal-mark" in node.hints:
            return style_for("mark", self.palette)
        if node.is_rolling and node.offset < (len(node.column.sequence) - 1) * self.symbol_extent:
            return style_for("rolling", self.palette)
        return style_for("digit", self.palette)

    def render(self) -> Text:
        """Draw the current state as rich ``Text``."""
        if self.error is not None:
            return Text(self.error, style=style_for("error", self.palette))
        t = Text()
        for node in self.visible_nodes():
            t.append(node.symbol(self.symbol_extent), style=self._style(node))
        return t
