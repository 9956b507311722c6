"""
Lexical Scopes
==============

A Scope is one lexical binding frame. Frames form a parent-linked chain
owned by a single Parser: the innermost frame is the parser's current
scope and each child keeps a plain reference to its enclosing frame.

Resolution walks from the innermost frame outward, so a name resolves to
its nearest enclosing declaration. Names bound nowhere fall back to the
symbol table: first an entry with exactly that id (keywords, constants),
then the generic "(name)" carrier. Undeclared names are therefore free
variables, not errors; a grammar that wants stricter rules raises from
its own denotations.

Every lookup returns a fresh copy, never the bound symbol or the table
template.
"""

from typing import TYPE_CHECKING, Iterator, Optional

from tdop.errors import DuplicateDeclarationError, SourceLocation
from tdop.grammar import NAME_ID
from tdop.symbol import Arity, Symbol, nud_itself

if TYPE_CHECKING:
    from tdop.grammar import SymbolTable


class Scope:
    """
    A lexical binding frame.

    Attributes:
        bindings: Names declared or reserved in this frame
        parent: Enclosing frame, or None for the root scope
        filename: Source filename used for declaration errors
    """

    def __init__(self, parent: Optional["Scope"] = None, filename: str = "<input>"):
        self.bindings: dict[str, Symbol] = {}
        self.parent = parent
        self.filename = filename

    def __repr__(self) -> str:
        return f"Scope(depth={self.depth}, names={sorted(self.bindings)})"

    @property
    def depth(self) -> int:
        """Number of enclosing frames (0 for the root scope)."""
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return depth

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def names(self) -> Iterator[str]:
        """Yield every name visible from this frame, innermost first."""
        seen = set()
        scope: Optional[Scope] = self
        while scope is not None:
            for name in scope.bindings:
                if name not in seen:
                    seen.add(name)
                    yield name
            scope = scope.parent

    # =========================================================================
    # Declaration
    # =========================================================================

    def reserve(self, symbol: Symbol) -> None:
        """
        Mark a word as taken in this frame.

        Used for keywords that begin statements and for constants, so the
        word cannot be declared as a variable in the same frame. Reserving
        an already bound name in this frame is a no-op; reserving a name
        bound in an outer frame shadows it here. Operator and literal
        occurrences are never bound.
        """
        if symbol.arity in (Arity.OPERATOR, Arity.LITERAL):
            return

        name = symbol.name
        if name in self.bindings:
            return

        bound = symbol.instantiate()
        bound.first = bound.second = bound.third = None
        bound.reserved = True
        bound.scope = self
        self.bindings[name] = bound
        symbol.reserved = True

    def define(self, symbol: Symbol) -> Symbol:
        """
        Declare a variable name in this frame.

        The occurrence is turned into a plain name (it stands for itself,
        never continues an expression and never begins a statement).

        Raises:
            DuplicateDeclarationError: If the name is already bound in
                this very frame (outer frames may be shadowed)
        """
        name = symbol.name
        existing = self.bindings.get(name)
        if existing is not None:
            raise DuplicateDeclarationError(
                name,
                location=self._location(symbol),
                original_location=self._location(existing) if existing.line_number else None,
            )

        symbol.reserved = False
        symbol.nud = nud_itself
        symbol.led = None
        symbol.std = None
        symbol.lbp = 0
        symbol.arity = Arity.NAME
        symbol.scope = self

        bound = symbol.instantiate()
        bound.first = bound.second = bound.third = None
        self.bindings[name] = bound
        return symbol

    # =========================================================================
    # Resolution
    # =========================================================================

    def find(self, name: str, symbol_table: "SymbolTable") -> Symbol:
        """
        Resolve a name to a fresh symbol occurrence.

        Args:
            name: Identifier text
            symbol_table: The language's table, used when no frame binds
                the name

        Returns:
            A copy of the nearest binding, of the table entry with this
            exact id, or of the generic "(name)" entry
        """
        scope: Optional[Scope] = self
        while scope is not None:
            bound = scope.bindings.get(name)
            if bound is not None:
                return bound.instantiate()
            scope = scope.parent

        symbol = symbol_table.instantiate(name)
        if symbol is None:
            symbol = symbol_table.instantiate(NAME_ID)
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Return the nearest binding itself, or None if no frame binds it."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.bindings:
                return scope.bindings[name]
            scope = scope.parent
        return None

    def _location(self, symbol: Symbol) -> SourceLocation:
        return SourceLocation(self.filename, symbol.line_number, symbol.char_pos)
