"""
Grammar Registration
====================

A grammar is a class that names its language and fills a SymbolTable in
its build() method using a small registration DSL:

    class Calc(Grammar):
        language = "calc"

        def build(self):
            self.define_identity("(literal)")
            self.define_operator("+", 50)
            self.define_operator("*", 60)
            self.define_operator_right_assoc("^", 70)
            self.define_prefix("-")
            self.define_statement("print", "std_print")

        def std_print(self, symbol, parser):
            symbol.first = parser.expression(0)
            return symbol

Registration never lowers a binding power: giving an id a second, smaller
power leaves the larger one in place, so rules may refine the same
operator in any order.

Denotations are callables or names. A name refers to a method of the
grammar or to one of the defaults in tdop.symbol; names are resolved
while build() runs so a typo fails at build time, not mid-parse.

Symbol Table Lifecycle
----------------------
Tables are built once per language and shared by every parser for that
language through a GrammarRegistry. After build() the table is frozen;
parsers only read templates and copy them.

    >>> table = default_registry.table_for(Calc)   # builds on first use
    >>> table is default_registry.table_for(Calc)  # reused afterwards
    True
"""

import logging
import threading
from typing import Any, Callable, Iterator, Optional, Union

from tdop.errors import ConfigurationError, GrammarError
from tdop.symbol import (
    DEFAULT_DENOTATIONS,
    Symbol,
    led_assignment,
    led_infix,
    led_infixr,
    nud_constant,
    nud_itself,
    nud_prefix,
)
from tdop.tokens import LINE_BREAK

logger = logging.getLogger(__name__)

Denotation = Union[str, Callable[..., Any]]

NAME_ID = "(name)"
LITERAL_ID = "(literal)"
END_ID = "(end)"


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Mapping from symbol id to template Symbol for one language.

    A new table already holds the generic carriers every parser relies
    on: "(name)" and "(literal)" (both standing for themselves), the
    "(end)" sentinel and the line-break marker.

    Attributes:
        language: Language identifier this table belongs to
        frozen: True once the grammar build has finished
    """

    def __init__(self, language: str, symbol_class: type = Symbol):
        self.language = language
        self.symbol_class = symbol_class
        self.frozen = False
        self._symbols: dict[str, Symbol] = {}

        self.symbol(NAME_ID).nud = nud_itself
        self.symbol(LITERAL_ID).nud = nud_itself
        self.symbol(END_ID)
        self.symbol(LINE_BREAK)

    def __contains__(self, symbol_id: str) -> bool:
        return symbol_id in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "building"
        return f"SymbolTable({self.language!r}, {len(self)} symbols, {state})"

    def get(self, symbol_id: str) -> Optional[Symbol]:
        """Return the template for an id, or None."""
        return self._symbols.get(symbol_id)

    def instantiate(self, symbol_id: str) -> Optional[Symbol]:
        """Return a fresh occurrence of the template, or None if unknown."""
        template = self._symbols.get(symbol_id)
        if template is None:
            return None
        return template.instantiate()

    def symbol(self, symbol_id: str, bp: int = 0) -> Symbol:
        """
        Get or create the template for an id.

        An existing template keeps the larger of its binding power and bp.

        Raises:
            GrammarError: If the table is frozen
        """
        if self.frozen:
            raise GrammarError(
                f"cannot register '{symbol_id}': symbol table is frozen",
                self.language,
            )

        existing = self._symbols.get(symbol_id)
        if existing is not None:
            if bp > existing.lbp:
                logger.debug(
                    "%s: raising '%s' binding power %d -> %d",
                    self.language, symbol_id, existing.lbp, bp,
                )
                existing.lbp = bp
            return existing

        created = self.symbol_class(id=symbol_id, lbp=bp)
        self._symbols[symbol_id] = created
        return created

    def freeze(self) -> None:
        """Forbid further registration."""
        self.frozen = True


# =============================================================================
# Grammar Base Class
# =============================================================================

class Grammar:
    """
    Base class for concrete grammars.

    Subclasses set ``language`` and implement build(). The registry
    instantiates the grammar with a fresh SymbolTable and calls build()
    exactly once per language.

    Attributes:
        language: Language identifier (required)
        symbol_class: Symbol subclass used for new templates
        table: Symbol table being filled
    """

    language: Optional[str] = None
    symbol_class: type = Symbol

    def __init__(self, table: Optional[SymbolTable] = None):
        if not self.language:
            raise ConfigurationError(
                f"{type(self).__name__} does not set a language identifier"
            )
        self.table = table if table is not None else SymbolTable(self.language, self.symbol_class)

    def build(self) -> None:
        """Register every symbol of the language."""
        raise NotImplementedError(f"{type(self).__name__} must implement build()")

    # =========================================================================
    # Registration DSL
    # =========================================================================

    def symbol(self, symbol_id: str, bp: int = 0) -> Symbol:
        """Get or create a symbol, raising its binding power to at least bp."""
        return self.table.symbol(symbol_id, bp)

    def define_operator(
        self,
        symbol_id: str,
        lbp: int,
        led: Optional[Denotation] = None,
    ) -> Symbol:
        """
        Register a left-associative infix operator.

        The default left denotation parses the right operand at lbp, so a
        chain of equal-precedence operators groups to the left.
        """
        symbol = self.symbol(symbol_id, lbp)
        symbol.led = self._resolve(symbol_id, led, led_infix)
        symbol.bp = lbp
        return symbol

    def define_operator_right_assoc(
        self,
        symbol_id: str,
        lbp: int,
        led: Optional[Denotation] = None,
    ) -> Symbol:
        """
        Register a right-associative infix operator.

        The default left denotation parses the right operand at lbp - 1,
        so a chain of equal-precedence operators groups to the right.
        """
        symbol = self.symbol(symbol_id, lbp)
        symbol.led = self._resolve(symbol_id, led, led_infixr)
        symbol.bp = lbp
        return symbol

    def define_assignment(self, symbol_id: str, lbp: int = 10) -> Symbol:
        """Register a right-associative assignment operator."""
        return self.define_operator_right_assoc(symbol_id, lbp, led_assignment)

    def define_prefix(self, symbol_id: str, nud: Optional[Denotation] = None) -> Symbol:
        """Register a symbol that can begin an expression."""
        symbol = self.symbol(symbol_id)
        symbol.nud = self._resolve(symbol_id, nud, nud_prefix)
        return symbol

    def define_identity(self, symbol_id: str) -> Symbol:
        """Register a prefix symbol that stands for itself."""
        return self.define_prefix(symbol_id, nud_itself)

    def define_constant(self, symbol_id: str, value: Any) -> Symbol:
        """
        Register a name that behaves as a literal.

        Occurrences become literal nodes carrying ``value`` and reserve the
        name in the scope they appear in.
        """
        symbol = self.symbol(symbol_id)
        symbol.nud = nud_constant
        symbol.value = value
        return symbol

    def define_statement(self, symbol_id: str, std: Denotation) -> Symbol:
        """Register a symbol that drives its own parsing at statement start."""
        symbol = self.symbol(symbol_id)
        symbol.std = self._resolve(symbol_id, std, None)
        return symbol

    def _resolve(
        self,
        symbol_id: str,
        denotation: Optional[Denotation],
        default: Optional[Callable[..., Any]],
    ) -> Callable[..., Any]:
        """Turn a denotation argument into a callable or fail the build."""
        if denotation is None:
            if default is None:
                raise GrammarError(f"'{symbol_id}' needs a denotation", self.language)
            return default

        if isinstance(denotation, str):
            resolved = getattr(self, denotation, None)
            if resolved is None:
                resolved = DEFAULT_DENOTATIONS.get(denotation)
            if resolved is None:
                raise GrammarError(
                    f"'{symbol_id}' refers to unknown denotation '{denotation}'",
                    self.language,
                )
            denotation = resolved

        if not callable(denotation):
            raise GrammarError(
                f"denotation for '{symbol_id}' is not callable: {denotation!r}",
                self.language,
            )
        return denotation


GrammarSource = Union[type, Grammar, SymbolTable]


# =============================================================================
# Registry
# =============================================================================

class GrammarRegistry:
    """
    Process-wide cache of built symbol tables, keyed by language.

    The first request for a language builds its table under a lock, so
    parsers constructed concurrently for a new language never see a
    partially registered table. Later requests return the cached table
    without locking.
    """

    def __init__(self):
        self._tables: dict[str, SymbolTable] = {}
        self._lock = threading.Lock()

    def table_for(self, grammar: GrammarSource) -> SymbolTable:
        """
        Return the built table for a grammar class or instance.

        Raises:
            ConfigurationError: If the grammar declares no language
            GrammarError: If the grammar's build() registers badly
        """
        if isinstance(grammar, SymbolTable):
            return grammar

        language = getattr(grammar, "language", None)
        if not language:
            name = grammar.__name__ if isinstance(grammar, type) else type(grammar).__name__
            raise ConfigurationError(f"{name} does not set a language identifier")

        table = self._tables.get(language)
        if table:
            return table

        with self._lock:
            table = self._tables.get(language)
            if table:
                return table
            table = self._build(grammar, language)
            self._tables[language] = table
            return table

    def is_built(self, language: str) -> bool:
        """Return True if a table for the language is cached."""
        return language in self._tables

    def languages(self) -> list[str]:
        """Return the languages with cached tables."""
        return sorted(self._tables)

    def clear(self) -> None:
        """Drop every cached table."""
        with self._lock:
            self._tables.clear()

    @staticmethod
    def _build(grammar: GrammarSource, language: str) -> SymbolTable:
        instance = grammar() if isinstance(grammar, type) else grammar
        logger.debug("building symbol table for '%s'", language)
        instance.build()
        instance.table.freeze()
        logger.debug("built '%s' with %d symbols", language, len(instance.table))
        return instance.table


default_registry = GrammarRegistry()
