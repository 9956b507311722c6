# =============================================================================
# test_grammar.py - Grammar Registration Unit Tests
# =============================================================================
# Tests for the registration DSL, symbol tables and the grammar registry.
#
# Test coverage includes:
#   - Seeded table entries and template lookup
#   - Idempotent registration and binding powers that only ever rise
#   - Denotations given by name (grammar methods and defaults)
#   - Frozen tables
#   - Registry memoization and concurrent first use
# =============================================================================

import threading
import time

import pytest

from tdop.errors import ConfigurationError, GrammarError
from tdop.grammar import (
    END_ID,
    LITERAL_ID,
    NAME_ID,
    Grammar,
    GrammarRegistry,
    SymbolTable,
)
from tdop.symbol import (
    Symbol,
    led_assignment,
    led_infix,
    led_infixr,
    nud_constant,
    nud_itself,
    nud_prefix,
)
from tdop.tokens import LINE_BREAK


def build(grammar_class) -> SymbolTable:
    """Build a grammar into a fresh table without going through a registry."""
    grammar = grammar_class()
    grammar.build()
    return grammar.table


# =============================================================================
# Symbol Table
# =============================================================================

class TestSymbolTable:
    """Table creation and template access."""

    def test_seeded_entries(self):
        table = SymbolTable("demo")
        for symbol_id in (NAME_ID, LITERAL_ID, END_ID, LINE_BREAK):
            assert symbol_id in table
        assert table.get(NAME_ID).nud is nud_itself
        assert table.get(LITERAL_ID).nud is nud_itself
        assert table.get(END_ID).nud is None

    def test_symbol_creates_once(self):
        """Registering the same id twice returns the same template."""
        table = SymbolTable("demo")
        first = table.symbol("+", 50)
        assert table.symbol("+") is first
        assert len(table) == 5

    def test_binding_power_never_lowered(self):
        table = SymbolTable("demo")
        table.symbol("+", 50)
        table.symbol("+", 10)
        assert table.get("+").lbp == 50

    def test_binding_power_raised(self):
        table = SymbolTable("demo")
        table.symbol("+", 50)
        table.symbol("+", 60)
        assert table.get("+").lbp == 60

    def test_instantiate_returns_copy(self):
        table = SymbolTable("demo")
        table.symbol("+", 50)
        occurrence = table.instantiate("+")
        assert occurrence is not table.get("+")
        occurrence.value = "+"
        assert table.get("+").value is None

    def test_instantiate_unknown(self):
        assert SymbolTable("demo").instantiate("~~") is None

    def test_frozen_table_rejects_registration(self):
        table = SymbolTable("demo")
        table.freeze()
        with pytest.raises(GrammarError) as exc_info:
            table.symbol("+", 50)
        assert exc_info.value.language == "demo"
        assert "frozen" in str(exc_info.value)

    def test_custom_symbol_class(self):
        class Node(Symbol):
            pass

        table = SymbolTable("demo", Node)
        assert isinstance(table.symbol("+"), Node)
        assert isinstance(table.instantiate("+"), Node)


# =============================================================================
# Registration DSL
# =============================================================================

class TestRegistrationDsl:
    """The define_* helpers on Grammar."""

    def test_operator(self):
        class G(Grammar):
            language = "dsl-operator"

            def build(self):
                self.define_operator("+", 50)

        symbol = build(G).get("+")
        assert symbol.lbp == 50
        assert symbol.bp == 50
        assert symbol.led is led_infix

    def test_right_assoc_operator(self):
        class G(Grammar):
            language = "dsl-right"

            def build(self):
                self.define_operator_right_assoc("&&", 30)

        assert build(G).get("&&").led is led_infixr

    def test_assignment(self):
        class G(Grammar):
            language = "dsl-assign"

            def build(self):
                self.define_assignment("=")

        symbol = build(G).get("=")
        assert symbol.lbp == 10
        assert symbol.led is led_assignment

    def test_prefix_and_infix_share_template(self):
        class G(Grammar):
            language = "dsl-minus"

            def build(self):
                self.define_operator("-", 50)
                self.define_prefix("-")

        symbol = build(G).get("-")
        assert symbol.led is led_infix
        assert symbol.nud is nud_prefix
        assert symbol.lbp == 50

    def test_constant(self):
        class G(Grammar):
            language = "dsl-constant"

            def build(self):
                self.define_constant("true", True)

        symbol = build(G).get("true")
        assert symbol.nud is nud_constant
        assert symbol.value is True

    def test_identity(self):
        class G(Grammar):
            language = "dsl-identity"

            def build(self):
                self.define_identity("this")

        assert build(G).get("this").nud is nud_itself

    def test_denotation_by_method_name(self):
        class G(Grammar):
            language = "dsl-method"

            def build(self):
                self.define_statement("print", "std_print")

            def std_print(self, symbol, parser):
                return symbol

        grammar = G()
        grammar.build()
        assert grammar.table.get("print").std == grammar.std_print

    def test_denotation_by_default_name(self):
        class G(Grammar):
            language = "dsl-default"

            def build(self):
                self.define_prefix("!", "nud_prefix")

        assert build(G).get("!").nud is nud_prefix

    def test_unknown_denotation_name(self):
        """A misspelt denotation fails while the grammar builds."""
        class G(Grammar):
            language = "dsl-typo"

            def build(self):
                self.define_statement("print", "std_pirnt")

        with pytest.raises(GrammarError) as exc_info:
            build(G)
        assert "std_pirnt" in str(exc_info.value)

    def test_non_callable_denotation(self):
        class G(Grammar):
            language = "dsl-not-callable"
            marker = 42

            def build(self):
                self.define_prefix("!", "marker")

        with pytest.raises(GrammarError):
            build(G)

    def test_missing_language(self):
        class G(Grammar):
            def build(self):
                pass

        with pytest.raises(ConfigurationError):
            G()

    def test_build_not_implemented(self):
        class G(Grammar):
            language = "dsl-empty"

        with pytest.raises(NotImplementedError):
            G().build()


# =============================================================================
# Registry
# =============================================================================

class TestGrammarRegistry:
    """Tables are built once per language and shared."""

    def test_memoized(self, calc_grammar, registry):
        table = registry.table_for(calc_grammar)
        assert registry.table_for(calc_grammar) is table
        assert registry.is_built("calc")
        assert registry.languages() == ["calc"]

    def test_table_frozen_after_build(self, calc_grammar, registry):
        table = registry.table_for(calc_grammar)
        assert table.frozen
        with pytest.raises(GrammarError):
            table.symbol("%", 60)

    def test_instance_accepted(self, calc_grammar, registry):
        table = registry.table_for(calc_grammar())
        assert "print" in table

    def test_missing_language(self, registry):
        class Anonymous:
            pass

        with pytest.raises(ConfigurationError):
            registry.table_for(Anonymous)

    def test_failed_build_not_cached(self, registry):
        class G(Grammar):
            language = "registry-broken"

            def build(self):
                self.define_prefix("!", "no_such_denotation")

        with pytest.raises(GrammarError):
            registry.table_for(G)
        assert not registry.is_built("registry-broken")

    def test_clear(self, calc_grammar, registry):
        table = registry.table_for(calc_grammar)
        registry.clear()
        assert not registry.is_built("calc")
        assert registry.table_for(calc_grammar) is not table

    def test_concurrent_first_use_builds_once(self, registry):
        """Parsers created at the same time for a new language share one build."""
        builds = []

        class Slow(Grammar):
            language = "registry-slow"

            def build(self):
                builds.append(threading.get_ident())
                time.sleep(0.05)
                self.define_operator("+", 50)

        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(registry.table_for(Slow))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(builds) == 1
        assert len(results) == 8
        assert all(table is results[0] for table in results)
        assert "+" in results[0]
