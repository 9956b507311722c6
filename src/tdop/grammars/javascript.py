"""
JavaScript Subset Grammar
=========================

A grammar for a small, expression-oriented subset of JavaScript, built
with the registration DSL. It is the grammar the tdop-parse tool uses by
default and a worked example for writing new grammars.

Precedence (lowest to highest)
------------------------------
10. assignment     = += -=          (right)
20. ternary        ?:
30. logical        && ||            (right)
40. comparison     === !== == != < <= > >=
50. additive       + -
60. multiplicative * / %
70. prefix         ! - typeof
80. postfix        . [] ()

Statements
----------
    { ... }                       block (opens a scope)
    var a = 1, b;                 declarations in the current scope
    if (c) s else s
    while (c) s
    function name(a, b) { ... }   parameters live in the function's scope
    return expr;  break;  ;

A statement ends at ';', at a line break, before '}' or at the end of
input. ``return`` followed by a line break returns nothing.
"""

from typing import Any

from tdop.errors import UnexpectedTokenError
from tdop.grammar import NAME_ID, Grammar
from tdop.parser import Parser
from tdop.symbol import Arity, Symbol


class JavaScriptGrammar(Grammar):
    """Grammar for the JavaScript subset described in the module docstring."""

    language = "javascript"

    def build(self) -> None:
        for delimiter in (";", ",", ")", "]", "}", ":", "else"):
            self.symbol(delimiter)

        self.define_prefix("this", "nud_this")

        self.define_constant("true", True)
        self.define_constant("false", False)
        self.define_constant("null", None)
        self.define_constant("undefined", None)
        self.define_constant("NaN", float("nan"))
        self.define_constant("Infinity", float("inf"))

        self.define_assignment("=")
        self.define_assignment("+=")
        self.define_assignment("-=")

        self.define_operator("?", 20, "led_ternary")

        self.define_operator_right_assoc("&&", 30)
        self.define_operator_right_assoc("||", 30)

        for operator in ("===", "!==", "==", "!=", "<", "<=", ">", ">="):
            self.define_operator(operator, 40)

        self.define_operator("+", 50)
        self.define_operator("-", 50)
        self.define_operator("*", 60)
        self.define_operator("/", 60)
        self.define_operator("%", 60)

        self.define_operator(".", 80, "led_member")
        self.define_operator("[", 80, "led_subscript")
        self.define_operator("(", 80, "led_call")

        self.define_prefix("!")
        self.define_prefix("-")
        self.define_prefix("typeof")
        self.define_prefix("(", "nud_group")
        self.define_prefix("[", "nud_array")
        self.define_prefix("{", "nud_object")
        self.define_prefix("function", "nud_function")

        self.define_statement("{", "std_block")
        self.define_statement(";", "std_empty")
        self.define_statement("var", "std_var")
        self.define_statement("if", "std_if")
        self.define_statement("while", "std_while")
        self.define_statement("function", "std_function")
        self.define_statement("return", "std_return")
        self.define_statement("break", "std_break")

    # =========================================================================
    # Null Denotations
    # =========================================================================

    def nud_this(self, symbol: Symbol, parser: Parser) -> Symbol:
        parser.scope.reserve(symbol)
        return symbol

    def nud_group(self, symbol: Symbol, parser: Parser) -> Any:
        expression = parser.expression(0)
        parser.advance(")")
        return expression

    def nud_array(self, symbol: Symbol, parser: Parser) -> Symbol:
        symbol.first = self._comma_list(parser, "]")
        parser.advance("]")
        symbol.arity = Arity.OPERATOR
        return symbol

    def nud_object(self, symbol: Symbol, parser: Parser) -> Symbol:
        """Object literal: each member becomes a ':' node (key, value)."""
        members = []
        if not parser.peek("}"):
            while True:
                key = parser.token
                if key.arity not in (Arity.NAME, Arity.LITERAL):
                    raise UnexpectedTokenError("(name)", key.id, **parser.error_context(key))
                key.arity = Arity.LITERAL
                parser.advance()

                member = parser.token
                parser.advance(":")
                member.first = key
                member.second = parser.expression(0)
                member.arity = Arity.OPERATOR
                members.append(member)

                if not parser.peek(","):
                    break
                parser.advance(",")
        parser.advance("}")
        symbol.first = members
        symbol.arity = Arity.OPERATOR
        return symbol

    def nud_function(self, symbol: Symbol, parser: Parser) -> Symbol:
        return self._function(symbol, parser, statement=False)

    # =========================================================================
    # Left Denotations
    # =========================================================================

    def led_ternary(self, symbol: Symbol, parser: Parser, left: Any) -> Symbol:
        symbol.first = left
        symbol.second = parser.expression(0)
        parser.advance(":")
        symbol.third = parser.expression(0)
        symbol.arity = Arity.OPERATOR
        return symbol

    def led_member(self, symbol: Symbol, parser: Parser, left: Any) -> Symbol:
        name = parser.token
        if name.arity != Arity.NAME:
            raise UnexpectedTokenError("(name)", name.id, **parser.error_context(name))
        name.arity = Arity.LITERAL
        symbol.first = left
        symbol.second = name
        symbol.arity = Arity.OPERATOR
        parser.advance()
        return symbol

    def led_subscript(self, symbol: Symbol, parser: Parser, left: Any) -> Symbol:
        symbol.first = left
        symbol.second = parser.expression(0)
        symbol.arity = Arity.OPERATOR
        parser.advance("]")
        return symbol

    def led_call(self, symbol: Symbol, parser: Parser, left: Any) -> Symbol:
        symbol.first = left
        symbol.second = self._comma_list(parser, ")")
        symbol.arity = Arity.OPERATOR
        parser.advance(")")
        return symbol

    # =========================================================================
    # Statement Denotations
    # =========================================================================

    def std_block(self, symbol: Symbol, parser: Parser) -> Symbol:
        with parser.scoped():
            symbol.first = parser.statements(["}"])
        parser.advance("}")
        return symbol

    def std_empty(self, symbol: Symbol, parser: Parser) -> None:
        return None

    def std_var(self, symbol: Symbol, parser: Parser) -> Symbol:
        declarations = []
        while True:
            name = self._expect_name(parser)
            parser.scope.define(name)
            parser.advance()

            if parser.peek("="):
                assignment = parser.token
                parser.advance("=")
                assignment.first = name
                assignment.second = parser.expression(0)
                assignment.arity = Arity.OPERATOR
                assignment.assignment = True
                declarations.append(assignment)
            else:
                declarations.append(name)

            if not parser.peek(","):
                break
            parser.advance(",")

        self._end_statement(parser)
        symbol.first = declarations
        return symbol

    def std_if(self, symbol: Symbol, parser: Parser) -> Symbol:
        parser.advance("(")
        symbol.first = parser.expression(0)
        parser.advance(")")
        symbol.second = self._body(parser)

        if parser.peek("else"):
            parser.scope.reserve(parser.token)
            parser.advance("else")
            symbol.third = parser.statement() if parser.peek("if") else self._body(parser)
        return symbol

    def std_while(self, symbol: Symbol, parser: Parser) -> Symbol:
        parser.advance("(")
        symbol.first = parser.expression(0)
        parser.advance(")")
        symbol.second = self._body(parser)
        return symbol

    def std_function(self, symbol: Symbol, parser: Parser) -> Symbol:
        return self._function(symbol, parser, statement=True)

    def std_return(self, symbol: Symbol, parser: Parser) -> Symbol:
        if not self._at_statement_end(parser):
            symbol.first = parser.expression(0)
        self._end_statement(parser)
        return symbol

    def std_break(self, symbol: Symbol, parser: Parser) -> Symbol:
        self._end_statement(parser)
        return symbol

    # =========================================================================
    # Helpers
    # =========================================================================

    def _function(self, symbol: Symbol, parser: Parser, statement: bool) -> Symbol:
        """
        Parse a function after the 'function' keyword.

        A function statement must be named and declares the name in the
        enclosing scope; a function expression's optional name is only
        visible inside its own scope.
        """
        name = None
        if statement or parser.token.arity == Arity.NAME:
            name = self._expect_name(parser)
            if statement:
                parser.scope.define(name)
            parser.advance()

        with parser.scoped() as scope:
            if name is not None and not statement:
                scope.define(name)

            parameters = []
            parser.advance("(")
            if not parser.peek(")"):
                while True:
                    parameter = self._expect_name(parser)
                    scope.define(parameter)
                    parameters.append(parameter)
                    parser.advance()
                    if not parser.peek(","):
                        break
                    parser.advance(",")
            parser.advance(")")

            parser.advance("{")
            body = parser.statements(["}"])
        parser.advance("}")

        symbol.first = name
        symbol.second = parameters
        symbol.third = body
        if not statement:
            symbol.arity = Arity.OPERATOR
        return symbol

    def _body(self, parser: Parser) -> Any:
        if parser.peek("{"):
            block = parser.token
            parser.advance("{")
            block.arity = Arity.STATEMENT
            return self.std_block(block, parser)
        return parser.statement()

    def _comma_list(self, parser: Parser, closing: str) -> list:
        items = []
        if not parser.peek(closing):
            while True:
                items.append(parser.expression(0))
                if not parser.peek(","):
                    break
                parser.advance(",")
        return items

    def _expect_name(self, parser: Parser) -> Symbol:
        """Return the current token if it can be declared as a variable."""
        token = parser.token
        if token.arity != Arity.NAME or token.id != NAME_ID:
            raise UnexpectedTokenError("(name)", token.id, **parser.error_context(token))
        return token

    def _at_statement_end(self, parser: Parser) -> bool:
        return (
            parser.peek("\n")
            or parser.peek(";")
            or parser.peek("}")
            or parser.at_end
        )

    def _end_statement(self, parser: Parser) -> None:
        if parser.peek(";"):
            parser.advance(";")
        elif not self._at_statement_end(parser):
            raise UnexpectedTokenError(";", parser.token.id, **parser.error_context(parser.token))
