"""
tdop-parse - Parser Command-Line Interface
==========================================

This module implements the command-line interface for the parsing engine.
It tokenizes and parses source files with one of the bundled grammars and
prints the resulting trees, which makes it handy for checking how a
grammar treats a piece of code.

Usage Examples
--------------
Print each statement as an s-expression:
    $ tdop-parse app.js

Indented outline instead:
    $ tdop-parse --outline app.js

Show the raw token stream:
    $ tdop-parse --tokens app.js

Verbose mode (debug logging from the engine):
    $ tdop-parse -v app.js lib.js
"""

import logging
import sys
from pathlib import Path

import click

from tdop import __version__
from tdop.cli.errors import ExitCode, handle_cli_exception
from tdop.errors import ErrorCollector, TdopError
from tdop.grammars import GRAMMARS, get_grammar
from tdop.lexer import Tokenizer
from tdop.parser import Parser
from tdop.printer import TreePrinter


# =============================================================================
# Parsing Helpers
# =============================================================================

def parse_source(source: str, grammar: type, filename: str = "<input>") -> list:
    """
    Tokenize and parse one unit of source text.

    Raises:
        TdopError: If the text cannot be tokenized or parsed
    """
    tokens = Tokenizer(source, filename).tokenize()
    parser = Parser(tokens, grammar, filename=filename, source_lines=source.splitlines())
    return parser.parse()


def render_tokens(source: str, filename: str = "<input>") -> str:
    """Return the token stream of a unit, one token per line."""
    return "\n".join(repr(token) for token in Tokenizer(source, filename).tokenize())


def render_tree(statements: list, outline: bool = False) -> str:
    printer = TreePrinter()
    if outline:
        return printer.dump(statements)
    return "\n".join(printer.format(statement) for statement in statements)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--language",
    type=click.Choice(sorted(GRAMMARS), case_sensitive=False),
    default="javascript",
    show_default=True,
    help="Grammar used to parse the input",
)
@click.option(
    "--tokens",
    "show_tokens",
    is_flag=True,
    help="Print the token stream instead of the tree",
)
@click.option(
    "--outline",
    is_flag=True,
    help="Print an indented outline instead of s-expressions",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=20,
    show_default=True,
    help="Stop after this many files failed to parse",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tdop-parse")
def main(
    input_files: tuple[Path, ...],
    language: str,
    show_tokens: bool,
    outline: bool,
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Parse source files and print their trees.

    INPUT_FILES are parsed one at a time, each as an independent unit
    with its own scopes. A file that fails to parse is reported and the
    remaining files are still processed.

    \b
    Examples:
        tdop-parse app.js                # One s-expression per statement
        tdop-parse --outline app.js      # Indented tree
        tdop-parse --tokens app.js       # Token stream only
        tdop-parse -v a.js b.js          # Debug logging

    \b
    Exit codes:
        0  all files parsed
        1  at least one file failed to parse
        2  invalid arguments or unreadable file
        3  internal error
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        grammar = get_grammar(language)
    except TdopError as e:
        handle_cli_exception(e, verbose)

    errors = ErrorCollector(max_errors=max_errors)
    show_headers = len(input_files) > 1

    for index, input_file in enumerate(input_files, start=1):
        try:
            source = input_file.read_text()
        except (OSError, UnicodeDecodeError) as e:
            handle_cli_exception(e, verbose)

        filename = str(input_file)
        try:
            if show_tokens:
                output = render_tokens(source, filename)
            else:
                output = render_tree(parse_source(source, grammar, filename), outline)
        except TdopError as e:
            errors.add(e)
            if errors.should_stop():
                if index < len(input_files):
                    errors.add_warning("too many errors, remaining files skipped")
                break
            continue
        except Exception as e:
            handle_cli_exception(e, verbose)

        if show_headers:
            click.echo(f"==> {filename} <==")
        if output:
            click.echo(output)

    if errors.has_errors():
        click.echo(errors.report(), err=True)
        sys.exit(ExitCode.PARSE_ERROR)


if __name__ == "__main__":
    main()
