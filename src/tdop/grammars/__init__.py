"""
Bundled Grammars
================

Concrete grammars shipped with the engine, looked up by language name:

    >>> from tdop.grammars import get_grammar
    >>> get_grammar("javascript")
    <class 'tdop.grammars.javascript.JavaScriptGrammar'>
"""

from tdop.errors import ConfigurationError
from tdop.grammars.javascript import JavaScriptGrammar

GRAMMARS: dict[str, type] = {
    JavaScriptGrammar.language: JavaScriptGrammar,
}


def get_grammar(language: str) -> type:
    """
    Return the grammar class registered for a language name.

    Raises:
        ConfigurationError: If no bundled grammar has that name
    """
    try:
        return GRAMMARS[language.lower()]
    except KeyError:
        available = ", ".join(sorted(GRAMMARS))
        raise ConfigurationError(
            f"no grammar for language '{language}' (available: {available})"
        ) from None


__all__ = ["GRAMMARS", "JavaScriptGrammar", "get_grammar"]
