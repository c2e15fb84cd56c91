"""Offside-rule layout layered on top of a plain lexer.

The lexer emits Newline tokens that carry the following indentation; a
small generator turns indentation changes into Indent/Dedent tokens.
"""

from collections.abc import Iterator

from lexmatic import LexError, Lexer, RuleSetBuilder, Token

lexer = Lexer(
    RuleSetBuilder()
    .token("Colon", ":")
    .regex("Newline", r"(\r?\n[ ]*)+", capture=True)
    .regex("Name", r"[a-z]+", capture=True)
    .skip(r"[ ]+")
    .build()
)


def layout(source: str) -> Iterator[Token]:
    levels = [0]
    for result in lexer.lex(source):
        if isinstance(result, LexError):
            raise result
        token = result.token
        if token.type != "Newline":
            yield token
            continue
        yield Token("Newline")
        width = len(token.value) - token.value.rfind("\n") - 1
        if width > levels[-1]:
            levels.append(width)
            yield Token("Indent")
        while width < levels[-1]:
            levels.pop()
            yield Token("Dedent")
        if width != levels[-1]:
            raise IndentationError(f"inconsistent dedent to column {width}")
    while len(levels) > 1:
        levels.pop()
        yield Token("Dedent")


print(list(layout("if a:\n  b\n  if c:\n    d\ne\n")))
