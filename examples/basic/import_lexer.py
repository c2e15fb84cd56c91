"""Lex a tiny import language: keywords, identifiers, comments, whitespace."""

from lexmatic import Lexer, RuleSetBuilder

lexer = Lexer(
    RuleSetBuilder()
    .token("Import", "import")
    .token("Semi", ";")
    .regex("Ident", r"[a-zA-Z_][a-zA-Z0-9_]*", capture=True)
    .skip(r"//[^\n]*")
    .skip(r"[ \t\r\n\f]+")
    .build()
)

for start, end, token in lexer.tokenize("import foo; // comment\nimport import1;"):
    print(start, end, token)
