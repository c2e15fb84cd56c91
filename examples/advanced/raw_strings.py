"""Raw strings with a variable-length closer, finished by a continuation.

The regex only matches the opening r#*" and the continuation searches the
rest of the input for the matching "#*.
"""

from lexmatic import ContinuationRefusedError, Lexer, RuleSetBuilder


def end_raw_str(matched: str, remaining: str) -> int | None:
    closer = matched[1:][::-1]
    index = remaining.find(closer)
    if index == -1:
        return None
    return index + len(closer)


lexer = Lexer(
    RuleSetBuilder()
    .regex("RawStr", r'r#*"', capture=True, more=end_raw_str)
    .regex("Ident", r"[a-z]+", capture=True)
    .skip(r"\s+")
    .build()
)

source = 'name r##"a "# is not the end"## other r#"oops'
for result in lexer.lex(source):
    if isinstance(result, ContinuationRefusedError):
        print(f"unterminated {result.rule} at {result.locate(source)}")
    else:
        print(result.start, result.end, result.token)
