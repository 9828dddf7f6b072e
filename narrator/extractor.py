"""Find the parts of an expression that precedence says to work out first."""

from dataclasses import dataclass

from narrator.tokenizer import MUL_DIV, token_texts


@dataclass(frozen=True)
class SubExpression:
    """A multiply/divide run; indices are inclusive positions in the token list."""
    text: str
    start_index: int
    end_index: int


def extract_bracket_expressions(expr: str) -> list:
    """Return the body of every top-level bracket group in *expr*.

    Only outermost groups are returned; nested brackets stay inside the
    outer body (``"(1+(2*3))"`` → ``["1+(2*3)"]``).  A group that is never
    closed is not recorded.
    """
    groups = []
    depth = 0
    start = -1
    for i, ch in enumerate(expr):
        if ch == "(":
            if depth == 0:
                start = i + 1
            depth += 1
        elif ch == ")":
            if depth == 0:
                # Stray closing bracket, nothing open to match.
                continue
            depth -= 1
            if depth == 0:
                groups.append(expr[start:i])
    return groups


def find_mul_div_sub_expressions(tokens) -> list:
    """Return the maximal ``number (*|/ number)+`` runs in *tokens*.

    Scanning is strictly left to right and resumes after the end of each
    run, so runs never overlap.
    """
    runs = []
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if not (tok.is_number and i + 1 < n and tokens[i + 1].text in MUL_DIV):
            i += 1
            continue
        end = i
        while (end + 2 < n
               and tokens[end + 1].text in MUL_DIV
               and tokens[end + 2].is_number):
            end += 2
        if end > i:
            text = "".join(token_texts(tokens[i:end + 1]))
            runs.append(SubExpression(text, i, end))
            i = end + 1
        else:
            i += 1
    return runs
