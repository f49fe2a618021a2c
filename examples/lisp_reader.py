import re
import sys

from pyparsnip.Char import regex, string, optional_whitespace
from pyparsnip.Prim import alt, make_ref

# 1. Lexeme helper: a token followed by any whitespace
def lexeme(p):
    return p.skip(optional_whitespace())

# 2. Atoms
number = lexeme(regex(r"-?(0|[1-9][0-9]*)")).map(int).label("number")
symbol = lexeme(regex(r"[a-z_+\-*/<>=!?][a-z0-9_+\-*/<>=!?]*", flags=re.IGNORECASE)).label("symbol")
lparen = lexeme(string("("))
rparen = lexeme(string(")"))

# 3. Recursive structure: an expression may be a list of expressions.
# The reference is bound below, once 'lisp_list' exists.
expr = make_ref()
lisp_list = lparen.then(expr.many()).skip(rparen)
quote = lexeme(string("'")).then(expr).map(lambda e: ["quote", e])
expr.set(alt(number, symbol, lisp_list, quote))

# 4. A program is a sequence of expressions with leading whitespace allowed
program = optional_whitespace().then(expr.many())

if __name__ == "__main__":
    source = sys.stdin.read() if len(sys.argv) < 2 else sys.argv[1]
    result = program.parse(source)
    if result.status:
        print(result.value)
    else:
        print(result.format(source))
        sys.exit(1)
