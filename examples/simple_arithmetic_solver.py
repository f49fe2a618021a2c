from pyparsnip.Char import one_of, regex, string, optional_whitespace
from pyparsnip.Combinators import chainl1, between
from pyparsnip.Prim import lazy, run_parser

# 1. Tokens
def lexeme(p):
    return p.skip(optional_whitespace())

integer = lexeme(regex(r"[0-9]+")).map(int).label("integer")

def operator(chars, funcs):
    return lexeme(one_of(chars)).map(lambda c: funcs[c])

# 2. Helper Functions for Calculation
def div(x, y):
    if y == 0: raise ValueError("Division by zero")
    return x / y  # float division

add_op = operator("+-", {"+": lambda x, y: x + y, "-": lambda x, y: x - y})
mul_op = operator("*/", {"*": lambda x, y: x * y, "/": div})

# 3. The Expression Parser
# Ordered from lowest to highest precedence: expression -> term -> factor.
# We use 'lazy' because 'factor' refers back to 'expression' inside parentheses.
def expression():
    return chainl1(term(), add_op)

def term():
    return chainl1(factor(), mul_op)

def factor():
    negated = lexeme(string("-")).then(lazy(factor)).map(lambda x: -x)
    return negated | integer | between(lexeme(string("(")), lexeme(string(")")), lazy(expression))

parser = optional_whitespace().then(expression())

if __name__ == "__main__":
    test_cases = [
        "2 + 3",            # 5
        "2 * 3",            # 6
        "2 + 3 * 4",        # 14 (Precedence check)
        "(2 + 3) * 4",      # 20 (Parens check)
        "-2 + 3",           # 1 (Prefix check)
        "10 / 2 + 3",       # 8.0
        "10 / (2 - 2)",     # Runtime error
        "2 +",              # Parse error
    ]

    print(f"{'Expression':<20} | {'Result':<10}")
    print("-" * 35)

    for expr_str in test_cases:
        try:
            result, err = run_parser(parser, expr_str)
            if err:
                print(f"{expr_str:<20} | Error: {err}")
            else:
                print(f"{expr_str:<20} | {result}")
        except ValueError as e:
            print(f"{expr_str:<20} | Runtime Error: {e}")
