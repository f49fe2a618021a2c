import json
import sys

from pyparsnip.Char import regex, string, optional_whitespace
from pyparsnip.Combinators import between
from pyparsnip.Prim import alt, make_ref, seq_map

# 1. Lexer Setup
# Every token swallows the whitespace that follows it
def token(p):
    return p.skip(optional_whitespace())

def symbol(s):
    return token(string(s))

# JSON allows "null", "true", "false". We map them to Python equivalents.
null_val = symbol("null").result(None)
true_val = symbol("true").result(True)
false_val = symbol("false").result(False)

number = token(regex(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")).map(json.loads).label("number")
string_literal = token(regex(r'"((?:[^"\\]|\\.)*)"')).map(json.loads).label("string")

# 2. Recursive JSON Parser
# One reference for every nested value, bound once the containers exist
json_value = make_ref()

# [ value, value, ... ]
json_array = between(symbol("["), symbol("]"), json_value.sep_by(symbol(",")))

# { "key": value, ... }
entry = seq_map(string_literal, symbol(":"), json_value, lambda key, _, val: (key, val))
json_object = between(symbol("{"), symbol("}"), entry.sep_by(symbol(","))).map(dict)

json_value.set(alt(
    null_val,
    true_val,
    false_val,
    string_literal,
    number,
    json_object,
    json_array,
))

parser = optional_whitespace().then(json_value)

if __name__ == "__main__":
    with open(sys.argv[1] if len(sys.argv) > 1 else "examples/json_example.json") as f:
        test_json = f.read()

    result = parser.parse(test_json)

    if not result.status:
        print("Parsing Failed:", result.format(test_json))
    else:
        print("Successfully Parsed:")
        print(json.dumps(result.value, indent=4))
