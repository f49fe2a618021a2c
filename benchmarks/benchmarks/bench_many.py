from pyparsnip.Char import char, letter, regex
from pyparsnip.Prim import alt, run_parser


class TimeMany:
    def setup(self):
        self.parser = char("a").many()
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeSepBy:
    def setup(self):
        self.parser = letter().at_least(1).sep_by(char(","))
        self.data = ",".join("abcde" for _ in range(5000))

    def time_csv_line(self):
        run_parser(self.parser, self.data)


class TimeBacktracking:
    def setup(self):
        # Each item tries two alternatives that fail before the third matches
        self.parser = alt(regex(r"[0-9]+x"), regex(r"[0-9]+y"), regex(r"[0-9]+z")).many()
        self.data = "123z" * 5000
        self.failing = "123z" * 5000 + "123"

    def time_alternatives(self):
        run_parser(self.parser, self.data)

    def time_alternatives_failure(self):
        run_parser(self.parser, self.failing)
