import re
from typing import Dict, Tuple
from textin.utils import Config

# signed two's complement ranges of the integer widths
INTEGER_RANGES: Dict[str, Tuple[int, int]] = {
    'byte': (-2 ** 7, 2 ** 7 - 1),
    'short': (-2 ** 15, 2 ** 15 - 1),
    'int': (-2 ** 31, 2 ** 31 - 1),
    'long': (-2 ** 63, 2 ** 63 - 1),
}

NAN_SYMBOLS = ('NaN',)
INFINITY_SYMBOLS = ('Infinity', '\u221e')

TRUE_TOKENS = ('true', '1')
FALSE_TOKENS = ('false', '0')


class NumberFormat:
    """
    Lexical rules for numerals, fixed at construction.

    Integers are an optional sign followed by plain digits or digits grouped
    in threes by the grouping separator ("1,234,567"). Floating point values
    additionally allow a fractional part after the decimal separator, an
    exponent, and the NaN / Infinity symbols. Anything else is rejected with
    ValueError; no coercion is attempted.
    """
    def __init__(self, decimal_separator: str = '.', grouping_separator: str = ','):
        if len(decimal_separator) != 1 or len(grouping_separator) != 1:
            raise ValueError("separators must be single characters")
        if decimal_separator == grouping_separator:
            raise ValueError("decimal and grouping separators must differ")

        self.decimal_separator = decimal_separator
        self.grouping_separator = grouping_separator

        group = re.escape(grouping_separator)
        decimal = re.escape(decimal_separator)
        numeral = rf'(?:\d{{1,3}}(?:{group}\d{{3}})+|\d+)'
        non_number = '|'.join(re.escape(s) for s in NAN_SYMBOLS + INFINITY_SYMBOLS)

        self._integer_re = re.compile(rf'[-+]?{numeral}')
        self._float_re = re.compile(
            rf'[-+]?(?:(?:{numeral}(?:{decimal}\d*)?|{decimal}\d+)(?:[eE][-+]?\d+)?|{non_number})'
        )

    @classmethod
    def from_config(cls, config: Config) -> 'NumberFormat':
        return cls(config.decimal_separator, config.grouping_separator)

    def _strip_grouping(self, token: str) -> str:
        return token.replace(self.grouping_separator, '')

    def parse_integer(self, token: str, kind: str = 'int') -> int:
        if kind not in INTEGER_RANGES:
            raise KeyError(f"Unknown integer kind: {kind}")

        if not self._integer_re.fullmatch(token):
            raise ValueError(f"Invalid {kind} literal: {token}")

        value = int(self._strip_grouping(token))

        low, high = INTEGER_RANGES[kind]
        if not low <= value <= high:
            raise ValueError(f"Value out of {kind} range: {token}")

        return value

    def parse_float(self, token: str) -> float:
        if not self._float_re.fullmatch(token):
            raise ValueError(f"Invalid float literal: {token}")

        sign = ''
        body = token
        if body[0] in '+-':
            sign, body = body[0], body[1:]

        if body in NAN_SYMBOLS:
            return float('nan')
        if body in INFINITY_SYMBOLS:
            return float(sign + 'inf')

        body = self._strip_grouping(body).replace(self.decimal_separator, '.')
        return float(sign + body)

    @staticmethod
    def parse_bool(token: str) -> bool:
        lowered = token.lower()
        if lowered in TRUE_TOKENS:
            return True
        if lowered in FALSE_TOKENS:
            return False
        raise ValueError(f"Invalid bool literal: {token}")
