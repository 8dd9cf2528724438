import argparse
import logging
import sys
from textin.text_reader import TextReader
from textin.utils import Config, InputException

parser = argparse.ArgumentParser(description="Read a text source as tokens, lines, characters or numbers.")
parser.add_argument('-f', '--file', type=str, help='Path or URL of the input; standard input when omitted')
parser.add_argument('-c', '--config', type=str, help='Path to the configuration file')
parser.add_argument('-v', '--verbose', action='store_true', help='Log how the source is opened')

mode = parser.add_mutually_exclusive_group()
mode.add_argument('-t', '--tokens', action='store_true', help='Print one whitespace separated token per line')
mode.add_argument('-l', '--lines', action='store_true', help='Print numbered lines')
mode.add_argument('--chars', action='store_true', help='Print every character, whitespace included')
mode.add_argument('-i', '--ints', action='store_true', help='Read integers and print their sum')
mode.add_argument('-d', '--doubles', action='store_true', help='Read floating point numbers and print their sum')
args = parser.parse_args()

logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.WARNING,
    format='%(levelname)s %(name)s: %(message)s',
)

if args.config:
    print(f"Using config file: {args.config}")
    try:
        config = Config.from_json_file(args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"Failed to load config: {e}")
        sys.exit(1)
else:
    config = Config()

try:
    source = TextReader(args.file, config) if args.file else TextReader(config=config)

    with source:
        if args.tokens:
            for token in source.read_all_strings():
                print(token)
        elif args.lines:
            for number, line in enumerate(source, start=1):
                print(f"{number:>6}  {line}")
        elif args.chars:
            while source.has_next_char():
                print(repr(source.read_char()))
        elif args.ints:
            print(sum(source.read_all_longs()))
        elif args.doubles:
            print(sum(source.read_all_doubles()))
        else:
            sys.stdout.write(source.read_all())

except InputException as e:
    print(e)
    sys.exit(1)
