import enum
import logging

from rich.pretty import pprint

from optionparser import *


class Mode(enum.Enum):
    FAST = "fast"
    SMALL = "small"
    QUIET = "quiet"


class Options(OptionParser):
    verbose = counter("-v", "--verbose", help="more output (repeatable)")
    name = argument("-N", "--name", help="my name")
    size = argument("-s", "--size", help="my size", type=int).default(8)
    output = argument("-O", "--output", help="output location").default("./")
    includes = accumulator("-I", help="directories to search for headers")
    mode = mapping({"--fast": Mode.FAST, "--small": Mode.SMALL, "--quiet": Mode.QUIET},
                   help="operating mode").default(Mode.FAST)


if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING)
    options = Options()
    try:
        pprint(options.values())
    except OptionParserException as exception:
        exception.printandexit()
