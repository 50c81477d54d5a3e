import sys

from rich.pretty import pprint

from argot import *


def main(argv):
    threads = token(int32, name="threads").default_value("4").implicit_value("1")
    ports = token(list[int], name="ports")

    for text in argv:
        if (descriptor := match_argument(text)) is None:
            continue
        pprint(descriptor)
        try:
            if descriptor.arg_name == "threads" and descriptor.set_value:
                threads.parse(descriptor.value)
            elif descriptor.arg_name == "threads":
                threads.parse()
            elif descriptor.arg_name == "ports":
                ports.parse(descriptor.value)
        except ParserException as exception:
            trigger(exception, shell=True, fancy=True, deferred=True)

    if not threads.count:
        threads.parse_default()

    pprint(threads)
    pprint(ports)


if __name__ == '__main__':
    main(sys.argv[1:])
