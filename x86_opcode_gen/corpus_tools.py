"""
Helpers to derive new known-opcode files from existing ones, e.g. the
`02` file from the `00` file by swapping operands and replacing the first
opcode byte.
"""

import argparse
from argparse import ArgumentParser

from .line_parser import LineParser
from .opcode_utils import is_known_opcode_line


def swap_operand(line):
    if not is_known_opcode_line(line):
        return line
    try:
        prefix, mnemonic, operands = LineParser.splitLine(line)
        if len(operands) != 2:
            raise ValueError(f"Expected two operands in {line!r}")
    except ValueError:
        print("err:", line.rstrip("\n"))
        return line
    return prefix + mnemonic + operands[1] + ", " + operands[0]


def replace_first_opcode(line, new_first_code):
    if not is_known_opcode_line(line):
        return line
    if line.find(" ") != 2:
        print("err:", line.rstrip("\n"))
        return line
    return new_first_code + line[2:]


def rewrite_lines(input_file, output_file, fn):
    for line in input_file:
        output_file.write(fn(line.rstrip("\n")) + "\n")


def main():
    arg_parser = ArgumentParser()
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    swap_parser = subparsers.add_parser("swap", help="Swap the two operands of every line")
    swap_parser.add_argument("input", type=argparse.FileType("r"))
    swap_parser.add_argument("output", type=argparse.FileType("w"))

    replace_parser = subparsers.add_parser(
        "replace-opcode", help="Replace the first opcode byte of every line"
    )
    replace_parser.add_argument("input", type=argparse.FileType("r"))
    replace_parser.add_argument("output", type=argparse.FileType("w"))
    replace_parser.add_argument("opcode")

    arguments = arg_parser.parse_args()

    if arguments.command == "swap":
        fn = swap_operand
    else:
        opcode = arguments.opcode.lower()
        try:
            if len(bytes.fromhex(opcode)) != 1:
                raise ValueError(opcode)
        except ValueError:
            arg_parser.error(f"opcode must be a two digit hex byte, got {opcode!r}")
        fn = lambda line: replace_first_opcode(line, opcode)

    with arguments.input, arguments.output:
        rewrite_lines(arguments.input, arguments.output, fn)


if __name__ == "__main__":
    main()
