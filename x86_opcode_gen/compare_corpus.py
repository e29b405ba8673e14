"""
Compare the generated opcode lines with the hand written known opcodes and
stop at the first difference.

`x86-opcode-gen --corpus_dir KnownOpCodes`
"""

import os
import sys
from argparse import ArgumentParser

import tqdm

from .compare import SAMPLE_PREVIEW, Side, compare_lines
from .families import expected_total_line_count, generate_opcodes
from .opcode_utils import dump_lines, find_corpus_files, read_known_opcodes


def print_report(report, generated, known_count, start_view=None):
    # Only the compared range, the surplus is left to the preview below.
    end = min(len(generated), known_count)
    if report.divergence is not None:
        end = report.divergence.index + 1
    if start_view is not None:
        for i in range(start_view, end):
            print(f"  {i:,}: {generated[i]}")

    if report.divergence is not None:
        print()
        print("Different found:")
        print()
        print("  [known]", report.divergence.known)
        print("    [gen]", report.divergence.generated)
    print()

    mismatch = report.length_mismatch
    if mismatch is None:
        return
    if mismatch.longer == Side.GENERATED:
        print(f"Missing known-opcodes: {mismatch.count:,}")
    else:
        print(f"Missing generated-opcodes: {mismatch.count:,}")
    print()
    label = mismatch.longer.value
    for line in mismatch.sample:
        print(f"  {label}: {line}")
    if mismatch.truncated:
        print(f"  {label}: ...")
    print()


def main():
    arg_parser = ArgumentParser()
    arg_parser.add_argument("--corpus_dir", default="KnownOpCodes")
    arg_parser.add_argument("--sample_preview", default=SAMPLE_PREVIEW, type=int)
    arg_parser.add_argument("--start_view", default=None, type=int)
    arg_parser.add_argument("--output", default=None, type=str)

    arguments = arg_parser.parse_args()

    if not os.path.isdir(arguments.corpus_dir):
        print("Corpus directory not found:", arguments.corpus_dir)
        sys.exit(2)
    corpus_files = find_corpus_files(arguments.corpus_dir)
    if len(corpus_files) == 0:
        print("No known opcode files in", arguments.corpus_dir)
        sys.exit(2)

    known = list(read_known_opcodes(corpus_files))
    print("Loaded", len(known), "known opcodes from", len(corpus_files), "files")

    generated = list(
        tqdm.tqdm(generate_opcodes(), total=expected_total_line_count(), desc="gen")
    )
    if arguments.output:
        dump_lines(arguments.output, generated)

    report = compare_lines(generated, known, arguments.sample_preview)
    print_report(report, generated, len(known), arguments.start_view)

    if report.divergence is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
