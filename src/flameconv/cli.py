#!/usr/bin/env python3
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
import logging
import sys

from flameconv import flame_graph
from flameconv.configured_logger import logger, set_level
from flameconv.errors import FlameConvError, FormatMismatch
from flameconv.fetch import DEFAULT_TIMEOUT, read_input

# Converters keyed by the name detect_format() returns for them.
CONVERTERS = {
    flame_graph.FLAME_GRAPH_FORMAT: flame_graph.convert_flame_graph_profile,
}


def convert(text, thread_name='MainThread'):
    format_name = flame_graph.detect_format(text)
    if format_name is None:
        raise FormatMismatch('input is not in a supported profile format')
    logger.info(f'Detected {format_name} input')
    return CONVERTERS[format_name](text, thread_name=thread_name)


def build_parser():
    parser = ArgumentParser(
        description='Convert a collapsed stack profile (as consumed by '
        'flamegraph.pl) to the Firefox profiler input format.',
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--input',
                        type=str,
                        required=True,
                        help='Path or http(s) URL of the input profile, '
                        'or - to read stdin.')
    parser.add_argument('--output',
                        type=str,
                        default=None,
                        help='Path to the output JSON file. Writes to stdout '
                        'when omitted.')
    parser.add_argument('--indent',
                        type=int,
                        default=None,
                        help='Indentation of the output JSON.')
    parser.add_argument('--thread-name',
                        type=str,
                        default='MainThread',
                        help='Name of the generated thread.')
    parser.add_argument('--timeout',
                        type=float,
                        default=DEFAULT_TIMEOUT,
                        help='Timeout in seconds when fetching a URL.')
    parser.add_argument('--log-level',
                        type=str,
                        default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity.')
    return parser


def main(args):
    set_level(getattr(logging, args.log_level))
    text = read_input(args.input, timeout=args.timeout)
    profile = convert(text, thread_name=args.thread_name)
    output = profile.dumps(indent=args.indent)

    if args.output is None:
        sys.stdout.write(output)
        sys.stdout.write('\n')
        return

    with open(args.output, 'w') as profile_file:
        profile_file.write(output)
    logger.info(f'Done writing to {args.output}')


def run(argv=None):
    args = build_parser().parse_args(argv)
    try:
        main(args)
    except FlameConvError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(run())
