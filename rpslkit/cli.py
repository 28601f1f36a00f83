# -*- coding: utf-8; -*-

"""The command-line interface to RPSLkit."""

import argparse
import logging
import sys
import traceback

import rpslkit
from rpslkit import reports
from rpslkit.inputs import InputError, whois_input
from rpslkit.parse import ParseError


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description=u'Parse RPSL objects from whois responses.')
    parser.add_argument(u'--version', action='version',
                        version=u'RPSLkit %s' % rpslkit.__version__)
    parser.add_argument(u'-o', u'--output', choices=reports.formats,
                        default=u'text', help=u'output format')
    parser.add_argument(u'--encoding', default=u'utf-8',
                        help=u'encoding of the input files')
    parser.add_argument(u'--skip-malformed', action='store_true',
                        help=u'skip objects that cannot be parsed '
                             u'instead of stopping at the first one')
    parser.add_argument(u'--fail-on-error', action='store_true',
                        help=u'exit with a non-zero status '
                             u'if any malformed input was skipped')
    parser.add_argument(u'-v', u'--verbose', action='store_true',
                        help=u'log what is being parsed')
    parser.add_argument(u'--full-traceback', action='store_true',
                        help=u'do not hide the traceback on exceptions')
    parser.add_argument(u'path', nargs='+')
    return parser.parse_args(argv[1:])


def run_cli(args, stdout, stderr):
    report = reports.formats[args.output]
    skipped = []
    def generate_collections():
        for coll in whois_input(args.path, args.encoding,
                                args.skip_malformed):
            skipped.extend(coll.errors)
            yield coll

    try:
        # Reports are written as UTF-8 bytes regardless of the locale,
        # since server messages may contain any character.
        report(generate_collections(), stdout.buffer)
    except (EnvironmentError, InputError, ParseError) as exc:
        if args.full_traceback:
            traceback.print_exc(file=stderr)
        stderr.write('rpslkit: %s\n' % exc)
        return 1

    if args.fail_on_error and skipped:
        return 1
    return 0


def excepthook(_type, exc, _traceback):     # pragma: no cover
    sys.stderr.write('rpslkit: unhandled exception: %r\n' % exc)


def main():     # pragma: no cover
    args = parse_args(sys.argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s: %(levelname)s: %(message)s')
    if not args.full_traceback:
        sys.excepthook = excepthook
    sys.exit(run_cli(args, sys.stdout, sys.stderr))

if __name__ == '__main__':
    main()
