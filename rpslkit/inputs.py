# -*- coding: utf-8; -*-

"""Reading whois responses from files (mainly for the command-line tool)."""

import io

from rpslkit.whois import parse_whois_response


class InputError(Exception):

    pass


def whois_input(paths, encoding='utf-8', skip_malformed=False):
    """Parse every file in `paths` as a whois response.

    Line endings are normalized to LF on reading.

    :return: An iterable of :class:`~rpslkit.structure.ObjectCollection`.
    :raises: :exc:`InputError` if a file cannot be decoded;
        :exc:`~rpslkit.parse.ParseError` on malformed input unless
        `skip_malformed` is true.
    """
    for path in paths:
        with io.open(path, encoding=encoding) as f:
            try:
                text = f.read()
            except UnicodeError as exc:
                raise InputError('%s: cannot decode as %s (%s)' %
                                 (path, encoding, exc))
        yield parse_whois_response(text, name=path,
                                   skip_malformed=skip_malformed)
