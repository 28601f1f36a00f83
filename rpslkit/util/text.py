# -*- coding: utf-8; -*-

import io
import re
import string


CHAR_NAMES = {
    u'\t': u'tab',
    u'\n': u'LF',
    u'\r': u'CR',
    u' ': u'space',
    u'%': u'percent sign (%)',
    u'+': u'plus sign (+)',
    u'-': u'dash (-)',
    u':': u'colon (:)',
    u'_': u'underscore (_)',
}


def _char_ranges(chars, as_hex=False):
    intervals = []
    min_ = max_ = None
    for c in chars:
        point = ord(c)
        if max_ == point - 1:
            max_ = point
        else:
            if min_ is not None:
                intervals.append((min_, max_))
            min_ = max_ = point
    if min_ is not None:
        intervals.append((min_, max_))
    if as_hex:
        show = lambda point: u'%#04x' % point
    else:
        show = chr
    return [show(p1) if p1 == p2 else u'%s–%s' % (show(p1), show(p2))
            for (p1, p2) in intervals]


def format_chars(chars):
    u"""Describe a set of characters for a human.

    >>> print(format_chars([u'\\x00', u'\\x04', u'\\x05', u'\\x06', u'\\x07',
    ...                     u' ', u'0', u'1', u'2', u'3', u'4', u'5', u'6',
    ...                     u'7', u'8', u'9', u'A', u'B', u'C', u'D', u'E',
    ...                     u'F']))
    A–F or 0–9 or space or 0x00 or 0x04–0x07

    >>> print(format_chars([u'\\t', u' ', u'+']))
    tab or space or plus sign (+)

    >>> print(format_chars([u'!', u'#', u'$', u'&', u'*', u'.', u'a', u'b']))
    a–b or !#$&*.

    >>> print(format_chars([u'é']))
    0xe9
    """
    (letters, digits, named, visible, other) = ([], [], [], [], [])
    for c in sorted(chars):
        if c in string.ascii_letters:
            letters.append(c)
        elif c in string.digits:
            digits.append(c)
        elif c in CHAR_NAMES:
            named.append(c)
        elif 0x21 <= ord(c) < 0x7F:
            visible.append(c)
        else:
            other.append(c)
    pieces = (_char_ranges(letters) + _char_ranges(digits) +
              [CHAR_NAMES[c] for c in named] +
              [u''.join(visible)] +
              _char_ranges(other, as_hex=True))
    return u' or '.join(piece for piece in pieces if piece)


def is_ascii(s):
    u"""
    >>> is_ascii(u'from AS12 accept AS12')
    True
    >>> is_ascii(u'Ünïcode notice')
    False
    """
    try:
        s.encode('ascii')
        return True
    except UnicodeError:
        return False


def has_ascii_control(s):
    u"""
    >>> has_ascii_control(u'LA1 - CoreSite One Wilshire')
    False
    >>> has_ascii_control(u'tab\\tseparated')
    True
    >>> has_ascii_control(u'\\x7f')
    True
    """
    return re.search(u'[\u0000-\u001F\u007F]', s) is not None


def printable(s):
    # Control characters from a malformed input should not reach
    # a terminal or an HTML document unchanged.
    return re.sub(
        pattern=u'[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]',
        repl=u'\N{REPLACEMENT CHARACTER}',
        string=s
    )


class MockStdio(object):

    """Suitable as a mock stdout/stderr for tests."""

    def __init__(self):
        self.buffer = io.BytesIO()

    def write(self, s):
        self.buffer.write(s.encode('utf-8'))
