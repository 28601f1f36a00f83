# -*- coding: utf-8; -*-

"""The grammar of RPSL attributes and whois server messages.

An attribute is a name, a colon, and a value that may be continued
on following lines, each starting with a space, a tab or a plus sign::

    remarks:        Locations
                    LA1 - CoreSite One Wilshire
    +               NY1 - Equinix New York, Newark

Values are limited to printable ASCII. Server messages (``%`` lines)
are not RPSL but are interleaved with it in whois responses, and may
contain any character that is not a control character.
"""

from rpslkit.citation import Citation, RFC
from rpslkit.parse import (MAX_CODE_POINT, auto, char_range, fill_names, many,
                           maybe_str, named, pivot, skip, string)
from rpslkit.structure import Attribute, Name, Value
from rpslkit.syntax.common import ALPHA, DIGIT, HTAB, LF, SP, VCHAR, WSP


blank = string(WSP)                                                     > auto

name_char = ALPHA | DIGIT | '-' | '_'                                   > auto

# At least two characters: a single letter is never a name here,
# although ``Name(u'a')`` is accepted.
attribute_name = Name._trusted << (
    ALPHA + string(name_char) + (ALPHA | DIGIT))                        > pivot

value_char = char_range(0x20, 0x7E)                                     > auto

# Never begins with a space, so that `blank` before it takes all of them.
attribute_value = maybe_str(VCHAR + string(value_char))                 > pivot

continuation_char = SP | HTAB | '+'                                     > auto

continuation_line = (skip(continuation_char) * skip(blank) *
                     attribute_value * skip(LF))                        > pivot


def _build_attribute(name, first, continued):
    return Attribute(name, Value._trusted([first] + continued))

attribute = _build_attribute << (
    attribute_name * skip(':') * skip(blank) * attribute_value * skip(LF) *
    many(continuation_line))                                            > pivot


# Every character except the C0 and C1 controls.
nonctl = char_range(0x20, 0x7E) | char_range(0xA0, MAX_CODE_POINT)      > auto

server_message = (skip('%') * skip(blank) *
                  maybe_str((nonctl - SP) + string(nonctl)) * skip(LF)) \
    > named(u'server-message',
            Citation(u'RIPE Database Query Reference Manual',
                     u'https://docs.db.ripe.net/'),
            is_pivot=True)


fill_names(globals(), RFC(2622, section=u'2'))
