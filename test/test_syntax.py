# -*- coding: utf-8; -*-

import pytest

from rpslkit.parse import (MAX_CODE_POINT, ParseError, Stream, char_range,
                           literal, many, named, skip, string, string1,
                           times)
from rpslkit.structure import Attribute, Name, Value
from rpslkit.syntax import rpsl
from rpslkit.syntax.common import ALPHA, DIGIT, SP
from rpslkit.whois import parse_attribute, parse_object, parse_server_message


def parse(parser, text):
    return Stream(text).parse(parser, to_eof=True)

def no_parse(parser, text):
    with pytest.raises(ParseError):
        parse(parser, text)


def test_parser_edge_cases():
    p = many(ALPHA | DIGIT)                            > named(u'p')
    p1 = '1' * p                                       > named(u'p1')
    p2 = '11' * p * skip('\n')                         > named(u'p2')
    assert parse(p1 | p2, u'11abc') == (u'1', [u'1', u'a', u'b', u'c'])
    assert parse(p1 | p2, u'11abc\n') == (u'11', [u'a', u'b', u'c'])

    p = times(2, 3, DIGIT)                             > named(u'p')
    assert parse(p, u'12') == [u'1', u'2']
    assert parse(p, u'123') == [u'1', u'2', u'3']
    no_parse(p, u'1')
    no_parse(p, u'1234')

    p = string1(DIGIT)                                 > named(u'p')
    assert parse(p, u'2622') == u'2622'
    no_parse(p, u'')


def test_stream_takes_longest_prefix():
    stream = Stream(u'aaab')
    assert stream.parse(string(literal('a'))) == u'aaa'
    assert stream.point == 3
    assert stream.remaining == u'b'
    with pytest.raises(ParseError):
        stream.parse(literal('c'))
    assert stream.point == 3
    with pytest.raises(ParseError):
        stream.parse(literal('B'))
    assert stream.parse(literal('B', case_sensitive=False)) == u'b'
    assert stream.eof
    assert stream.remaining == u''


def test_char_classes():
    p = char_range(0x20, 0x7E) | char_range(0xA0, MAX_CODE_POINT)
    assert p.match(u'a')
    assert p.match(u' ')
    assert p.match(u'é')
    assert p.match(u'—')
    assert not p.match(u'\x85')
    assert not p.match(u'\t')
    assert not (p - SP).match(u' ')
    assert (p - SP).match(u'—')
    with pytest.raises(ValueError):
        char_range(0x100, 0x200)


def test_long_value():
    text = u'x' * 5000
    assert parse(rpsl.attribute_value, text) == text


@pytest.mark.parametrize('text', [
    u'ab',
    u'a1',
    u'aut-num',
    u'mnt-by',
    u'ASNumber',
    u'Comment_Field',
    u'x--y__z9',
])
def test_attribute_name(text):
    name = parse(rpsl.attribute_name, text)
    assert name == text
    assert isinstance(name, Name)


@pytest.mark.parametrize('text', [
    u'',
    u'a',
    u'1abc',
    u'-abc',
    u'_abc',
    u'abc-',
    u'abc_',
    u'as name',
    u'as.name',
    u'näme',
    u' name',
])
def test_attribute_name_invalid(text):
    no_parse(rpsl.attribute_name, text)


@pytest.mark.parametrize(('text', 'expected'), [
    (u'', u''),
    (u'AS3333', u'AS3333'),
    (u'from AS12 accept AS12', u'from AS12 accept AS12'),
    (u'RIPE # Filtered', u'RIPE # Filtered'),
    (u'trailing spaces   ', u'trailing spaces   '),
    (u'!"#$%&\'()*+,-./:;<=>?@[\\]^_`{|}~',
     u'!"#$%&\'()*+,-./:;<=>?@[\\]^_`{|}~'),
])
def test_attribute_value(text, expected):
    assert parse(rpsl.attribute_value, text) == expected


@pytest.mark.parametrize('text', [
    u'Ünïcode notice',
    u'tab\tinside',
    u'carriage return\r',
    u'bell\x07',
    u'delete\x7f',
    u'line\nbreak',
])
def test_attribute_value_invalid(text):
    no_parse(rpsl.attribute_value, text)


def test_attribute_single_line():
    (attr, rest) = parse_attribute(
        u'import:         from AS12 accept AS12\n')
    assert attr == Attribute(u'import', u'from AS12 accept AS12')
    assert attr.name == u'import'
    assert not attr.value.multiline
    assert attr.value == u'from AS12 accept AS12'
    assert rest == u''


def test_attribute_continuation():
    (attr, rest) = parse_attribute(
        u'remarks:        Locations\n'
        u'                LA1 - CoreSite One Wilshire\n'
        u'                NY1 - Equinix New York, Newark\n'
        u'remarks:        Peering Policy\n'
    )
    assert attr.name == u'remarks'
    assert attr.value.multiline
    assert attr.value == [u'Locations',
                          u'LA1 - CoreSite One Wilshire',
                          u'NY1 - Equinix New York, Newark']
    assert rest == u'remarks:        Peering Policy\n'

    (attr, rest) = parse_attribute(rest)
    assert attr == Attribute(u'remarks', u'Peering Policy')
    assert rest == u''


def test_continuation_markers():
    (attr, rest) = parse_attribute(
        u'descr:  one\n'
        u'\ttwo\n'
        u'+   three\n'
        u' \t four\n'
        u'source: TEST\n'
    )
    assert attr.value == [u'one', u'two', u'three', u'four']
    assert rest == u'source: TEST\n'


def test_empty_lines_in_value():
    (attr, rest) = parse_attribute(u'remarks:\n+\n        \n+ text\n')
    assert attr.value == Value([None, None, None, u'text'])
    assert attr.value.with_content() == [u'text']
    assert len(attr.value) == 4
    assert rest == u''


@pytest.mark.parametrize('text', [
    u'remarks:\n',
    u'remarks:        \n',
    u'remarks:\t\n',
])
def test_empty_value(text):
    (attr, rest) = parse_attribute(text)
    assert attr.value.lines == (None,)
    assert attr.value == u''
    assert rest == u''


def test_attribute_keeps_trailing_spaces():
    (attr, _) = parse_attribute(u'remarks: text  \n   more  \n')
    assert attr.value == [u'text  ', u'more  ']


def test_attribute_stops_at_blank_line():
    (attr, rest) = parse_attribute(u'aut-num: AS1\n\nas-name: FOO\n')
    assert attr == Attribute(u'aut-num', u'AS1')
    assert rest == u'\nas-name: FOO\n'


def test_attribute_stops_at_server_message():
    (attr, rest) = parse_attribute(u'aut-num: AS1\n% note\n')
    assert attr.value == u'AS1'
    assert rest == u'% note\n'


@pytest.mark.parametrize('text', [
    u'remarks : text\n',
    u'remarks text\n',
    u'remarks: text',
    u'remarks: text\r\n',
    u'remarks: Ünïcode\n',
    u'a: text\n',
    u' remarks: text\n',
    u'% remarks: text\n',
    u'',
])
def test_attribute_invalid(text):
    with pytest.raises(ParseError):
        parse_attribute(text)


def test_parse_error_position():
    with pytest.raises(ParseError) as excinfo:
        parse_attribute(u'remarks text\n')
    exc = excinfo.value
    assert exc.position == 7
    assert (exc.line, exc.column) == (1, 8)
    assert exc.found == u' '
    assert u'unexpected space at line 1, column 8' in str(exc)
    assert u'colon (:)' in str(exc)

    # After a valid continuation line, an invalid one is left alone
    # and then fails as the next attribute.
    (attr, rest) = parse_attribute(u'remarks: one\n+ two\n+ thrée\n')
    assert attr.value == [u'one', u'two']
    assert rest == u'+ thrée\n'
    with pytest.raises(ParseError) as excinfo:
        parse_object(u'remarks: one\n+ two\n+ thrée\n')
    exc = excinfo.value
    assert (exc.line, exc.column) == (3, 1)
    assert u'unexpected plus sign (+)' in str(exc)

    with pytest.raises(ParseError) as excinfo:
        parse_attribute(u'remarks: text')
    assert u'unexpected end of data' in str(excinfo.value)


@pytest.mark.parametrize(('text', 'position', 'found'), [
    (u'remarks: one\n+ thrée\n', (2, 6), u'0xe9'),
    (u'remarks: one\n\tbell\x07\n', (2, 6), u'0x07'),
    (u'remarks: one\n Ünïcode\n', (2, 2), u'0xdc'),
    (u'remarks:\n+\r\n', (2, 2), u'CR'),
])
def test_bad_first_continuation_line(text, position, found):
    # A continuation marker after a single line means
    # the attribute must go on; it does not end quietly.
    with pytest.raises(ParseError) as excinfo:
        parse_attribute(text)
    exc = excinfo.value
    assert (exc.line, exc.column) == position
    assert u'unexpected %s' % found in str(exc)
    with pytest.raises(ParseError):
        parse_object(text)


@pytest.mark.parametrize(('text', 'expected'), [
    (u'% This is the RIPE Database query service.\n',
     u'This is the RIPE Database query service.'),
    (u"% Information related to 'AS3333'\n",
     u"Information related to 'AS3333'"),
    (u'%ERROR:101: no entries found\n', u'ERROR:101: no entries found'),
    (u'%\n', u''),
    (u'%    \n', u''),
    (u'%\tindented\n', u'indented'),
    (u'% trailing  \n', u'trailing  '),
    (u'% Ünïcode notice\n', u'Ünïcode notice'),
    (u'% em — dash\n', u'em — dash'),
])
def test_server_message(text, expected):
    assert parse(rpsl.server_message, text) == expected


@pytest.mark.parametrize('text', [
    u'remarks: text\n',
    u' % text\n',
    u'% text',
    u'% bell\x07\n',
    u'% next line\x85\n',
    u'% text\r\n',
])
def test_server_message_invalid(text):
    no_parse(rpsl.server_message, text)


def test_server_message_remaining():
    (message, rest) = parse_server_message(
        u'% Ünïcode notice\naut-num: AS1\n')
    assert message == u'Ünïcode notice'
    assert rest == u'aut-num: AS1\n'

    # The same text is not a valid attribute value.
    no_parse(rpsl.attribute_value, u'Ünïcode notice')
