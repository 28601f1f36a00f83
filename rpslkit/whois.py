# -*- coding: utf-8; -*-

"""Assemble RPSL objects and whois responses from attributes.

This layer is line-oriented: it looks at the first character of a line
to decide what comes next (a blank line, a ``%`` server message,
or an attribute) and leaves the rest to the grammar
in :mod:`rpslkit.syntax.rpsl`.
"""

import logging

from rpslkit.citation import RFC
from rpslkit.parse import ParseError, Stream, Symbol
from rpslkit.structure import Object, ObjectCollection
from rpslkit.syntax import rpsl


logger = logging.getLogger(__name__)


# Symbols with no rules, only for referring to them in parse errors.

rpsl_object = Symbol(u'object', RFC(2622, section=u'2'))


def parse_attribute(text):
    """Parse one attribute from the beginning of `text`.

    Continuation lines are included; the next attribute is not.
    A line that begins with a continuation marker must be
    a valid continuation line.

    :return: A pair: the :class:`~rpslkit.structure.Attribute` and
        the rest of `text`.
    :raises: :exc:`~rpslkit.parse.ParseError`
    """
    stream = Stream(text)
    attr = _parse_attribute(stream)
    return (attr, stream.remaining)


def parse_server_message(text):
    """Parse one ``%`` line from the beginning of `text`.

    :return: A pair: the message (without the ``%`` and the spaces
        after it) and the rest of `text`.
    :raises: :exc:`~rpslkit.parse.ParseError`
    """
    stream = Stream(text)
    message = stream.parse(rpsl.server_message)
    return (message, stream.remaining)


def parse_object(text, name=None):
    """Parse `text` consisting of exactly one RPSL object.

    Blank lines before and after the object are allowed.

    :param name: The name of the input, for error messages.
    :return: An :class:`~rpslkit.structure.Object`.
    :raises: :exc:`~rpslkit.parse.ParseError`
    """
    stream = Stream(text, name)
    _skip_blank_lines(stream)
    obj = _parse_object(stream)
    _skip_blank_lines(stream)
    if not stream.eof:
        raise stream.error(u'end of data', rpsl_object)
    return obj


def parse_whois_response(text, name=None, skip_malformed=False):
    """Parse the objects and server messages of a whois response.

    :param name: The name of the input, for error messages.
    :param skip_malformed:
        If `False`, the first malformed line raises
        :exc:`~rpslkit.parse.ParseError`. If `True`, the error is
        logged and recorded, the object is discarded, and parsing resumes
        at the next blank line or server message.
    :return: An :class:`~rpslkit.structure.ObjectCollection`.
    """
    stream = Stream(text, name)
    (messages, errors) = ([], [])
    objects = list(iter_objects(stream, skip_malformed, messages, errors))
    logger.debug('parsed %d objects, %d server messages and %d errors '
                 'from %s', len(objects), len(messages), len(errors),
                 name or 'input')
    return ObjectCollection(objects, messages, errors, name)


def iter_objects(stream, skip_malformed=False, messages=None, errors=None):
    """Generate objects from a :class:`~rpslkit.parse.Stream`.

    Server messages are appended to the `messages` list if given,
    and skipped errors to the `errors` list if given.
    """
    while not stream.eof:
        first = stream.peek()
        if first == u'\n':
            stream.skip_line()
            continue
        obj = None
        try:
            if first == u'%':
                message = stream.parse(rpsl.server_message)
                logger.debug('server message: %s', message)
                if messages is not None:
                    messages.append(message)
            else:
                obj = _parse_object(stream)
        except ParseError as exc:
            if not skip_malformed:
                raise
            logger.warning('skipping malformed input: %s', exc)
            if errors is not None:
                errors.append(exc)
            _recover(stream, first)
        if obj is not None:
            yield obj


def _skip_blank_lines(stream):
    while stream.peek() == u'\n':
        stream.skip_line()


def _parse_attribute(stream):
    attr = stream.parse(rpsl.attribute)
    first = stream.peek()
    if first and rpsl.continuation_char.match(first) and \
            not attr.value.multiline:
        # A continuation marker commits to a continuation line.
        stream.parse(rpsl.continuation_line)
    return attr


def _parse_object(stream):
    beginning = stream.point
    attributes = [_parse_attribute(stream)]
    while not stream.eof and stream.peek() not in (u'\n', u'%'):
        attributes.append(_parse_attribute(stream))
    logger.debug('object %s: %s attributes at offset %d',
                 attributes[0].name, len(attributes), beginning)
    return Object(attributes)


def _recover(stream, first):
    # A bad server message spoils only its own line;
    # a bad attribute spoils the rest of its object.
    stream.skip_line()
    if first != u'%':
        while not stream.eof and stream.peek() not in (u'\n', u'%'):
            stream.skip_line()
