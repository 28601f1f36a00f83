# -*- coding: utf-8; -*-

"""Classes for representing RPSL attributes and objects.

Names and values come from two places: the grammar in
:mod:`rpslkit.syntax.rpsl`, which has already restricted the input
to valid characters, and user code, which has not. Only the latter
is validated; the grammar uses the ``_trusted`` constructors.
"""

from collections import namedtuple
import string

from rpslkit.util.text import has_ascii_control, is_ascii


#: Width of the column in which attribute names are rendered.
NAME_WIDTH = 16


###############################################################################
# Errors


class InvalidNameError(ValueError):

    """A string that cannot be an attribute name."""

    reason = u'invalid attribute name'

    def __init__(self, text):
        super(InvalidNameError, self).__init__(u'%s: %r' % (self.reason, text))
        self.text = text


class EmptyName(InvalidNameError):

    reason = u'attribute name is empty'


class NonAsciiName(InvalidNameError):

    reason = u'attribute name contains non-ASCII characters'


class NonAlphabeticFirstChar(InvalidNameError):

    reason = u'attribute name does not begin with an ASCII letter'


class NonAlphanumericLastChar(InvalidNameError):

    reason = u'attribute name does not end with an ASCII letter or digit'


class InvalidValueError(ValueError):

    """A string that cannot be (a line of) an attribute value.

    :attr:`index` is the position of the offending line
    when the value was given as a sequence of lines, otherwise `None`.
    """

    reason = u'invalid attribute value'

    def __init__(self, text, index=None):
        if index is None:
            message = u'%s: %r' % (self.reason, text)
        else:
            message = u'%s in line %d: %r' % (self.reason, index, text)
        super(InvalidValueError, self).__init__(message)
        self.text = text
        self.index = index


class NonAsciiValue(InvalidValueError):

    reason = u'attribute value contains non-ASCII characters'


class ControlCharInValue(InvalidValueError):

    reason = u'attribute value contains control characters'


###############################################################################
# Attributes


class RPSLString(str):

    """Base class for strings with a meaning in RPSL."""

    __slots__ = ()

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, str.__repr__(self))


class Name(RPSLString):

    """The name of an attribute, such as ``aut-num`` or ``remarks``.

    A valid name consists of ASCII characters, begins with a letter
    and ends with a letter or a digit. Comparison is case-sensitive.
    """

    __slots__ = ()

    def __new__(cls, text):
        if not text.strip():
            raise EmptyName(text)
        if not is_ascii(text):
            raise NonAsciiName(text)
        if text[0] not in string.ascii_letters:
            raise NonAlphabeticFirstChar(text)
        if text[-1] not in string.ascii_letters + string.digits:
            raise NonAlphanumericLastChar(text)
        return super(Name, cls).__new__(cls, text)

    @classmethod
    def _trusted(cls, text):
        return str.__new__(cls, text)


def _coerce_empty(line):
    if line is None or not line.strip():
        return None
    return line


def _check_line(line, index):
    if line is None:
        return
    if not is_ascii(line):
        raise NonAsciiValue(line, index)
    if has_ascii_control(line):
        raise ControlCharInValue(line, index)


class Value(object):

    """The value of an attribute.

    Constructed from a single string (a single-line value) or
    a sequence of strings, one per physical line. A sequence of exactly one
    string gives the same single-line value as that string alone.

    Every line that is empty or all whitespace is stored as `None`;
    any other line is stored as given, trailing spaces included.

    A value compares equal to a `str` (single-line) or to a list or tuple
    of lines (multi-line) under the same rule. Its hash matches that of
    the stored content (``u''`` for an absent single line), so a `str`
    key finds a single-line value in a dict, but a whitespace-only `str`
    that compares equal does not hash the same. Do not mix values and
    strings as keys unless the strings are normalized.

    >>> Value(u'Packet Street 6')
    Value('Packet Street 6')
    >>> Value([u'Packet Street 6'])
    Value('Packet Street 6')
    >>> Value([u'Locations', u'   ', u'LA1'])
    Value(['Locations', None, 'LA1'])
    """

    __slots__ = ('_lines',)

    def __init__(self, value):
        if value is None or isinstance(value, str):
            lines = [value]
            _check_line(value, None)
        else:
            lines = list(value)
            for (i, line) in enumerate(lines):
                _check_line(line, i)
        self._lines = tuple(_coerce_empty(line) for line in lines) or (None,)

    @classmethod
    def _trusted(cls, lines):
        self = cls.__new__(cls)
        self._lines = tuple(_coerce_empty(line) for line in lines) or (None,)
        return self

    @property
    def lines(self):
        """A tuple with one string (or `None`) per line."""
        return self._lines

    @property
    def multiline(self):
        return len(self._lines) > 1

    def with_content(self):
        """The lines that are not empty, in order."""
        return [line for line in self._lines if line is not None]

    def __len__(self):
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)

    def __repr__(self):
        if self.multiline:
            return 'Value(%r)' % (list(self._lines),)
        return 'Value(%r)' % (self._lines[0],)

    def __str__(self):
        return u'\n'.join(line or u'' for line in self._lines)

    def __eq__(self, other):
        if isinstance(other, Value):
            return self._lines == other._lines
        if isinstance(other, str):
            return not self.multiline and \
                self._lines[0] == _coerce_empty(other)
        if isinstance(other, (list, tuple)):
            return self.multiline and \
                self._lines == tuple(_coerce_empty(line) for line in other)
        return NotImplemented

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    def __hash__(self):
        if self.multiline:
            return hash(self._lines)
        return hash(self._lines[0] or u'')


class Attribute(namedtuple('Attribute', ('name', 'value'))):

    """A name and a value. Plain strings are converted as needed:

    >>> Attribute(u'remarks', [u'Locations', u'LA1'])
    Attribute(Name('remarks'), Value(['Locations', 'LA1']))
    """

    __slots__ = ()

    def __new__(cls, name, value):
        if not isinstance(name, Name):
            name = Name(name)
        if not isinstance(value, Value):
            value = Value(value)
        return super(Attribute, cls).__new__(cls, name, value)

    def __repr__(self):
        return 'Attribute(%r, %r)' % self

    def __str__(self):
        lines = self.value.lines
        r = u'%-*s%s\n' % (NAME_WIDTH, self.name + u':', lines[0] or u'')
        for line in lines[1:]:
            r += u'%s%s\n' % (u' ' * NAME_WIDTH, line or u'')
        return r


###############################################################################
# Objects


class Object(object):

    """An RPSL object: an ordered sequence of attributes.

    Attribute names may repeat. The first attribute usually
    names the class of the object, e.g. ``aut-num`` or ``role``.
    """

    __slots__ = ('attributes',)

    def __init__(self, attributes):
        self.attributes = [attr if isinstance(attr, Attribute)
                           else Attribute(*attr)
                           for attr in attributes]

    def __repr__(self):
        return 'Object(%r)' % self.attributes

    def __str__(self):
        return u''.join(str(attr) for attr in self.attributes) + u'\n'

    def __eq__(self, other):
        if isinstance(other, Object):
            return self.attributes == other.attributes
        return NotImplemented

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    __hash__ = None

    def __getitem__(self, i):
        return self.attributes[i]

    def __len__(self):
        return len(self.attributes)

    def __iter__(self):
        return iter(self.attributes)

    @property
    def names(self):
        return [attr.name for attr in self.attributes]

    def get(self, name, default=None):
        """The value of the first attribute called `name`."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return default

    def getall(self, name):
        """The values of all attributes called `name`, in order."""
        return [attr.value for attr in self.attributes if attr.name == name]


class ObjectCollection(object):

    """The objects of a whois response, in order.

    :attr:`name` is the name of the input, if known.
    :attr:`messages` holds the server messages (``%`` lines) without
    the leading ``%``. :attr:`errors` holds the :exc:`ParseError`
    exceptions for any input that was skipped as malformed.
    """

    __slots__ = ('objects', 'messages', 'errors', 'name')

    def __init__(self, objects, messages=None, errors=None, name=None):
        self.objects = list(objects)
        self.name = name
        self.messages = list(messages or [])
        self.errors = list(errors or [])

    def __repr__(self):
        return 'ObjectCollection(%r)' % self.objects

    def __str__(self):
        return u''.join(str(obj) for obj in self.objects)

    def __eq__(self, other):
        if isinstance(other, ObjectCollection):
            return self.objects == other.objects
        return NotImplemented

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    __hash__ = None

    def __getitem__(self, i):
        return self.objects[i]

    def __len__(self):
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)
