# -*- coding: utf-8; -*-

from rpslkit.__metadata__ import version as __version__
from rpslkit.parse import ParseError, Stream
from rpslkit.reports.html import html_report
from rpslkit.reports.text import text_report
from rpslkit.structure import (
    Attribute,
    ControlCharInValue,
    EmptyName,
    InvalidNameError,
    InvalidValueError,
    Name,
    NonAlphabeticFirstChar,
    NonAlphanumericLastChar,
    NonAsciiName,
    NonAsciiValue,
    Object,
    ObjectCollection,
    Value,
)
from rpslkit.whois import (
    iter_objects,
    parse_attribute,
    parse_object,
    parse_server_message,
    parse_whois_response,
)

__all__ = [
    'Attribute',
    'ControlCharInValue',
    'EmptyName',
    'InvalidNameError',
    'InvalidValueError',
    'Name',
    'NonAlphabeticFirstChar',
    'NonAlphanumericLastChar',
    'NonAsciiName',
    'NonAsciiValue',
    'Object',
    'ObjectCollection',
    'ParseError',
    'Stream',
    'Value',
    'html_report',
    'iter_objects',
    'parse_attribute',
    'parse_object',
    'parse_server_message',
    'parse_whois_response',
    'text_report',
]
