# -*- coding: utf-8; -*-

import pkgutil

import dominate
import dominate.tags as H
from dominate.util import text as text_node

from rpslkit.__metadata__ import version
from rpslkit.util.text import printable


css_code = pkgutil.get_data('rpslkit.reports', 'html.css').decode('utf-8')


def html_report(collections, buf):
    """Generate an HTML document showing the parsed objects.

    :param collections:
        An iterable of :class:`~rpslkit.structure.ObjectCollection`.
    :param buf:
        The file (or file-like object) to which the report will be written.
        It must be opened in binary mode (not text).
    """
    title = u'RPSLkit report'
    document = dominate.document(title=title)
    with document:
        H.attr(lang=u'en')
    with document.head:
        H.meta(charset=u'utf-8')
        H.meta(name=u'generator', content=u'RPSLkit %s' % version)
        H.style(type=u'text/css').add_raw_string(css_code)
    with document:
        H.h1(title)
        for coll in collections:
            _render_collection(coll)
    buf.write(document.render().encode('utf-8'))


def _render_collection(coll):
    with H.section(_class=u'collection'):
        if coll.name:
            H.h2(printable(coll.name))
        if coll.messages:
            with H.div(_class=u'messages'):
                for message in coll.messages:
                    H.p(u'% ' + printable(message), _class=u'message')
        for obj in coll:
            _render_object(obj)
        for error in coll.errors:
            H.p(printable(str(error)), _class=u'error')


def _render_object(obj):
    with H.table(_class=u'object'):
        for attr in obj:
            with H.tr():
                H.th(attr.name)
                with H.td(__pretty=False):
                    for i, line in enumerate(attr.value):
                        if i > 0:
                            H.br()
                        if line is not None:
                            text_node(line)
