# -*- coding: utf-8; -*-

import codecs

from rpslkit.util.text import printable


def text_report(collections, buf):
    """Write the parsed objects back out as RPSL text.

    Server messages come first as ``%`` lines, then the objects,
    each followed by a blank line, then one ``!`` line for every piece
    of input that was skipped as malformed.

    :param collections:
        An iterable of :class:`~rpslkit.structure.ObjectCollection`.
    :param buf:
        The file (or file-like object) to which the report will be written.
        It must be opened in binary mode (not text).
    """
    f = codecs.getwriter('utf-8')(buf)
    for coll in collections:
        for message in coll.messages:
            f.write(u'%% %s\n' % printable(message) if message else u'%\n')
        if coll.messages:
            f.write(u'\n')
        for obj in coll:
            f.write(str(obj))
        for error in coll.errors:
            f.write(u'! %s\n' % printable(str(error)))
