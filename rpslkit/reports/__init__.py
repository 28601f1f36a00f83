# -*- coding: utf-8; -*-

from rpslkit.reports.html import html_report
from rpslkit.reports.text import text_report


formats = {
    u'text': text_report,
    u'html': html_report,
}
