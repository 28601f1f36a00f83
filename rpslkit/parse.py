# -*- coding: utf-8; -*-

"""Parser combinators and an Earley parser to run them.

The grammar in :mod:`rpslkit.syntax` is written with these combinators,
in a form that stays close to the ABNF it was taken from::

    attribute = attribute_name * skip(':') * skip(WSPs) * ...   > pivot

Earley copes with any context-free grammar, so rules need no lookahead
tricks or left-factoring. The price is speed, but RPSL inputs are parsed one
attribute at a time (see :class:`Stream`), which keeps every chart small.

Terminal symbols are characters, not bytes: attribute values are limited
to ASCII, but server messages may contain anything that is not a control
character. A terminal is a 256-bit set covering U+0000 to U+00FF (which
includes the C1 controls) plus a single flag for everything above.

Parsed strings are turned into objects by semantic actions, attached
with the ``<<`` operator (:meth:`Symbol.__rlshift__`). For example,
:class:`~rpslkit.structure.Name` objects are produced this way.
"""

from collections import OrderedDict
import operator

from bitstring import BitArray, Bits

from rpslkit.util.text import format_chars


###############################################################################
# Entry points.


def parse(data, symbol, name=None):
    """Parse the whole of `data` as `symbol` and return the result.

    :raises: :exc:`ParseError` if `data` is not exactly one `symbol`.
    """
    return Stream(data, name).parse(symbol, to_eof=True)


class Stream(object):

    """An input string with a current position, parsed piece by piece.

    Every :meth:`parse` call consumes the longest prefix (starting at
    :attr:`point`) that is a complete instance of the requested symbol.
    On failure, :attr:`point` is left where it was.
    """

    def __init__(self, data, name=None):
        self.data = data
        self.name = name
        self.point = 0

    def __repr__(self):
        return '<Stream %s at %d>' % (self.name or '(unnamed)', self.point)

    @property
    def eof(self):
        return self.point >= len(self.data)

    @property
    def remaining(self):
        return self.data[self.point:]

    def peek(self, n=1):
        return self.data[self.point:self.point + n]

    def parse(self, symbol, to_eof=False):
        (result, end) = _parse_from(self.data, self.point,
                                    symbol.as_nonterminal(), to_eof,
                                    self.name)
        self.point = end
        return result

    def skip_line(self):
        """Advance past the next LF (or to the end), returning the line."""
        end = self.data.find(u'\n', self.point)
        end = len(self.data) if end == -1 else end + 1
        line = self.data[self.point:end]
        self.point = end
        return line

    def error(self, expected, symbol=None):
        """A :exc:`ParseError` at the current position, for callers that
        check the input themselves instead of parsing a symbol."""
        return ParseError(self.name, self.point,
                          expected=[(expected, [symbol] if symbol else [])],
                          found=self.peek(), data=self.data)


class ParseError(Exception):

    def __init__(self, name, position, expected, found=None, data=None):
        """
        :param name: Name of the input (file) with the error, or `None`.
        :param position: Character offset at which parsing got stuck.
        :param expected:
            List of ``(description, symbols)``: `description` says what
            would have been acceptable at `position` (`None` if nothing
            more specific than the symbol is known), and `symbols` are the
            pivot :class:`Symbol` objects being parsed at the time.
        :param found:
            The character found at `position` (an empty string at the end
            of data), or `None` if irrelevant.
        :param data: The input, used only to compute :attr:`line`
            and :attr:`column`.
        """
        self.name = name
        self.position = position
        self.expected = expected
        self.found = found
        if data is None:
            (self.line, self.column) = (None, None)
        else:
            self.line = data.count(u'\n', 0, position) + 1
            self.column = position - (data.rfind(u'\n', 0, position) + 1) + 1
        super(ParseError, self).__init__(self._describe())

    def _describe(self):
        if self.line is None:
            where = u'at position %d' % self.position
        else:
            where = u'at line %d, column %d' % (self.line, self.column)
        if self.found == u'':
            what = u'unexpected end of data'
        elif self.found is None:
            what = u'unexpected input'
        else:
            what = u'unexpected %s' % format_chars([self.found])
        wanted = []
        for (description, symbols) in self.expected:
            names = sorted(set(sym.name for sym in symbols or [] if sym))
            if description and names:
                wanted.append(u'%s (in %s)' % (description,
                                               u', '.join(names)))
            elif description or names:
                wanted.append(description or u', '.join(names))
        r = u'%s %s' % (what, where)
        if self.name:
            r = u'%s: %s' % (self.name, r)
        if wanted:
            r += u'; expected %s' % u'; or '.join(wanted)
        return r


###############################################################################
# Grammar construction.


class Symbol(object):

    """A symbol of the grammar (either terminal or nonterminal)."""

    def __init__(self, name=None, citation=None, is_pivot=False,
                 is_ephemeral=None):
        """
        :param name: The grammar name of this symbol, as in its `citation`.
        :param citation: The :class:`~rpslkit.citation.Citation`
            for the document that defines this symbol.
        :param is_pivot: Whether this symbol is worth mentioning
            to the user in a :exc:`ParseError`.
        :param is_ephemeral: Whether this symbol may be dissolved
            into the rules of other symbols. If `None`, a symbol is
            ephemeral exactly when it has no name.
        """
        self.name = name
        self.citation = citation
        self.is_pivot = is_pivot
        self._is_ephemeral = is_ephemeral

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__,
                            self.name or hex(id(self)))

    def __gt__(self, seal):
        """``sym > seal`` gives `sym` a name and citation from `seal`.

        A sealed symbol is never inlined into other symbols, so the
        structure of `Symbol` objects follows the structure of the
        source grammar, and error messages can refer to it.
        """
        if self.name is None:
            sealed = self
        else:
            sealed = SimpleNonterminal(rules=[Rule((self,))])
        (sealed.name, sealed.citation, sealed.is_pivot) = seal
        return sealed

    @property
    def is_ephemeral(self):
        # ``a | b | c`` is really ``(a | b) | c``; the inner, unnamed
        # alternative is ephemeral and gets merged into the outer one.
        if self._is_ephemeral is None:
            return self.name is None
        return self._is_ephemeral

    def group(self):
        raise NotImplementedError

    def is_nullable(self):
        raise NotImplementedError

    def as_rule(self):
        raise NotImplementedError

    def as_rules(self):
        raise NotImplementedError

    def as_nonterminal(self):
        raise NotImplementedError

    def __or__(self, other):
        other = as_symbol(other)
        return SimpleNonterminal(rules=self.as_rules() + other.as_rules())

    def __ror__(self, other):
        other = as_symbol(other)
        return SimpleNonterminal(rules=other.as_rules() + self.as_rules())

    def __mul__(self, other):
        other = as_symbol(other)
        return SimpleNonterminal(
            rules=[self.as_rule().concat(other.as_rule())])

    def __rmul__(self, other):
        other = as_symbol(other)
        return SimpleNonterminal(
            rules=[other.as_rule().concat(self.as_rule())])

    def __rlshift__(self, func):
        """``func << sym`` passes the results of `sym` through `func`."""
        return SimpleNonterminal(
            rules=[rule.wrap(func) for rule in self.as_rules()])

    def __add__(self, other):
        return operator.add << self * other

    def __radd__(self, other):
        return operator.add << other * self


class Terminal(Symbol):

    """A terminal symbol, matching one character out of a set."""

    def __init__(self, name=None, citation=None, bits=None, beyond=False):
        """
        :param bits: A 256-bit :class:`Bits` for U+0000 through U+00FF.
        :param beyond: Whether all characters above U+00FF match.
        """
        super(Terminal, self).__init__(name, citation)
        self.bits = bits if bits is not None else Bits(length=256)
        self.beyond = beyond

    def chars(self):
        return [chr(i) for (i, v) in enumerate(self.bits) if v]

    def describe(self):
        r = format_chars(self.chars())
        if self.beyond:
            r = u'%s or any character above U+00FF' % r if r else \
                u'any character above U+00FF'
        return r

    def match(self, char):
        point = ord(char)
        if point < 256:
            return self.bits[point]
        return self.beyond

    def group(self):
        return self

    def as_rule(self):
        return Rule((self,))

    def as_rules(self):
        return [self.as_rule()]

    def as_nonterminal(self):
        return SimpleNonterminal(rules=self.as_rules())

    def __or__(self, other):
        other = as_symbol(other)
        if isinstance(other, Terminal):
            return Terminal(bits=self.bits | other.bits,
                            beyond=self.beyond or other.beyond)
        return super(Terminal, self).__or__(other)

    def __sub__(self, other):
        other = as_symbol(other)
        return Terminal(bits=self.bits ^ (self.bits & other.bits),
                        beyond=self.beyond and not other.beyond)

    def is_nullable(self):
        return False


class Nonterminal(Symbol):

    """A nonterminal symbol, parsed according to a list of :class:`Rule`."""

    def __init__(self, name=None, citation=None, is_pivot=False,
                 is_ephemeral=None):
        super(Nonterminal, self).__init__(name, citation, is_pivot,
                                          is_ephemeral)
        self._is_nullable = None

    @property
    def rules(self):
        raise NotImplementedError

    def as_rule(self):
        if self.is_ephemeral and len(self.rules) == 1:
            return self.rules[0]
        return Rule((self,))

    def as_rules(self):
        if self.is_ephemeral:
            return self.rules
        return [self.as_rule()]

    def as_nonterminal(self):
        return self

    def is_nullable(self):
        if self._is_nullable is None:
            self._is_nullable = any(all(sym.is_nullable()
                                        for sym in rule.symbols)
                                    for rule in self.rules)
        return self._is_nullable


class SimpleNonterminal(Nonterminal):

    def __init__(self, name=None, citation=None, is_pivot=False,
                 is_ephemeral=None, rules=None):
        super(SimpleNonterminal, self).__init__(name, citation, is_pivot,
                                                is_ephemeral)
        self._rules = rules or []

    @property
    def rules(self):
        return self._rules

    def group(self):
        if self.is_ephemeral:
            return SimpleNonterminal(rules=self.rules, is_ephemeral=False)
        return self


class RepeatedNonterminal(Nonterminal):

    """Zero to `max_count` (unbounded if `None`) repetitions of `inner`."""

    def __init__(self, max_count=None, inner=None):
        super(RepeatedNonterminal, self).__init__(is_ephemeral=False)
        self.max_count = max_count
        self.inner = inner
        self._rules = None

    def group(self):    # pragma: no cover
        return self

    @property
    def rules(self):
        if self._rules is None:
            r = subst([]) << empty
            if self.max_count is None:
                # Left recursion without a semantic action:
                # :func:`_find_results` unrolls it into a flat list.
                r = r | self * group(self.inner)
            elif self.max_count > 1:
                rest = RepeatedNonterminal(max_count=self.max_count - 1,
                                           inner=self.inner)
                r = r | _prepend_to_list << self.inner * rest
            else:
                r = r | _start_list << self.inner
            self._rules = r.rules
        return self._rules


class Rule(object):

    """A sequence of symbols plus an optional semantic action.

    The action is called with the tuple of results for the symbols
    and returns a tuple of results to pass upwards.
    """

    def __init__(self, symbols, action=None):
        self.symbols = symbols
        self.action = action
        # A trailing `None` marks a completed item, saving a bounds check
        # in the hot loop of :func:`_run_earley`.
        self.xsymbols = self.symbols + (None,)

    def __repr__(self):
        return '<Rule %r>' % (self.symbols,)

    def concat(self, other):
        if self.action is None and other.action is None:
            return Rule(self.symbols + other.symbols)
        split = len(self.symbols)
        (left, right) = (self.action, other.action)

        def concat_action(nodes):
            (nodes1, nodes2) = (nodes[:split], nodes[split:])
            if left is not None:
                nodes1 = left(nodes1)
            if right is not None:
                nodes2 = right(nodes2)
            return nodes1 + nodes2

        return Rule(self.symbols + other.symbols, concat_action)

    def wrap(self, func):
        inner = self.action

        def wrapped_action(nodes):
            if inner is not None:
                nodes = inner(nodes)
            r = func(*[node for node in nodes if node is not _SKIP])
            return () if r is _SKIP else (r,)

        return Rule(self.symbols, wrapped_action)


class _Skip(object):

    def __repr__(self):
        return '_SKIP'

_SKIP = _Skip()


empty = SimpleNonterminal(name=u'empty', rules=[Rule(())], is_ephemeral=True)


MAX_CODE_POINT = 0x10FFFF


def char_range(min_, max_):
    """A terminal for the characters from `min_` to `max_` (code points).

    Above U+00FF only the open-ended range up to :data:`MAX_CODE_POINT`
    can be expressed.
    """
    if max_ > 0xFF and (max_ != MAX_CODE_POINT or min_ > 0x100):
        raise ValueError(u'cannot express range %#x-%#x' % (min_, max_))
    bits = BitArray(length=256)
    beyond = max_ == MAX_CODE_POINT
    for i in range(min_, min(max_, 0xFF) + 1):
        bits[i] = True
    return Terminal(bits=Bits(bits), beyond=beyond)

def char(value):
    """A terminal for the single character with code point `value`."""
    return char_range(value, value)

def literal(s, case_sensitive=True):
    """A symbol for the string `s`. Letters match in any case
    unless `case_sensitive`."""
    if len(s) == 1:
        if case_sensitive or s.lower() == s.upper():
            return char(ord(s))
        return char(ord(s.lower())) | char(ord(s.upper()))
    r = empty
    for c in s:
        r = r * literal(c, case_sensitive)
    return _join_args << r

def as_symbol(x):
    return x if isinstance(x, Symbol) else literal(x)


def skip(x):
    return _skip_args << as_symbol(x)

def group(x):
    return as_symbol(x).group()


def maybe(inner, default=None):
    return inner | subst(default) << empty

def maybe_str(inner):
    return maybe(inner, u'')


def times(min_, max_, inner):
    inner = as_symbol(inner)
    if min_ == 0:
        return RepeatedNonterminal(max_count=max_, inner=inner)
    required = empty
    for _ in range(min_):
        required = required * group(inner)
    required = _as_list << required
    if max_ == min_:
        return required
    rest = RepeatedNonterminal(
        max_count=None if max_ is None else max_ - min_, inner=inner)
    return required + rest

def many(inner):
    return times(0, None, inner)

def many1(inner):
    return times(1, None, inner)

def string(inner):
    return u''.join << many(inner)

def string1(inner):
    return u''.join << many1(inner)


class _AutoName(object):

    def __repr__(self):
        return '_AUTO'

_AUTO = _AutoName()


def named(name, citation=None, is_pivot=False):
    return (name, citation, is_pivot)

auto = named(_AUTO)
pivot = named(_AUTO, is_pivot=True)

def fill_names(scope, citation):
    """Name the symbols in `scope` that were sealed with `auto` or `pivot`.

    A symbol cannot know the variable it is assigned to, so a grammar
    module calls ``fill_names(globals(), ...)`` at the end. Underscores
    become dashes: ``attribute_name`` is named ``attribute-name``.
    """
    for name, x in scope.items():
        if isinstance(x, Symbol) and x.name is _AUTO:
            x.name = name.rstrip('_').replace('_', '-')
            x.citation = citation


###############################################################################
# Semantic actions.

def _skip_args(*_):
    return _SKIP

def _join_args(*args):
    return u''.join(args)

def subst(r):
    def substitute(*_):
        return r
    return substitute

def _as_list(*args):
    return list(args)

def _start_list(*args):
    return [args if len(args) > 1 else args[0]]

def _prepend_to_list(*args):
    rest = args[-1]
    new_elem = args[:-1] if len(args) > 2 else args[0]
    return [new_elem] + rest


###############################################################################
# The Earley algorithm.
# The loops below trade readability for speed; the comments make up for it.


def _add_item(state, symbol, rule, pos, start):
    # `state` is the inventory of Earley items at one position:
    # a list for iteration, an index by next symbol, and a set of
    # fingerprints for fast duplicate checks.
    (items, index, seen) = state
    fingerprint = (id(symbol), id(rule), pos, start)
    if fingerprint not in seen:
        seen.add(fingerprint)
        item = (symbol, rule, pos, start)
        items.append(item)
        index.setdefault(rule.xsymbols[pos], []).append(item)


def _run_earley(data, base, target):
    # Positions in the chart are relative to `base`.
    chart = [([], {}, set())]
    for rule in target.rules:
        _add_item(chart[0], target, rule, 0, 0)

    length = len(data) - base
    for i in range(length + 1):
        token = data[base + i] if i < length else None
        chart.append(([], {}, set()))
        (items, index, _) = chart[i]
        if not items:
            # Nothing was scanned at the previous position, so this is
            # as far as any parse can go. Dropping the empty tail keeps
            # the last element of `chart` meaningful.
            del chart[i:]
            break

        j = 0
        while j < len(items):
            (symbol, rule, pos, start) = items[j]
            next_symbol = rule.xsymbols[pos]

            if next_symbol is None:
                # Completion: advance every item at `start`
                # that was waiting for `symbol`.
                for (symbol1, rule1, pos1, start1) in \
                        chart[start][1].get(symbol, []):
                    _add_item(chart[i], symbol1, rule1, pos1 + 1, start1)

            elif isinstance(next_symbol, Nonterminal):
                # Nullable symbols can be stepped over right away, see
                # http://loup-vaillant.fr/tutorials/earley-parsing/empty-rules
                if next_symbol.is_nullable():
                    _add_item(chart[i], symbol, rule, pos + 1, start)
                # Prediction.
                for next_rule in next_symbol.rules:
                    _add_item(chart[i], next_symbol, next_rule, 0, i)

            elif token is not None and next_symbol.match(token):
                # Scan.
                _add_item(chart[i + 1], symbol, rule, pos + 1, start)

            j += 1
    else:
        # Ran off the end of the data; the extra position is always empty.
        chart.pop()

    return chart


def _parse_from(data, base, target, to_eof, name):
    chart = _run_earley(data, base, target)
    length = len(data) - base

    if to_eof:
        candidates = [length] if len(chart) == length + 1 else []
    else:
        candidates = range(len(chart) - 1, -1, -1)

    for end in candidates:
        completed = chart[end][1].get(None, [])
        if any(sym is target and start == 0
               for (sym, _, _, start) in completed):
            for (start, _, result) in _find_results(data, base, target,
                                                    chart, end, []):
                if start == 0:
                    return (None if result is _SKIP else result, base + end)

    raise _build_parse_error(data, base, target, chart, name)


def _find_results(data, base, symbol, chart, end_i, outer_parents):
    # Yields ``(start_i, item, result)`` for every parse of `symbol`
    # that ends at `end_i`.

    if isinstance(symbol, Terminal):
        if end_i > 0:
            token = data[base + end_i - 1]
            if symbol.match(token):
                yield (end_i - 1, None, token)
        return

    for item in chart[end_i][1].get(None, []):
        (sym, rule, _, start_i) = item
        if sym is not symbol:
            continue
        # An item already being expanded further up would send us
        # into unbounded recursion.
        if item in outer_parents:
            continue

        # Walk the rule's symbols right to left, looking for a combination
        # of their results where each one starts where the previous ends.
        # A hand-rolled stack of frames stands in for recursion, which
        # would hit the recursion limit on long inputs. One frame per
        # symbol of the rule: (end position, parents, results iterator,
        # chosen result).
        frames = [(end_i, outer_parents + [item], None, None)]

        # Left-recursive repetition is unrolled into one frame per
        # repetition, because long values repeat a character thousands
        # of times.
        if isinstance(symbol, RepeatedNonterminal) and \
                rule.xsymbols[0] is symbol:
            n_nodes = None
            inner_symbol = rule.symbols[-1]
        else:
            n_nodes = len(rule.symbols)

        while True:
            (i, parents, rs, node) = frames.pop()

            if len(frames) == n_nodes:
                # All symbols of the rule have results.
                if i != start_i:
                    continue
                nodes = tuple(frame[3] for frame in reversed(frames))
                if rule.action is not None:
                    nodes = rule.action(nodes)
                nodes = tuple(n for n in nodes if n is not _SKIP)
                if not nodes:
                    result = _SKIP
                elif len(nodes) == 1:
                    result = nodes[0]
                else:
                    result = nodes
                yield (start_i, item, result)
                if not frames:
                    break
                continue

            if rs is None:
                if n_nodes is not None:
                    inner_symbol = rule.symbols[-len(frames) - 1]
                rs = _find_results(data, base, inner_symbol, chart, i,
                                   parents)

            r = next(rs, None)
            if r is None:
                # Exhausted: backtrack to the previous symbol, if any.
                if frames:
                    continue
                break

            (new_i, new_item, new_node) = r

            if new_i < i:
                # Input was consumed, so recursion is bounded again.
                new_parents = []
            elif n_nodes is None:
                # Nothing consumed inside an unrolled repetition:
                # avoid this item next time or we would loop forever.
                new_parents = parents + [new_item]
            else:
                new_parents = parents

            if n_nodes is None and new_i == start_i:
                # The repetition reached back to its start: a complete list.
                yield (new_i, item,
                       [new_node] + [frame[3] for frame in reversed(frames)])

            if new_i >= start_i:
                frames.append((i, parents, rs, new_node))
                frames.append((new_i, new_parents, None, None))
            else:
                # Too far back; keep the iterator to try its other results.
                frames.append((i, parents, rs, node))


def _build_parse_error(data, base, target, chart, name):
    # The last position with any items is where the input stopped
    # making sense.
    i = len(chart) - 1
    items = chart[i][0]
    found = data[base + i:base + i + 1]

    expected = OrderedDict()
    for (symbol, rule, pos, start) in items:
        next_symbol = rule.xsymbols[pos]
        if isinstance(next_symbol, Terminal):
            expected.setdefault(next_symbol.describe(), set()).update(
                _find_pivots(chart, symbol, start))
        if symbol is target and next_symbol is None:
            expected[u'end of data'] = None

    return ParseError(name=name, position=base + i,
                      expected=list(expected.items()), found=found,
                      data=data)


def _find_pivots(chart, symbol, start, stack=None):
    if symbol.is_pivot:
        yield symbol
    else:
        stack = (stack or []) + [(symbol, start)]
        for (parent, _, _, parent_start) in chart[start][1].get(symbol, []):
            if (parent, parent_start) not in stack:
                for p in _find_pivots(chart, parent, parent_start, stack):
                    yield p
