import logging
from typing import Iterable, List, Sequence

from .lexer import (
    COMMA,
    COMMENT,
    LBRACKET,
    LPAREN,
    NEWLINE,
    RBRACKET,
    RPAREN,
    Token,
)
from .options import FormatOptions
from .spacing import is_sign, join_tokens, needs_space
from .spans import (
    measure_span,
    next_index,
    opening_index,
    previous_index,
    previous_token,
    should_expand,
    span_indices,
)

logger = logging.getLogger(__name__)

OPENERS = (LPAREN, LBRACKET)
CLOSERS = (RPAREN, RBRACKET)
_COMMENT_MARKERS = ('#', '//')


class Renderer:
    """Lay out a token sequence (without ``EOF``) as indented text.

    One instance renders one input. The output lines, the indent level and the
    pending blank line all live on the instance, so separate renderers never
    share state.
    """

    def __init__(self, tokens: Sequence[Token], options: FormatOptions):
        self.tokens = list(tokens)
        self.options = options
        self.lines: List[str] = []
        self.indent = 0
        self.pending_blank = False

    def render(self) -> str:
        tokens = self.tokens
        n = len(tokens)
        i = 0
        while i < n:
            if tokens[i].kind == NEWLINE:
                run = i
                while run < n and tokens[run].kind == NEWLINE:
                    run += 1
                if run - i > 1:
                    self.pending_blank = True
                i = run
                continue
            opening = opening_index(tokens, i)
            if opening is not None and should_expand(measure_span(tokens, opening), self.options):
                close = self._emit_construct(i, opening)
                i = self._emit_line(close, after_construct=True) if close < n else n
                continue
            i = self._emit_line(i)
        return '\n'.join(self.lines).rstrip('\n') + '\n'

    # -- output buffer -------------------------------------------------

    def _push(self, text: str) -> None:
        if self.pending_blank:
            self._blank_line()
            self.pending_blank = False
        self.lines.append(self.options.indent_unit * self.indent + text)

    def _blank_line(self) -> None:
        if not self.lines or not self.lines[-1] or self._last_opens():
            return
        self.lines.append('')

    def _last_is_comment(self) -> bool:
        return bool(self.lines) and self.lines[-1].lstrip().startswith(_COMMENT_MARKERS)

    def _last_opens(self) -> bool:
        return not self._last_is_comment() and self.lines[-1].rstrip().endswith(('(', '['))

    def _dedent(self) -> None:
        self.indent = max(0, self.indent - 1)

    def _emit_comment(self, text: str) -> None:
        # unlike a collapsed blank-line run, this one also follows an opening line
        if self.lines and self.lines[-1] and not self._last_is_comment():
            self.lines.append('')
            self.pending_blank = False
        self._push(text)

    def _flush(self, arg: List[int]) -> None:
        if not arg:
            return
        before = previous_token(self.tokens, arg[0], skip_comments=True)
        self._push(join_tokens((self.tokens[k] for k in arg), before))
        arg.clear()

    # -- gluing --------------------------------------------------------

    def _opens_compound(self, idx: int) -> bool:
        if self.tokens[idx].kind != LPAREN:
            return False
        inner = next_index(self.tokens, idx + 1)
        return inner is not None and self.tokens[inner].kind == LPAREN

    def _continues(self, first_idx: int) -> bool:
        """Whether the logical line starting at ``first_idx`` joins the previous one."""

        tokens = self.tokens
        prev_idx = previous_index(tokens, first_idx)
        if prev_idx is None or not tokens[prev_idx].is_op():
            return False
        first = tokens[first_idx]
        prev = tokens[prev_idx]
        if first.kind in CLOSERS or first.is_op('+', '-'):
            return False
        if prev.text == '||':
            # a "||" that starts its own line takes its operand
            if self.lines[-1].strip() == '||':
                return True
            # otherwise only peer alternatives ") || (" share a line
            left = previous_index(tokens, prev_idx)
            return first.kind == LPAREN and left is not None and tokens[left].kind == RPAREN
        if prev.text == '&&' and self._opens_compound(first_idx):
            return False
        return True

    def _glue(self, first_idx: int, text: str) -> bool:
        if not self.lines or not self._continues(first_idx):
            return False
        tokens = self.tokens
        prev_idx = previous_index(tokens, first_idx)
        prev = tokens[prev_idx]
        sign = is_sign(prev, previous_token(tokens, prev_idx, skip_comments=True))
        joiner = ' ' if needs_space(prev, tokens[first_idx], sign) else ''
        self.lines[-1] += joiner + text
        self.pending_blank = False
        return True

    # -- logical lines -------------------------------------------------

    def _breaks_before(self, idx: int, last_idx: int) -> bool:
        tokens = self.tokens
        if tokens[last_idx].is_op('&&') and self._opens_compound(idx):
            return True
        return tokens[idx].is_op('||') and tokens[last_idx].kind == RPAREN and self._or_ends_line(idx)

    def _or_ends_line(self, idx: int) -> bool:
        # ") ||" followed by a line break splits, unless a peer "(" comes next
        after = idx + 1
        if after >= len(self.tokens) or self.tokens[after].kind not in (NEWLINE, COMMENT):
            return False
        operand = next_index(self.tokens, after)
        return operand is None or self.tokens[operand].kind != LPAREN

    def _emit_line(self, start: int, after_construct: bool = False) -> int:
        tokens = self.tokens
        n = len(tokens)
        collected: List[int] = []
        idx = start
        while idx < n:
            tok = tokens[idx]
            if tok.kind == NEWLINE:
                break
            if tok.kind == COMMENT:
                collected.append(idx)
                idx += 1
                break
            if collected and self._breaks_before(idx, collected[-1]):
                break
            opening = opening_index(tokens, idx)
            if opening is not None:
                span = measure_span(tokens, opening)
                if collected and should_expand(span, self.options):
                    break
                collected.extend(span_indices(tokens, idx, span))
                idx = span.end + 1
                continue
            collected.append(idx)
            idx += 1
        self._place_line(collected, after_construct)
        return idx

    def _place_line(self, collected: List[int], after_construct: bool) -> None:
        if not collected:
            return
        tokens = self.tokens
        first_idx = collected[0]
        first = tokens[first_idx]
        if first.kind == COMMENT and len(collected) == 1:
            self._emit_comment(first.text)
            return
        closes = first.kind in CLOSERS
        if closes and not after_construct:
            self._dedent()
        before = previous_token(tokens, first_idx, skip_comments=True)
        text = join_tokens((tokens[k] for k in collected), before)
        if not self._glue(first_idx, text):
            self._push(text)
        self._track_brackets(collected[1:] if closes else collected)

    def _track_brackets(self, indices: Iterable[int]) -> None:
        depth = 0
        for k in indices:
            kind = self.tokens[k].kind
            if kind in OPENERS:
                depth += 1
            elif kind in CLOSERS:
                depth -= 1
        if depth > 0:
            self.indent += 1
        elif depth < 0:
            self._dedent()

    # -- expanded calls and groups -------------------------------------

    def _emit_construct(self, head_idx: int, open_idx: int) -> int:
        """Render an expanded ``name(`` or ``(`` body, one argument per line.

        Returns the index of the matching ``)``, left for the caller to place
        at the start of the next line, or ``len(tokens)`` when input ends
        first.
        """

        tokens = self.tokens
        n = len(tokens)
        span = measure_span(tokens, open_idx)
        head = tokens[head_idx]
        logger.debug(
            'Expanding %s at line %d, col %d (length=%d, newline=%s)',
            'call' if head_idx != open_idx else 'group',
            head.line,
            head.col,
            span.length,
            span.has_newline,
        )

        opener = join_tokens(tokens[head_idx:open_idx + 1])
        if not self._glue(head_idx, opener):
            self._push(opener)
        self.indent += 1

        first = next_index(tokens, open_idx + 1)
        arg: List[int] = []
        newlines = 0
        square = 0
        idx = open_idx + 1
        while idx < n:
            tok = tokens[idx]
            if tok.kind == NEWLINE:
                newlines += 1
                idx += 1
                continue
            if tok.kind == RPAREN:
                break
            if not arg and newlines > 1:
                self.pending_blank = True

            if tok.kind == COMMENT:
                if arg and not newlines:
                    arg.append(idx)
                    self._flush(arg)
                else:
                    self._flush(arg)
                    self._emit_comment(tok.text)
            elif tok.kind == COMMA and not square:
                arg.append(idx)
                if idx + 1 < n and tokens[idx + 1].kind == COMMENT:
                    idx += 1
                    arg.append(idx)
                self._flush(arg)
            else:
                opening = opening_index(tokens, idx)
                if opening is not None:
                    inner = measure_span(tokens, opening)
                    forced = span.immediate_nesting and idx == first
                    if forced or should_expand(inner, self.options):
                        self._flush(arg)
                        close = self._emit_construct(idx, opening)
                        if close >= n:
                            idx = n
                            break
                        arg = [close]
                        idx = close
                    else:
                        arg.extend(span_indices(tokens, idx, inner))
                        idx = inner.end
                else:
                    if tok.kind == LBRACKET:
                        square += 1
                    elif tok.kind == RBRACKET and square:
                        square -= 1
                    arg.append(idx)
            newlines = 0
            idx += 1

        self._flush(arg)
        self._dedent()
        return min(idx, n)
