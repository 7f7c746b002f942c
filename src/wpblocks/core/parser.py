"""Stack-based tree builder over block delimiter tokens"""

import logging
from typing import Optional

from wpblocks.core.models import Block, Frame, freeform
from wpblocks.core.tokenizer import next_token
from wpblocks.core.tokens import BlockCloser, BlockOpener, NoMoreTokens, Token, VoidBlock
from wpblocks.core.utils.report import Reporter, report_error


logger = logging.getLogger(__name__)


class BlockParser:
    """Parse a document into a list of Blocks.

    Invalid input never raises: unbalanced openers are closed at the end of
    the document, and an orphan closer ends the parse after keeping the text
    that preceded it. Offsets are byte offsets into the UTF-8 encoded
    document; text is decoded back to str when it is attached to a block,
    with undecodable bytes from bytes input replaced.

    State is reset on every call to parse(), so one instance can be reused
    for sequential documents but must not be shared between threads.
    """

    def __init__(self, reporter: Reporter = report_error) -> None:
        self.reporter = reporter
        self.document = b''
        self._errors = 'surrogatepass'
        self.offset = 0
        self.output: list[Block] = []
        self.stack: list[Frame] = []

    def parse(self, document: str | bytes) -> list[Block]:
        if isinstance(document, bytes):
            self.document = document
            self._errors = 'replace'
        else:
            self.document = document.encode('utf-8', 'surrogatepass')
            self._errors = 'surrogatepass'
        self.offset = 0
        self.output = []
        self.stack = []

        while self.proceed():
            continue

        logger.debug(f"Parsed {len(self.output)} top-level block(s) from {len(self.document)} bytes")
        return self.output

    def proceed(self) -> bool:
        """Consume the next token and apply one transition; False stops the parse."""
        token = next_token(self.document, self.offset, self.reporter)
        depth = len(self.stack)

        if isinstance(token, NoMoreTokens):
            if depth == 0:
                self._add_freeform(len(self.document))
                return False
            if depth > 1:
                logger.debug(f"Implicitly closing {depth} unbalanced block(s) at end of document")
            # Every missing closer is assumed to sit at the end of the document;
            # only the innermost block receives the remaining text.
            self._add_block_from_stack()
            while self.stack:
                self._add_block_from_stack(consume=False)
            return False

        leading_html_start = self.offset if token.start > self.offset else None
        token_end = token.start + token.length

        if isinstance(token, VoidBlock):
            block = Block(name=token.name, attributes=token.attrs)
            if depth == 0:
                if leading_html_start is not None:
                    self._emit_freeform(leading_html_start, token.start)
                self.output.append(block)
            else:
                self._add_inner_block(block, token.start, token.length)
            self.offset = token_end
            return True

        if isinstance(token, BlockOpener):
            self.stack.append(Frame(
                block=Block(name=token.name, attributes=token.attrs),
                token_start=token.start,
                token_length=token.length,
                prev_offset=token_end,
                leading_html_start=leading_html_start,
            ))
            self.offset = token_end
            return True

        if isinstance(token, BlockCloser) and depth > 0:
            if depth == 1:
                self._add_block_from_stack(end_offset=token.start)
            else:
                top = self.stack.pop()
                top.block.append_html(self._text(top.prev_offset, token.start))
                self._add_inner_block(top.block, top.token_start, top.token_length, last_offset=token_end)
            self.offset = token_end
            return True

        # Orphan closer: keep the text before it and stop.
        logger.debug(f"Closer {token!r} has no open block; stopping at byte {token.start}")
        self._add_freeform(token.start)
        return False

    def _text(self, start: int, end: Optional[int] = None) -> str:
        return self.document[start:end].decode('utf-8', self._errors)

    def _emit_freeform(self, start: int, end: int) -> None:
        if end > start:
            self.output.append(freeform(self._text(start, end)))

    def _add_freeform(self, end: int) -> None:
        """Flush pending text from the current offset up to end as a freeform block."""
        self._emit_freeform(self.offset, end)

    def _add_inner_block(
        self,
        block: Block,
        token_start: int,
        token_length: int,
        last_offset: Optional[int] = None,
        ) -> None:
        """Attach a finished block to the frame on top of the stack."""
        parent = self.stack[-1]
        parent.block.append_html(self._text(parent.prev_offset, token_start))
        parent.block.append_block(block)
        parent.prev_offset = last_offset if last_offset is not None else token_start + token_length

    def _add_block_from_stack(self, end_offset: Optional[int] = None, consume: bool = True) -> None:
        """Pop the top frame and move its block to the output list.

        The block receives document text from its last consumed position up to
        end_offset, or to the end of the document when end_offset is None.
        """
        frame = self.stack.pop()
        if consume:
            frame.block.append_html(self._text(frame.prev_offset, end_offset))
        if frame.leading_html_start is not None:
            self._emit_freeform(frame.leading_html_start, frame.token_start)
        self.output.append(frame.block)


def parse(document: str | bytes, reporter: Reporter = report_error) -> list[Block]:
    """Parse document with a fresh BlockParser."""
    return BlockParser(reporter).parse(document)
