"""
Forward-only XML event reader on top of lxml's pull parser
"""
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Iterator, List, Tuple, Union

import requests
from lxml import etree

from .errors import UnexpectedEofError, XmlIOError, XmlSyntaxError
from .settings import READ_CHUNK_SIZE


@dataclass(frozen=True)
class Start:
    """要素の開始タグ"""
    name: str
    local_name: str
    element: Any

    @property
    def attrib(self) -> dict:
        return dict(self.element.attrib)


@dataclass(frozen=True)
class End:
    """要素の終了タグ"""
    name: str
    local_name: str
    element: Any


class Eof:
    """整形式の文書の終端"""

    def __repr__(self) -> str:
        return "Eof()"


EOF = Eof()

Event = Union[Start, End, Eof]


def _iter_chunks(source, chunk_size: int) -> Iterator[bytes]:
    if isinstance(source, (bytes, bytearray)):
        if source:
            yield bytes(source)
        return
    read = getattr(source, "read", None)
    if read is not None:
        while True:
            chunk = read(chunk_size)
            if not chunk:
                return
            yield chunk
    else:
        for chunk in source:
            if chunk:
                yield chunk


class XmlEventReader:
    """
    バイト列・ファイルライク・チャンクのイテラブルから XML イベントを順に取り出す

    読み終えた要素はツリーから解放されるため、大きな応答でもメモリを保持しない。
    """

    def __init__(self, source, chunk_size: int = READ_CHUNK_SIZE):
        self._chunks = _iter_chunks(source, chunk_size)
        self._parser = etree.XMLPullParser(
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        self._pending: Deque[Tuple[str, Any]] = deque()
        self._open: List[str] = []
        self._started = False
        self._closed = False

    # ------------------------------------------------------------------
    # Event stream

    def read_event(self) -> Event:
        """次のイベントを返す。文書の終端以降は常に EOF を返す"""
        while not self._pending:
            if self._closed:
                return EOF
            self._fill()

        action, element = self._pending.popleft()
        local_name = etree.QName(element).localname
        if action == "start":
            self._started = True
            self._open.append(local_name)
            return Start(element.tag, local_name, element)
        self._open.pop()
        return End(element.tag, local_name, element)

    def _fill(self) -> None:
        try:
            chunk = next(self._chunks, None)
        except (OSError, requests.exceptions.RequestException) as e:
            raise XmlIOError(f"failed to read response body: {e}") from e

        try:
            if chunk is None:
                self._close()
            else:
                self._parser.feed(chunk)
            self._pending.extend(self._parser.read_events())
        except etree.XMLSyntaxError as e:
            raise XmlSyntaxError(str(e)) from e

    def _close(self) -> None:
        self._closed = True
        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            if self._open:
                raise UnexpectedEofError(self._open[-1]) from e
            if not self._started:
                raise UnexpectedEofError("xml") from e
            raise

    # ------------------------------------------------------------------
    # Sub-tree helpers

    def read_text(self, start: Start) -> str:
        """
        開始タグ直後から対応する終了タグまでを読み、要素のテキストを返す
        """
        self._consume(start)
        text = "".join(start.element.itertext())
        self.release(start.element)
        return text

    def skip(self, start: Start) -> None:
        """開始タグ直後から対応する終了タグまでを読み捨てる"""
        self._consume(start)
        self.release(start.element)

    def _consume(self, start: Start) -> None:
        depth = 1
        while depth:
            event = self.read_event()
            if isinstance(event, Start):
                depth += 1
            elif isinstance(event, End):
                depth -= 1
            else:
                raise UnexpectedEofError(start.local_name)

    @staticmethod
    def release(element) -> None:
        """読み終えた要素とその前の兄弟要素をツリーから解放する"""
        element.clear()
        parent = element.getparent()
        if parent is not None:
            while element.getprevious() is not None:
                del parent[0]
