from __future__ import annotations

import threading

from quickly.colors import RESET
from quickly.runner import PrefixedWriter

COLOR = "\033[32m"


def test_each_line_is_one_write(sink) -> None:
    writer = PrefixedWriter("/home/me/repoA", COLOR, sink)

    consumed = writer.write(b"line1\nline2\n")

    assert consumed == len(b"line1\nline2\n")
    assert sink.writes == [
        f"{COLOR}[repoA]{RESET} line1\n",
        f"{COLOR}[repoA]{RESET} line2\n",
    ]


def test_partial_line_is_emitted_on_close(sink) -> None:
    writer = PrefixedWriter("repoA", COLOR, sink)

    writer.write(b"hel")
    writer.write(b"lo\nwor")
    assert sink.writes == [f"{COLOR}[repoA]{RESET} hello\n"]

    writer.close()
    assert sink.writes[-1] == f"{COLOR}[repoA]{RESET} wor\n"
    assert len(sink.writes) == 2


def test_crlf_and_trailing_slash(sink) -> None:
    with PrefixedWriter("/srv/repoB/", COLOR, sink) as writer:
        writer.write(b"windows\r\n")

    assert sink.writes == [f"{COLOR}[repoB]{RESET} windows\n"]


def test_invalid_utf8_is_replaced(sink) -> None:
    writer = PrefixedWriter("r", "", sink)
    writer.write(b"bad \xff byte\n")

    assert "�" in sink.writes[0]


def test_concurrent_writers_keep_lines_intact(sink) -> None:
    lock = threading.Lock()
    writers = [PrefixedWriter(f"repo{index}", "", sink, lock=lock) for index in range(4)]

    def produce(writer: PrefixedWriter) -> None:
        for number in range(200):
            writer.write(f"{writer.label} message {number}\n".encode())

    threads = [threading.Thread(target=produce, args=(writer,)) for writer in writers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(sink.writes) == 800
    for line in sink.writes:
        prefix, _, body = line.partition(f"{RESET} ")
        label = prefix.strip("[]")
        assert body.startswith(f"{label} message ")
        assert line.endswith("\n")
