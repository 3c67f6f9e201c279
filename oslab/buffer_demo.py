"""Command that runs producer/consumer scenarios on three shared buffers."""

from __future__ import annotations

import re
import sys
import threading
import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from oslab.buffer import Buffer

BUFFER_COUNT = 3
TEST_MESSAGES = tuple(f"Nr{i}" for i in range(16))
SPECIAL_MESSAGES = tuple(f"spc{i}" for i in range(5))
_SEPARATOR = "-------------------------------------"


def _say(text: str) -> None:
    print(text, flush=True)


def _header(num: int) -> None:
    _say(f"=======BUF {num}========")


def _spawn(target: Callable[..., Any], *args: Any) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def _join(threads: Iterable[threading.Thread]) -> None:
    for thread in threads:
        thread.join()


def producer(buffers: Sequence[Buffer], num: int, messages: Iterable[Any], delay: float = 0) -> None:
    """Write the messages to buffer ``num``, optionally after a delay."""
    if delay:
        time.sleep(delay)
        _header(num)
    else:
        _header(num)
        _say(f"Trying to write from thread {threading.get_ident()}")
    for message in messages:
        buffers[num].write(message)
    _say(f"Writing from thread {threading.get_ident()}")


def consumer(buffers: Sequence[Buffer], num: int, count: int, delay: float = 0) -> list[Any]:
    """Read ``count`` messages from buffer ``num`` and return them."""
    if delay:
        time.sleep(delay)
        _header(num)
    else:
        _header(num)
        _say(f"Trying to read from thread {threading.get_ident()}")
    received = []
    for _ in range(count):
        message = buffers[num].read()
        received.append(message)
        _say(f"Read {message} from thread {threading.get_ident()}")
    return received


def broadcast_special(buffers: Iterable[Buffer], message: Any) -> None:
    """Queue the special message in every buffer."""
    _say(f"Sending special from thread {threading.get_ident()}")
    for buffer in buffers:
        buffer.special(message)


def _show(buffers: Sequence[Buffer], num: int) -> None:
    _header(num)
    buffers[num].display()


def _show_all(buffers: Sequence[Buffer]) -> None:
    for num in range(len(buffers)):
        _show(buffers, num)


def _banner(title: str) -> None:
    _say(f"{_SEPARATOR}\n{title}\n{_SEPARATOR}")


def _fill_all(buffers: Sequence[Buffer], lengths: Sequence[int]) -> list[threading.Thread]:
    return [
        _spawn(producer, buffers, num, TEST_MESSAGES[:length])
        for num, length in enumerate(lengths)
    ]


def _normal_usage(buffers: Sequence[Buffer]) -> None:
    _banner("         Test normal usage")
    writers = [
        _spawn(producer, buffers, 0, TEST_MESSAGES[:3], 3),
        _spawn(producer, buffers, 1, TEST_MESSAGES[:5]),
        _spawn(producer, buffers, 2, TEST_MESSAGES[:5]),
    ]
    reader = _spawn(consumer, buffers, 0, 2)
    reader.join()
    _join(writers)
    _spawn(broadcast_special, buffers, SPECIAL_MESSAGES[0]).join()
    _show_all(buffers)
    _spawn(consumer, buffers, 2, 4).join()
    _join([
        _spawn(producer, buffers, 1, TEST_MESSAGES[5:7]),
        _spawn(consumer, buffers, 1, 3, 3),
    ])
    _show_all(buffers)


def _empty_read(buffers: Sequence[Buffer]) -> None:
    _banner("    Test empty buffer + READ")
    reader = _spawn(consumer, buffers, 0, 1)
    writer = _spawn(producer, buffers, 0, TEST_MESSAGES[:1], 5)
    _join([writer, reader])


def _full_write(buffers: Sequence[Buffer]) -> None:
    _banner("    Test all buffer full + WRITE")
    threads = _fill_all(buffers, (5, 5, 5))
    threads.append(_spawn(producer, buffers, 2, TEST_MESSAGES[5:6]))
    threads.append(_spawn(_show, buffers, 2))
    threads.append(_spawn(consumer, buffers, 2, 1, 5))
    _join(threads)
    _spawn(_show, buffers, 2).join()


def _full_special(buffers: Sequence[Buffer]) -> None:
    _banner("   Test all buffers full + SPECIAL")
    threads = _fill_all(buffers, (5, 5, 5))
    threads.append(_spawn(broadcast_special, buffers, SPECIAL_MESSAGES[0]))
    _join(threads)
    _show_all(buffers)
    _join([_spawn(consumer, buffers, 0, 2), _spawn(consumer, buffers, 2, 1)])
    _show_all(buffers)


def _many_specials(buffers: Sequence[Buffer]) -> None:
    _banner("   Test multiple special messages")
    threads = _fill_all(buffers, (3, 5, 4))
    threads.extend(
        _spawn(broadcast_special, buffers, message) for message in SPECIAL_MESSAGES[:3]
    )
    _join(threads)
    _show_all(buffers)
    _join([_spawn(consumer, buffers, 1, 4), _spawn(consumer, buffers, 2, 2)])
    _show_all(buffers)


_SCENARIOS: dict[int, Callable[[Sequence[Buffer]], None]] = {
    1: _normal_usage,
    2: _empty_read,
    3: _full_write,
    4: _full_special,
    5: _many_specials,
}


def run_scenario(option: int) -> list[Buffer]:
    """Run one numbered scenario on fresh buffers and return them afterwards."""
    buffers = [Buffer() for _ in range(BUFFER_COUNT)]
    scenario = _SCENARIOS.get(option)
    if scenario is not None:
        scenario(buffers)
    return buffers


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``<scenario>`` from the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        return 0
    run_scenario(_atoi(args[0]))
    return 0


if __name__ == "__main__":
    sys.exit(main())