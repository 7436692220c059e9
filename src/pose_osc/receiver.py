"""
OSC receiver for manual testing.

Listens on a UDP port and logs every 100th message, plus a running total
every 1000 messages. Start it, then start tracking in the app:

    pose-osc-receiver --port 8000
"""

import argparse
import time
from typing import List, Optional

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import BlockingOSCUDPServer

from .log import get_logger

log = get_logger(__name__)

PRINT_EVERY = 100
SUMMARY_EVERY = 1000


def format_args(args) -> str:
    parts = []
    for value in args:
        if isinstance(value, float):
            parts.append(f"{value:.3f}")
        else:
            parts.append(str(value))
    return ", ".join(parts)


class ReceiverStats:
    """수신 메시지 수와 대략적인 초당 수신율"""

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.message_count = 0
        self.messages_per_second = 0
        self._last_print_time = clock()

    def handle(self, address: str, *args):
        self.message_count += 1

        if self.message_count % PRINT_EVERY == 0:
            now = self.clock()
            elapsed = now - self._last_print_time
            if elapsed > 0:
                self.messages_per_second = round(PRINT_EVERY / elapsed)
            self._last_print_time = now
            log.info("Message #%d  %s  [%s]  ~%d msg/sec",
                     self.message_count, address, format_args(args), self.messages_per_second)

        if self.message_count % SUMMARY_EVERY == 0:
            log.info("Total messages received: %d", self.message_count)


def build_server(host: str, port: int, stats: ReceiverStats) -> BlockingOSCUDPServer:
    dispatcher = Dispatcher()
    dispatcher.set_default_handler(stats.handle)
    return BlockingOSCUDPServer((host, port), dispatcher)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(prog="pose-osc-receiver",
                                     description="Print OSC messages sent by pose-osc.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    get_logger(level=args.log_level)
    stats = ReceiverStats()
    server = build_server(args.host, args.port, stats)
    log.info("OSC receiver listening on %s:%d, waiting for messages...", args.host, args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Final stats: %d messages, ~%d msg/sec",
                 stats.message_count, stats.messages_per_second)
    finally:
        server.server_close()
        log.info("OSC receiver stopped")


if __name__ == "__main__":
    main()
