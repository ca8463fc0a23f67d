

import logging
import threading
from statsd_client.common import StatsdError


def make_batches(lines, max_packet_size):
    # An oversized line still goes out, alone in its own packet
    batches, batch, batch_size = [], [], 0
    for line in lines:
        line_size = len(line)
        if batch and batch_size + line_size > max_packet_size:
            batches.append(b''.join(batch))
            batch, batch_size = [], 0
        batch.append(line)
        batch_size += line_size
    if batch:
        batches.append(b''.join(batch))
    return batches


class PacketQueue:
    """Buffers statsd lines and ships them in packets of at most max_packet_size bytes.

    A flush happens flush_interval ms after the first line lands in an empty
    queue, or whenever flush() is called. The send callable receives each
    packet, errors on this path never reach the caller.
    """

    def __init__(self, send, flush_interval=1000, max_packet_size=1440, timer_factory=threading.Timer):
        self.log = logging.getLogger(__name__)
        self.send = send
        self.flush_interval = max(flush_interval, 0)
        self.max_packet_size = max(max_packet_size, 1)
        self.timer_factory = timer_factory
        self.lock = threading.Lock()
        self.pending = []
        self.timer = None
        self.closed = False
        self.lines_queued = 0
        self.packets_sent = 0
        self.send_errors = 0

    def enqueue(self, line):
        with self.lock:
            if self.closed:
                return False
            self.pending.append((line + '\n').encode('utf-8'))
            self.lines_queued += 1
            if self.timer is None:
                self.timer = self.timer_factory(self.flush_interval / 1000, self.flush)
                self.timer.daemon = True
                self.timer.start()
        return True

    def flush(self, line=None, callback=None):
        """Seal pending lines into packets and send them.

        With a line given, only that line is sent, right away and without
        a terminator. Pending lines are left for the next regular flush.
        """
        if line is not None:
            self.dispatch(line.encode('utf-8'), callback)
            return
        with self.lock:
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None
            lines, self.pending = self.pending, []
        if not lines:
            return
        batches = make_batches(lines, self.max_packet_size)
        self.log.debug("Flushing %d lines in %d packet(s)", len(lines), len(batches))
        for datagram in batches:
            self.dispatch(datagram)

    def dispatch(self, datagram, callback=None):
        def on_sent(error):
            with self.lock:
                if error is None:
                    self.packets_sent += 1
                else:
                    self.send_errors += 1
            if error is not None:
                self.log.debug("Sending packet failed: %s", error)
            if callback is not None:
                callback(error)

        try:
            self.send(datagram, on_sent)
        except (StatsdError, OSError) as e:
            on_sent(e)

    def close(self):
        with self.lock:
            self.closed = True
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None
        self.flush()
