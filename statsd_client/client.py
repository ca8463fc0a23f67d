# -*- coding: utf-8 -
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.


import copy
import random
import logging
import statsd_client.cfg as cfg_defaults
import statsd_client.line as line
from statsd_client.common import is_ip_address
from statsd_client.resolver import AddressResolver
from statsd_client.transport import UDPTransport
from statsd_client.packet_queue import PacketQueue


def never_disabled():
    return False


def normalize_prefix(prefix):
    prefix = (prefix or '').rstrip('.')
    return prefix + '.' if prefix else ''


class StatsdClient:
    """StatsD client batching metrics into UDP packets.

    Child clients (see get_child_client) share the packet queue, resolver
    and socket of the client they were derived from, only the prefix differs.
    """

    def __init__(self, cfg=None, **kwargs):
        cfg = dict(cfg or {})
        cfg.update(kwargs)
        self.cfg = cfg
        self.log = logging.getLogger(__name__)
        self.prefix = normalize_prefix(cfg.get('prefix', cfg_defaults.prefix))
        self.is_disabled = cfg.get('is_disabled') or never_disabled
        self.host = cfg.get('host') or cfg_defaults.host
        self.port = int(cfg.get('port') or cfg_defaults.port)

        self.transport = cfg.get('transport')
        if self.transport is None:
            self.transport = UDPTransport(socket_timeout=cfg.get('socket_timeout', cfg_defaults.socket_timeout))

        if is_ip_address(self.host):
            self.resolver = None
        else:
            dns_resolver = cfg.get('dns_resolver') or {}
            self.resolver = AddressResolver(self.host, lookup=dns_resolver.get('lookup'))

        queue_cfg = dict(cfg_defaults.packet_queue)
        queue_cfg.update(cfg.get('packet_queue') or {})
        self.queue = PacketQueue(
            self.send_packet,
            flush_interval=queue_cfg['flush_interval'],
            max_packet_size=queue_cfg['max_packet_size'],
        )

    def get_child_client(self, suffix):
        child = copy.copy(self)
        child.prefix = normalize_prefix(self.prefix + suffix)
        return child

    def send_packet(self, datagram, callback=None):
        if self.resolver is None:
            self.transport.send(datagram, self.host, self.port, callback)
            return

        def on_resolved(error, ip):
            if error is not None:
                if callback is not None:
                    callback(error)
                else:
                    self.log.debug("Dropped packet: %s", error)
                return
            self.transport.send(datagram, ip, self.port, callback)

        self.resolver.resolve(on_resolved)

    def sampled(self, sample_rate):
        return sample_rate is None or sample_rate >= 1 or random.random() < sample_rate

    def enqueue(self, name, value, type_tag, sample_rate=None):
        if self.is_disabled():
            return
        if not self.sampled(sample_rate):
            return
        self.queue.enqueue(line.format_line(self.prefix + name, value, type_tag, sample_rate))

    def send_immediate(self, name, value, type_tag, callback=None):
        if self.is_disabled():
            return
        self.queue.flush(line.format_line(self.prefix + name, value, type_tag), callback)

    def counter(self, name, delta, sample_rate=None):
        self.enqueue(name, delta, line.COUNTER, sample_rate)

    def increment(self, name, delta=1, sample_rate=None):
        self.enqueue(name, delta, line.COUNTER, sample_rate)

    def decrement(self, name, delta=1, sample_rate=None):
        self.enqueue(name, -delta, line.COUNTER, sample_rate)

    def gauge(self, name, value):
        # Gauges go out in a packet of their own, not batched with other lines
        self.send_immediate(name, value, line.GAUGE)

    def timing(self, name, time, sample_rate=None):
        self.enqueue(name, time, line.TIMING, sample_rate)

    def immediate_counter(self, name, delta, callback=None):
        self.send_immediate(name, delta, line.COUNTER, callback)

    def immediate_increment(self, name, delta=None, callback=None):
        self.send_immediate(name, 1 if delta is None else delta, line.COUNTER, callback)

    def immediate_decrement(self, name, delta=None, callback=None):
        self.send_immediate(name, -1 if delta is None else -delta, line.COUNTER, callback)

    def immediate_gauge(self, name, value, callback=None):
        self.send_immediate(name, value, line.GAUGE, callback)

    def immediate_timing(self, name, time, callback=None):
        self.send_immediate(name, time, line.TIMING, callback)

    def flush(self):
        self.queue.flush()

    def close(self):
        # Shared by the whole client tree, closing any client closes them all
        self.queue.close()
        if self.resolver is not None:
            self.resolver.close()
        self.transport.close()
