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


import socket
import logging


class StatsdError(Exception):
    pass


class ResolutionError(StatsdError):
    pass


class TransportError(StatsdError):
    pass


def setup_logging(cfg, module_name=None):
    root = logging.getLogger(module_name)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(cfg.get('log_level', 'INFO'))
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        cfg.get('log_format', "[%(asctime)-15s][%(levelname)s] %(name)s(%(threadName)s@%(process)d) - %(message)s")
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    return logging.getLogger(module_name)


def address_family(host):
    for family in (socket.AF_INET, socket.AF_INET6):
        try:
            socket.inet_pton(family, host)
            return family
        except (OSError, ValueError):
            pass
    return None


def is_ip_address(host):
    return address_family(host) is not None
