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


import os
import sys
import types
import string
import argparse
import threading
import statsd_client.cfg as cfg
from statsd_client.client import StatsdClient
from statsd_client.common import StatsdError, setup_logging


METRIC_TYPES = ('counter', 'increment', 'decrement', 'gauge', 'timing')


def load_config(config_file=None):
    new_config = {}
    with open(config_file or cfg.__file__, 'r') as f:
        config_template = string.Template(f.read())
        config_str = config_template.substitute(os.environ)
        exec(config_str, new_config)
    return {
        k: v for k, v in new_config.items()
        if not k.startswith('_') and not isinstance(v, types.ModuleType)
    }


def parse_value(value):
    if value is None:
        return None
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            pass
    return value


def send_metric(client, metric_type, name, value=None, timeout=5):
    done, errors = threading.Event(), []

    def on_sent(error):
        if error is not None:
            errors.append(error)
        done.set()

    method = getattr(client, 'immediate_' + metric_type)
    method(name, value, callback=on_sent)
    if not done.wait(timeout):
        raise TimeoutError("Sending %s timed out" % (name,))
    if errors:
        raise errors[0]


def main(argv=sys.argv):
    parser = argparse.ArgumentParser(description="Send a single metric to StatsD")
    parser.add_argument("--config", help="An optional config file", default=None)
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--prefix", default=None)
    parser.add_argument("metric_type", choices=METRIC_TYPES)
    parser.add_argument("name")
    parser.add_argument("value", nargs='?', default=None)
    args = parser.parse_args(argv[1:])

    new_config = load_config(args.config)
    for k in ('host', 'port', 'prefix'):
        v = getattr(args, k)
        if v is not None:
            new_config[k] = v
    log = setup_logging(new_config, 'statsd_client')

    value = parse_value(args.value)
    if value is None and args.metric_type not in ('increment', 'decrement'):
        parser.error("a value is required for " + args.metric_type)

    client = StatsdClient(new_config)
    try:
        send_metric(client, args.metric_type, args.name, value)
    except (StatsdError, OSError) as e:
        log.error("%s", e)
        return 1
    finally:
        client.close()
    log.debug("Sent %s", args.name)
    return 0


if __name__ == '__main__':
    sys.exit(main())
