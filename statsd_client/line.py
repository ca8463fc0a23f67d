

import datetime


COUNTER = 'c'
GAUGE = 'g'
TIMING = 'ms'

_NEWLINES = str.maketrans('\r\n', '__')


def elapsed_ms(instant):
    if instant.tzinfo is None:
        now = datetime.datetime.now()
    else:
        now = datetime.datetime.now(instant.tzinfo)
    # Clock skew can put the instant in the future, never report negative durations
    return max(int((now - instant) / datetime.timedelta(milliseconds=1)), 0)


def timing_value(value):
    if isinstance(value, datetime.datetime):
        return elapsed_ms(value)
    if isinstance(value, datetime.timedelta):
        return max(int(value / datetime.timedelta(milliseconds=1)), 0)
    return value


def format_line(name, value, type_tag, sample_rate=None):
    """Build a single statsd line, i.e. "name:value|type[|@rate]".

    The line carries no terminator, separating lines in a packet is up to
    the packet queue. Timing values can be given as a number of milliseconds,
    a timedelta, or a datetime marking the start of the timed operation.
    """
    if type_tag == TIMING:
        value = timing_value(value)
    line = str(name).translate(_NEWLINES) + ':' + str(value).translate(_NEWLINES) + '|' + type_tag
    if sample_rate is not None and sample_rate < 1:
        line += '|@' + str(sample_rate)
    return line
