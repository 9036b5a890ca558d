# In-process counters, rendered in Prometheus text format by /metrics.
# They reset when the process restarts.
_counters = {}


def _escape(value):
    # Prometheus label values: backslash, double quote and newline are escaped
    return str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _series(name, labels):
    label_str = ",".join(f'{k}="{_escape(v)}"' for k, v in labels.items())
    return f"{name}{{{label_str}}}"


def inc(name, labels):
    """
    Bumps one series by 1.
    Example: inc("outbound_messages_total", {"kind": "text", "result": "sent"})
    Keep label values bounded (route templates, enums); every new value is a new series.
    """
    series = _series(name, labels)
    _counters[series] = _counters.get(series, 0) + 1


def get(name, labels):
    return _counters.get(_series(name, labels), 0)


def reset():
    _counters.clear()


def generate_text():
    return "\n".join(f"{series} {count}" for series, count in _counters.items())
