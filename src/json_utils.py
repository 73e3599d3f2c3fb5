"""JSON helpers backed by orjson."""

import orjson


def json_loads(b):
    return orjson.loads(b)


def json_dumps(obj, pretty: bool = False) -> str:
    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(obj, option=option).decode("utf-8")
