import json
import logging
from collections import Counter

from payload_parser.core import EverynetParser, EngineConfig


def main():
    logging.basicConfig(level=logging.DEBUG)
    counters: Counter = Counter()

    parser = EverynetParser(
        EngineConfig(
            logger=logging.getLogger("uplinks"),
            metrics_increment=lambda name, n: counters.update({name: n}),
        )
    )

    uplink = json.dumps({
        "params": {"payload": "0109", "solutions": [{"lat": 1, "lng": 2}]},
        "meta": {"gateway": "b827ebfffe8fa2b1"},
    })
    trace = parser.trace([{"variable": "everynet_payload", "value": uplink, "serie": "dbg"}])
    print(trace)
    print(dict(counters))


if __name__ == "__main__":
    main()
