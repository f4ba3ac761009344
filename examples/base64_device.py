"""
Base64 Device With Custom Layout
Use case: A second firmware sends base64 instead of hex and adds a battery voltage field.
- Layout is built fluently; offsets follow codec sizes
- Decoder is swapped in through EngineConfig
"""

import base64
import json

from payload_parser.core import EverynetParser, EngineConfig, LayoutBuilder

if __name__ == "__main__":
    decoder = (
        LayoutBuilder()
        .field("protocol_version", "int8")
        .field("temperature", "int16be", divisor=100, unit="°C")
        .field("humidity", "uint16be", divisor=100, unit="%")
        .field("battery", "uint16be", divisor=1000, unit="V")
        .to_decoder(encoding="base64")
    )

    raw = base64.b64encode(bytes.fromhex("02fc18138d0e1a")).decode()
    uplink = json.dumps({"payload_raw": raw})

    parser = EverynetParser(EngineConfig(decoder=decoder))
    records = parser.parse([{"variable": "everynet_payload", "value": uplink}])
    print(json.dumps(records, indent=2, ensure_ascii=False))
