"""
Everynet Uplink
Use case: Turn an Everynet uplink (as forwarded by the network server) into output records.
- Gateway solutions become a 'location' record plus one record per remaining solution field
- 'meta' fields are flattened, network-server noise (device_addr, packet_hash, ...) is ignored
- The hex payload is decoded with the default layout (protocol version, temperature, humidity)
"""

import json

from payload_parser.core import EverynetParser

uplink_json = r'''
{
  "params": {
    "payload": "0109611395",
    "port": 1,
    "solutions": [
      {"lat": -23.5614, "lng": -46.6559, "rssi": -97, "snr": 7.5}
    ]
  },
  "meta": {
    "device_addr": "0a1b2c3d",
    "packet_hash": "f1e2d3",
    "gateway": "b827ebfffe8fa2b1",
    "network": "everynet"
  }
}
'''

if __name__ == "__main__":
    payload = [{"variable": "everynet_payload", "value": uplink_json, "serie": "uplink-1"}]

    parser = EverynetParser()
    records = parser.parse(payload)
    print(json.dumps(records, indent=2, ensure_ascii=False))

    df = parser.to_dataframe(payload)
    print(df)
