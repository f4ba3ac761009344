"""
Generic Flatten
Use case: Devices that already send structured JSON only need flattening.
- Plain values become one record each
- Rich values keep their unit/metadata/location
- Payloads that already look like records pass through untouched
"""

import json

from payload_parser.core import GenericParser

data_json = r'''
[
  {
    "temperature": 10,
    "battery": {"value": 3.61, "unit": "V", "metadata": {"color": "green"}},
    "position": {"value": "office", "location": {"lat": 52.52, "lng": 13.405}}
  }
]
'''

if __name__ == "__main__":
    parser = GenericParser()

    payload = json.loads(data_json)
    print(json.dumps(parser.parse(payload), indent=2))

    already_formatted = [{"variable": "temperature", "value": 10}]
    assert parser.parse(already_formatted) == already_formatted
