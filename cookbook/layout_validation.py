from payload_parser.core import DEFAULT_LAYOUT
from payload_parser.validation import validate_layout


def main():
    ok, errs = validate_layout(DEFAULT_LAYOUT)
    print("default layout ok:", ok)

    broken = {
        "fields": [
            {"name": "temperature", "codec": "int16be", "offset": 0, "divisor": 0},
            {"name": "humidity", "codec": "uint16be", "offset": 1},
            {"name": "humidity", "codec": "int12", "offset": -1},
        ]
    }
    ok, errs = validate_layout(broken)
    if not ok:
        print("Invalid layout:\n- " + "\n- ".join(errs))


if __name__ == "__main__":
    main()
