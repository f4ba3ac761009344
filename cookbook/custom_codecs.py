from payload_parser.core import PayloadDecoder, register_codec


def read_int24be(chunk: bytes) -> int:
    return int.from_bytes(chunk, "big", signed=True)


def main():
    register_codec("int24be", 3, read_int24be)

    layout = {
        "fields": [
            {"name": "pressure", "codec": "int24be", "offset": 0, "divisor": 100, "unit": "hPa"},
            {"name": "status", "codec": "uint8", "offset": 3},
        ]
    }
    decoder = PayloadDecoder(layout)
    print(decoder.decode("018b5401"))


if __name__ == "__main__":
    main()
