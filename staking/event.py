from algosdk import abi
from algosdk.encoding import checksum


class Event():
    """ARC-28 style log entry: 4-byte selector followed by an ABI encoded tuple."""

    def __init__(self, name: str, args: list) -> None:
        self.name = name
        self.args = args
        self.tuple_type = abi.TupleType([arg.type for arg in args])

    @property
    def signature(self):
        arg_types = ",".join(str(arg.type) for arg in self.args)
        return f"{self.name}({arg_types})"

    @property
    def selector(self):
        return checksum(self.signature.encode())[:4]

    def encode(self, values) -> bytes:
        return self.selector + self.tuple_type.encode(list(values))

    def decode(self, log: bytes) -> dict:
        values = self.tuple_type.decode(log[4:])
        event = {"event_name": self.name}
        for arg, value in zip(self.args, values):
            event[arg.name] = value
        return event


def decode_logs(logs, events):
    selectors = {event.selector: event for event in events}

    decoded = []
    for log in logs:
        event = selectors.get(bytes(log[:4]))
        if event is not None:
            decoded.append(event.decode(log))
    return decoded
