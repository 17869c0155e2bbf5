import time


class Clock():
    def __init__(self, current_timestamp=None) -> None:
        self.current_timestamp = current_timestamp

    def now(self):
        if self.current_timestamp is not None:
            return self.current_timestamp
        return int(time.time())
