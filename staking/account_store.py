from dataclasses import dataclass
import logging

from staking.exceptions import RecordNotInitialized, StakingError
from staking.state import RecordState


logger = logging.getLogger(__name__)


@dataclass
class StoredRecord:
    owner: str
    size: int
    data: bytes
    state: RecordState = RecordState.UNINITIALIZED


class AccountStore():
    """Fixed-size record storage keyed by address."""

    def __init__(self) -> None:
        self.records = {}

    def exists(self, address):
        return address in self.records

    def get_state(self, address):
        record = self.records.get(address)
        if record is None:
            return RecordState.UNINITIALIZED
        return record.state

    def get_owner(self, address):
        record = self.records.get(address)
        if record is None:
            raise RecordNotInitialized(address)
        return record.owner

    def create(self, address, size, owner):
        if address in self.records:
            raise StakingError(f"Record {address} already in use")

        record = StoredRecord(owner=owner, size=size, data=bytes(size))
        self.records[address] = record
        logger.debug("Created record %s (%d bytes, owner %s)", address, size, owner)
        return record

    def read(self, address):
        record = self.records.get(address)
        if record is None:
            raise RecordNotInitialized(address)
        return record.data

    def write(self, address, data, state=RecordState.ACTIVE):
        record = self.records.get(address)
        if record is None:
            raise RecordNotInitialized(address)
        if len(data) != record.size:
            raise ValueError(f"Record {address} holds {record.size} bytes, got {len(data)}")

        record.data = bytes(data)
        record.state = state
