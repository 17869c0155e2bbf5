from dataclasses import dataclass
from enum import Enum

from algosdk.constants import ZERO_ADDRESS
from algosdk.encoding import decode_address, encode_address
from tinyman.utils import bytes_to_int, int_to_bytes

from staking.constants import ADDRESS_LENGTH, POOL_LEDGER_SIZE, UINT64_LENGTH, USER_LEDGER_SIZE
from staking.math import check_uint64


class RecordState(Enum):
    UNINITIALIZED = 0
    ACTIVE = 1


def _split(data, widths):
    fields = []
    offset = 0
    for width in widths:
        fields.append(data[offset:offset + width])
        offset += width
    return fields


@dataclass
class PoolLedger:
    admin: str = ZERO_ADDRESS
    stake_asset_id: str = ZERO_ADDRESS
    reward_asset_id: str = ZERO_ADDRESS
    total_staked: int = 0
    reward_per_unit_stored: int = 0
    last_update_time: int = 0
    reward_rate: int = 0

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) != POOL_LEDGER_SIZE:
            raise ValueError(f"PoolLedger record must be {POOL_LEDGER_SIZE} bytes, got {len(data)}")

        admin, stake_asset_id, reward_asset_id, total_staked, reward_per_unit_stored, last_update_time, reward_rate = _split(
            data,
            [ADDRESS_LENGTH] * 3 + [UINT64_LENGTH] * 4
        )
        return cls(
            admin=encode_address(admin),
            stake_asset_id=encode_address(stake_asset_id),
            reward_asset_id=encode_address(reward_asset_id),
            total_staked=bytes_to_int(total_staked),
            reward_per_unit_stored=bytes_to_int(reward_per_unit_stored),
            last_update_time=bytes_to_int(last_update_time),
            reward_rate=bytes_to_int(reward_rate),
        )

    def to_bytes(self) -> bytes:
        return (
            decode_address(self.admin)
            + decode_address(self.stake_asset_id)
            + decode_address(self.reward_asset_id)
            + int_to_bytes(check_uint64(self.total_staked))
            + int_to_bytes(check_uint64(self.reward_per_unit_stored))
            + int_to_bytes(check_uint64(self.last_update_time))
            + int_to_bytes(check_uint64(self.reward_rate))
        )


@dataclass
class UserLedger:
    balance: int = 0
    reward_per_unit_paid: int = 0
    accrued_reward: int = 0

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) != USER_LEDGER_SIZE:
            raise ValueError(f"UserLedger record must be {USER_LEDGER_SIZE} bytes, got {len(data)}")

        balance, reward_per_unit_paid, accrued_reward = _split(data, [UINT64_LENGTH] * 3)
        return cls(
            balance=bytes_to_int(balance),
            reward_per_unit_paid=bytes_to_int(reward_per_unit_paid),
            accrued_reward=bytes_to_int(accrued_reward),
        )

    def to_bytes(self) -> bytes:
        return (
            int_to_bytes(check_uint64(self.balance))
            + int_to_bytes(check_uint64(self.reward_per_unit_paid))
            + int_to_bytes(check_uint64(self.accrued_reward))
        )
