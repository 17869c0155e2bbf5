from dataclasses import dataclass

from algosdk.encoding import decode_address, encode_address
from tinyman.utils import bytes_to_int, int_to_bytes

from staking.constants import ADDRESS_LENGTH, CLAIM_TAG, INITIALIZE_TAG, STAKE_TAG, UINT64_LENGTH, UNSTAKE_TAG
from staking.exceptions import InvalidInstruction
from staking.math import check_uint64


@dataclass
class Initialize:
    stake_asset_id: str
    reward_asset_id: str
    reward_rate: int

    tag = INITIALIZE_TAG
    size = ADDRESS_LENGTH * 2 + UINT64_LENGTH

    def encode_args(self):
        return decode_address(self.stake_asset_id) + decode_address(self.reward_asset_id) + int_to_bytes(check_uint64(self.reward_rate))

    @classmethod
    def decode_args(cls, data):
        return cls(
            stake_asset_id=encode_address(data[:ADDRESS_LENGTH]),
            reward_asset_id=encode_address(data[ADDRESS_LENGTH:ADDRESS_LENGTH * 2]),
            reward_rate=bytes_to_int(data[ADDRESS_LENGTH * 2:]),
        )


@dataclass
class Stake:
    amount: int

    tag = STAKE_TAG
    size = UINT64_LENGTH

    def encode_args(self):
        return int_to_bytes(check_uint64(self.amount))

    @classmethod
    def decode_args(cls, data):
        return cls(amount=bytes_to_int(data))


@dataclass
class Unstake:
    amount: int

    tag = UNSTAKE_TAG
    size = UINT64_LENGTH

    def encode_args(self):
        return int_to_bytes(check_uint64(self.amount))

    @classmethod
    def decode_args(cls, data):
        return cls(amount=bytes_to_int(data))


@dataclass
class Claim:
    tag = CLAIM_TAG
    size = 0

    def encode_args(self):
        return b""

    @classmethod
    def decode_args(cls, data):
        return cls()


INSTRUCTIONS = {instruction.tag: instruction for instruction in (Initialize, Stake, Unstake, Claim)}


def encode_instruction(instruction) -> bytes:
    return bytes([instruction.tag]) + instruction.encode_args()


def decode_instruction(data: bytes):
    if not data:
        raise InvalidInstruction("Empty instruction data")

    instruction_class = INSTRUCTIONS.get(data[0])
    if instruction_class is None:
        raise InvalidInstruction(f"Unknown instruction tag {data[0]}")

    args = data[1:]
    if len(args) != instruction_class.size:
        raise InvalidInstruction(f"{instruction_class.__name__} takes {instruction_class.size} bytes of arguments, got {len(args)}")
    return instruction_class.decode_args(args)
