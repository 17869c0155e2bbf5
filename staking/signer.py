from algosdk import error
from algosdk.account import address_from_private_key
from algosdk.util import sign_bytes, verify_bytes

from staking.exceptions import Unauthorized


class Signer():
    """An identity that proved control of its address for the current operation."""

    def __init__(self, address: str) -> None:
        self.address = address

    def __repr__(self):
        return f"Signer({self.address})"

    @classmethod
    def from_private_key(cls, private_key):
        return cls(address_from_private_key(private_key))

    @classmethod
    def from_signature(cls, address, message, signature):
        try:
            valid = verify_bytes(message, signature, address)
        except (ValueError, error.WrongChecksumError, error.WrongKeyLengthError):
            valid = False
        if not valid:
            raise Unauthorized(f"Invalid signature for {address}")
        return cls(address)


def sign_instruction(instruction_data: bytes, private_key) -> str:
    return sign_bytes(instruction_data, private_key)
