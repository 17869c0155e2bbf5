import unittest

from algosdk.account import generate_account
from algosdk.encoding import decode_address
from tinyman.utils import int_to_bytes

from staking.constants import MAX_UINT64
from staking.exceptions import ArithmeticFault, InvalidInstruction
from staking.instructions import Claim, Initialize, Stake, Unstake, decode_instruction, encode_instruction


class InstructionTests(unittest.TestCase):

    def test_encode_initialize(self):
        stake_asset_id = generate_account()[1]
        reward_asset_id = generate_account()[1]

        data = encode_instruction(Initialize(stake_asset_id, reward_asset_id, 100))

        self.assertEqual(data, b"\x00" + decode_address(stake_asset_id) + decode_address(reward_asset_id) + int_to_bytes(100))
        self.assertEqual(decode_instruction(data), Initialize(stake_asset_id, reward_asset_id, 100))

    def test_encode_stake(self):
        data = encode_instruction(Stake(amount=1_000))

        self.assertEqual(data, b"\x01" + int_to_bytes(1_000))
        self.assertEqual(decode_instruction(data), Stake(amount=1_000))

    def test_encode_unstake(self):
        data = encode_instruction(Unstake(amount=MAX_UINT64))

        self.assertEqual(data, b"\x02" + b"\xff" * 8)
        self.assertEqual(decode_instruction(data), Unstake(amount=MAX_UINT64))

    def test_encode_claim(self):
        self.assertEqual(encode_instruction(Claim()), b"\x03")
        self.assertEqual(decode_instruction(b"\x03"), Claim())

    def test_encode_fail_amount_out_of_range(self):
        with self.assertRaises(ArithmeticFault):
            encode_instruction(Stake(amount=MAX_UINT64 + 1))

    def test_decode_fail_empty(self):
        with self.assertRaises(InvalidInstruction):
            decode_instruction(b"")

    def test_decode_fail_unknown_tag(self):
        with self.assertRaises(InvalidInstruction):
            decode_instruction(b"\x09" + int_to_bytes(1))

    def test_decode_fail_wrong_length(self):
        with self.assertRaises(InvalidInstruction):
            decode_instruction(b"\x01" + int_to_bytes(1)[:4])

        with self.assertRaises(InvalidInstruction):
            decode_instruction(b"\x03\x00")
