import unittest

from algosdk.account import generate_account
from algosdk.constants import ZERO_ADDRESS
from algosdk.encoding import decode_address
from tinyman.utils import int_to_bytes

from staking.constants import MAX_UINT64, POOL_LEDGER_SIZE, USER_LEDGER_SIZE
from staking.exceptions import ArithmeticFault
from staking.state import PoolLedger, UserLedger

from tests.constants import MAY_1


class PoolLedgerTests(unittest.TestCase):

    def test_default_pool_ledger(self):
        pool = PoolLedger()

        self.assertEqual(pool.admin, ZERO_ADDRESS)
        self.assertEqual(pool.to_bytes(), bytes(POOL_LEDGER_SIZE))

    def test_pool_ledger_layout(self):
        admin = generate_account()[1]
        stake_asset_id = generate_account()[1]
        reward_asset_id = generate_account()[1]
        pool = PoolLedger(
            admin=admin,
            stake_asset_id=stake_asset_id,
            reward_asset_id=reward_asset_id,
            total_staked=1_000,
            reward_per_unit_stored=10**12,
            last_update_time=MAY_1,
            reward_rate=100,
        )

        data = pool.to_bytes()

        self.assertEqual(len(data), 128)
        self.assertEqual(data[:32], decode_address(admin))
        self.assertEqual(data[32:64], decode_address(stake_asset_id))
        self.assertEqual(data[64:96], decode_address(reward_asset_id))
        self.assertEqual(data[96:104], int_to_bytes(1_000))
        self.assertEqual(data[104:112], int_to_bytes(10**12))
        self.assertEqual(data[112:120], int_to_bytes(MAY_1))
        self.assertEqual(data[120:128], int_to_bytes(100))
        self.assertEqual(PoolLedger.from_bytes(data), pool)

    def test_pool_ledger_fail_wrong_length(self):
        with self.assertRaises(ValueError):
            PoolLedger.from_bytes(bytes(POOL_LEDGER_SIZE - 8))

    def test_pool_ledger_fail_value_out_of_range(self):
        with self.assertRaises(ArithmeticFault):
            PoolLedger(total_staked=MAX_UINT64 + 1).to_bytes()

        with self.assertRaises(ArithmeticFault):
            PoolLedger(reward_per_unit_stored=-1).to_bytes()


class UserLedgerTests(unittest.TestCase):

    def test_user_ledger_layout(self):
        user = UserLedger(balance=100, reward_per_unit_paid=10**12, accrued_reward=10_000)

        data = user.to_bytes()

        self.assertEqual(len(data), USER_LEDGER_SIZE)
        self.assertEqual(data, int_to_bytes(100) + int_to_bytes(10**12) + int_to_bytes(10_000))
        self.assertEqual(UserLedger.from_bytes(data), user)

    def test_user_ledger_max_values(self):
        user = UserLedger(balance=MAX_UINT64, reward_per_unit_paid=MAX_UINT64, accrued_reward=MAX_UINT64)

        self.assertEqual(user.to_bytes(), b"\xff" * USER_LEDGER_SIZE)

    def test_user_ledger_fail_wrong_length(self):
        with self.assertRaises(ValueError):
            UserLedger.from_bytes(bytes(USER_LEDGER_SIZE + 1))

    def test_user_ledger_fail_negative_balance(self):
        with self.assertRaises(ArithmeticFault):
            UserLedger(balance=-1).to_bytes()
